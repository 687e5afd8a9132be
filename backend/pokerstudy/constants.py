"""Enumerations and limits shared by validation, models and schemas."""

PLAYER_TYPES = (
    "Whale",
    "Calling Station",
    "Rock",
    "Maniac",
    "Weak-Tight Reg",
    "TAG",
    "LAG",
    "GTO Grinder",
    "Unknown",
)
DEFAULT_PLAYER_TYPE = "Unknown"

# Big-blind amounts of the tables a player has been seen at
STAKE_VALUES = (25, 50, 100, 200, 400, 800)

HAND_STATUSES = ("open", "archived")
DEFAULT_HAND_TITLE = "Untitled hand"
DEFAULT_HAND_AUTHOR = "Anonymous"

STAR_RATING_RANGE = (0, 10)
SPICY_RATING_RANGE = (0, 5)

STATE_RATING_RANGE = (1, 5)
DEFAULT_STATE_RATING = 3
OBSERVATION_MAX_LENGTH = 280

LEAK_CATEGORIES = (
    "preflop",
    "cbet",
    "river-sizing",
    "3bet-defense",
    "bluff-frequency",
    "range-construction",
    "mental-game",
    "exploitative-adjustment",
    "other",
)
LEAK_STATUSES = ("identified", "working", "resolved")
DEFAULT_LEAK_TITLE = "Untitled leak"

EDGE_CATEGORIES = (
    "pool-tendency",
    "solver-deviation",
    "live-read",
    "sizing-exploit",
    "positional-edge",
    "meta-adjustment",
    "other",
)
EDGE_STATUSES = ("developing", "active", "archived")
DEFAULT_EDGE_TITLE = "Untitled edge"

DEFAULT_LEARNING_CATEGORY = "other"

# Days until the next check of a resolved leak, indexed by review stage - 1
REVIEW_INTERVALS_DAYS = (7, 30, 90)
MAX_REVIEW_STAGE = len(REVIEW_INTERVALS_DAYS)
