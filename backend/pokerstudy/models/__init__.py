"""
ORM models. Importing this package registers every table with Base.metadata
(Alembic autogenerate and the test suite's create_all rely on that).
"""

from pokerstudy.models.claimed_user import ClaimedUser
from pokerstudy.models.edge import Edge
from pokerstudy.models.hand_to_review import HandToReview
from pokerstudy.models.leak import Leak
from pokerstudy.models.mental_game_entry import MentalGameEntry
from pokerstudy.models.player import Player
from pokerstudy.models.reviewer import Reviewer

__all__ = [
    "ClaimedUser",
    "Edge",
    "HandToReview",
    "Leak",
    "MentalGameEntry",
    "Player",
    "Reviewer",
]
