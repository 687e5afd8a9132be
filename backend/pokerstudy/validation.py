"""
Poker Study Backend — Entity Validation
========================================

What:  One explicit validation function per persisted entity.
Why:   The rules (rating bounds, observation length, allowed player types,
       stake values) live here instead of inside the ORM models, so they can
       be exercised without a database.
How:   Each function takes the raw field values, raises ValidationError
       naming the offending field, and returns a dict of cleaned values ready
       to pass to the model constructor.
Who:   Called by the service layer before every insert or update.

The `clean_*` helpers at the bottom never raise: they filter and complete
the embedded lists of leaks and edges.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pokerstudy.constants import (
    EDGE_CATEGORIES,
    EDGE_STATUSES,
    HAND_STATUSES,
    LEAK_CATEGORIES,
    LEAK_STATUSES,
    MAX_REVIEW_STAGE,
    OBSERVATION_MAX_LENGTH,
    PLAYER_TYPES,
    STAKE_VALUES,
    STATE_RATING_RANGE,
)
from pokerstudy.exceptions import ValidationError
from pokerstudy.models.mixins import utcnow


def _require_text(value: Optional[str], field: str, message: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message=message, field=field)
    return value.strip()


def validate_claimed_user(
    name: Optional[str],
    password_hash: Optional[str],
    improvement_notes: Optional[str] = "",
) -> Dict[str, Any]:
    """
    Claimed user: trimmed non-empty name, non-empty password hash.

    Case-insensitive uniqueness of the name is a store-level rule (unique
    index on lower(name)); it is not checked here.
    """
    clean_name = _require_text(name, "name", "Name is required.")
    if not isinstance(password_hash, str) or not password_hash:
        raise ValidationError(message="Password hash is required.", field="password_hash")
    if improvement_notes is not None and not isinstance(improvement_notes, str):
        raise ValidationError(message="Improvement notes must be text.", field="improvement_notes")
    return {
        "name": clean_name,
        "password_hash": password_hash,
        "improvement_notes": improvement_notes or "",
    }


def validate_mental_game_entry(
    user_id: Optional[str],
    session_date: Optional[datetime],
    state_rating: Any,
    observation: Optional[str] = "",
    tilt_affected: bool = False,
    fatigue_affected: bool = False,
    confidence_affected: bool = False,
) -> Dict[str, Any]:
    """Mental game entry: rating is an integer in [1, 5], observation at most 280 chars."""
    clean_user = _require_text(user_id, "user_id", "userId required")
    if not isinstance(session_date, datetime):
        raise ValidationError(message="sessionDate must be a date", field="session_date")

    low, high = STATE_RATING_RANGE
    # bool is an int subclass; True is not a rating
    if isinstance(state_rating, bool) or not isinstance(state_rating, int):
        raise ValidationError(message=f"stateRating must be {low}-{high}", field="state_rating")
    if not low <= state_rating <= high:
        raise ValidationError(message=f"stateRating must be {low}-{high}", field="state_rating")

    text = observation or ""
    if len(text) > OBSERVATION_MAX_LENGTH:
        raise ValidationError(
            message=f"observation must be at most {OBSERVATION_MAX_LENGTH} characters",
            field="observation",
        )

    return {
        "user_id": clean_user,
        "session_date": session_date,
        "state_rating": state_rating,
        "observation": text,
        "tilt_affected": tilt_affected is True,
        "fatigue_affected": fatigue_affected is True,
        "confidence_affected": confidence_affected is True,
    }


def validate_reviewer(name: Optional[str]) -> Dict[str, Any]:
    """Reviewer: trimmed non-empty name."""
    return {"name": _require_text(name, "name", "Name is required")}


def validate_stakes(stakes: Optional[Iterable[Any]]) -> List[int]:
    """Every stake must be one of STAKE_VALUES; order is preserved."""
    values = list(stakes or [])
    for stake in values:
        if isinstance(stake, bool) or stake not in STAKE_VALUES:
            raise ValidationError(
                message="Invalid stake value",
                field="stakes_seen_at",
                context={"value": stake, "allowed": list(STAKE_VALUES)},
            )
    return [int(stake) for stake in values]


def validate_player_type(player_type: Optional[str]) -> str:
    if player_type not in PLAYER_TYPES:
        raise ValidationError(
            message=f"Invalid player type '{player_type}'",
            field="player_type",
            context={"allowed": list(PLAYER_TYPES)},
        )
    return player_type


def validate_player(
    username: Optional[str],
    player_type: Optional[str],
    stakes_seen_at: Optional[Iterable[Any]] = None,
    notes: Optional[str] = "",
) -> Dict[str, Any]:
    """Player: username required, type from PLAYER_TYPES, stakes from STAKE_VALUES."""
    if not isinstance(username, str) or not username:
        raise ValidationError(message="Username is required", field="username")
    return {
        "username": username,
        "player_type": validate_player_type(player_type),
        "stakes_seen_at": validate_stakes(stakes_seen_at),
        "notes": notes or "",
    }


def validate_hand_to_review(
    title: Optional[str],
    hand_text: Optional[str],
    status: Optional[str],
    created_by: Optional[str],
) -> Dict[str, Any]:
    """Hand to review: non-blank title, hand text and author; status open or archived."""
    clean_title = _require_text(title, "title", "Title is required")
    clean_text = _require_text(hand_text, "hand_text", "Hand text is required")
    clean_author = _require_text(created_by, "created_by", "Author is required")
    if status not in HAND_STATUSES:
        raise ValidationError(
            message=f"Invalid status '{status}'",
            field="status",
            context={"allowed": list(HAND_STATUSES)},
        )
    return {
        "title": clean_title,
        "hand_text": clean_text,
        "status": status,
        "created_by": clean_author,
    }


def archived_at_for_status(status: str, archived_at: Optional[datetime]) -> Optional[datetime]:
    """
    Keep archived_at consistent with status: set exactly when archived.

    An archived hand keeps its given timestamp or gets the current time;
    an open hand never carries one.
    """
    if status != "archived":
        return None
    return archived_at or utcnow()


def clean_linked_hand_ids(hand_ids: Optional[Iterable[Any]]) -> List[str]:
    """Keep only non-blank string ids, in order."""
    return [h for h in (hand_ids or []) if isinstance(h, str) and h.strip()]


def clean_learning_notes(notes: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Normalize leak/edge notes to {"id", "content", "created_at"}.

    Missing ids and timestamps are generated; content is trimmed.
    """
    cleaned = []
    for note in notes or []:
        created_at = note.get("created_at") or utcnow()
        if isinstance(created_at, datetime):
            created_at = created_at.isoformat()
        cleaned.append({
            "id": str(note.get("id") or uuid.uuid4()),
            "content": (note.get("content") or "").strip(),
            "created_at": str(created_at),
        })
    return cleaned


def _validate_learning_item(
    user_id: Optional[str],
    title: Optional[str],
    category: Optional[str],
    status: Optional[str],
    categories: Sequence[str],
    statuses: Sequence[str],
) -> Dict[str, Any]:
    clean_user = _require_text(user_id, "user_id", "userId required")
    clean_title = _require_text(title, "title", "Title is required")
    if category not in categories:
        raise ValidationError(
            message=f"Invalid category '{category}'",
            field="category",
            context={"allowed": list(categories)},
        )
    if status not in statuses:
        raise ValidationError(
            message=f"Invalid status '{status}'",
            field="status",
            context={"allowed": list(statuses)},
        )
    return {"user_id": clean_user, "title": clean_title, "category": category, "status": status}


def validate_leak(
    user_id: Optional[str],
    title: Optional[str],
    category: Optional[str],
    status: Optional[str],
    review_stage: Any = 0,
) -> Dict[str, Any]:
    """Leak: user and title required, category and status from their enums, stage 0-3."""
    fields = _validate_learning_item(
        user_id, title, category, status, LEAK_CATEGORIES, LEAK_STATUSES
    )
    if isinstance(review_stage, bool) or not isinstance(review_stage, int) or not (
        0 <= review_stage <= MAX_REVIEW_STAGE
    ):
        raise ValidationError(
            message=f"reviewStage must be 0-{MAX_REVIEW_STAGE}", field="review_stage"
        )
    fields["review_stage"] = review_stage
    return fields


def validate_edge(
    user_id: Optional[str],
    title: Optional[str],
    category: Optional[str],
    status: Optional[str],
) -> Dict[str, Any]:
    """Edge: user and title required, category and status from their enums."""
    return _validate_learning_item(
        user_id, title, category, status, EDGE_CATEGORIES, EDGE_STATUSES
    )
