"""
Poker Study Backend — Hand To Review Model
===========================================

What:  ORM model for the `hands_to_review` table: a hand posted for discussion.

Embedded lists (JSON columns):
    comments:       [{"text", "added_by", "added_at"}]   added_at is ISO 8601 text
    star_ratings:   [{"user", "rating"}]   rating 0-10, one entry per user
    spicy_ratings:  [{"user", "rating"}]   rating 0-5, one entry per user

    JSON columns are replaced, never mutated in place; SQLAlchemy only
    notices reassignment.

Lifecycle:
    open → archived (archived_at set) → open (archived_at cleared) ...
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.constants import DEFAULT_HAND_TITLE
from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class HandToReview(IdMixin, TimestampMixin, Base):
    """A hand history submitted for review by other players."""

    __tablename__ = "hands_to_review"

    title: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_HAND_TITLE)
    hand_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)

    comments: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    star_ratings: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    spicy_ratings: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    archived_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    # Listing filters by status and shows newest first
    __table_args__ = (
        Index("idx_hands_to_review_status_created_at", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<HandToReview(id={self.id}, title='{self.title}', status='{self.status}')>"
