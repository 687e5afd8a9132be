"""
Poker Study Backend — Leak Model
=================================

What:  ORM model for the `leaks` table: a weakness in the user's own game,
       tracked from identification to a spaced-repetition confirmed fix.

Embedded lists (JSON columns, replaced never mutated):
    linked_hand_ids:  ["<hand id>", ...]
    notes:            [{"id", "content", "created_at"}]   created_at is ISO 8601 text

Lifecycle:
    identified ⇄ working → resolved (resolved_at set, review_stage 0,
    next_review_at in 7 days) → each confirmed review advances the stage
    (7, 30, 90 days) until stage 3, where next_review_at is cleared.
    Leaving `resolved` clears resolved_at and next_review_at and resets the stage.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.constants import DEFAULT_LEARNING_CATEGORY, DEFAULT_LEAK_TITLE
from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class Leak(IdMixin, TimestampMixin, Base):
    """A leak the user is working on."""

    __tablename__ = "leaks"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_LEAK_TITLE)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_LEARNING_CATEGORY,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="identified")

    linked_hand_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    # Opponent the leak shows up against, if any
    player_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    player_username: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    next_review_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    review_stage: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_leaks_user_status_created_at", "user_id", "status", "created_at"),
        Index("idx_leaks_user_next_review_at", "user_id", "next_review_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Leak(id={self.id}, title='{self.title}', status='{self.status}', "
            f"stage={self.review_stage})>"
        )
