"""
Poker Study Backend — Mental Game Entry Model
==============================================

What:  ORM model for the `mental_game_entries` table: a short journal entry
       about the player's state during one session.

Constraints mirrored in the database:
    - state_rating between 1 and 5
    - observation at most 280 characters
"""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.constants import OBSERVATION_MAX_LENGTH
from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class MentalGameEntry(IdMixin, TimestampMixin, Base):
    """One mental-game journal entry."""

    __tablename__ = "mental_game_entries"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    session_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    state_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    observation: Mapped[str] = mapped_column(
        String(OBSERVATION_MAX_LENGTH),
        nullable=False,
        default="",
    )
    tilt_affected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    fatigue_affected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    confidence_affected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("state_rating BETWEEN 1 AND 5", name="ck_mental_state_rating_range"),
        Index("idx_mental_game_user_session", "user_id", "session_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<MentalGameEntry(id={self.id}, user_id='{self.user_id}', "
            f"rating={self.state_rating})>"
        )
