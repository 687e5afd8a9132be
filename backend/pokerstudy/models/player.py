"""
Poker Study Backend — Player Model
===================================

What:  ORM model for the `players` table: an opponent the user keeps notes on.
Who:   Used by PlayerService for CRUD and import, and by BackupService.

Column notes:
    - stakes_seen_at: JSON list of big-blind amounts, embedded in the row;
      values come from STAKE_VALUES
    - notes: free multiline text; appended lines arrive already normalized
"""

from typing import List

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.constants import DEFAULT_PLAYER_TYPE
from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class Player(IdMixin, TimestampMixin, Base):
    """An opponent profile."""

    __tablename__ = "players"

    username: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    player_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_PLAYER_TYPE,
    )

    stakes_seen_at: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)

    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Player(id={self.id}, username='{self.username}', type='{self.player_type}')>"
