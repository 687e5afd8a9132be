"""
Poker Study Backend — Claimed User Model
=========================================

What:  ORM model for the `claimed_users` table: a display name someone has
       reserved with a password.
Invariant:
    Names are unique case-insensitively. The unique index is on lower(name),
    so "Alice" and "alice" cannot both be stored even by concurrent writers.
"""

from sqlalchemy import Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class ClaimedUser(IdMixin, TimestampMixin, Base):
    """A name reserved by its owner; stores only the bcrypt hash of the password."""

    __tablename__ = "claimed_users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    improvement_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        # Never include the password hash
        return f"<ClaimedUser(id={self.id}, name='{self.name}')>"


Index("uq_claimed_users_name_lower", func.lower(ClaimedUser.name), unique=True)
