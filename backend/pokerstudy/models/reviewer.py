"""ORM model for the `reviewers` table: names that can be tagged on hands."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class Reviewer(IdMixin, TimestampMixin, Base):
    __tablename__ = "reviewers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Reviewer(name='{self.name}')>"
