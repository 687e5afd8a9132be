"""
Poker Study Backend — Edge Model
=================================

What:  ORM model for the `edges` table: an advantage the user has found
       (a pool tendency, a solver deviation, a live read) and wants to keep using.

Embedded lists use the same shapes as Leak: linked_hand_ids and
notes [{"id", "content", "created_at"}].
"""

from typing import Any, Dict, List

from sqlalchemy import JSON, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pokerstudy.constants import DEFAULT_EDGE_TITLE, DEFAULT_LEARNING_CATEGORY
from pokerstudy.database import Base
from pokerstudy.models.mixins import IdMixin, TimestampMixin


class Edge(IdMixin, TimestampMixin, Base):

    __tablename__ = "edges"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_EDGE_TITLE)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_LEARNING_CATEGORY,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="developing")

    linked_hand_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_edges_user_status_created_at", "user_id", "status", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Edge(id={self.id}, title='{self.title}', status='{self.status}')>"
