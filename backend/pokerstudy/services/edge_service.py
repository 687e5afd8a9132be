"""
Poker Study Backend — Edge Service
===================================

What:  CRUD for edges, the counterpart of leaks: spots where the user
       plays better than the pool. No review schedule; the status
       (developing, active, archived) is set freely by the user.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.constants import DEFAULT_EDGE_TITLE, DEFAULT_LEARNING_CATEGORY, EDGE_STATUSES
from pokerstudy.exceptions import DatabaseError, NotFoundError, PokerStudyError, ValidationError
from pokerstudy.models.edge import Edge
from pokerstudy.schemas.learning import EdgeCreate, EdgeResponse, EdgeUpdate
from pokerstudy.validation import clean_learning_notes, clean_linked_hand_ids, validate_edge

logger = logging.getLogger(__name__)


class EdgeService:

    async def _load(self, db: AsyncSession, edge_id: UUID) -> Edge:
        edge = await db.get(Edge, edge_id)
        if edge is None:
            raise NotFoundError(resource="edge", resource_id=str(edge_id))
        return edge

    async def list_edges(
        self, db: AsyncSession, user_id: Optional[str], status: Optional[str] = None
    ) -> List[EdgeResponse]:
        clean_user = (user_id or "").strip()
        if not clean_user:
            raise ValidationError(message="userId query param required", field="user_id")
        try:
            query = select(Edge).where(Edge.user_id == clean_user)
            if status in EDGE_STATUSES:
                query = query.where(Edge.status == status)
            result = await db.execute(query.order_by(desc(Edge.created_at)))
            return [EdgeResponse.model_validate(edge) for edge in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing edges: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch edges")

    async def create_edge(
        self,
        db: AsyncSession,
        data: EdgeCreate,
        fallback_user_id: Optional[str] = None,
    ) -> EdgeResponse:
        fields = validate_edge(
            user_id=(data.user_id or "").strip() or (fallback_user_id or "").strip(),
            title=(data.title or "").strip() or DEFAULT_EDGE_TITLE,
            category=data.category or DEFAULT_LEARNING_CATEGORY,
            status="developing",
        )
        try:
            edge = Edge(
                **fields,
                description=(data.description or "").strip(),
                linked_hand_ids=clean_linked_hand_ids(data.linked_hand_ids),
                notes=[],
            )
            db.add(edge)
            await db.flush()
            logger.info("Edge created: %s for %s", edge.id, edge.user_id)
            return EdgeResponse.model_validate(edge)
        except SQLAlchemyError as e:
            logger.error("Database error creating edge: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create edge")

    async def update_edge(
        self, db: AsyncSession, edge_id: UUID, data: EdgeUpdate
    ) -> EdgeResponse:
        """Partial update; an unknown status is ignored, an unknown category rejected."""
        try:
            edge = await self._load(db, edge_id)
            fields = validate_edge(
                user_id=edge.user_id,
                title=edge.title if data.title is None else data.title.strip() or DEFAULT_EDGE_TITLE,
                category=edge.category if data.category is None else data.category,
                status=data.status if data.status in EDGE_STATUSES else edge.status,
            )
            edge.title = fields["title"]
            edge.category = fields["category"]
            edge.status = fields["status"]
            if data.description is not None:
                edge.description = data.description.strip()
            if data.linked_hand_ids is not None:
                edge.linked_hand_ids = clean_linked_hand_ids(data.linked_hand_ids)
            if data.notes is not None:
                edge.notes = clean_learning_notes(n.model_dump() for n in data.notes)

            await db.flush()
            return EdgeResponse.model_validate(edge)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating edge %s: %s", edge_id, str(e))
            raise DatabaseError(message="Failed to update edge", context={"edge_id": str(edge_id)})

    async def delete_edge(self, db: AsyncSession, edge_id: UUID) -> bool:
        try:
            edge = await self._load(db, edge_id)
            await db.delete(edge)
            await db.flush()
            return True
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting edge %s: %s", edge_id, str(e))
            raise DatabaseError(message="Failed to delete edge", context={"edge_id": str(edge_id)})


edge_service = EdgeService()
