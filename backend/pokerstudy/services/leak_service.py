"""
Poker Study Backend — Leak Service
===================================

What:  Business logic for leaks: per-user listing, creation, partial
       updates, deletion, and the spaced-repetition review of resolved leaks.
Who:   Called by the /api/learning/leaks and /api/learning/due route handlers.

Review schedule:
    Resolving a leak sets review_stage 0 and schedules a check in 7 days.
    Each review that confirms the leak is still fixed advances the stage
    and schedules the next check (7, 30, then 90 days). Past stage 3 the
    leak stays at 3 with no further check. A review that finds the leak
    back sends it to `working` and clears the schedule.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import asc, desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.constants import (
    DEFAULT_LEARNING_CATEGORY,
    DEFAULT_LEAK_TITLE,
    LEAK_STATUSES,
    MAX_REVIEW_STAGE,
    REVIEW_INTERVALS_DAYS,
)
from pokerstudy.exceptions import DatabaseError, NotFoundError, PokerStudyError, ValidationError
from pokerstudy.models.leak import Leak
from pokerstudy.models.mixins import utcnow
from pokerstudy.schemas.learning import LeakCreate, LeakResponse, LeakReview, LeakUpdate
from pokerstudy.validation import clean_learning_notes, clean_linked_hand_ids, validate_leak

logger = logging.getLogger(__name__)


def advance_review(
    review_stage: Optional[int], now: Optional[datetime] = None
) -> Tuple[int, Optional[datetime]]:
    """
    Next (review_stage, next_review_at) after a review confirming the fix.

    Stage 0 → 1 in 7 days, 1 → 2 in 30, 2 → 3 in 90; stage 3 stays at 3
    with nothing scheduled.
    """
    next_stage = (review_stage or 0) + 1
    if next_stage > MAX_REVIEW_STAGE:
        return MAX_REVIEW_STAGE, None
    days = REVIEW_INTERVALS_DAYS[next_stage - 1]
    return next_stage, (now or utcnow()) + timedelta(days=days)


def _clear_schedule(leak: Leak) -> None:
    leak.resolved_at = None
    leak.next_review_at = None
    leak.review_stage = 0


def _require_user(user_id: Optional[str], message: str) -> str:
    clean = (user_id or "").strip()
    if not clean:
        raise ValidationError(message=message, field="user_id")
    return clean


class LeakService:
    """Stateless service; every method receives the request's session."""

    async def _load(self, db: AsyncSession, leak_id: UUID) -> Leak:
        leak = await db.get(Leak, leak_id)
        if leak is None:
            raise NotFoundError(resource="leak", resource_id=str(leak_id))
        return leak

    async def list_leaks(
        self,
        db: AsyncSession,
        user_id: Optional[str],
        status: Optional[str] = None,
        player_id: Optional[str] = None,
    ) -> List[LeakResponse]:
        """Newest first. Unknown status values are ignored; a blank player id is no filter."""
        clean_user = _require_user(user_id, "userId query param required")
        try:
            query = select(Leak).where(Leak.user_id == clean_user)
            if status in LEAK_STATUSES:
                query = query.where(Leak.status == status)
            clean_player = (player_id or "").strip()
            if clean_player:
                query = query.where(Leak.player_id == clean_player)
            result = await db.execute(query.order_by(desc(Leak.created_at)))
            return [LeakResponse.model_validate(leak) for leak in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing leaks: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch leaks")

    async def create_leak(
        self,
        db: AsyncSession,
        data: LeakCreate,
        fallback_user_id: Optional[str] = None,
    ) -> LeakResponse:
        """New leaks always start as `identified`, whatever the body says."""
        user_id = (data.user_id or "").strip() or (fallback_user_id or "").strip()
        fields = validate_leak(
            user_id=_require_user(user_id, "userId required"),
            title=(data.title or "").strip() or DEFAULT_LEAK_TITLE,
            category=data.category or DEFAULT_LEARNING_CATEGORY,
            status="identified",
        )
        try:
            leak = Leak(
                **fields,
                description=(data.description or "").strip(),
                linked_hand_ids=clean_linked_hand_ids(data.linked_hand_ids),
                notes=[],
                player_id=(data.player_id or "").strip() or None,
                player_username=(data.player_username or "").strip() or None,
            )
            db.add(leak)
            await db.flush()
            logger.info("Leak created: %s for %s", leak.id, leak.user_id)
            return LeakResponse.model_validate(leak)
        except SQLAlchemyError as e:
            logger.error("Database error creating leak: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create leak")

    async def update_leak(
        self, db: AsyncSession, leak_id: UUID, data: LeakUpdate
    ) -> LeakResponse:
        try:
            leak = await self._load(db, leak_id)

            title = leak.title
            category = leak.category
            if data.title is not None:
                title = data.title.strip() or DEFAULT_LEAK_TITLE
            if data.category is not None:
                category = data.category
            fields = validate_leak(
                user_id=leak.user_id,
                title=title,
                category=category,
                status=leak.status,
                review_stage=leak.review_stage,
            )
            leak.title = fields["title"]
            leak.category = fields["category"]
            if data.description is not None:
                leak.description = data.description.strip()

            if data.status in LEAK_STATUSES:
                was_resolved = leak.status == "resolved"
                leak.status = data.status
                if data.status == "resolved" and not was_resolved:
                    now = utcnow()
                    leak.resolved_at = now
                    leak.review_stage = 0
                    leak.next_review_at = now + timedelta(days=REVIEW_INTERVALS_DAYS[0])
                elif data.status != "resolved":
                    _clear_schedule(leak)

            if data.linked_hand_ids is not None:
                leak.linked_hand_ids = clean_linked_hand_ids(data.linked_hand_ids)
            if data.notes is not None:
                leak.notes = clean_learning_notes(n.model_dump() for n in data.notes)

            await db.flush()
            return LeakResponse.model_validate(leak)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating leak %s: %s", leak_id, str(e))
            raise DatabaseError(message="Failed to update leak", context={"leak_id": str(leak_id)})

    async def review_leak(
        self, db: AsyncSession, leak_id: UUID, data: LeakReview
    ) -> LeakResponse:
        """Record the outcome of a scheduled check; only `still_fixed: false` reopens."""
        try:
            leak = await self._load(db, leak_id)
            if data.still_fixed is not False:
                leak.review_stage, leak.next_review_at = advance_review(leak.review_stage)
            else:
                leak.status = "working"
                _clear_schedule(leak)
            await db.flush()
            logger.info("Leak %s reviewed: stage %d", leak.id, leak.review_stage)
            return LeakResponse.model_validate(leak)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error reviewing leak %s: %s", leak_id, str(e))
            raise DatabaseError(message="Failed to update leak review")

    async def list_due(
        self, db: AsyncSession, user_id: Optional[str], now: Optional[datetime] = None
    ) -> List[LeakResponse]:
        """Resolved leaks whose next check is due, soonest first."""
        clean_user = _require_user(user_id, "userId query param required")
        try:
            result = await db.execute(
                select(Leak)
                .where(
                    Leak.user_id == clean_user,
                    Leak.status == "resolved",
                    Leak.next_review_at.is_not(None),
                    Leak.next_review_at <= (now or utcnow()),
                )
                .order_by(asc(Leak.next_review_at))
            )
            return [LeakResponse.model_validate(leak) for leak in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing due leaks: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch due leaks")

    async def delete_leak(self, db: AsyncSession, leak_id: UUID) -> bool:
        try:
            leak = await self._load(db, leak_id)
            await db.delete(leak)
            await db.flush()
            logger.info("Leak deleted: %s", leak_id)
            return True
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting leak %s: %s", leak_id, str(e))
            raise DatabaseError(message="Failed to delete leak", context={"leak_id": str(leak_id)})


leak_service = LeakService()
