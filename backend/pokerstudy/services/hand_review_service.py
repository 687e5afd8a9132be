"""
Poker Study Backend — Hand Review Service
==========================================

What:  Business logic for hands posted for review: listing, creation,
       comments, per-user ratings, archiving and deletion.
Who:   Called by the /api/hands-to-review route handlers.

Update semantics (PUT /api/hands-to-review/{id}):
    A single request performs at most one of these, checked in order:
    1. rate_hand with a user name: upsert that user's star (0-10) and/or
       spicy (0-5) rating; out-of-range values are ignored
    2. add_comment with non-blank text and an author: append a comment
    3. delete_comment_index within range: remove that comment
    4. otherwise: apply title / hand_text / status field updates
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.constants import (
    DEFAULT_HAND_AUTHOR,
    DEFAULT_HAND_TITLE,
    HAND_STATUSES,
    SPICY_RATING_RANGE,
    STAR_RATING_RANGE,
)
from pokerstudy.exceptions import DatabaseError, NotFoundError, PokerStudyError
from pokerstudy.models.hand_to_review import HandToReview
from pokerstudy.models.mixins import utcnow
from pokerstudy.schemas.hand_to_review import (
    HandToReviewCreate,
    HandToReviewResponse,
    HandToReviewUpdate,
)
from pokerstudy.validation import validate_hand_to_review

logger = logging.getLogger(__name__)


def upsert_rating(
    ratings: List[Dict[str, Any]], user: str, rating: float
) -> List[Dict[str, Any]]:
    """Return a new list where `user` has exactly one entry with `rating`."""
    updated = [dict(r) for r in ratings]
    entry = {"user": user, "rating": rating}
    for i, existing in enumerate(updated):
        if existing.get("user") == user:
            updated[i] = entry
            return updated
    updated.append(entry)
    return updated


def _in_range(value: Any, bounds) -> bool:
    """True for a JSON number (not a bool, not a numeric string) within bounds."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    low, high = bounds
    return low <= value <= high


class HandReviewService:
    """Stateless service; every method receives the request's session."""

    async def _load(self, db: AsyncSession, hand_id: UUID) -> HandToReview:
        hand = await db.get(HandToReview, hand_id)
        if hand is None:
            raise NotFoundError(resource="hand", resource_id=str(hand_id))
        return hand

    async def list_hands(
        self, db: AsyncSession, status: Optional[str] = None
    ) -> List[HandToReviewResponse]:
        """Newest first; an unknown status value is ignored rather than rejected."""
        try:
            query = select(HandToReview)
            if status in HAND_STATUSES:
                query = query.where(HandToReview.status == status)
            query = query.order_by(desc(HandToReview.created_at))
            result = await db.execute(query)
            return [HandToReviewResponse.model_validate(h) for h in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing hands: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch hands to review")

    async def get_hand(self, db: AsyncSession, hand_id: UUID) -> HandToReviewResponse:
        try:
            return HandToReviewResponse.model_validate(await self._load(db, hand_id))
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching hand %s: %s", hand_id, str(e))
            raise DatabaseError(message="Failed to fetch hand", context={"hand_id": str(hand_id)})

    async def create_hand(self, db: AsyncSession, data: HandToReviewCreate) -> HandToReviewResponse:
        fields = validate_hand_to_review(
            title=(data.title or "").strip() or DEFAULT_HAND_TITLE,
            hand_text=data.hand_text,
            status="open",
            created_by=(data.created_by or "").strip() or DEFAULT_HAND_AUTHOR,
        )
        try:
            hand = HandToReview(**fields)
            db.add(hand)
            await db.flush()
            logger.info("Hand created: %s by %s", hand.id, hand.created_by)
            return HandToReviewResponse.model_validate(hand)
        except SQLAlchemyError as e:
            logger.error("Database error creating hand: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create hand")

    async def update_hand(
        self, db: AsyncSession, hand_id: UUID, data: HandToReviewUpdate
    ) -> HandToReviewResponse:
        try:
            hand = await self._load(db, hand_id)

            if data.rate_hand is not None and data.rate_hand.user_name:
                self._apply_rating(hand, data.rate_hand)
            elif (
                data.add_comment is not None
                and (data.add_comment.text or "").strip()
                and data.add_comment.added_by
            ):
                comment = {
                    "text": data.add_comment.text.strip(),
                    "added_by": data.add_comment.added_by,
                    "added_at": utcnow().isoformat(),
                }
                hand.comments = [*(hand.comments or []), comment]
            elif (
                data.delete_comment_index is not None
                and 0 <= data.delete_comment_index < len(hand.comments or [])
            ):
                comments = list(hand.comments)
                del comments[data.delete_comment_index]
                hand.comments = comments
            else:
                self._apply_field_updates(hand, data)

            await db.flush()
            return HandToReviewResponse.model_validate(hand)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating hand %s: %s", hand_id, str(e))
            raise DatabaseError(message="Failed to update hand", context={"hand_id": str(hand_id)})

    def _apply_rating(self, hand: HandToReview, rate) -> None:
        if _in_range(rate.star_rating, STAR_RATING_RANGE):
            hand.star_ratings = upsert_rating(hand.star_ratings or [], rate.user_name, rate.star_rating)
        if _in_range(rate.spicy_rating, SPICY_RATING_RANGE):
            hand.spicy_ratings = upsert_rating(hand.spicy_ratings or [], rate.user_name, rate.spicy_rating)

    def _apply_field_updates(self, hand: HandToReview, data: HandToReviewUpdate) -> None:
        title = hand.title
        hand_text = hand.hand_text
        status = hand.status
        if data.title is not None:
            title = data.title.strip() or DEFAULT_HAND_TITLE
        if data.hand_text is not None:
            hand_text = data.hand_text.strip()
        if data.status in HAND_STATUSES:
            status = data.status

        fields = validate_hand_to_review(
            title=title, hand_text=hand_text, status=status, created_by=hand.created_by
        )
        hand.title = fields["title"]
        hand.hand_text = fields["hand_text"]
        if data.status in HAND_STATUSES:
            hand.status = status
            hand.archived_at = utcnow() if status == "archived" else None

    async def delete_hand(self, db: AsyncSession, hand_id: UUID) -> bool:
        """
        Delete unconditionally. Only call this from a confirmed request;
        the route puts the confirmation gate in front of it.
        """
        try:
            hand = await self._load(db, hand_id)
            await db.delete(hand)
            await db.flush()
            logger.info("Hand deleted: %s", hand_id)
            return True
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting hand %s: %s", hand_id, str(e))
            raise DatabaseError(message="Failed to delete hand", context={"hand_id": str(hand_id)})


hand_review_service = HandReviewService()
