"""
Poker Study Backend — Mental Game Service
==========================================

What:  A per-user journal of how the player felt during each session.
How:   Entries are keyed by a free-text userId (the display name the client
       uses). Creation is lenient: a missing or non-numeric rating defaults
       to 3, a long observation is cut to 280 characters, and only a
       literal `true` sets a flag.
"""

import logging
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.constants import DEFAULT_STATE_RATING, OBSERVATION_MAX_LENGTH
from pokerstudy.exceptions import DatabaseError, NotFoundError, PokerStudyError, ValidationError
from pokerstudy.models.mental_game_entry import MentalGameEntry
from pokerstudy.models.mixins import utcnow
from pokerstudy.schemas.mental_game import MentalGameEntryCreate, MentalGameEntryResponse
from pokerstudy.validation import validate_mental_game_entry

logger = logging.getLogger(__name__)


def rating_or_default(value: Any) -> Any:
    """A JSON number is the rating (whole floats become ints); anything else means 3."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_STATE_RATING
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class MentalGameService:

    async def list_entries(
        self, db: AsyncSession, user_id: Optional[str]
    ) -> List[MentalGameEntryResponse]:
        """Entries for one user, most recent session first."""
        clean_user = (user_id or "").strip()
        if not clean_user:
            raise ValidationError(message="userId query param required", field="user_id")
        try:
            result = await db.execute(
                select(MentalGameEntry)
                .where(MentalGameEntry.user_id == clean_user)
                .order_by(desc(MentalGameEntry.session_date))
            )
            return [MentalGameEntryResponse.model_validate(e) for e in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing mental game entries: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch mental game entries")

    async def create_entry(
        self,
        db: AsyncSession,
        data: MentalGameEntryCreate,
        fallback_user_id: Optional[str] = None,
    ) -> MentalGameEntryResponse:
        """
        Args:
            fallback_user_id: the `userId` query parameter, used when the body
                does not carry one.
        """
        user_id = (data.user_id or "").strip() or (fallback_user_id or "").strip()
        fields = validate_mental_game_entry(
            user_id=user_id,
            session_date=data.session_date or utcnow(),
            state_rating=rating_or_default(data.state_rating),
            observation=(data.observation or "").strip()[:OBSERVATION_MAX_LENGTH],
            tilt_affected=data.tilt_affected,
            fatigue_affected=data.fatigue_affected,
            confidence_affected=data.confidence_affected,
        )
        try:
            entry = MentalGameEntry(**fields)
            db.add(entry)
            await db.flush()
            logger.info("Mental game entry %s recorded for %s", entry.id, entry.user_id)
            return MentalGameEntryResponse.model_validate(entry)
        except SQLAlchemyError as e:
            logger.error("Database error creating mental game entry: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create mental game entry")

    async def delete_entry(self, db: AsyncSession, entry_id: UUID) -> bool:
        try:
            entry = await db.get(MentalGameEntry, entry_id)
            if entry is None:
                raise NotFoundError(resource="mental game entry", resource_id=str(entry_id))
            await db.delete(entry)
            await db.flush()
            return True
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting mental game entry %s: %s", entry_id, str(e))
            raise DatabaseError(message="Failed to delete mental game entry")


mental_game_service = MentalGameService()
