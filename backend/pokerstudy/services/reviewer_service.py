"""
Poker Study Backend — Reviewer Service
=======================================

What:  Registry of reviewer names that hands can be tagged with.
How:   Registration is idempotent: registering an existing name returns it
       unchanged and reports that nothing was created.
"""

import logging
from typing import List, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.exceptions import DatabaseError
from pokerstudy.models.reviewer import Reviewer
from pokerstudy.validation import validate_reviewer

logger = logging.getLogger(__name__)


class ReviewerService:

    async def list_names(self, db: AsyncSession) -> List[str]:
        try:
            result = await db.execute(select(Reviewer.name).order_by(Reviewer.name))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing reviewers: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch reviewers")

    async def register(self, db: AsyncSession, name: str) -> Tuple[str, bool]:
        """
        Returns:
            (name, created) where created is False if the name already existed.
        Raises:
            ValidationError: blank name
        """
        clean = validate_reviewer(name)["name"]
        try:
            result = await db.execute(select(Reviewer).where(Reviewer.name == clean))
            existing = result.scalars().first()
            if existing is not None:
                return existing.name, False

            reviewer = Reviewer(name=clean)
            db.add(reviewer)
            await db.flush()
            logger.info("Reviewer registered: %s", clean)
            return reviewer.name, True
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            logger.info("Reviewer %s registered concurrently", clean)
            await db.rollback()
            return clean, False
        except SQLAlchemyError as e:
            logger.error("Database error registering reviewer: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to register reviewer")


reviewer_service = ReviewerService()
