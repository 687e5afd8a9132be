"""
Poker Study Backend — Claimed User Service
===========================================

What:  Lets someone reserve a display name with a password, log in with it
       from another device, and keep private improvement notes.
Why:   Display names are free text everywhere else in the app; claiming one
       stops other people from posting under it.
How:   Passwords are stored only as bcrypt hashes. Hashing and checking run
       in the threadpool so the event loop is not blocked for the ~100ms a
       cost-10 hash takes. Names are compared case-insensitively.
Who:   Called by the /api/me route handlers and the Basic-auth dependency.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from pokerstudy.config import settings
from pokerstudy.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    PokerStudyError,
    ValidationError,
)
from pokerstudy.models.claimed_user import ClaimedUser
from pokerstudy.validation import validate_claimed_user

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Return a bcrypt hash of `password` as text."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of `password` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored hash
        logger.warning("Stored password hash could not be parsed")
        return False


class ClaimedUserService:

    async def find_by_name(self, db: AsyncSession, name: str) -> Optional[ClaimedUser]:
        """Case-insensitive lookup of a claimed name. Blank names never match."""
        clean = (name or "").strip()
        if not clean:
            return None
        try:
            result = await db.execute(
                select(ClaimedUser).where(func.lower(ClaimedUser.name) == clean.lower())
            )
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error looking up claimed name: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to check name")

    async def is_name_claimed(self, db: AsyncSession, name: str) -> bool:
        return await self.find_by_name(db, name) is not None

    async def claim(self, db: AsyncSession, name: Optional[str], password: Optional[str]) -> ClaimedUser:
        """
        Reserve `name` for the holder of `password`.

        Raises:
            ValidationError: blank name or missing password
            ConflictError: the name (in any letter case) is already claimed
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError(message="Name is required.", field="name")
        if not isinstance(password, str) or not password:
            raise ValidationError(message="Password is required to claim a name.", field="password")

        if await self.is_name_claimed(db, clean_name):
            raise ConflictError(message="This name is already taken. Use Login if it is yours.")

        password_hash = await run_in_threadpool(hash_password, password)
        fields = validate_claimed_user(clean_name, password_hash)
        try:
            user = ClaimedUser(**fields)
            db.add(user)
            await db.flush()
            logger.info("Name claimed: %s", user.name)
            return user
        except IntegrityError:
            # Unique index on lower(name) caught a concurrent claim
            await db.rollback()
            raise ConflictError(message="This name is already taken. Use Login if it is yours.")
        except SQLAlchemyError as e:
            logger.error("Database error claiming name: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to claim name.")

    async def authenticate(
        self, db: AsyncSession, name: Optional[str], password: Optional[str]
    ) -> ClaimedUser:
        """
        Return the claimed user matching these credentials.

        Raises:
            AuthenticationError: unknown name or wrong password. The two cases
                are not distinguished.
        """
        if not (name or "").strip() or not password:
            raise AuthenticationError()
        user = await self.find_by_name(db, name)
        if user is None:
            raise AuthenticationError()
        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("Failed login for claimed name %s", user.name)
            raise AuthenticationError()
        return user

    async def login(self, db: AsyncSession, name: Optional[str], password: Optional[str]) -> ClaimedUser:
        if not (name or "").strip() or not isinstance(password, str):
            raise ValidationError(message="Name and password are required.")
        return await self.authenticate(db, name, password)

    async def set_improvement_notes(
        self, db: AsyncSession, user: ClaimedUser, content: Optional[str]
    ) -> str:
        try:
            user.improvement_notes = content if isinstance(content, str) else ""
            await db.flush()
            return user.improvement_notes
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error saving notes for %s: %s", user.name, str(e))
            raise DatabaseError(message="Failed to save notes.")


claimed_user_service = ClaimedUserService()
