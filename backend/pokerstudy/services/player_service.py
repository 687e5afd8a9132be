"""
Poker Study Backend — Player Service
=====================================

What:  Business logic for opponent profiles: CRUD, note appends, bulk import.
Who:   Called by the /api/players route handlers and the backup service.

Import merge rules (POST /api/players/import):
    - Username matches an existing player exactly → notes are merged with a
      blank line between old and new, the player type is replaced when one
      is given, and stakes are unioned keeping first-seen order.
    - Otherwise a new player is created.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.constants import DEFAULT_PLAYER_TYPE
from pokerstudy.exceptions import DatabaseError, NotFoundError, PokerStudyError, ValidationError
from pokerstudy.models.player import Player
from pokerstudy.schemas.player import (
    PlayerCreate,
    PlayerImportRequest,
    PlayerImportResult,
    PlayerResponse,
    PlayerUpdate,
)
from pokerstudy.text.normalizer import append_note_line, merge_notes
from pokerstudy.validation import validate_player, validate_player_type, validate_stakes

logger = logging.getLogger(__name__)


class PlayerService:
    """
    Stateless service; every method receives the request's session.

    Error Handling Strategy:
        Application errors (NotFoundError, ValidationError) propagate as-is.
        SQLAlchemy errors are logged and wrapped in DatabaseError.
    """

    async def _load(self, db: AsyncSession, player_id: UUID) -> Player:
        player = await db.get(Player, player_id)
        if player is None:
            raise NotFoundError(resource="player", resource_id=str(player_id))
        return player

    async def list_players(self, db: AsyncSession) -> List[PlayerResponse]:
        """All players, sorted by username ignoring case."""
        try:
            result = await db.execute(
                select(Player).order_by(func.lower(Player.username), Player.username)
            )
            return [PlayerResponse.model_validate(p) for p in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing players: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to fetch players")

    async def get_player(self, db: AsyncSession, player_id: UUID) -> PlayerResponse:
        try:
            return PlayerResponse.model_validate(await self._load(db, player_id))
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error fetching player %s: %s", player_id, str(e))
            raise DatabaseError(message="Failed to fetch player", context={"player_id": str(player_id)})

    async def create_player(self, db: AsyncSession, data: PlayerCreate) -> PlayerResponse:
        fields = validate_player(
            username=data.username,
            player_type=data.player_type,
            stakes_seen_at=data.stakes_seen_at,
            notes=data.notes,
        )
        try:
            player = Player(**fields)
            db.add(player)
            await db.flush()
            logger.info("Player created: %s (%s)", player.id, player.username)
            return PlayerResponse.model_validate(player)
        except SQLAlchemyError as e:
            logger.error("Database error creating player: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to create player")

    async def update_player(
        self, db: AsyncSession, player_id: UUID, data: PlayerUpdate
    ) -> PlayerResponse:
        """Apply only the fields present in the request body, re-validating the result."""
        try:
            player = await self._load(db, player_id)
            changes = data.model_dump(exclude_unset=True)
            fields = validate_player(
                username=changes.get("username", player.username),
                player_type=changes.get("player_type", player.player_type),
                stakes_seen_at=changes.get("stakes_seen_at", player.stakes_seen_at),
                notes=changes.get("notes", player.notes),
            )
            for key in changes:
                setattr(player, key, fields[key])
            await db.flush()
            return PlayerResponse.model_validate(player)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating player %s: %s", player_id, str(e))
            raise DatabaseError(message="Failed to update player", context={"player_id": str(player_id)})

    async def append_note(self, db: AsyncSession, player_id: UUID, text: str) -> PlayerResponse:
        """Collapse `text` to one line and add it as the last line of the player's notes."""
        if not text or not text.strip():
            raise ValidationError(message="Note text is required", field="text")
        try:
            player = await self._load(db, player_id)
            player.notes = append_note_line(player.notes or "", text)
            await db.flush()
            return PlayerResponse.model_validate(player)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error appending note to player %s: %s", player_id, str(e))
            raise DatabaseError(message="Failed to update player", context={"player_id": str(player_id)})

    async def delete_player(self, db: AsyncSession, player_id: UUID) -> None:
        try:
            player = await self._load(db, player_id)
            await db.delete(player)
            await db.flush()
            logger.info("Player deleted: %s", player_id)
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting player %s: %s", player_id, str(e))
            raise DatabaseError(message="Failed to delete player", context={"player_id": str(player_id)})

    async def import_players(
        self, db: AsyncSession, request: PlayerImportRequest
    ) -> PlayerImportResult:
        """Create or merge every imported player; see the module docstring for merge rules."""
        if not request.players:
            raise ValidationError(message="Invalid import data", field="players")

        result = PlayerImportResult()
        try:
            for imported in request.players:
                found = await db.execute(
                    select(Player).where(Player.username == imported.username)
                )
                existing = found.scalars().first()

                if existing is not None:
                    existing.notes = merge_notes(existing.notes, imported.notes)
                    if imported.player_type:
                        existing.player_type = validate_player_type(imported.player_type)
                    if imported.stakes_seen_at:
                        merged = [*(existing.stakes_seen_at or []), *imported.stakes_seen_at]
                        existing.stakes_seen_at = validate_stakes(dict.fromkeys(merged))
                    result.updated += 1
                else:
                    fields = validate_player(
                        username=imported.username,
                        player_type=imported.player_type or DEFAULT_PLAYER_TYPE,
                        stakes_seen_at=imported.stakes_seen_at or [],
                        notes=imported.notes or "",
                    )
                    db.add(Player(**fields))
                    result.created += 1
                # flush so a later row with the same username finds this one
                await db.flush()

            logger.info("Player import: %d created, %d updated", result.created, result.updated)
            return result
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error importing players: %s", str(e), exc_info=True)
            raise DatabaseError(message="Import failed")


player_service = PlayerService()
