"""
Poker Study Backend — Backup Service
=====================================

What:  Full export of players and hands-to-review, and a destructive restore
       that replaces both collections with a previously exported payload.
How:   Restore deletes and re-inserts inside the request's transaction, so a
       bad record rolls the whole restore back and the old data survives.
       Ids and timestamps from the payload are kept when present.
"""

import logging
from typing import Any, Dict

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pokerstudy.exceptions import DatabaseError, PokerStudyError
from pokerstudy.models.hand_to_review import HandToReview
from pokerstudy.models.mixins import utcnow
from pokerstudy.models.player import Player
from pokerstudy.schemas.backup import (
    BackupPayload,
    HandBackupRecord,
    PlayerBackupRecord,
    RestoreRequest,
    RestoreResult,
)
from pokerstudy.services.hand_review_service import hand_review_service
from pokerstudy.services.player_service import player_service
from pokerstudy.validation import (
    archived_at_for_status,
    validate_hand_to_review,
    validate_player,
)

logger = logging.getLogger(__name__)


def _preserved(record, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Add the record's id and timestamps to `fields` where the payload has them."""
    for key in ("id", "created_at", "updated_at"):
        value = getattr(record, key)
        if value is not None:
            fields[key] = value
    return fields


def _player_from_record(record: PlayerBackupRecord) -> Player:
    fields = validate_player(
        username=record.username,
        player_type=record.player_type,
        stakes_seen_at=record.stakes_seen_at,
        notes=record.notes,
    )
    return Player(**_preserved(record, fields))


def _hand_from_record(record: HandBackupRecord) -> HandToReview:
    fields = validate_hand_to_review(
        title=record.title,
        hand_text=record.hand_text,
        status=record.status,
        created_by=record.created_by,
    )
    fields.update(
        comments=[c.model_dump(mode="json") for c in record.comments],
        star_ratings=[r.model_dump() for r in record.star_ratings],
        spicy_ratings=[r.model_dump() for r in record.spicy_ratings],
        archived_at=archived_at_for_status(fields["status"], record.archived_at),
    )
    return HandToReview(**_preserved(record, fields))


class BackupService:

    async def export(self, db: AsyncSession) -> BackupPayload:
        players = await player_service.list_players(db)
        hands = await hand_review_service.list_hands(db)
        logger.info("Backup exported: %d players, %d hands", len(players), len(hands))
        return BackupPayload(exported_at=utcnow(), players=players, hands_to_review=hands)

    async def restore(self, db: AsyncSession, request: RestoreRequest) -> RestoreResult:
        """
        Replace every player and hand with the ones in `request`.

        A missing list counts as empty, so restoring `{}` wipes both tables.
        """
        players = request.players or []
        hands = request.hands_to_review or []
        try:
            # Build first: a validation error must not leave the tables emptied
            new_players = [_player_from_record(p) for p in players]
            new_hands = [_hand_from_record(h) for h in hands]

            await db.execute(delete(Player))
            await db.execute(delete(HandToReview))
            db.add_all(new_players)
            db.add_all(new_hands)
            await db.flush()

            logger.warning(
                "Backup restored: %d players, %d hands (previous data replaced)",
                len(new_players),
                len(new_hands),
            )
            return RestoreResult(
                players_restored=len(new_players),
                hands_to_review_restored=len(new_hands),
            )
        except PokerStudyError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error restoring backup: %s", str(e), exc_info=True)
            raise DatabaseError(message="Failed to restore backup")


backup_service = BackupService()
