"""
Poker Study Backend — Backup Service Tests
===========================================

What:  Export shape, destructive restore, and all-or-nothing behavior when
       a restored record is invalid.
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from pokerstudy.exceptions import ValidationError
from pokerstudy.schemas.backup import HandBackupRecord, PlayerBackupRecord, RestoreRequest
from pokerstudy.schemas.hand_to_review import (
    AddComment,
    HandToReviewCreate,
    HandToReviewUpdate,
)
from pokerstudy.schemas.player import PlayerCreate
from pokerstudy.services.backup_service import BackupService
from pokerstudy.services.hand_review_service import hand_review_service
from pokerstudy.services.player_service import player_service


class TestBackupService:

    def setup_method(self):
        self.service = BackupService()

    @pytest.mark.asyncio
    async def test_export_contains_everything(self, db_session):
        await player_service.create_player(db_session, PlayerCreate(username="bob"))
        await player_service.create_player(db_session, PlayerCreate(username="Amy"))
        await hand_review_service.create_hand(db_session, HandToReviewCreate(hand_text="a"))

        payload = await self.service.export(db_session)

        assert [p.username for p in payload.players] == ["Amy", "bob"]
        assert len(payload.hands_to_review) == 1
        assert payload.exported_at is not None

    @pytest.mark.asyncio
    async def test_restore_replaces_data_and_keeps_ids(self, db_session):
        await player_service.create_player(db_session, PlayerCreate(username="old"))
        player_id = uuid4()

        result = await self.service.restore(
            db_session,
            RestoreRequest(
                players=[PlayerBackupRecord(id=player_id, username="fish", stakes_seen_at=[50])],
                hands_to_review=[
                    HandBackupRecord(
                        title="t",
                        hand_text="hero opens",
                        created_by="amy",
                        comments=[{"text": "fold", "added_by": "bob", "added_at": "2026-01-01T00:00:00Z"}],
                        star_ratings=[{"user": "bob", "rating": 7}],
                    )
                ],
            ),
        )

        assert (result.players_restored, result.hands_to_review_restored) == (1, 1)
        players = await player_service.list_players(db_session)
        assert [(p.id, p.username) for p in players] == [(player_id, "fish")]
        hands = await hand_review_service.list_hands(db_session)
        assert hands[0].comments[0].added_by == "bob"
        assert hands[0].star_ratings[0].rating == 7

    @pytest.mark.asyncio
    async def test_restored_hand_accepts_new_comments(self, db_session):
        await self.service.restore(
            db_session,
            RestoreRequest(hands_to_review=[HandBackupRecord(title="t", hand_text="h", created_by="amy")]),
        )
        hand = (await hand_review_service.list_hands(db_session))[0]
        updated = await hand_review_service.update_hand(
            db_session, hand.id, HandToReviewUpdate(add_comment=AddComment(text="nice", added_by="bob"))
        )
        assert [c.text for c in updated.comments] == ["nice"]

    @pytest.mark.asyncio
    async def test_missing_lists_wipe_everything(self, db_session):
        await player_service.create_player(db_session, PlayerCreate(username="old"))
        result = await self.service.restore(db_session, RestoreRequest())
        assert (result.players_restored, result.hands_to_review_restored) == (0, 0)
        assert await player_service.list_players(db_session) == []

    @pytest.mark.asyncio
    async def test_invalid_record_leaves_data_untouched(self, db_session):
        await player_service.create_player(db_session, PlayerCreate(username="old"))
        with pytest.raises(ValidationError):
            await self.service.restore(
                db_session,
                RestoreRequest(players=[PlayerBackupRecord(username="fish", player_type="Donkey")]),
            )
        assert [p.username for p in await player_service.list_players(db_session)] == ["old"]

    @pytest.mark.asyncio
    async def test_archived_at_follows_status(self, db_session):
        kept = datetime(2026, 1, 1, tzinfo=timezone.utc)
        await self.service.restore(
            db_session,
            RestoreRequest(
                hands_to_review=[
                    HandBackupRecord(title="no time", hand_text="h", created_by="a", status="archived"),
                    HandBackupRecord(
                        title="kept", hand_text="h", created_by="a", status="archived", archived_at=kept
                    ),
                    HandBackupRecord(
                        title="stale", hand_text="h", created_by="a", status="open", archived_at=kept
                    ),
                ]
            ),
        )
        hands = {h.title: h for h in await hand_review_service.list_hands(db_session)}

        assert hands["no time"].archived_at is not None
        assert hands["kept"].archived_at.date() == kept.date()
        assert hands["stale"].archived_at is None
