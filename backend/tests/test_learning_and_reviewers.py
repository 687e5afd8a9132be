"""
Poker Study Backend — Reviewer and Mental Game Service Tests
=============================================================
"""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from pokerstudy.exceptions import NotFoundError, ValidationError
from pokerstudy.schemas.mental_game import MentalGameEntryCreate
from pokerstudy.services.mental_game_service import MentalGameService
from pokerstudy.services.reviewer_service import ReviewerService


class TestReviewerService:

    def setup_method(self):
        self.service = ReviewerService()

    @pytest.mark.asyncio
    async def test_register_is_idempotent(self, db_session):
        assert await self.service.register(db_session, " Bob ") == ("Bob", True)
        assert await self.service.register(db_session, "Bob") == ("Bob", False)
        assert await self.service.list_names(db_session) == ["Bob"]

    @pytest.mark.asyncio
    async def test_names_sorted(self, db_session):
        for name in ["carl", "amy", "bob"]:
            await self.service.register(db_session, name)
        assert await self.service.list_names(db_session) == ["amy", "bob", "carl"]

    @pytest.mark.asyncio
    async def test_blank_name(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.register(mock_db_session, "   ")
        mock_db_session.execute.assert_not_awaited()


class TestMentalGameService:

    def setup_method(self):
        self.service = MentalGameService()

    @pytest.mark.asyncio
    async def test_defaults(self, db_session):
        entry = await self.service.create_entry(
            db_session, MentalGameEntryCreate(user_id="alice", tilt_affected=True)
        )
        assert entry.state_rating == 3
        assert entry.observation == ""
        assert entry.tilt_affected is True
        assert entry.fatigue_affected is False
        assert entry.session_date is not None

    @pytest.mark.asyncio
    async def test_non_json_types_are_not_coerced(self, db_session):
        entry = await self.service.create_entry(
            db_session,
            MentalGameEntryCreate(
                user_id="alice", state_rating="4", tilt_affected="true", fatigue_affected=1
            ),
        )
        assert entry.state_rating == 3
        assert entry.tilt_affected is False
        assert entry.fatigue_affected is False

    @pytest.mark.asyncio
    async def test_whole_float_rating_accepted(self, db_session):
        entry = await self.service.create_entry(
            db_session, MentalGameEntryCreate(user_id="alice", state_rating=4.0)
        )
        assert entry.state_rating == 4

    @pytest.mark.asyncio
    async def test_observation_trimmed_and_truncated(self, db_session):
        entry = await self.service.create_entry(
            db_session,
            MentalGameEntryCreate(user_id="alice", observation="  " + "y" * 300 + "  "),
        )
        assert entry.observation == "y" * 280

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, db_session):
        with pytest.raises(ValidationError, match="stateRating must be 1-5"):
            await self.service.create_entry(
                db_session, MentalGameEntryCreate(user_id="alice", state_rating=6)
            )

    @pytest.mark.asyncio
    async def test_user_from_query_fallback(self, db_session):
        entry = await self.service.create_entry(
            db_session, MentalGameEntryCreate(), fallback_user_id=" alice "
        )
        assert entry.user_id == "alice"

    @pytest.mark.asyncio
    async def test_user_required(self, db_session):
        with pytest.raises(ValidationError, match="userId required"):
            await self.service.create_entry(db_session, MentalGameEntryCreate())

    @pytest.mark.asyncio
    async def test_list_latest_session_first_per_user(self, db_session):
        for day in (3, 1, 2):
            await self.service.create_entry(
                db_session,
                MentalGameEntryCreate(
                    user_id="alice",
                    session_date=datetime(2026, 1, day, tzinfo=timezone.utc),
                ),
            )
        await self.service.create_entry(db_session, MentalGameEntryCreate(user_id="bob"))

        entries = await self.service.list_entries(db_session, "alice")

        assert [e.session_date.day for e in entries] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_list_requires_user(self, mock_db_session):
        with pytest.raises(ValidationError, match="userId query param required"):
            await self.service.list_entries(mock_db_session, None)

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        entry = await self.service.create_entry(db_session, MentalGameEntryCreate(user_id="alice"))
        assert await self.service.delete_entry(db_session, entry.id) is True
        with pytest.raises(NotFoundError):
            await self.service.delete_entry(db_session, uuid4())
