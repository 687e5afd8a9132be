"""
Poker Study Backend — Player Service Tests
===========================================

What:  CRUD, note appends and import merging for PlayerService.
How:   Error paths use the mock session; everything that needs real query
       results runs against the per-test SQLite database.
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from pokerstudy.exceptions import DatabaseError, NotFoundError, ValidationError
from pokerstudy.schemas.player import (
    ImportPlayer,
    PlayerCreate,
    PlayerImportRequest,
    PlayerUpdate,
)
from pokerstudy.services.player_service import PlayerService


class TestPlayerServiceErrors:

    def setup_method(self):
        self.service = PlayerService()

    @pytest.mark.asyncio
    async def test_get_missing_player(self, mock_db_session):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_player(mock_db_session, uuid4())
        assert exc_info.value.resource == "player"

    @pytest.mark.asyncio
    async def test_database_failure_is_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
        with pytest.raises(DatabaseError):
            await self.service.list_players(mock_db_session)

    @pytest.mark.asyncio
    async def test_invalid_type_rejected_before_insert(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.create_player(
                mock_db_session, PlayerCreate(username="x", player_type="Donkey")
            )
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_import_rejected(self, mock_db_session):
        with pytest.raises(ValidationError, match="Invalid import data"):
            await self.service.import_players(mock_db_session, PlayerImportRequest(players=[]))


class TestPlayerServiceCrud:

    def setup_method(self):
        self.service = PlayerService()

    @pytest.mark.asyncio
    async def test_create_and_list_sorted_ignoring_case(self, db_session):
        for name in ["zed", "Alice", "bob"]:
            await self.service.create_player(db_session, PlayerCreate(username=name))

        players = await self.service.list_players(db_session)

        assert [p.username for p in players] == ["Alice", "bob", "zed"]
        assert all(p.player_type == "Unknown" for p in players)

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session):
        created = await self.service.create_player(
            db_session, PlayerCreate(username="fish", notes="limps", stakes_seen_at=[25])
        )

        updated = await self.service.update_player(
            db_session, created.id, PlayerUpdate(player_type="Whale")
        )

        assert updated.player_type == "Whale"
        assert updated.notes == "limps"
        assert updated.stakes_seen_at == [25]

    @pytest.mark.asyncio
    async def test_update_rejects_bad_stake(self, db_session):
        created = await self.service.create_player(db_session, PlayerCreate(username="fish"))
        with pytest.raises(ValidationError):
            await self.service.update_player(
                db_session, created.id, PlayerUpdate(stakes_seen_at=[30])
            )

    @pytest.mark.asyncio
    async def test_append_note_collapses_lines(self, db_session):
        created = await self.service.create_player(
            db_session, PlayerCreate(username="fish", notes="calls 3bets light")
        )

        updated = await self.service.append_note(
            db_session, created.id, "hero opens AK\nvillain calls\n"
        )

        assert updated.notes == "calls 3bets light\nhero opens AK // villain calls"

    @pytest.mark.asyncio
    async def test_append_blank_note_rejected(self, db_session):
        created = await self.service.create_player(db_session, PlayerCreate(username="fish"))
        with pytest.raises(ValidationError):
            await self.service.append_note(db_session, created.id, "\n \n")

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        created = await self.service.create_player(db_session, PlayerCreate(username="fish"))
        await self.service.delete_player(db_session, created.id)
        with pytest.raises(NotFoundError):
            await self.service.get_player(db_session, created.id)


class TestPlayerImport:

    def setup_method(self):
        self.service = PlayerService()

    @pytest.mark.asyncio
    async def test_merges_existing_and_creates_new(self, db_session):
        await self.service.create_player(
            db_session,
            PlayerCreate(username="fish", player_type="Whale", stakes_seen_at=[25, 50], notes="old"),
        )

        result = await self.service.import_players(
            db_session,
            PlayerImportRequest(players=[
                ImportPlayer(username="fish", player_type="Maniac", stakes_seen_at=[50, 100], notes="new"),
                ImportPlayer(username="reg", stakes_seen_at=[200]),
            ]),
        )

        assert (result.created, result.updated) == (1, 1)
        players = {p.username: p for p in await self.service.list_players(db_session)}
        assert players["fish"].notes == "old\n\nnew"
        assert players["fish"].player_type == "Maniac"
        assert players["fish"].stakes_seen_at == [25, 50, 100]
        assert players["reg"].player_type == "Unknown"

    @pytest.mark.asyncio
    async def test_missing_type_keeps_existing(self, db_session):
        await self.service.create_player(
            db_session, PlayerCreate(username="fish", player_type="Rock")
        )
        await self.service.import_players(
            db_session, PlayerImportRequest(players=[ImportPlayer(username="fish")])
        )
        players = await self.service.list_players(db_session)
        assert players[0].player_type == "Rock"
        assert players[0].notes == ""

    @pytest.mark.asyncio
    async def test_duplicate_usernames_in_one_import(self, db_session):
        result = await self.service.import_players(
            db_session,
            PlayerImportRequest(players=[
                ImportPlayer(username="fish", notes="a"),
                ImportPlayer(username="fish", notes="b"),
            ]),
        )
        assert (result.created, result.updated) == (1, 1)
        players = await self.service.list_players(db_session)
        assert len(players) == 1
        assert players[0].notes == "a\n\nb"
