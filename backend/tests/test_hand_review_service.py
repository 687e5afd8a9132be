"""
Poker Study Backend — Hand Review Service Tests
================================================

What:  Creation defaults, the one-action-per-update priority order, rating
       upserts, archiving and deletion.
"""

from uuid import uuid4

import pytest

from pokerstudy.exceptions import NotFoundError, ValidationError
from pokerstudy.schemas.hand_to_review import (
    AddComment,
    HandToReviewCreate,
    HandToReviewUpdate,
    RateHand,
)
from pokerstudy.services.hand_review_service import HandReviewService, upsert_rating


class TestUpsertRating:

    def test_appends_new_user(self):
        assert upsert_rating([], "bob", 7) == [{"user": "bob", "rating": 7}]

    def test_replaces_existing_user(self):
        ratings = [{"user": "bob", "rating": 7}, {"user": "amy", "rating": 3}]
        result = upsert_rating(ratings, "bob", 9)
        assert result == [{"user": "bob", "rating": 9}, {"user": "amy", "rating": 3}]
        # input untouched
        assert ratings[0]["rating"] == 7


class TestHandCreation:

    def setup_method(self):
        self.service = HandReviewService()

    @pytest.mark.asyncio
    async def test_defaults(self, db_session):
        hand = await self.service.create_hand(
            db_session, HandToReviewCreate(hand_text="  hero opens AK // villain 3bets  ")
        )
        assert hand.title == "Untitled hand"
        assert hand.created_by == "Anonymous"
        assert hand.hand_text == "hero opens AK // villain 3bets"
        assert hand.status == "open"
        assert hand.comments == []
        assert hand.archived_at is None

    @pytest.mark.asyncio
    async def test_hand_text_required(self, db_session):
        with pytest.raises(ValidationError, match="Hand text is required"):
            await self.service.create_hand(db_session, HandToReviewCreate(title="empty"))

    @pytest.mark.asyncio
    async def test_list_filters_by_status(self, db_session):
        open_hand = await self.service.create_hand(db_session, HandToReviewCreate(hand_text="a"))
        archived = await self.service.create_hand(db_session, HandToReviewCreate(hand_text="b"))
        await self.service.update_hand(db_session, archived.id, HandToReviewUpdate(status="archived"))

        assert [h.id for h in await self.service.list_hands(db_session, "open")] == [open_hand.id]
        assert [h.id for h in await self.service.list_hands(db_session, "archived")] == [archived.id]
        assert len(await self.service.list_hands(db_session, "bogus")) == 2


class TestHandUpdate:

    def setup_method(self):
        self.service = HandReviewService()

    async def _hand(self, db):
        return await self.service.create_hand(
            db, HandToReviewCreate(title="Big pot", hand_text="hero opens AK", created_by="amy")
        )

    @pytest.mark.asyncio
    async def test_rating_upsert_per_user(self, db_session):
        hand = await self._hand(db_session)
        await self.service.update_hand(
            db_session, hand.id,
            HandToReviewUpdate(rate_hand=RateHand(star_rating=6, spicy_rating=2, user_name="bob")),
        )
        updated = await self.service.update_hand(
            db_session, hand.id,
            HandToReviewUpdate(rate_hand=RateHand(star_rating=8, user_name="bob")),
        )
        assert [(r.user, r.rating) for r in updated.star_ratings] == [("bob", 8)]
        assert [(r.user, r.rating) for r in updated.spicy_ratings] == [("bob", 2)]

    @pytest.mark.asyncio
    async def test_out_of_range_rating_ignored(self, db_session):
        hand = await self._hand(db_session)
        updated = await self.service.update_hand(
            db_session, hand.id,
            HandToReviewUpdate(rate_hand=RateHand(star_rating=11, spicy_rating=6, user_name="bob")),
        )
        assert updated.star_ratings == []
        assert updated.spicy_ratings == []

    @pytest.mark.asyncio
    async def test_rating_takes_priority_over_other_changes(self, db_session):
        hand = await self._hand(db_session)
        updated = await self.service.update_hand(
            db_session, hand.id,
            HandToReviewUpdate(
                title="ignored",
                add_comment=AddComment(text="also ignored", added_by="bob"),
                rate_hand=RateHand(star_rating=5, user_name="bob"),
            ),
        )
        assert updated.title == "Big pot"
        assert updated.comments == []
        assert len(updated.star_ratings) == 1

    @pytest.mark.asyncio
    async def test_add_and_delete_comment(self, db_session):
        hand = await self._hand(db_session)
        for text in ["fold pre", "  call is fine  "]:
            await self.service.update_hand(
                db_session, hand.id,
                HandToReviewUpdate(add_comment=AddComment(text=text, added_by="bob")),
            )

        updated = await self.service.get_hand(db_session, hand.id)
        assert [c.text for c in updated.comments] == ["fold pre", "call is fine"]
        assert updated.comments[0].added_by == "bob"

        updated = await self.service.update_hand(
            db_session, hand.id, HandToReviewUpdate(delete_comment_index=0)
        )
        assert [c.text for c in updated.comments] == ["call is fine"]

    @pytest.mark.asyncio
    async def test_blank_comment_falls_through_to_field_updates(self, db_session):
        hand = await self._hand(db_session)
        updated = await self.service.update_hand(
            db_session, hand.id,
            HandToReviewUpdate(title="Renamed", add_comment=AddComment(text="  ", added_by="bob")),
        )
        assert updated.comments == []
        assert updated.title == "Renamed"

    @pytest.mark.asyncio
    async def test_out_of_range_comment_index_ignored(self, db_session):
        hand = await self._hand(db_session)
        updated = await self.service.update_hand(
            db_session, hand.id, HandToReviewUpdate(delete_comment_index=3)
        )
        assert updated.title == "Big pot"

    @pytest.mark.asyncio
    async def test_blank_title_becomes_default(self, db_session):
        hand = await self._hand(db_session)
        updated = await self.service.update_hand(db_session, hand.id, HandToReviewUpdate(title="  "))
        assert updated.title == "Untitled hand"

    @pytest.mark.asyncio
    async def test_archive_and_reopen(self, db_session):
        hand = await self._hand(db_session)
        archived = await self.service.update_hand(
            db_session, hand.id, HandToReviewUpdate(status="archived")
        )
        assert archived.status == "archived"
        assert archived.archived_at is not None

        reopened = await self.service.update_hand(db_session, hand.id, HandToReviewUpdate(status="open"))
        assert reopened.status == "open"
        assert reopened.archived_at is None

    @pytest.mark.asyncio
    async def test_update_missing_hand(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_hand(db_session, uuid4(), HandToReviewUpdate(title="x"))


class TestHandDelete:

    def setup_method(self):
        self.service = HandReviewService()

    @pytest.mark.asyncio
    async def test_delete(self, db_session):
        hand = await self.service.create_hand(db_session, HandToReviewCreate(hand_text="a"))
        assert await self.service.delete_hand(db_session, hand.id) is True
        with pytest.raises(NotFoundError):
            await self.service.get_hand(db_session, hand.id)

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_db_session):
        mock_db_session.get.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.delete_hand(mock_db_session, uuid4())
        mock_db_session.delete.assert_not_awaited()
