"""
Tests for the per-entity validation functions.
"""

from datetime import datetime, timezone

import pytest

from pokerstudy.exceptions import ValidationError
from pokerstudy.validation import (
    archived_at_for_status,
    clean_learning_notes,
    clean_linked_hand_ids,
    validate_claimed_user,
    validate_edge,
    validate_hand_to_review,
    validate_leak,
    validate_mental_game_entry,
    validate_player,
    validate_reviewer,
    validate_stakes,
)

NOW = datetime(2026, 1, 15, 20, 0, tzinfo=timezone.utc)


class TestClaimedUser:

    def test_trims_name(self):
        fields = validate_claimed_user("  Alice ", "$2b$10$hash")
        assert fields == {"name": "Alice", "password_hash": "$2b$10$hash", "improvement_notes": ""}

    def test_blank_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_claimed_user("   ", "$2b$10$hash")
        assert exc_info.value.field == "name"

    def test_missing_hash(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_claimed_user("Alice", "")
        assert exc_info.value.field == "password_hash"


class TestMentalGameEntry:

    def test_valid_entry(self):
        fields = validate_mental_game_entry("alice", NOW, 4, "felt sharp", tilt_affected=True)
        assert fields["state_rating"] == 4
        assert fields["tilt_affected"] is True
        assert fields["fatigue_affected"] is False

    @pytest.mark.parametrize("rating", [0, 6, -1, 10])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError, match="stateRating must be 1-5"):
            validate_mental_game_entry("alice", NOW, rating)

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_inclusive(self, rating):
        assert validate_mental_game_entry("alice", NOW, rating)["state_rating"] == rating

    def test_bool_is_not_a_rating(self):
        with pytest.raises(ValidationError):
            validate_mental_game_entry("alice", NOW, True)

    def test_observation_limit(self):
        assert len(validate_mental_game_entry("alice", NOW, 3, "x" * 280)["observation"]) == 280
        with pytest.raises(ValidationError) as exc_info:
            validate_mental_game_entry("alice", NOW, 3, "x" * 281)
        assert exc_info.value.field == "observation"

    def test_user_required(self):
        with pytest.raises(ValidationError, match="userId required"):
            validate_mental_game_entry("  ", NOW, 3)

    def test_flags_only_true_when_literally_true(self):
        fields = validate_mental_game_entry("alice", NOW, 3, confidence_affected="yes")
        assert fields["confidence_affected"] is False


class TestReviewer:

    def test_trims(self):
        assert validate_reviewer(" Bob ") == {"name": "Bob"}

    def test_blank(self):
        with pytest.raises(ValidationError):
            validate_reviewer("")


class TestPlayer:

    def test_valid(self):
        fields = validate_player("fish99", "Whale", [25, 100], "limps a lot")
        assert fields["stakes_seen_at"] == [25, 100]
        assert fields["player_type"] == "Whale"

    def test_unknown_type(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_player("fish99", "Donkey")
        assert exc_info.value.field == "player_type"

    def test_bad_stake(self):
        with pytest.raises(ValidationError, match="Invalid stake value"):
            validate_stakes([25, 75])

    def test_missing_username(self):
        with pytest.raises(ValidationError):
            validate_player("", "Unknown")


class TestHandToReview:

    def test_trims_fields(self):
        fields = validate_hand_to_review(" Big pot ", " hero opens AK ", "open", " bob ")
        assert fields == {
            "title": "Big pot",
            "hand_text": "hero opens AK",
            "status": "open",
            "created_by": "bob",
        }

    def test_blank_hand_text(self):
        with pytest.raises(ValidationError, match="Hand text is required"):
            validate_hand_to_review("t", "  ", "open", "bob")

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_hand_to_review("t", "text", "deleted", "bob")
        assert exc_info.value.field == "status"


class TestArchivedAt:

    def test_archived_keeps_given_time(self):
        assert archived_at_for_status("archived", NOW) == NOW

    def test_archived_without_time_gets_now(self):
        assert archived_at_for_status("archived", None) is not None

    def test_open_never_has_one(self):
        assert archived_at_for_status("open", NOW) is None


class TestLeak:

    def test_valid(self):
        fields = validate_leak(" alice ", " Overcalling ", "cbet", "identified")
        assert fields == {
            "user_id": "alice",
            "title": "Overcalling",
            "category": "cbet",
            "status": "identified",
            "review_stage": 0,
        }

    def test_edge_category_is_not_a_leak_category(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_leak("alice", "t", "live-read", "identified")
        assert exc_info.value.field == "category"

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_leak("alice", "t", "other", "active")
        assert exc_info.value.field == "status"

    @pytest.mark.parametrize("stage", [-1, 4, True, "1"])
    def test_review_stage_bounds(self, stage):
        with pytest.raises(ValidationError):
            validate_leak("alice", "t", "other", "resolved", review_stage=stage)


class TestEdge:

    def test_valid(self):
        assert validate_edge("alice", "t", "live-read", "active")["status"] == "active"

    def test_user_required(self):
        with pytest.raises(ValidationError, match="userId required"):
            validate_edge("", "t", "other", "developing")


class TestLearningCleaners:

    def test_linked_hand_ids_keep_non_blank_strings(self):
        assert clean_linked_hand_ids(["a", "", " ", 3, None, "b"]) == ["a", "b"]
        assert clean_linked_hand_ids(None) == []

    def test_notes_trimmed_and_completed(self):
        notes = clean_learning_notes([{"content": "  x  "}, {"id": "n2", "content": None, "created_at": NOW}])
        assert notes[0]["content"] == "x"
        assert notes[0]["id"]
        assert notes[0]["created_at"]
        assert notes[1] == {"id": "n2", "content": "", "created_at": NOW.isoformat()}
