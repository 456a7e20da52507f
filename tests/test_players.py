"""
Tests for player setup validation.
"""

import pytest

from src.config import MAX_PLAYERS, MIN_PLAYERS
from src.session.errors import DuplicatePlayerError, ValidationError
from src.session.players import (
    clamp_player_count,
    find_duplicate_indices,
    validate_player_names,
)


class TestClampPlayerCount:
    """Tests for clamp_player_count function."""

    def test_in_range(self):
        assert clamp_player_count(4) == (4, None)

    def test_above_max_clamps_with_message(self):
        count, message = clamp_player_count(15)
        assert count == MAX_PLAYERS
        assert message == "Maximum 10 players allowed."

    def test_below_min_clamps_with_message(self):
        count, message = clamp_player_count(0)
        assert count == MIN_PLAYERS
        assert message is not None

    def test_bounds_are_valid(self):
        assert clamp_player_count(MIN_PLAYERS) == (MIN_PLAYERS, None)
        assert clamp_player_count(MAX_PLAYERS) == (MAX_PLAYERS, None)


class TestFindDuplicateIndices:
    """Tests for find_duplicate_indices function."""

    def test_no_duplicates(self):
        assert find_duplicate_indices(["A", "B", "C"]) == []

    def test_case_and_whitespace_insensitive(self):
        assert find_duplicate_indices(["Al", "al "]) == [0, 1]

    def test_marks_every_member_of_each_group(self):
        assert find_duplicate_indices(["x", "Y", "X", "z", " y"]) == [0, 1, 2, 4]

    def test_blank_names_not_duplicates(self):
        assert find_duplicate_indices(["", "  ", "A"]) == []


class TestValidatePlayerNames:
    """Tests for validate_player_names function."""

    def test_trims_names(self):
        assert validate_player_names(["  Asha ", "Bo"]) == ["Asha", "Bo"]

    def test_duplicate_rejected(self):
        with pytest.raises(DuplicatePlayerError) as exc_info:
            validate_player_names(["Al", "al "])
        assert exc_info.value.indices == [0, 1]

    def test_duplicate_is_validation_error(self):
        with pytest.raises(ValidationError):
            validate_player_names(["Bo", "BO"])

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_player_names(["Asha", "   "])

    def test_count_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="enter all player names"):
            validate_player_names(["Asha", "Bo"], expected_count=3)

    def test_too_few_players(self):
        with pytest.raises(ValidationError):
            validate_player_names(["Solo"])

    def test_too_many_players(self):
        with pytest.raises(ValidationError):
            validate_player_names([f"P{i}" for i in range(MAX_PLAYERS + 1)])
