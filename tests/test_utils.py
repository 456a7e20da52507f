"""
Tests for shared utilities.
"""

import pytest

from src.utils import atomic_write_text, clamp, format_score, get_initials, round_half_away


class TestRoundHalfAway:
    """Tests for round_half_away function."""

    def test_halves_round_away_from_zero(self):
        assert round_half_away(2.5) == 3
        assert round_half_away(-2.5) == -3
        assert round_half_away(0.5) == 1

    def test_nearest(self):
        assert round_half_away(2.49) == 2
        assert round_half_away(-7.6) == -8


class TestFormatScore:
    """Tests for format_score function."""

    def test_negative_zero(self):
        assert format_score(-0.0) == "0"
        assert format_score(-0.2) == "0"

    def test_integer_text(self):
        assert format_score(40.0) == "40"


class TestGetInitials:
    """Tests for get_initials function."""

    def test_first_three_upper(self):
        assert get_initials("  alice ") == "ALI"

    def test_short_name(self):
        assert get_initials("Bo") == "BO"


class TestClamp:
    """Tests for clamp function."""

    def test_lower_only(self):
        assert clamp(-3, 0) == 0
        assert clamp(999, 0) == 999

    def test_range(self):
        assert clamp(12, 0, 10) == 10
        assert clamp(5, 0, 10) == 5


class TestAtomicWriteText:
    """Tests for atomic_write_text function."""

    def test_overwrites_and_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "out.txt"
        atomic_write_text("first", path)
        atomic_write_text("second", path)
        assert path.read_text(encoding="utf-8") == "second"
        assert list(tmp_path.iterdir()) == [path]
