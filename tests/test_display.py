"""
Tests for the scoreboard display table.
"""

import pytest

from src.config import EXPORT_TOTAL_LABEL
from src.display import build_display_table, format_cell, table_styles
from src.scoring.engine import compute_round
from src.session.models import Session

TOTAL_CSS_MARKER = "background-color: yellow"
WINNER_CSS_MARKER = "color: green"


@pytest.fixture
def session():
    return Session(
        players=["A", "B", "C"],
        rounds=[
            compute_round([5, 0, 0], [0, 0, 0], 0),
            compute_round([0, 1, 0], [2, 0, 3], 1),
        ],
    )


@pytest.fixture
def total_player_session():
    return Session(
        players=["Total", "B"],
        rounds=[compute_round([2, 0], [0, 4], 0)],
    )


class TestFormatCell:
    """Tests for format_cell function."""

    def test_score_only(self):
        assert format_cell(-19.6, 3, 2, False) == "-20"

    def test_details(self):
        assert format_cell(40, 5, 0, True) == "V: 20 · P: 0 · S: 40"


class TestBuildDisplayTable:
    """Tests for build_display_table function."""

    def test_rounds_layout(self, session):
        df, mask = build_display_table(session)
        assert list(df.columns) == ["A", "B", "C"]
        assert list(df.index) == ["1 (20)", "2 (2)", EXPORT_TOTAL_LABEL]
        assert list(df.iloc[0]) == ["40", "-20", "-20"]
        assert mask.iloc[0].tolist() == [True, False, False]
        assert mask.iloc[1].tolist() == [False, True, False]
        assert not mask.iloc[-1].any()

    def test_players_layout(self, session):
        df, mask = build_display_table(session, players_as_rows=True)
        assert list(df.index) == ["A", "B", "C"]
        assert list(df.columns) == ["Round 1", "Round 2", EXPORT_TOTAL_LABEL]
        assert mask.loc["B", "Round 2"]

    def test_player_named_total(self, total_player_session):
        df, _ = build_display_table(total_player_session, players_as_rows=True)
        assert list(df.index) == ["Total", "B"]
        assert list(df.columns) == ["Round 1", EXPORT_TOTAL_LABEL]

    def test_no_rounds(self):
        df, mask = build_display_table(Session(players=["A", "B"]))
        assert list(df.index) == [EXPORT_TOTAL_LABEL]
        assert list(df.iloc[0]) == ["0", "0"]
        assert not mask.to_numpy().any()


class TestTableStyles:
    """Tests for table_styles function."""

    def test_total_row_shaded(self, session):
        _, mask = build_display_table(session)
        styles = table_styles(mask)
        assert all(TOTAL_CSS_MARKER in s for s in styles.iloc[-1])
        assert not any(TOTAL_CSS_MARKER in s for s in styles.iloc[:-1].to_numpy().ravel())

    def test_winner_cells_highlighted(self, session):
        _, mask = build_display_table(session)
        styles = table_styles(mask)
        assert WINNER_CSS_MARKER in styles.iloc[0, 0]
        assert styles.iloc[0, 1] == ""

    def test_player_named_total_rounds_layout(self, total_player_session):
        _, mask = build_display_table(total_player_session)
        styles = table_styles(mask)

        # Only the Total row is shaded, not the player's column
        assert TOTAL_CSS_MARKER not in styles.iloc[0, 0]
        assert WINNER_CSS_MARKER in styles.iloc[0, 0]
        assert all(TOTAL_CSS_MARKER in s for s in styles.iloc[-1])

    def test_player_named_total_players_layout(self, total_player_session):
        _, mask = build_display_table(total_player_session, players_as_rows=True)
        styles = table_styles(mask, players_as_rows=True)

        # Only the Total column is shaded, not the player's row
        assert TOTAL_CSS_MARKER not in styles.iloc[0, 0]
        assert WINNER_CSS_MARKER in styles.iloc[0, 0]
        assert all(TOTAL_CSS_MARKER in s for s in styles.iloc[:, -1])
