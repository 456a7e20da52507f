"""
Scoreboard CSV Export

Renders the scoreboard as comma-separated text: a header row (Round plus
one column per player), one row per round with rounded scores, and a final
Total row. Rounding is for display only; stored scores stay unrounded.

Usage:
    python -m src.export
    OR
    from src.export import export_scoreboard_csv
"""

import sys
from pathlib import Path

# Enable both `python src/export.py` and `python -m src.export` execution.
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from typing import Optional, Sequence

import pandas as pd

from src.config import EXPORT_FILENAME, EXPORT_ROUND_LABEL, OUTPUT_FOLDER
from src.scoring.engine import score_table
from src.session.models import Round
from src.utils import atomic_write_csv, round_half_away, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def rounded_score_table(players: Sequence[str], rounds: Sequence[Round]) -> pd.DataFrame:
    """Scoreboard with every cell rounded to the nearest integer."""
    return score_table(players, rounds).map(round_half_away)


def export_scoreboard_csv(players: Sequence[str], rounds: Sequence[Round]) -> str:
    """
    Build the CSV text offered for download.

    Args:
        players: Player names (column headers)
        rounds: Recorded rounds in order

    Returns:
        CSV text with header, one row per round, and a Total row
    """
    df = rounded_score_table(players, rounds)
    return df.to_csv(index=True, index_label=EXPORT_ROUND_LABEL, lineterminator="\n")


def write_scoreboard_csv(players, rounds, path: Optional[Path] = None) -> Path:
    """Write the export to disk atomically and return its path."""
    target = path or OUTPUT_FOLDER / EXPORT_FILENAME
    df = rounded_score_table(players, rounds)
    atomic_write_csv(df, target, index=True, index_label=EXPORT_ROUND_LABEL, lineterminator="\n")
    logger.info(f"Exported {len(rounds)} rounds for {len(players)} players to {target}")
    return target


def main():
    """Export the persisted session to OUTPUT_FOLDER."""
    from src.session.store import JsonFileSessionStore

    session = JsonFileSessionStore().load()
    if not session.has_players:
        logger.error("No game in progress; nothing to export")
        sys.exit(1)

    return write_scoreboard_csv(session.players, session.rounds)


if __name__ == "__main__":
    main()
