"""
Round Score Engine

This module turns raw round inputs into zero-sum scores and aggregates
them across a game:
- compute_round: derive a Round record from values, points and winner
- preview_scores: per-player value factor and raw score for the entry form
- total_scores / cumulative_totals: running totals per player
- is_game_over / find_game_winner: end-of-game detection

Everything here is a pure function of its arguments; persistence lives in
src.session.

Usage:
    from src.scoring import compute_round, total_scores
"""

from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from src.config import EXPORT_ROUND_LABEL, EXPORT_TOTAL_LABEL
from src.scoring.formulas import (
    apply_winner_correction,
    raw_score,
    total_value_factor,
    value_factor,
)
from src.session.models import Round


def normalize_points(points, winner):
    """Copy of points with the winner's entry forced to 0."""
    adjusted = [int(p) for p in points]
    adjusted[winner] = 0
    return adjusted


def compute_round(values: Sequence[int], points: Sequence[int], winner: int,
                  num_players: Optional[int] = None) -> Round:
    """
    Derive the scores of one round.

    Args:
        values: Raw value per player (non-negative)
        points: Point per player; the winner's entry is ignored and stored as 0
        winner: Index of the round winner
        num_players: Player count used by the formula (default: len(values))

    Returns:
        Round whose scores sum to zero
    """
    if num_players is None:
        num_players = len(values)

    winner = int(winner)
    int_values = [int(v) for v in values]
    adjusted_points = normalize_points(points, winner)
    factors = [value_factor(v) for v in int_values]
    tvf = sum(factors)

    raw_scores = [
        raw_score(num_players, tvf, vf, adjusted_points[i])
        for i, vf in enumerate(factors)
    ]
    scores = apply_winner_correction(raw_scores, winner)

    return Round(
        values=tuple(int_values),
        points=tuple(adjusted_points),
        winner=winner,
        scores=tuple(scores),
        total_value_factor=tvf,
    )


def preview_scores(values, points, winner):
    """
    Per-player breakdown shown while a round is being entered.

    The score is the uncorrected raw score, so the winner's preview is not
    yet the balancing entry.
    """
    adjusted_points = normalize_points(points, winner)
    tvf = total_value_factor(values)
    n = len(values)
    return [
        {
            'value_factor': value_factor(v),
            'point': adjusted_points[i],
            'score': raw_score(n, tvf, value_factor(v), adjusted_points[i]),
        }
        for i, v in enumerate(values)
    ]


def total_scores(rounds: Sequence[Round], num_players: int) -> List[float]:
    """Sum of each player's scores across all rounds."""
    if not rounds:
        return [0.0] * num_players
    matrix = np.asarray([r.scores for r in rounds], dtype=float)
    return matrix.sum(axis=0).tolist()


def cumulative_totals(rounds: Sequence[Round], players: Sequence[str]) -> pd.DataFrame:
    """
    Running total of every player after each round.

    Returns:
        DataFrame indexed by round number (1-based), one column per player
    """
    df = pd.DataFrame(
        [list(r.scores) for r in rounds],
        columns=list(players),
        dtype=float,
    )
    df.index = pd.RangeIndex(1, len(df) + 1, name=EXPORT_ROUND_LABEL)
    return df.cumsum()


def is_game_over(num_players: int, num_rounds: int) -> bool:
    """A game ends once every player has won exactly one round."""
    return num_players > 0 and num_rounds == num_players


def find_game_winner(totals: Sequence[float]) -> Optional[int]:
    """
    Index of the player with the highest total.

    Ties go to the lowest index (np.argmax returns the first maximum).
    """
    if len(totals) == 0:
        return None
    return int(np.argmax(np.asarray(totals, dtype=float)))


def score_table(players: Sequence[str], rounds: Sequence[Round]) -> pd.DataFrame:
    """
    Unrounded scoreboard: one row per round plus a Total row.

    Row labels are "Round 1", "Round 2", ... and "Total"; columns are the
    player names in order. Transpose for the players-as-rows layout.
    """
    rows = [list(r.scores) for r in rounds]
    labels = [f"{EXPORT_ROUND_LABEL} {i + 1}" for i in range(len(rounds))]

    df = pd.DataFrame(rows, columns=list(players), index=labels, dtype=float)
    df.loc[EXPORT_TOTAL_LABEL] = total_scores(rounds, len(players))
    df.index.name = EXPORT_ROUND_LABEL
    return df
