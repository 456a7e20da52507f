"""
Game operations.

Each operation takes the current Session plus a SessionStore, validates the
request, and persists the new state synchronously before returning it.
Rejected requests raise a ScoreboardError subclass and leave both the
session and the store untouched.

Usage:
    store = JsonFileSessionStore()
    session = start_new_game(store, ["Asha", "Bo", "Chen"])
    session = submit_round(store, session, values=[5, 0, 0], points=[0, 3, 2], winner=0)
"""

import numbers
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from src.config import MAX_POINT, MIN_POINT, MIN_VALUE
from src.scoring.engine import compute_round, preview_scores
from src.session.errors import RoundLimitError, ValidationError
from src.session.models import Session
from src.session.players import validate_player_names
from src.session.store import SessionStore
from src.utils import clamp, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


def start_new_game(store: SessionStore, names: Sequence[str],
                   expected_count: Optional[int] = None) -> Session:
    """
    Register players and start with no rounds.

    Raises:
        ValidationError: If the names fail setup validation
    """
    players = validate_player_names(names, expected_count)
    session = Session(players=players, rounds=[])
    store.save(session)
    logger.info(f"Started new game with {len(players)} players")
    return session


def is_whole_number(x) -> bool:
    """True for ints and integral floats (2.0); False for bools, 2.5, NaN."""
    if isinstance(x, bool):
        return False
    if isinstance(x, numbers.Integral):
        return True
    return isinstance(x, numbers.Real) and float(x).is_integer()


def validate_round_input(session: Session, values: Sequence[int], points: Sequence[int], winner: int) -> None:
    """
    Check the shape and ranges of a candidate round.

    The winner's point is not range-checked; it is always stored as 0.

    Raises:
        ValidationError: On any mismatch
    """
    n = session.num_players
    if n < 2:
        raise ValidationError("Start a game with at least two players first.")
    if len(values) != n or len(points) != n:
        raise ValidationError(f"Expected a value and a point for each of the {n} players.")
    if not is_whole_number(winner) or not 0 <= winner < n:
        raise ValidationError(f"Winner must be one of the {n} players.")

    if not all(is_whole_number(x) for x in [*values, *points]):
        raise ValidationError("Values and points must be whole numbers.")
    if any(v < MIN_VALUE for v in values):
        raise ValidationError(f"Values cannot be below {MIN_VALUE}.")
    for i, p in enumerate(points):
        if i != winner and not MIN_POINT <= p <= MAX_POINT:
            raise ValidationError(f"Points must be between {MIN_POINT} and {MAX_POINT}.")


def submit_round(store: SessionStore, session: Session, values: Sequence[int],
                 points: Sequence[int], winner: int) -> Session:
    """
    Score a new round, append it and persist the session.

    Raises:
        RoundLimitError: If every player has already had a round
        ValidationError: If the round inputs are malformed
    """
    if session.num_rounds >= session.num_players:
        logger.warning(f"Rejected round {session.num_rounds + 1}: limit of {session.num_players} reached")
        raise RoundLimitError("Number of rounds cannot exceed number of players.")

    validate_round_input(session, values, points, winner)

    new_round = compute_round(values, points, winner, session.num_players)
    updated = Session(players=list(session.players), rounds=[*session.rounds, new_round])
    store.save(updated)

    logger.info(
        f"Recorded round {updated.num_rounds}/{updated.num_players}: "
        f"winner={session.players[new_round.winner]}, TVF={new_round.total_value_factor:.0f}"
    )
    return updated


def replace_round(store: SessionStore, session: Session, index: int, values: Sequence[int],
                  points: Sequence[int], winner: int) -> Session:
    """
    Recompute the round at index from new inputs and persist the session.

    Raises:
        ValidationError: If index is not an existing round or inputs are malformed
    """
    if not 0 <= index < session.num_rounds:
        raise ValidationError(f"Round {index + 1} does not exist.")

    validate_round_input(session, values, points, winner)

    rounds = list(session.rounds)
    rounds[index] = compute_round(values, points, winner, session.num_players)
    updated = Session(players=list(session.players), rounds=rounds)
    store.save(updated)

    logger.info(f"Replaced round {index + 1}")
    return updated


def reset_rounds(store: SessionStore, session: Session) -> Session:
    """Clear every round but keep the players."""
    updated = Session(players=list(session.players), rounds=[])
    store.save(updated)
    logger.info(f"Reset game: cleared {session.num_rounds} rounds")
    return updated


def reset_session(store: SessionStore) -> Session:
    """Forget players and rounds; the next game starts from setup."""
    store.clear()
    logger.info("Cleared session; returning to setup")
    return Session()


@dataclass
class RoundDraft:
    """
    Transient state of the round entry form.

    Inputs are clamped as they are entered: values to >= 0 and points to
    [0, 10]. The current winner's point is pinned to 0.
    """

    num_players: int
    values: List[int] = field(default_factory=list)
    points: List[int] = field(default_factory=list)
    winner: int = 0

    def __post_init__(self):
        if not self.values:
            self.values = [0] * self.num_players
        if not self.points:
            self.points = [0] * self.num_players

    def set_value(self, index: int, value: int) -> None:
        self.values[index] = clamp(int(value), MIN_VALUE)

    def set_point(self, index: int, point: int) -> None:
        if index == self.winner:
            return
        self.points[index] = clamp(int(point), MIN_POINT, MAX_POINT)

    def set_winner(self, index: int) -> None:
        if not 0 <= index < self.num_players:
            raise ValidationError(f"Winner must be one of the {self.num_players} players.")
        self.winner = index
        self.points[index] = 0

    def preview(self):
        """Value factor and raw score per player (the "show details" view)."""
        return preview_scores(self.values, self.points, self.winner)

    def reset(self) -> None:
        self.values = [0] * self.num_players
        self.points = [0] * self.num_players
        self.winner = 0

    def submit(self, store: SessionStore, session: Session) -> Session:
        """Submit the draft as a new round, then clear it for the next entry."""
        updated = submit_round(store, session, self.values, self.points, self.winner)
        self.reset()
        return updated
