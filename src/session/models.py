"""
Session data model.

A session is the ordered player list plus the ordered rounds of one game.
Rounds are serialized with the field names of the persisted snapshot
(values, points, winner, scores, totalValueFactor).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from src.config import (
    CURRENT_SCHEMA_VERSION,
    PLAYERS_KEY,
    ROUNDS_KEY,
    SCHEMA_VERSION_KEY,
)


def check_round_record(data: Dict[str, Any], num_players: int) -> None:
    """
    Reject a persisted round that cannot belong to a game of num_players.

    Raises:
        ValueError: A per-player list of the wrong length or a winner
            outside [0, num_players)
    """
    for key in ("values", "points", "scores"):
        if key in data and data[key] is not None and len(data[key]) != num_players:
            raise ValueError(f"round {key} has {len(data[key])} entries, expected {num_players}")

    winner = data["winner"]
    if isinstance(winner, bool) or int(winner) != winner or not 0 <= winner < num_players:
        raise ValueError(f"round winner {winner!r} is not a player index below {num_players}")


@dataclass(frozen=True)
class Round:
    """One scoring event: raw inputs plus the derived zero-sum scores."""

    values: Tuple[int, ...]
    points: Tuple[int, ...]
    winner: int
    scores: Tuple[float, ...]
    total_value_factor: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "values": list(self.values),
            "points": list(self.points),
            "winner": self.winner,
            "scores": list(self.scores),
            "totalValueFactor": self.total_value_factor,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], num_players: Optional[int] = None) -> "Round":
        """
        Build a round from a current-schema record (scores present).

        When num_players is given the record is checked against it first.
        """
        if num_players is not None:
            check_round_record(data, num_players)
        return cls(
            values=tuple(int(v) for v in data["values"]),
            points=tuple(int(p) for p in data["points"]),
            winner=int(data["winner"]),
            scores=tuple(float(s) for s in data["scores"]),
            total_value_factor=float(data["totalValueFactor"]),
        )


@dataclass
class Session:
    """Players and rounds of the game in progress."""

    players: List[str] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_rounds(self) -> int:
        return len(self.rounds)

    @property
    def has_players(self) -> bool:
        return bool(self.players)

    def to_snapshot(self) -> Dict[str, Any]:
        """Flat key-value form written by a SessionStore."""
        return {
            SCHEMA_VERSION_KEY: CURRENT_SCHEMA_VERSION,
            PLAYERS_KEY: list(self.players),
            ROUNDS_KEY: [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any]) -> "Session":
        """
        Inverse of to_snapshot; expects an already migrated snapshot.

        Raises:
            ValueError: A round does not fit the player list
        """
        players = [str(p) for p in snapshot.get(PLAYERS_KEY, [])]
        return cls(
            players=players,
            rounds=[Round.from_dict(r, len(players)) for r in snapshot.get(ROUNDS_KEY, [])],
        )
