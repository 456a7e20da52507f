"""Exceptions raised by session operations and stores."""

from typing import Sequence


class ScoreboardError(Exception):
    """Base exception for scoreboard errors"""
    pass


class ValidationError(ScoreboardError):
    """User-correctable input errors (names, counts, round shape)"""
    pass


class DuplicatePlayerError(ValidationError):
    """Raised when two player names match after trimming and case folding"""

    def __init__(self, message: str, indices: Sequence[int] = ()):
        super().__init__(message)
        self.indices = list(indices)


class RoundLimitError(ScoreboardError):
    """Raised when a round is submitted after every player has had one"""
    pass


class SessionStoreError(ScoreboardError):
    """Raised when a persisted snapshot cannot be read or migrated"""
    pass
