"""
Player setup validation.

Names are trimmed before storage and compared case-insensitively for
uniqueness. The player count is clamped into [MIN_PLAYERS, MAX_PLAYERS]
rather than rejected.
"""

from collections import defaultdict
from typing import List, Optional, Sequence, Tuple

from src.config import MAX_PLAYERS, MIN_PLAYERS
from src.session.errors import DuplicatePlayerError, ValidationError
from src.utils import clamp


def clamp_player_count(requested: int) -> Tuple[int, Optional[str]]:
    """
    Clamp a requested player count into the allowed range.

    Returns:
        Tuple of (clamped count, user-facing message or None if in range)
    """
    count = clamp(requested, MIN_PLAYERS, MAX_PLAYERS)
    if requested > MAX_PLAYERS:
        return count, f"Maximum {MAX_PLAYERS} players allowed."
    if requested < MIN_PLAYERS:
        return count, f"Minimum {MIN_PLAYERS} players required."
    return count, None


def name_key(name: str) -> str:
    """Comparison key for player names."""
    return name.strip().casefold()


def find_duplicate_indices(names: Sequence[str]) -> List[int]:
    """
    Indices of every name that collides with another one.

    Blank names are ignored here; they are reported separately.
    """
    seen = defaultdict(list)
    for i, name in enumerate(names):
        key = name_key(name)
        if key:
            seen[key].append(i)
    return sorted(i for group in seen.values() if len(group) > 1 for i in group)


def validate_player_names(names: Sequence[str], expected_count: Optional[int] = None) -> List[str]:
    """
    Validate the names entered at setup.

    Args:
        names: Raw names as typed
        expected_count: Chosen player count; names must match it when given

    Returns:
        Trimmed names in entry order

    Raises:
        ValidationError: Wrong count or an empty name
        DuplicatePlayerError: Two names equal after trimming and case folding
    """
    if expected_count is not None and len(names) != expected_count:
        raise ValidationError("Please enter all player names.")

    if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
        raise ValidationError(f"Between {MIN_PLAYERS} and {MAX_PLAYERS} players are required.")

    trimmed = [name.strip() for name in names]
    if any(not name for name in trimmed):
        raise ValidationError("Player names cannot be empty.")

    duplicates = find_duplicate_indices(trimmed)
    if duplicates:
        dup_names = sorted({trimmed[i] for i in duplicates}, key=str.casefold)
        raise DuplicatePlayerError(
            f"Player names must be unique: {', '.join(dup_names)}",
            indices=duplicates,
        )

    return trimmed
