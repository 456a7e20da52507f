"""
Shared utilities for the Pattebaazi Scoreboard.

This module provides common functions used across multiple modules
to avoid code duplication.
"""

import sys
from pathlib import Path

# Enable both `python src/utils.py` and `python -m src.utils` execution modes.
# This ensures src.config imports work regardless of how the script is invoked.
_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import logging
import math
import shutil
import tempfile

from src.config import INITIALS_LENGTH


# --- Logging Setup ---
def setup_logging(name: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.

    Args:
        name: Logger name (usually __name__ from the calling module)
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


# --- File Operations ---
def atomic_write_text(text: str, path: Path, suffix: str = ".tmp") -> None:
    """
    Write text to a file atomically using a temporary file.

    This prevents a half-written session or export if the write is interrupted.

    Args:
        text: Content to write
        path: Destination path
        suffix: Suffix for the temporary file
    """
    logger = setup_logging(__name__)

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # Write to temp file first
    try:
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            delete=False,
            suffix=suffix,
            dir=path.parent  # Same filesystem for atomic move
        ) as tmp:
            tmp.write(text)
            tmp_path = Path(tmp.name)

        # Atomic move (rename) to final destination
        shutil.move(str(tmp_path), str(path))
        logger.debug(f"Atomically wrote {len(text)} chars to {path}")

    except Exception:
        # Clean up temp file if it exists
        if 'tmp_path' in locals() and tmp_path.exists():
            tmp_path.unlink()
        raise


def atomic_write_csv(df, path: Path, **kwargs) -> None:
    """
    Write a DataFrame to CSV atomically.

    Args:
        df: pandas DataFrame to write
        path: Destination path for the CSV file
        **kwargs: Additional arguments to pass to df.to_csv()
    """
    atomic_write_text(df.to_csv(**kwargs), path, suffix='.csv')


# --- Display Helpers ---
def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def format_score(x: float) -> str:
    """Display form of a score (int() already folds -0.0 into 0)."""
    return str(round_half_away(x))


def get_initials(name: str, length: int = INITIALS_LENGTH) -> str:
    """Short upper-case label for narrow table headers."""
    return name.strip()[:length].upper()


def clamp(value: int, low: int, high: int | None = None) -> int:
    """Clamp value into [low, high]; high=None means unbounded above."""
    value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


__all__ = [
    # Logging
    'setup_logging',
    # File operations
    'atomic_write_text',
    'atomic_write_csv',
    # Display
    'round_half_away',
    'format_score',
    'get_initials',
    'clamp',
]
