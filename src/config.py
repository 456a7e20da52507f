"""
Central configuration for the Pattebaazi Scoreboard.

All shared constants and configuration values should be defined here
to avoid duplication and ensure consistency across modules.
"""

from pathlib import Path

# --- Project Paths ---
PROJECT_ROOT = Path(__file__).parent.parent
DATA_FOLDER = PROJECT_ROOT / "data"
OUTPUT_FOLDER = DATA_FOLDER / "exports"
SESSION_FILE = DATA_FOLDER / "session.json"

# --- App ---
APP_TITLE = "Pattebaazi"
INITIALS_LENGTH = 3  # Compact header label length (e.g. "ALI")

# --- Player Setup ---
MIN_PLAYERS = 2
MAX_PLAYERS = 10
DEFAULT_PLAYERS = MIN_PLAYERS

# --- Round Inputs ---
MIN_VALUE = 0  # Values are unbounded above
MIN_POINT = 0
MAX_POINT = 10

# --- Persisted Session ---
# Named entries of the flat key-value snapshot
PLAYERS_KEY = "players"
ROUNDS_KEY = "rounds"
SCHEMA_VERSION_KEY = "schema_version"

# Version 1 = snapshots written before derived scores were stored.
# Version 2 = every round carries scores and totalValueFactor.
LEGACY_SCHEMA_VERSION = 1
CURRENT_SCHEMA_VERSION = 2

# --- Export ---
EXPORT_FILENAME = "scoreboard.csv"
EXPORT_ROUND_LABEL = "Round"
EXPORT_TOTAL_LABEL = "Total"
