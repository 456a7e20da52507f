"""
Session persistence.

A SessionStore loads and saves the whole Session as one flat key-value
snapshot (players, rounds, schema_version). Game operations receive a store
as an argument so the score engine never touches storage.

Two implementations:
- JsonFileSessionStore: a JSON file on disk, written atomically
- MemorySessionStore: a dict in memory, for tests and throwaway sessions
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from src.config import SESSION_FILE
from src.session.errors import SessionStoreError
from src.session.migrations import migrate_snapshot
from src.session.models import Session
from src.utils import atomic_write_text, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


class SessionStore(Protocol):
    """Protocol for persisting the game session."""

    def load(self) -> Session: ...

    def save(self, session: Session) -> None: ...

    def clear(self) -> None: ...


def session_from_snapshot(snapshot: Any) -> Session:
    """
    Migrate a raw snapshot and build a Session from it.

    Raises:
        SessionStoreError: If the snapshot is not a mapping or is malformed
    """
    if not isinstance(snapshot, dict):
        raise SessionStoreError(f"Session snapshot must be an object, got {type(snapshot).__name__}")

    snapshot, migrated = migrate_snapshot(snapshot)
    try:
        session = Session.from_snapshot(snapshot)
    except (KeyError, TypeError, ValueError) as e:
        raise SessionStoreError(f"Malformed session snapshot: {e}") from e

    if migrated:
        logger.info("Loaded legacy session; upgraded form is written on next save")
    return session


class JsonFileSessionStore:
    """Keeps the session snapshot in a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else SESSION_FILE

    def load(self) -> Session:
        """
        Read the session from disk.

        A missing file is an empty session (no players, no rounds).
        """
        if not self.path.exists():
            logger.debug(f"No session file at {self.path}; starting empty")
            return Session()

        try:
            snapshot = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise SessionStoreError(f"Session file {self.path} is not valid JSON: {e}") from e

        session = session_from_snapshot(snapshot)
        logger.info(f"Loaded session: {session.num_players} players, {session.num_rounds} rounds")
        return session

    def save(self, session: Session) -> None:
        atomic_write_text(json.dumps(session.to_snapshot(), indent=2), self.path, suffix=".json")
        logger.info(f"Saved session: {session.num_players} players, {session.num_rounds} rounds")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Removed session file {self.path}")


class MemorySessionStore:
    """Keeps the session snapshot in memory."""

    def __init__(self, snapshot: Optional[Dict[str, Any]] = None) -> None:
        self.snapshot = copy.deepcopy(snapshot) if snapshot is not None else None
        self.save_count = 0

    def load(self) -> Session:
        if self.snapshot is None:
            return Session()
        return session_from_snapshot(copy.deepcopy(self.snapshot))

    def save(self, session: Session) -> None:
        self.snapshot = session.to_snapshot()
        self.save_count += 1

    def clear(self) -> None:
        self.snapshot = None
