"""
Schema migrations for persisted session snapshots.

Every snapshot carries a schema_version entry. Snapshots written before the
version tag existed are treated as LEGACY_SCHEMA_VERSION. Each migration
upgrades a raw snapshot dict by exactly one version; migrate_snapshot()
chains them up to CURRENT_SCHEMA_VERSION.

Migrations only change the in-memory snapshot. The upgraded form reaches
disk the next time the session is saved.
"""

from typing import Any, Callable, Dict, Tuple

from src.config import (
    CURRENT_SCHEMA_VERSION,
    LEGACY_SCHEMA_VERSION,
    PLAYERS_KEY,
    ROUNDS_KEY,
    SCHEMA_VERSION_KEY,
)
from src.scoring.engine import compute_round
from src.scoring.formulas import total_value_factor
from src.session.errors import SessionStoreError
from src.session.models import check_round_record
from src.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

Snapshot = Dict[str, Any]


def detect_version(snapshot: Snapshot) -> int:
    """Schema version of a raw snapshot (untagged means legacy)."""
    return int(snapshot.get(SCHEMA_VERSION_KEY, LEGACY_SCHEMA_VERSION))


def normalize_legacy_round(record: Dict[str, Any], num_players: int) -> Dict[str, Any]:
    """
    Fill in derived fields of a round stored before scores were persisted.

    Rounds without scores are recomputed from values/points/winner with the
    same formula as a freshly submitted round. Rounds that already have
    scores keep them; only a missing totalValueFactor is filled in.
    """
    try:
        check_round_record(record, num_players)
    except ValueError as e:
        raise SessionStoreError(f"Invalid legacy round: {e}") from e

    if record.get("scores") is None:
        fresh = compute_round(record["values"], record["points"], int(record["winner"]), num_players)
        return {**record, **fresh.to_dict()}

    if record.get("totalValueFactor") is None:
        return {**record, "totalValueFactor": total_value_factor(record["values"])}

    return record


def _migrate_v1_to_v2(snapshot: Snapshot) -> Snapshot:
    players = snapshot.get(PLAYERS_KEY, [])
    rounds = snapshot.get(ROUNDS_KEY, [])

    normalized = []
    recomputed = 0
    for record in rounds:
        num_players = len(players) or len(record["values"])
        if record.get("scores") is None:
            recomputed += 1
        normalized.append(normalize_legacy_round(record, num_players))

    if recomputed:
        logger.info(f"Recomputed scores for {recomputed} legacy round(s)")

    return {
        **snapshot,
        SCHEMA_VERSION_KEY: LEGACY_SCHEMA_VERSION + 1,
        PLAYERS_KEY: players,
        ROUNDS_KEY: normalized,
    }


# Maps a source version to the function that upgrades it by one version
MIGRATIONS: Dict[int, Callable[[Snapshot], Snapshot]] = {
    1: _migrate_v1_to_v2,
}


def migrate_snapshot(snapshot: Snapshot) -> Tuple[Snapshot, bool]:
    """
    Upgrade a raw snapshot to the current schema version.

    Args:
        snapshot: Raw key-value snapshot as read from storage

    Returns:
        Tuple of (migrated snapshot, whether any migration ran)

    Raises:
        SessionStoreError: Unknown version or a malformed round record
    """
    try:
        version = detect_version(snapshot)
    except (TypeError, ValueError) as e:
        raise SessionStoreError(f"Invalid schema version: {snapshot.get(SCHEMA_VERSION_KEY)!r}") from e

    if version > CURRENT_SCHEMA_VERSION:
        raise SessionStoreError(
            f"Session was saved by a newer version (schema {version}, "
            f"supported up to {CURRENT_SCHEMA_VERSION})"
        )

    migrated = False
    while version < CURRENT_SCHEMA_VERSION:
        migration = MIGRATIONS.get(version)
        if migration is None:
            raise SessionStoreError(f"No migration available from schema version {version}")
        logger.info(f"Migrating session snapshot from schema {version} to {version + 1}")
        try:
            snapshot = migration(snapshot)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise SessionStoreError(f"Malformed round record in schema {version} snapshot: {e}") from e
        version += 1
        migrated = True

    return snapshot, migrated
