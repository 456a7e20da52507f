"""
Game Session

Modules:
- models: Round and Session records
- errors: exceptions reported to the user
- players: player setup validation
- game: round submission, replacement and resets
- migrations: schema upgrades for persisted snapshots
- store: SessionStore implementations (JSON file, in-memory)
"""


def __getattr__(name):
    """Lazy imports to avoid circular imports with src.scoring."""
    if name in ("Round", "Session"):
        from src.session import models
        return getattr(models, name)
    if name in ("JsonFileSessionStore", "MemorySessionStore"):
        from src.session import store
        return getattr(store, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
