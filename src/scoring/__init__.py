"""
Round Scoring

Modules:
- formulas: value factor, raw score and the zero-sum winner correction
- engine: round computation, totals and end-of-game detection
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name in ("value_factor", "raw_score"):
        from src.scoring import formulas
        return getattr(formulas, name)
    if name in ("compute_round", "total_scores", "find_game_winner", "is_game_over"):
        from src.scoring import engine
        return getattr(engine, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
