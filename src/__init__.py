"""
Pattebaazi Scoreboard - Core Package

This package contains the core modules for:
- Round score derivation (src.scoring)
- Game session state and persistence (src.session)
- Scoreboard CSV export (src.export)
- Scoreboard table layout and styling (src.display)
- Shared configuration and utilities
"""

from src.config import *
