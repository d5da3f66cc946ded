# src/catch_rl/game/core/constants.py
from __future__ import annotations

# Board geometry defaults
DEFAULT_ROWS: int = 10
DEFAULT_COLUMNS: int = 5

NUM_PLAYERS: int = 1
NUM_ACTIONS: int = 3

# Pseudo-player ids (negative, never a seat index)
CHANCE_PLAYER_ID: int = -1
TERMINAL_PLAYER_ID: int = -4

MIN_UTILITY: float = -1.0
MAX_UTILITY: float = 1.0
