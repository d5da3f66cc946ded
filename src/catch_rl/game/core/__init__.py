# src/catch_rl/game/core/__init__.py
from __future__ import annotations

from catch_rl.game.core.api import ActionsAndProbs, Game, State
from catch_rl.game.core.constants import (
    CHANCE_PLAYER_ID,
    DEFAULT_COLUMNS,
    DEFAULT_ROWS,
    NUM_ACTIONS,
    TERMINAL_PLAYER_ID,
)
from catch_rl.game.core.errors import BoardIndexError, CatchError, IllegalActionError
from catch_rl.game.core.game import PLAYER_ID, CatchGame, CatchState
from catch_rl.game.core.types import Action, CellState

__all__ = [
    "ActionsAndProbs",
    "Game",
    "State",
    "CHANCE_PLAYER_ID",
    "TERMINAL_PLAYER_ID",
    "PLAYER_ID",
    "DEFAULT_ROWS",
    "DEFAULT_COLUMNS",
    "NUM_ACTIONS",
    "CatchError",
    "IllegalActionError",
    "BoardIndexError",
    "CatchGame",
    "CatchState",
    "Action",
    "CellState",
]
