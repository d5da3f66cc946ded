# src/catch_rl/__init__.py
from __future__ import annotations

from catch_rl.game import CatchGame, CatchGameConfig, CatchState, GameSpec, make_game, make_game_from_cfg
from catch_rl.game.core import Action, BoardIndexError, CatchError, CellState, IllegalActionError

__all__ = [
    "CatchGame",
    "CatchGameConfig",
    "CatchState",
    "GameSpec",
    "make_game",
    "make_game_from_cfg",
    "Action",
    "CellState",
    "CatchError",
    "IllegalActionError",
    "BoardIndexError",
]
