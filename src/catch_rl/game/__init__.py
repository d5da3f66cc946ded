# src/catch_rl/game/__init__.py
from __future__ import annotations

from catch_rl.game.config import CatchGameConfig, GameSpec
from catch_rl.game.core import CatchGame, CatchState
from catch_rl.game.factory import make_game, make_game_from_cfg, make_game_from_spec

__all__ = [
    "CatchGameConfig",
    "GameSpec",
    "CatchGame",
    "CatchState",
    "make_game",
    "make_game_from_cfg",
    "make_game_from_spec",
]
