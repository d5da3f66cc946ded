# src/catch_rl/game/catalog.py
from __future__ import annotations

from typing import Any, Mapping

from catch_rl.game.config import CatchGameConfig
from catch_rl.game.core.game import CatchGame

# - imports + plain dicts only
# - no functions/classes
# - easy to add new entries

GAME_REGISTRY: Mapping[str, Any] = {
    "catch": CatchGame,
}

GAME_PARAMS_REGISTRY: Mapping[str, Any] = {
    "catch": CatchGameConfig,
}
