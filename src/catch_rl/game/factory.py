# src/catch_rl/game/factory.py
from __future__ import annotations

import logging
from typing import Any, Mapping

from catch_rl.game.catalog import GAME_PARAMS_REGISTRY, GAME_REGISTRY
from catch_rl.game.config import GameSpec
from catch_rl.game.core.api import Game

logger = logging.getLogger(__name__)


def _lookup(name: str) -> tuple[Any, Any]:
    key = str(name).strip().lower()
    try:
        return GAME_REGISTRY[key], GAME_PARAMS_REGISTRY[key]
    except KeyError as e:
        raise KeyError(f"unknown game {name!r}; known games: {sorted(GAME_REGISTRY)}") from e


def make_game(name: str, **params: Any) -> Game:
    """
    Build a registered game by name. params are validated against the game's
    params model before the constructor runs.
    """
    game_cls, params_cls = _lookup(name)
    cfg = params_cls.model_validate(dict(params))
    game = game_cls.from_config(cfg)
    logger.debug("built game %r", game)
    return game


def make_game_from_spec(spec: GameSpec) -> Game:
    return make_game(spec.type, **dict(spec.params))


def make_game_from_cfg(cfg: Mapping[str, Any]) -> Game:
    """
    Accepts either a full config with a `game:` section or the bare
    {type, params} mapping. A missing section builds the default game.
    """
    if not isinstance(cfg, Mapping):
        raise TypeError(f"cfg must be a mapping, got {type(cfg)!r}")

    section = cfg.get("game", cfg)
    if section is None:
        section = {}
    if not isinstance(section, Mapping):
        raise TypeError(f"cfg.game must be a mapping, got {type(section)!r}")

    return make_game_from_spec(GameSpec.model_validate(dict(section)))


__all__ = ["make_game", "make_game_from_spec", "make_game_from_cfg"]
