# src/catch_rl/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from catch_rl.game.config import GameSpec


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    if isinstance(cfg, Mapping):
        return dict(cfg)
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_game_spec(path: Path) -> GameSpec:
    """
    Load a game spec from YAML. Accepts either a top-level `game:` section or
    the bare {type, params} mapping.
    """
    data = load_yaml(path)
    section = data.get("game", data)
    if not isinstance(section, Mapping):
        raise TypeError(f"config({path}).game must be a mapping, got {type(section)!r}")
    return GameSpec.model_validate(dict(section))


__all__ = ["to_plain_dict", "load_yaml", "load_game_spec"]
