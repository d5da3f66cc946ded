# src/catch_rl/game/config.py
from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import Field, field_validator, model_validator

from catch_rl.config.base import ConfigBase
from catch_rl.game.core.constants import DEFAULT_COLUMNS, DEFAULT_ROWS


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        v = int(value)
    except Exception as e:
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}") from e
    if isinstance(value, float) and float(value) != v:
        raise ValueError(f"{where} must be a whole number, got {value!r}")
    return v


class CatchGameConfig(ConfigBase):
    """
    Board geometry for Catch. Both dimensions must be strictly positive.
    """

    rows: int = Field(default=DEFAULT_ROWS, gt=0)
    columns: int = Field(default=DEFAULT_COLUMNS, gt=0)

    @field_validator("rows", "columns", mode="before")
    @classmethod
    def _dims_int(cls, v: object, info: Any) -> int:
        return _as_int(v, where=f"game.params.{info.field_name}")


class GameSpec(ConfigBase):
    """
    Registry-facing game spec:

      game:
        type: catch
        params: {rows: 10, columns: 5}
    """

    type: str = "catch"
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _type_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @model_validator(mode="before")
    @classmethod
    def _params_mapping(cls, data: object) -> object:
        if not isinstance(data, Mapping):
            return data
        params = data.get("params", None)
        if params is None:
            out = dict(data)
            out["params"] = {}
            return out
        if not isinstance(params, Mapping):
            raise TypeError(f"game.params must be a mapping, got {type(params)!r}")
        return data


__all__ = ["CatchGameConfig", "GameSpec"]
