# src/catch_rl/game/core/types.py
from __future__ import annotations

from enum import Enum, IntEnum


class Action(IntEnum):
    """
    Player actions. The integer value minus one is the paddle delta.
    """

    LEFT = 0
    STAY = 1
    RIGHT = 2

    @property
    def delta(self) -> int:
        return int(self.value) - 1


class CellState(Enum):
    EMPTY = "."
    BALL = "o"
    PADDLE = "x"


__all__ = ["Action", "CellState"]
