# src/catch_rl/game/core/errors.py
from __future__ import annotations


class CatchError(Exception):
    """Base class for game-level errors."""


class IllegalActionError(CatchError, ValueError):
    """An action was applied or undone where the protocol does not allow it."""


class BoardIndexError(CatchError, IndexError):
    """A cell query fell outside [0, rows) x [0, columns)."""


__all__ = ["CatchError", "IllegalActionError", "BoardIndexError"]
