# src/catch_rl/game/core/encoding.py
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from catch_rl.game.core.constants import NUM_ACTIONS

if TYPE_CHECKING:
    from catch_rl.game.core.game import CatchState

"""
Fixed-size numeric encodings of a CatchState.

Both encoders are pure: they read the state and allocate a fresh float32 array.

observation:
  shape (rows, columns), row-major. 1.0 on the ball cell (once the chance node
  has resolved) and on the paddle cell of the last row. A caught ball shares
  the paddle cell, so that cell is still a single 1.0.

information state:
  shape (columns + 3 * rows,)
    [0, columns)                      one-hot of the ball's starting column
    [columns + 3*i, columns + 3*i+3)  one-hot of the action taken on move i
  Entries for moves not played yet stay zero.
"""


def observation_shape(*, rows: int, columns: int) -> tuple[int, int]:
    return int(rows), int(columns)


def information_state_shape(*, rows: int, columns: int) -> tuple[int]:
    return (int(columns) + NUM_ACTIONS * int(rows),)


def encode_observation(state: "CatchState") -> np.ndarray:
    rows, cols = state.game.num_rows, state.game.num_columns
    out = np.zeros(observation_shape(rows=rows, columns=cols), dtype=np.float32)
    if state.is_initialized:
        out[int(state.ball_row), int(state.ball_col)] = 1.0
    out[rows - 1, int(state.paddle_col)] = 1.0
    return out


def encode_information_state(state: "CatchState") -> np.ndarray:
    rows, cols = state.game.num_rows, state.game.num_columns
    out = np.zeros(information_state_shape(rows=rows, columns=cols), dtype=np.float32)
    if not state.is_initialized:
        return out

    out[int(state.ball_col)] = 1.0
    for i, a in enumerate(state.player_moves()):
        out[cols + i * NUM_ACTIONS + int(a)] = 1.0
    return out


__all__ = [
    "observation_shape",
    "information_state_shape",
    "encode_observation",
    "encode_information_state",
]
