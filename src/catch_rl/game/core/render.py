# src/catch_rl/game/core/render.py
from __future__ import annotations

from typing import TYPE_CHECKING

from catch_rl.game.core.types import CellState

if TYPE_CHECKING:
    from catch_rl.game.core.game import CatchState

CAUGHT_CHAR = "@"


def render_board(state: "CatchState") -> str:
    """
    Text board, one line per row, top row first.

      .  empty
      o  ball
      x  paddle
      @  ball on the paddle cell
    """
    rows, cols = state.game.num_rows, state.game.num_columns
    last = rows - 1
    lines: list[str] = []
    for r in range(rows):
        chars: list[str] = []
        for c in range(cols):
            cell = state.board_at(r, c)
            if cell is CellState.BALL and r == last and c == state.paddle_col:
                chars.append(CAUGHT_CHAR)
            else:
                chars.append(cell.value)
        lines.append("".join(chars))
    return "\n".join(lines)


__all__ = ["render_board", "CAUGHT_CHAR"]
