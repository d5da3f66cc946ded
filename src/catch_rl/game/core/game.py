# src/catch_rl/game/core/game.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from catch_rl.game.core.api import ActionsAndProbs, Game, State
from catch_rl.game.core.constants import (
    CHANCE_PLAYER_ID,
    DEFAULT_COLUMNS,
    DEFAULT_ROWS,
    MAX_UTILITY,
    MIN_UTILITY,
    NUM_ACTIONS,
    NUM_PLAYERS,
    TERMINAL_PLAYER_ID,
)
from catch_rl.game.core.encoding import (
    encode_information_state,
    encode_observation,
    information_state_shape,
    observation_shape,
)
from catch_rl.game.core.errors import BoardIndexError, IllegalActionError
from catch_rl.game.core.render import render_board
from catch_rl.game.core.types import Action, CellState

logger = logging.getLogger(__name__)

PLAYER_ID: int = 0


def _positive_int(value: object, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got bool")
    try:
        v = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an int-like value, got {type(value)!r}") from e
    if isinstance(value, float) and float(value) != v:
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    if v <= 0:
        raise ValueError(f"{name} must be positive, got {v}")
    return v


class CatchGame(Game):
    """
    Catch board geometry and game constants.

    A ball is dropped in a column chosen by chance and falls one row per player
    move. The single player steers a paddle on the last row (LEFT/STAY/RIGHT)
    and scores +1 when the ball lands on it, -1 otherwise.

    The game is immutable; new_initial_state() hands out independent states.
    """

    def __init__(self, *, rows: int = DEFAULT_ROWS, columns: int = DEFAULT_COLUMNS) -> None:
        self._rows = _positive_int(rows, name="rows")
        self._columns = _positive_int(columns, name="columns")

    @classmethod
    def from_config(cls, cfg: Any) -> "CatchGame":
        return cls(rows=int(cfg.rows), columns=int(cfg.columns))

    @property
    def num_rows(self) -> int:
        return self._rows

    @property
    def num_columns(self) -> int:
        return self._columns

    def new_initial_state(self) -> "CatchState":
        return CatchState(self)

    def num_distinct_actions(self) -> int:
        return NUM_ACTIONS

    def max_chance_outcomes(self) -> int:
        return self._columns

    def num_players(self) -> int:
        return NUM_PLAYERS

    def min_utility(self) -> float:
        return MIN_UTILITY

    def max_utility(self) -> float:
        return MAX_UTILITY

    def max_game_length(self) -> int:
        return self._rows

    def observation_tensor_shape(self) -> Tuple[int, int]:
        return observation_shape(rows=self._rows, columns=self._columns)

    def information_state_tensor_shape(self) -> Tuple[int]:
        return information_state_shape(rows=self._rows, columns=self._columns)

    def params(self) -> Dict[str, int]:
        return {"rows": self._rows, "columns": self._columns}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CatchGame):
            return NotImplemented
        return self.params() == other.params()

    def __hash__(self) -> int:
        return hash(("catch", self._rows, self._columns))

    def __repr__(self) -> str:
        return f"CatchGame(rows={self._rows}, columns={self._columns})"


class CatchState(State):
    """
    One Catch episode.

    Lifecycle:
      - constructed uninitialized: chance node, ball unset, paddle centred
      - chance action c: ball placed at (0, c)
      - each player action: paddle moves by action-1 (clamped), ball drops one row
      - terminal once the ball reaches the last row

    undo_action() derives the inverse from the action alone. When the paddle
    sits on the edge the undone action pushes toward, the move may or may not
    have been clamped; the unclamped inverse is assumed and a warning is logged.
    """

    def __init__(self, game: CatchGame) -> None:
        super().__init__(game)
        self._initialized = False
        self._ball_row: Optional[int] = None
        self._ball_col: Optional[int] = None
        self._paddle_col = game.num_columns // 2

    # ---- fields --------------------------------------------------------------

    @property
    def game(self) -> CatchGame:
        return self._game  # type: ignore[return-value]

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def ball_row(self) -> Optional[int]:
        return self._ball_row

    @property
    def ball_col(self) -> Optional[int]:
        return self._ball_col

    @property
    def paddle_col(self) -> int:
        return self._paddle_col

    def player_moves(self) -> List[int]:
        return [a for p, a in self._history if p == PLAYER_ID]

    # ---- protocol ------------------------------------------------------------

    def current_player(self) -> int:
        if not self._initialized:
            return CHANCE_PLAYER_ID
        if self.is_terminal():
            return TERMINAL_PLAYER_ID
        return PLAYER_ID

    def is_terminal(self) -> bool:
        return self._initialized and int(self._ball_row) >= self.game.num_rows - 1  # type: ignore[arg-type]

    def legal_actions(self) -> List[int]:
        if self.is_terminal():
            return []
        if not self._initialized:
            return list(range(self.game.num_columns))
        return [int(a) for a in Action]

    def chance_outcomes(self) -> ActionsAndProbs:
        if self._initialized:
            return []
        n = self.game.num_columns
        p = 1.0 / n
        return [(c, p) for c in range(n)]

    def returns(self) -> List[float]:
        if not self.is_terminal():
            return [0.0]
        return [MAX_UTILITY if self._paddle_col == self._ball_col else MIN_UTILITY]

    def apply_action(self, action: int) -> None:
        # Action ids overlap column indices; only the typed enum is recognisably a player move.
        if isinstance(action, Action) and not self._initialized:
            raise IllegalActionError(
                f"player action {action.name} applied before the ball was placed (chance node pending)"
            )
        super().apply_action(action)

    def _do_apply_action(self, action: int) -> None:
        if not self._initialized:
            self._initialized = True
            self._ball_row = 0
            self._ball_col = int(action)
            return

        cols = self.game.num_columns
        self._paddle_col = min(max(self._paddle_col + Action(action).delta, 0), cols - 1)
        self._ball_row = int(self._ball_row) + 1  # type: ignore[arg-type]

    def undo_action(self, player: int, action: int) -> None:
        p, a = int(player), int(action)
        self._pop_history(p, a)

        if p == CHANCE_PLAYER_ID:
            self._initialized = False
            self._ball_row = None
            self._ball_col = None
            return

        delta = Action(a).delta
        cur = self._paddle_col
        prev = cur - delta
        cols = self.game.num_columns
        if prev < 0 or prev > cols - 1:
            # only a clamped move could have produced this position
            prev = cur
        elif delta != 0 and cur == (0 if delta < 0 else cols - 1):
            logger.warning(
                "undo of %s at paddle column %d is ambiguous (move may have been clamped); assuming column %d",
                Action(a).name,
                cur,
                prev,
            )

        self._paddle_col = prev
        self._ball_row = int(self._ball_row) - 1  # type: ignore[arg-type]

    def clone(self) -> "CatchState":
        out = CatchState(self.game)
        out._initialized = self._initialized
        out._ball_row = self._ball_row
        out._ball_col = self._ball_col
        out._paddle_col = self._paddle_col
        out._copy_history_from(self)
        return out

    # ---- board / strings -----------------------------------------------------

    def board_at(self, row: int, column: int) -> CellState:
        r, c = int(row), int(column)
        rows, cols = self.game.num_rows, self.game.num_columns
        if not (0 <= r < rows and 0 <= c < cols):
            raise BoardIndexError(f"cell ({r}, {c}) outside board {rows}x{cols}")
        if self._initialized and r == self._ball_row and c == self._ball_col:
            return CellState.BALL
        if r == rows - 1 and c == self._paddle_col:
            return CellState.PADDLE
        return CellState.EMPTY

    def action_to_string(self, player: int, action: int) -> str:
        a = int(action)
        if int(player) == CHANCE_PLAYER_ID:
            if not (0 <= a < self.game.num_columns):
                raise IllegalActionError(f"chance outcome {a} outside [0, {self.game.num_columns})")
            return f"Initialized ball to {a}"
        try:
            return Action(a).name
        except ValueError as e:
            raise IllegalActionError(f"unknown action id {a}") from e

    def observation_string(self, player: int = PLAYER_ID) -> str:
        self._check_player(player)
        return render_board(self)

    def information_state_string(self, player: int = PLAYER_ID) -> str:
        self._check_player(player)
        return self.history_str()

    def observation_tensor(self, player: int = PLAYER_ID) -> np.ndarray:
        self._check_player(player)
        return encode_observation(self)

    def information_state_tensor(self, player: int = PLAYER_ID) -> np.ndarray:
        self._check_player(player)
        return encode_information_state(self)

    def _check_player(self, player: int) -> None:
        if int(player) != PLAYER_ID:
            raise IllegalActionError(f"player {player} has no view of this game (single player id={PLAYER_ID})")

    # ---- serialization -------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "initialized": bool(self._initialized),
            "ball_row": self._ball_row,
            "ball_col": self._ball_col,
            "paddle_col": int(self._paddle_col),
            "moves": self.player_moves(),
        }

    @classmethod
    def from_dict(cls, game: CatchGame, data: Mapping[str, Any]) -> "CatchState":
        st = cls(game)
        initialized = bool(data["initialized"])
        moves = [int(m) for m in data.get("moves", [])]
        paddle = int(data["paddle_col"])
        if not (0 <= paddle < game.num_columns):
            raise ValueError(f"paddle_col {paddle} outside [0, {game.num_columns})")

        if not initialized:
            if data.get("ball_row") is not None or data.get("ball_col") is not None or moves:
                raise ValueError("uninitialized state must not carry ball position or moves")
            st._paddle_col = paddle
            return st

        if data.get("ball_row") is None or data.get("ball_col") is None:
            raise ValueError("initialized state requires ball_row and ball_col")
        br, bc = int(data["ball_row"]), int(data["ball_col"])
        if not (0 <= br < game.num_rows and 0 <= bc < game.num_columns):
            raise ValueError(f"ball ({br}, {bc}) outside board {game.num_rows}x{game.num_columns}")
        if len(moves) != br:
            raise ValueError(f"ball_row={br} requires {br} moves, got {len(moves)}")
        for m in moves:
            Action(m)

        st._initialized = True
        st._ball_row = br
        st._ball_col = bc
        st._paddle_col = paddle
        st._history = [(CHANCE_PLAYER_ID, bc)] + [(PLAYER_ID, m) for m in moves]
        return st

    def __str__(self) -> str:
        return render_board(self)

    def __repr__(self) -> str:
        return (
            f"CatchState(initialized={self._initialized}, ball_row={self._ball_row}, "
            f"ball_col={self._ball_col}, paddle_col={self._paddle_col})"
        )


__all__ = ["CatchGame", "CatchState", "PLAYER_ID"]
