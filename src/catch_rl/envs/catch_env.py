# src/catch_rl/envs/catch_env.py
from __future__ import annotations

from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from catch_rl.game.core.game import CatchGame, CatchState
from catch_rl.game.core.types import Action


def sample_chance_outcome(state: CatchState, rng: np.random.Generator) -> int:
    """
    Draw one outcome from state.chance_outcomes() using the given generator.
    """
    outcomes = state.chance_outcomes()
    if not outcomes:
        raise RuntimeError("sample_chance_outcome() called outside a chance node")
    actions = np.asarray([a for a, _p in outcomes], dtype=np.int64)
    probs = np.asarray([p for _a, p in outcomes], dtype=np.float64)
    return int(rng.choice(actions, p=probs / probs.sum()))


class CatchEnv(gym.Env):
    """
    Gymnasium view of a Catch episode.

      - reset() resolves the chance node with self.np_random.
      - obs is the (rows, columns) float32 observation grid.
      - reward is 0.0 until the terminal step, then +1 (caught) or -1 (missed).
      - step() after termination raises; call reset() first.
    """

    metadata = {"render_modes": ["ansi"]}

    def __init__(self, *, game: Optional[CatchGame] = None, render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.game = game if game is not None else CatchGame()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode {render_mode!r}")
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.game.num_distinct_actions())
        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=self.game.observation_tensor_shape(),
            dtype=np.float32,
        )

        self._state: CatchState | None = None
        self._steps = 0
        self._episode_idx = 0

    @property
    def state(self) -> CatchState:
        if self._state is None:
            raise RuntimeError("state accessed before reset()")
        return self._state

    def _info(self) -> Dict[str, Any]:
        st = self.state
        info: Dict[str, Any] = {
            "episode_idx": int(self._episode_idx),
            "episode_step": int(self._steps),
            "ball_row": st.ball_row,
            "ball_col": st.ball_col,
            "paddle_col": int(st.paddle_col),
        }
        if st.is_terminal():
            info["caught"] = bool(st.returns()[0] > 0)
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self._steps = 0
        self._episode_idx += 1

        st = self.game.new_initial_state()
        st.apply_action(sample_chance_outcome(st, self.np_random))
        self._state = st
        return st.observation_tensor(), self._info()

    def step(self, action: Any):
        st = self._state
        if st is None:
            raise RuntimeError("step() called before reset()")
        if st.is_terminal():
            raise RuntimeError("step() called on a terminated episode; call reset()")

        st.apply_action(int(Action(int(action))))
        self._steps += 1

        terminated = st.is_terminal()
        reward = float(st.returns()[0]) if terminated else 0.0
        return st.observation_tensor(), reward, bool(terminated), False, self._info()

    def action_masks(self) -> np.ndarray:
        return self.state.legal_actions_mask().astype(bool)

    def render(self) -> Optional[str]:
        if self.render_mode != "ansi":
            return None
        return str(self.state)


__all__ = ["CatchEnv", "sample_chance_outcome"]
