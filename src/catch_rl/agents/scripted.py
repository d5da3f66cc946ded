# src/catch_rl/agents/scripted.py
from __future__ import annotations

from typing import Optional

import numpy as np

from catch_rl.game.core.game import CatchState
from catch_rl.game.core.types import Action


class RandomAgent:
    """Uniform over the legal player actions."""

    def __init__(self, *, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def act(self, state: CatchState) -> int:
        legal = state.legal_actions()
        if not legal or not state.is_player_node():
            raise RuntimeError("RandomAgent.act() requires a player node")
        return int(legal[int(self.rng.integers(len(legal)))])


class TrackingAgent:
    """
    Steers the paddle toward the ball's column.

    Catches every ball whose starting offset from the paddle is at most rows-1.
    """

    def act(self, state: CatchState) -> int:
        if not state.is_player_node():
            raise RuntimeError("TrackingAgent.act() requires a player node")
        target = int(state.ball_col)  # type: ignore[arg-type]
        if target < state.paddle_col:
            return int(Action.LEFT)
        if target > state.paddle_col:
            return int(Action.RIGHT)
        return int(Action.STAY)


AGENT_REGISTRY = {
    "random": RandomAgent,
    "tracking": TrackingAgent,
}


def make_agent(name: str, *, rng: Optional[np.random.Generator] = None):
    key = str(name).strip().lower()
    if key == "random":
        return RandomAgent(rng=rng)
    if key == "tracking":
        return TrackingAgent()
    raise ValueError(f"unknown agent {name!r}; known agents: {sorted(AGENT_REGISTRY)}")


__all__ = ["RandomAgent", "TrackingAgent", "AGENT_REGISTRY", "make_agent"]
