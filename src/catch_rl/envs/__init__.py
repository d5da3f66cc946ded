# src/catch_rl/envs/__init__.py
from __future__ import annotations

from catch_rl.envs.catch_env import CatchEnv, sample_chance_outcome

__all__ = ["CatchEnv", "sample_chance_outcome"]
