# src/catch_rl/apps/rollout/entrypoint.py
from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import numpy as np

from catch_rl.agents.scripted import make_agent
from catch_rl.config.io import load_game_spec
from catch_rl.envs.catch_env import sample_chance_outcome
from catch_rl.game.core.constants import DEFAULT_COLUMNS, DEFAULT_ROWS
from catch_rl.game.core.game import CatchGame
from catch_rl.game.factory import make_game, make_game_from_spec
from catch_rl.utils.logging import setup_logger
from catch_rl.utils.seed import seed32_from


@dataclass(frozen=True)
class RolloutStats:
    episodes: int
    steps: int
    caught: int
    return_sum: float
    elapsed_s: float

    @property
    def mean_return(self) -> float:
        return self.return_sum / self.episodes if self.episodes > 0 else 0.0

    @property
    def catch_rate(self) -> float:
        return self.caught / self.episodes if self.episodes > 0 else 0.0

    @property
    def steps_per_s(self) -> float:
        return self.steps / max(self.elapsed_s, 1e-12)


def build_game(args: argparse.Namespace) -> CatchGame:
    if args.config is not None:
        game = make_game_from_spec(load_game_spec(Path(args.config)))
    else:
        game = make_game("catch", rows=args.rows, columns=args.columns)
    if not isinstance(game, CatchGame):
        raise TypeError(f"rollout drives Catch games only, got {type(game).__name__}")
    return game


def run_rollouts(
    *,
    game: CatchGame,
    agent_name: str,
    episodes: int,
    seed: int,
    render: bool = False,
    stats_every: int = 0,
    logger: Optional[Any] = None,
) -> RolloutStats:
    steps = 0
    caught = 0
    return_sum = 0.0

    t0 = time.perf_counter()
    for ep in range(int(episodes)):
        rng = np.random.default_rng(seed32_from(base_seed=seed, stream_id=ep))
        agent = make_agent(agent_name, rng=rng)

        st = game.new_initial_state()
        st.apply_action(sample_chance_outcome(st, rng))
        while not st.is_terminal():
            st.apply_action(agent.act(st))
            steps += 1

        ret = float(st.returns()[0])
        return_sum += ret
        if ret > 0:
            caught += 1

        if render:
            print(f"episode={ep} return={ret:+.0f} history=[{st.history_str()}]")
            print(str(st))
            print()

        if logger is not None and stats_every and ((ep + 1) % stats_every == 0):
            elapsed = time.perf_counter() - t0
            logger.info(
                "PROGRESS: episodes=%d steps=%d catch_rate=%.3f steps/s=%.1f",
                ep + 1,
                steps,
                caught / (ep + 1),
                steps / max(elapsed, 1e-12),
            )

    return RolloutStats(
        episodes=int(episodes),
        steps=int(steps),
        caught=int(caught),
        return_sum=float(return_sum),
        elapsed_s=float(time.perf_counter() - t0),
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Catch episodes with a scripted agent")
    parser.add_argument("--episodes", type=int, default=1000)
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--columns", type=int, default=DEFAULT_COLUMNS)
    parser.add_argument("--config", type=str, default=None, help="YAML file with a game spec (overrides --rows/--columns).")
    parser.add_argument("--agent", type=str, default="tracking", choices=["random", "tracking"])
    parser.add_argument("--seed", type=int, default=12345)
    parser.add_argument("--render", action="store_true", help="Print the final board of every episode.")
    parser.add_argument("--stats-every", type=int, default=0, help="Log progress every N episodes (0 disables).")
    parser.add_argument("--log-level", type=str, default="info")
    return parser.parse_args(argv)


def run_rollout(args: argparse.Namespace) -> int:
    logger = setup_logger(name="catch_rl.rollout", use_rich=True, level=args.log_level)
    if int(args.episodes) <= 0:
        raise ValueError(f"--episodes must be positive, got {args.episodes}")

    game = build_game(args)
    logger.info("game=%r agent=%s episodes=%d seed=%d", game, args.agent, args.episodes, args.seed)

    stats = run_rollouts(
        game=game,
        agent_name=args.agent,
        episodes=int(args.episodes),
        seed=int(args.seed),
        render=bool(args.render),
        stats_every=int(args.stats_every),
        logger=logger,
    )

    logger.info(
        "DONE: episodes=%d steps=%d mean_return=%.3f catch_rate=%.3f elapsed=%.3fs steps/s=%.1f",
        stats.episodes,
        stats.steps,
        stats.mean_return,
        stats.catch_rate,
        stats.elapsed_s,
        stats.steps_per_s,
    )
    return 0


__all__ = ["RolloutStats", "build_game", "run_rollouts", "parse_args", "run_rollout"]
