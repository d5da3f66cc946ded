# src/catch_rl/cli/rollout.py
from __future__ import annotations

from catch_rl.apps.rollout.entrypoint import parse_args, run_rollout


def main() -> int:
    return run_rollout(parse_args())


if __name__ == "__main__":
    raise SystemExit(main())
