# src/catch_rl/utils/seed.py
from __future__ import annotations

"""
Deterministic per-episode seeds.

seed32_from(base_seed, stream_id) mixes a run seed with an episode index so
every episode of a rollout gets its own reproducible stream.
No RNG state is stored here.
"""


def splitmix64(x: int) -> int:
    """Stateless 64-bit SplitMix hash; returns a uint64 as Python int."""
    z = (int(x) + 0x9E3779B97F4A7C15) & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & 0xFFFFFFFFFFFFFFFF
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & 0xFFFFFFFFFFFFFFFF
    z = z ^ (z >> 31)
    return int(z & 0xFFFFFFFFFFFFFFFF)


def seed32_from(*, base_seed: int, stream_id: int) -> int:
    """
    Same (base_seed, stream_id) -> same seed, in [0, 2^31 - 1].
    """
    mixed = splitmix64((int(base_seed) << 32) ^ int(stream_id))
    return int(mixed & 0x7FFFFFFF)


__all__ = ["splitmix64", "seed32_from"]
