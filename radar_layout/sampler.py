"""Seeded random draws for blip placement."""

from __future__ import annotations

import math

import numpy as np


def _codepoint_sum(text: str) -> int:
    return sum(ord(ch) for ch in text)


def sampler_seed(ring_name: str, quadrant_name: str) -> int:
    """Return the sampler seed for a (ring, quadrant) pair.

    Depends on the two names only, so the same pair draws the same candidate
    sequence whatever blips the radar holds.
    """

    product = (
        _codepoint_sum(ring_name)
        * len(ring_name)
        * _codepoint_sum(quadrant_name)
        * len(quadrant_name)
    )
    return int(math.pi * product)


class DeterministicSampler:
    """Reproducible float/int draws backed by numpy's PCG64 generator."""

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)

    @classmethod
    def for_pair(cls, ring_name: str, quadrant_name: str) -> "DeterministicSampler":
        return cls(sampler_seed(ring_name, quadrant_name))

    def next_float(self, low: float, high: float) -> float:
        if high <= low:
            return float(low)
        return float(self._rng.uniform(low, high))

    def next_int(self, low: int, high: int) -> int:
        if high <= low:
            return int(low)
        return int(self._rng.integers(low, high, endpoint=True))

    def __repr__(self) -> str:
        return f"DeterministicSampler(seed={self.seed})"
