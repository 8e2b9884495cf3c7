"""Normal sampling on top of an injected random.Random (seedable per call)."""

from __future__ import annotations

import math
import random
from typing import Optional


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Fresh generator; seed=None pulls entropy from the OS."""
    return random.Random(seed)


def _open_unit(rng: random.Random) -> float:
    # random() is [0, 1); 0 would feed log(0) below
    u = 0.0
    while u == 0.0:
        u = rng.random()
    return u


def normal_random(rng: random.Random, mean: float, std_dev: float) -> float:
    """Box-Muller transform (cosine branch)."""
    u = _open_unit(rng)
    v = _open_unit(rng)
    z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
    return mean + z * std_dev


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
