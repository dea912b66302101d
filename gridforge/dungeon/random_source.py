"""Integer random sources used by the generator.

Both sources scale a unit float into ``[lo, hi]`` with
``floor(r * (hi - lo + 1)) + lo``. Unlike ``random.randint`` this never
raises on an inverted range; a degenerate configuration yields degenerate
values instead of an exception.
"""
from __future__ import annotations

import math
import random
from typing import Optional, Protocol

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


class RandomSource(Protocol):
    def seed(self, value: Optional[int]) -> None: ...

    def randint(self, lo: int, hi: int) -> int: ...

    @property
    def state(self) -> Optional[int]: ...


def _scale(r: float, lo: int, hi: int) -> int:
    return math.floor(r * (hi - lo + 1)) + lo


class LcgRandom:
    """Reproducible linear congruential sequence."""

    def __init__(self, seed: int):
        self._state = int(seed)

    def seed(self, value: Optional[int]) -> None:
        if value is None:
            raise ValueError("LcgRandom requires an integer seed")
        self._state = int(value)

    def next_float(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def randint(self, lo: int, hi: int) -> int:
        return _scale(self.next_float(), lo, hi)

    @property
    def state(self) -> Optional[int]:
        return self._state


class SystemRandomSource:
    """Non-deterministic source for unseeded dungeons."""

    def __init__(self):
        self._rng = random.SystemRandom()

    def seed(self, value: Optional[int]) -> None:
        # SystemRandom ignores seeding; state stays opaque.
        pass

    def randint(self, lo: int, hi: int) -> int:
        return _scale(self._rng.random(), lo, hi)

    @property
    def state(self) -> Optional[int]:
        return None


def make_random_source(seed: Optional[int]) -> RandomSource:
    if seed is None:
        return SystemRandomSource()
    return LcgRandom(seed)


__all__ = ["RandomSource", "LcgRandom", "SystemRandomSource", "make_random_source"]
