"""Deterministic pseudo-random stream driven by a linear congruential generator.

Every pass of the generator draws from a ``RandomStream`` that it receives
explicitly; nothing reads ambient randomness. The same seed and the same
sequence of calls always reproduce the same values, across processes.
"""

import hashlib
import math
import time
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

# Recurrence constants: state = (state * A + C) mod M
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

DEFAULT_SEED = 1337
SEED_RANGE = 2**32


class RandomStream:
    """Seeded float stream in [0, 1) with a few drawing helpers.

    All helpers are built on ``next()`` so their consumption of the stream
    is fixed: one draw per call.
    """

    def __init__(self, seed: int) -> None:
        self._state = int(seed)

    def next(self) -> float:
        """Advance the recurrence and return a float in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def below(self, n: int) -> int:
        """Return an integer in [0, n)."""
        return int(self.next() * n)

    def between(self, low: int, high: int) -> int:
        """Return an integer in [low, high] (inclusive)."""
        return low + self.below(high - low + 1)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.next() < probability

    def choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return seq[self.below(len(seq))]

    def weighted(self, options: Sequence[tuple[T, float]]) -> T:
        """Pick a value from (value, weight) pairs.

        Weights need not sum to one. The last option absorbs any rounding
        left over at the top of the range.
        """
        total = sum(weight for _, weight in options)
        roll = self.next() * total
        cumulative = 0.0
        for value, weight in options:
            cumulative += weight
            if roll < cumulative:
                return value
        return options[-1][0]


def normalize_seed(value: object) -> int:
    """Coerce any seed-like value into the 32-bit seed range.

    Non-numeric, non-finite and zero seeds become ``DEFAULT_SEED``.
    Negative seeds wrap around the 32-bit range.
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_SEED
    if not math.isfinite(number):
        return DEFAULT_SEED
    seed = int(value) if isinstance(value, int) else int(number)
    seed %= SEED_RANGE
    if seed == 0:
        return DEFAULT_SEED
    return seed


def resolve_seed(seed: int | None) -> int:
    """Return a normalized seed, deriving one from the clock when omitted."""
    if seed is None:
        return normalize_seed(int(time.time() * 1000))
    return normalize_seed(seed)


def derive_seed(seed: int, *parts: object) -> int:
    """Derive a stable sub-seed from a seed and identifying parts.

    Uses md5 rather than ``hash()`` so results survive process restarts.
    """
    key = ":".join(str(p) for p in (seed, *parts))
    digest = hashlib.md5(key.encode()).hexdigest()
    return normalize_seed(int(digest[:8], 16))
