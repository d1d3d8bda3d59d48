"""Gradient value noise on a shuffled permutation lattice.

Each field is seeded independently; elevation, forest density and fine
detail are separate fields sampled at their own spatial frequencies.
"""

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .rng import RandomStream, derive_seed


def fade(t: float) -> float:
    """Quintic smoothing curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(t: float, a: float, b: float) -> float:
    """Linear interpolation from a to b."""
    return a + t * (b - a)


def grad(hash_value: int, x: float, y: float) -> float:
    """Dot product of (x, y) with one of the lattice gradient directions.

    The low four bits of the permutation value select the direction.
    """
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = 0.0
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


def _fade_array(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _grad_array(
    hash_values: NDArray[np.int64],
    x: NDArray[np.float64],
    y: NDArray[np.float64],
) -> NDArray[np.float64]:
    h = hash_values & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, 0.0))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


class ValueNoiseField:
    """Continuous 2D noise built from a seeded permutation table.

    Immutable after construction. ``sample`` is a pure function of its
    arguments and returns values in approximately [-1, 1].
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed
        rng = RandomStream(seed)

        perm = list(range(256))
        # Fisher-Yates
        for i in range(255, 0, -1):
            j = rng.below(i + 1)
            perm[i], perm[j] = perm[j], perm[i]

        # Doubled so lookups at index + 1 never wrap
        self._perm = perm + perm
        self._perm_array = np.array(self._perm, dtype=np.int64)
        self._perm_array.flags.writeable = False

    @property
    def permutation(self) -> NDArray[np.int64]:
        """Read-only 512-entry permutation table."""
        return self._perm_array

    def sample(self, x: float, y: float) -> float:
        """Sample the field at a continuous coordinate."""
        x_floor = math.floor(x)
        y_floor = math.floor(y)
        xi = int(x_floor) & 255
        yi = int(y_floor) & 255

        x -= x_floor
        y -= y_floor
        u = fade(x)
        v = fade(y)

        perm = self._perm
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        return lerp(
            v,
            lerp(u, grad(perm[a], x, y), grad(perm[b], x - 1, y)),
            lerp(u, grad(perm[a + 1], x, y - 1), grad(perm[b + 1], x - 1, y - 1)),
        )

    def sample_grid(
        self,
        width: int,
        height: int,
        scale: float,
        offset: float = 0.0,
    ) -> NDArray[np.float64]:
        """Sample the field at every tile of a grid.

        Equivalent to ``sample(x * scale + offset, y * scale + offset)``
        for each tile, evaluated with numpy.

        Args:
            width: Grid width in tiles.
            height: Grid height in tiles.
            scale: Frequency multiplier applied to tile coordinates.
            offset: Constant added to both scaled coordinates.

        Returns:
            Array of shape (height, width).
        """
        xs = np.arange(width, dtype=np.float64) * scale + offset
        ys = np.arange(height, dtype=np.float64) * scale + offset
        x, y = np.meshgrid(xs, ys)

        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255

        x = x - x_floor
        y = y - y_floor
        u = _fade_array(x)
        v = _fade_array(y)

        perm = self._perm_array
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        bottom = u * (_grad_array(perm[b], x - 1, y) - _grad_array(perm[a], x, y))
        bottom += _grad_array(perm[a], x, y)
        top = u * (
            _grad_array(perm[b + 1], x - 1, y - 1) - _grad_array(perm[a + 1], x, y - 1)
        )
        top += _grad_array(perm[a + 1], x, y - 1)
        return bottom + v * (top - bottom)


@dataclass(frozen=True)
class NoiseChannels:
    """Independently seeded noise fields used by terrain synthesis."""

    elevation: ValueNoiseField
    forest: ValueNoiseField
    detail: ValueNoiseField

    @classmethod
    def from_seed(cls, seed: int) -> "NoiseChannels":
        """Build all channels from a world seed."""
        return cls(
            elevation=ValueNoiseField(derive_seed(seed, "elevation")),
            forest=ValueNoiseField(derive_seed(seed, "forest")),
            detail=ValueNoiseField(derive_seed(seed, "detail")),
        )
