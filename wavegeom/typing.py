"""Basic types."""

from __future__ import annotations

import enum
from typing import Callable, Tuple

import jax
from jax.typing import ArrayLike

# NOTE: Please avoid including logic here! Included types should be trivially simple.

# Tuple of 3 integers, used for ``(x, y, z)`` data.
Int3 = Tuple[int, int, int]

# ``(n, 3)`` array of ``(x, y, z)`` points.
Points = ArrayLike

# Level set function, maps ``(n, 3)`` points to ``(n,)`` values which are
# positive in the interior, zero on the boundary, and negative in the exterior
# of a shape.
LevelSetFunction = Callable[[jax.Array], jax.Array]


class Axis(enum.IntEnum):
    """Spatial axes, in ``(x, y, z)`` order."""

    X = 0
    Y = 1
    Z = 2

    def __str__(self) -> str:
        return self.name.lower()


class Sign(enum.IntEnum):
    """Sides of an interval.

    ``N`` is the negative side (lower bound) and ``P`` is the positive side
    (upper bound).

    """

    N = 0
    P = 1

    def __str__(self) -> str:
        return self.name.lower()
