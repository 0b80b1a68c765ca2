"""Bound and grid-spacing requirements along a single spatial axis."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .typing import Sign
from .utils import check_arg, expand_to_row, is_real

# Spacing used when no maximum grid spacing is requested, i.e. the interval
# places no constraint on the grid resolution.
DEFAULT_MAX_SPACING = math.inf


@dataclass(frozen=True)
class Interval:
    """Closed interval ``[lower, upper]`` with its grid-spacing requirements.

    Args:
        bound: ``(lower, upper)`` pair with ``lower <= upper``.
        max_spacing: Largest grid spacing allowed within the interval.
        boundary_spacing: Largest grid spacing allowed at the ``(lower, upper)``
          ends of the interval, either as a scalar or a pair. Defaults to
          ``max_spacing`` and may not exceed it.

    """

    bound: Tuple[float, float]
    max_spacing: float = DEFAULT_MAX_SPACING
    boundary_spacing: Tuple[float, float] | float | None = None

    def __post_init__(self):
        check_arg(
            is_real(self.bound) and np.shape(self.bound) == (2,),
            '"bound" should be length-2 vector with real elements.',
        )
        lower, upper = (float(b) for b in self.bound)
        check_arg(
            lower <= upper,
            'lower bound should be smaller than upper bound of "bound", '
            "but got %r > %r.",
            lower,
            upper,
        )

        check_arg(
            is_real(self.max_spacing) and np.ndim(self.max_spacing) == 0,
            '"max_spacing" should be real scalar.',
        )
        max_spacing = float(self.max_spacing)
        check_arg(max_spacing > 0, '"max_spacing" should be positive.')

        boundary_spacing = (
            max_spacing if self.boundary_spacing is None else self.boundary_spacing
        )
        check_arg(
            is_real(boundary_spacing),
            '"boundary_spacing" should have real elements.',
        )
        boundary_spacing = expand_to_row(
            boundary_spacing, len(Sign), name="boundary_spacing"
        )
        check_arg(
            bool(jnp.all(boundary_spacing > 0)),
            'element of "boundary_spacing" should be positive.',
        )
        check_arg(
            bool(jnp.all(boundary_spacing <= max_spacing)),
            'elements of "boundary_spacing" should be smaller than "max_spacing".',
        )

        object.__setattr__(self, "bound", (lower, upper))
        object.__setattr__(self, "max_spacing", max_spacing)
        object.__setattr__(
            self, "boundary_spacing", tuple(float(s) for s in boundary_spacing)
        )

    @property
    def lower(self) -> float:
        return self.bound[Sign.N]

    @property
    def upper(self) -> float:
        return self.bound[Sign.P]

    @property
    def length(self) -> float:
        """Distance between the bounds of the interval."""
        return self.upper - self.lower

    @property
    def center(self) -> float:
        return (self.lower + self.upper) / 2

    def contains(self, x: ArrayLike) -> jax.Array:
        """Elementwise ``True`` where ``x`` lies within the closed interval."""
        x = jnp.asarray(x)
        return (self.lower <= x) & (x <= self.upper)
