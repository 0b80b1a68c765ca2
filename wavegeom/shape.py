"""Implicit 3D shapes with grid-resolution requirements.

A :py:class:`Shape` is defined by

* a level set function (LSF) which, for an ``(n, 3)`` array of points, returns
  ``(n,)`` values that are positive for points in the interior of the shape,
  zero on its surface, and negative outside of it, and
* its circumbox, the axis-aligned box which circumscribes the shape, along
  with the maximum grid spacings that a simulation grid is allowed to use
  inside the box and at each of its six faces.

Concrete shapes (see :py:mod:`wavegeom.shapes`) only need to compute their
circumbox and supply their LSF as a closure. The circumbox is expected, but
not required, to contain the region where the LSF is positive.

"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .interval import Interval
from .typing import Axis, LevelSetFunction, Points, Sign
from .utils import (
    InvalidArgument,
    check_arg,
    check_points,
    expand_to_matrix,
    expand_to_row,
    is_positive,
    is_real,
)

logger = logging.getLogger(__name__)


class Shape:
    """Shape defined by a level set function within a circumbox.

    Args:
        circumbox: ``[[xmin, xmax], [ymin, ymax], [zmin, zmax]]`` bounding box
          of the shape.
        lsf: Vectorized level set function, mapping ``(n, 3)`` points to
          ``(n,)`` values. Must be free of side-effects.
        max_spacing: Maximum grid spacing inside the shape, either as a scalar
          or as ``(dx, dy, dz)``. If ``None``, no constraint is placed on the
          grid.
        boundary_spacing: Maximum grid spacing at the faces of the circumbox,
          as a scalar, as ``(dx, dy, dz)``, or as a ``(3, 2)`` array where
          ``[:, 0]`` and ``[:, 1]`` correspond to the lower and upper faces
          respectively. Defaults to ``max_spacing`` and must not exceed it.

    Raises:
        InvalidArgument: If any argument is malformed.

    """

    def __init__(
        self,
        circumbox: ArrayLike,
        lsf: LevelSetFunction,
        max_spacing: ArrayLike | None = None,
        boundary_spacing: ArrayLike | None = None,
    ):
        check_arg(
            is_real(circumbox) and np.shape(circumbox) == (len(Axis), len(Sign)),
            '"circumbox" should be [[xmin, xmax], [ymin, ymax], [zmin, zmax]].',
        )
        bounds = np.asarray(circumbox, dtype=float).tolist()
        for w in Axis:
            check_arg(
                bounds[w][Sign.N] <= bounds[w][Sign.P],
                'in the %s-axis, lower bound should be smaller than upper bound of "circumbox".',
                w,
            )

        check_arg(callable(lsf), '"lsf" should be callable.')

        if max_spacing is None:
            check_arg(
                boundary_spacing is None,
                '"boundary_spacing" cannot be given without "max_spacing".',
            )
            intervals = tuple(Interval(tuple(bounds[w])) for w in Axis)
        else:
            check_arg(
                is_positive(max_spacing),
                'element of "max_spacing" should be positive.',
            )
            max_spacing = expand_to_row(max_spacing, len(Axis), name="max_spacing")
            if boundary_spacing is None:
                boundary_spacing = max_spacing
            check_arg(
                is_positive(boundary_spacing),
                'element of "boundary_spacing" should be positive.',
            )
            boundary_spacing = expand_to_matrix(
                boundary_spacing, len(Axis), len(Sign), name="boundary_spacing"
            ).tolist()
            max_spacing = max_spacing.tolist()
            for w in Axis:
                for s in Sign:
                    check_arg(
                        boundary_spacing[w][s] <= max_spacing[w],
                        'in the %s-axis, elements of "boundary_spacing" should be '
                        'smaller than "max_spacing".',
                        w,
                    )

            intervals = tuple(
                Interval(tuple(bounds[w]), max_spacing[w], boundary_spacing[w])
                for w in Axis
            )

        self._intervals = intervals
        self._lsf = lsf
        logger.debug("Created %r.", self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(bound={self.bound.tolist()})"

    @property
    def intervals(self) -> Tuple[Interval, Interval, Interval]:
        """``(interval_x, interval_y, interval_z)`` of the circumbox."""
        return self._intervals

    @property
    def lsf(self) -> LevelSetFunction:
        """Level set function of the shape."""
        return self._lsf

    @property
    def bound(self) -> jax.Array:
        """``(3, 2)`` array of ``[[xmin, xmax], [ymin, ymax], [zmin, zmax]]``."""
        return jnp.array([interval.bound for interval in self.intervals])

    @property
    def center(self) -> jax.Array:
        """``(3,)`` center of the circumbox."""
        return jnp.mean(self.bound, axis=1)

    @property
    def size(self) -> jax.Array:
        """``(3,)`` side lengths of the circumbox."""
        return jnp.array([interval.length for interval in self.intervals])

    @property
    def max_spacing(self) -> jax.Array:
        """``(3,)`` maximum grid spacing along each axis."""
        return jnp.array([interval.max_spacing for interval in self.intervals])

    @property
    def boundary_spacing(self) -> jax.Array:
        """``(3, 2)`` maximum grid spacing at the lower and upper faces."""
        return jnp.array([interval.boundary_spacing for interval in self.intervals])

    def circumbox_contains(
        self,
        points: Points,
        axes: Sequence[Axis] | Axis | None = None,
    ) -> jax.Array:
        """``(n,)`` array, ``True`` for ``points`` within the circumbox.

        Args:
            points: ``(n, 3)`` array of points.
            axes: Axes along which to test for membership, defaults to all of
              them. Points are considered within the circumbox when they lie
              within the bounds of every axis listed.

        """
        points = check_points(points)
        axes = _as_axes(tuple(Axis) if axes is None else axes)

        truth = jnp.ones(points.shape[0], dtype=bool)
        for w in axes:
            truth = truth & self.intervals[w].contains(points[:, w.value])
        return truth

    def contains(self, points: Points) -> jax.Array:
        """``(n,)`` array, ``True`` for ``points`` strictly inside the shape.

        Points on the surface of the shape, where the level set function is
        zero, are not contained.

        """
        points = check_points(points)
        values = jnp.asarray(self.lsf(points))
        check_arg(
            values.size == points.shape[0],
            '"lsf" should return one value per point, but got shape %s for %d points.',
            values.shape,
            points.shape[0],
        )
        return jnp.reshape(values, (points.shape[0],)) > 0


def _as_axes(axes) -> Tuple[Axis, ...]:
    if isinstance(axes, Axis):
        axes = (axes,)
    message = (
        f'"axes" should be length-{len(Axis)} or shorter sequence of distinct '
        f"instances of Axis, but got {axes!r}."
    )
    try:
        axes = tuple(axes)
    except TypeError as err:
        raise InvalidArgument(message) from err
    # ``Axis(True)`` and ``Axis(1.0)`` would otherwise be taken as ``Axis.Y``.
    check_arg(
        all(
            isinstance(a, (int, np.integer)) and not isinstance(a, (bool, np.bool_))
            for a in axes
        ),
        message,
    )
    try:
        axes = tuple(Axis(a) for a in axes)
    except ValueError as err:
        raise InvalidArgument(message) from err
    check_arg(len(axes) <= len(Axis) and len(set(axes)) == len(axes), message)
    return axes
