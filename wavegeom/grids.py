"""Placement of shapes on the Yee cell simulation volume.

NOTE: We use a definition of the Yee cell simulation grid (see
https://en.wikipedia.org/wiki/Finite-difference_time-domain_method) where the
{xyz}-component of the electric field is shifted by a half-cell in the {xyz}
direction. Shapes are sampled at these electric field component locations so
that the resulting arrays can be used directly as per-component permittivity
or conductivity values.

"""

from __future__ import annotations

import logging
from typing import NamedTuple, Sequence, Tuple

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .shape import Shape
from .typing import Axis, Int3, Points, Sign
from .utils import (
    as_real_array,
    check_arg,
    check_points,
    expand_to_row,
    is_positive,
    is_real,
)

logger = logging.getLogger(__name__)


class Grid(NamedTuple):
    """Defines the Yee-lattice for the simulation volume.

    Each axis is defined by a ``(uu, 2)`` array of spacing values where

    * ``[:, 0]`` values are the center-to-center spacings, and
    * ``[:, 1]`` values are the boundary-to-boundary spacings,

    and where the ``[:, 0]`` intervals are shifted in the negative direction
    relative to the ``[:, 1]`` intervals.

    The first cell boundary along each axis is placed at ``origin``, the first
    cell center at ``origin + du[0, 0] / 2``, and then the ``i`` th cell
    boundary is at ``origin + sum(du[:i, 1])`` and the ``i`` th cell center at
    ``origin + du[0, 0] / 2 + sum(du[1:i + 1, 0])``.

    Args:
        dx: ``(xx, 2)`` of Yee-lattice spacings along the x-axis.
        dy: ``(yy, 2)`` of Yee-lattice spacings along the y-axis.
        dz: ``(zz, 2)`` of Yee-lattice spacings along the z-axis.
        origin: ``(x0, y0, z0)`` position of the first cell boundary.

    """

    dx: ArrayLike
    dy: ArrayLike
    dz: ArrayLike
    origin: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def du(self):
        return (self.dx, self.dy, self.dz)

    @property
    def shape(self) -> Int3:
        """``(xx, yy, zz)`` shape of the simulation volume."""
        return tuple(np.shape(du)[0] for du in self.du)


def check_grid(grid: Grid) -> None:
    check_arg(
        all(np.ndim(du) == 2 and np.shape(du)[1] == 2 for du in grid.du),
        "grid spacings must be of shape ``[:, 2]`` but got shapes of %s, %s, and %s.",
        np.shape(grid.dx),
        np.shape(grid.dy),
        np.shape(grid.dz),
    )
    check_arg(
        all(is_positive(du) for du in grid.du),
        "grid spacings must be positive.",
    )
    check_arg(
        is_real(grid.origin) and np.shape(grid.origin) == (len(Axis),),
        "grid origin must be a length-%d real vector.",
        len(Axis),
    )


def positions(grid: Grid) -> Tuple[jax.Array, jax.Array, jax.Array]:
    """``(uu, 2)`` arrays of cell center and cell boundary positions per axis.

    ``[:, 0]`` values are cell centers and ``[:, 1]`` values are cell
    boundaries, following the convention of :py:class:`Grid`.

    """
    check_grid(grid)
    result = []
    for du, u0 in zip(grid.du, grid.origin):
        du = as_real_array(du)
        centers = u0 + du[0, 0] / 2 + jnp.cumsum(du[:, 0]) - du[0, 0]
        boundaries = u0 + jnp.cumsum(du[:, 1]) - du[:, 1]
        result.append(jnp.stack([centers, boundaries], axis=-1))
    return tuple(result)


def component_points(grid: Grid, component: Axis) -> jax.Array:
    """``(xx * yy * zz, 3)`` locations of the ``component`` of the E-field."""
    component = Axis(component)
    pos = positions(grid)
    coords = [pos[w][:, 0 if w == component else 1] for w in Axis]
    mesh = jnp.meshgrid(*coords, indexing="ij")
    return jnp.stack([m.ravel() for m in mesh], axis=-1)


def mask(shape: Shape, points: Points) -> jax.Array:
    """Same as ``shape.contains(points)`` using the circumbox as a pre-filter.

    The level set function of ``shape`` is only evaluated for points within its
    circumbox. Because the subset of points is data-dependent, this function
    cannot be used within ``jax.jit``.

    """
    points = check_points(points)
    (inside,) = jnp.nonzero(shape.circumbox_contains(points))
    truth = jnp.zeros(points.shape[0], dtype=bool)
    if inside.size == 0:
        return truth
    return truth.at[inside].set(shape.contains(points[inside]))


def rasterize(
    shapes: Sequence[Shape],
    values: Sequence[ArrayLike],
    grid: Grid,
    background: ArrayLike = 1.0,
) -> jax.Array:
    """Paint ``shapes`` on the electric field locations of ``grid``.

    Shapes are painted in order, so that where shapes overlap the value of the
    last shape wins.

    Args:
        shapes: Shapes to paint.
        values: Value for each shape, either as a scalar or as a ``(3,)`` array
          of per-component values.
        grid: Simulation grid.
        background: Value, or ``(3,)`` per-component values, outside of all
          shapes.

    Returns:
        ``(3, xx, yy, zz)`` array of values.

    """
    check_arg(
        all(isinstance(s, Shape) for s in shapes),
        '"shapes" should be a sequence of instances of Shape.',
    )
    check_arg(
        len(values) == len(shapes),
        '"values" should have one entry per shape, but got %d values for %d shapes.',
        len(values),
        len(shapes),
    )
    check_arg(is_real(background), '"background" should be real.')
    check_arg(all(is_real(v) for v in values), '"values" should be real.')
    check_grid(grid)
    logger.debug("Rasterizing %d shapes on grid of shape %s.", len(shapes), grid.shape)

    background = expand_to_row(background, len(Axis), name="background")
    values = [expand_to_row(v, len(Axis), name="values") for v in values]
    components = []
    for w in Axis:
        points = component_points(grid, w)
        field = jnp.full(points.shape[0], background[w.value])
        for shape, value in zip(shapes, values):
            field = jnp.where(mask(shape, points), value[w.value], field)
        components.append(jnp.reshape(field, grid.shape))
    return jnp.stack(components)


def circumbox(shapes: Sequence[Shape]) -> jax.Array:
    """``(3, 2)`` box which circumscribes all of ``shapes``."""
    check_arg(len(shapes) > 0, '"shapes" should not be empty.')
    bounds = jnp.stack([shape.bound for shape in shapes])
    lower = jnp.min(bounds[:, :, Sign.N.value], axis=0)
    upper = jnp.max(bounds[:, :, Sign.P.value], axis=0)
    return jnp.stack([lower, upper], axis=-1)


def finest_spacing(shapes: Sequence[Shape]) -> jax.Array:
    """``(3,)`` smallest maximum grid spacing required by any of ``shapes``."""
    check_arg(len(shapes) > 0, '"shapes" should not be empty.')
    return jnp.min(jnp.stack([shape.max_spacing for shape in shapes]), axis=0)
