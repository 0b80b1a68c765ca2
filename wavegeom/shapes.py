"""Concrete shapes.

Each shape computes its circumbox and level set function and hands both over
to :py:class:`Shape`, so that collections of mixed shapes can be handled
through the common :py:class:`Shape` interface.

"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike

from .shape import Shape
from .typing import Axis, Sign
from .utils import as_real_array, check_arg, is_real


class Box(Shape):
    """Axis-aligned box.

    Zero-thickness boxes, such as planes, are allowed; they have no interior.

    Args:
        bound: ``[[xmin, xmax], [ymin, ymax], [zmin, zmax]]`` of the box.
        max_spacing: See :py:class:`Shape`.
        boundary_spacing: See :py:class:`Shape`.

    """

    def __init__(
        self,
        bound: ArrayLike,
        max_spacing: ArrayLike | None = None,
        boundary_spacing: ArrayLike | None = None,
    ):
        check_arg(
            is_real(bound) and np.shape(bound) == (len(Axis), len(Sign)),
            '"bound" should be [[xmin, xmax], [ymin, ymax], [zmin, zmax]].',
        )
        bound = as_real_array(bound)
        lower, upper = bound[:, Sign.N.value], bound[:, Sign.P.value]

        def lsf(r: jax.Array) -> jax.Array:
            return jnp.min(jnp.minimum(r - lower, upper - r), axis=1)

        super().__init__(bound, lsf, max_spacing, boundary_spacing)


class Sphere(Shape):
    """Sphere of ``radius`` at ``center``.

    Args:
        center: ``(x, y, z)`` center of the sphere.
        radius: Positive radius of the sphere.
        max_spacing: See :py:class:`Shape`.
        boundary_spacing: See :py:class:`Shape`.

    """

    def __init__(
        self,
        center: ArrayLike,
        radius: float,
        max_spacing: ArrayLike | None = None,
        boundary_spacing: ArrayLike | None = None,
    ):
        check_arg(
            is_real(center) and np.shape(center) == (len(Axis),),
            '"center" should be length-%d vector with real elements.',
            len(Axis),
        )
        check_arg(
            is_real(radius) and np.ndim(radius) == 0 and radius > 0,
            '"radius" should be positive real scalar.',
        )
        center = as_real_array(center)
        self._radius = float(radius)

        def lsf(r: jax.Array) -> jax.Array:
            return 1 - jnp.linalg.norm(r - center, axis=1) / radius

        circumbox = jnp.stack([center - radius, center + radius], axis=1)
        super().__init__(circumbox, lsf, max_spacing, boundary_spacing)

    @property
    def radius(self) -> float:
        return self._radius


class CircularCylinder(Shape):
    """Circular cylinder with its axis along ``normal_axis``.

    Args:
        normal_axis: Axis of the cylinder.
        center: ``(x, y, z)`` center of the cylinder.
        radius: Positive radius of the cylinder.
        height: Positive extent of the cylinder along ``normal_axis``.
        max_spacing: See :py:class:`Shape`.
        boundary_spacing: See :py:class:`Shape`.

    """

    def __init__(
        self,
        normal_axis: Axis,
        center: ArrayLike,
        radius: float,
        height: float,
        max_spacing: ArrayLike | None = None,
        boundary_spacing: ArrayLike | None = None,
    ):
        check_arg(
            isinstance(normal_axis, Axis), '"normal_axis" should be instance of Axis.'
        )
        check_arg(
            is_real(center) and np.shape(center) == (len(Axis),),
            '"center" should be length-%d vector with real elements.',
            len(Axis),
        )
        check_arg(
            is_real(radius) and np.ndim(radius) == 0 and radius > 0,
            '"radius" should be positive real scalar.',
        )
        check_arg(
            is_real(height) and np.ndim(height) == 0 and height > 0,
            '"height" should be positive real scalar.',
        )
        center = as_real_array(center)
        self._normal_axis = normal_axis
        self._radius = float(radius)
        self._height = float(height)

        h = normal_axis.value
        p, q = [w.value for w in Axis if w != normal_axis]

        def lsf(r: jax.Array) -> jax.Array:
            d = r - center
            rho = jnp.hypot(d[:, p], d[:, q])
            return jnp.minimum(1 - rho / radius, 1 - jnp.abs(d[:, h]) / (height / 2))

        half_size = jnp.full((len(Axis),), radius).at[h].set(height / 2)
        circumbox = jnp.stack([center - half_size, center + half_size], axis=1)
        super().__init__(circumbox, lsf, max_spacing, boundary_spacing)

    @property
    def normal_axis(self) -> Axis:
        return self._normal_axis

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def height(self) -> float:
        return self._height
