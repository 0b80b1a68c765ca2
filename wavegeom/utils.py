"""Utility functions."""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np
from jax.typing import ArrayLike


class InvalidArgument(ValueError):
    """Raised when an argument violates a documented constraint."""


def check_arg(truth: bool, message: str, *args) -> None:
    """Raise :py:class:`InvalidArgument` with ``message % args`` if ``truth`` is false."""
    if not truth:
        raise InvalidArgument(message % args if args else message)


def is_real(x) -> bool:
    """``True`` iff ``x`` is a real-valued, NaN-free scalar or array.

    Integers too large for a fixed-width integer type are not real-valued in
    this sense, because they cannot be converted to an array.

    """
    try:
        arr = np.asarray(x)
    except (TypeError, ValueError):
        return False
    if not (
        np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)
    ):
        return False
    return not bool(np.any(np.isnan(arr)))


def as_real_array(x: ArrayLike) -> jax.Array:
    """``x`` as a floating point array, for ``x`` already checked by :py:func:`is_real`."""
    return jnp.asarray(np.asarray(x, dtype=float))


def is_positive(x: ArrayLike) -> bool:
    """``True`` iff ``x`` is real-valued and all its elements are positive."""
    return is_real(x) and bool(np.all(np.asarray(x, dtype=float) > 0))


def expand_to_row(x: ArrayLike, n: int, name: str = "value") -> jax.Array:
    """Broadcast scalar or length-``n`` ``x`` to an ``(n,)`` array."""
    arr = as_real_array(x)
    check_arg(
        arr.ndim == 0 or arr.shape == (n,),
        '"%s" should be scalar or length-%d vector.',
        name,
        n,
    )
    return jnp.broadcast_to(arr, (n,))


def expand_to_matrix(x: ArrayLike, m: int, n: int, name: str = "value") -> jax.Array:
    """Broadcast ``x`` to an ``(m, n)`` array.

    ``x`` may be a scalar, a length-``m`` vector which is repeated along each
    row, or an ``(m, n)`` matrix.

    """
    arr = as_real_array(x)
    check_arg(
        arr.ndim == 0 or arr.shape == (m,) or arr.shape == (m, n),
        '"%s" should be scalar, length-%d vector, or %d-by-%d matrix.',
        name,
        m,
        m,
        n,
    )
    if arr.ndim == 1:
        arr = arr[:, None]
    return jnp.broadcast_to(arr, (m, n))


def check_points(points: ArrayLike, name: str = "point") -> jax.Array:
    """Returns ``points`` as an array after checking it is a real ``(n, 3)`` matrix."""
    check_arg(
        is_real(points),
        '"%s" should be matrix with 3 columns with real elements.',
        name,
    )
    arr = as_real_array(points)
    check_arg(
        arr.ndim == 2 and arr.shape[1] == 3,
        '"%s" should be matrix with 3 columns with real elements, but got shape %s.',
        name,
        arr.shape,
    )
    return arr
