"""Tests for the ``Shape`` construction, derived properties, and queries."""

from __future__ import annotations

import threading
import warnings

import jax
import jax.numpy as jnp
import numpy as np
import pytest

import wavegeom as wg
from wavegeom import Axis, InvalidArgument, Shape

BOX = [[0, 2], [0, 4], [0, 6]]


def box_lsf(r):
    lower = jnp.array([0.0, 0.0, 0.0])
    upper = jnp.array([2.0, 4.0, 6.0])
    return jnp.min(jnp.minimum(r - lower, upper - r), axis=1)


def test_derived_properties():
    shape = Shape(BOX, box_lsf)
    np.testing.assert_array_equal(shape.bound, BOX)
    np.testing.assert_array_equal(shape.center, [1, 2, 3])
    np.testing.assert_array_equal(shape.size, [2, 4, 6])
    assert len(shape.intervals) == 3
    assert all(isinstance(i, wg.Interval) for i in shape.intervals)
    assert shape.lsf is box_lsf


def test_no_spacing_leaves_grid_unconstrained():
    shape = Shape(BOX, box_lsf)
    assert jnp.all(jnp.isinf(shape.max_spacing))
    assert shape.boundary_spacing.shape == (3, 2)
    assert jnp.all(shape.boundary_spacing <= shape.max_spacing[:, None])


def test_scalar_spacing_broadcast():
    shape = Shape(BOX, box_lsf, max_spacing=0.5)
    np.testing.assert_array_equal(shape.max_spacing, [0.5, 0.5, 0.5])
    np.testing.assert_array_equal(shape.boundary_spacing, 0.5 * np.ones((3, 2)))


@pytest.mark.parametrize(
    "max_spacing,boundary_spacing,expected",
    [
        ([0.5, 1.0, 2.0], None, [[0.5, 0.5], [1.0, 1.0], [2.0, 2.0]]),
        ([0.5, 1.0, 2.0], 0.25, [[0.25, 0.25], [0.25, 0.25], [0.25, 0.25]]),
        ([0.5, 1.0, 2.0], [0.1, 0.2, 0.3], [[0.1, 0.1], [0.2, 0.2], [0.3, 0.3]]),
        (1.0, [[0.1, 0.2], [0.3, 0.4], [0.5, 1.0]], [[0.1, 0.2], [0.3, 0.4], [0.5, 1.0]]),
    ],
)
def test_boundary_spacing_broadcast(max_spacing, boundary_spacing, expected):
    shape = Shape(BOX, box_lsf, max_spacing, boundary_spacing)
    np.testing.assert_allclose(shape.boundary_spacing, expected)
    assert jnp.all(shape.boundary_spacing <= shape.max_spacing[:, None])
    assert jnp.all(shape.boundary_spacing > 0)


def test_zero_thickness_circumbox():
    shape = Shape([[0, 0], [0, 4], [1, 1]], box_lsf)
    np.testing.assert_array_equal(shape.size, [0, 4, 0])


@pytest.mark.parametrize(
    "circumbox,axis",
    [
        ([[2, 0], [0, 4], [0, 6]], "x"),
        ([[0, 2], [5, 4], [0, 6]], "y"),
        ([[0, 2], [0, 4], [7, 6]], "z"),
    ],
)
def test_inverted_bound_names_axis(circumbox, axis):
    with pytest.raises(InvalidArgument, match=f"in the {axis}-axis, lower bound"):
        Shape(circumbox, box_lsf)


@pytest.mark.parametrize(
    "circumbox",
    [
        [[0, 2], [0, 4]],
        [[0, 2, 3], [0, 4, 5], [0, 6, 7]],
        [0, 2, 0, 4, 0, 6],
        [[0, 2j], [0, 4], [0, 6]],
        [[0, float("nan")], [0, 4], [0, 6]],
        [[0, 2**70], [0, 4], [0, 6]],
        "box",
    ],
)
def test_malformed_circumbox(circumbox):
    with pytest.raises(InvalidArgument, match="circumbox"):
        Shape(circumbox, box_lsf)


def test_lsf_must_be_callable():
    with pytest.raises(InvalidArgument, match="lsf"):
        Shape(BOX, None)
    with pytest.raises(InvalidArgument, match="lsf"):
        Shape(BOX, jnp.ones(3))


@pytest.mark.parametrize("max_spacing", [0, -1.0, [0.5, 0.0, 0.5], [1.0, 1.0, -2.0]])
def test_nonpositive_max_spacing(max_spacing):
    with pytest.raises(InvalidArgument, match="positive"):
        Shape(BOX, box_lsf, max_spacing)


@pytest.mark.parametrize("boundary_spacing", [0, -0.1, [[0.1, 0.1], [0.1, 0.0], [0.1, 0.1]]])
def test_nonpositive_boundary_spacing(boundary_spacing):
    with pytest.raises(InvalidArgument, match="positive"):
        Shape(BOX, box_lsf, 1.0, boundary_spacing)


@pytest.mark.parametrize(
    "boundary_spacing,axis",
    [
        (2.0, "x"),
        ([0.5, 1.5, 0.5], "y"),
        ([[0.5, 0.5], [0.5, 0.5], [0.5, 1.01]], "z"),
    ],
)
def test_boundary_spacing_exceeds_max_spacing(boundary_spacing, axis):
    with pytest.raises(InvalidArgument, match=f"in the {axis}-axis"):
        Shape(BOX, box_lsf, 1.0, boundary_spacing)


@pytest.mark.parametrize(
    "max_spacing,boundary_spacing",
    [
        ([1.0, 1.0], None),
        (jnp.ones((3, 2)), None),
        (1.0, [0.5, 0.5]),
        (1.0, jnp.ones((2, 3))),
    ],
)
def test_spacing_shapes(max_spacing, boundary_spacing):
    with pytest.raises(InvalidArgument, match="should be scalar"):
        Shape(BOX, box_lsf, max_spacing, boundary_spacing)


def test_boundary_spacing_requires_max_spacing():
    with pytest.raises(InvalidArgument, match="max_spacing"):
        Shape(BOX, box_lsf, boundary_spacing=0.5)


def test_immutable():
    shape = Shape(BOX, box_lsf)
    for name in ("intervals", "lsf", "bound", "center", "size", "max_spacing"):
        with pytest.raises(AttributeError):
            setattr(shape, name, None)
    with pytest.raises(AttributeError):
        shape.intervals[0].bound = (0, 1)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        Shape([[1, 0], [0, 1], [0, 1]], box_lsf)


def test_circumbox_contains():
    shape = Shape(BOX, box_lsf)
    points = jnp.array(
        [
            [1.0, 2.0, 3.0],
            [0.0, 0.0, 0.0],  # On the corner.
            [2.0, 4.0, 6.0],  # On the opposite corner.
            [-0.1, 2.0, 3.0],
            [1.0, 4.1, 3.0],
            [1.0, 2.0, 100.0],
        ]
    )
    np.testing.assert_array_equal(
        shape.circumbox_contains(points), [True, True, True, False, False, False]
    )


def test_circumbox_contains_axis_subset():
    shape = Shape(BOX, box_lsf)
    point = [[1, 100, 100]]
    assert shape.circumbox_contains(point, axes=[Axis.X])[0]
    assert shape.circumbox_contains(point, axes=Axis.X)[0]
    assert not shape.circumbox_contains(point, axes=[Axis.X, Axis.Y])[0]
    assert not shape.circumbox_contains(point)[0]


def test_circumbox_contains_no_axes():
    shape = Shape(BOX, box_lsf)
    assert shape.circumbox_contains([[100, 100, 100]], axes=[])[0]


@pytest.mark.parametrize(
    "axes",
    [
        [Axis.X, Axis.X],
        [Axis.X, Axis.Y, Axis.Z, Axis.X],
        [3],
        ["x"],
        [None],
        [True],
        [1.0],
        [Axis.X, False],
    ],
)
def test_circumbox_contains_invalid_axes(axes):
    shape = Shape(BOX, box_lsf)
    with pytest.raises(InvalidArgument, match="axes"):
        shape.circumbox_contains([[1, 2, 3]], axes=axes)


@pytest.mark.parametrize(
    "points",
    [
        [1.0, 2.0, 3.0],
        [[1.0, 2.0]],
        [[1.0, 2.0, 3.0, 4.0]],
        [[1.0, 2.0, 3.0j]],
        [[2**70, 1, 1]],
    ],
)
def test_queries_reject_malformed_points(points):
    shape = Shape(BOX, box_lsf)
    with pytest.raises(InvalidArgument, match="point"):
        shape.contains(points)
    with pytest.raises(InvalidArgument, match="point"):
        shape.circumbox_contains(points)


def test_contains_excludes_boundary():
    shape = Shape(BOX, box_lsf)
    points = jnp.array([[1.0, 2.0, 3.0], [0.0, 2.0, 3.0], [2.0, 4.0, 6.0], [3.0, 2.0, 3.0]])
    np.testing.assert_array_equal(shape.contains(points), [True, False, False, False])
    # Surface points are still within the circumbox.
    np.testing.assert_array_equal(
        shape.circumbox_contains(points), [True, True, True, False]
    )


def test_contains_empty_batch():
    shape = Shape(BOX, box_lsf)
    assert shape.contains(jnp.zeros((0, 3))).shape == (0,)
    assert shape.circumbox_contains(jnp.zeros((0, 3))).shape == (0,)


def test_contains_batch_consistency():
    shape = Shape(BOX, box_lsf)
    points = jax.random.uniform(
        jax.random.key(0), (50, 3), minval=-1.0, maxval=7.0
    )
    batched = shape.contains(points)
    single = jnp.concatenate([shape.contains(p[None, :]) for p in points])
    np.testing.assert_array_equal(batched, single)


def test_contains_column_vector_lsf():
    shape = Shape(BOX, lambda r: box_lsf(r)[:, None])
    np.testing.assert_array_equal(
        shape.contains([[1.0, 2.0, 3.0], [5.0, 5.0, 5.0]]), [True, False]
    )


def test_contains_wrong_lsf_output_size():
    shape = Shape(BOX, lambda r: jnp.ones(2 * r.shape[0]))
    with pytest.raises(InvalidArgument, match="one value per point"):
        shape.contains([[1.0, 2.0, 3.0]])


def test_contains_propagates_lsf_errors():
    def lsf(r):
        raise RuntimeError("broken level set")

    shape = Shape(BOX, lsf)
    with pytest.raises(RuntimeError, match="broken level set"):
        shape.contains([[1.0, 2.0, 3.0]])


def test_concurrent_queries():
    shape = Shape(BOX, box_lsf, max_spacing=0.5)
    points = jax.random.uniform(jax.random.key(1), (20, 3), maxval=6.0)
    expected = shape.contains(points)
    results = []

    def query():
        results.append(shape.contains(points))

    threads = [threading.Thread(target=query) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(results) == 4
    for result in results:
        np.testing.assert_array_equal(result, expected)


def test_repr():
    assert repr(Shape(BOX, box_lsf)) == (
        "Shape(bound=[[0.0, 2.0], [0.0, 4.0], [0.0, 6.0]])"
    )


def test_large_integer_bound():
    shape = Shape([[0, 2**40], [0, 4], [0, 6]], box_lsf)
    np.testing.assert_array_equal(shape.size, [2**40, 4, 6])
    assert shape.circumbox_contains([[2**39, 1, 1]])[0]


def test_list_arguments_raise_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        shape = Shape(BOX, box_lsf, [0.5, 1.0, 2.0], 0.25)
        shape.contains([[1, 2, 3]])
        shape.circumbox_contains([[1, 2, 3]], axes=[Axis.X])
