import math

import numpy as np
import pytest

from convexvol.exact import exact_zonotope_volume
from convexvol.zonotope import Zonotope


@pytest.fixture
def square():
    return Zonotope(np.eye(2))


@pytest.fixture
def hexagon():
    return Zonotope([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])


def test_counts(hexagon):
    assert hexagon.dimension() == 2
    assert hexagon.num_of_generators() == 3
    assert hexagon.num_of_hyperplanes() == 0
    assert hexagon.upper_bound_of_hyperplanes() == 4
    assert hexagon.get_dists(0.3) == [0.3] * 4


def test_too_few_generators():
    with pytest.raises(ValueError):
        Zonotope([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])


def test_membership(square, hexagon):
    assert square.is_in([0.5, -0.5])
    assert not square.is_in([1.5, 0.0])
    assert hexagon.is_in([1.9, 1.9])
    assert not hexagon.is_in([1.9, -1.9])


def test_line_intersect_hits_boundary(hexagon):
    r = np.array([0.2, -0.1])
    v = np.array([0.6, 0.8])
    upper, lower = hexagon.line_intersect(r, v)
    assert upper > 0 > lower
    assert hexagon.is_in(r + upper * v)
    assert hexagon.is_in(r + lower * v)
    assert not hexagon.is_in(r + (upper + 0.01) * v)
    assert not hexagon.is_in(r + (lower - 0.01) * v)


def test_square_chord(square):
    upper, lower = square.line_intersect([0.0, 0.0], [1.0, 0.0])
    assert upper == pytest.approx(1.0)
    assert lower == pytest.approx(-1.0)


def test_line_intersect_coord_matches_axis(hexagon):
    r = [0.3, 0.4]
    assert hexagon.line_intersect_coord(r, 1) == pytest.approx(
        hexagon.line_intersect(r, [0.0, 1.0])
    )


def test_line_positive_intersect(hexagon):
    r = [0.0, 0.0]
    t, facet = hexagon.line_positive_intersect(r, [1.0, -1.0])
    assert facet == 1
    assert t == pytest.approx(hexagon.line_intersect(r, [1.0, -1.0])[0])


def test_line_missing_body(square):
    with pytest.raises(ValueError):
        square.line_intersect([5.0, 5.0], [1.0, 0.0])


def test_inner_ball_inside(hexagon):
    center, radius = hexagon.compute_inner_ball()
    assert radius > 0
    assert np.allclose(center, 0.0)
    for angle in np.linspace(0.0, 2 * math.pi, 12):
        point = center + 0.999 * radius * np.array([math.cos(angle), math.sin(angle)])
        assert hexagon.is_in(point)
    assert hexagon.inner_ball()[1] == radius


def test_square_inner_ball(square):
    _, radius = square.inner_ball()
    assert radius == pytest.approx(1.0 / math.sqrt(2.0))


def test_linear_transform_maps_points(hexagon):
    t = np.array([[2.0, 1.0], [0.0, 3.0]])
    original = Zonotope(hexagon.generators)
    hexagon.linear_transform(t)
    for p in ([0.1, 0.2], [0.6, 0.1], [-0.4, 0.5], [0.9, 0.9]):
        assert hexagon.is_in(p) == original.is_in(t @ np.array(p))


def test_linear_transform_scales_volume(hexagon):
    t = np.array([[2.0, 1.0], [0.0, 3.0]])
    before = exact_zonotope_volume(hexagon.generators)
    hexagon.linear_transform(t)
    after = exact_zonotope_volume(hexagon.generators)
    assert after == pytest.approx(before / abs(np.linalg.det(t)))


def test_shift_is_noop(hexagon):
    before = hexagon.generators.copy()
    hexagon.shift(np.array([1.0, 1.0]))
    hexagon.normalize()
    assert np.array_equal(hexagon.generators, before)


def test_reflection_on_square_facet(square):
    v = np.array([1.0, 0.5]) / np.linalg.norm([1.0, 0.5])
    t, facet = square.line_positive_intersect([0.0, 0.0], v)
    p = t * v
    reflected = square.compute_reflection(v, p, facet)
    assert np.allclose(reflected, [-v[0], v[1]])


def test_reflection_preserves_length(hexagon):
    v = np.array([0.3, 0.7])
    t, facet = hexagon.line_positive_intersect([0.1, 0.0], v)
    p = np.array([0.1, 0.0]) + t * v
    reflected = hexagon.compute_reflection(v, p, facet)
    assert np.linalg.norm(reflected) == pytest.approx(np.linalg.norm(v))


def test_eigen_structure(hexagon):
    assert hexagon.q0.shape == (3, 1)
    assert np.allclose(hexagon.generators.T @ hexagon.q0, 0.0)
    assert hexagon.t.shape == (2, 3)
    assert np.allclose(hexagon.t @ hexagon.q0, 0.0)