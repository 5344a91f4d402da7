import math

import numpy as np
import pytest

from convexvol.ball import (
    Ball,
    BallIntersectPolytope,
    random_direction,
    random_point_in_ball,
)
from convexvol.zonotope import Zonotope


def test_random_direction_is_unit():
    rng = np.random.default_rng(1)
    for _ in range(20):
        assert np.linalg.norm(random_direction(4, rng)) == pytest.approx(1.0)


def test_random_point_in_ball_within_radius():
    rng = np.random.default_rng(2)
    points = [random_point_in_ball(3, 2.5, rng) for _ in range(200)]
    assert all(np.linalg.norm(p) <= 2.5 for p in points)
    assert max(np.linalg.norm(p) for p in points) > 2.0


def test_ball_basic():
    ball = Ball([1.0, 1.0], 4.0)
    assert ball.dimension() == 2
    assert ball.radius() == pytest.approx(2.0)
    assert ball.is_in([2.0, 2.0])
    assert not ball.is_in([3.5, 1.0])


def test_ball_line_intersect_on_sphere():
    ball = Ball([1.0, -1.0, 0.5], 9.0)
    r = np.array([0.5, 0.0, 0.0])
    v = np.array([0.2, 0.4, -1.0])
    upper, lower = ball.line_intersect(r, v)
    assert upper > 0 > lower
    for t in (upper, lower):
        diff = r + t * v - ball.center
        assert diff @ diff == pytest.approx(9.0)


def test_ball_line_misses():
    with pytest.raises(ValueError):
        Ball([0.0, 0.0], 1.0).line_intersect([5.0, 5.0], [1.0, 0.0])


def test_ball_coord_and_positive():
    ball = Ball([0.0, 0.0], 1.0)
    assert ball.line_intersect_coord([0.0, 0.5], 0) == pytest.approx(
        ball.line_intersect([0.0, 0.5], [1.0, 0.0])
    )
    t, _ = ball.line_positive_intersect([0.0, 0.0], [0.0, 1.0])
    assert t == pytest.approx(ball.radius())


def test_ball_reflection():
    ball = Ball([0.0, 0.0], 1.0)
    p = np.array([1.0, 0.0])
    v = np.array([0.6, 0.8])
    reflected = ball.compute_reflection(v, p, 0)
    assert np.allclose(reflected, [-v[0], v[1]])


def test_intersection_membership():
    body = BallIntersectPolytope(Zonotope(np.eye(2)), Ball([0.0, 0.0], 0.25))
    assert body.dimension() == 2
    assert body.radius() == pytest.approx(0.5)
    assert body.num_of_hyperplanes() == 0
    assert body.is_in([0.3, 0.0])
    assert not body.is_in([0.6, 0.0])
    assert not body.is_in([1.5, 0.0])


def test_intersection_line_takes_tighter_bounds():
    cube = Zonotope(np.eye(2))
    ball = Ball([0.0, 0.0], 0.25)
    body = BallIntersectPolytope(cube, ball)
    r, v = [0.1, 0.0], [1.0, 0.0]
    upper, lower = body.line_intersect(r, v)
    assert upper == pytest.approx(ball.line_intersect(r, v)[0])
    assert lower == pytest.approx(ball.line_intersect(r, v)[1])
    assert body.line_intersect_coord(r, 0) == pytest.approx((upper, lower))


def test_positive_intersect_facet_selection():
    small = BallIntersectPolytope(Zonotope(np.eye(2)), Ball([0.0, 0.0], 0.25))
    t, facet = small.line_positive_intersect([0.0, 0.0], [1.0, 0.0])
    assert facet == small.num_of_hyperplanes()
    assert t == pytest.approx(small.radius())

    large = BallIntersectPolytope(Zonotope(np.eye(2)), Ball([0.0, 0.0], 16.0))
    t, facet = large.line_positive_intersect([0.0, 0.0], [1.0, 0.0])
    assert facet == 1
    assert t < large.radius()


def test_intersection_reflection_dispatch():
    cube = Zonotope(np.eye(2))
    body = BallIntersectPolytope(cube, Ball([0.0, 0.0], 16.0))
    v = np.array([1.0, 0.5]) / math.hypot(1.0, 0.5)
    t, facet = body.line_positive_intersect([0.0, 0.0], v)
    reflected = body.compute_reflection(v, t * v, facet)
    assert np.allclose(reflected, [-v[0], v[1]])

    ball_only = BallIntersectPolytope(cube, Ball([0.0, 0.0], 0.25))
    p = np.array([0.0, 0.5])
    w = np.array([0.6, 0.8])
    assert np.allclose(ball_only.compute_reflection(w, p, 0), [w[0], -w[1]])


def test_intersection_inner_ball_from_polytope():
    cube = Zonotope(np.eye(2))
    body = BallIntersectPolytope(cube, Ball([0.0, 0.0], 0.25))
    assert body.inner_ball()[1] == pytest.approx(cube.inner_ball()[1])