"""Euclidean balls, random directions and intersections of balls with bodies."""

import math

import numpy as np


def random_direction(dim, rng):
    """Uniformly random unit vector in ``dim`` dimensions."""
    while True:
        v = rng.standard_normal(dim)
        norm = np.linalg.norm(v)
        if norm > 0.0:
            return v / norm


def random_point_in_ball(dim, radius, rng):
    """Uniformly random point in the origin-centred ball of the given radius."""
    scale = radius * rng.uniform() ** (1.0 / dim)
    return random_direction(dim, rng) * scale


class Ball:
    """Euclidean ball given by its centre and squared radius."""

    def __init__(self, center, radius_squared):
        self.center = np.asarray(center, dtype=float)
        if radius_squared < 0:
            raise ValueError("the squared radius must be non-negative")
        self.radius_squared = float(radius_squared)

    def dimension(self):
        """Dimension of the ambient space."""
        return self.center.shape[0]

    def radius(self):
        """Radius of the ball."""
        return math.sqrt(self.radius_squared)

    def is_in(self, p):
        """Whether ``p`` lies in the closed ball."""
        diff = np.asarray(p, dtype=float) - self.center
        return float(diff @ diff) <= self.radius_squared

    def line_intersect(self, r, v):
        """Return the roots ``(upper, lower)`` of ``|r + t v - c| = R``."""
        r = np.asarray(r, dtype=float)
        v = np.asarray(v, dtype=float)
        rc = r - self.center
        vv = float(v @ v)
        if vv == 0.0:
            raise ValueError("the direction must be a non-zero vector")
        b = float(v @ rc)
        delta = b * b - vv * (float(rc @ rc) - self.radius_squared)
        if delta < 0.0:
            raise ValueError("the line does not meet the ball")
        root = math.sqrt(delta)
        return (-b + root) / vv, (-b - root) / vv

    def line_positive_intersect(self, r, v):
        """Return the positive root and facet id 0."""
        return self.line_intersect(r, v)[0], 0

    def line_intersect_coord(self, r, coord):
        """Intersect the line through ``r`` along coordinate axis ``coord``."""
        direction = np.zeros(self.dimension())
        direction[coord] = 1.0
        return self.line_intersect(r, direction)

    def compute_reflection(self, v, p, facet):
        """Reflect ``v`` on the tangent plane of the sphere at ``p``."""
        v = np.asarray(v, dtype=float)
        normal = np.asarray(p, dtype=float) - self.center
        normal = normal / np.linalg.norm(normal)
        return v - 2.0 * (v @ normal) * normal


class BallIntersectPolytope:
    """Intersection of a convex body with a ball."""

    def __init__(self, polytope, ball):
        self.polytope = polytope
        self.ball = ball

    def dimension(self):
        """Dimension of the ambient space."""
        return self.polytope.dimension()

    def radius(self):
        """Radius of the ball."""
        return self.ball.radius()

    def inner_ball(self):
        """Inner ball of the body."""
        return self.polytope.inner_ball()

    def num_of_hyperplanes(self):
        """Facet count of the body; also the facet id that stands for the ball."""
        return self.polytope.num_of_hyperplanes()

    def is_in(self, p):
        """Whether ``p`` lies in both the ball and the body."""
        return self.ball.is_in(p) and self.polytope.is_in(p)

    def line_intersect(self, r, v):
        """Return ``(upper, lower)`` for the intersection along ``r + t v``."""
        poly_upper, poly_lower = self.polytope.line_intersect(r, v)
        ball_upper, ball_lower = self.ball.line_intersect(r, v)
        return min(poly_upper, ball_upper), max(poly_lower, ball_lower)

    def line_positive_intersect(self, r, v):
        """Return the first positive hit and the facet it lies on."""
        poly_t, poly_facet = self.polytope.line_positive_intersect(r, v)
        ball_t, _ = self.ball.line_positive_intersect(r, v)
        facet = poly_facet if poly_t < ball_t else self.polytope.num_of_hyperplanes()
        return min(poly_t, ball_t), facet

    def line_intersect_coord(self, r, coord):
        """Intersect the line through ``r`` along coordinate axis ``coord``."""
        poly_upper, poly_lower = self.polytope.line_intersect_coord(r, coord)
        ball_upper, ball_lower = self.ball.line_intersect_coord(r, coord)
        return min(poly_upper, ball_upper), max(poly_lower, ball_lower)

    def compute_reflection(self, v, p, facet):
        """Reflect ``v`` on the ball or on the body, according to ``facet``."""
        if facet == self.polytope.num_of_hyperplanes():
            return self.ball.compute_reflection(v, p, facet)
        return self.polytope.compute_reflection(v, p, facet)