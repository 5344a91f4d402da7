"""Random walks on convex bodies: hit-and-run variants and the ball walk.

A body is any object with ``dimension()``, ``is_in(p)``,
``line_intersect(r, v)`` and ``line_intersect_coord(r, coord)``. The last two
return ``(upper, lower)``, the extreme values of ``t`` for which ``r + t v``
stays in the body. Random numbers come from a :class:`numpy.random.Generator`.
"""

import math

import numpy as np

from convexvol.ball import random_direction, random_point_in_ball

EXP_CHORD_TOLERANCE = 1e-8


def _check_walk_length(walk_length, minimum=0):
    if isinstance(walk_length, bool) or not isinstance(walk_length, (int, np.integer)):
        raise TypeError("the walk length must be an integer")
    if walk_length < minimum:
        raise ValueError(f"the walk length must be at least {minimum}")
    return int(walk_length)


def _start_point(body, p):
    point = np.array(p, dtype=float).reshape(-1)
    if point.shape[0] != body.dimension():
        raise ValueError(
            f"the starting point has {point.shape[0]} coordinates, "
            f"the body has dimension {body.dimension()}"
        )
    return point


def _max_density(lower, upper, a):
    """Maximum of ``exp(-a x^2)`` over ``[lower, upper]``."""
    if lower < 0.0 < upper:
        return 1.0
    nearest = upper if upper <= 0.0 else lower
    return math.exp(-a * nearest * nearest)


def chord_random_point_exp_coord(lower, upper, a, rng):
    """Draw from the density ``exp(-a x^2)`` restricted to ``[lower, upper]``.

    When the interval holds enough of the Gaussian's mass, a one-dimensional
    normal is sampled until it lands inside; otherwise rejection sampling from
    a bounding rectangle is used.
    """
    if lower > upper:
        raise ValueError("the lower end of the chord exceeds the upper end")
    if a > EXP_CHORD_TOLERANCE and upper - lower >= 2.0 / math.sqrt(2.0 * a):
        scale = math.sqrt(2.0 * a)
        while True:
            r = rng.standard_normal() / scale
            if lower <= r <= upper:
                return float(r)
    bound = _max_density(lower, upper, a)
    while True:
        r = rng.uniform()
        candidate = (1.0 - r) * lower + r * upper
        if bound * rng.uniform() < math.exp(-a * candidate * candidate):
            return float(candidate)


class CDHRWalk:
    """Coordinate-directions hit-and-run with uniform target distribution."""

    def __init__(self, body, p, rng):
        self._p = _start_point(body, p)
        self._step(body, rng)

    @property
    def point(self):
        """Current position of the walk."""
        return self._p.copy()

    def _step(self, body, rng):
        coord = int(rng.integers(body.dimension()))
        kapa = rng.uniform()
        upper, lower = body.line_intersect_coord(self._p, coord)
        self._p[coord] += upper + kapa * (lower - upper)

    def apply(self, body, walk_length, rng):
        """Take ``walk_length`` steps and return the new position."""
        for _ in range(_check_walk_length(walk_length)):
            self._step(body, rng)
        return self._p.copy()


class BoundaryCDHRWalk:
    """Coordinate-directions hit-and-run that yields the chord endpoints on the boundary."""

    def __init__(self, body, p, rng):
        self._p = _start_point(body, p)
        self._step(body, rng)

    @property
    def point(self):
        """Current interior position of the walk."""
        return self._p.copy()

    def _step(self, body, rng):
        coord = int(rng.integers(body.dimension()))
        kapa = rng.uniform()
        upper, lower = body.line_intersect_coord(self._p, coord)
        previous = self._p.copy()
        self._p[coord] += upper + kapa * (lower - upper)
        return previous, coord, upper, lower

    def apply(self, body, walk_length, rng):
        """Take ``walk_length`` steps; return the two boundary points of the last chord."""
        last = None
        for _ in range(_check_walk_length(walk_length, minimum=1)):
            last = self._step(body, rng)
        previous, coord, upper, lower = last
        first = previous.copy()
        second = previous.copy()
        first[coord] = previous[coord] + upper
        second[coord] = previous[coord] + lower
        return first, second


class BoundaryRDHRWalk:
    """Random-directions hit-and-run that yields the chord endpoints on the boundary."""

    def __init__(self, body, p, rng):
        self._p = _start_point(body, p)
        self._step(body, rng)

    @property
    def point(self):
        """Current interior position of the walk."""
        return self._p.copy()

    def _step(self, body, rng):
        v = random_direction(body.dimension(), rng)
        upper, lower = body.line_intersect(self._p, v)
        lam = rng.uniform() * (upper - lower) + lower
        first = self._p + upper * v
        second = self._p + lower * v
        self._p = self._p + lam * v
        return first, second

    def apply(self, body, walk_length, rng):
        """Take ``walk_length`` steps; return the two boundary points of the last chord."""
        last = None
        for _ in range(_check_walk_length(walk_length, minimum=1)):
            last = self._step(body, rng)
        return last


class GaussianCDHRWalk:
    """Coordinate-directions hit-and-run targeting the density ``exp(-a |x|^2)``."""

    def __init__(self, body, p, a, rng):
        self._p = _start_point(body, p)
        self._step(body, a, rng)

    @property
    def point(self):
        """Current position of the walk."""
        return self._p.copy()

    def _step(self, body, a, rng):
        coord = int(rng.integers(body.dimension()))
        upper, lower = body.line_intersect_coord(self._p, coord)
        current = self._p[coord]
        self._p[coord] = chord_random_point_exp_coord(
            current + lower, current + upper, a, rng
        )

    def apply(self, body, a, walk_length, rng):
        """Take ``walk_length`` steps and return the new position."""
        for _ in range(_check_walk_length(walk_length)):
            self._step(body, a, rng)
        return self._p.copy()


class BallWalk:
    """Ball walk with uniform target distribution.

    Each step proposes a uniform point in the ball of radius ``delta`` around
    the current position and moves there if it lies in the body.
    """

    def __init__(self, body, p, rng, delta=None):
        self._p = _start_point(body, p)
        if delta is None:
            delta = self.compute_delta(body)
        elif delta <= 0.0:
            raise ValueError("the ball walk radius must be positive")
        self.delta = float(delta)

    @staticmethod
    def compute_delta(body):
        """Default step radius: four times the inner radius over the root of the dimension."""
        return 4.0 * body.inner_ball()[1] / math.sqrt(body.dimension())

    @property
    def point(self):
        """Current position of the walk."""
        return self._p.copy()

    def apply(self, body, walk_length, rng):
        """Take ``walk_length`` steps and return the new position."""
        dim = body.dimension()
        for _ in range(_check_walk_length(walk_length)):
            candidate = self._p + random_point_in_ball(dim, self.delta, rng)
            if body.is_in(candidate):
                self._p = candidate
        return self._p.copy()