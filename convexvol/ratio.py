"""Sliding-window estimators for the volume ratio of two nested convex bodies.

Points are drawn from the outer body, either exactly (uniform points in a
ball) or by a random walk. Each point is tested against the inner body. The
running fraction of hits is watched over a window of the last ``window``
values. Estimation stops once that window is tight enough.
"""

import math
import sys

import numpy as np
from scipy.stats import norm

from convexvol.ball import random_point_in_ball
from convexvol.walks import CDHRWalk

MAX_ITERATIONS_ESTIMATION = 10_000_000


def is_max_error(a, b, error):
    """Whether the relative width ``(b - a) / a`` is below ``error / 2``."""
    numerator = b - a
    if a == 0:
        if numerator == 0 or math.isnan(numerator):
            return False
        quotient = math.copysign(math.inf, numerator) * math.copysign(1.0, a)
        return quotient < error / 2.0
    return numerator / a < error / 2.0


def _check_window(window):
    if isinstance(window, bool) or not isinstance(window, (int, np.integer)):
        raise TypeError("the window length must be an integer")
    if window < 1:
        raise ValueError("the window length must be a positive integer")
    return int(window)


def _check_total(total):
    if total < 0:
        raise ValueError("the initial number of points must be non-negative")
    return int(total)


def _check_prob(prob):
    if not 0.0 < prob < 1.0:
        raise ValueError("the probability must lie strictly between 0 and 1")
    return float(norm.isf((1.0 - prob) / 2.0))


class RatioWindow:
    """Stops when the spread of the last ``window`` running ratios is small.

    The counters start as if ``total`` points had been drawn, of which the
    fraction ``ratio`` (truncated to an integer count) fell inside.
    """

    def __init__(self, window, total, ratio):
        self.window = _check_window(window)
        self.tot_count = _check_total(total)
        self.count_in = int(self.tot_count * ratio)
        self.min_val = -sys.float_info.max
        self.max_val = sys.float_info.max
        self.min_index = self.window - 1
        self.max_index = self.window - 1
        self.index = 0
        self.iter = 0
        self.last_w = [0.0] * self.window

    def update(self, body, p, error):
        """Record point ``p``; return whether the estimate has converged."""
        if self.iter > MAX_ITERATIONS_ESTIMATION:
            self.iter += 1
            return True
        self.iter += 1

        if body.is_in(p):
            self.count_in += 1
        self.tot_count += 1
        val = self.count_in / self.tot_count
        self.last_w[self.index] = val

        if val <= self.min_val:
            self.min_val = val
            self.min_index = self.index
        elif self.min_index == self.index:
            self.min_val = min(self.last_w)
            self.min_index = self.last_w.index(self.min_val)

        if val >= self.max_val:
            self.max_val = val
            self.max_index = self.index
        elif self.max_index == self.index:
            self.max_val = max(self.last_w)
            self.max_index = self.last_w.index(self.max_val)

        if self.max_val != 0.0:
            spread = self.max_val - self.min_val
            if math.isfinite(spread) and spread / self.max_val <= error / 2.0:
                return True

        self.index = (self.index + 1) % self.window
        return False

    def ratio(self):
        """Current fraction of points that fell inside."""
        return self.count_in / self.tot_count


class RatioIntervalWindow:
    """Stops when a normal confidence interval around the running ratio is tight.

    The window must first be filled with :meth:`fill`; :meth:`update` then
    slides it and tests for convergence.
    """

    def __init__(self, window, total, ratio):
        self.window = _check_window(window)
        self.tot_count = _check_total(total)
        self.count_in = int(self.tot_count * ratio)
        self.mean = 0.0
        self.sum_sq = 0.0
        self.sum = 0.0
        self.s = 0.0
        self.index = 0
        self.iter = 0
        self.last_w = [0.0] * self.window

    def _record(self, body, p):
        if body.is_in(p):
            self.count_in += 1
        self.tot_count += 1
        return self.count_in / self.tot_count

    def fill(self, body, p):
        """Record ``p`` while filling the window, without testing convergence."""
        val = self._record(body, p)
        self.sum += val
        self.sum_sq += val * val
        self.last_w[self.index] = val
        self.index = (self.index + 1) % self.window
        self.mean = self.sum / self.window

    def update(self, body, p, error, zp):
        """Record ``p``; return whether ``val +- zp * s`` is within ``error``."""
        if self.iter > MAX_ITERATIONS_ESTIMATION:
            self.iter += 1
            return True
        self.iter += 1

        val = self._record(body, p)
        width = float(self.window)
        old = self.last_w[self.index]

        self.mean = (self.mean - old / width) + val / width
        self.sum_sq = (self.sum_sq - old * old) + val * val
        self.sum = (self.sum - old) + val
        variance = (
            self.sum_sq + width * self.mean * self.mean - 2.0 * self.mean * self.sum
        ) / width
        self.s = math.sqrt(variance) if variance >= 0.0 else math.nan

        self.last_w[self.index] = val
        self.index = (self.index + 1) % self.window

        return is_max_error(val - zp * self.s, val + zp * self.s, error)

    def ratio(self):
        """Current fraction of points that fell inside."""
        return self.count_in / self.tot_count


def _ball_points(ball, rng):
    dim = ball.dimension()
    radius = ball.radius()
    center = ball.center
    while True:
        yield center + random_point_in_ball(dim, radius, rng)


def _walk_points(outer, walk_length, rng, walk_type):
    walk = walk_type(outer, np.zeros(outer.dimension()), rng)
    while True:
        yield walk.apply(outer, walk_length, rng)


def estimate_ratio_in_ball(ball, body, ratio, error, window, total, rng):
    """Estimate ``vol(body ∩ ball) / vol(ball)`` from uniform points in ``ball``."""
    estimator = RatioWindow(window, total, ratio)
    for p in _ball_points(ball, rng):
        if estimator.update(body, p, error):
            return estimator.ratio()


def estimate_ratio_by_walk(
    outer, inner, ratio, error, window, total, walk_length, rng, walk_type=CDHRWalk
):
    """Estimate ``vol(inner ∩ outer) / vol(outer)`` from a random walk in ``outer``."""
    estimator = RatioWindow(window, total, ratio)
    for p in _walk_points(outer, walk_length, rng, walk_type):
        if estimator.update(inner, p, error):
            return estimator.ratio()


def _interval_estimate(points, body, ratio, error, window, total, prob):
    zp = _check_prob(prob)
    estimator = RatioIntervalWindow(window, total, ratio)
    for _ in range(estimator.window):
        estimator.fill(body, next(points))
    estimator.mean = estimator.sum / estimator.window
    for p in points:
        if estimator.update(body, p, error, zp):
            return estimator.ratio()


def estimate_ratio_interval_in_ball(ball, body, ratio, error, window, total, prob, rng):
    """Confidence-interval estimate of ``vol(body ∩ ball) / vol(ball)``."""
    return _interval_estimate(
        _ball_points(ball, rng), body, ratio, error, window, total, prob
    )


def estimate_ratio_interval_by_walk(
    outer,
    inner,
    ratio,
    error,
    window,
    total,
    prob,
    walk_length,
    rng,
    walk_type=CDHRWalk,
):
    """Confidence-interval estimate of ``vol(inner ∩ outer) / vol(outer)`` by a walk."""
    return _interval_estimate(
        _walk_points(outer, walk_length, rng, walk_type),
        inner,
        ratio,
        error,
        window,
        total,
        prob,
    )