"""Volume of a convex body by annealing with a sequence of balls.

A chain of balls ``B_1, ..., B_k`` is built so that the body intersected with
each ball holds a controlled fraction of the next one. The volume of the body
is the volume of the last ball times a product of ratios estimated by sampling.
"""

import copy
import math
import statistics
from dataclasses import dataclass

import numpy as np
from scipy.stats import t as student_t

from convexvol.ball import Ball, BallIntersectPolytope, random_point_in_ball
from convexvol.policies import PushBackPolicy
from convexvol.ratio import (
    estimate_ratio_by_walk,
    estimate_ratio_in_ball,
    estimate_ratio_interval_by_walk,
    estimate_ratio_interval_in_ball,
)
from convexvol.walks import CDHRWalk

_MAX_ITERATIONS = 20
_TOLERANCE = 1e-11
_FIRST_BALL_SAMPLES = 1200
_FIRST_BALL_NU = 10
_ALPHA_CHECK = 0.01
_BALL_RATIO_SAMPLES = 1200


class ConvergenceError(RuntimeError):
    """Raised when no suitable sequence of balls can be found."""


@dataclass
class CoolingBallParameters:
    """Tuning of the ball annealing schedule."""

    lb: float = 0.1
    ub: float = 0.15
    p: float = 0.75
    rmax: float = 0.0
    alpha: float = 0.2
    win_len: int = 250
    N: int = 125
    nu: int = 10
    window2: bool = False


def _mean_std(values):
    return statistics.fmean(values), math.sqrt(statistics.variance(values))


def check_convergence(body, points, nu, precheck, lastball, parameters):
    """Test whether the fraction of ``points`` inside ``body`` lies in ``[lb, ub]``.

    The points are split into ``nu`` batches; a Student-t test on the batch
    ratios decides. Returns ``(passed, too_few, ratio)`` where ``too_few``
    tells that the fraction is below the lower bound.
    """
    points = list(points)
    if nu < 2:
        raise ValueError("at least two batches are needed")
    if len(points) < nu:
        raise ValueError(f"need at least {nu} points, got {len(points)}")
    batch = len(points) // nu

    ratios = []
    counts_in = 0
    ratio = 0.0
    for i, p in enumerate(points, start=1):
        if body.is_in(p):
            counts_in += 1
        if i % batch == 0:
            ratios.append(counts_in / batch)
            counts_in = 0
            if precheck and len(ratios) > 1:
                ratio, spread = _mean_std(ratios)
                quantile = student_t.isf(_ALPHA_CHECK / 2.0, len(ratios) - 1)
                bound = spread * quantile / math.sqrt(len(ratios))
                if ratio + bound < parameters.lb:
                    return False, True, ratio
                if ratio - bound > parameters.ub:
                    return False, False, ratio

    alpha = parameters.alpha * 0.5 if precheck else parameters.alpha
    ratio, spread = _mean_std(ratios)
    bound = spread * student_t.isf(alpha, nu - 1) / math.sqrt(nu)
    if ratio > parameters.lb + bound:
        if lastball:
            return True, False, ratio
        if (precheck and ratio < parameters.ub - bound) or (
            not precheck and ratio < parameters.ub + bound
        ):
            return True, False, ratio
        return False, False, ratio
    return False, True, ratio


def _sample_ball(dim, radius, rng):
    return [random_point_in_ball(dim, radius, rng) for _ in range(_FIRST_BALL_SAMPLES)]


def get_first_ball(body, radius, parameters, rng):
    """Find the outermost ball, centred at the origin; returns ``(ball, ratio)``.

    ``radius`` is the radius of a ball known to lie inside ``body``.
    """
    dim = body.dimension()
    sqrt_n = math.sqrt(dim)
    origin = np.zeros(dim)
    rmax = parameters.rmax
    radius1 = radius
    bisection = False

    if rmax > 0.0:
        passed, too_few, ratio = check_convergence(
            body, _sample_ball(dim, rmax, rng), _FIRST_BALL_NU, True, False, parameters
        )
        if passed or not too_few:
            return Ball(origin, rmax * rmax), ratio
        bisection = True
    else:
        rmax = 2.0 * sqrt_n * radius1

    while not bisection:
        passed, too_few, ratio = check_convergence(
            body, _sample_ball(dim, rmax, rng), _FIRST_BALL_NU, True, False, parameters
        )
        if passed:
            return Ball(origin, rmax * rmax), ratio
        if too_few:
            break
        radius1 = rmax
        rmax = rmax + 2.0 * sqrt_n * radius

    rad_low, rad_high = radius1, rmax
    iteration = 1
    while iteration <= _MAX_ITERATIONS:
        rad_med = 0.5 * (radius1 + rmax)
        passed, too_few, ratio = check_convergence(
            body, _sample_ball(dim, rad_med, rng), _FIRST_BALL_NU, True, False, parameters
        )
        if passed:
            return Ball(origin, rad_med * rad_med), ratio
        if too_few:
            rmax = rad_med
        else:
            radius1 = rad_med
        if rmax - radius1 < _TOLERANCE:
            radius1, rmax = rad_low, rad_high
            iteration += 1
    raise ConvergenceError("could not find the first ball of the sequence")


def get_next_ball(points, rad_min, parameters):
    """Find the next, smaller ball by bisection on its radius; returns ``(ball, ratio)``."""
    points = list(points)
    if not points:
        raise ValueError("no points to fit a ball to")
    dim = len(points[0])
    origin = np.zeros(dim)
    radmax = math.sqrt(max(float(np.dot(p, p)) for p in points))
    radmin = rad_min
    radmin_init, radmax_init = radmin, radmax

    iteration = 1
    while iteration <= _MAX_ITERATIONS:
        rad = 0.5 * (radmin + radmax)
        candidate = Ball(origin, rad * rad)
        passed, too_few, ratio = check_convergence(
            candidate, points, parameters.nu, False, False, parameters
        )
        if passed:
            return candidate, ratio
        if too_few:
            radmin = rad
        else:
            radmax = rad
        if radmax - radmin < _TOLERANCE:
            radmin, radmax = radmin_init, radmax_init
            iteration += 1
    raise ConvergenceError("could not find the next ball of the sequence")


def _walk_sample(body, count, walk_length, rng, walk_type):
    policy = PushBackPolicy()
    points = []
    walk = walk_type(body, np.zeros(body.dimension()), rng)
    for _ in range(count):
        policy.apply(points, walk.apply(body, walk_length, rng))
    return points


def get_sequence_of_balls(body, radius, walk_length, parameters, rng, walk_type=CDHRWalk):
    """Build the ball sequence; returns ``(balls, ratios)``.

    ``balls`` ends with the outermost ball and ``ratios`` holds one more entry
    than ``balls``: its last value is the fraction of that ball in ``body``.
    """
    total = parameters.N * parameters.nu
    first, ratio0 = get_first_ball(body, radius, parameters, rng)
    balls = []
    ratios = []

    points = _walk_sample(body, total, walk_length, rng, walk_type)
    while True:
        passed, _, ratio = check_convergence(
            first, points, parameters.nu, False, True, parameters
        )
        if passed:
            ratios.append(ratio)
            balls.append(first)
            ratios.append(ratio0)
            return balls, ratios
        ball, ratio = get_next_ball(points, first.radius(), parameters)
        balls.append(ball)
        ratios.append(ratio)
        restricted = BallIntersectPolytope(body, balls[-1])
        points = _walk_sample(restricted, total, walk_length, rng, walk_type)


def volume_cooling_balls(body, error=0.1, walk_length=1, win_len=250, seed=None):
    """Estimate the volume of ``body`` with relative error about ``error``.

    ``body`` is copied, not modified.
    """
    if error <= 0.0:
        raise ValueError("the error must be positive")
    if walk_length < 1:
        raise ValueError("the walk length has to be a positive integer")
    if win_len < 1:
        raise ValueError("the window length has to be a positive integer")

    rng = np.random.default_rng(seed)
    walk_type = CDHRWalk
    poly = copy.deepcopy(body)
    parameters = CoolingBallParameters(win_len=win_len)
    dim = poly.dimension()
    total = parameters.N * parameters.nu

    center, radius = poly.compute_inner_ball()
    poly.normalize()
    poly.shift(np.asarray(center, dtype=float))

    balls, ratios = get_sequence_of_balls(
        poly, radius, walk_length, parameters, rng, walk_type
    )

    last_radius = balls[-1].radius()
    volume = math.pi ** (dim / 2.0) * last_radius**dim / math.gamma(dim / 2.0 + 1.0)

    count = len(balls) + 1
    prob = parameters.p ** (1.0 / count)
    er0 = error / (2.0 * math.sqrt(count))
    er1 = error * math.sqrt(4.0 * count - 1) / (2.0 * math.sqrt(count))

    if parameters.window2:
        volume *= estimate_ratio_in_ball(
            balls[-1], poly, ratios[-1], er0, parameters.win_len, _BALL_RATIO_SAMPLES, rng
        )
    else:
        volume *= estimate_ratio_interval_in_ball(
            balls[-1], poly, ratios[-1], er0, parameters.win_len,
            _BALL_RATIO_SAMPLES, prob, rng,
        )

    er1 = er1 / math.sqrt(count - 1.0)

    if ratios[0] != 1:
        if parameters.window2:
            estimate = estimate_ratio_by_walk(
                poly, balls[0], ratios[0], er1, parameters.win_len, total,
                walk_length, rng, walk_type,
            )
        else:
            estimate = estimate_ratio_interval_by_walk(
                poly, balls[0], ratios[0], er1, parameters.win_len, total, prob,
                walk_length, rng, walk_type,
            )
        volume /= estimate

    for index, ball in enumerate(balls[:-1]):
        restricted = BallIntersectPolytope(poly, ball)
        if parameters.window2:
            estimate = estimate_ratio_by_walk(
                restricted, ball, ratios[index], er1, parameters.win_len, total,
                walk_length, rng, walk_type,
            )
        else:
            estimate = estimate_ratio_interval_by_walk(
                restricted, balls[index + 1], ratios[index + 1], er1,
                parameters.win_len, total, prob, walk_length, rng, walk_type,
            )
        volume /= estimate

    return volume