# convexvol

Tools for convex bodies in Python: exact and randomized volume computation,
random walks for sampling, and helpers for two plain-text formats.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What is inside

- `convexvol.exact`
  - `exact_zonotope_volume(generators)` gives the exact volume of the zonotope
    whose generators are the rows of `generators`. Each generator `g` adds the
    segment `[-g, g]`.
  - `comb(n, k)` lists every k-element combination of `range(n)` in
    lexicographic order.
  - `vol_ali(plane, zit, dim)` gives the fraction of the unit simplex that lies
    on the negative side of a hyperplane.
- `convexvol.zonotope.Zonotope(generators)` is a zonotope given by a
  `k x d` generator matrix. It offers:
  - membership tests (`is_in`) and ray intersections (`line_intersect`,
    `line_positive_intersect`, `line_intersect_coord`), all solved as linear
    programs with SciPy;
  - an inner ball centred at the origin (`compute_inner_ball`, `inner_ball`);
  - `linear_transform(t)`, which maps the zonotope by the inverse of `t`;
  - `compute_reflection`, which reflects a direction on a facet.

  `shift` only checks the length of the vector, because the zonotope always
  stays centred at the origin.
- `convexvol.ball` provides:
  - `Ball(center, radius_squared)`;
  - `BallIntersectPolytope(polytope, ball)`;
  - `random_direction(dim, rng)` and `random_point_in_ball(dim, radius, rng)`,
    which take a `numpy.random.Generator`.
- `convexvol.intersection.BodyIntersection(first, second)` is the intersection
  of two bodies that share the same ray-shooting interface.
- `convexvol.walks` holds random walks that work on any body of that
  interface:
  - `CDHRWalk`, coordinate-directions hit-and-run;
  - `BoundaryCDHRWalk` and `BoundaryRDHRWalk`, which return the two boundary
    endpoints of the last chord;
  - `GaussianCDHRWalk`, which targets the density `exp(-a|x|^2)`;
  - `BallWalk`, whose step radius can be given or left to `compute_delta`.

  The module also provides `chord_random_point_exp_coord`.
- `convexvol.policies`:
  - `PushBackPolicy` keeps every point.
  - `CountingPolicy` keeps and counts only the points that fall inside the ball
    of a `BallIntersectPolytope`.
- `convexvol.ratio` holds the sliding-window ratio estimators `RatioWindow` and
  `RatioIntervalWindow`. It also holds the functions `estimate_ratio_in_ball`,
  `estimate_ratio_by_walk`, `estimate_ratio_interval_in_ball` and
  `estimate_ratio_interval_by_walk`.
- `convexvol.cooling`:
  - `volume_cooling_balls(body, error=0.1, walk_length=1, win_len=250, seed=None)`
    estimates a volume by annealing with a sequence of balls. It works on a
    copy of `body`. If it cannot build a ball sequence it raises
    `ConvergenceError`.
  - The building blocks are `check_convergence`, `get_first_ball`,
    `get_next_ball`, `get_sequence_of_balls` and `CoolingBallParameters`.
- `convexvol.rotation`:
  - `random_rotation_matrix(dim, seed=None)` returns a random orthogonal
    matrix.
  - `rotate(body, seed=None)` applies a random rotation to a body in place and
    returns the inverse matrix.
- `convexvol.formats`:
  - `linear_extensions_to_order_polytope(text)` turns a poset description
    (`n m` followed by relations `[i,j]`) into the text of an H-representation
    of its order polytope.
  - `read_pointset(lines)` parses rows of numbers, including fractions such as
    `1/3`.

## Example

```python
import numpy as np
from convexvol.exact import exact_zonotope_volume
from convexvol.zonotope import Zonotope
from convexvol.cooling import volume_cooling_balls

generators = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
print(exact_zonotope_volume(generators))  # 12.0

body = Zonotope(generators)
print(volume_cooling_balls(body, error=0.1, walk_length=1, win_len=250, seed=42))
```

## What it does not do

- There are no classes for polytopes given by inequalities or by vertices. The
  only bodies provided are `Zonotope`, `Ball` and their intersections. Other
  bodies can still be used if they offer the same methods.
- The order-polytope text can be produced, but it cannot be read back into a
  body.
- There is no command-line tool. Everything is used from Python.