"""Zonotopes given by generators, with linear-programming oracles."""

import math

import numpy as np
from scipy.linalg import null_space
from scipy.optimize import linprog

_EIGEN_TOLERANCE = 1e-7
_SIGMA_REGULARIZATION = 1e-8
_FACET_TOLERANCE = 1e-10


class Zonotope:
    """The zonotope ``{G^T x : x in [-1, 1]^k}`` for a ``k x d`` generator matrix ``G``."""

    def __init__(self, generators):
        g = np.array(generators, dtype=float)
        if g.ndim != 2 or g.size == 0:
            raise ValueError("generators must be a non-empty two-dimensional matrix")
        count, dim = g.shape
        if count < dim:
            raise ValueError(
                f"a {dim}-dimensional zonotope needs at least {dim} generators, got {count}"
            )
        self.generators = g
        self._inner_ball = None
        self._last_combination = None
        self._compute_eigenvectors()

    def _compute_eigenvectors(self):
        g = self.generators.T
        count = g.shape[1]
        dim = self.dimension()
        sigma = g.T @ g
        sigma = (sigma + sigma.T) / 2
        eigenvalues, eigenvectors = np.linalg.eigh(sigma)
        self.q0 = eigenvectors[:, eigenvalues < _EIGEN_TOLERANCE]
        if self.q0.shape[1] == 0:
            u = np.eye(count)
        else:
            u, _, _ = np.linalg.svd(self.q0, full_matrices=True)
        self.t = u.T[count - dim:, :]
        self.sigma = sigma + _SIGMA_REGULARIZATION * np.eye(count)

    def dimension(self):
        """Dimension of the ambient space."""
        return self.generators.shape[1]

    def num_of_generators(self):
        """Number of generators."""
        return self.generators.shape[0]

    def num_of_hyperplanes(self):
        """Always zero: a zonotope has no explicit facet list."""
        return 0

    def upper_bound_of_hyperplanes(self):
        """Bound used to size distance vectors: twice the dimension."""
        return 2 * self.dimension()

    def _combination(self, p):
        count = self.num_of_generators()
        res = linprog(
            np.zeros(count),
            A_eq=self.generators.T,
            b_eq=np.asarray(p, dtype=float),
            bounds=[(-1.0, 1.0)] * count,
            method="highs",
        )
        return res.x if res.status == 0 else None

    def is_in(self, p):
        """Whether ``p`` lies in the zonotope."""
        return self._combination(p) is not None

    def _ray_extreme(self, r, v, maximize):
        r = np.asarray(r, dtype=float)
        v = np.asarray(v, dtype=float)
        count = self.num_of_generators()
        a_eq = np.hstack([self.generators.T, -v.reshape(-1, 1)])
        c = np.zeros(count + 1)
        c[-1] = -1.0 if maximize else 1.0
        res = linprog(
            c,
            A_eq=a_eq,
            b_eq=r,
            bounds=[(-1.0, 1.0)] * count + [(None, None)],
            method="highs",
        )
        if res.status == 2:
            raise ValueError("the line does not meet the zonotope")
        if res.status == 3:
            raise ValueError("the direction must be a non-zero vector")
        if res.status != 0:
            raise RuntimeError(f"linear program failed: {res.message}")
        return float(res.x[-1]), res.x[:count]

    def line_intersect(self, r, v):
        """Return ``(upper, lower)``: the extreme ``t`` with ``r + t v`` in the zonotope."""
        upper, combination = self._ray_extreme(r, v, maximize=True)
        lower, _ = self._ray_extreme(r, v, maximize=False)
        self._last_combination = combination
        return upper, lower

    def line_positive_intersect(self, r, v):
        """Return the largest ``t`` with ``r + t v`` in the zonotope, and facet id 1."""
        upper, combination = self._ray_extreme(r, v, maximize=True)
        self._last_combination = combination
        return upper, 1

    def line_intersect_coord(self, r, coord):
        """Intersect the line through ``r`` along coordinate axis ``coord``."""
        direction = np.zeros(self.dimension())
        direction[coord] = 1.0
        return self.line_intersect(r, direction)

    def compute_inner_ball(self):
        """Ball centred at the origin inside the zonotope; returns ``(center, radius)``."""
        dim = self.dimension()
        center = np.zeros(dim)
        radius = min(
            self._ray_extreme(center, axis, maximize=True)[0] for axis in np.eye(dim)
        )
        self._inner_ball = (center, radius / math.sqrt(dim))
        return self._inner_ball

    def inner_ball(self):
        """The last inner ball computed, computing one if needed."""
        if self._inner_ball is None:
            return self.compute_inner_ball()
        return self._inner_ball

    def shift(self, c):
        """Accept a shift vector; the zonotope stays centred at the origin.

        The vector must have the zonotope's dimension.
        """
        c = np.asarray(c, dtype=float)
        if c.shape != (self.dimension(),):
            raise ValueError(
                f"shift vector must have length {self.dimension()}, got shape {c.shape}"
            )

    def normalize(self):
        """Check the generators are finite; there are no facets to rescale."""
        if not np.all(np.isfinite(self.generators)):
            raise ValueError("generators must be finite numbers")

    def get_dists(self, radius):
        """Lower bounds on facet distances, all equal to ``radius``."""
        return [radius] * self.upper_bound_of_hyperplanes()

    def linear_transform(self, t):
        """Map the zonotope by the inverse of the square matrix ``t``."""
        t = np.asarray(t, dtype=float)
        self.generators = (np.linalg.inv(t) @ self.generators.T).T
        self._inner_ball = None
        self._last_combination = None

    def compute_reflection(self, v, p, facet):
        """Reflect direction ``v`` on the facet that contains the boundary point ``p``."""
        v = np.asarray(v, dtype=float)
        p = np.asarray(p, dtype=float)
        combination = self._last_combination
        if combination is None:
            combination = self._combination(p)
            if combination is None:
                raise ValueError("the point is not on the zonotope")
        free = [
            row
            for row, c in zip(self.generators, combination)
            if ((1.0 - c) > _FACET_TOLERANCE or (1.0 - c) > _FACET_TOLERANCE * abs(c))
            and ((1.0 + c) > _FACET_TOLERANCE or (1.0 + c) > _FACET_TOLERANCE * abs(c))
        ]
        dim = self.dimension()
        facet_matrix = np.array(free, dtype=float).reshape(len(free), dim)
        kernel = null_space(facet_matrix) if len(free) else np.eye(dim)
        if kernel.shape[1] == 0:
            raise ValueError("the point does not lie on a facet")
        normal = kernel[:, 0]
        if p @ normal < 0.0:
            normal = -normal
        normal = normal / np.linalg.norm(normal)
        return v - 2.0 * (v @ normal) * normal