"""Exact volumes: zonotopes via determinants and simplex slices via Ali's recursion."""

import itertools

import numpy as np


def comb(n, k):
    """Return every k-element combination of ``range(n)`` in lexicographic order."""
    if n < 0 or k < 0 or k > n:
        raise ValueError(f"cannot choose {k} elements out of {n}")
    return [list(c) for c in itertools.combinations(range(n), k)]


def exact_zonotope_volume(generators):
    """Exact volume of the zonotope spanned by the rows of ``generators``.

    Each generator ``g`` contributes the segment ``[-g, g]``; the volume is the
    sum of ``|det|`` over all square submatrices of ``[G^T, -G^T]``.
    """
    g = np.asarray(generators, dtype=float)
    if g.ndim != 2 or g.shape[1] == 0:
        raise ValueError("generators must be a non-empty two-dimensional matrix")
    count, dim = g.shape
    columns = np.hstack([g.T, -g.T])
    return float(
        sum(
            abs(np.linalg.det(columns[:, list(subset)]))
            for subset in itertools.combinations(range(2 * count), dim)
        )
    )


def vol_ali(plane, zit, dim):
    """Fraction of the unit simplex on the negative side of a hyperplane.

    The functional takes the value ``zit`` at the origin vertex and
    ``plane[i] + zit`` at the i-th unit vertex.
    """
    if len(plane) < dim:
        raise ValueError(f"plane has {len(plane)} coefficients, expected {dim}")
    values = [zit] + [coeff + zit for coeff in plane[:dim]]
    negative = [x for x in values if x < 0]
    rest = [y for y in values if not y < 0]
    k = len(rest)

    a = [1.0] + [0.0] * (dim + 1)
    for x in negative:
        for j, y in enumerate(rest, start=1):
            a[j] = (y * a[j] - x * a[j - 1]) / (y - x)
    return a[k]