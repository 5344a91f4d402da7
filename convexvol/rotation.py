"""Random orthogonal transformations of convex bodies."""

import numpy as np


def random_rotation_matrix(dim, seed=None):
    """Random orthogonal matrix: left singular vectors of a uniform [-1, 1] matrix."""
    if dim < 1:
        raise ValueError("dimension must be a positive integer")
    rng = np.random.default_rng(seed)
    sample = rng.uniform(-1.0, 1.0, size=(dim, dim))
    u, _, _ = np.linalg.svd(sample)
    return u


def rotate(body, seed=None):
    """Apply a random rotation to ``body`` in place and return its inverse."""
    u = random_rotation_matrix(body.dimension(), seed)
    body.linear_transform(u)
    return np.linalg.inv(u)