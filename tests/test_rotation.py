import numpy as np
import pytest

from convexvol.rotation import random_rotation_matrix, rotate


class _RecordingBody:
    def __init__(self, dim):
        self._dim = dim
        self.transforms = []

    def dimension(self):
        return self._dim

    def linear_transform(self, t):
        self.transforms.append(np.array(t))


@pytest.mark.parametrize("dim", [1, 2, 5, 10])
def test_rotation_matrix_is_orthogonal(dim):
    u = random_rotation_matrix(dim, seed=3)
    assert u.shape == (dim, dim)
    assert np.allclose(u.T @ u, np.eye(dim))
    assert abs(abs(np.linalg.det(u)) - 1.0) < 1e-9


def test_rotation_matrix_is_deterministic_with_seed():
    first = random_rotation_matrix(4, seed=11)
    second = random_rotation_matrix(4, seed=11)
    assert first.shape == (4, 4)
    assert np.array_equal(first, second)
    assert np.allclose(first.T @ second, np.eye(4))


def test_rotation_matrix_depends_on_seed():
    first = random_rotation_matrix(4, seed=1)
    second = random_rotation_matrix(4, seed=2)
    assert not np.allclose(first, second)


def test_rotation_matrix_rejects_bad_dimension():
    with pytest.raises(ValueError):
        random_rotation_matrix(0, seed=1)


def test_rotate_applies_matrix_and_returns_inverse():
    body = _RecordingBody(3)
    inverse = rotate(body, seed=7)
    assert len(body.transforms) == 1
    applied = body.transforms[0]
    assert np.allclose(applied, random_rotation_matrix(3, seed=7))
    assert np.allclose(inverse @ applied, np.eye(3))
    assert np.allclose(inverse, applied.T)