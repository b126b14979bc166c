import math

import numpy as np
import pytest

from learnkit.pairwise import (
    Chebyshev,
    Cosine,
    Cranberra,
    DistanceFunction,
    Euclidean,
    Manhattan,
    PolyKernel,
    RBFKernel,
)


def test_chebyshev_column_vectors():
    x = np.array([[1], [2], [3], [4]], dtype=float)
    y = np.array([[-5], [-6], [7], [8]], dtype=float)
    assert Chebyshev().distance(x, y) == 8


def test_chebyshev_row_vectors():
    x = np.array([[1, 2, 3, 4]], dtype=float)
    y = np.array([[-5, -6, 7, 8]], dtype=float)
    assert Chebyshev().distance(x, y) == 8


def test_chebyshev_different_dimensions():
    x = np.array([[1, 2, 3, 4]], dtype=float)
    y = np.array([[-5], [-6], [7], [8]], dtype=float)
    with pytest.raises(ValueError):
        Chebyshev().distance(x, y)


def test_cosine_dot():
    assert Cosine().dot([1, 2, 3], [2, 4, 6]) == 28


def test_cosine_distance_of_parallel_vectors():
    assert Cosine().distance([1, 2, 3], [2, 4, 6]) == pytest.approx(0.0, abs=1e-12)


def test_cosine_distance_of_opposite_vectors():
    assert Cosine().distance([1, 0], [-1, 0]) == pytest.approx(2.0)


def test_cranberra_same_vectors():
    vec = [0, 1, -2, 3.4, 5, -6.7, 89]
    assert Cranberra().distance(vec, vec) == 0


def test_cranberra_column_vectors():
    x = [1, 2, 3, 4, 9]
    y = [-5, -6, 7, 4, 3]
    assert Cranberra().distance(x, y) == pytest.approx(2.9)


def test_cranberra_row_vectors():
    x = np.array([[1, 2, 3, 4, 9]], dtype=float)
    y = np.array([[-5, -6, 7, 4, 3]], dtype=float)
    assert Cranberra().distance(x, y) == pytest.approx(2.9)


def test_cranberra_different_dimensions():
    x = np.array([[1, 2, 3, 4, 9]], dtype=float)
    y = np.array([[-5], [-6], [7], [4], [3]], dtype=float)
    with pytest.raises(ValueError):
        Cranberra().distance(x, y)


def test_euclidean_inner_product():
    assert Euclidean().inner_product([1, 2, 3], [2, 4, 5]) == 25


def test_euclidean_distance():
    assert Euclidean().distance([1, 2, 3], [2, 4, 5]) == 3


def test_euclidean_different_dimensions():
    with pytest.raises(ValueError):
        Euclidean().distance([1, 2, 3], [1, 2])


def test_manhattan_same_vectors():
    vec = [0, 1, -2, 3.4, 5, -6.7, 89]
    assert Manhattan().distance(vec, vec) == 0


def test_manhattan_column_vectors():
    assert Manhattan().distance([2, 2, 3], [1, 4, 5]) == 5


def test_manhattan_row_vectors():
    x = np.array([[2, 2, 3]], dtype=float)
    y = np.array([[1, 4, 5]], dtype=float)
    assert Manhattan().distance(x, y) == 5


def test_manhattan_different_dimensions():
    x = np.array([[2, 2, 3]], dtype=float)
    y = np.array([[1], [4], [5]], dtype=float)
    with pytest.raises(ValueError):
        Manhattan().distance(x, y)


def test_poly_kernel_inner_product():
    assert PolyKernel(3).inner_product([1, 2, 3], [2, 4, 5]) == 17576


def test_poly_kernel_distance():
    assert PolyKernel(3).distance([1, 2, 3], [2, 4, 5]) == pytest.approx(31.622776601683793)


def test_rbf_kernel_inner_product():
    assert RBFKernel(0.1).inner_product([1, 2, 3], [2, 4, 5]) == pytest.approx(0.4065696597405991)


def test_rbf_kernel_identical_vectors_is_one():
    assert RBFKernel(0.5).inner_product([1, 2], [1, 2]) == 1.0


@pytest.mark.parametrize(
    "metric", [Euclidean(), Manhattan(), Chebyshev(), Cranberra(), Cosine(), PolyKernel(2)]
)
def test_distances_are_distance_functions_and_symmetric(metric):
    x, y = [1.0, 5.0, -2.0], [3.0, -1.0, 4.0]
    assert isinstance(metric, DistanceFunction)
    assert math.isclose(metric.distance(x, y), metric.distance(y, x))