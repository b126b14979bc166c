"""Pairwise distance functions and kernels over numeric vectors.

Vectors may be given as flat sequences, which are treated as column
vectors, or as two-dimensional arrays. Two operands must have the same
shape unless stated otherwise; a mismatch raises ``ValueError``.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

__all__ = [
    "DistanceFunction",
    "Euclidean",
    "Manhattan",
    "Cosine",
    "Chebyshev",
    "Cranberra",
    "PolyKernel",
    "RBFKernel",
]


def _as_matrix(vector: ArrayLike) -> np.ndarray:
    matrix = np.asarray(vector, dtype=float)
    if matrix.ndim == 0:
        return matrix.reshape(1, 1)
    if matrix.ndim == 1:
        return matrix.reshape(-1, 1)
    if matrix.ndim > 2:
        raise ValueError("expected a vector or a two-dimensional matrix")
    return matrix


def _same_shape(x: ArrayLike, y: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    a, b = _as_matrix(x), _as_matrix(y)
    if a.shape != b.shape:
        raise ValueError(f"dimension mismatch: {a.shape} and {b.shape}")
    return a, b


class DistanceFunction(ABC):
    """Anything that measures the distance between two vectors."""

    @abstractmethod
    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        """Return the distance between ``x`` and ``y``."""


@dataclass(frozen=True)
class Euclidean(DistanceFunction):
    """L2 distance."""

    def inner_product(self, x: ArrayLike, y: ArrayLike) -> float:
        """Sum of the element-wise product of ``x`` and ``y``."""
        a, b = _same_shape(x, y)
        return float(np.sum(a * b))

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        a, b = _same_shape(x, y)
        diff = a - b
        return math.sqrt(self.inner_product(diff, diff))


@dataclass(frozen=True)
class Manhattan(DistanceFunction):
    """L1 distance: the sum of absolute element differences."""

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        a, b = _same_shape(x, y)
        return float(np.sum(np.abs(a - b)))


@dataclass(frozen=True)
class Cosine(DistanceFunction):
    """Cosine distance, ``1 - cos(angle)``, ranging from 0 to 2."""

    def dot(self, x: ArrayLike, y: ArrayLike) -> float:
        """Sum of the element-wise product of ``x`` and ``y``."""
        a, b = _same_shape(x, y)
        return float(np.sum(a * b))

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        dot_xy = self.dot(x, y)
        length_x = math.sqrt(self.dot(x, x))
        length_y = math.sqrt(self.dot(y, y))
        with np.errstate(divide="ignore", invalid="ignore"):
            cos = np.float64(dot_xy) / np.float64(length_x * length_y)
        return float(1 - cos)


@dataclass(frozen=True)
class Chebyshev(DistanceFunction):
    """L-infinity distance: the largest absolute element difference."""

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        a, b = _same_shape(x, y)
        return float(np.max(np.abs(a - b), initial=0.0))


@dataclass(frozen=True)
class Cranberra(DistanceFunction):
    """Canberra distance; terms where both elements are zero count as zero."""

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        a, b = _same_shape(x, y)
        numerators = np.abs(a - b)
        denominators = np.abs(a) + np.abs(b)
        both_zero = (numerators == 0.0) & (denominators == 0.0)
        with np.errstate(divide="ignore", invalid="ignore"):
            steps = np.where(both_zero, 0.0, numerators / np.where(both_zero, 1.0, denominators))
        return float(sum(steps.ravel().tolist()))


@dataclass(frozen=True)
class PolyKernel(DistanceFunction):
    """Polynomial kernel ``K(x, y) = (x^T y + 1)^degree``."""

    degree: int

    def inner_product(self, x: ArrayLike, y: ArrayLike) -> float:
        """Kernel value computed over the first column of each operand."""
        a, b = _as_matrix(x), _as_matrix(y)
        if a.shape[0] != b.shape[0]:
            raise ValueError(f"dimension mismatch: {a.shape[0]} and {b.shape[0]} rows")
        result = float(a[:, 0] @ b[:, 0])
        return math.pow(result + 1, float(self.degree))

    def distance(self, x: ArrayLike, y: ArrayLike) -> float:
        a, b = _same_shape(x, y)
        diff = a - b
        return math.sqrt(self.inner_product(diff, diff))


@dataclass(frozen=True)
class RBFKernel:
    """Radial basis function kernel ``K(x, y) = exp(-gamma * ||x - y||^2)``."""

    gamma: float

    def inner_product(self, x: ArrayLike, y: ArrayLike) -> float:
        distance = Euclidean().distance(x, y)
        return math.exp(-self.gamma * distance**2)