"""K-nearest-neighbour classification and regression."""

from __future__ import annotations

import json
import math
from collections import Counter
from collections.abc import Hashable, Sequence
from os import PathLike
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from .kdtree import KDTree
from .pairwise import Cosine, DistanceFunction, Euclidean, Manhattan

__all__ = ["KNNClassifier", "KNNRegressor"]

_CLASSIFIER_NAME = "KNN"
_CLASSIFIER_VERSION = "1.0"
_ALGORITHMS = ("linear", "kdtree")


def _distance_function(name: str, allowed: dict[str, type[DistanceFunction]]) -> DistanceFunction:
    try:
        return allowed[name]()
    except KeyError:
        raise ValueError("unsupported distance function") from None


def _as_rows(data: ArrayLike) -> np.ndarray:
    rows = np.asarray(data, dtype=float)
    if rows.ndim == 1:
        rows = rows.reshape(1, -1)
    if rows.ndim != 2:
        raise ValueError("expected a two-dimensional table of rows")
    return rows


def _nearest(distances: Sequence[float], k: int) -> list[int]:
    if k > len(distances):
        raise ValueError("k is larger than the amount of training data")
    if k < 1:
        raise ValueError("k must be at least 1")
    order = np.argsort(np.asarray(distances, dtype=float), kind="stable")
    return [int(i) for i in order[:k]]


class KNNClassifier:
    """A k-nearest-neighbour classifier.

    ``distance_func`` is one of ``euclidean``, ``manhattan`` or ``cosine``;
    ``algorithm`` is ``linear`` or ``kdtree``. With ``weighted`` set, each
    neighbour votes with the inverse of its distance.
    """

    _DISTANCES: dict[str, type[DistanceFunction]] = {
        "euclidean": Euclidean,
        "manhattan": Manhattan,
        "cosine": Cosine,
    }

    def __init__(
        self,
        distance_func: str = "euclidean",
        algorithm: str = "linear",
        neighbours: int = 1,
        *,
        weighted: bool = False,
        allow_optimisations: bool = True,
    ) -> None:
        self.distance_func = distance_func
        self.algorithm = algorithm
        self.neighbours = neighbours
        self.weighted = weighted
        self.allow_optimisations = allow_optimisations
        self._X: np.ndarray | None = None
        self._y: list[Hashable] = []

    def __str__(self) -> str:
        return f"KNNClassifier({self.distance_func}, {self.neighbours})"

    def fit(self, X: ArrayLike, y: Sequence[Hashable]) -> KNNClassifier:
        """Store the training rows ``X`` and their labels ``y``."""
        rows = _as_rows(X)
        labels = list(y.tolist() if isinstance(y, np.ndarray) else y)
        if len(labels) != rows.shape[0]:
            raise ValueError("number of labels does not match number of rows")
        self._X = rows
        self._y = labels
        return self

    def predict(self, X: ArrayLike) -> list[Hashable]:
        """Return the predicted label of each row of ``X``."""
        distance = _distance_function(self.distance_func, self._DISTANCES)
        if self.algorithm not in _ALGORITHMS:
            raise ValueError("unsupported searching algorithm")
        if self._X is None:
            raise ValueError("the classifier has not been fitted")
        rows = _as_rows(X)
        if rows.shape[1] != self._X.shape[1]:
            raise ValueError("attributes not compatible")

        if self.algorithm == "kdtree":
            tree = KDTree(self._X.tolist())
            predictions = []
            for row in rows:
                nearest, lengths = tree.search(self.neighbours, distance, row.tolist())
                predictions.append(self._decide(nearest, lengths))
            return predictions

        if self.allow_optimisations and self.distance_func == "euclidean":
            return self._optimised_euclidean_predict(rows)

        predictions = []
        for row in rows:
            distances = [distance.distance(row, train) for train in self._X]
            nearest = _nearest(distances, self.neighbours)
            predictions.append(self._decide(nearest, [distances[i] for i in nearest]))
        return predictions

    def _optimised_euclidean_predict(self, rows: np.ndarray) -> list[Hashable]:
        assert self._X is not None
        predictions = []
        for row in rows:
            distances = np.sqrt(np.sum((self._X - row) ** 2, axis=1))
            nearest = _nearest(distances.tolist(), self.neighbours)
            predictions.append(self._vote(nearest))
        return predictions

    def _decide(self, nearest: Sequence[int], lengths: Sequence[float]) -> Hashable:
        if self.weighted:
            return self._weighted_vote(nearest, lengths)
        return self._vote(nearest)

    def _vote(self, nearest: Sequence[int]) -> Hashable:
        counts = Counter(self._y[i] for i in nearest)
        return max(counts, key=counts.__getitem__)

    def _weighted_vote(self, nearest: Sequence[int], lengths: Sequence[float]) -> Hashable:
        weights: dict[Hashable, float] = {}
        for index, length in zip(nearest, lengths):
            label = self._y[index]
            weight = math.inf if length == 0 else 1.0 / length
            weights[label] = weights.get(label, 0.0) + weight
        return max(weights, key=weights.__getitem__)

    def metadata(self) -> dict[str, Any]:
        """Describe this classifier for serialisation."""
        return {
            "format_version": 1,
            "classifier_name": _CLASSIFIER_NAME,
            "classifier_version": _CLASSIFIER_VERSION,
            "classifier_metadata": {
                "distance_func": self.distance_func,
                "algorithm": self.algorithm,
                "neighbours": self.neighbours,
                "weighted": self.weighted,
                "allow_optimizations": self.allow_optimisations,
            },
        }

    def save(self, path: str | PathLike[str]) -> None:
        """Write the classifier and its training data to ``path`` as JSON."""
        if self._X is None:
            raise ValueError("the classifier has not been fitted")
        document = self.metadata()
        document["training_instances"] = {"X": self._X.tolist(), "y": self._y}
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(document, handle)

    @classmethod
    def load(cls, path: str | PathLike[str]) -> KNNClassifier:
        """Read a classifier written by :meth:`save`."""
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
        if document.get("classifier_name") != _CLASSIFIER_NAME:
            raise ValueError("this file does not contain a KNN classifier")
        if document.get("classifier_version") != _CLASSIFIER_VERSION:
            raise ValueError("unrecognised file format")
        params = document["classifier_metadata"]
        classifier = cls(
            params["distance_func"],
            params["algorithm"],
            int(params["neighbours"]),
            weighted=bool(params["weighted"]),
            allow_optimisations=bool(params["allow_optimizations"]),
        )
        training = document["training_instances"]
        classifier.fit(training["X"], training["y"])
        return classifier


class KNNRegressor:
    """A k-nearest-neighbour regressor averaging the values of the nearest rows."""

    _DISTANCES: dict[str, type[DistanceFunction]] = {
        "euclidean": Euclidean,
        "manhattan": Manhattan,
    }

    def __init__(self, distance_func: str = "euclidean") -> None:
        self.distance_func = distance_func
        self._X: np.ndarray | None = None
        self._values: list[float] = []

    def fit(self, X: ArrayLike, values: Sequence[float]) -> KNNRegressor:
        """Store the training rows ``X`` and their target ``values``."""
        rows = _as_rows(X)
        if rows.shape[0] != len(values):
            raise ValueError("dimension mismatch between rows and values")
        self._X = rows
        self._values = [float(v) for v in values]
        return self

    def predict(self, vector: ArrayLike, k: int) -> float:
        """Return the mean value of the ``k`` training rows nearest ``vector``."""
        if self._X is None:
            raise ValueError("the regressor has not been fitted")
        distance = _distance_function(self.distance_func, self._DISTANCES)
        target = np.asarray(vector, dtype=float).ravel()
        distances = [distance.distance(row, target) for row in self._X]
        nearest = _nearest(distances, k)
        return sum(self._values[i] for i in nearest) / k