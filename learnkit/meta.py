"""Classifiers that combine the outputs of other classifiers.

``BaggedModel`` trains an ensemble on bootstrap samples of the training
rows, each member optionally seeing only a random subset of the feature
columns, and predicts by majority vote. ``OneVsAllModel`` trains one
scorer per class against a 0/1 target and picks the most confident.
"""

from __future__ import annotations

import os
import random
from collections import Counter
from collections.abc import Callable, Hashable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["Classifier", "BaggedModel", "OneVsAllModel"]


@runtime_checkable
class Classifier(Protocol):
    """Anything that can be fitted on rows and labels and then predict labels."""

    def fit(self, X: Any, y: Any) -> Any:
        """Train on rows ``X`` with targets ``y``."""

    def predict(self, X: Any) -> Sequence[Any]:
        """Return one prediction per row of ``X``."""


def _as_rows(data: ArrayLike) -> np.ndarray:
    rows = np.asarray(data, dtype=float)
    if rows.ndim == 1:
        rows = rows.reshape(1, -1)
    if rows.ndim != 2:
        raise ValueError("expected a two-dimensional table of rows")
    return rows


def _as_labels(y: Any) -> list[Any]:
    return list(y.tolist() if isinstance(y, np.ndarray) else y)


def _workers() -> int:
    return os.cpu_count() or 1


class BaggedModel:
    """An ensemble of classifiers trained on bootstrap samples.

    With ``random_features`` set to zero every member sees all feature
    columns; otherwise each member sees that many distinct columns chosen
    at random. On a tied vote the class that first reached the top count
    wins.
    """

    def __init__(
        self,
        models: Sequence[Classifier] | None = None,
        random_features: int = 0,
        *,
        seed: int | None = None,
    ) -> None:
        self.models: list[Classifier] = list(models or [])
        self.random_features = random_features
        self._rng = random.Random(seed)
        self._selected: list[list[int]] = []
        self._width: int | None = None

    def __str__(self) -> str:
        children = "\n\t".join(f"{i}: {model}" for i, model in enumerate(self.models))
        return f"BaggedModel(\n{children})"

    def add_model(self, model: Classifier) -> None:
        """Append a classifier to the ensemble."""
        self.models.append(model)

    def _choose_features(self, width: int) -> list[int]:
        if self.random_features == 0:
            return list(range(width))
        return self._rng.sample(range(width), self.random_features)

    def fit(self, X: ArrayLike, y: Sequence[Hashable]) -> BaggedModel:
        """Train every member on its own bootstrap sample of ``X`` and ``y``."""
        rows = _as_rows(X)
        labels = _as_labels(y)
        count, width = rows.shape
        if len(labels) != count:
            raise ValueError("number of labels does not match number of rows")
        if count == 0:
            raise ValueError("no training rows")
        if not 0 <= self.random_features <= width:
            raise ValueError(
                f"random_features must be between 0 and {width}, got {self.random_features}"
            )

        jobs = []
        selected = []
        for model in self.models:
            sample = [self._rng.randrange(count) for _ in range(count)]
            features = self._choose_features(width)
            selected.append(features)
            jobs.append((model, rows[np.ix_(sample, features)], [labels[i] for i in sample]))

        with ThreadPoolExecutor(max_workers=_workers()) as pool:
            list(pool.map(lambda job: job[0].fit(job[1], job[2]), jobs))

        self._selected = selected
        self._width = width
        return self

    def predict(self, X: ArrayLike) -> list[Hashable]:
        """Return the majority-vote prediction for each row of ``X``."""
        if self._width is None or len(self._selected) != len(self.models):
            raise RuntimeError("the model must be fitted before predicting")
        rows = _as_rows(X)
        if rows.shape[1] != self._width:
            raise ValueError("attributes not compatible")

        def run(pair: tuple[Classifier, list[int]]) -> list[Any]:
            model, features = pair
            result = _as_labels(model.predict(rows[:, features]))
            if len(result) != rows.shape[0]:
                raise ValueError("a member returned the wrong number of predictions")
            return result

        with ThreadPoolExecutor(max_workers=_workers()) as pool:
            all_votes = list(pool.map(run, zip(self.models, self._selected)))

        predictions = []
        for row_votes in zip(*all_votes):
            counts = Counter(row_votes)
            best_label: Hashable = ""
            best_count = 0
            for label, votes in counts.items():
                if votes > best_count:
                    best_label, best_count = label, votes
            predictions.append(best_label)
        return predictions


class OneVsAllModel:
    """One scorer per class, each trained to output 1.0 for its class and 0.0 otherwise.

    ``new_classifier`` is called with each class value and must return a
    classifier ready for training. A row is assigned the class whose scorer
    gives the highest positive value; if none is positive, the first class.
    """

    def __init__(self, new_classifier: Callable[[Hashable], Classifier]) -> None:
        self.new_classifier = new_classifier
        self.classes: list[Hashable] = []
        self.classifiers: list[Classifier] = []
        self._width: int | None = None

    def fit(self, X: ArrayLike, y: Sequence[Hashable]) -> OneVsAllModel:
        """Train one scorer per distinct class in ``y``, in order of first appearance."""
        rows = _as_rows(X)
        labels = _as_labels(y)
        if len(labels) != rows.shape[0]:
            raise ValueError("number of labels does not match number of rows")
        classes = list(dict.fromkeys(labels))
        if len(classes) < 2:
            raise ValueError("must have more than one class")

        classifiers = []
        for value in classes:
            classifier = self.new_classifier(value)
            classifier.fit(rows, [1.0 if label == value else 0.0 for label in labels])
            classifiers.append(classifier)

        self.classes = classes
        self.classifiers = classifiers
        self._width = rows.shape[1]
        return self

    def predict(self, X: ArrayLike) -> list[Hashable]:
        """Return the class whose scorer is most confident for each row of ``X``."""
        if not self.classifiers or self._width is None:
            raise RuntimeError("the model must be fitted before predicting")
        rows = _as_rows(X)
        if rows.shape[1] != self._width:
            raise ValueError("attributes not compatible")

        scores = []
        for classifier in self.classifiers:
            result = [float(v) for v in _as_labels(classifier.predict(rows))]
            if len(result) != rows.shape[0]:
                raise ValueError("a scorer returned the wrong number of predictions")
            scores.append(result)

        predictions = []
        for row_scores in zip(*scores):
            winner = 0
            best = 0.0
            for index, value in enumerate(row_scores):
                if value > best:
                    winner, best = index, value
            predictions.append(self.classes[winner])
        return predictions