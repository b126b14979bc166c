"""Naive Bayes classifiers, which assume features are independent."""

from __future__ import annotations

import json
import math
from collections.abc import Hashable, Sequence
from os import PathLike
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["BernoulliNBClassifier"]

_CLASSIFIER_NAME = "BernoulliNB"
_CLASSIFIER_VERSION = "1.0"


def _as_rows(data: ArrayLike) -> np.ndarray:
    rows = np.asarray(data, dtype=float)
    if rows.ndim == 1:
        rows = rows.reshape(1, -1)
    if rows.ndim != 2:
        raise ValueError("expected a two-dimensional table of rows")
    return rows


class BernoulliNBClassifier:
    """Bernoulli Naive Bayes over binary features.

    Each feature counts as present when its value is above zero. Conditional
    probabilities ``p(f|c)`` use Laplace smoothing.
    """

    def __init__(self) -> None:
        self.cond_prob: dict[Hashable, list[float]] = {}
        self.class_instances: dict[Hashable, int] = {}
        self.training_instances = 0
        self.features = 0

    def __str__(self) -> str:
        return "BernoulliNBBClassifier"

    def fit(self, X: ArrayLike, y: Sequence[Hashable]) -> BernoulliNBClassifier:
        """Learn class priors and feature probabilities from binary rows ``X``."""
        rows = _as_rows(X)
        labels = list(y.tolist() if isinstance(y, np.ndarray) else y)
        if len(labels) != rows.shape[0]:
            raise ValueError("number of labels does not match number of rows")
        if not np.isin(rows, (0.0, 1.0)).all():
            raise ValueError("all features should be binary")

        present = rows > 0
        label_array = np.empty(len(labels), dtype=object)
        label_array[:] = labels

        class_instances: dict[Hashable, int] = {}
        for label in labels:
            class_instances[label] = class_instances.get(label, 0) + 1

        cond_prob: dict[Hashable, list[float]] = {}
        for label, count in class_instances.items():
            docs = present[label_array == label].sum(axis=0)
            cond_prob[label] = ((docs + 1) / (count + 1)).tolist()

        self.training_instances = rows.shape[0]
        self.features = rows.shape[1]
        self.class_instances = class_instances
        self.cond_prob = cond_prob
        return self

    def predict_one(self, vector: Sequence[float]) -> Hashable:
        """Return the class scoring highest for one feature vector."""
        if self.features == 0:
            raise RuntimeError("fit should be called before predicting")
        values = list(vector)
        if len(values) != self.features:
            raise ValueError("different dimensions in train and test sets")

        best_score = -math.inf
        best_class: Hashable = ""
        for label, count in self.class_instances.items():
            probs = self.cond_prob[label]
            score = math.log(count / self.training_instances)
            for value, prob in zip(values, probs):
                if value > 0:
                    score += math.log(prob)
                elif prob == 1.0:
                    score += math.log(1.0 / (count + 1))
                else:
                    score += math.log(1.0 - prob)
            if score > best_score:
                best_score = score
                best_class = label
        return best_class

    def predict(self, X: ArrayLike) -> list[Hashable]:
        """Return the predicted class of each row of ``X``."""
        return [self.predict_one(row.tolist()) for row in _as_rows(X)]

    def _document(self) -> dict[str, Any]:
        return {
            "format_version": 1,
            "classifier_name": _CLASSIFIER_NAME,
            "classifier_version": _CLASSIFIER_VERSION,
            "num_features": self.features,
            "num_training_instances": self.training_instances,
            "class_instances": [[label, count] for label, count in self.class_instances.items()],
            "cond_map": [[label, probs] for label, probs in self.cond_prob.items()],
        }

    def save(self, path: str | PathLike[str]) -> None:
        """Write the fitted model to ``path`` as JSON."""
        with open(path, "w", encoding="utf-8") as handle:
            json.dump(self._document(), handle)

    @classmethod
    def load(cls, path: str | PathLike[str]) -> BernoulliNBClassifier:
        """Read a model written by :meth:`save`."""
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
        if document.get("classifier_name") != _CLASSIFIER_NAME:
            raise ValueError("this file does not contain a Bernoulli Naive Bayes classifier")
        if document.get("classifier_version") != _CLASSIFIER_VERSION:
            raise ValueError("unrecognised file format")
        classifier = cls()
        classifier.features = int(document["num_features"])
        classifier.training_instances = int(document["num_training_instances"])
        classifier.class_instances = {
            _hashable(label): int(count) for label, count in document["class_instances"]
        }
        classifier.cond_prob = {
            _hashable(label): [float(p) for p in probs] for label, probs in document["cond_map"]
        }
        return classifier


def _hashable(label: Any) -> Hashable:
    return tuple(label) if isinstance(label, list) else label