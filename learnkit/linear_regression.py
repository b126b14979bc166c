"""Ordinary least-squares linear regression solved by QR factorisation."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["NotEnoughDataError", "NoTrainingDataError", "LinearRegression"]


class NotEnoughDataError(ValueError):
    """Raised when there are fewer rows than coefficients to estimate."""

    def __init__(self) -> None:
        super().__init__("not enough rows to support this many variables.")


class NoTrainingDataError(RuntimeError):
    """Raised when predicting with a model that has not been fitted."""

    def __init__(self) -> None:
        super().__init__("you need to fit() before you can predict()")


def _as_rows(data: ArrayLike) -> np.ndarray:
    rows = np.asarray(data, dtype=float)
    if rows.ndim == 1:
        rows = rows.reshape(-1, 1)
    if rows.ndim != 2:
        raise ValueError("expected a two-dimensional table of rows")
    return rows


class LinearRegression:
    """Linear model ``y = intercept + X @ coefficients``."""

    def __init__(self) -> None:
        self.intercept: float = 0.0
        self.coefficients: np.ndarray | None = None

    @property
    def fitted(self) -> bool:
        """Whether :meth:`fit` has been called successfully."""
        return self.coefficients is not None

    def fit(self, X: ArrayLike, y: ArrayLike) -> LinearRegression:
        """Estimate the intercept and coefficients from rows ``X`` and targets ``y``."""
        rows = _as_rows(X)
        observed = np.asarray(y, dtype=float).ravel()
        count, features = rows.shape
        if observed.shape[0] != count:
            raise ValueError("number of targets does not match number of rows")
        width = features + 1
        if count < width:
            raise NotEnoughDataError()

        explanatory = np.hstack([np.ones((count, 1)), rows])
        q, r = np.linalg.qr(explanatory)
        qty = q.T @ observed

        solution = np.zeros(width)
        for i in reversed(range(width)):
            solution[i] = (qty[i] - solution[i + 1 :] @ r[i, i + 1 :]) / r[i, i]

        self.intercept = float(solution[0])
        self.coefficients = solution[1:]
        return self

    def predict(self, X: ArrayLike) -> np.ndarray:
        """Return the predicted target for each row of ``X``."""
        if self.coefficients is None:
            raise NoTrainingDataError()
        rows = _as_rows(X)
        if rows.shape[1] != self.coefficients.shape[0]:
            raise ValueError("attributes not compatible")
        return self.intercept + rows @ self.coefficients