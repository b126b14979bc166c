"""Distance metrics, k-d trees, k-nearest neighbours, linear regression, naive Bayes and ensembles built on NumPy."""

__version__ = "0.1.0"

__all__ = [
    "pairwise",
    "heap",
    "kdtree",
    "knn",
    "linear_regression",
    "naive",
    "meta",
]