[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "learnkit"
version = "0.1.0"
description = "Small machine-learning toolkit: distance metrics, k-d trees, k-nearest neighbours, linear regression, Bernoulli naive Bayes and ensembles."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "machine-learning",
    "knn",
    "kdtree",
    "naive-bayes",
    "linear-regression",
    "bagging",
    "one-vs-all",
    "distance-metrics",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["learnkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
