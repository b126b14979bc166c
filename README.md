# learnkit

A compact machine-learning toolkit built on NumPy. Data is passed in as
NumPy arrays or nested sequences of numbers: rows of features, plus a
separate sequence of labels or targets.

## Modules

- `learnkit.pairwise`: the distances `Euclidean`, `Manhattan`, `Cosine`,
  `Chebyshev` and `Cranberra` (Canberra distance), and the kernels
  `PolyKernel(degree)` and `RBFKernel(gamma)`. Every distance, and
  `PolyKernel`, implements the `DistanceFunction` interface, whose single
  method is `distance(x, y)`. `Euclidean` and `PolyKernel` also have
  `inner_product(x, y)`, `Cosine` has `dot(x, y)`, and `RBFKernel` has only
  `inner_product(x, y)`. Flat sequences are treated as column vectors;
  operands of different shapes raise `ValueError`.
- `learnkit.heap`: `MaxHeap`, a binary max-heap of `HeapNode` entries
  (coordinates, distance and source row) ordered by distance, with
  `insert`, `maximum`, `extract_max` and `len()`.
- `learnkit.kdtree`: `KDTree` for k-nearest-neighbour search under any
  `DistanceFunction`.
- `learnkit.knn`: `KNNClassifier` and `KNNRegressor`.
- `learnkit.linear_regression`: `LinearRegression`, ordinary least squares
  solved by QR factorisation, with the errors `NotEnoughDataError` and
  `NoTrainingDataError`.
- `learnkit.naive`: `BernoulliNBClassifier` for binary features.
- `learnkit.meta`: the `Classifier` protocol (`fit(X, y)` and
  `predict(X)`), and the ensembles `BaggedModel` and `OneVsAllModel`.

## Installation

```
pip install learnkit
```

## Usage

Distances and kernels:

```python
from learnkit.pairwise import Euclidean, PolyKernel, RBFKernel

Euclidean().distance([1, 2, 3], [2, 4, 5])          # 3.0
PolyKernel(3).inner_product([1, 2, 3], [2, 4, 5])   # 17576.0
RBFKernel(0.1).inner_product([1, 2, 3], [2, 4, 5])  # about 0.4066
```

Nearest-neighbour search with a k-d tree:

```python
from learnkit.kdtree import KDTree
from learnkit.pairwise import Euclidean

tree = KDTree([[2, 3], [5, 4], [4, 7], [8, 1], [7, 2], [9, 6]])
rows, distances = tree.search(3, Euclidean(), [7, 3])
# rows == [4, 3, 1], nearest first
```

`build` raises `ValueError` for empty data or rows of different lengths;
`search` raises `ValueError` when `k` exceeds the number of rows or the
target has the wrong number of features.

### k-nearest neighbours

```python
from learnkit.knn import KNNClassifier, KNNRegressor

clf = KNNClassifier("euclidean", "kdtree", 2, weighted=True)
clf.fit(train_features, train_labels)
predictions = clf.predict(test_features)   # a list of labels

clf.save("model.json")
restored = KNNClassifier.load("model.json")
```

- `distance_func` is `"euclidean"`, `"manhattan"` or `"cosine"`.
- `algorithm` is `"linear"` (compare with every training row) or
  `"kdtree"`.
- `weighted=True` makes each neighbour vote with the inverse of its
  distance; otherwise each neighbour has one vote.
- `allow_optimisations` (default `True`) lets linear Euclidean search use
  a vectorised distance computation.
- `metadata()` returns the settings as a dictionary; `save` writes them
  together with the training data as JSON.

An unknown distance or algorithm raises `ValueError` at `predict`, as does
test data with a different number of columns from the training data.

`KNNRegressor("euclidean")` (or `"manhattan"`) averages the values of the
`k` nearest rows:

```python
reg = KNNRegressor("euclidean").fit(X, values)
reg.predict([1.0, 2.0], k=3)
```

### Linear regression

```python
from learnkit.linear_regression import LinearRegression

model = LinearRegression().fit(X, y)
model.intercept, model.coefficients
estimates = model.predict(X_new)   # a NumPy array
```

`fit` raises `NotEnoughDataError` when there are fewer rows than
coefficients (features plus intercept); `predict` before `fit` raises
`NoTrainingDataError`.

### Bernoulli naive Bayes

```python
from learnkit.naive import BernoulliNBClassifier

nb = BernoulliNBClassifier().fit(binary_features, labels)
nb.predict_one([0, 1, 0])
nb.predict(binary_rows)

nb.save("nb.json")
restored = BernoulliNBClassifier.load("nb.json")
```

Features must be 0 or 1. Conditional probabilities use Laplace smoothing
and are available as `cond_prob`, with class counts in `class_instances`.
`predict_one` before `fit` raises `RuntimeError`; a vector of the wrong
length raises `ValueError`.

### Ensembles

```python
from learnkit.knn import KNNClassifier
from learnkit.linear_regression import LinearRegression
from learnkit.meta import BaggedModel, OneVsAllModel

bag = BaggedModel(random_features=2, seed=1)
for _ in range(10):
    bag.add_model(KNNClassifier("euclidean", "linear", 1))
bag.fit(X, y)
bag.predict(X_new)

ova = OneVsAllModel(lambda value: LinearRegression())
ova.fit(X, y)
ova.predict(X_new)
```

`BaggedModel` trains each member on its own bootstrap sample of the rows;
with `random_features` above zero each member sees that many randomly
chosen feature columns. Members are fitted and queried in a thread pool,
and predictions are decided by majority vote.

`OneVsAllModel` calls its factory once per distinct class, trains each
scorer on a 1.0/0.0 target for that class, and predicts the class whose
scorer gives the highest positive score (the first class if none is
positive). At least two classes are required.

## What the package does not do

- It has no command-line tool; everything is used from Python.
- It does not read datasets from files; load your data into arrays
  yourself.
- Only `KNNClassifier` and `BernoulliNBClassifier` can be saved and
  loaded. `LinearRegression`, `KNNRegressor`, `BaggedModel` and
  `OneVsAllModel` have no persistence.
- Logistic regression and support-vector classifiers are not included.

## Running the tests

```
pip install "learnkit[test]"
pytest
```