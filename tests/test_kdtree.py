import math

import pytest

from learnkit.kdtree import KDTree
from learnkit.pairwise import Euclidean, Manhattan


def test_build_without_data():
    with pytest.raises(ValueError, match="no input data"):
        KDTree().build([])


def test_build_with_uneven_rows():
    with pytest.raises(ValueError, match="amounts of features are not the same"):
        KDTree().build([[3, 5], [6, 7, 10]])


def test_build_with_one_row():
    kd = KDTree()
    kd.build([[3, 5]])
    rows, lengths = kd.search(1, Euclidean(), [3, 5])
    assert rows == [0]
    assert lengths == [0.0]


def test_build_with_identical_rows():
    kd = KDTree()
    kd.build([[3, 5], [3, 5], [3, 5]])
    rows, lengths = kd.search(3, Euclidean(), [3, 5])
    assert sorted(rows) == [0, 1, 2]
    assert lengths == [0.0, 0.0, 0.0]


@pytest.fixture
def functional_tree():
    kd = KDTree()
    kd.build([[2, 3], [5, 4], [4, 7], [8, 1], [7, 2], [9, 6]])
    return kd


def test_search_k3(functional_tree):
    rows, lengths = functional_tree.search(3, Euclidean(), [7, 3])
    assert rows == [4, 3, 1]
    assert lengths == pytest.approx([1.0, math.sqrt(5), math.sqrt(5)])


def test_search_k2(functional_tree):
    rows, _ = functional_tree.search(2, Euclidean(), [7, 3])
    assert rows == [4, 1]


def test_search_matches_brute_force(functional_tree):
    data = [[2, 3], [5, 4], [4, 7], [8, 1], [7, 2], [9, 6]]
    target = [3, 6]
    _, lengths = functional_tree.search(4, Manhattan(), target)
    expected = sorted(Manhattan().distance(row, target) for row in data)[:4]
    assert lengths == pytest.approx(expected)


def test_search_k_larger_than_data():
    kd = KDTree([[3, 5], [2, 1]])
    with pytest.raises(ValueError, match="k is larger"):
        kd.search(3, Euclidean(), [7, 3])


def test_search_target_with_more_features():
    kd = KDTree([[3, 5], [2, 1]])
    with pytest.raises(ValueError, match="amount of features is not equal"):
        kd.search(1, Euclidean(), [7, 3, 5])


def test_search_k_zero():
    kd = KDTree([[3, 5], [2, 1]])
    with pytest.raises(ValueError):
        kd.search(0, Euclidean(), [7, 3])


def test_search_with_empty_right_subtree():
    kd = KDTree([[3, 5], [2, 1]])
    rows, lengths = kd.search(1, Euclidean(), [7, 3])
    assert rows == [0]
    assert lengths == pytest.approx([math.sqrt(20)])


def test_search_all_nodes_left():
    kd = KDTree([[1, 2], [5, 6], [9, 10]])
    rows, _ = kd.search(1, Euclidean(), [7, 3])
    assert rows[0] == 1


def test_search_node_length_larger_than_heap_max_left():
    kd = KDTree([[1, 2], [5, 6], [9, 10]])
    rows, _ = kd.search(1, Euclidean(), [8, 7])
    assert rows[0] == 2


def test_search_node_length_larger_than_heap_max_right():
    kd = KDTree([[1, 2], [5, 4], [9, 10]])
    rows, _ = kd.search(1, Euclidean(), [3, 3])
    assert rows[0] == 0


def test_search_before_build():
    with pytest.raises(ValueError):
        KDTree().search(1, Euclidean(), [1, 2])