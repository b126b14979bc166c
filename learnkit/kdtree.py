"""A k-d tree for k-nearest-neighbour search under any distance function."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .heap import MaxHeap
from .pairwise import DistanceFunction

__all__ = ["KDTree"]


@dataclass
class _Node:
    value: tuple[float, ...]
    src_row: int
    feature: int | None = None  # None marks a leaf
    left: _Node | None = None
    right: _Node | None = None


class KDTree:
    """A k-d tree over rows of equal length."""

    def __init__(self, data: Sequence[Sequence[float]] | None = None) -> None:
        self._data: list[tuple[float, ...]] = []
        self._root: _Node | None = None
        if data is not None:
            self.build(data)

    def build(self, data: Sequence[Sequence[float]]) -> None:
        """Build the tree from ``data``; raises ``ValueError`` on bad input."""
        if len(data) == 0:
            raise ValueError("no input data")
        rows = [tuple(float(v) for v in row) for row in data]
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("amounts of features are not the same")
        if len(rows) > 1 and width == 0:
            raise ValueError("rows have no features")

        self._data = rows
        if len(rows) == 1:
            self._root = self._leaf(0)
        else:
            self._root = self._build(list(range(len(rows))), 0)

    def _leaf(self, row: int) -> _Node:
        return _Node(self._data[row], row)

    def _build(self, rows: list[int], feature: int) -> _Node:
        data = self._data
        order = sorted(rows, key=lambda r: data[r][feature])
        middle = len(order) // 2
        pivot = data[order[middle]][feature]
        split = middle
        while split + 1 < len(order) and data[order[split + 1]][feature] == pivot:
            split += 1

        next_feature = (feature + 1) % len(data[order[0]])
        node = _Node(data[order[split]], order[split], feature)

        if split == 1:
            node.left = self._leaf(order[0])
        else:
            node.left = self._build(order[:split], next_feature)

        if split == len(order) - 2:
            node.right = self._leaf(order[split + 1])
        elif split != len(order) - 1:
            node.right = self._build(order[split + 1 :], next_feature)
        return node

    def search(
        self, k: int, distance: DistanceFunction, target: Sequence[float]
    ) -> tuple[list[int], list[float]]:
        """Return the source rows and distances of the ``k`` nearest rows, nearest first."""
        if k > len(self._data):
            raise ValueError("k is larger than the amount of training data")
        if k < 1:
            raise ValueError("k must be at least 1")
        if len(target) != len(self._data[0]):
            raise ValueError("amount of features is not equal")

        point = tuple(float(v) for v in target)
        heap = MaxHeap()

        def offer(node: _Node) -> bool:
            length = distance.distance(point, node.value)
            if len(heap) < k:
                heap.insert(node.value, length, node.src_row)
                return True
            if heap.maximum().length > length:
                heap.extract_max()
                heap.insert(node.value, length, node.src_row)
                return True
            return False

        def visit_all(node: _Node | None) -> None:
            if node is None:
                return
            offer(node)
            visit_all(node.left)
            visit_all(node.right)

        def descend(node: _Node | None) -> None:
            if node is None:
                return
            if node.feature is None:
                heap.insert(node.value, distance.distance(point, node.value), node.src_row)
                return
            feature = node.feature
            if point[feature] <= node.value[feature]:
                near, far = node.left, node.right
            else:
                near, far = node.right, node.left
            descend(near)
            if offer(node):
                visit_all(far)
            else:
                axis = distance.distance([point[feature]], [node.value[feature]])
                if heap.maximum().length > axis:
                    visit_all(far)

        descend(self._root)

        nearest = []
        while heap:
            nearest.append(heap.maximum())
            heap.extract_max()
        nearest.reverse()
        return [n.src_row for n in nearest], [n.length for n in nearest]