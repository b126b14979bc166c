"""A binary max-heap of search candidates keyed by distance."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = ["HeapNode", "MaxHeap"]


@dataclass(frozen=True)
class HeapNode:
    """A candidate point: its coordinates, its distance and its source row."""

    value: tuple[float, ...] = ()
    length: float = 0.0
    src_row: int = 0


class MaxHeap:
    """Max-heap ordered by ``HeapNode.length``."""

    def __init__(self) -> None:
        self._tree: list[HeapNode] = []

    def __len__(self) -> int:
        return len(self._tree)

    def maximum(self) -> HeapNode:
        """Return the node with the largest length, or an empty node if the heap is empty."""
        if not self._tree:
            return HeapNode()
        return self._tree[0]

    def extract_max(self) -> None:
        """Remove the node with the largest length; does nothing on an empty heap."""
        if not self._tree:
            return
        last = self._tree.pop()
        if not self._tree:
            return
        tree = self._tree
        tree[0] = last
        index = 0
        size = len(tree)
        while True:
            left = 2 * index + 1
            if left >= size:
                break
            largest = index
            if tree[left].length > tree[index].length:
                largest = left
            right = left + 1
            if right < size and tree[right].length > tree[largest].length:
                largest = right
            if largest == index:
                break
            tree[largest], tree[index] = tree[index], tree[largest]
            index = largest

    def insert(self, value: Iterable[float], length: float, src_row: int) -> None:
        """Add a node; ``value`` is copied."""
        tree = self._tree
        tree.append(HeapNode(tuple(value), length, src_row))
        index = len(tree) - 1
        while index > 0:
            parent = (index - 1) // 2
            if tree[parent].length >= tree[index].length:
                break
            tree[parent], tree[index] = tree[index], tree[parent]
            index = parent