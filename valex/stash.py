"""
Stash: the per-parse parse forest.

Nodes live in an append-only arena so that children can refer to each other by
index. Only forest nodes (those produced by rules) are indexed by start offset;
raw lexical children are stored in the arena but never offered to patterns.
"""

import bisect
from typing import Dict, Iterator, List, Tuple

from .vx_types import Node


class Stash:
    def __init__(self):
        self._arena: List[Node] = []
        self._by_start: Dict[int, List[int]] = {}
        self._starts: List[int] = []
        self._forest_size = 0

    def add(self, node: Node, indexed: bool = True) -> int:
        """Append a node to the arena and return its index."""
        index = len(self._arena)
        self._arena.append(node)
        if indexed:
            start = node.range.start
            bucket = self._by_start.get(start)
            if bucket is None:
                bisect.insort(self._starts, start)
                bucket = self._by_start[start] = []
            bucket.append(index)
            self._forest_size += 1
        return index

    def __getitem__(self, index: int) -> Node:
        return self._arena[index]

    def __len__(self) -> int:
        """Number of forest nodes, excluding raw lexical children."""
        return self._forest_size

    @property
    def arena_size(self) -> int:
        return len(self._arena)

    def indices(self) -> Iterator[int]:
        """Forest node indices in document order, then insertion order."""
        for start in self._starts:
            yield from self._by_start[start]

    def items(self) -> Iterator[Tuple[int, Node]]:
        for index in self.indices():
            yield index, self._arena[index]

    def indices_starting_between(self, lo: int, hi: int) -> Iterator[int]:
        """Forest node indices whose start offset lies in [lo, hi]."""
        left = bisect.bisect_left(self._starts, lo)
        right = bisect.bisect_right(self._starts, hi)
        for start in self._starts[left:right]:
            yield from self._by_start[start]

    def children(self, node: Node) -> List[Node]:
        return [self._arena[i] for i in node.children]

    def walk(self, index: int) -> Iterator[Tuple[int, Node]]:
        """Pre-order traversal of the subtree rooted at index."""
        stack = [index]
        while stack:
            current = stack.pop()
            node = self._arena[current]
            yield current, node
            stack.extend(reversed(node.children))
