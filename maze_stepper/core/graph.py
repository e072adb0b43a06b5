from typing import Iterator, List, Tuple


class ReachabilityGraph:
    """
    One node per grid cell, stored as directed adjacency lists.
    Grid code always inserts both directions, so the relation it sees is symmetric.
    Neighbor order is insertion order, which keeps searches reproducible.
    """
    __slots__ = ('node_count', 'adjacency')

    def __init__(self, node_count: int):
        self.node_count = node_count
        self.adjacency: List[List[int]] = [[] for _ in range(node_count)]

    def _check(self, node: int):
        if not 0 <= node < self.node_count:
            raise IndexError(f"Node {node} out of range (0..{self.node_count - 1})")

    def add_edge(self, a: int, b: int):
        self._check(a)
        self._check(b)
        if b not in self.adjacency[a]:
            self.adjacency[a].append(b)

    def remove_edge(self, a: int, b: int):
        self._check(a)
        self._check(b)
        if b in self.adjacency[a]:
            self.adjacency[a].remove(b)

    def connect(self, a: int, b: int):
        self.add_edge(a, b)
        self.add_edge(b, a)

    def disconnect(self, a: int, b: int):
        self.remove_edge(a, b)
        self.remove_edge(b, a)

    def has_edge(self, a: int, b: int) -> bool:
        return b in self.adjacency[a]

    def neighbors(self, node: int) -> List[int]:
        return self.adjacency[node]

    def edges(self) -> Iterator[Tuple[int, int]]:
        for a, targets in enumerate(self.adjacency):
            for b in targets:
                yield (a, b)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency)

    def clear_edges(self):
        for targets in self.adjacency:
            targets.clear()
