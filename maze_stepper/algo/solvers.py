import heapq
from abc import ABC, abstractmethod
from array import array
from collections import deque
from typing import Dict, List, Optional, Tuple

from maze_stepper.core.cells import SolverKind
from maze_stepper.core.errors import ConfigurationError
from maze_stepper.core.graph import ReachabilityGraph

UNDISCOVERED = -1


class Solver(ABC):
    """
    Resumable search over a ReachabilityGraph.

    Nodes are finalised when they leave the frontier. The root is finalised on
    construction and its back-pointer is a self loop, so walking back-pointers
    from any discovered node always ends at the root.
    """

    def __init__(self, graph: ReachabilityGraph, root: int):
        self.root = root
        self.solved = False
        # Dense back-pointer array, -1 = not discovered yet
        self.came_from = array('l', [UNDISCOVERED] * graph.node_count)
        self.came_from[root] = root
        self.visited_count = 1
        self._expand(graph, root)

    @abstractmethod
    def _push(self, node: int, parent: int):
        pass

    @abstractmethod
    def _pop(self) -> Optional[Tuple[int, int]]:
        pass

    def _expand(self, graph: ReachabilityGraph, node: int):
        for neighbor in graph.neighbors(node):
            if self.came_from[neighbor] == UNDISCOVERED:
                self._push(neighbor, node)

    def next(self, graph: ReachabilityGraph) -> Optional[Tuple[int, int]]:
        """
        Finalises exactly one new node and returns (node, parent),
        or None once the frontier is exhausted.
        """
        while True:
            entry = self._pop()
            if entry is None:
                return None

            node, parent = entry
            if self.came_from[node] != UNDISCOVERED:
                continue  # stale duplicate

            self.came_from[node] = parent
            self.visited_count += 1
            self._expand(graph, node)
            return node, parent

    def is_solved(self) -> bool:
        return self.solved

    def set_solved(self):
        self.solved = True

    def from_index_of(self, node: int) -> int:
        return self.came_from[node]

    def is_discovered(self, node: int) -> bool:
        return self.came_from[node] != UNDISCOVERED

    def path_to(self, graph: ReachabilityGraph, goal: int) -> Optional[List[int]]:
        """Drains next() until goal is finalised. Returns root..goal indices or None."""
        while not self.is_discovered(goal):
            step = self.next(graph)
            if step is None:
                return None

        self.set_solved()
        return self.reconstruct_path(goal)

    def reconstruct_path(self, goal: int) -> List[int]:
        path = [goal]
        curr = goal
        while curr != self.root:
            curr = self.came_from[curr]
            path.append(curr)
        path.reverse()
        return path


class BFS(Solver):
    """FIFO frontier. Shortest path by edge count on an unweighted grid."""

    def __init__(self, graph: ReachabilityGraph, root: int):
        self.queue = deque()
        super().__init__(graph, root)

    def _push(self, node: int, parent: int):
        self.queue.append((node, parent))

    def _pop(self) -> Optional[Tuple[int, int]]:
        if self.queue:
            return self.queue.popleft()
        return None


class DFS(Solver):
    """LIFO frontier. Finds a connected path, not necessarily the shortest."""

    def __init__(self, graph: ReachabilityGraph, root: int):
        self.stack: List[Tuple[int, int]] = []
        super().__init__(graph, root)

    def _push(self, node: int, parent: int):
        self.stack.append((node, parent))

    def _pop(self) -> Optional[Tuple[int, int]]:
        if self.stack:
            return self.stack.pop()
        return None


class AStar(Solver):
    """
    Best-first search on g + Manhattan distance, with node indices decoded
    through the grid's column count. Ties resolve in insertion order.
    """

    def __init__(self, graph: ReachabilityGraph, root: int, goal: Optional[int], columns: int):
        if goal is None:
            raise ConfigurationError("A* requires a goal")
        self.goal = goal
        self.columns = columns
        self.open_set = []
        self.counter = 0
        # g_score initialized with -1 (infinity)
        self.g_score = array('l', [-1] * graph.node_count)
        self.g_score[root] = 0
        super().__init__(graph, root)

    def heuristic(self, node: int) -> int:
        row, col = divmod(node, self.columns)
        goal_row, goal_col = divmod(self.goal, self.columns)
        return abs(row - goal_row) + abs(col - goal_col)

    def _push(self, node: int, parent: int):
        new_g = self.g_score[parent] + 1
        old_g = self.g_score[node]
        if old_g != -1 and new_g >= old_g:
            return
        self.g_score[node] = new_g
        self.counter += 1
        heapq.heappush(self.open_set, (new_g + self.heuristic(node), self.counter, node, parent))

    def _pop(self) -> Optional[Tuple[int, int]]:
        while self.open_set:
            _, _, node, parent = heapq.heappop(self.open_set)
            # Skip entries superseded by a cheaper route
            if self.g_score[node] == self.g_score[parent] + 1:
                return node, parent
        return None


SOLVERS: Dict[SolverKind, type] = {
    SolverKind.BFS: BFS,
    SolverKind.DFS: DFS,
    SolverKind.ASTAR: AStar,
}


def make_solver(kind: SolverKind, graph: ReachabilityGraph, root: int,
                goal: Optional[int], columns: int) -> Solver:
    if kind == SolverKind.ASTAR:
        return AStar(graph, root, goal, columns)
    return SOLVERS[kind](graph, root)
