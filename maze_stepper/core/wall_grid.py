from array import array
from typing import Iterable, List, Tuple

from maze_stepper.core.cells import CellKind, Coord
from maze_stepper.core.graph import ReachabilityGraph
from maze_stepper.core.grid import Grid


class WallGrid(Grid):
    """
    Walls live between cells. Cell kinds are annotations only; passability is
    the `passages` graph, an edge meaning there is no wall between two cells.
    A new grid starts fully open.
    """

    def __init__(self, rows: int, columns: int):
        super().__init__(rows, columns)
        self.passages = ReachabilityGraph(rows * columns)
        self._open_all()

    def _open_all(self):
        self.passages.clear_edges()
        rows, cols = self.dims
        for i in range(rows * cols):
            row, col = divmod(i, cols)
            if row < rows - 1:
                self.passages.connect(i, i + cols)
            if col < cols - 1:
                self.passages.connect(i, i + 1)

    def _edge_indices(self, one: Coord, two: Coord) -> Tuple[int, int]:
        index_one = self.index_of(*one)
        index_two = self.index_of(*two)
        if abs(one[0] - two[0]) + abs(one[1] - two[1]) != 1:
            raise ValueError(f"Cells {one} and {two} are not orthogonally adjacent")
        return index_one, index_two

    def add_wall_between(self, one: Coord, two: Coord):
        index_one, index_two = self._edge_indices(one, two)
        self.passages.disconnect(index_one, index_two)
        self.invalidate()

    def clear_wall_between(self, one: Coord, two: Coord):
        index_one, index_two = self._edge_indices(one, two)
        self.passages.connect(index_one, index_two)
        self.invalidate()

    def has_wall_between(self, one: Coord, two: Coord) -> bool:
        return not self.passable(one, two)

    def passable(self, a: Coord, b: Coord) -> bool:
        return self.passages.has_edge(self.index_of(*a), self.index_of(*b))

    def clear(self):
        super().clear()
        self._open_all()

    def fill(self):
        self.cells = array('B', [CellKind.WALL] * len(self.cells))
        self.passages.clear_edges()
        self._drop_markers()

    def sync_passages(self):
        """Opens exactly the edges between adjacent non-Wall cells."""
        self.passages.clear_edges()
        rows, cols = self.dims
        cells = self.cells
        for i in range(rows * cols):
            if cells[i] == CellKind.WALL:
                continue
            row, col = divmod(i, cols)
            if row < rows - 1 and cells[i + cols] != CellKind.WALL:
                self.passages.connect(i, i + cols)
            if col < cols - 1 and cells[i + 1] != CellKind.WALL:
                self.passages.connect(i, i + 1)
        self.invalidate()

    def build_graph(self) -> ReachabilityGraph:
        return self.passages

    def paths(self) -> List[Tuple[int, int]]:
        return list(self.passages.edges())

    def set_paths(self, pairs: Iterable[Tuple[int, int]]):
        pairs = list(pairs)
        # All pairs are checked before the live edge set is touched
        for a, b in pairs:
            self._edge_indices(self.coords_of(a), self.coords_of(b))

        self.passages.clear_edges()
        for a, b in pairs:
            self.passages.connect(a, b)
        self.invalidate()
