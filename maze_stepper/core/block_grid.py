from array import array

from maze_stepper.core.cells import CellKind, Coord
from maze_stepper.core.graph import ReachabilityGraph
from maze_stepper.core.grid import Grid


class BlockGrid(Grid):
    """Walls occupy whole cells. Every non-Wall cell is passable."""

    def _affects_passability(self, prev: CellKind, kind: CellKind) -> bool:
        return (prev == CellKind.WALL) != (kind == CellKind.WALL)

    def passable(self, a: Coord, b: Coord) -> bool:
        return (self.get_cell(*a) != CellKind.WALL
                and self.get_cell(*b) != CellKind.WALL)

    def fill(self):
        self.cells = array('B', [CellKind.WALL] * len(self.cells))
        self._drop_markers()

    def build_graph(self) -> ReachabilityGraph:
        rows, cols = self.dims
        graph = ReachabilityGraph(rows * cols)
        cells = self.cells

        for i in range(rows * cols):
            if cells[i] == CellKind.WALL:
                continue
            row, col = divmod(i, cols)

            # North, South, East, West
            if row < rows - 1 and cells[i + cols] != CellKind.WALL:
                graph.add_edge(i, i + cols)
            if row > 0 and cells[i - cols] != CellKind.WALL:
                graph.add_edge(i, i - cols)
            if col < cols - 1 and cells[i + 1] != CellKind.WALL:
                graph.add_edge(i, i + 1)
            if col > 0 and cells[i - 1] != CellKind.WALL:
                graph.add_edge(i, i - 1)

        return graph
