import logging
from abc import ABC, abstractmethod
from array import array
from typing import Iterable, List, Optional, Tuple

from maze_stepper.algo.solvers import Solver, make_solver
from maze_stepper.core.cells import CellKind, Coord, Dimensions, Direction, Neighborhood, SolverKind
from maze_stepper.core.errors import ConfigurationError
from maze_stepper.core.graph import ReachabilityGraph

logger = logging.getLogger(__name__)

DEFAULT_DIMS = (16, 16)

# Layout shared with the renderer, in normalized device coordinates
GRID_SCALE = 1.3
SQUARE_GAP = 0.005

# Markers a solve leaves behind
SOLVE_MARKERS = (CellKind.PATH, CellKind.EXPLORED, CellKind.CURSOR)


class Grid(ABC):
    """
    Row-major cell store, one byte per cell, row 0 at the bottom.

    Also owns the derived search state: a ReachabilityGraph and the Solver
    walking it. Both are built on demand and dropped together whenever a write
    could change what the solver sees.
    """

    def __init__(self, rows: int, columns: int):
        if rows < 1 or columns < 1:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")
        self.dims = Dimensions(rows, columns)
        self.cells = array('B', [CellKind.EMPTY] * (rows * columns))

        self.start: Optional[Coord] = None
        self.goal: Optional[Coord] = None
        self.cursor: Optional[Coord] = None

        self.graph: Optional[ReachabilityGraph] = None
        self.solver: Optional[Solver] = None
        self._solver_kind = SolverKind.BFS

    # -- passability model ------------------------------------------------

    @abstractmethod
    def passable(self, a: Coord, b: Coord) -> bool:
        """Whether two orthogonally adjacent cells can be crossed between."""

    @abstractmethod
    def build_graph(self) -> ReachabilityGraph:
        pass

    @abstractmethod
    def fill(self):
        pass

    def sync_passages(self):
        """Brings a separate passage relation in line with the cell kinds."""

    def _affects_passability(self, prev: CellKind, kind: CellKind) -> bool:
        return False

    # -- cell access -------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.dims.rows

    @property
    def columns(self) -> int:
        return self.dims.columns

    def index_of(self, row: int, column: int) -> int:
        if 0 <= row < self.dims.rows and 0 <= column < self.dims.columns:
            return row * self.dims.columns + column
        raise IndexError(f"Cell ({row}, {column}) out of bounds for {self.dims.rows}x{self.dims.columns}")

    def coords_of(self, index: int) -> Coord:
        return divmod(index, self.dims.columns)

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.dims.rows and 0 <= column < self.dims.columns

    def is_border(self, row: int, column: int) -> bool:
        return row == 0 or column == 0 or row == self.dims.rows - 1 or column == self.dims.columns - 1

    def get_cell(self, row: int, column: int) -> CellKind:
        return CellKind(self.cells[self.index_of(row, column)])

    def set_cell(self, row: int, column: int, kind: CellKind) -> CellKind:
        idx = self.index_of(row, column)
        prev = CellKind(self.cells[idx])
        self.cells[idx] = kind
        if self._affects_passability(prev, kind):
            self.invalidate()
        return prev

    def unset_cell(self, row: int, column: int) -> CellKind:
        return self.set_cell(row, column, CellKind.EMPTY)

    def is_set(self, row: int, column: int) -> bool:
        return self.get_cell(row, column) != CellKind.EMPTY

    def snapshot(self) -> List[CellKind]:
        return [CellKind(value) for value in self.cells]

    def set_cells(self, cells: Iterable[CellKind]):
        data = array('B', cells)
        if len(data) != len(self.cells):
            raise ValueError(f"Expected {len(self.cells)} cells, got {len(data)}")
        self.cells = data
        self.invalidate()

    def toggle_cell(self, row: int, column: int, kind: CellKind) -> CellKind:
        """
        Paint-style write: the same kind clears the cell, anything else overwrites it.
        Start and Goal are unique, placing one evicts the previous holder.
        """
        idx = self.index_of(row, column)
        prev = CellKind(self.cells[idx])
        new = CellKind.EMPTY if prev == kind else kind

        if kind == CellKind.START and self.start is not None and self.start != (row, column):
            self._evict(self.start, CellKind.START)
        if kind == CellKind.GOAL and self.goal is not None and self.goal != (row, column):
            self._evict(self.goal, CellKind.GOAL)

        self.set_cell(row, column, new)

        if prev == CellKind.START and new != CellKind.START:
            self.start = None
            self.invalidate()
        if prev == CellKind.GOAL and new != CellKind.GOAL:
            self.goal = None
            self.invalidate()
        if new == CellKind.START:
            self.start = (row, column)
            self.invalidate()
        if new == CellKind.GOAL:
            self.goal = (row, column)
            self.invalidate()

        return prev

    def _evict(self, coords: Coord, kind: CellKind):
        if self.get_cell(*coords) == kind:
            self.unset_cell(*coords)
        if kind == CellKind.START:
            self.start = None
        else:
            self.goal = None

    def clear(self):
        self.cells = array('B', [CellKind.EMPTY] * len(self.cells))
        self._drop_markers()

    def _drop_markers(self):
        self.start = None
        self.goal = None
        self.cursor = None
        self.invalidate()

    # -- neighbors ---------------------------------------------------------

    def get_neighbor_coords_of(self, coords: Coord, direction: Direction) -> Coord:
        if direction == Direction.SENTINEL:
            raise ValueError("SENTINEL has no neighbor")
        dr, dc = direction.delta
        return (coords[0] + dr, coords[1] + dc)

    def set_neighbor_of(self, coords: Coord, direction: Direction, kind: CellKind) -> Coord:
        n_row, n_col = self.get_neighbor_coords_of(coords, direction)
        self.set_cell(n_row, n_col, kind)
        return (n_row, n_col)

    def get_neighborhood_of(self, row: int, column: int) -> Neighborhood:
        idx = self.index_of(row, column)
        cols = self.dims.columns
        neighbors = Neighborhood()

        if row < self.dims.rows - 1:
            neighbors.north = (CellKind(self.cells[idx + cols]), (row + 1, column))
        if row > 0:
            neighbors.south = (CellKind(self.cells[idx - cols]), (row - 1, column))
        if column < cols - 1:
            neighbors.east = (CellKind(self.cells[idx + 1]), (row, column + 1))
        if column > 0:
            neighbors.west = (CellKind(self.cells[idx - 1]), (row, column - 1))

        return neighbors

    # -- pointer input -----------------------------------------------------

    def get_ndc_params(self, size: Tuple[int, int]) -> Tuple[float, float, float, float]:
        """
        Returns (cell_width, cell_height, bottom_left_x, bottom_left_y) in
        normalized device coordinates for a viewport of size (width, height).
        """
        width, height = size
        ratio = width / height
        if ratio >= 1.0:
            sq_width = GRID_SCALE / self.dims.columns / ratio
            sq_height = GRID_SCALE / self.dims.rows
        else:
            sq_width = GRID_SCALE / self.dims.columns
            sq_height = GRID_SCALE / self.dims.rows * ratio

        bottom_left_x = (2.0 - (GRID_SCALE + self.dims.columns * SQUARE_GAP)) / 2.0 - 1.0
        bottom_left_y = (2.0 - (GRID_SCALE + self.dims.rows * SQUARE_GAP)) / 2.0 - 1.0
        return sq_width, sq_height, bottom_left_x, bottom_left_y

    def cell_at(self, pos: Tuple[float, float], size: Tuple[int, int]) -> Optional[Coord]:
        """Maps a pointer position in [0, 1]^2 (origin top-left) to a cell, or None."""
        x = 2.0 * pos[0] - 1.0
        y = -(2.0 * pos[1] - 1.0)

        sq_width, sq_height, bottom_left_x, bottom_left_y = self.get_ndc_params(size)
        x -= bottom_left_x
        y -= bottom_left_y
        if x < 0.0 or y < 0.0:
            return None

        row = int(y / (sq_height + SQUARE_GAP))
        column = int(x / (sq_width + SQUARE_GAP))
        if row < self.dims.rows and column < self.dims.columns:
            return (row, column)
        return None

    def handle_click(self, pos: Tuple[float, float], size: Tuple[int, int], kind: CellKind):
        coords = self.cell_at(pos, size)
        if coords is not None:
            self.toggle_cell(coords[0], coords[1], kind)

    # -- solving -----------------------------------------------------------

    @property
    def solver_kind(self) -> SolverKind:
        return self._solver_kind

    @solver_kind.setter
    def solver_kind(self, kind: SolverKind):
        if kind != self._solver_kind:
            self._solver_kind = kind
            self.invalidate()

    def invalidate(self):
        self.graph = None
        self.solver = None

    def _clear_solve_markers(self):
        for i, value in enumerate(self.cells):
            if value in SOLVE_MARKERS:
                self.cells[i] = CellKind.EMPTY

    def make_graph(self):
        """Builds the reachability graph and a fresh solver rooted at Start."""
        self._clear_solve_markers()
        self.cursor = None

        if self.start is None:
            raise ConfigurationError("Cannot build a solver without a start cell")
        if self.goal is None and self._solver_kind == SolverKind.ASTAR:
            raise ConfigurationError("A* requires a goal")

        self.graph = self.build_graph()
        root_idx = self.index_of(*self.start)
        goal_idx = self.index_of(*self.goal) if self.goal is not None else None
        self.solver = make_solver(self._solver_kind, self.graph, root_idx, goal_idx, self.dims.columns)
        logger.debug("Built graph with %d nodes, %d edges for %s",
                     self.graph.node_count, self.graph.edge_count(), self._solver_kind.name)

    def reset_solver(self):
        """Wipes solve markers and, when a start exists, roots a fresh solver there."""
        self._clear_solve_markers()
        self.cursor = None
        self.invalidate()
        if self.start is not None:
            self.make_graph()

    def step_solve_path(self) -> bool:
        """
        Advances the animated solve by one unit. While searching, paints the
        newly discovered node as Cursor. Once the goal is reached, walks one
        back-pointer per call painting Path. Returns False when nothing is left.
        """
        if self.start is None or self.goal is None:
            return False

        self.set_cell(self.start[0], self.start[1], CellKind.START)
        self.set_cell(self.goal[0], self.goal[1], CellKind.GOAL)

        for i, value in enumerate(self.cells):
            if value == CellKind.CURSOR:
                self.cells[i] = CellKind.EXPLORED

        if self.graph is None or self.solver is None:
            self.make_graph()

        solver = self.solver
        if solver.is_solved():
            idx = self.index_of(*self.cursor)
            row, col = self.coords_of(solver.from_index_of(idx))
            if (row, col) == self.start:
                return False
            self.cursor = (row, col)
            kind = CellKind.PATH
        else:
            step = solver.next(self.graph)
            if step is None:
                logger.debug("Frontier exhausted after %d nodes", solver.visited_count)
                return False
            row, col = self.coords_of(step[0])
            if (row, col) == self.goal:
                solver.set_solved()
                self.cursor = (row, col)
            kind = CellKind.CURSOR

        self.set_cell(row, col, kind)
        return True

    def solve_path(self) -> Optional[List[int]]:
        """Solves in one call and paints the path between Start and Goal."""
        if self.start is None or self.goal is None:
            return None

        self.make_graph()
        goal_idx = self.index_of(*self.goal)
        logger.debug("Solving from %s to %s with %s", self.start, self.goal, self._solver_kind.name)

        path = self.solver.path_to(self.graph, goal_idx)
        if path is not None:
            for idx in path[1:-1]:
                row, col = self.coords_of(idx)
                self.set_cell(row, col, CellKind.PATH)
            logger.info("Path found: %d cells, %d nodes visited", len(path), self.solver.visited_count)
        else:
            logger.warning("No path from %s to %s", self.start, self.goal)

        # A later solve starts from a clean graph
        self.invalidate()
        return path
