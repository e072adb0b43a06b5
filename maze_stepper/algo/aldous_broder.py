from array import array

from maze_stepper.algo.base import Generator
from maze_stepper.core.cells import CellKind, Direction, GridVariant


class AldousBroder(Generator):
    """
    Random walk over the interior of a walled grid.

    The cursor carries the kind it covers. When it steps onto a cell whose only
    open neighbor is where it came from (or a single open cell elsewhere), that
    cell is carved, so the open region stays a tree. The walk ends once every
    interior cell has been visited, which happens with probability 1 but has no
    hard step bound.
    """

    def __init__(self, rows: int, columns: int, seed: int = None,
                 variant: GridVariant = GridVariant.BLOCK):
        super().__init__(rows, columns, seed, variant)
        self.grid.fill()

        # Border cells count as visited and are never walked on
        self.visited = array('B', [
            1 if self.grid.is_border(*divmod(i, columns)) else 0
            for i in range(rows * columns)
        ])
        self.interior_count = max(rows - 2, 0) * max(columns - 2, 0)
        self.visited_count = 0

        self.current_cell = (1, 1)
        self.current_cell_kind = CellKind.EMPTY

        if self.interior_count == 0:
            self._finish()

    def _visit(self, row: int, column: int):
        idx = self.grid.index_of(row, column)
        if not self.visited[idx]:
            self.visited[idx] = 1
            self.visited_count += 1

    def _complete(self):
        self.grid.set_cell(self.current_cell[0], self.current_cell[1], self.current_cell_kind)
        self._finish()

    def _random_neighbor(self):
        neighbors = self.grid.get_neighborhood_of(*self.current_cell)
        while True:
            neighbor = neighbors.get(Direction.from_unit(self.rng.random()))
            if neighbor is None or self.grid.is_border(*neighbor[1]):
                continue
            return neighbor

    def step_generation(self):
        if self.done:
            return
        self.step_count += 1

        self._visit(*self.current_cell)
        if self.visited_count == self.interior_count:
            self._complete()
            return

        kind, (n_row, n_col) = self._random_neighbor()

        count = 0
        for (n_kind, _), _ in self.grid.get_neighborhood_of(n_row, n_col):
            if ((n_kind != CellKind.WALL and n_kind != CellKind.CURSOR)
                    or (self.current_cell_kind != CellKind.WALL and n_kind == CellKind.CURSOR)):
                count += 1

        self.grid.set_cell(self.current_cell[0], self.current_cell[1], self.current_cell_kind)

        if count == 1:
            self.current_cell_kind = CellKind.EMPTY
        else:
            self.current_cell_kind = kind

        self.current_cell = (n_row, n_col)
        self._visit(n_row, n_col)
        self.grid.set_cell(n_row, n_col, CellKind.CURSOR)

        if self.visited_count == self.interior_count:
            self._complete()
