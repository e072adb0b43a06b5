from typing import List, Optional, Sequence, Tuple

from maze_stepper.algo.base import Generator
from maze_stepper.core.cells import CellKind, Coord, Direction, GridVariant

Box = Tuple[Coord, Coord]


class RecursiveDivision(Generator):
    """
    Walls are added to an open room rather than carved out of a solid one.

    Each call draws a cross of walls through an inclusive (bottom_left, top_right)
    box, leaves one arm solid and opens a single gap in every other arm. Cells on
    both sides of a gap are handed down as protected so deeper divisions can never
    seal it again.

    Lines sit at an odd offset from the box origin and gaps at even offsets.
    Boxes start on row/column 1, so lines land on even coordinates and gaps on
    odd ones, and odd-sized grids come out as perfect mazes.
    Child boxes are the bands directly next to each line (line + 1 and
    line - 1), not two cells away, which keeps child origins on odd coordinates.

    Not steppable: the whole division runs inside generate_maze().
    """
    steppable = False

    def __init__(self, rows: int, columns: int, seed: int = None,
                 variant: GridVariant = GridVariant.BLOCK):
        super().__init__(rows, columns, seed, variant)
        self.grid.clear()
        for i in range(rows * columns):
            row, col = divmod(i, columns)
            if self.grid.is_border(row, col):
                self.grid.set_cell(row, col, CellKind.WALL)

    def step_generation(self):
        if self.done:
            return
        self.step_count += 1
        rows, cols = self.grid.dims
        if rows >= 3 and cols >= 3:
            self.subdivide((1, 1), (rows - 2, cols - 2), [])
        self._finish()

    def _clamp(self, row: int, column: int) -> Coord:
        rows, cols = self.grid.dims
        return (min(max(row, 0), rows - 1), min(max(column, 0), cols - 1))

    def _pick_line(self, low: int, high: int) -> Optional[int]:
        """Odd-offset line strictly inside [low, high], None if the axis is too small."""
        diff = high - low
        if diff <= 1:
            return None
        return low + 1 + 2 * int(self.rng.random() * (diff // 2))

    def _pick_gap(self, low: int, high: int) -> int:
        """Even-offset position in [low, high]."""
        return low + 2 * int(self.rng.random() * ((high - low) // 2 + 1))

    def _draw_line(self, cells: Sequence[Coord]):
        for row, col in cells:
            self.grid.set_cell(row, col, CellKind.WALL)

    def _reopen(self, protected: Sequence[Coord]):
        for row, col in protected:
            if not self.grid.is_border(row, col):
                self.grid.set_cell(row, col, CellKind.EMPTY)

    def _open_gap(self, gap: Coord, flanks: Sequence[Coord], protected: List[Coord]):
        self.grid.set_cell(gap[0], gap[1], CellKind.EMPTY)
        for flank in flanks:
            protected.append(self._clamp(*flank))

    def subdivide(self, bottom_left: Coord, top_right: Coord, dont_wall: Sequence[Coord]):
        (r0, c0), (r1, c1) = bottom_left, top_right
        if r0 > r1 or c0 > c1:
            return

        divide_row = self._pick_line(r0, r1)
        divide_col = self._pick_line(c0, c1)
        if divide_row is None and divide_col is None:
            return

        if divide_row is not None:
            self._draw_line([(divide_row, c) for c in range(c0, c1 + 1)])
        if divide_col is not None:
            self._draw_line([(r, divide_col) for r in range(r0, r1 + 1)])

        self._reopen(dont_wall)

        protected = list(dont_wall)

        if divide_row is not None and divide_col is not None:
            wall_to_leave_out = Direction.from_unit(self.rng.random())
            for arm in (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST):
                if arm == wall_to_leave_out:
                    continue

                if arm == Direction.NORTH:
                    gap = (self._pick_gap(divide_row + 1, r1), divide_col)
                elif arm == Direction.SOUTH:
                    gap = (self._pick_gap(r0, divide_row - 1), divide_col)
                elif arm == Direction.EAST:
                    gap = (divide_row, self._pick_gap(divide_col + 1, c1))
                else:
                    gap = (divide_row, self._pick_gap(c0, divide_col - 1))

                if arm in (Direction.NORTH, Direction.SOUTH):
                    flanks = [(gap[0], gap[1] + 1), (gap[0], gap[1] - 1)]
                else:
                    flanks = [(gap[0] + 1, gap[1]), (gap[0] - 1, gap[1])]
                self._open_gap(gap, flanks, protected)

        elif divide_row is not None:
            gap = (divide_row, self._pick_gap(c0, c1))
            self._open_gap(gap, [(gap[0] + 1, gap[1]), (gap[0] - 1, gap[1])], protected)

        else:
            gap = (self._pick_gap(r0, r1), divide_col)
            self._open_gap(gap, [(gap[0], gap[1] + 1), (gap[0], gap[1] - 1)], protected)

        row_bands = [(r0, r1)] if divide_row is None else [(divide_row + 1, r1), (r0, divide_row - 1)]
        col_bands = [(c0, c1)] if divide_col is None else [(c0, divide_col - 1), (divide_col + 1, c1)]

        # top left, top right, bottom left, bottom right
        for low_row, high_row in row_bands:
            for low_col, high_col in col_bands:
                self.subdivide((low_row, low_col), (high_row, high_col), protected)
