from typing import List, Tuple

from maze_stepper.algo.base import Generator
from maze_stepper.core.cells import CellKind, GridVariant


class RandomizedPrim(Generator):
    """
    Frontier growth over a walled grid. Passages sit on odd coordinates and
    each carve opens the wall cell between the maze and one new passage cell.
    """

    def __init__(self, rows: int, columns: int, seed: int = None,
                 variant: GridVariant = GridVariant.BLOCK):
        super().__init__(rows, columns, seed, variant)
        self.grid.fill()

        # Frontier: wall cells next to the carved region
        self.walls: List[Tuple[int, int]] = []
        self.last_passage = (1, 1)
        self.empty_writes = 0

        if rows < 3 or columns < 3:
            self.done = True
            return

        seed_cell = (
            1 + 2 * int(self.rng.random() * ((rows - 1) // 2)),
            1 + 2 * int(self.rng.random() * ((columns - 1) // 2)),
        )
        self.walls.append(seed_cell)
        self.last_passage = seed_cell

    def _carve(self, row: int, column: int):
        self.grid.set_cell(row, column, CellKind.EMPTY)
        self.empty_writes += 1

    def step_generation(self):
        if self.done:
            return
        self.step_count += 1

        # loop until a wall is carved or the frontier runs dry
        while True:
            if not self.walls:
                self._carve(*self.last_passage)
                self._finish()
                return

            rand_wall = self.walls.pop(int(len(self.walls) * self.rng.random()))
            neighbors = self.grid.get_neighborhood_of(*rand_wall)

            count = 0
            unwalled_dir = None
            for (kind, _), direction in neighbors:
                if kind != CellKind.WALL:
                    count += 1
                    unwalled_dir = direction

            if count >= 2:
                continue

            if unwalled_dir is not None:
                far = self.grid.get_neighbor_coords_of(rand_wall, -unwalled_dir)
                if self.grid.is_border(*far):
                    continue

            self._carve(*self.last_passage)
            self._carve(*rand_wall)

            if unwalled_dir is not None:
                self.last_passage = self.grid.set_neighbor_of(rand_wall, -unwalled_dir, CellKind.CURSOR)

            for (kind, coords), _ in self.grid.get_neighborhood_of(*self.last_passage):
                if kind != CellKind.WALL or self.grid.is_border(*coords):
                    continue
                if coords not in self.walls:
                    self.walls.append(coords)
            return
