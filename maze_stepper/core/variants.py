from maze_stepper.core.block_grid import BlockGrid
from maze_stepper.core.cells import GridVariant
from maze_stepper.core.grid import Grid
from maze_stepper.core.wall_grid import WallGrid

GRID_TYPES = {
    GridVariant.BLOCK: BlockGrid,
    GridVariant.WALL: WallGrid,
}


def make_grid(rows: int, columns: int, variant: GridVariant = GridVariant.BLOCK) -> Grid:
    return GRID_TYPES[variant](rows, columns)
