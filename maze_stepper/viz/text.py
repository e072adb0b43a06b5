from typing import List

from maze_stepper.core.cells import CellKind
from maze_stepper.core.grid import Grid

GLYPHS = {
    CellKind.EMPTY: " ",
    CellKind.WALL: "#",
    CellKind.START: "S",
    CellKind.GOAL: "G",
    CellKind.PATH: ".",
    CellKind.EXPLORED: "~",
    CellKind.CURSOR: "@",
}


def to_lines(grid: Grid) -> List[str]:
    """
    Top row first, so north points up like on screen.

    Only cell kinds are drawn. Walls a WallGrid keeps between cells (for
    example from add_wall_between) do not show up; the pygame viewer draws them.
    """
    lines = []
    for row in range(grid.rows - 1, -1, -1):
        lines.append("".join(GLYPHS[grid.get_cell(row, col)] for col in range(grid.columns)))
    return lines


def to_text(grid: Grid) -> str:
    return "\n".join(to_lines(grid))
