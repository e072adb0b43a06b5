from collections import deque
from typing import Dict, Iterable, Optional, Set

from maze_stepper.core.cells import CellKind, Coord
from maze_stepper.core.grid import Grid


class MazeAnalyzer:
    """Read-only structure checks on a generated maze."""

    @staticmethod
    def open_neighbors(grid: Grid, row: int, column: int) -> Iterable[Coord]:
        for (kind, coords), _ in grid.get_neighborhood_of(row, column):
            if kind != CellKind.WALL and grid.passable((row, column), coords):
                yield coords

    @staticmethod
    def interior_open_cells(grid: Grid) -> Set[Coord]:
        cells = set()
        for row in range(1, grid.rows - 1):
            for col in range(1, grid.columns - 1):
                if grid.get_cell(row, col) != CellKind.WALL:
                    cells.add((row, col))
        return cells

    @staticmethod
    def flood_fill(grid: Grid, origin: Coord, allowed: Optional[Set[Coord]] = None) -> Set[Coord]:
        """Cells reachable from origin through open cells (restricted to `allowed` if given)."""
        seen = {origin}
        queue = deque([origin])
        while queue:
            row, col = queue.popleft()
            for coords in MazeAnalyzer.open_neighbors(grid, row, col):
                if coords in seen:
                    continue
                if allowed is not None and coords not in allowed:
                    continue
                seen.add(coords)
                queue.append(coords)
        return seen

    @staticmethod
    def is_connected(grid: Grid) -> bool:
        """True when every open interior cell reaches every other one."""
        cells = MazeAnalyzer.interior_open_cells(grid)
        if not cells:
            return True
        origin = min(cells)
        return MazeAnalyzer.flood_fill(grid, origin, cells) == cells

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        dead_ends = 0
        corridors = 0  # 2 exits
        intersections = 0  # 3+ exits

        cells = MazeAnalyzer.interior_open_cells(grid)
        for row, col in cells:
            exits = sum(1 for _ in MazeAnalyzer.open_neighbors(grid, row, col))
            if exits == 1:
                dead_ends += 1
            elif exits == 2:
                corridors += 1
            elif exits >= 3:
                intersections += 1

        total = len(cells)
        return {
            "open_cells": total,
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
        }
