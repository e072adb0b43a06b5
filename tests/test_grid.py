import unittest
import sys
import os

# Add project root to path so we can import maze_stepper
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.block_grid import BlockGrid
from maze_stepper.core.cells import CellKind, Direction, GridVariant, Neighborhood, SolverKind
from maze_stepper.core.grid import GRID_SCALE, SQUARE_GAP
from maze_stepper.core.variants import make_grid
from maze_stepper.core.wall_grid import WallGrid


class TestDirections(unittest.TestCase):
    def test_negation(self):
        self.assertEqual(-Direction.NORTH, Direction.SOUTH)
        self.assertEqual(-Direction.SOUTH, Direction.NORTH)
        self.assertEqual(-Direction.EAST, Direction.WEST)
        self.assertEqual(-Direction.WEST, Direction.EAST)
        self.assertEqual(-Direction.SENTINEL, Direction.SENTINEL)

    def test_from_unit(self):
        self.assertEqual(Direction.from_unit(0.0), Direction.NORTH)
        self.assertEqual(Direction.from_unit(0.26), Direction.SOUTH)
        self.assertEqual(Direction.from_unit(0.5), Direction.EAST)
        self.assertEqual(Direction.from_unit(0.999), Direction.WEST)

    def test_neighborhood_order(self):
        hood = Neighborhood(
            west=(CellKind.WALL, (1, 0)),
            east=(CellKind.EMPTY, (1, 2)),
            north=(CellKind.GOAL, (2, 1)),
        )
        dirs = [d for _, d in hood]
        self.assertEqual(dirs, [Direction.NORTH, Direction.EAST, Direction.WEST])
        self.assertIsNone(hood.south)
        self.assertEqual(len(hood), 3)


class TestBlockGrid(unittest.TestCase):
    def test_initialization(self):
        grid = BlockGrid(4, 6)
        self.assertEqual(len(grid.cells), 24)
        self.assertTrue(all(k == CellKind.EMPTY for k in grid.snapshot()))
        self.assertEqual(grid.solver_kind, SolverKind.BFS)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            BlockGrid(0, 5)

    def test_coordinates(self):
        grid = BlockGrid(5, 5)
        self.assertEqual(grid.index_of(2, 3), 13)
        self.assertEqual(grid.coords_of(13), (2, 3))
        with self.assertRaises(IndexError):
            grid.get_cell(-1, 0)
        with self.assertRaises(IndexError):
            grid.set_cell(0, 5, CellKind.WALL)

    def test_set_cell_returns_previous(self):
        grid = BlockGrid(3, 3)
        self.assertEqual(grid.set_cell(1, 1, CellKind.WALL), CellKind.EMPTY)
        self.assertEqual(grid.set_cell(1, 1, CellKind.PATH), CellKind.WALL)
        self.assertTrue(grid.is_set(1, 1))
        self.assertEqual(grid.unset_cell(1, 1), CellKind.PATH)
        self.assertFalse(grid.is_set(1, 1))

    def test_toggle_same_kind_clears(self):
        grid = BlockGrid(3, 3)
        self.assertEqual(grid.toggle_cell(1, 2, CellKind.WALL), CellKind.EMPTY)
        self.assertEqual(grid.get_cell(1, 2), CellKind.WALL)
        self.assertEqual(grid.toggle_cell(1, 2, CellKind.WALL), CellKind.WALL)
        self.assertEqual(grid.get_cell(1, 2), CellKind.EMPTY)

    def test_toggle_different_kind_overwrites(self):
        grid = BlockGrid(3, 3)
        grid.toggle_cell(0, 0, CellKind.WALL)
        grid.toggle_cell(0, 0, CellKind.GOAL)
        self.assertEqual(grid.get_cell(0, 0), CellKind.GOAL)
        self.assertEqual(grid.goal, (0, 0))

    def test_start_goal_unique(self):
        grid = BlockGrid(5, 5)
        grid.toggle_cell(1, 1, CellKind.START)
        grid.toggle_cell(3, 3, CellKind.START)
        self.assertEqual(grid.start, (3, 3))
        self.assertEqual(grid.get_cell(1, 1), CellKind.EMPTY)
        self.assertEqual(grid.snapshot().count(CellKind.START), 1)

        grid.toggle_cell(0, 4, CellKind.GOAL)
        grid.toggle_cell(4, 0, CellKind.GOAL)
        self.assertEqual(grid.goal, (4, 0))
        self.assertEqual(grid.snapshot().count(CellKind.GOAL), 1)

    def test_toggle_off_start_forgets_it(self):
        grid = BlockGrid(3, 3)
        grid.toggle_cell(1, 1, CellKind.START)
        grid.toggle_cell(1, 1, CellKind.START)
        self.assertIsNone(grid.start)

        grid.toggle_cell(1, 1, CellKind.GOAL)
        grid.toggle_cell(1, 1, CellKind.WALL)
        self.assertIsNone(grid.goal)

    def test_neighbors(self):
        grid = BlockGrid(3, 3)
        grid.set_cell(2, 1, CellKind.WALL)
        hood = grid.get_neighborhood_of(1, 1)
        self.assertEqual(hood.north, (CellKind.WALL, (2, 1)))
        self.assertEqual(hood.south, (CellKind.EMPTY, (0, 1)))
        self.assertEqual(hood.east, (CellKind.EMPTY, (1, 2)))
        self.assertEqual(hood.west, (CellKind.EMPTY, (1, 0)))

        corner = grid.get_neighborhood_of(0, 0)
        self.assertIsNone(corner.south)
        self.assertIsNone(corner.west)
        self.assertEqual([d for _, d in corner], [Direction.NORTH, Direction.EAST])

    def test_set_neighbor_of(self):
        grid = BlockGrid(3, 3)
        coords = grid.set_neighbor_of((1, 1), Direction.WEST, CellKind.CURSOR)
        self.assertEqual(coords, (1, 0))
        self.assertEqual(grid.get_cell(1, 0), CellKind.CURSOR)

    def test_clear_and_fill(self):
        grid = BlockGrid(4, 4)
        grid.toggle_cell(0, 0, CellKind.START)
        grid.toggle_cell(3, 3, CellKind.GOAL)
        grid.fill()
        self.assertTrue(all(k == CellKind.WALL for k in grid.snapshot()))
        self.assertIsNone(grid.start)
        self.assertIsNone(grid.goal)

        grid.clear()
        self.assertTrue(all(k == CellKind.EMPTY for k in grid.snapshot()))

    def test_wall_write_invalidates_cache(self):
        grid = BlockGrid(5, 5)
        grid.toggle_cell(1, 1, CellKind.START)
        grid.toggle_cell(3, 3, CellKind.GOAL)
        grid.make_graph()
        self.assertIsNotNone(grid.graph)

        # Marker writes leave the cache alone
        grid.set_cell(2, 2, CellKind.EXPLORED)
        self.assertIsNotNone(grid.graph)

        grid.set_cell(2, 2, CellKind.WALL)
        self.assertIsNone(grid.graph)
        self.assertIsNone(grid.solver)

    def test_moving_endpoints_invalidates(self):
        grid = BlockGrid(5, 5)
        grid.toggle_cell(1, 1, CellKind.START)
        grid.toggle_cell(3, 3, CellKind.GOAL)
        grid.make_graph()

        grid.toggle_cell(2, 1, CellKind.START)
        self.assertEqual(grid.start, (2, 1))
        self.assertIsNone(grid.graph)
        self.assertIsNone(grid.solver)

        grid.make_graph()
        grid.toggle_cell(3, 2, CellKind.GOAL)
        self.assertIsNone(grid.solver)

    def test_solver_kind_change_invalidates(self):
        grid = BlockGrid(5, 5)
        grid.toggle_cell(1, 1, CellKind.START)
        grid.toggle_cell(3, 3, CellKind.GOAL)
        grid.make_graph()
        grid.solver_kind = SolverKind.DFS
        self.assertIsNone(grid.solver)


class TestHandleClick(unittest.TestCase):
    def click_pos(self, grid, size, row, col):
        """Inverse of the click mapping: pointer position at the centre of a cell."""
        sq_w, sq_h, blx, bly = grid.get_ndc_params(size)
        x = blx + col * (sq_w + SQUARE_GAP) + sq_w / 2
        y = bly + row * (sq_h + SQUARE_GAP) + sq_h / 2
        return ((x + 1.0) / 2.0, (1.0 - y) / 2.0)

    def test_click_hits_cell(self):
        grid = BlockGrid(10, 12)
        size = (800, 600)
        grid.handle_click(self.click_pos(grid, size, 0, 0), size, CellKind.WALL)
        grid.handle_click(self.click_pos(grid, size, 9, 11), size, CellKind.START)
        grid.handle_click(self.click_pos(grid, size, 4, 7), size, CellKind.GOAL)
        self.assertEqual(grid.get_cell(0, 0), CellKind.WALL)
        self.assertEqual(grid.get_cell(9, 11), CellKind.START)
        self.assertEqual(grid.goal, (4, 7))

    def test_tall_viewport(self):
        grid = BlockGrid(6, 6)
        size = (400, 900)
        grid.handle_click(self.click_pos(grid, size, 2, 3), size, CellKind.WALL)
        self.assertEqual(grid.get_cell(2, 3), CellKind.WALL)

    def test_out_of_bounds_ignored(self):
        grid = BlockGrid(8, 8)
        before = grid.cells.tobytes()
        size = (800, 800)
        grid.handle_click((0.0, 1.0), size, CellKind.WALL)   # bottom-left corner of the window
        grid.handle_click((1.0, 0.0), size, CellKind.WALL)   # top-right corner
        self.assertEqual(grid.cells.tobytes(), before)

    def test_ndc_params(self):
        grid = BlockGrid(10, 20)
        sq_w, sq_h, blx, bly = grid.get_ndc_params((1000, 500))
        self.assertAlmostEqual(sq_w, GRID_SCALE / 20 / 2.0)
        self.assertAlmostEqual(sq_h, GRID_SCALE / 10)
        self.assertAlmostEqual(blx, (2.0 - (GRID_SCALE + 20 * SQUARE_GAP)) / 2.0 - 1.0)


class TestWallGrid(unittest.TestCase):
    def test_starts_open(self):
        grid = WallGrid(3, 3)
        self.assertTrue(grid.passable((0, 0), (0, 1)))
        self.assertTrue(grid.passable((1, 1), (2, 1)))
        self.assertFalse(grid.passable((0, 0), (1, 1)))

    def test_wall_edits_are_symmetric(self):
        grid = WallGrid(3, 3)
        grid.add_wall_between((1, 1), (1, 2))
        self.assertFalse(grid.passable((1, 1), (1, 2)))
        self.assertFalse(grid.passable((1, 2), (1, 1)))
        self.assertTrue(grid.has_wall_between((1, 2), (1, 1)))

        grid.clear_wall_between((1, 2), (1, 1))
        self.assertTrue(grid.passable((1, 1), (1, 2)))
        self.assertTrue(grid.passable((1, 2), (1, 1)))

    def test_non_adjacent_rejected(self):
        grid = WallGrid(3, 3)
        with self.assertRaises(ValueError):
            grid.add_wall_between((0, 0), (2, 2))

    def test_cell_kind_is_annotation(self):
        grid = WallGrid(3, 3)
        grid.set_cell(1, 1, CellKind.WALL)
        self.assertTrue(grid.passable((1, 1), (1, 2)))

    def test_fill_and_clear(self):
        grid = WallGrid(3, 3)
        grid.fill()
        self.assertEqual(grid.passages.edge_count(), 0)
        self.assertTrue(all(k == CellKind.WALL for k in grid.snapshot()))

        grid.clear()
        self.assertTrue(all(k == CellKind.EMPTY for k in grid.snapshot()))
        # 3x3 has 12 undirected adjacencies
        self.assertEqual(grid.passages.edge_count(), 24)

    def test_paths_round_trip(self):
        grid = WallGrid(2, 2)
        grid.fill()
        grid.set_paths([(0, 1), (1, 3)])
        self.assertTrue(grid.passable((0, 0), (0, 1)))
        self.assertTrue(grid.passable((1, 1), (0, 1)))
        self.assertFalse(grid.passable((0, 0), (1, 0)))
        self.assertEqual(sorted(grid.paths()), [(0, 1), (1, 0), (1, 3), (3, 1)])

    def test_rejected_paths_leave_grid_intact(self):
        grid = WallGrid(3, 3)
        grid.toggle_cell(0, 0, CellKind.START)
        grid.toggle_cell(2, 2, CellKind.GOAL)
        grid.make_graph()
        graph, solver = grid.graph, grid.solver
        before = sorted(grid.paths())

        with self.assertRaises(ValueError):
            grid.set_paths([(0, 1), (0, 8)])

        self.assertEqual(sorted(grid.paths()), before)
        self.assertEqual(grid.passages.edge_count(), 24)
        self.assertIs(grid.graph, graph)
        self.assertIs(grid.solver, solver)

    def test_sync_passages(self):
        grid = WallGrid(3, 3)
        grid.fill()
        grid.set_cell(1, 1, CellKind.EMPTY)
        grid.set_cell(1, 2, CellKind.EMPTY)
        grid.sync_passages()
        self.assertTrue(grid.passable((1, 1), (1, 2)))
        self.assertFalse(grid.passable((1, 1), (0, 1)))

    def test_make_grid(self):
        self.assertIsInstance(make_grid(3, 3, GridVariant.WALL), WallGrid)
        self.assertIsInstance(make_grid(3, 3), BlockGrid)


if __name__ == '__main__':
    unittest.main()
