import logging
from typing import Callable, Optional, Tuple

import pygame

from maze_stepper.algo.base import Generator
from maze_stepper.core.cells import CellKind, SolverKind
from maze_stepper.core.errors import ConfigurationError
from maze_stepper.core.grid import Grid, SQUARE_GAP
from maze_stepper.core.wall_grid import WallGrid

logger = logging.getLogger(__name__)

COLORS = {
    CellKind.EMPTY: (255, 255, 255),
    CellKind.WALL: (0, 0, 0),
    CellKind.START: (255, 0, 0),
    CellKind.GOAL: (255, 255, 0),
    CellKind.EXPLORED: (51, 51, 153),
    CellKind.PATH: (25, 128, 25),
    CellKind.CURSOR: (0, 128, 76),
}

PAINT_KEYS = {
    pygame.K_1: CellKind.WALL,
    pygame.K_2: CellKind.START,
    pygame.K_3: CellKind.GOAL,
}

SOLVER_KEYS = {
    pygame.K_b: SolverKind.BFS,
    pygame.K_d: SolverKind.DFS,
    pygame.K_a: SolverKind.ASTAR,
}


class Renderer:
    """
    Draws a grid's cell snapshot and drives generators and solvers one tick at a time.
    Cell layout comes from Grid.get_ndc_params so clicks land where cells are drawn.
    """
    COLOR_BG = (10, 10, 10)
    COLOR_TEXT = (255, 255, 255)

    def __init__(self, grid: Grid, generator_factory: Optional[Callable[[], Generator]] = None,
                 width=1280, height=720, record=False, gen_steps_per_frame=1, solve_steps_per_frame=1):
        self.grid = grid
        self.generator_factory = generator_factory
        self.generator: Optional[Generator] = None
        self.screen_width = width
        self.screen_height = height
        self.gen_steps_per_frame = gen_steps_per_frame
        self.solve_steps_per_frame = solve_steps_per_frame

        self.paint_kind = CellKind.WALL
        self.solving = False
        self.status = "Idle"

        from maze_stepper.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, prefix=f"maze_{grid.rows}x{grid.columns}")

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Stepper - {self.grid.rows}x{self.grid.columns}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.screen_width, self.screen_height)

    def ndc_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return ((x + 1.0) / 2.0 * self.screen_width, (1.0 - y) / 2.0 * self.screen_height)

    def ndc_rect(self, low_x: float, low_y: float, up_x: float, up_y: float) -> pygame.Rect:
        left, top = self.ndc_to_screen(low_x, up_y)
        right, bottom = self.ndc_to_screen(up_x, low_y)
        return pygame.Rect(int(left), int(top), max(1, int(right - left + 0.5)), max(1, int(bottom - top + 0.5)))

    # -- driving -----------------------------------------------------------

    def start_generation(self):
        if self.generator_factory is None:
            return
        kind = self.grid.solver_kind
        self.generator = self.generator_factory()
        self.grid = self.generator.grid
        self.grid.solver_kind = kind
        self.solving = False
        if not self.generator.steppable:
            self.generator.generate_maze()
        self.status = "Generating"
        logger.info("Generating with %s", type(self.generator).__name__)

    def step_generator(self):
        if self.generator is None:
            return
        for _ in range(self.gen_steps_per_frame):
            if self.generator.is_done():
                break
            self.generator.step_generation()
        if self.generator.is_done():
            self.generator = None
            self.status = "Generated"

    def step_solver(self):
        if not self.solving:
            return
        try:
            for _ in range(self.solve_steps_per_frame):
                if not self.grid.step_solve_path():
                    self.solving = False
                    self.status = "Solved" if self.grid.solver and self.grid.solver.is_solved() else "No path"
                    break
        except ConfigurationError as e:
            logger.warning("Cannot solve: %s", e)
            self.solving = False

    def solve_now(self):
        try:
            path = self.grid.solve_path()
        except ConfigurationError as e:
            logger.warning("Cannot solve: %s", e)
            return
        self.status = f"Path: {len(path)}" if path else "No path"

    def reset_search(self):
        self.solving = False
        try:
            self.grid.reset_solver()
        except ConfigurationError as e:
            logger.warning("Cannot solve: %s", e)
            return
        self.status = "Ready"

    # -- input -------------------------------------------------------------

    def handle_key(self, key):
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in PAINT_KEYS:
            self.paint_kind = PAINT_KEYS[key]
        elif key in SOLVER_KEYS:
            # A half-finished search is restarted under the new algorithm
            self.grid.solver_kind = SOLVER_KEYS[key]
            self.reset_search()
        elif key == pygame.K_r:
            self.reset_search()
        elif key == pygame.K_SPACE:
            self.solving = not self.solving
            self.status = "Solving" if self.solving else "Paused"
        elif key == pygame.K_RETURN:
            self.solving = False
            self.solve_now()
        elif key == pygame.K_c:
            self.grid.clear()
            self.solving = False
        elif key == pygame.K_f:
            self.grid.fill()
            self.solving = False
        elif key == pygame.K_g:
            self.start_generation()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, my = event.pos
                pos = (mx / self.screen_width, my / self.screen_height)
                self.grid.handle_click(pos, self.size, self.paint_kind)

    # -- drawing -----------------------------------------------------------

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        sq_width, sq_height, origin_x, origin_y = self.grid.get_ndc_params(self.size)
        walled = isinstance(self.grid, WallGrid)
        wall_color = COLORS[CellKind.WALL]

        for row in range(self.grid.rows):
            low_y = origin_y + row * (sq_height + SQUARE_GAP)
            up_y = low_y + sq_height
            for col in range(self.grid.columns):
                low_x = origin_x + col * (sq_width + SQUARE_GAP)
                up_x = low_x + sq_width
                color = COLORS[self.grid.get_cell(row, col)]
                pygame.draw.rect(self.surface, color, self.ndc_rect(low_x, low_y, up_x, up_y))

                if not walled:
                    continue

                # Gap strips show whether a wall separates neighbors
                if col < self.grid.columns - 1:
                    strip = color if self.grid.passable((row, col), (row, col + 1)) else wall_color
                    pygame.draw.rect(self.surface, strip, self.ndc_rect(up_x, low_y, up_x + SQUARE_GAP, up_y))
                if row < self.grid.rows - 1:
                    strip = color if self.grid.passable((row, col), (row + 1, col)) else wall_color
                    pygame.draw.rect(self.surface, strip, self.ndc_rect(low_x, up_y, up_x, up_y + SQUARE_GAP))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        rec_status = "REC" if self.recorder.active else ""
        info = [
            f"FPS: {fps}",
            f"Size: {self.grid.rows}x{self.grid.columns}",
            f"Paint: {self.paint_kind.name}  Solver: {self.grid.solver_kind.name}",
            f"Status: {self.status}",
            rec_status
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            self.step_generator()
            self.step_solver()

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
