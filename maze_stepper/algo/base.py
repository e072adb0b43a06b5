import logging
import random
from abc import ABC, abstractmethod
from typing import Iterator, List

from maze_stepper.core.cells import CellKind, GridVariant
from maze_stepper.core.grid import Grid
from maze_stepper.core.variants import make_grid

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Builds a maze on a grid it owns, one bounded unit of work per step.
    All randomness comes from a private Random drawing values in [0, 1).
    """
    steppable = True

    def __init__(self, rows: int, columns: int, seed: int = None,
                 variant: GridVariant = GridVariant.BLOCK):
        self.grid: Grid = make_grid(rows, columns, variant)
        self.seed = seed
        self.rng = random.Random(seed)
        self.step_count = 0
        self.done = False

    @abstractmethod
    def step_generation(self):
        pass

    def is_done(self) -> bool:
        return self.done

    def _finish(self):
        self.done = True
        self.grid.sync_passages()
        logger.debug("%s finished after %d steps", type(self).__name__, self.step_count)

    def next_step(self) -> List[CellKind]:
        self.step_generation()
        return self.grid.snapshot()

    def generate_maze(self) -> List[CellKind]:
        while not self.done:
            self.step_generation()
        return self.grid.snapshot()

    def run(self) -> Iterator[str]:
        """
        Yields status strings while stepping to completion.
        The actual grid modifications happen in-place on self.grid.
        """
        while not self.done:
            self.step_generation()
            yield f"Step {self.step_count}"
        yield "Done"

    def run_all(self):
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
