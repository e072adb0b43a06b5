import argparse
import logging
import os
import random
import sys
import time
from typing import Optional, Tuple

# Ensure project root is in path so we can import 'maze_stepper' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.algo.aldous_broder import AldousBroder
from maze_stepper.algo.division import RecursiveDivision
from maze_stepper.algo.prim import RandomizedPrim
from maze_stepper.core.cells import CellKind, Coord, GridVariant, SolverKind
from maze_stepper.core.complexity import MazeAnalyzer
from maze_stepper.core.grid import Grid

logger = logging.getLogger("maze_stepper")

GENERATORS = {
    "aldous-broder": AldousBroder,
    "prim": RandomizedPrim,
    "division": RecursiveDivision,
}

SOLVER_NAMES = {kind.value: kind for kind in SolverKind}
VARIANT_NAMES = {variant.value: variant for variant in GridVariant}


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def place_endpoints(grid: Grid) -> Optional[Tuple[Coord, Coord]]:
    """Marks the lowest open interior cell Start and the highest one Goal."""
    cells = sorted(MazeAnalyzer.interior_open_cells(grid))
    if len(cells) < 2:
        return None
    start, goal = cells[0], cells[-1]
    grid.toggle_cell(start[0], start[1], CellKind.START)
    grid.toggle_cell(goal[0], goal[1], CellKind.GOAL)
    return start, goal


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Stepper: step-by-step maze generation and solving")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a new maze")
    gen_parser.add_argument("--rows", type=int, default=21, help="Grid rows")
    gen_parser.add_argument("--cols", type=int, default=21, help="Grid columns")
    gen_parser.add_argument("--algo", type=str, default="prim", choices=sorted(GENERATORS), help="Generation algorithm")
    gen_parser.add_argument("--variant", type=str, default="block", choices=sorted(VARIANT_NAMES), help="Grid passability model")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    gen_parser.add_argument("--solve", type=str, default=None, choices=sorted(SOLVER_NAMES), help="Solve after generating")
    gen_parser.add_argument("--step", action="store_true", help="Solve with the stepping API instead of one call")
    gen_parser.add_argument("--visual", action="store_true", help="Animate in a window")
    gen_parser.add_argument("--record", action="store_true", help="Record the animation to mp4")

    # View Command
    view_parser = subparsers.add_parser("view", help="Open an empty grid to paint and solve")
    view_parser.add_argument("--rows", type=int, default=16, help="Grid rows")
    view_parser.add_argument("--cols", type=int, default=16, help="Grid columns")
    view_parser.add_argument("--variant", type=str, default="block", choices=sorted(VARIANT_NAMES), help="Grid passability model")
    view_parser.add_argument("--solver", type=str, default="bfs", choices=sorted(SOLVER_NAMES), help="Solver algorithm")
    view_parser.add_argument("--algo", type=str, default="prim", choices=sorted(GENERATORS), help="Generator bound to the G key")
    view_parser.add_argument("--record", action="store_true", help="Record the session to mp4")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Compare solvers on one maze")
    bench_parser.add_argument("--rows", type=int, default=101, help="Grid rows")
    bench_parser.add_argument("--cols", type=int, default=101, help="Grid columns")
    bench_parser.add_argument("--algo", type=str, default="prim", choices=sorted(GENERATORS), help="Generation algorithm")
    bench_parser.add_argument("--seed", type=int, default=123, help="Random seed")

    return parser


def open_viewer(grid: Grid, algo: str, variant: GridVariant, seed: Optional[int], record: bool, animate: bool):
    from maze_stepper.viz.renderer import Renderer

    seeds = random.Random(seed)
    first = [seed]

    def factory():
        # Replays the requested seed first, then draws fresh ones
        s = first.pop() if first else seeds.randrange(2 ** 32)
        return GENERATORS[algo](grid.rows, grid.columns, seed=s, variant=variant)

    renderer = Renderer(grid, generator_factory=factory, record=record)
    renderer.init_window()
    if animate:
        renderer.start_generation()
    renderer.run_loop()


def cmd_generate(args) -> int:
    variant = VARIANT_NAMES[args.variant]
    cls = GENERATORS[args.algo]

    if args.visual or args.record:
        logger.info("Visual mode enabled - Opening window...")
        from maze_stepper.core.variants import make_grid
        grid = make_grid(args.rows, args.cols, variant)
        if args.solve:
            grid.solver_kind = SOLVER_NAMES[args.solve]
        open_viewer(grid, args.algo, variant, args.seed, args.record, animate=True)
        return 0

    logger.info(f"Generating {args.rows}x{args.cols} {args.variant} maze with {args.algo}...")
    t0 = time.time()
    generator = cls(args.rows, args.cols, seed=args.seed, variant=variant)
    generator.run_all()
    grid = generator.grid
    logger.info(f"Generation complete in {time.time() - t0:.4f}s ({generator.step_count} steps)")

    stats = MazeAnalyzer.calculate_stats(grid)
    logger.info(f"Stats: {stats}")

    if args.solve:
        grid.solver_kind = SOLVER_NAMES[args.solve]
        if place_endpoints(grid) is None:
            logger.error("Maze has fewer than two open cells, nothing to solve")
            return 1

        if args.step:
            ticks = 0
            while grid.step_solve_path():
                ticks += 1
            logger.info(f"Stepped solve finished after {ticks} ticks")
        else:
            path = grid.solve_path()
            if path:
                logger.info(f"Solution length: {len(path)}")

    from maze_stepper.viz.text import to_text
    print(to_text(grid))
    return 0


def cmd_view(args) -> int:
    from maze_stepper.core.variants import make_grid
    variant = VARIANT_NAMES[args.variant]
    grid = make_grid(args.rows, args.cols, variant)
    grid.solver_kind = SOLVER_NAMES[args.solver]
    open_viewer(grid, args.algo, variant, None, args.record, animate=False)
    return 0


def cmd_benchmark(args) -> int:
    logger.info(f"Running solver benchmark ({args.rows}x{args.cols}, {args.algo})...")
    generator = GENERATORS[args.algo](args.rows, args.cols, seed=args.seed)
    generator.run_all()
    grid = generator.grid

    if place_endpoints(grid) is None:
        logger.error("Maze has fewer than two open cells, nothing to solve")
        return 1
    goal_idx = grid.index_of(*grid.goal)

    print(f"\n{'ALGORITHM':<10} | {'TIME (s)':<10} | {'PATH LEN':<10} | {'VISITED':<10}")
    print("-" * 50)

    for kind in SolverKind:
        grid.solver_kind = kind
        grid.make_graph()
        solver = grid.solver

        t_start = time.time()
        path = solver.path_to(grid.graph, goal_idx)
        duration = time.time() - t_start

        path_len = len(path) if path else 0
        print(f"{kind.name:<10} | {duration:<10.4f} | {path_len:<10} | {solver.visited_count:<10}")
        grid.invalidate()

    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.info(f"Running command: {args.command}")

    try:
        if args.command == "generate":
            return cmd_generate(args)
        elif args.command == "view":
            return cmd_view(args)
        elif args.command == "benchmark":
            return cmd_benchmark(args)
    except ValueError as e:  # includes ConfigurationError
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
