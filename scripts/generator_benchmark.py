import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.core.cells import GridVariant
from maze_stepper.core.complexity import MazeAnalyzer
from maze_stepper.main import GENERATORS

SIZES = [
    (21, 21),
    (51, 51),
    (101, 101),
    (201, 201),
]


def benchmark_size(name: str, rows: int, cols: int, variant: GridVariant, seed: int):
    gen = GENERATORS[name](rows, cols, seed=seed, variant=variant)

    t0 = time.time()
    gen.run_all()
    gen_time = time.time() - t0

    stats = MazeAnalyzer.calculate_stats(gen.grid)
    connected = MazeAnalyzer.is_connected(gen.grid)
    return {
        "name": name,
        "size": f"{rows}x{cols}",
        "time": gen_time,
        "steps": gen.step_count,
        "dead_ends": stats["dead_end_percent"],
        "connected": connected,
    }


def run_suite():
    parser = argparse.ArgumentParser(description="Generator Benchmark")
    parser.add_argument("--variant", type=str, default="block", choices=[v.value for v in GridVariant])
    parser.add_argument("--seed", type=int, default=42, help="Random Seed")
    parser.add_argument("--max-cells", type=int, default=60000, help="Skip Aldous-Broder above this size")
    args = parser.parse_args()
    variant = GridVariant(args.variant)

    print("=== MAZE GENERATOR BENCHMARK ===")
    print(f"Variant: {variant.value} | Seed: {args.seed}")
    print(f"\n{'GENERATOR':<14} | {'SIZE':<9} | {'TIME (s)':<9} | {'STEPS':<9} | {'DEAD %':<7} | OK")
    print("-" * 66)

    for rows, cols in SIZES:
        for name in GENERATORS:
            # Random walk cover time grows too fast past this
            if name == "aldous-broder" and rows * cols > args.max_cells:
                continue
            r = benchmark_size(name, rows, cols, variant, args.seed)
            ok = "yes" if r["connected"] else "NO"
            print(f"{r['name']:<14} | {r['size']:<9} | {r['time']:<9.4f} | {r['steps']:<9} | {r['dead_ends']:<7.1f} | {ok}")


if __name__ == "__main__":
    run_suite()
