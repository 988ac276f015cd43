import argparse
import csv
import random
import time
from typing import Any, Dict, List

from turnloop.errors import GenerationExhaustedError
from turnloop.generators import CycleGenerator, select_hints
from turnloop.loop_model import build_turn_map
from turnloop.logging_config import configure_logging


def run_single_generation(run_id: int, size: int, probability: float, seed: int) -> Dict[str, Any]:
    """
    Generates one puzzle (solution loop + hints) and records how hard the
    generator had to work for it.
    """
    rng = random.Random(seed)
    generator = CycleGenerator(size, rng=rng)

    result = {
        "run_id": run_id,
        "size": f"{size}x{size}",
        "seed": seed,
        "generated": False,
        "time": 0.0,
        "attempts": 0,
        "steps": 0,
        "turns": 0,
        "hints": 0,
    }

    start_time = time.perf_counter()
    try:
        solution = generator.generate()
    except GenerationExhaustedError as e:
        print(f"Run {run_id} on {size}x{size} exhausted after {e.attempts} attempts")
        solution = []
    result["time"] = time.perf_counter() - start_time
    result["attempts"] = generator.attempts
    result["steps"] = generator.steps

    if solution:
        turn_map = build_turn_map(solution)
        hints = select_hints(solution, probability, rng=rng, turn_map=turn_map)
        result["generated"] = True
        result["turns"] = sum(turn_map.values())
        result["hints"] = len(hints)

    return result


def main():
    parser = argparse.ArgumentParser(description="Benchmark Loop Generation")
    parser.add_argument("--runs", type=int, default=20, help="Puzzles per grid size")
    parser.add_argument("--sizes", type=int, nargs="+", default=[4, 6, 8], help="Even grid sizes")
    parser.add_argument("--probability", type=float, default=0.3, help="Hint probability")
    parser.add_argument("--seed", type=int, default=0, help="Base seed")
    parser.add_argument("--output", type=str, default="generation_results.csv", help="Output CSV file")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    configure_logging(args.log_level)

    print(f"Starting Benchmark: {args.runs} runs per size, sizes {args.sizes}")

    results: List[Dict[str, Any]] = []
    for size in args.sizes:
        for i in range(args.runs):
            print(f"Generating {size}x{size} {i+1}/{args.runs}...", end="\r")
            results.append(run_single_generation(i + 1, size, args.probability, args.seed + i))

    print(f"\nBenchmark Complete!")

    # Save to CSV
    keys = results[0].keys()
    with open(args.output, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=keys)
        dict_writer.writeheader()
        dict_writer.writerows(results)

    print(f"Results saved to {args.output}")

    # Print Summary Table
    print("\nSummary Statistics:")
    print(f"{'Size':<6} | {'Success':<8} | {'Avg Time (s)':<12} | {'Avg Attempts':<12} | {'Avg Hints':<9}")
    print("-" * 60)

    for size in args.sizes:
        label = f"{size}x{size}"
        rows = [r for r in results if r["size"] == label]
        ok = sum(1 for r in rows if r["generated"])
        avg_time = sum(r["time"] for r in rows) / len(rows)
        avg_attempts = sum(r["attempts"] for r in rows) / len(rows)
        avg_hints = sum(r["hints"] for r in rows) / len(rows)
        success_rate = (ok / len(rows)) * 100

        print(f"{label:<6} | {success_rate:>7.1f}% | {avg_time:>12.4f} | {avg_attempts:>12.2f} | {avg_hints:>9.1f}")


if __name__ == "__main__":
    main()
