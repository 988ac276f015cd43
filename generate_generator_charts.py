"""
Generation Chart Generator
==========================
Charts how the loop generator behaves across grid sizes.
Run:  python generate_generator_charts.py --runs 20
Output: generation_charts/ folder with PNG files.
"""

import argparse
import os
from collections import defaultdict
from typing import Any, Dict, List

import numpy as np

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt

from benchmark_generator import run_single_generation
from turnloop.logging_config import configure_logging

# ─────────────────────────────────────────────────────────────
# Color Palette & Styling
# ─────────────────────────────────────────────────────────────
BAR_COLOR = "#4A90E2"      # Solution path blue
ACCENT = "#EF5D60"         # Hint coral red
BG_COLOR = "#F5F5F5"
TEXT_COLOR = "#34495E"
GRID_COLOR = "#E0E0E0"


def setup_style():
    plt.rcParams.update({
        "figure.facecolor": BG_COLOR,
        "axes.facecolor": "white",
        "axes.edgecolor": GRID_COLOR,
        "axes.labelcolor": TEXT_COLOR,
        "axes.titleweight": "bold",
        "text.color": TEXT_COLOR,
        "xtick.color": TEXT_COLOR,
        "ytick.color": TEXT_COLOR,
        "grid.color": GRID_COLOR,
        "font.size": 12,
        "figure.dpi": 150,
        "savefig.dpi": 150,
        "savefig.bbox": "tight",
        "savefig.facecolor": BG_COLOR,
    })


def run_benchmark(runs: int, sizes: List[int], probability: float) -> Dict[int, List[Dict[str, Any]]]:
    results = defaultdict(list)
    for size in sizes:
        for i in range(runs):
            print(f"  {size}x{size} run {i+1}/{runs} ...", end="\r")
            results[size].append(run_single_generation(i + 1, size, probability, seed=i))
    print()
    return results


# ─────────────────────────────────────────────────────────────
# Charts
# ─────────────────────────────────────────────────────────────
def chart_1_timing(results, out_dir):
    """Line chart: mean and worst generation time per grid size."""
    fig, ax = plt.subplots(figsize=(9, 5))
    sizes = sorted(results)
    times = [np.array([r["time"] for r in results[s]]) for s in sizes]

    ax.plot(sizes, [t.mean() for t in times], "o-", color=BAR_COLOR, linewidth=2.5, label="mean")
    ax.plot(sizes, [t.max() for t in times], "s--", color=ACCENT, linewidth=1.5, label="worst")
    ax.set_xticks(sizes)
    ax.set_xticklabels([f"{s}x{s}" for s in sizes])
    ax.set_xlabel("Grid Size")
    ax.set_ylabel("Generation Time (seconds)")
    ax.set_title("Loop Generation Time")
    ax.legend()
    ax.grid(True, zorder=0)

    fig.savefig(os.path.join(out_dir, "1_generation_time.png"))
    plt.close(fig)
    print("  Chart 1: Generation Time")


def chart_2_attempts(results, out_dir):
    """Bar chart: average restarts needed per grid size."""
    fig, ax = plt.subplots(figsize=(9, 5))
    sizes = sorted(results)
    x = np.arange(len(sizes))
    attempts = [np.mean([r["attempts"] for r in results[s]]) for s in sizes]

    bars = ax.bar(x, attempts, 0.5, color=BAR_COLOR, zorder=3)
    for bar in bars:
        h = bar.get_height()
        ax.text(bar.get_x() + bar.get_width() / 2, h, f"{h:.2f}", ha="center", va="bottom", fontsize=9)
    ax.set_xticks(x)
    ax.set_xticklabels([f"{s}x{s}" for s in sizes])
    ax.set_ylabel("Average Attempts")
    ax.set_title("Restarts per Generated Loop")
    ax.grid(axis="y", zorder=0)

    fig.savefig(os.path.join(out_dir, "2_attempts.png"))
    plt.close(fig)
    print("  Chart 2: Attempts")


def chart_3_turn_density(results, out_dir):
    """Histogram: share of cells where the solution loop turns."""
    fig, ax = plt.subplots(figsize=(9, 5))
    for size in sorted(results):
        density = np.array([r["turns"] / (size * size) for r in results[size] if r["generated"]])
        if density.size:
            ax.hist(density, bins=np.linspace(0, 1, 21), alpha=0.5, label=f"{size}x{size}")
    ax.set_xlabel("Turning Cells / All Cells")
    ax.set_ylabel("Puzzles")
    ax.set_title("Turn Density of Generated Loops")
    ax.legend()

    fig.savefig(os.path.join(out_dir, "3_turn_density.png"))
    plt.close(fig)
    print("  Chart 3: Turn Density")


def main():
    parser = argparse.ArgumentParser(description="Generate Loop Generation Charts")
    parser.add_argument("--runs", type=int, default=20, help="Puzzles per grid size (default: 20)")
    parser.add_argument("--sizes", type=int, nargs="+", default=[4, 6, 8], help="Even grid sizes")
    parser.add_argument("--probability", type=float, default=0.3, help="Hint probability")
    args = parser.parse_args()

    configure_logging("WARNING")

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "generation_charts")
    os.makedirs(out_dir, exist_ok=True)

    setup_style()

    print("Phase 1/2: Generating puzzles...")
    results = run_benchmark(args.runs, args.sizes, args.probability)

    print("\nPhase 2/2: Drawing charts...")
    chart_1_timing(results, out_dir)
    chart_2_attempts(results, out_dir)
    chart_3_turn_density(results, out_dir)

    print(f"Charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
