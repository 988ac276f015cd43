"""
Hint Selector
=============
Picks the cells that show a turn count. Every cell is an independent
Bernoulli trial with probability `probability`; a selected cell carries the
number of solution turns in its clipped 3x3 neighbourhood.
"""

import logging
import math
import random
from typing import Dict, Optional, Sequence

from turnloop.grid import Cell, Grid
from turnloop.loop_model import TurnMap, build_turn_map, count_turns_in_area

logger = logging.getLogger(__name__)

HintCells = Dict[Cell, int]


def select_hints(solution_path: Sequence[Cell], probability: float,
                 rng: Optional[random.Random] = None,
                 max_hints: Optional[int] = None,
                 turn_map: Optional[TurnMap] = None) -> HintCells:
    """
    Scan the board row-major and keep each cell with chance `probability`.
    Scanning stops early once `max_hints` cells have been kept.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"hint probability must be within [0, 1], got {probability}")

    size = math.isqrt(len(solution_path))
    grid = Grid(size)
    rng = rng or random.Random()
    solution_turns = turn_map if turn_map is not None else build_turn_map(solution_path)

    hints: HintCells = {}
    for cell in grid.cells():
        if max_hints is not None and len(hints) >= max_hints:
            break
        if rng.random() < probability:
            hints[cell] = count_turns_in_area(cell, solution_turns, grid)

    logger.debug("Selected %d hint(s) on %dx%d grid (p=%.2f, cap=%s)",
                 len(hints), size, size, probability, max_hints)
    return hints
