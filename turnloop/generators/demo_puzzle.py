"""
Demo Puzzles
============
Fixed loops for tutorials and tests. The serpentine loop runs along the top
row, snakes back and forth through the remaining rows (skipping column 0),
then returns up column 0 to the start. It exists for every even size.
"""

from typing import List

from turnloop.grid import Cell


def serpentine_loop(size: int) -> List[Cell]:
    if size < 2 or size % 2:
        raise ValueError(f"serpentine loop needs an even size >= 2, got {size}")

    path = [(0, c) for c in range(size)]
    for r in range(1, size):
        cols = range(size - 1, 0, -1) if r % 2 == 1 else range(1, size)
        path.extend((r, c) for c in cols)
    path.extend((r, 0) for r in range(size - 1, 0, -1))
    return path


# 4x4 serpentine, cell by cell:
#  ┌ ─ ─ ┐
#  │ ┌ ─ ┘
#  │ └ ─ ┐
#  └ ─ ─ ┘
DEMO_LOOP_4X4: List[Cell] = serpentine_loop(4)

DEMO_LOOP_6X6: List[Cell] = serpentine_loop(6)

# Ring around a 2x2 board
DEMO_LOOP_2X2: List[Cell] = [(0, 0), (0, 1), (1, 1), (1, 0)]
