"""
Loop Model
==========
Turn detection for closed loops. A loop "turns" at a cell when its two
loop-neighbours do not sit on exactly opposite sides of that cell.

Turn maps are plain dicts of cell -> bool and can be derived either from an
ordered loop (the generated solution) or from the player's connection graph.
"""

from typing import Dict, Optional, Sequence

from turnloop.grid import Cell, Grid, are_opposite

TurnMap = Dict[Cell, bool]


def is_turn(cell: Cell, a: Cell, b: Cell) -> bool:
    """True unless `a` and `b` are straight through `cell`."""
    return not are_opposite(cell, a, b)


def turns_at(source, cell: Cell) -> Optional[bool]:
    """
    Turn status of `cell` in either an ordered loop (sequence of cells) or a
    connection graph. Returns None when `cell` does not have exactly two
    loop-neighbours in `source`.
    """
    if hasattr(source, "connections"):
        linked = source.connections(cell)
        if len(linked) != 2:
            return None
        return is_turn(cell, linked[0], linked[1])

    loop = list(source)
    try:
        i = loop.index(cell)
    except ValueError:
        return None
    n = len(loop)
    if n < 3:
        return None
    return is_turn(cell, loop[(i - 1) % n], loop[(i + 1) % n])


def build_turn_map(loop: Sequence[Cell]) -> TurnMap:
    """Turn status for every cell of an ordered, closed loop."""
    turn_map = {}
    n = len(loop)
    for i, current in enumerate(loop):
        prev = loop[(i - 1) % n]
        nxt = loop[(i + 1) % n]
        turn_map[current] = is_turn(current, prev, nxt)
    return turn_map


def build_graph_turn_map(graph) -> TurnMap:
    """
    Turn status for every drawn cell of a connection graph. Cells without
    exactly two connections cannot turn and map to False.
    """
    turn_map = {}
    for cell in graph.drawn_cells():
        linked = graph.connections(cell)
        if len(linked) != 2:
            turn_map[cell] = False
            continue
        turn_map[cell] = is_turn(cell, linked[0], linked[1])
    return turn_map


def count_turns_in_area(center: Cell, turn_map: TurnMap, grid: Grid) -> int:
    """Number of turning cells in the clipped 3x3 block around `center`."""
    return sum(1 for cell in grid.neighborhood_3x3(center) if turn_map.get(cell, False))
