"""
Game Validators
===============
Functions to check the player's drawing against the puzzle.
A win needs one closed loop through every cell whose turn counts agree with
the solution around every hint cell.
"""

import enum
from typing import Dict, Iterable, Optional, Sequence, Tuple

from turnloop.connection_graph import ConnectionGraph
from turnloop.grid import Cell, Grid
from turnloop.loop_model import TurnMap, build_graph_turn_map, build_turn_map, count_turns_in_area


class LoopFeedback(enum.Enum):
    OPEN = "open"                       # no single closed loop yet
    HINTS_MISMATCH = "hints_mismatch"   # closed loop, some hint disagrees
    INCOMPLETE = "incomplete"           # closed loop, hints agree, cells missing
    SOLVED = "solved"


def check_win(grid: Grid, graph: ConnectionGraph, solution_path: Sequence[Cell],
              hint_cells: Iterable[Cell], solution_turn_map: Optional[TurnMap] = None) -> bool:
    won, _ = check_win_condition(grid, graph, solution_path, hint_cells, solution_turn_map)
    return won


def check_win_condition(grid: Grid, graph: ConnectionGraph, solution_path: Sequence[Cell],
                        hint_cells: Iterable[Cell],
                        solution_turn_map: Optional[TurnMap] = None) -> Tuple[bool, str]:
    """
    Check if the game is won.
    Conditions:
    1. Every cell drawn.
    2. Every drawn cell has exactly two connections.
    3. One connected loop, not several.
    4. Turn counts around each hint match the solution.
    Returns: (bool, reason)
    """
    # 1. Coverage
    if graph.drawn_count != grid.cell_count:
        return False, "Not every cell is on the loop"

    # 2. Degrees
    for cell in graph.drawn_cells():
        if graph.degree(cell) != 2:
            return False, "Not a closed loop"

    # 3. Connectivity
    component_count, _ = _component_stats_via_dsu(graph.drawn_cells(), graph.edges())
    if component_count != 1:
        return False, "Multiple loops detected"

    # 4. Hints
    player_turns = build_graph_turn_map(graph)
    solution_turns = solution_turn_map if solution_turn_map is not None else build_turn_map(solution_path)
    if not validate_hints(solution_turns, player_turns, hint_cells, grid):
        return False, "Hints not satisfied"

    return True, "Winner"


def validate_hints(solution_turn_map: TurnMap, player_turn_map: TurnMap,
                   hint_cells: Iterable[Cell], grid: Grid) -> bool:
    for cell in hint_cells:
        expected = count_turns_in_area(cell, solution_turn_map, grid)
        actual = count_turns_in_area(cell, player_turn_map, grid)
        if expected != actual:
            return False
    return True


def check_partial_structural_loop(graph: ConnectionGraph) -> bool:
    """
    True when the drawn cells form exactly one closed loop, whatever its
    length: at least four cells, all of degree two, one connected component.
    """
    drawn = graph.drawn_cells()
    if len(drawn) < 4:
        return False
    if any(graph.degree(cell) != 2 for cell in drawn):
        return False

    component_count, largest = _component_stats_via_dsu(drawn, graph.edges())
    return component_count == 1 and largest == len(drawn)


def check_structural_loop(graph: ConnectionGraph) -> bool:
    """Single closed loop that also covers every cell of the grid."""
    return graph.drawn_count == graph.grid.cell_count and check_partial_structural_loop(graph)


def check_all_cells_visited(graph: ConnectionGraph) -> bool:
    return graph.drawn_count == graph.grid.cell_count


def evaluate_loop(grid: Grid, graph: ConnectionGraph, hint_cells: Iterable[Cell],
                  solution_turn_map: TurnMap) -> LoopFeedback:
    """Classify the drawing for player feedback."""
    if not check_partial_structural_loop(graph):
        return LoopFeedback.OPEN

    player_turns = build_graph_turn_map(graph)
    if not validate_hints(solution_turn_map, player_turns, hint_cells, grid):
        return LoopFeedback.HINTS_MISMATCH
    if not check_all_cells_visited(graph):
        return LoopFeedback.INCOMPLETE
    return LoopFeedback.SOLVED


def hint_status(grid: Grid, graph: ConnectionGraph, hints: Dict[Cell, int]) -> Dict[Cell, bool]:
    """Per-hint agreement between the drawing and the expected counts."""
    player_turns = build_graph_turn_map(graph)
    return {
        cell: count_turns_in_area(cell, player_turns, grid) == expected
        for cell, expected in hints.items()
    }


def _component_stats_via_dsu(cells, edges):
    """
    Returns (component_count, largest_component_size) over `cells`.
    Edges touching cells outside `cells` are ignored.
    """
    components = _CellComponents(cells)
    for u, v in edges:
        components.merge(u, v)
    sizes = list(components.sizes.values())
    return len(sizes), (max(sizes) if sizes else 0)


class _CellComponents:
    """Union-find over drawn cells, keeping the size of every root."""

    def __init__(self, cells):
        self.parent = {cell: cell for cell in cells}
        self.sizes = dict.fromkeys(self.parent, 1)

    def root(self, cell):
        while self.parent[cell] != cell:
            self.parent[cell] = self.parent[self.parent[cell]]
            cell = self.parent[cell]
        return cell

    def merge(self, a, b):
        if a not in self.parent or b not in self.parent:
            return
        ra, rb = self.root(a), self.root(b)
        if ra == rb:
            return
        # Smaller component hangs under the larger
        if self.sizes[ra] < self.sizes[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.sizes[ra] += self.sizes.pop(rb)
