"""
Path Editor
===========
Turns pointer gestures into connection-graph edits.

States: IDLE and DRAGGING. The drag in progress lives in an explicit
`DragState` value owned by the editor, so the editor can be driven from
tests with plain cells instead of a live pointer.

Gestures:
- forward drag extends the trail, filling skipped cells along a shortest path
- dragging back over the trail undoes it to that point
- dragging back onto the first cell closes the loop
- a tap on an already drawn cell erases it
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from turnloop.config import DEFAULT_CELL_SIZE
from turnloop.connection_graph import ConnectionGraph
from turnloop.grid import Cell, is_adjacent

logger = logging.getLogger(__name__)

# Shortest closed loop on a square grid
MIN_LOOP_LENGTH = 4


class EditorState(enum.Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DragState:
    """Trail of one gesture, from pointer-down to pointer-up."""
    anchor: Cell
    path: List[Cell]
    added_this_drag: Set[Cell] = field(default_factory=set)
    has_moved: bool = False
    closed: bool = False

    @property
    def tail(self) -> Cell:
        return self.path[-1]


class PathEditor:
    def __init__(self, graph: ConnectionGraph, cell_size: float = DEFAULT_CELL_SIZE):
        self.graph = graph
        self.cell_size = cell_size
        self.locked = False
        self.drag: Optional[DragState] = None

    @property
    def state(self) -> EditorState:
        return EditorState.DRAGGING if self.drag is not None else EditorState.IDLE

    def resolve(self, x: float, y: float) -> Optional[Cell]:
        return self.graph.grid.cell_at_pixel(x, y, self.cell_size)

    def reset(self):
        """Forget any gesture in progress."""
        self.drag = None

    # ── Pixel entry points ─────────────────────────────────────

    def pointer_down(self, x: float, y: float) -> bool:
        return self.pointer_down_cell(self.resolve(x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        return self.pointer_move_cell(self.resolve(x, y))

    def pointer_up(self, x: float, y: float) -> bool:
        return self.pointer_up_cell(self.resolve(x, y))

    def pointer_cancel(self) -> bool:
        if self.drag is None:
            return False
        self.drag = None
        if self.locked:
            return False
        return bool(self.graph.prune_orphans())

    # ── Cell entry points ──────────────────────────────────────

    def pointer_down_cell(self, cell: Optional[Cell]) -> bool:
        if self.locked or cell is None or not self.graph.grid.in_bounds(cell):
            return False

        added = self.graph.ensure(cell)
        self.drag = DragState(anchor=cell, path=[cell], added_this_drag={cell} if added else set())
        return added

    def pointer_move_cell(self, cell: Optional[Cell]) -> bool:
        drag = self.drag
        if self.locked or drag is None or cell is None or drag.closed:
            return False
        if not self.graph.grid.in_bounds(cell) or cell == drag.tail:
            return False

        drag.has_moved = True

        if cell in drag.path[:-1]:
            index = drag.path.index(cell)
            if index == 0 and self._try_close_loop():
                return True
            self._backtrack(index)
            return True

        return self._extend(cell)

    def pointer_up_cell(self, cell: Optional[Cell]) -> bool:
        drag = self.drag
        if drag is None:
            return False
        self.drag = None
        if self.locked:
            return False

        mutated = False
        is_tap = not drag.has_moved and len(drag.path) == 1 and cell == drag.anchor
        if is_tap and drag.anchor not in drag.added_this_drag:
            logger.debug("Tap erased %s", drag.anchor)
            self.graph.clear_cell(drag.anchor)
            mutated = True

        if self.graph.prune_orphans():
            mutated = True
        return mutated

    # ── Gesture steps ──────────────────────────────────────────

    def _try_close_loop(self) -> bool:
        drag = self.drag
        if len(drag.path) < MIN_LOOP_LENGTH:
            return False
        first, last = drag.path[0], drag.tail
        if not is_adjacent(first, last):
            return False

        if not self.graph.is_connected(last, first):
            protect = (drag.path[-2], drag.path[1])
            if not self.graph.force_connect(last, first, protect=protect):
                return False

        drag.path.append(first)
        drag.closed = True
        self.graph.prune_orphans()
        logger.debug("Closed loop of %d cells", len(drag.path) - 1)
        return True

    def _backtrack(self, index: int):
        drag = self.drag
        for i in range(len(drag.path) - 1, index, -1):
            self.graph.remove_connection(drag.path[i - 1], drag.path[i])
        del drag.path[index + 1:]
        self.graph.prune_orphans()

    def _extend(self, target: Cell) -> bool:
        drag = self.drag
        route = self.graph.grid.shortest_path(drag.tail, target)
        if not route:
            return False

        mutated = False
        prev = drag.tail
        for step in route:
            if self.graph.ensure(step):
                drag.added_this_drag.add(step)
                mutated = True

            if self.graph.is_connected(prev, step):
                drag.path.append(step)
                prev = step
                continue

            protect = drag.path[-2:-1]
            if not self.graph.force_connect(prev, step, protect=protect):
                break
            drag.path.append(step)
            prev = step
            mutated = True

        if self.graph.prune_orphans():
            mutated = True
        return mutated
