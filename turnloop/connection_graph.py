"""
Connection Graph
================
The player's drawing: an undirected graph over grid cells in which no cell
ever holds more than two connections.

Storage is an arena indexed by row-major cell index. `_links[i]` holds the
indices of cell i's neighbours (-1 marks an empty slot, slot 0 is the older
connection) and `_drawn[i]` tells whether the cell is part of the drawing.
Edges are therefore plain integers and the structure never holds references
to itself.
"""

import logging
import math
from typing import Dict, Iterable, List, Set, Tuple

import numpy as np

from turnloop.grid import Cell, Grid, are_opposite, is_adjacent

logger = logging.getLogger(__name__)

EMPTY = -1
MAX_DEGREE = 2

Edge = Tuple[Cell, Cell]


class ConnectionGraph:
    def __init__(self, grid_size: int):
        self.grid = Grid(grid_size)
        self._links = np.full((self.grid.cell_count, MAX_DEGREE), EMPTY, dtype=np.intp)
        self._drawn = np.zeros(self.grid.cell_count, dtype=bool)

    @property
    def size(self) -> int:
        return self.grid.size

    def __repr__(self):
        return f"ConnectionGraph(size={self.size}, drawn={self.drawn_count}, edges={len(self.edges())})"

    # ── Queries ────────────────────────────────────────────────

    def _index(self, cell: Cell) -> int:
        if not self.grid.in_bounds(cell):
            raise ValueError(f"cell {cell} is outside the {self.size}x{self.size} grid")
        return self.grid.index(cell)

    def connections(self, cell: Cell) -> List[Cell]:
        """Neighbours of `cell`, oldest connection first."""
        row = self._links[self._index(cell)]
        return [self.grid.cell_at(int(j)) for j in row if j != EMPTY]

    def degree(self, cell: Cell) -> int:
        return int(np.count_nonzero(self._links[self._index(cell)] != EMPTY))

    def is_connected(self, a: Cell, b: Cell) -> bool:
        if not (self.grid.in_bounds(a) and self.grid.in_bounds(b)):
            return False
        return bool(np.any(self._links[self.grid.index(a)] == self.grid.index(b)))

    def is_drawn(self, cell: Cell) -> bool:
        return self.grid.in_bounds(cell) and bool(self._drawn[self.grid.index(cell)])

    def drawn_cells(self) -> List[Cell]:
        return [self.grid.cell_at(int(i)) for i in np.flatnonzero(self._drawn)]

    @property
    def drawn_count(self) -> int:
        return int(np.count_nonzero(self._drawn))

    def degrees(self) -> np.ndarray:
        """Degree of every cell as a flat row-major array."""
        return np.count_nonzero(self._links != EMPTY, axis=1)

    def edges(self) -> Set[Edge]:
        result = set()
        for i, row in enumerate(self._links):
            for j in row:
                if j != EMPTY and i < j:
                    result.add((self.grid.cell_at(i), self.grid.cell_at(int(j))))
        return result

    def state_key(self) -> bytes:
        """Compact fingerprint of the drawing, equal for equal graphs."""
        return self._links.tobytes() + self._drawn.tobytes()

    # ── Mutation ───────────────────────────────────────────────

    def ensure(self, cell: Cell) -> bool:
        """
        Put `cell` on the drawing with its (possibly empty) connection entry.
        Returns True when the cell was not drawn before.
        """
        i = self._index(cell)
        if self._drawn[i]:
            return False
        self._drawn[i] = True
        return True

    def force_connect(self, a: Cell, b: Cell, protect: Iterable[Cell] = ()) -> bool:
        """
        Connect two adjacent cells, breaking one existing connection at any
        endpoint that already has two. Links to cells in `protect` survive such
        a break whenever the other link can go instead (the drag trail).

        Returns False without mutating when the cells are not adjacent or are
        already connected.
        """
        if not (self.grid.in_bounds(a) and self.grid.in_bounds(b)) or not is_adjacent(a, b):
            logger.debug("Refused connection %s-%s: not adjacent", a, b)
            return False
        if self.is_connected(a, b):
            return False

        self.ensure(a)
        self.ensure(b)
        protect = set(protect)

        for endpoint, incoming in ((a, b), (b, a)):
            if self.degree(endpoint) >= MAX_DEGREE:
                to_break = self._connection_to_break(endpoint, incoming, protect)
                self.remove_connection(endpoint, to_break)

        self._attach(self.grid.index(a), self.grid.index(b))
        self._attach(self.grid.index(b), self.grid.index(a))
        return True

    def _connection_to_break(self, endpoint: Cell, incoming: Cell, protect: Set[Cell]) -> Cell:
        """
        Keep the existing neighbour that lies straight across from the
        incoming one; without such a neighbour, drop the newer connection.
        """
        existing = self.connections(endpoint)
        candidates = [c for c in existing if c not in protect]
        if len(candidates) == 1:
            return candidates[0]

        for keep in existing:
            if are_opposite(endpoint, keep, incoming):
                return next(c for c in existing if c != keep)
        return existing[-1]

    def _attach(self, i: int, j: int):
        row = self._links[i]
        slot = int(np.flatnonzero(row == EMPTY)[0])
        row[slot] = j

    def _detach(self, i: int, j: int):
        row = self._links[i]
        if row[0] == j:
            row[0] = row[1]
            row[1] = EMPTY
        elif row[1] == j:
            row[1] = EMPTY

    def remove_connection(self, a: Cell, b: Cell) -> bool:
        """Symmetric removal. No-op (False) when the cells are not connected."""
        if not self.is_connected(a, b):
            return False
        i, j = self.grid.index(a), self.grid.index(b)
        self._detach(i, j)
        self._detach(j, i)
        return True

    def clear_cell(self, cell: Cell):
        """Take `cell` off the drawing and sever all of its connections."""
        for other in self.connections(cell):
            self.remove_connection(cell, other)
        self._drawn[self._index(cell)] = False

    def prune_orphans(self) -> List[Cell]:
        """Drop drawn cells with no connections until none remain."""
        pruned = []
        while True:
            orphans = np.flatnonzero(self._drawn & (self.degrees() == 0))
            if orphans.size == 0:
                break
            self._drawn[orphans] = False
            pruned.extend(self.grid.cell_at(int(i)) for i in orphans)
        return pruned

    def clear(self):
        self._links.fill(EMPTY)
        self._drawn.fill(False)

    # ── Serialization ──────────────────────────────────────────

    def to_dict(self) -> Dict[str, list]:
        return {
            "drawn_cells": [list(cell) for cell in self.drawn_cells()],
            "connections": sorted([list(a), list(b)] for a, b in self.edges()),
        }

    @classmethod
    def from_dict(cls, grid_size: int, data: Dict[str, list]) -> "ConnectionGraph":
        graph = cls(grid_size)
        for cell in data.get("drawn_cells", []):
            graph.ensure(tuple(cell))
        for a, b in data.get("connections", []):
            graph.force_connect(tuple(a), tuple(b))
        return graph

    @classmethod
    def from_loop(cls, loop) -> "ConnectionGraph":
        """Graph holding exactly the connections of an ordered closed loop."""
        graph = cls(math.isqrt(len(loop)))
        n = len(loop)
        for i, cell in enumerate(loop):
            graph.force_connect(cell, loop[(i + 1) % n])
        return graph
