"""
Grid Geometry
=============
Cell indexing, 4-directional adjacency, clipped 3x3 neighbourhoods and
unweighted shortest paths on an N x N board. Stateless apart from the size.
"""

from collections import deque
from typing import Iterator, List, Optional, Tuple

from turnloop.config import MIN_GRID_SIZE

Cell = Tuple[int, int]

# Up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_adjacent(a: Cell, b: Cell) -> bool:
    """True iff the cells share an edge (Manhattan distance exactly 1)."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def are_opposite(center: Cell, a: Cell, b: Cell) -> bool:
    """True when `a` and `b` lie on exactly opposite sides of `center`."""
    return (a[0] - center[0], a[1] - center[1]) == (center[0] - b[0], center[1] - b[1])


class Grid:
    """Square board of `size` x `size` cells, row-major."""

    def __init__(self, size: int):
        if size < MIN_GRID_SIZE:
            raise ValueError(f"grid size must be at least {MIN_GRID_SIZE}, got {size}")
        self.size = size

    def __repr__(self):
        return f"Grid(size={self.size})"

    def __eq__(self, other):
        return isinstance(other, Grid) and other.size == self.size

    def __hash__(self):
        return hash(self.size)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def cells(self) -> Iterator[Cell]:
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.size and 0 <= c < self.size

    # ── Indexing ───────────────────────────────────────────────

    def index(self, cell: Cell) -> int:
        """Flattened row-major index of `cell`."""
        return cell[0] * self.size + cell[1]

    def cell_at(self, index: int) -> Cell:
        return divmod(index, self.size)

    def cell_at_pixel(self, x: float, y: float, cell_size: float) -> Optional[Cell]:
        """
        Resolve a pixel position (relative to the board's top-left corner)
        to a cell, or None when it falls outside the board.
        """
        if cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {cell_size}")
        if x < 0 or y < 0:
            return None
        cell = (int(y // cell_size), int(x // cell_size))
        return cell if self.in_bounds(cell) else None

    # ── Neighbourhoods ─────────────────────────────────────────

    def neighbors(self, cell: Cell) -> List[Cell]:
        r, c = cell
        result = []
        for dr, dc in DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.size and 0 <= nc < self.size:
                result.append((nr, nc))
        return result

    def neighborhood_3x3(self, cell: Cell) -> List[Cell]:
        """The up-to-9 cells within one row/column of `cell`, itself included."""
        r, c = cell
        return [
            (nr, nc)
            for nr in range(max(0, r - 1), min(self.size - 1, r + 1) + 1)
            for nc in range(max(0, c - 1), min(self.size - 1, c + 1) + 1)
        ]

    # ── Paths ──────────────────────────────────────────────────

    def shortest_path(self, start: Cell, end: Cell) -> List[Cell]:
        """
        BFS over the 4-connected board. Returns the cells walked after
        `start` up to and including `end`; empty when start == end or
        either cell is off the board.
        """
        if start == end or not (self.in_bounds(start) and self.in_bounds(end)):
            return []

        previous = {}
        queue = deque([start])
        visited = {start}

        while queue:
            current = queue.popleft()
            if current == end:
                break
            for neighbor in self.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    previous[neighbor] = current
                    queue.append(neighbor)

        path = []
        curr = end
        while curr != start:
            path.append(curr)
            curr = previous[curr]
        return path[::-1]
