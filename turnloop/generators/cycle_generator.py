import logging
import random
from typing import List, Optional, Set

from turnloop.config import DEFAULT_MAX_STEPS, resolve_max_attempts
from turnloop.errors import GenerationExhaustedError
from turnloop.grid import Cell, Grid, is_adjacent

logger = logging.getLogger(__name__)


class CycleGenerator:
    """
    Builds a random closed loop through every cell of the grid
    (a Hamiltonian cycle) by randomized depth-first backtracking.

    Each attempt starts from a random cell and grows a simple path, trying
    the unvisited neighbours of the head in random order. A move is only
    taken when it leaves the rest of the board recoverable: the unvisited
    cells stay connected, each of them keeps two possible loop-neighbours,
    and both the head and the start cell can still reach them. An attempt
    that burns through `max_steps` is abandoned and a new one begins from
    a fresh random start, up to `max_attempts` times.
    """

    def __init__(self, grid_size: int, rng: Optional[random.Random] = None,
                 max_attempts: Optional[int] = None, max_steps: int = DEFAULT_MAX_STEPS):
        self.grid = Grid(grid_size)
        if grid_size % 2:
            raise ValueError(
                f"an odd grid ({grid_size}x{grid_size}) has no loop through every cell"
            )
        self.rng = rng or random.Random()
        self.max_attempts = resolve_max_attempts(max_attempts)
        self.max_steps = max_steps
        self.attempts = 0
        self.steps = 0
        self._all_cells = list(self.grid.cells())
        self._aborted = False

    def generate(self) -> List[Cell]:
        for attempt in range(1, self.max_attempts + 1):
            self.attempts = attempt
            start = self.rng.choice(self._all_cells)
            logger.debug("Attempt %d on %dx%d grid from %s", attempt, self.grid.size, self.grid.size, start)

            path = self._search(start)
            if path:
                logger.info("Generated %dx%d loop in %d attempt(s), %d steps",
                            self.grid.size, self.grid.size, attempt, self.steps)
                return path
            if self._aborted:
                logger.warning("Attempt %d hit the %d step budget; restarting", attempt, self.max_steps)

        logger.error("Loop generation exhausted after %d attempts on %dx%d grid",
                     self.max_attempts, self.grid.size, self.grid.size)
        raise GenerationExhaustedError(
            grid_size=self.grid.size,
            attempts=self.attempts,
            max_attempts=self.max_attempts,
        )

    # ── Search ─────────────────────────────────────────────────

    def _search(self, start: Cell) -> List[Cell]:
        self.steps = 0
        self._aborted = False
        total = self.grid.cell_count
        path = [start]
        visited = {start}

        def backtrack(current):
            if len(path) == total:
                return is_adjacent(current, start)

            self.steps += 1
            if self.steps > self.max_steps:
                self._aborted = True
                return False

            candidates = [n for n in self.grid.neighbors(current) if n not in visited]
            self.rng.shuffle(candidates)

            for nxt in candidates:
                if not self._is_viable(nxt, visited, start):
                    continue
                visited.add(nxt)
                path.append(nxt)

                if backtrack(nxt):
                    return True

                # Undo step
                path.pop()
                visited.remove(nxt)
                if self._aborted:
                    return False

            return False

        if backtrack(start):
            return path
        return []

    def _is_viable(self, nxt: Cell, visited: Set[Cell], start: Cell) -> bool:
        """Would stepping onto `nxt` still allow the loop to be completed?"""
        remaining = [cell for cell in self._all_cells if cell not in visited and cell != nxt]
        if not remaining:
            return is_adjacent(nxt, start)

        open_cells = set(remaining)
        if not any(n in open_cells for n in self.grid.neighbors(nxt)):
            return False
        if not any(n in open_cells for n in self.grid.neighbors(start)):
            return False

        # Every open cell still needs two possible loop-neighbours
        endpoints = (nxt, start)
        for cell in remaining:
            available = 0
            for n in self.grid.neighbors(cell):
                if n in open_cells or n in endpoints:
                    available += 1
            if available < 2:
                return False

        # Open region must stay in one piece
        seen = {remaining[0]}
        stack = [remaining[0]]
        while stack:
            cell = stack.pop()
            for n in self.grid.neighbors(cell):
                if n in open_cells and n not in seen:
                    seen.add(n)
                    stack.append(n)
        return len(seen) == len(open_cells)


def generate_solution_path(grid_size: int, rng: Optional[random.Random] = None,
                           max_attempts: Optional[int] = None) -> List[Cell]:
    """Random closed loop visiting every cell of a `grid_size` x `grid_size` board once."""
    return CycleGenerator(grid_size, rng=rng, max_attempts=max_attempts).generate()
