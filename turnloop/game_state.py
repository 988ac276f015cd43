"""
Game State
==========
One puzzle session: the generated solution and hints, the player's
connection graph, the path editor that edits it, and the win flag.

Lifecycle triggers:
- new_puzzle()      regenerate solution + hints, clear the drawing
- restart()         clear the drawing, keep solution + hints
- set_grid_size(n)  change size and regenerate
- view_solution()   reveal the answer; input is locked afterwards
"""

import datetime
import enum
import logging
import random
from typing import Any, Dict, List, Optional

from turnloop.config import DEFAULT_CELL_SIZE, get_difficulty
from turnloop.connection_graph import ConnectionGraph
from turnloop.errors import GenerationExhaustedError
from turnloop.generators import (
    create_seeded_random, daily_seed, generate_solution_path, puzzle_id, select_hints,
)
from turnloop.grid import Cell, Grid
from turnloop.loop_model import TurnMap, build_turn_map
from turnloop.path_editor import PathEditor
from turnloop.timer import GameTimer
from turnloop.validators import LoopFeedback, check_win_condition, evaluate_loop

logger = logging.getLogger(__name__)


class GameStatus(enum.Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    WON = "won"
    VIEWED_SOLUTION = "viewed-solution"


class GameState:
    def __init__(self, difficulty: str = "easy", grid_size: Optional[int] = None,
                 daily: bool = False, today: Optional[datetime.date] = None,
                 rng: Optional[random.Random] = None,
                 hint_probability: Optional[float] = None,
                 cell_size: float = DEFAULT_CELL_SIZE,
                 timer: Optional[GameTimer] = None,
                 generate: bool = True):
        self.settings = get_difficulty(difficulty)
        self.grid_size = grid_size or self.settings.grid_size
        self.daily = daily
        self.today = today
        self.rng = rng
        self.hint_probability = (hint_probability if hint_probability is not None
                                 else self.settings.hint_probability)
        self.cell_size = cell_size
        self.timer = timer or GameTimer()

        self.grid = Grid(self.grid_size)
        self.solution_path: List[Cell] = []
        self.solution_turn_map: TurnMap = {}
        self.hints: Dict[Cell, int] = {}
        self.puzzle_id: Optional[str] = None

        self.graph = ConnectionGraph(self.grid_size)
        self.editor = PathEditor(self.graph, cell_size=cell_size)

        self.status = GameStatus.NEW
        self.has_won = False
        self.has_viewed_solution = False
        self.feedback = LoopFeedback.OPEN
        self.message = ""
        self._last_validated_key: Optional[bytes] = None

        if generate:
            self.new_puzzle()

    @property
    def difficulty(self) -> str:
        return self.settings.name

    @property
    def input_locked(self) -> bool:
        return self.has_won or self.has_viewed_solution

    # ── Lifecycle ──────────────────────────────────────────────

    def _puzzle_rng(self) -> random.Random:
        if self.daily:
            return create_seeded_random(daily_seed(self.difficulty, self.today))
        return self.rng or random.Random()

    def new_puzzle(self):
        """
        Generate a fresh solution and hint set. If generation fails the
        previous puzzle (if any) stays in place and the error propagates.
        """
        rng = self._puzzle_rng()
        try:
            solution = generate_solution_path(self.grid_size, rng=rng)
        except GenerationExhaustedError:
            if self.daily:
                raise
            logger.warning("Generation exhausted on %dx%d; retrying with a fresh seed",
                           self.grid_size, self.grid_size)
            rng = random.Random()
            solution = generate_solution_path(self.grid_size, rng=rng)

        turn_map = build_turn_map(solution)
        hints = select_hints(solution, self.hint_probability, rng=rng,
                             max_hints=self.settings.max_hints, turn_map=turn_map)

        self.solution_path = solution
        self.solution_turn_map = turn_map
        self.hints = hints
        self.puzzle_id = puzzle_id(self.difficulty, self.today) if self.daily else None
        logger.info("New %s puzzle: %dx%d, %d hint(s)",
                    self.difficulty, self.grid_size, self.grid_size, len(hints))
        self._reset_play()

    def restart(self):
        """Clear the drawing but keep the same solution and hints."""
        logger.info("Restarting puzzle")
        self._reset_play()

    def set_grid_size(self, grid_size: int, force: bool = False):
        """Regenerate at `grid_size`; an unchanged size is a no-op unless `force`."""
        if grid_size == self.grid_size and self.solution_path and not force:
            return
        previous = (self.grid_size, self.grid, self.graph, self.editor)
        self.grid_size = grid_size
        self.grid = Grid(grid_size)
        self.graph = ConnectionGraph(grid_size)
        self.editor = PathEditor(self.graph, cell_size=self.cell_size)
        try:
            self.new_puzzle()
        except (GenerationExhaustedError, ValueError):
            self.grid_size, self.grid, self.graph, self.editor = previous
            raise
        logger.info("Grid size changed to %dx%d", grid_size, grid_size)

    def set_difficulty(self, difficulty: str):
        previous = (self.settings, self.hint_probability)
        self.settings = get_difficulty(difficulty)
        self.hint_probability = self.settings.hint_probability
        try:
            self.set_grid_size(self.settings.grid_size, force=True)
        except (GenerationExhaustedError, ValueError):
            self.settings, self.hint_probability = previous
            raise

    def view_solution(self):
        self.has_viewed_solution = True
        self.status = GameStatus.VIEWED_SOLUTION
        self.editor.locked = True
        self.editor.reset()
        self.timer.stop()
        logger.info("Solution viewed")

    def _reset_play(self):
        self.graph.clear()
        self.editor.reset()
        self.editor.locked = False
        self.has_won = False
        self.has_viewed_solution = False
        self.status = GameStatus.NEW
        self.feedback = LoopFeedback.OPEN
        self.message = ""
        self._last_validated_key = None
        self.timer.start()

    # ── Input ──────────────────────────────────────────────────

    def pointer_down(self, x: float, y: float) -> bool:
        return self._after_input(self.editor.pointer_down(x, y))

    def pointer_move(self, x: float, y: float) -> bool:
        return self._after_input(self.editor.pointer_move(x, y))

    def pointer_up(self, x: float, y: float) -> bool:
        return self._after_input(self.editor.pointer_up(x, y))

    def pointer_cancel(self) -> bool:
        return self._after_input(self.editor.pointer_cancel())

    def _after_input(self, mutated: bool) -> bool:
        if mutated:
            if self.status == GameStatus.NEW:
                self.status = GameStatus.IN_PROGRESS
            self.validate()
        return mutated

    # ── Validation ─────────────────────────────────────────────

    def validate(self, force: bool = False) -> bool:
        """Re-check the win condition; skipped when the drawing is unchanged."""
        if self.input_locked:
            return self.has_won

        key = self.graph.state_key()
        if not force and key == self._last_validated_key:
            return self.has_won
        self._last_validated_key = key

        self.feedback = evaluate_loop(self.grid, self.graph, self.hints, self.solution_turn_map)
        won, reason = check_win_condition(self.grid, self.graph, self.solution_path,
                                          self.hints, self.solution_turn_map)
        self.message = reason
        if won:
            self.has_won = True
            self.status = GameStatus.WON
            self.editor.locked = True
            self.editor.reset()
            self.timer.stop()
            logger.info("Puzzle solved in %s", self.timer.formatted)
        return won

    # ── Snapshots ──────────────────────────────────────────────

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the session for saving or event logging."""
        return {
            "puzzle_id": self.puzzle_id,
            "daily": self.daily,
            "today": self.today.isoformat() if self.today else None,
            "difficulty": self.difficulty,
            "grid_size": self.grid_size,
            "solution_path": [list(cell) for cell in self.solution_path],
            "hints": [[r, c, count] for (r, c), count in sorted(self.hints.items())],
            **self.graph.to_dict(),
            "has_won": self.has_won,
            "has_viewed_solution": self.has_viewed_solution,
            "elapsed_seconds": self.timer.elapsed_seconds,
        }

    @classmethod
    def restore(cls, data: Dict[str, Any], **kwargs) -> "GameState":
        if data.get("daily"):
            kwargs.setdefault("daily", True)
            if data.get("today"):
                kwargs.setdefault("today", datetime.date.fromisoformat(data["today"]))
        state = cls(difficulty=data.get("difficulty", "easy"), grid_size=data["grid_size"],
                    generate=False, **kwargs)
        state.solution_path = [tuple(cell) for cell in data["solution_path"]]
        state.solution_turn_map = build_turn_map(state.solution_path)
        state.hints = {(r, c): count for r, c, count in data.get("hints", [])}
        state.puzzle_id = data.get("puzzle_id")

        state.graph = ConnectionGraph.from_dict(state.grid_size, data)
        state.editor = PathEditor(state.graph, cell_size=state.cell_size)
        state.has_won = bool(data.get("has_won", False))
        state.has_viewed_solution = bool(data.get("has_viewed_solution", False))
        state.editor.locked = state.input_locked

        if state.has_viewed_solution:
            state.status = GameStatus.VIEWED_SOLUTION
        elif state.has_won:
            state.status = GameStatus.WON
        elif state.graph.drawn_count:
            state.status = GameStatus.IN_PROGRESS

        state.timer.start(resume_from_seconds=data.get("elapsed_seconds", 0))
        if state.input_locked:
            state.timer.stop()
        return state
