"""
Puzzle construction: solution loops, hint selection and seeded randomness.
"""
from .cycle_generator import CycleGenerator, generate_solution_path
from .hint_selector import HintCells, select_hints
from .seeded_random import create_seeded_random, daily_seed, puzzle_id

__all__ = [
    'CycleGenerator', 'generate_solution_path',
    'HintCells', 'select_hints',
    'create_seeded_random', 'daily_seed', 'puzzle_id',
]
