"""
Seeded random sources for daily puzzles.
Everyone asking for the same difficulty on the same date gets the same board.
"""

import datetime
import random
from typing import Optional

from turnloop.config import DIFFICULTY_SEED_OFFSETS


def create_seeded_random(seed: int) -> random.Random:
    return random.Random(seed)


def daily_seed(difficulty: str, today: Optional[datetime.date] = None) -> int:
    """
    Numeric seed YYYYMMDD * 10 + difficulty offset.

    2025-11-30 easy   -> 202511300
    2025-11-30 medium -> 202511301
    """
    today = today or datetime.date.today()
    offset = DIFFICULTY_SEED_OFFSETS.get(difficulty.lower(), 0)
    date_seed = today.year * 10000 + today.month * 100 + today.day
    return date_seed * 10 + offset


def puzzle_id(difficulty: str, today: Optional[datetime.date] = None) -> str:
    """Readable identifier such as '2025-11-30-easy'."""
    today = today or datetime.date.today()
    return f"{today.isoformat()}-{difficulty.lower()}"
