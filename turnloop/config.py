"""
Game configuration constants.
Centralizes tuning numbers for generation, hints and difficulty tiers.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 2

# Hint system
DEFAULT_HINT_PROBABILITY = 0.3

# Puzzle generation
DEFAULT_MAX_ATTEMPTS = 100      # restarts before giving up
DEFAULT_MAX_STEPS = 50_000      # search steps per attempt
MAX_ATTEMPTS_ENV = "TURNLOOP_MAX_ATTEMPTS"

# Pointer resolution
DEFAULT_CELL_SIZE = 60.0


@dataclass(frozen=True)
class DifficultySettings:
    name: str
    grid_size: int
    hint_probability: float
    max_hints: Optional[int] = None


DIFFICULTIES: Dict[str, DifficultySettings] = {
    "easy": DifficultySettings("easy", 4, 0.3, max_hints=2),
    "medium": DifficultySettings("medium", 6, 0.2),
    "hard": DifficultySettings("hard", 8, 0.3),
}

# Offsets used when deriving the daily seed
DIFFICULTY_SEED_OFFSETS: Dict[str, int] = {"easy": 0, "medium": 1, "hard": 2}


def get_difficulty(name: str) -> DifficultySettings:
    try:
        return DIFFICULTIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"unknown difficulty {name!r}; expected one of {sorted(DIFFICULTIES)}"
        ) from None


def resolve_max_attempts(explicit: Optional[int] = None) -> int:
    """
    Resolve the generation restart cap.

    Priority:
    1) explicit argument
    2) env TURNLOOP_MAX_ATTEMPTS
    3) DEFAULT_MAX_ATTEMPTS
    """
    raw = explicit
    if raw is None:
        raw = os.getenv(MAX_ATTEMPTS_ENV)
    if raw is None:
        return DEFAULT_MAX_ATTEMPTS

    try:
        limit = int(raw)
        if limit > 0:
            return limit
    except (TypeError, ValueError):
        pass
    logger.warning("Ignoring invalid max attempts value %r", raw)
    return DEFAULT_MAX_ATTEMPTS
