"""
Generation errors and limits.
"""

from __future__ import annotations

GENERATION_EXHAUSTED_MESSAGE = "Could not build a closed loop through every cell within the attempt budget."


class GenerationExhaustedError(RuntimeError):
    """
    Raised when the randomized loop search exceeds its restart budget
    for the requested grid size.
    """

    def __init__(
        self,
        message: str = GENERATION_EXHAUSTED_MESSAGE,
        *,
        grid_size: int | None = None,
        attempts: int | None = None,
        max_attempts: int | None = None,
    ) -> None:
        super().__init__(message)
        self.grid_size = grid_size
        self.attempts = attempts
        self.max_attempts = max_attempts
