"""
Game timer with pause/resume support.
"""

import time
from typing import Callable, Optional


def format_time(seconds: int) -> str:
    """Format seconds as 'M:SS'."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


class GameTimer:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._offset = 0.0

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._paused_at is None

    def start(self, resume_from_seconds: float = 0):
        self._offset = float(resume_from_seconds)
        self._started_at = self._clock()
        self._paused_at = None

    def stop(self):
        """Freeze the elapsed time."""
        if self._started_at is None:
            return
        self._offset = self._elapsed()
        self._started_at = None
        self._paused_at = None

    def pause(self):
        if not self.running:
            return
        self._paused_at = self._clock()

    def resume(self):
        if self._paused_at is None:
            return
        self._started_at += self._clock() - self._paused_at
        self._paused_at = None

    def _elapsed(self) -> float:
        if self._started_at is None:
            return self._offset
        now = self._paused_at if self._paused_at is not None else self._clock()
        return self._offset + (now - self._started_at)

    @property
    def elapsed_seconds(self) -> int:
        return int(self._elapsed())

    @property
    def formatted(self) -> str:
        return format_time(self.elapsed_seconds)
