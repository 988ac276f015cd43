import datetime
import logging
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from turnloop.config import DIFFICULTIES, get_difficulty
from turnloop.generators import create_seeded_random, daily_seed, puzzle_id
from turnloop.logging_config import LOG_LEVEL_ENV, configure_logging
from turnloop.timer import GameTimer, format_time


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.mark.parametrize("seconds,expected", [(0, "0:00"), (9, "0:09"), (75, "1:15"), (600, "10:00")])
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_timer_pause_and_resume():
    clock = FakeClock()
    timer = GameTimer(clock=clock)
    timer.start()
    clock.now = 10
    assert timer.elapsed_seconds == 10

    timer.pause()
    clock.now = 20
    assert timer.elapsed_seconds == 10
    assert not timer.running

    timer.resume()
    clock.now = 25
    assert timer.elapsed_seconds == 15

    timer.stop()
    clock.now = 100
    assert timer.elapsed_seconds == 15
    assert timer.formatted == "0:15"


def test_timer_resumes_from_saved_time():
    clock = FakeClock()
    timer = GameTimer(clock=clock)
    timer.start(resume_from_seconds=30)
    clock.now = 5
    assert timer.elapsed_seconds == 35


def test_daily_seed_layout():
    day = datetime.date(2025, 11, 30)
    assert daily_seed("easy", day) == 202511300
    assert daily_seed("medium", day) == 202511301
    assert daily_seed("hard", datetime.date(2025, 12, 1)) == 202512012


def test_puzzle_id():
    assert puzzle_id("Hard", datetime.date(2026, 1, 5)) == "2026-01-05-hard"


def test_seeded_random_repeats():
    a = create_seeded_random(202511300)
    b = create_seeded_random(202511300)
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


def test_difficulty_table():
    assert get_difficulty("Medium").grid_size == 6
    assert get_difficulty("easy").max_hints == 2
    assert all(settings.grid_size % 2 == 0 for settings in DIFFICULTIES.values())
    with pytest.raises(ValueError):
        get_difficulty("nightmare")


def test_configure_logging_level(monkeypatch):
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
    configure_logging("debug")
    assert logging.getLogger("turnloop").level == logging.DEBUG

    monkeypatch.setenv(LOG_LEVEL_ENV, "WARNING")
    configure_logging()
    assert logging.getLogger("turnloop").level == logging.WARNING
