from datetime import datetime

import pytest

from handclock.animator import HandAnimator
from handclock.clock import ClockFaceController
from handclock.config import ClockStyle


class FakeClock:
    """Manually advanced monotonic clock, counted in whole milliseconds"""

    def __init__(self, start_ms: int = 0):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms / 1000.0

    def advance_ms(self, ms: int) -> float:
        self.now_ms += ms
        return self()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def animator(fake_clock):
    return HandAnimator(duration_ms=200, time_source=fake_clock)


@pytest.fixture
def small_style():
    """Tiny cells so rendering tests stay fast"""
    return ClockStyle(cell_size=10, border_size=1, hand_thickness=1, digit_gap=2, group_gap=4)


@pytest.fixture
def wall_time():
    """Mutable wall clock for the controller"""
    state = {'now': datetime(2024, 1, 1, 9, 5, 7)}

    def source():
        return state['now']

    source.state = state
    return source


@pytest.fixture
def controller(animator, small_style, wall_time):
    return ClockFaceController(animator=animator, style=small_style, time_source=wall_time)
