"""
ClockFaceController - Drives the six HH:MM:SS digit grids

On each tick the current time is split into six digits, every digit is
looked up in the glyph map, and the resulting hand angles are pushed to the
cells that need to move.
"""

import logging
import math
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from PIL import Image

from .animator import HandAnimator
from .cell import Hand
from .config import ClockStyle
from .digit import ClockDigit
from .glyphs import COLUMNS, angles_for, pattern_for, render_pattern
from .surface import Surface

DIGIT_COUNT = 6
DIGIT_NAMES = ('hour_tens', 'hour_ones', 'minute_tens', 'minute_ones', 'second_tens', 'second_ones')


def decompose_time(hour: int, minute: int, second: int) -> List[int]:
    """Split a time into tens and ones digits: [hT, hO, mT, mO, sT, sO]"""
    digits = []
    for value in (hour, minute, second):
        digits.extend(divmod(value, 10))
    return digits


class ClockFaceController:
    """Manages the six digit grids of an HH:MM:SS hand clock"""

    def __init__(self, animator: Optional[HandAnimator] = None,
                 style: Optional[ClockStyle] = None,
                 time_source: Callable[[], datetime] = datetime.now):
        self.animator = animator or HandAnimator()
        self.style = style or ClockStyle()
        self.time_source = time_source

        # Hour tens, hour ones, minute tens, minute ones, second tens, second ones
        self.digits = [ClockDigit(self.style) for _ in range(DIGIT_COUNT)]

        self.current_time: Optional[Tuple[int, int, int]] = None

    def apply_digit(self, index: int, value: int, always_animate: bool = False) -> int:
        """Push the hand angles of a digit value to one grid. Returns transitions started."""
        digit = self.digits[index]
        pattern = pattern_for(value)
        started = 0

        for cell, glyph in zip(digit.cells, pattern):
            hour, minute = angles_for(glyph)

            if not always_animate and cell.matches(hour, minute):
                continue

            if self.animator.begin_transition(cell, Hand.HOUR, hour):
                started += 1
            if self.animator.begin_transition(cell, Hand.MINUTE, minute):
                started += 1

        if digit.value != value:
            logging.debug(f"{DIGIT_NAMES[index]} -> {value}\n{render_pattern(value)}")
        digit.value = value
        return started

    def update(self, hour: int, minute: int, second: int, always_animate: bool = False) -> int:
        """Show the given time. Returns the number of hand transitions started."""
        values = decompose_time(hour, minute, second)
        started = 0

        for index, value in enumerate(values):
            started += self.apply_digit(index, value, always_animate)

        self.current_time = (hour, minute, second)
        if started:
            logging.debug(f"Clock {self.get_current_time_string()}: started {started} hand transitions")
        return started

    def tick(self, always_animate: bool = False) -> int:
        """Read the wall clock and update the display"""
        now = self.time_source()
        logging.debug(f"Clock tick {now:%H:%M:%S}")
        return self.update(now.hour, now.minute, now.second, always_animate)

    def advance(self, now: Optional[float] = None) -> bool:
        """Step hand animations. Returns True if the display changed."""
        return self.animator.advance(now)

    def force_update(self) -> int:
        """Push every cell for the current time, skipping the unchanged-cell check"""
        return self.tick(always_animate=True)

    def _digit_offsets(self) -> List[float]:
        cell = self.style.scaled(self.style.cell_size)
        digit_width = cell * COLUMNS
        digit_gap = self.style.scaled(self.style.digit_gap)
        group_gap = self.style.scaled(self.style.group_gap)

        offsets = []
        x = 0.0
        for index in range(DIGIT_COUNT):
            offsets.append(x)
            x += digit_width
            if index % 2 == 1:
                x += group_gap
            else:
                x += digit_gap
        return offsets

    def get_display_size(self) -> Tuple[int, int]:
        """Get the total size needed for the clock display"""
        _, digit_height = self.digits[0].get_display_size()
        width = self._digit_offsets()[-1] + self.style.scaled(self.style.cell_size) * COLUMNS
        return (math.ceil(width), digit_height)

    def draw(self, surface: Surface, x: float = 0, y: float = 0) -> None:
        for offset, digit in zip(self._digit_offsets(), self.digits):
            digit.draw(surface, x + offset, y)

    def render(self, background_color: Optional[Tuple[int, int, int]] = None) -> Image.Image:
        """Render all six digit grids side by side"""
        color = background_color or self.style.rgb('canvas_color')
        img = Image.new('RGB', self.get_display_size(), color)
        self.draw(Surface(img))
        return img

    def get_current_time_string(self) -> str:
        """Get current displayed time as HH:MM:SS string"""
        if not self.current_time:
            return "--:--:--"
        return "{:02d}:{:02d}:{:02d}".format(*self.current_time)

    def is_any_animation_active(self) -> bool:
        return self.animator.is_animating()

    def get_status(self) -> dict:
        return {
            'time': self.get_current_time_string(),
            'digits': {name: digit.value for name, digit in zip(DIGIT_NAMES, self.digits)},
            'active_animations': self.animator.active_count,
            'transitions_started': self.animator.transitions_started,
        }
