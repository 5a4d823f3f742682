"""
ClockCell - State of one small two-handed clock in a digit grid
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .glyphs import RESTING_ANGLE

if TYPE_CHECKING:
    from .config import ClockStyle
    from .surface import Surface

ANGLE_EPSILON = 0.001


class Hand(Enum):
    HOUR = "hour"
    MINUTE = "minute"


@dataclass(eq=False)
class ClockCell:
    """
    Target and rendered angles for the two hands of a cell.

    Targets are written by the clock controller, animated angles by the
    hand animator. Both happen on the event loop that also renders.
    """
    hour_target: float = RESTING_ANGLE
    minute_target: float = RESTING_ANGLE
    animated_hour: float = RESTING_ANGLE
    animated_minute: float = RESTING_ANGLE

    def target(self, hand: Hand) -> float:
        return self.hour_target if hand is Hand.HOUR else self.minute_target

    def set_target(self, hand: Hand, value: float) -> None:
        if hand is Hand.HOUR:
            self.hour_target = value
        else:
            self.minute_target = value

    def animated(self, hand: Hand) -> float:
        return self.animated_hour if hand is Hand.HOUR else self.animated_minute

    def set_animated(self, hand: Hand, value: float) -> None:
        if hand is Hand.HOUR:
            self.animated_hour = value
        else:
            self.animated_minute = value

    def matches(self, hour: float, minute: float, tolerance: float = ANGLE_EPSILON) -> bool:
        """True when both targets are already within tolerance of the given angles"""
        return (abs(self.hour_target - hour) <= tolerance and
                abs(self.minute_target - minute) <= tolerance)

    def render(self, surface: 'Surface', x: float, y: float, style: 'ClockStyle') -> None:
        """Draw the cell frame and both hands with their top-left corner at (x, y)"""
        size = style.scaled(style.cell_size)
        border = style.scaled(style.border_size)
        thickness = style.scaled(style.hand_thickness)
        inner = size - 2 * border

        surface.fill_rectangle(x, y, size, size, style.rgb('border_color'))
        surface.fill_rectangle(x + border, y + border, inner, inner, style.rgb('background_color'))

        center_x = x + size / 2
        center_y = y + size / 2
        hand_color = style.rgb('hand_color')
        for angle in (self.animated_hour, self.animated_minute):
            self._draw_hand(surface, center_x, center_y, inner / 2, thickness, hand_color, angle)

    @staticmethod
    def _draw_hand(surface: 'Surface', cx: float, cy: float, length: float,
                   thickness: float, color, angle_degrees: float) -> None:
        # Hand points up from the center before rotation
        with surface.rotated_about(cx, cy, angle_degrees):
            surface.fill_rectangle(cx - thickness / 2, cy - length, thickness, length, color)
