"""
Hand Clock
Digital HH:MM:SS clock drawn by a wall of small two-handed analog clocks
"""

from .glyphs import Glyph, pattern_for, angles_for
from .cell import ClockCell, Hand
from .animator import HandAnimator, AngleAnimation, shortest_delta, ease_out_cubic
from .config import ClockStyle, StylePresets, load_style
from .digit import ClockDigit
from .clock import ClockFaceController, decompose_time
from .renderer import HandClockRenderer

__all__ = [
    'Glyph', 'pattern_for', 'angles_for',
    'ClockCell', 'Hand',
    'HandAnimator', 'AngleAnimation', 'shortest_delta', 'ease_out_cubic',
    'ClockStyle', 'StylePresets', 'load_style',
    'ClockDigit',
    'ClockFaceController', 'decompose_time',
    'HandClockRenderer',
]
