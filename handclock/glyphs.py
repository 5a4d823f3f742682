"""
Digit Glyph Map - Lookup tables for the hand clock digits

Each decimal digit is drawn on a 6x4 grid of small clocks. Every grid cell
shows one line-drawing glyph, and every glyph is a fixed pair of hand angles.
"""

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple, Union

ROWS = 6
COLUMNS = 4
CELLS_PER_DIGIT = ROWS * COLUMNS

# Both hands park here for blank cells and on startup
RESTING_ANGLE = 225


class Glyph(str, Enum):
    """Line-drawing shapes the two hands of a cell can form"""
    TOP_LEFT = "┌"
    TOP_RIGHT = "┐"
    BOTTOM_RIGHT = "┘"
    BOTTOM_LEFT = "└"
    HORIZONTAL = "─"
    VERTICAL = "│"
    BLANK = " "


# (hour angle, minute angle) in degrees, 0 = up, clockwise
GLYPH_ANGLES: Mapping[Glyph, Tuple[int, int]] = MappingProxyType({
    Glyph.TOP_LEFT: (90, 180),
    Glyph.TOP_RIGHT: (180, 270),
    Glyph.BOTTOM_RIGHT: (270, 0),
    Glyph.BOTTOM_LEFT: (90, 0),
    Glyph.HORIZONTAL: (90, 270),
    Glyph.VERTICAL: (180, 0),
    Glyph.BLANK: (RESTING_ANGLE, RESTING_ANGLE),
})

_DIGIT_ROWS = {
    0: ("┌──┐",
        "│┌┐│",
        "││││",
        "││││",
        "│└┘│",
        "└──┘"),
    1: ("┌─┐ ",
        "└┐│ ",
        " ││ ",
        " ││ ",
        "┌┘└┐",
        "└──┘"),
    2: ("┌──┐",
        "└─┐│",
        "┌─┘│",
        "│┌─┘",
        "│└─┐",
        "└──┘"),
    3: ("┌──┐",
        "└─┐│",
        " ┌┘│",
        " └┐│",
        "┌─┘│",
        "└──┘"),
    4: ("┌┐┌┐",
        "││││",
        "│└┘│",
        "└─┐│",
        "  ││",
        "  └┘"),
    5: ("┌──┐",
        "│┌─┘",
        "│└─┐",
        "└─┐│",
        "┌─┘│",
        "└──┘"),
    6: ("┌──┐",
        "│┌─┘",
        "│└─┐",
        "│┌┐│",
        "│└┘│",
        "└──┘"),
    7: ("┌──┐",
        "└─┐│",
        "  ││",
        "  ││",
        "  ││",
        "  └┘"),
    8: ("┌──┐",
        "│┌┐│",
        "│└┘│",
        "│┌┐│",
        "│└┘│",
        "└──┘"),
    9: ("┌──┐",
        "│┌┐│",
        "│└┘│",
        "└─┐│",
        "┌─┘│",
        "└──┘"),
}

# Row-major, 24 glyphs per digit
DIGIT_PATTERNS: Mapping[int, Tuple[Glyph, ...]] = MappingProxyType({
    digit: tuple(Glyph(ch) for row in rows for ch in row)
    for digit, rows in _DIGIT_ROWS.items()
})


def pattern_for(digit: int) -> Tuple[Glyph, ...]:
    """Return the 24-cell glyph pattern for a decimal digit (0-9).

    Anything outside 0-9 is a caller bug and raises KeyError.
    """
    return DIGIT_PATTERNS[digit]


def angles_for(glyph: Union[Glyph, str]) -> Tuple[int, int]:
    """Return (hour angle, minute angle) for a glyph or its character."""
    if not isinstance(glyph, Glyph):
        try:
            glyph = Glyph(glyph)
        except ValueError:
            raise KeyError(glyph) from None
    return GLYPH_ANGLES[glyph]


def cell_angles(digit: int, index: int) -> Tuple[int, int]:
    """Resolve the hand angles for one cell of a digit"""
    return angles_for(pattern_for(digit)[index])


def render_pattern(digit: int) -> str:
    """Draw a digit pattern as text, one grid row per line"""
    pattern = pattern_for(digit)
    return "\n".join(
        "".join(glyph.value for glyph in pattern[row * COLUMNS:(row + 1) * COLUMNS])
        for row in range(ROWS)
    )


def validate_tables() -> List[str]:
    """Check the digit patterns against the glyph table and return list of issues"""
    issues = []

    for digit in range(10):
        if digit not in DIGIT_PATTERNS:
            issues.append(f"Missing pattern for digit {digit}")
            continue

        pattern = DIGIT_PATTERNS[digit]
        if len(pattern) != CELLS_PER_DIGIT:
            issues.append(f"Digit {digit} has {len(pattern)} cells, expected {CELLS_PER_DIGIT}")

        for index, glyph in enumerate(pattern):
            if glyph not in GLYPH_ANGLES:
                issues.append(f"Digit {digit} cell {index} uses unknown glyph {glyph!r}")

    extra = sorted(set(DIGIT_PATTERNS) - set(range(10)))
    if extra:
        issues.append(f"Unexpected digit patterns: {extra}")

    return issues
