"""
ClockDigit - One decimal digit drawn by a 6x4 grid of hand clocks
"""

import math
from typing import List, Optional, Tuple

from PIL import Image

from .cell import ClockCell
from .config import ClockStyle
from .glyphs import CELLS_PER_DIGIT, COLUMNS, ROWS
from .surface import Surface


class ClockDigit:
    """Grid of 24 clock cells addressable by index or row/column"""

    def __init__(self, style: Optional[ClockStyle] = None):
        self.style = style or ClockStyle()
        self.cells: List[ClockCell] = [ClockCell() for _ in range(CELLS_PER_DIGIT)]

        # Last digit pushed to this grid, None until the first update
        self.value: Optional[int] = None

    def cell(self, row: int, column: int) -> ClockCell:
        if not (0 <= row < ROWS and 0 <= column < COLUMNS):
            raise IndexError(f"Cell ({row}, {column}) outside {ROWS}x{COLUMNS} grid")
        return self.cells[row * COLUMNS + column]

    @staticmethod
    def position(index: int) -> Tuple[int, int]:
        """Row and column of a cell index"""
        return divmod(index, COLUMNS)

    def get_display_size(self) -> Tuple[int, int]:
        cell = self.style.scaled(self.style.cell_size)
        return (math.ceil(COLUMNS * cell), math.ceil(ROWS * cell))

    def draw(self, surface: Surface, x: float, y: float) -> None:
        """Draw all cells onto a surface with the grid's top-left corner at (x, y)"""
        cell_size = self.style.scaled(self.style.cell_size)
        for index, cell in enumerate(self.cells):
            row, column = self.position(index)
            cell.render(surface, x + column * cell_size, y + row * cell_size, self.style)

    def render(self) -> Image.Image:
        """Render the grid on its own image"""
        img = Image.new('RGB', self.get_display_size(), self.style.rgb('background_color'))
        self.draw(Surface(img), 0, 0)
        return img
