"""
Surface - Pillow drawing context with scoped affine transforms

Hands are drawn as rectangles rotated about the cell center, so the surface
keeps a transform stack and pushes every rectangle through it.
"""

import math
from contextlib import contextmanager
from typing import Iterator, List, Tuple

import numpy as np
from PIL import Image, ImageDraw

Color = Tuple[int, int, int]


class Surface:
    """Drawing surface over a PIL image with a 2D affine transform stack"""

    def __init__(self, image: Image.Image):
        self.image = image
        self.draw = ImageDraw.Draw(image)
        self._matrix = np.identity(3)
        self._stack: List[np.ndarray] = []

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @contextmanager
    def transform(self) -> Iterator["Surface"]:
        """Scope transforms to a block; the previous matrix is restored on exit"""
        self._stack.append(self._matrix.copy())
        try:
            yield self
        finally:
            self._matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        step = np.array([
            [1.0, 0.0, dx],
            [0.0, 1.0, dy],
            [0.0, 0.0, 1.0],
        ])
        self._matrix = self._matrix @ step

    def rotate(self, degrees: float) -> None:
        """Rotate about the current origin (clockwise on screen for positive angles)"""
        radians = math.radians(degrees)
        cos_a = math.cos(radians)
        sin_a = math.sin(radians)
        step = np.array([
            [cos_a, -sin_a, 0.0],
            [sin_a, cos_a, 0.0],
            [0.0, 0.0, 1.0],
        ])
        self._matrix = self._matrix @ step

    @contextmanager
    def rotated_about(self, cx: float, cy: float, degrees: float) -> Iterator["Surface"]:
        with self.transform():
            self.translate(cx, cy)
            self.rotate(degrees)
            self.translate(-cx, -cy)
            yield self

    def map_points(self, points: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
        """Apply the current transform to a list of (x, y) points"""
        coords = np.array([[x, y, 1.0] for x, y in points]).T
        mapped = self._matrix @ coords
        return [(float(x), float(y)) for x, y in zip(mapped[0], mapped[1])]

    def fill_rectangle(self, x: float, y: float, width: float, height: float, fill: Color) -> None:
        corners = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
        polygon = self.map_points(corners)
        # Outline too, otherwise sub-pixel hands disappear
        self.draw.polygon(polygon, fill=fill, outline=fill)
