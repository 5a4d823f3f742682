"""
Hand Clock Style Configuration

Colors, sizes and spacing for rendering the clock. Sizes are in pixels at
scale 1.0; the renderer adjusts `scale` to fit the canvas.
"""

import logging
import os
from dataclasses import dataclass, fields
from typing import Optional, Tuple

import yaml
from PIL import ImageColor


@dataclass
class ClockStyle:
    """
    Visual configuration for the hand clock.

    Color fields accept anything PIL.ImageColor understands ("#e0ff55",
    "white", "rgb(10,20,30)").
    """

    # Cell geometry
    cell_size: float = 50
    border_size: float = 3.75
    hand_thickness: float = 1.25

    # Cell colors
    background_color: str = "#161616"
    border_color: str = "#2e2e2e"
    hand_color: str = "#e0ff55"

    # Spacing between digit grids and between HH / MM / SS groups
    digit_gap: float = 10
    group_gap: float = 40

    # Canvas settings
    canvas_color: str = "#101010"
    canvas_padding: float = 0.05  # 5% padding around edges
    scale: float = 1.0
    fit_to_canvas: bool = True

    # Caption under the clock, empty to disable
    caption_text: str = ""
    caption_color: str = "#b4b4b4"
    caption_font_scale: float = 0.04  # As fraction of canvas height
    caption_font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"

    def scaled(self, value: float) -> float:
        return value * self.scale

    def rgb(self, name: str) -> Tuple[int, int, int]:
        """Resolve a color field to an RGB tuple"""
        return ImageColor.getrgb(getattr(self, name))[:3]

    def to_dict(self) -> dict:
        """Convert style to dictionary for serialization"""
        return {field.name: getattr(self, field.name) for field in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> 'ClockStyle':
        """Create style from dictionary, ignoring unknown keys"""
        valid_fields = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - valid_fields)
        if unknown:
            logging.warning(f"Ignoring unknown clock style keys: {unknown}")
        return cls(**{k: v for k, v in data.items() if k in valid_fields})

    def copy(self) -> 'ClockStyle':
        return ClockStyle(**self.to_dict())

    def validate(self) -> list:
        """Validate style and return list of issues"""
        issues = []

        for field in ('cell_size', 'scale'):
            value = getattr(self, field)
            if value <= 0:
                issues.append(f"{field} must be positive, got {value}")

        for field in ('border_size', 'hand_thickness', 'digit_gap', 'group_gap'):
            value = getattr(self, field)
            if value < 0:
                issues.append(f"{field} must not be negative, got {value}")

        if self.border_size * 2 >= self.cell_size:
            issues.append(f"border_size {self.border_size} leaves no room inside cell_size {self.cell_size}")

        for field in ('canvas_padding', 'caption_font_scale'):
            value = getattr(self, field)
            if not 0 <= value <= 1:
                issues.append(f"{field} must be between 0 and 1, got {value}")

        for field in ('background_color', 'border_color', 'hand_color', 'canvas_color', 'caption_color'):
            try:
                self.rgb(field)
            except ValueError:
                issues.append(f"{field} is not a valid color: {getattr(self, field)!r}")

        return issues


class StylePresets:
    """Predefined styles"""

    @staticmethod
    def default() -> ClockStyle:
        return ClockStyle()

    @staticmethod
    def compact() -> ClockStyle:
        """Smaller cells with tight spacing"""
        style = ClockStyle()
        style.cell_size = 32
        style.border_size = 2.5
        style.hand_thickness = 1.0
        style.digit_gap = 4
        style.group_gap = 16
        return style

    @staticmethod
    def large() -> ClockStyle:
        """Bigger cells and thicker hands for distant viewing"""
        style = ClockStyle()
        style.cell_size = 80
        style.border_size = 5
        style.hand_thickness = 3
        style.digit_gap = 16
        style.group_gap = 60
        return style

    @staticmethod
    def mono() -> ClockStyle:
        """Black and white"""
        style = ClockStyle()
        style.background_color = "#000000"
        style.border_color = "#202020"
        style.hand_color = "#ffffff"
        style.canvas_color = "#000000"
        return style


PRESETS = {
    'default': StylePresets.default,
    'compact': StylePresets.compact,
    'large': StylePresets.large,
    'mono': StylePresets.mono,
}


def load_style(path: Optional[str] = None, preset: str = 'default') -> ClockStyle:
    """
    Load a clock style.

    The preset is the starting point; a YAML file, when given, overrides its
    fields. A missing or empty file falls back to the preset.
    """
    if preset not in PRESETS:
        raise ValueError(f"Unknown style preset: {preset} (choose from {sorted(PRESETS)})")

    style = PRESETS[preset]()
    if not path:
        return style

    if not os.path.exists(path):
        logging.warning(f"Clock style file not found: {path}, using '{preset}' preset")
        return style

    with open(path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Clock style file must contain a mapping, got {type(data).__name__}")

    merged = style.to_dict()
    merged.update(data)
    style = ClockStyle.from_dict(merged)
    logging.info(f"Loaded clock style from {path}")
    return style
