"""
HandClockRenderer - Places the hand clock on a full-size canvas
Handles scaling to the output resolution, centering and the optional caption
"""

import logging
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .clock import ClockFaceController
from .config import ClockStyle


class HandClockRenderer:
    """Renders complete frames with the animated hand clock"""

    def __init__(self, width: int, height: int, style: Optional[ClockStyle] = None,
                 controller: Optional[ClockFaceController] = None):
        self.width = width
        self.height = height
        self.style = (style or ClockStyle()).copy()

        issues = self.style.validate()
        if issues:
            logging.warning(f"Clock style issues: {issues}")

        if self.style.fit_to_canvas:
            self.style.scale = self._fit_scale()

        if controller is None:
            controller = ClockFaceController(style=self.style)
        else:
            controller.style = self.style
            for digit in controller.digits:
                digit.style = self.style
        self.controller = controller

        self.caption_font = None
        if self.style.caption_text:
            self.caption_font = self._load_font(int(self.height * self.style.caption_font_scale))

        self._calculate_layout()

    def _fit_scale(self) -> float:
        """Largest scale at which the clock fits inside the padded canvas"""
        probe = self.style.copy()
        probe.scale = 1.0
        natural_width, natural_height = ClockFaceController(style=probe).get_display_size()

        padding = self.style.canvas_padding
        usable_width = self.width * (1 - 2 * padding)
        usable_height = self.height * (1 - 2 * padding)
        if self.style.caption_text:
            usable_height -= self.height * self.style.caption_font_scale * 2

        scale = min(usable_width / natural_width, usable_height / natural_height)
        return max(scale, 0.1)

    def _load_font(self, size: int):
        try:
            return ImageFont.truetype(self.style.caption_font_path, max(size, 1))
        except OSError as e:
            logging.warning(f"Could not load caption font {self.style.caption_font_path}: {e}")
            return ImageFont.load_default()

    def _calculate_layout(self) -> None:
        """Center the clock, with the caption (if any) below it"""
        clock_width, clock_height = self.controller.get_display_size()

        caption_height = 0
        if self.caption_font:
            bbox = self.caption_font.getbbox(self.style.caption_text)
            caption_width = bbox[2] - bbox[0]
            caption_height = bbox[3] - bbox[1]
            self.caption_gap = int(caption_height * 0.8)
        else:
            caption_width = 0
            self.caption_gap = 0

        total_height = clock_height + self.caption_gap + caption_height
        self.clock_x = (self.width - clock_width) // 2
        self.clock_y = (self.height - total_height) // 2

        self.caption_x = (self.width - caption_width) // 2
        self.caption_y = self.clock_y + clock_height + self.caption_gap

    def update(self) -> int:
        """Poll the wall clock; returns the number of hand transitions started"""
        return self.controller.tick()

    def advance(self, now: Optional[float] = None) -> bool:
        return self.controller.advance(now)

    def render(self) -> Image.Image:
        """Render a complete frame"""
        img = Image.new('RGB', (self.width, self.height), self.style.rgb('canvas_color'))

        clock_img = self.controller.render(self.style.rgb('canvas_color'))
        img.paste(clock_img, (self.clock_x, self.clock_y))

        if self.caption_font:
            draw = ImageDraw.Draw(img)
            draw.text((self.caption_x, self.caption_y), self.style.caption_text,
                      fill=self.style.rgb('caption_color'), font=self.caption_font)

        return img

    def get_clock_position(self) -> Tuple[int, int]:
        return (self.clock_x, self.clock_y)

    def get_current_time(self) -> str:
        return self.controller.get_current_time_string()

    def is_animating(self) -> bool:
        return self.controller.is_any_animation_active()
