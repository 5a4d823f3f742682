"""
Framebuffer Manager

Pushes rendered clock frames straight to the Linux framebuffer.
"""
import logging
import mmap
import os
from typing import Tuple

import numpy as np
from PIL import Image


class FramebufferManager:
    """Direct framebuffer output for rendered frames"""

    def __init__(self, device: str = "/dev/fb0", target_width: int = 1920, target_height: int = 1080):
        self.fb_device = device
        self.target_width = target_width
        self.target_height = target_height

        # Actual framebuffer parameters (may differ from target)
        self.fb_width = 640  # will be updated by _get_fb_info
        self.fb_height = 480  # will be updated by _get_fb_info
        self.fb_bpp = 16  # bits per pixel
        self.fb_bytes_per_pixel = self.fb_bpp // 8
        self.fb_size = self.fb_width * self.fb_height * self.fb_bytes_per_pixel

        self.fb_file = None
        self.fb_mmap = None
        self.fb_array = None
        self.is_available = False
        self.frames_written = 0

    @property
    def sysfs_dir(self) -> str:
        return os.path.join("/sys/class/graphics", os.path.basename(self.fb_device))

    def initialize(self) -> bool:
        """Open and memory-map the framebuffer. Returns True if usable."""
        try:
            self._get_fb_info()

            self.fb_file = open(self.fb_device, 'r+b')
            self.fb_mmap = mmap.mmap(self.fb_file.fileno(), self.fb_size)

            if self.fb_bpp == 16:
                self.fb_array = np.frombuffer(self.fb_mmap, dtype=np.uint16).reshape((self.fb_height, self.fb_width))
            else:
                self.fb_array = np.frombuffer(self.fb_mmap, dtype=np.uint32).reshape((self.fb_height, self.fb_width))

            self.is_available = True
            logging.info(f"Framebuffer initialized: {self.fb_width}x{self.fb_height}, {self.fb_bpp}bpp")
            logging.info(f"Target resolution: {self.target_width}x{self.target_height}")

        except (OSError, ValueError) as e:
            logging.warning(f"Framebuffer not available: {e}")
            self.cleanup()

        return self.is_available

    def _get_fb_info(self) -> None:
        """Get framebuffer geometry from sysfs"""
        try:
            with open(os.path.join(self.sysfs_dir, 'virtual_size'), 'r') as f:
                size_str = f.read().strip()
                self.fb_width, self.fb_height = map(int, size_str.split(','))

            with open(os.path.join(self.sysfs_dir, 'bits_per_pixel'), 'r') as f:
                self.fb_bpp = int(f.read().strip())

        except (OSError, ValueError) as e:
            logging.warning(f"Could not read framebuffer info, using defaults: {e}")

        self.fb_bytes_per_pixel = self.fb_bpp // 8
        self.fb_size = self.fb_width * self.fb_height * self.fb_bytes_per_pixel

    @staticmethod
    def _rgb_to_rgb565(r: int, g: int, b: int) -> int:
        """Convert RGB888 to RGB565 format"""
        r5 = (r >> 3) & 0x1F
        g6 = (g >> 2) & 0x3F
        b5 = (b >> 3) & 0x1F
        return (r5 << 11) | (g6 << 5) | b5

    @staticmethod
    def fit_to_screen(img: Image.Image, target_width: int, target_height: int) -> Image.Image:
        """Scale preserving aspect ratio, letterboxing with black where needed"""
        orig_width, orig_height = img.size
        if orig_width == target_width and orig_height == target_height:
            return img

        scale = min(target_width / orig_width, target_height / orig_height)
        new_width = max(1, int(orig_width * scale))
        new_height = max(1, int(orig_height * scale))
        scaled_img = img.resize((new_width, new_height), Image.Resampling.BILINEAR)

        if new_width == target_width and new_height == target_height:
            return scaled_img

        canvas = Image.new('RGB', (target_width, target_height), (0, 0, 0))
        canvas.paste(scaled_img, ((target_width - new_width) // 2, (target_height - new_height) // 2))
        return canvas

    @staticmethod
    def encode_frame(img: Image.Image, bpp: int) -> np.ndarray:
        """Convert an RGB image to framebuffer pixel values (RGB565 or XRGB8888)"""
        img_array = np.asarray(img.convert('RGB'))

        if bpp == 16:
            r = (img_array[:, :, 0] >> 3).astype(np.uint16)
            g = (img_array[:, :, 1] >> 2).astype(np.uint16)
            b = (img_array[:, :, 2] >> 3).astype(np.uint16)
            return (r << 11) | (g << 5) | b

        r = img_array[:, :, 0].astype(np.uint32)
        g = img_array[:, :, 1].astype(np.uint32)
        b = img_array[:, :, 2].astype(np.uint32)
        return (0xFF << 24) | (r << 16) | (g << 8) | b

    def display_frame(self, img: Image.Image) -> bool:
        """Write a rendered frame to the framebuffer"""
        if not self.is_available:
            return False

        try:
            fitted = self.fit_to_screen(img, self.fb_width, self.fb_height)
            np.copyto(self.fb_array, self.encode_frame(fitted, self.fb_bpp))
            self.frames_written += 1
            return True

        except (OSError, ValueError) as e:
            logging.error(f"Failed to display frame on framebuffer: {e}")
            return False

    def clear_screen(self, color: Tuple[int, int, int] = (0, 0, 0)) -> bool:
        """Clear framebuffer to solid color"""
        if not self.is_available:
            return False

        if self.fb_bpp == 16:
            color_value = self._rgb_to_rgb565(*color)
        else:
            color_value = (0xFF << 24) | (color[0] << 16) | (color[1] << 8) | color[2]

        self.fb_array.fill(color_value)
        self.fb_mmap.flush()
        return True

    def cleanup(self) -> None:
        """Release the memory map and device handle"""
        # Drop the numpy view first, mmap refuses to close while it is exported
        self.fb_array = None

        if self.fb_mmap is not None:
            try:
                self.fb_mmap.flush()
                self.fb_mmap.close()
            except (OSError, ValueError, BufferError) as e:
                logging.warning(f"Failed to close framebuffer map: {e}")
            self.fb_mmap = None

        if self.fb_file is not None:
            self.fb_file.close()
            self.fb_file = None

        self.is_available = False
        logging.debug("Framebuffer resources cleaned up")
