"""
Hand Clock Configuration

Central configuration file for all constants and settings.
"""
import os

# Timing (milliseconds)
TICK_INTERVAL_MS = 500         # wall clock poll
FRAME_INTERVAL_MS = 16         # ~60fps animation sampling
TRANSITION_DURATION_MS = 200   # one hand rotation

# Output
FRAMEBUFFER_DEVICE = os.getenv("HANDCLOCK_FB_DEVICE", "/dev/fb0")
CANVAS_WIDTH = int(os.getenv("HANDCLOCK_WIDTH", "1920"))
CANVAS_HEIGHT = int(os.getenv("HANDCLOCK_HEIGHT", "1080"))

# Style
STYLE_CONFIG_PATH = os.getenv("HANDCLOCK_STYLE")
STYLE_PRESET = os.getenv("HANDCLOCK_PRESET", "default")

# Logging
LOG_LEVEL = os.getenv("HANDCLOCK_LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
