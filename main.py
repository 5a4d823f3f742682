"""
Hand Clock Main Application

Entry point: builds the clock, the framebuffer output and the display loops,
then runs until interrupted.
"""
import argparse
import asyncio
import logging
import signal

from handclock.animator import HandAnimator
from handclock.clock import ClockFaceController
from handclock.config import PRESETS, load_style
from handclock.glyphs import validate_tables
from handclock.renderer import HandClockRenderer
from managers.clock_display_manager import ClockDisplayManager
from managers.framebuffer_manager import FramebufferManager

from config import (
    CANVAS_HEIGHT, CANVAS_WIDTH, FRAMEBUFFER_DEVICE, LOG_FORMAT, LOG_LEVEL,
    STYLE_CONFIG_PATH, STYLE_PRESET, TRANSITION_DURATION_MS,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Hand Clock - digital clock drawn with analog clock hands')
    parser.add_argument('--fb-device', default=FRAMEBUFFER_DEVICE,
                        help='Framebuffer device to draw on')
    parser.add_argument('--width', type=int, default=CANVAS_WIDTH,
                        help='Canvas width in pixels')
    parser.add_argument('--height', type=int, default=CANVAS_HEIGHT,
                        help='Canvas height in pixels')
    parser.add_argument('--style', default=STYLE_CONFIG_PATH,
                        help='YAML file with clock style overrides')
    parser.add_argument('--preset', default=STYLE_PRESET, choices=sorted(PRESETS),
                        help='Base style preset')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def build_display(args: argparse.Namespace) -> ClockDisplayManager:
    """Wire style, controller, renderer and framebuffer together"""
    issues = validate_tables()
    if issues:
        raise RuntimeError(f"Digit glyph tables are inconsistent: {issues}")

    style = load_style(args.style, args.preset)
    controller = ClockFaceController(animator=HandAnimator(duration_ms=TRANSITION_DURATION_MS), style=style)
    renderer = HandClockRenderer(args.width, args.height, style=style, controller=controller)

    framebuffer = FramebufferManager(args.fb_device, args.width, args.height)
    if not framebuffer.initialize():
        logging.warning("Running without framebuffer output, frames are kept in memory only")

    return ClockDisplayManager(renderer, framebuffer)


async def run(args: argparse.Namespace) -> None:
    display = build_display(args)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logging.info("Starting Hand Clock...")
    await display.start()

    try:
        await stop_event.wait()
    finally:
        logging.info("Shutting down Hand Clock...")
        await display.stop()
        if display.framebuffer:
            display.framebuffer.cleanup()
        logging.info(f"Hand Clock stopped after {display.frames_rendered} frames")


def main(argv=None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format=LOG_FORMAT
    )

    asyncio.run(run(args))


if __name__ == "__main__":
    main()
