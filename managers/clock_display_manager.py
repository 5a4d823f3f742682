"""
Clock Display Manager

Runs the hand clock on the asyncio event loop: a tick task polls the wall
clock, a frame task advances hand animations and pushes redrawn frames to
the framebuffer. Both tasks share one loop, so cell state needs no locking.
"""
import asyncio
import logging
import time
from typing import Optional

from PIL import Image

from config import FRAME_INTERVAL_MS, TICK_INTERVAL_MS
from handclock.renderer import HandClockRenderer
from managers.framebuffer_manager import FramebufferManager


class ClockDisplayManager:
    """Drives clock ticks, animation frames and output"""

    def __init__(self, renderer: HandClockRenderer, framebuffer: Optional[FramebufferManager] = None,
                 tick_interval_ms: int = TICK_INTERVAL_MS, frame_interval_ms: int = FRAME_INTERVAL_MS):
        self.renderer = renderer
        self.framebuffer = framebuffer
        self.tick_interval = tick_interval_ms / 1000.0
        self.frame_interval = frame_interval_ms / 1000.0

        # Current state
        self.is_running = False
        self.latest_frame: Optional[Image.Image] = None
        self.frames_rendered = 0
        self.ticks = 0
        self.started_at: Optional[float] = None

        self._tick_task: Optional[asyncio.Task] = None
        self._frame_task: Optional[asyncio.Task] = None

    async def start(self) -> bool:
        """Start tick and frame loops"""
        if self.is_running:
            return True

        logging.info(f"Starting clock display (tick {self.tick_interval * 1000:.0f}ms, "
                     f"frame {self.frame_interval * 1000:.0f}ms)")

        # Draw the resting state immediately, then show the current time
        self.render_now()
        self.renderer.update()

        self.is_running = True
        self.started_at = time.monotonic()
        self._tick_task = asyncio.create_task(self._tick_loop())
        self._frame_task = asyncio.create_task(self._frame_loop())
        return True

    async def _tick_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.tick_interval)
                self.renderer.update()
                self.ticks += 1

            except asyncio.CancelledError:
                logging.info("Clock tick loop stopped")
                raise
            except Exception as e:
                logging.error(f"Error in clock tick loop: {e}")

    async def _frame_loop(self) -> None:
        animator = self.renderer.controller.animator
        while True:
            try:
                await asyncio.sleep(self.frame_interval)
                self.renderer.advance()

                if animator.consume_redraw():
                    self.render_now()

            except asyncio.CancelledError:
                logging.info("Clock frame loop stopped")
                raise
            except Exception as e:
                logging.error(f"Error in clock frame loop: {e}")

    def render_now(self) -> Image.Image:
        """Render a frame and push it to the output"""
        frame = self.renderer.render()
        self.latest_frame = frame
        self.frames_rendered += 1

        if self.framebuffer and self.framebuffer.is_available:
            self.framebuffer.display_frame(frame)

        return frame

    async def stop(self) -> None:
        """Cancel both loops and wait for them to finish"""
        for task in (self._tick_task, self._frame_task):
            if task:
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        self._tick_task = None
        self._frame_task = None
        self.is_running = False
        logging.info("Clock display stopped")

    def is_active(self) -> bool:
        return self.is_running

    def get_status(self) -> dict:
        """Get current status information"""
        uptime = time.monotonic() - self.started_at if self.started_at and self.is_running else 0.0
        status = {
            "is_running": self.is_running,
            "ticks": self.ticks,
            "frames_rendered": self.frames_rendered,
            "uptime_seconds": round(uptime, 1),
            "framebuffer": bool(self.framebuffer and self.framebuffer.is_available),
        }
        status.update(self.renderer.controller.get_status())
        return status
