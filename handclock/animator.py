"""
HandAnimator - Eased shortest-path rotation of clock hands

All running hand animations live in one table and are advanced together from
the frame loop, using elapsed wall time rather than frame counts.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .cell import ANGLE_EPSILON, ClockCell, Hand

DEFAULT_DURATION_MS = 200


def shortest_delta(old: float, new: float) -> float:
    """Signed rotation from old to new, never more than half a turn.

    Result lies in (-180, 180]; an exact half turn goes clockwise.
    """
    delta = ((new - old + 540) % 360) - 180
    if delta == -180:
        delta = 180.0
    return delta


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


@dataclass
class AngleAnimation:
    """One hand moving from from_angle to to_angle (to_angle may lie outside 0-360)"""
    from_angle: float
    to_angle: float
    start_time: float
    duration_ms: int

    @property
    def delta(self) -> float:
        return self.to_angle - self.from_angle

    @property
    def final_angle(self) -> float:
        return self.to_angle % 360

    def progress(self, now: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return (now - self.start_time) * 1000.0 / self.duration_ms

    def is_complete(self, now: float) -> bool:
        return self.progress(now) >= 1.0

    def angle_at(self, now: float) -> float:
        """Interpolated angle at a given time, exact final angle once complete"""
        t = self.progress(now)
        if t >= 1.0:
            return self.final_angle
        return self.from_angle + self.delta * ease_out_cubic(max(t, 0.0))


class HandAnimator:
    """Runs hand transitions for any number of cells"""

    def __init__(self, duration_ms: int = DEFAULT_DURATION_MS,
                 time_source: Callable[[], float] = time.monotonic,
                 on_redraw: Optional[Callable[[], None]] = None):
        self.duration_ms = duration_ms
        self.time_source = time_source
        self.on_redraw = on_redraw

        self._animations: Dict[Tuple[int, Hand], Tuple[ClockCell, AngleAnimation]] = {}
        self.transitions_started = 0
        self.redraw_requested = False

    def begin_transition(self, cell: ClockCell, hand: Hand, new_target: float) -> bool:
        """Start moving a hand towards new_target. Returns True if an animation started.

        The transition starts from the previous target, not from the angle a
        still-running animation has reached.
        """
        old_target = cell.target(hand)
        if abs(old_target - new_target) <= ANGLE_EPSILON:
            return False

        cell.set_target(hand, new_target)
        delta = shortest_delta(old_target, new_target)
        animation = AngleAnimation(
            from_angle=old_target,
            to_angle=old_target + delta,
            start_time=self.time_source(),
            duration_ms=self.duration_ms,
        )

        # Replaces whatever was running for this hand
        self._animations[(id(cell), hand)] = (cell, animation)
        self.transitions_started += 1

        cell.set_animated(hand, animation.from_angle)
        self._request_redraw()
        return True

    def advance(self, now: Optional[float] = None) -> bool:
        """Step every running animation to the given time. Returns True if any angle changed."""
        if not self._animations:
            return False

        if now is None:
            now = self.time_source()

        finished = []
        for key, (cell, animation) in self._animations.items():
            cell.set_animated(key[1], animation.angle_at(now))
            if animation.is_complete(now):
                finished.append(key)

        for key in finished:
            del self._animations[key]

        if finished:
            logging.debug(f"Finished {len(finished)} hand animations, {len(self._animations)} still running")

        self._request_redraw()
        return True

    def _request_redraw(self) -> None:
        self.redraw_requested = True
        if self.on_redraw:
            self.on_redraw()

    def consume_redraw(self) -> bool:
        """Return and clear the pending redraw flag"""
        requested = self.redraw_requested
        self.redraw_requested = False
        return requested

    @property
    def active_count(self) -> int:
        return len(self._animations)

    def is_animating(self, cell: Optional[ClockCell] = None, hand: Optional[Hand] = None) -> bool:
        if cell is None:
            return bool(self._animations)
        hands = [hand] if hand else list(Hand)
        return any((id(cell), h) in self._animations for h in hands)
