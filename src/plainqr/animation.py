"""Timing and colour helpers for the animated action buttons.

Nothing here imports Qt; the widgets feed these values into ``QPainter`` and
``QConicalGradient`` on every repaint.
"""
from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence, Tuple

PRESSED_SCALE = 0.96


def _rgb(color: str) -> Tuple[int, int, int]:
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def lerp_color(start: str, end: str, t: float) -> str:
    """Blend two ``#RRGGBB`` colours; ``t`` is clamped to ``[0, 1]``."""

    t = min(1.0, max(0.0, t))
    a = _rgb(start)
    b = _rgb(end)
    mixed = (round(x + (y - x) * t) for x, y in zip(a, b))
    return "#{:02X}{:02X}{:02X}".format(*mixed)


def glow_stops(progress: float, colors: Sequence[str], steps: int = 60) -> List[Tuple[float, str]]:
    """Return gradient stops for the rotating glow border.

    ``steps`` evenly spaced samples are taken along the ``colors`` ramp and
    each position is shifted by ``progress`` (wrapping at 1) so that the ramp
    appears to rotate as the animation advances.
    """

    if not colors:
        raise ValueError("At least one colour is required")
    if steps < 1:
        raise ValueError("steps must be positive")

    segments = len(colors) - 1
    stops = []
    for i in range(steps):
        t = i / steps
        scaled = t * segments
        index = int(scaled)
        blend = scaled % 1.0
        nxt = colors[index + 1] if index + 1 < len(colors) else colors[-1]
        stops.append(((t + progress) % 1.0, lerp_color(colors[index], nxt, blend)))
    return sorted(stops, key=lambda stop: stop[0])


def press_scale(pressed: bool) -> float:
    return PRESSED_SCALE if pressed else 1.0


class Cooldown:
    """Reject repeated presses that arrive within ``interval_ms``."""

    def __init__(self, interval_ms: int, clock: Callable[[], float] = time.monotonic):
        self._interval = interval_ms / 1000.0
        self._clock = clock
        self._last: Optional[float] = None

    @property
    def ready(self) -> bool:
        return self._last is None or self._clock() - self._last >= self._interval

    def try_acquire(self) -> bool:
        if not self.ready:
            return False
        self._last = self._clock()
        return True


__all__ = ["Cooldown", "PRESSED_SCALE", "glow_stops", "lerp_color", "press_scale"]
