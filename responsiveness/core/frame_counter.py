"""Trailing time-window frame rate counter."""

from __future__ import annotations

import sys
from collections import deque

from responsiveness.runtime.errors import require_positive

# Comparison slack for float timestamps at the window edge.
_EPSILON = sys.float_info.epsilon


class TimeWindowedFrameCounter:
    """Count occurrences within the trailing ``window_ms`` of the latest timestamp."""

    def __init__(self, window_ms: float = 1000.0, *, expected_fps: float = 60.0) -> None:
        self._window_ms = float(require_positive("window_ms", window_ms))
        self._expected_fps = float(require_positive("expected_fps", expected_fps))
        self._timestamps: deque[float] = deque()

    @property
    def window_ms(self) -> float:
        return self._window_ms

    @property
    def count(self) -> int:
        return len(self._timestamps)

    @property
    def fps(self) -> float:
        return len(self._timestamps) / self._window_ms * 1000.0

    @property
    def percent_dropped(self) -> float:
        """Share of expected frames missing from the window; negative if over-delivering."""
        return 1.0 - (self.fps / self._expected_fps)

    def report(self, timestamp: float) -> int:
        """Record one frame at ``timestamp`` and return the frames left in the window."""
        self._timestamps.append(float(timestamp))
        return self.refresh(timestamp)

    def refresh(self, timestamp: float) -> int:
        """Evict frames older than the window ending at ``timestamp``; return the count."""
        ts = float(timestamp)
        self._timestamps = deque(
            t for t in self._timestamps if ts - t - self._window_ms < _EPSILON
        )
        return len(self._timestamps)


def fps_from_frame_interval(interval_ms: float) -> float:
    """Estimate the device refresh rate from one frame-to-frame interval."""
    interval = float(interval_ms)
    if interval <= 0.0:
        return 0.0
    return 1000.0 / interval
