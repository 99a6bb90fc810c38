"""Group timing entries into inferred rendered frames."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from responsiveness.api.entry import TimingEntry
from responsiveness.runtime.errors import require_positive

_LOG = logging.getLogger("responsiveness.cluster")

# Source instrumentation rounds durations to this granularity.
DURATION_QUANTUM_MS = 8.0


class FrameClusterer:
    """Sliding-window clustering over each entry's estimated render time.

    Entries presented in the same frame report render times that can differ by
    almost one quantum, because ``duration`` shrinks as ``start_time`` moves
    forward and crosses a rounding boundary. After sorting, every entry of one
    presentation lies within ``window_ms`` of the earliest estimate.

    Known limitation: above ~120Hz the true frame spacing can be shorter than
    the window, so adjacent frames may merge.
    """

    def __init__(self, window_ms: float = DURATION_QUANTUM_MS) -> None:
        self._window_ms = float(require_positive("window_ms", window_ms))

    @property
    def window_ms(self) -> float:
        return self._window_ms

    def cluster(self, entries: Iterable[TimingEntry]) -> list[list[TimingEntry]]:
        """Return frames in ascending render-time order; the input is not mutated."""
        timed: list[tuple[float, TimingEntry]] = []
        for entry in entries:
            render_time = entry.render_time
            if render_time is None:
                _LOG.debug(
                    "cluster_skipped_malformed name=%s missing=%s",
                    entry.name,
                    ",".join(entry.missing_fields),
                )
                continue
            timed.append((render_time, entry))
        timed.sort(key=lambda item: item[0])

        groups: list[list[TimingEntry]] = []
        current: list[TimingEntry] = []
        anchor: float | None = None
        for render_time, entry in timed:
            if anchor is None:
                anchor = render_time
            elif render_time - anchor > self._window_ms:
                groups.append(current)
                current = []
                anchor = render_time
            current.append(entry)
        if current:
            groups.append(current)
        return groups


def estimate_render_time(
    group: Sequence[TimingEntry],
    *,
    quantum_ms: float = DURATION_QUANTUM_MS,
) -> float:
    """Midpoint of the group's render times, snapped to the duration quantum."""
    render_times = [t for t in (entry.render_time for entry in group) if t is not None]
    if not render_times:
        return 0.0
    mid = (min(render_times) + max(render_times)) / 2
    return math.floor((mid + quantum_ms / 2) / quantum_ms) * quantum_ms
