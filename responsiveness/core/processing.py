"""Per-frame latency decomposition from clustered timing entries."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from responsiveness.api.entry import TimingEntry
from responsiveness.api.records import FrameTiming
from responsiveness.core.clustering import DURATION_QUANTUM_MS, estimate_render_time
from responsiveness.runtime.errors import require_positive

_LOG = logging.getLogger("responsiveness.processing")


class ProcessingTimeAggregator:
    """Compute delay, processing and presentation components for one frame."""

    def __init__(self, *, quantum_ms: float = DURATION_QUANTUM_MS) -> None:
        self._quantum_ms = float(require_positive("quantum_ms", quantum_ms))

    def aggregate(self, group: Sequence[TimingEntry]) -> FrameTiming | None:
        """Return the frame record, or ``None`` for an empty group.

        Input-quality problems never raise; they are logged and attached to
        the record's ``diagnostics``.
        """
        timed = [entry for entry in group if entry.has_render_time]
        if not timed:
            return None
        diagnostics: list[str] = []
        if len(timed) < len(group):
            diagnostics.append(f"skipped_untimed_entries={len(group) - len(timed)}")

        # Many entries share start_time; the first one wins, but it need not be
        # the first one processed.
        first_input = min(timed, key=_start_time)
        processed = [entry for entry in timed if entry.has_processing]
        if len(processed) < len(timed):
            diagnostics.append(f"skipped_unprocessed_entries={len(timed) - len(processed)}")

        render_time = estimate_render_time(timed, quantum_ms=self._quantum_ms)
        duration = first_input.duration or 0.0
        first_processed: TimingEntry | None = None
        last_processed: TimingEntry | None = None
        input_delay = 0.0
        presentation_delay = 0.0
        processing_range = 0.0
        ps_time = 0.0
        if processed:
            first_processed = min(processed, key=_processing_start)
            # Ties on processing_end go to the later entry.
            last_processed = max(reversed(processed), key=_processing_end)
            input_delay = _processing_start(first_processed) - _start_time(first_input)
            presentation_delay = render_time - _processing_end(last_processed)
            processing_range = _processing_end(last_processed) - _processing_start(first_processed)
            ps_time, inverted = total_processing_time(processed)
            if inverted:
                diagnostics.append(f"inverted_processing_intervals={inverted}")
            if processing_range < 0 or ps_time > processing_range:
                diagnostics.append(
                    f"processing_exceeds_range ps_time={ps_time:.3f} ps_range={processing_range:.3f}"
                )

        if diagnostics:
            _LOG.warning(
                "frame_inconsistent render_time=%.1f entries=%d issues=%s",
                render_time,
                len(group),
                ";".join(diagnostics),
            )

        return FrameTiming(
            estimated_render_time=render_time,
            interaction_ids=tuple(
                dict.fromkeys(entry.interaction_id for entry in timed if entry.interaction_id)
            ),
            interaction_types=tuple(
                dict.fromkeys(entry.interaction_type for entry in timed)
            ),
            duration=duration,
            input_delay=input_delay,
            total_processing_time=ps_time,
            processing_range=processing_range,
            presentation_delay=presentation_delay,
            pct_of_range=_ratio(ps_time, processing_range),
            pct_of_duration=_ratio(ps_time, duration),
            input_delay_pct=_ratio(input_delay, duration),
            presentation_delay_pct=_ratio(presentation_delay, duration),
            entry_count=len(timed),
            first_input_entry=first_input,
            first_processed_entry=first_processed,
            last_processed_entry=last_processed,
            diagnostics=tuple(diagnostics),
        )


def total_processing_time(entries: Sequence[TimingEntry]) -> tuple[float, int]:
    """Sum processing intervals without counting overlapped work twice.

    Processing can be reordered relative to input timestamps and handler
    windows can overlap, so a plain sum of ``end - start`` over-counts.
    Returns ``(total, inverted_count)``; inverted intervals contribute 0.
    """
    intervals = sorted(
        (_processing_start(entry), _processing_end(entry))
        for entry in entries
        if entry.has_processing
    )
    total = 0.0
    inverted = 0
    previous_end: float | None = None
    for start, end in intervals:
        if end < start:
            inverted += 1
            continue
        if previous_end is not None and start < previous_end:
            if end <= previous_end:
                continue
            start = previous_end
        total += end - start
        previous_end = end
    return total, inverted


def _ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0:
        return 0.0
    return numerator / denominator


def _start_time(entry: TimingEntry) -> float:
    return entry.start_time if entry.start_time is not None else 0.0


def _processing_start(entry: TimingEntry) -> float:
    return entry.processing_start if entry.processing_start is not None else 0.0


def _processing_end(entry: TimingEntry) -> float:
    return entry.processing_end if entry.processing_end is not None else 0.0
