"""Line-oriented JSON export of pipeline output records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TextIO

from responsiveness.api.entry import TimingEntry
from responsiveness.api.records import FrameTiming, LatencyNotification
from responsiveness.diagnostics.event import DiagnosticEvent
from responsiveness.diagnostics.json_codec import dumps_text
from responsiveness.diagnostics.schema import (
    DIAG_EVENT_SCHEMA_VERSION,
    FRAME_TIMING_SCHEMA_VERSION,
    LATENCY_SCHEMA_VERSION,
)


@dataclass(frozen=True, slots=True)
class ExportStats:
    frames_written: int
    latency_written: int
    diagnostics_written: int


def entry_to_dict(entry: TimingEntry) -> dict[str, Any]:
    return {
        "name": entry.name,
        "startTime": entry.start_time,
        "duration": entry.duration,
        "processingStart": entry.processing_start,
        "processingEnd": entry.processing_end,
        "interactionId": entry.interaction_id,
    }


def frame_timing_to_dict(frame: FrameTiming, *, places: int = 3) -> dict[str, Any]:
    payload: dict[str, Any] = {"schema_version": FRAME_TIMING_SCHEMA_VERSION}
    payload.update(frame.to_dict(places=places))
    return payload


def latency_to_dict(notification: LatencyNotification) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_version": LATENCY_SCHEMA_VERSION,
        "value": notification.value,
        "interactionCount": notification.estimated_interaction_count,
        "entry": entry_to_dict(notification.representative_entry),
    }
    breakdown = notification.breakdown()
    if breakdown is not None:
        payload["breakdown"] = {
            "latency": breakdown.latency,
            "delay": breakdown.input_delay,
            "processing": breakdown.processing,
            "presentation": breakdown.presentation,
        }
    return payload


class JsonlRecordWriter:
    """Sink writing one JSON document per line to a text stream.

    Plugs into reporter subscriptions: ``write_frames`` for frame listeners,
    ``write_latency`` for latency listeners, ``write_diagnostic`` for a hub.
    """

    def __init__(self, stream: TextIO, *, places: int = 3) -> None:
        self._stream = stream
        self._places = int(places)
        self._frames = 0
        self._latency = 0
        self._diagnostics = 0

    def write_frames(self, frames: list[FrameTiming]) -> None:
        for frame in frames:
            self._write_line(frame_timing_to_dict(frame, places=self._places))
            self._frames += 1

    def write_latency(self, notification: LatencyNotification) -> None:
        self._write_line(latency_to_dict(notification))
        self._latency += 1

    def write_diagnostic(self, event: DiagnosticEvent) -> None:
        payload: dict[str, Any] = {"schema_version": DIAG_EVENT_SCHEMA_VERSION}
        payload.update(event.to_dict())
        self._write_line(payload)
        self._diagnostics += 1

    def stats(self) -> ExportStats:
        return ExportStats(
            frames_written=self._frames,
            latency_written=self._latency,
            diagnostics_written=self._diagnostics,
        )

    def _write_line(self, payload: dict[str, Any]) -> None:
        self._stream.write(dumps_text(payload))
        self._stream.write("\n")
