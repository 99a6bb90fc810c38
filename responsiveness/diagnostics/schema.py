"""Export schema version constants."""

from __future__ import annotations

DIAG_EVENT_SCHEMA_VERSION = "responsiveness.diag_event.v1"
FRAME_TIMING_SCHEMA_VERSION = "responsiveness.frame_timing.v1"
LATENCY_SCHEMA_VERSION = "responsiveness.latency.v1"
