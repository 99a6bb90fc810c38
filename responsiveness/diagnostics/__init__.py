"""Diagnostics events, hub and record export."""

from responsiveness.diagnostics.event import DiagnosticEvent
from responsiveness.diagnostics.export import (
    ExportStats,
    JsonlRecordWriter,
    entry_to_dict,
    frame_timing_to_dict,
    latency_to_dict,
)
from responsiveness.diagnostics.hub import DiagnosticHub
from responsiveness.diagnostics.schema import (
    DIAG_EVENT_SCHEMA_VERSION,
    FRAME_TIMING_SCHEMA_VERSION,
    LATENCY_SCHEMA_VERSION,
)

__all__ = [
    "DIAG_EVENT_SCHEMA_VERSION",
    "DiagnosticEvent",
    "DiagnosticHub",
    "ExportStats",
    "FRAME_TIMING_SCHEMA_VERSION",
    "JsonlRecordWriter",
    "LATENCY_SCHEMA_VERSION",
    "entry_to_dict",
    "frame_timing_to_dict",
    "latency_to_dict",
]
