from __future__ import annotations

import io

import orjson

from responsiveness.diagnostics import (
    FRAME_TIMING_SCHEMA_VERSION,
    LATENCY_SCHEMA_VERSION,
    DiagnosticHub,
    JsonlRecordWriter,
)
from responsiveness.runtime.reporter import ResponsivenessReporter
from tests.responsiveness.conftest import make_entry


def test_writer_exports_reporter_output_as_jsonl() -> None:
    stream = io.StringIO()
    writer = JsonlRecordWriter(stream)
    hub = DiagnosticHub()
    hub.subscribe(writer.write_diagnostic)
    reporter = ResponsivenessReporter(hub=hub)
    reporter.subscribe_frames(writer.write_frames)
    reporter.subscribe_latency(writer.write_latency)

    reporter.on_entries(
        [make_entry("keydown", start=100.0, duration=48.0, ps=110.0, pe=130.0, interaction_id=7)]
    )

    lines = [orjson.loads(line) for line in stream.getvalue().splitlines()]
    frames = [line for line in lines if line["schema_version"] == FRAME_TIMING_SCHEMA_VERSION]
    latency = [line for line in lines if line["schema_version"] == LATENCY_SCHEMA_VERSION]

    assert frames[0]["interactionIds"] == "7"
    assert frames[0]["psTime"] == 20.0
    assert latency[0]["value"] == 48.0
    assert latency[0]["entry"]["interactionId"] == 7
    assert latency[0]["breakdown"] == {
        "latency": 48.0,
        "delay": 10.0,
        "processing": 20.0,
        "presentation": 18.0,
    }
    stats = writer.stats()
    assert stats.frames_written == 1
    assert stats.latency_written == 1
    assert stats.diagnostics_written == 1
