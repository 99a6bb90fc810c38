"""Interaction latency and per-frame responsiveness measurement."""

from typing import TYPE_CHECKING

from responsiveness.api import (
    FrameTiming,
    InteractionNotification,
    InteractionType,
    LatencyNotification,
    TimingEntry,
)
from responsiveness.core import (
    FrameClusterer,
    InteractionCountEstimator,
    ProcessingTimeAggregator,
    TimeWindowedFrameCounter,
    TopKLatencyTracker,
)
from responsiveness.runtime.config import ResponsivenessConfig, load_config
from responsiveness.runtime.errors import ConfigurationError, MalformedEntryError
from responsiveness.runtime.reporter import ReporterState, ResponsivenessReporter

if TYPE_CHECKING:
    from responsiveness.api.feed import EntryFeed


def create_reporter(
    *,
    config: ResponsivenessConfig | None = None,
    feed: "EntryFeed | None" = None,
) -> ResponsivenessReporter:
    """Build a reporter from env configuration, optionally already observing ``feed``."""
    from responsiveness.diagnostics.hub import DiagnosticHub
    from responsiveness.runtime.logging import setup_logging

    cfg = config or load_config()
    setup_logging(cfg)
    hub = DiagnosticHub(capacity=cfg.diagnostics_buffer_cap, enabled=cfg.diagnostics_enabled)
    reporter = ResponsivenessReporter(cfg, hub=hub)
    if feed is not None:
        reporter.start(feed)
    return reporter


def create_frame_counter(*, config: ResponsivenessConfig | None = None) -> TimeWindowedFrameCounter:
    """Build a frame-rate counter from env configuration."""
    cfg = config or load_config()
    return TimeWindowedFrameCounter(cfg.fps_window_ms, expected_fps=cfg.expected_fps)


__all__ = [
    "ConfigurationError",
    "FrameClusterer",
    "FrameTiming",
    "InteractionCountEstimator",
    "InteractionNotification",
    "InteractionType",
    "LatencyNotification",
    "MalformedEntryError",
    "ProcessingTimeAggregator",
    "ReporterState",
    "ResponsivenessConfig",
    "ResponsivenessReporter",
    "TimeWindowedFrameCounter",
    "TimingEntry",
    "TopKLatencyTracker",
    "create_frame_counter",
    "create_reporter",
    "load_config",
]
