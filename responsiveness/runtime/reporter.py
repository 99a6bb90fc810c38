"""Session orchestration: entry batches in, frame records and latency out."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import TypeVar

from responsiveness.api.entry import TimingEntry, coerce_entry
from responsiveness.api.feed import EntryBatch, EntryFeed, Subscription
from responsiveness.api.records import FrameTiming, InteractionNotification, LatencyNotification
from responsiveness.core.clustering import DURATION_QUANTUM_MS, FrameClusterer
from responsiveness.core.interaction_count import InteractionCountEstimator
from responsiveness.core.processing import ProcessingTimeAggregator
from responsiveness.core.top_k import TopKLatencyTracker
from responsiveness.diagnostics.hub import DiagnosticHub
from responsiveness.runtime.config import ResponsivenessConfig
from responsiveness.runtime.errors import (
    RECOVERABLE_LISTENER_ERRORS,
    ConfigurationError,
    MalformedEntryError,
    log_recoverable,
)

T = TypeVar("T")

_LOG = logging.getLogger("responsiveness.reporter")

FrameListener = Callable[[list[FrameTiming]], None]
LatencyListener = Callable[[LatencyNotification], None]
InteractionListener = Callable[[InteractionNotification], None]


class ReporterState(StrEnum):
    IDLE = "idle"
    OBSERVING = "observing"


class ResponsivenessReporter:
    """Per-session owner of the accumulated entry history and latency trackers.

    Every batch is handled synchronously to completion: the whole history is
    re-clustered into frames, and new interaction entries update the running
    worst-interaction metric. Stopping unsubscribes from the feed but keeps
    the accumulated history.
    """

    def __init__(
        self,
        config: ResponsivenessConfig | None = None,
        *,
        hub: DiagnosticHub | None = None,
        clusterer: FrameClusterer | None = None,
        aggregator: ProcessingTimeAggregator | None = None,
        tracker: TopKLatencyTracker | None = None,
        estimator: InteractionCountEstimator | None = None,
    ) -> None:
        cfg = config or ResponsivenessConfig()
        if isinstance(cfg.every_n, bool) or not isinstance(cfg.every_n, int) or cfg.every_n <= 0:
            raise ConfigurationError(f"every_n must be a positive int, got {cfg.every_n!r}")
        self._every_n = cfg.every_n
        self._hub = hub
        self._clusterer = clusterer or FrameClusterer(cfg.cluster_window_ms)
        self._aggregator = aggregator or ProcessingTimeAggregator(quantum_ms=DURATION_QUANTUM_MS)
        self._tracker = tracker or TopKLatencyTracker(cfg.top_k)
        self._estimator = estimator or InteractionCountEstimator(
            cfg.count_strategy,
            step=cfg.interaction_id_step,
        )
        self._state = ReporterState.IDLE
        self._subscription: Subscription | None = None
        self._feed: EntryFeed | None = None
        self._history: list[TimingEntry] = []
        self._interaction_ids: dict[int, None] = {}
        self._last_latency: LatencyNotification | None = None
        self._next_listener_id = 1
        self._frame_listeners: dict[int, FrameListener] = {}
        self._latency_listeners: dict[int, LatencyListener] = {}
        self._interaction_listeners: dict[int, InteractionListener] = {}

    @property
    def state(self) -> ReporterState:
        return self._state

    @property
    def history(self) -> tuple[TimingEntry, ...]:
        return tuple(self._history)

    @property
    def interaction_ids(self) -> tuple[int, ...]:
        return tuple(self._interaction_ids)

    @property
    def hub(self) -> DiagnosticHub | None:
        return self._hub

    @property
    def tracker(self) -> TopKLatencyTracker:
        return self._tracker

    @property
    def estimator(self) -> InteractionCountEstimator:
        return self._estimator

    def start(self, feed: EntryFeed) -> None:
        if self._state is ReporterState.OBSERVING:
            raise RuntimeError("reporter is already observing a feed")
        self._subscription = feed.subscribe(self.on_entries)
        self._feed = feed
        self._state = ReporterState.OBSERVING
        _LOG.debug("reporter_started history=%d", len(self._history))

    def stop(self) -> None:
        if self._state is ReporterState.IDLE:
            return
        if self._feed is not None and self._subscription is not None:
            self._feed.unsubscribe(self._subscription)
        self._feed = None
        self._subscription = None
        self._state = ReporterState.IDLE
        _LOG.debug("reporter_stopped history=%d", len(self._history))

    def subscribe_frames(self, callback: FrameListener) -> int:
        return self._register(self._frame_listeners, callback)

    def subscribe_latency(self, callback: LatencyListener) -> int:
        return self._register(self._latency_listeners, callback)

    def subscribe_interactions(self, callback: InteractionListener) -> int:
        return self._register(self._interaction_listeners, callback)

    def unsubscribe(self, token: int) -> None:
        self._frame_listeners.pop(token, None)
        self._latency_listeners.pop(token, None)
        self._interaction_listeners.pop(token, None)

    def update_event_counts(self, counts: Mapping[str, int]) -> None:
        self._estimator.update_event_counts(counts)

    def current_latency(self) -> LatencyNotification | None:
        """Select the running worst interaction from the top-K set.

        One slot is skipped per ``every_n`` interactions so long sessions
        report a high percentile instead of the single worst outlier.
        """
        count = self._estimator.estimate()
        entry = self._tracker.select(math.floor(count / self._every_n))
        if entry is None or entry.duration is None:
            return None
        return LatencyNotification(
            value=entry.duration,
            representative_entry=entry,
            estimated_interaction_count=count,
        )

    def on_entries(self, batch: EntryBatch) -> list[FrameTiming]:
        """Process one delivered batch and return the non-hover frame records."""
        if not batch:
            return []
        new_entries = self._accept(batch)
        if not new_entries:
            return []
        # Untimed entries still carry a usable duration for latency tracking.
        timed = [entry for entry in new_entries if entry.has_render_time]
        self._history.extend(timed)

        groups = self._clusterer.cluster(self._history) if timed else []
        frames: list[FrameTiming] = []
        for group in groups:
            frame = self._aggregator.aggregate(group)
            if frame is None:
                continue
            if frame.diagnostics:
                self._diagnose(
                    "frame",
                    "frame.inconsistent",
                    value=frame.estimated_render_time,
                    metadata={"issues": list(frame.diagnostics)},
                )
            # Hover-only frames carry no responsiveness signal.
            if frame.is_hover_only:
                continue
            frames.append(frame)

        for entry in new_entries:
            if entry.interaction_id:
                self._interaction_ids.setdefault(entry.interaction_id, None)
        self._track_interactions(new_entries)

        _LOG.debug(
            "batch_processed interactions=%d frames=%d entries=%d",
            len(self._interaction_ids),
            len(groups),
            len(self._history),
        )
        if timed:
            self._dispatch(self._frame_listeners, frames)
        self._publish_latency()
        return frames

    def _accept(self, batch: EntryBatch) -> list[TimingEntry]:
        accepted: list[TimingEntry] = []
        for raw in batch:
            try:
                entry = coerce_entry(raw)
            except MalformedEntryError as exc:
                _LOG.warning("entry_rejected reason=%s", exc)
                self._diagnose("entry", "entry.rejected", level="warning", value=str(exc))
                continue
            missing = entry.missing_fields
            if missing:
                _LOG.warning("entry_malformed name=%s missing=%s", entry.name, ",".join(missing))
                self._diagnose(
                    "entry",
                    "entry.malformed",
                    level="warning",
                    value=entry.name,
                    metadata={"missing": list(missing), "interaction_id": entry.interaction_id},
                )
            accepted.append(entry)
        return accepted

    def _track_interactions(self, entries: list[TimingEntry]) -> None:
        for entry in entries:
            if not entry.interaction_id or entry.duration is None:
                continue
            self._estimator.observe(entry.interaction_id)
            self._tracker.offer(entry)
            if self._interaction_listeners:
                self._dispatch(
                    self._interaction_listeners,
                    InteractionNotification(
                        value=entry.duration,
                        entry=entry,
                        estimated_interaction_count=self._estimator.estimate(),
                    ),
                )

    def _publish_latency(self) -> None:
        current = self.current_latency()
        if current is None:
            return
        previous = self._last_latency
        if previous is not None and previous.value == current.value:
            return
        self._last_latency = current
        _LOG.info(
            "latency_changed value=%.1f interactions=%.1f name=%s",
            current.value,
            current.estimated_interaction_count,
            current.representative_entry.name,
        )
        self._diagnose(
            "latency",
            "latency.changed",
            value=current.value,
            metadata={"interaction_count": current.estimated_interaction_count},
        )
        self._dispatch(self._latency_listeners, current)

    def _register(self, listeners: dict[int, T], callback: T) -> int:
        token = self._next_listener_id
        self._next_listener_id += 1
        listeners[token] = callback
        return token

    def _dispatch(self, listeners: dict[int, Callable[[T], None]], payload: T) -> None:
        for callback in tuple(listeners.values()):
            try:
                callback(payload)
            except RECOVERABLE_LISTENER_ERRORS:
                log_recoverable(_LOG, "reporter_listener_failed")

    def _diagnose(
        self,
        category: str,
        name: str,
        *,
        level: str = "info",
        value: float | str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> None:
        if self._hub is None:
            return
        self._hub.emit_fast(
            category=category,
            name=name,
            level=level,
            value=value,
            metadata=metadata,
        )
