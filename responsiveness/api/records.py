"""Output records produced by the responsiveness pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from responsiveness.api.entry import InteractionType, TimingEntry


@dataclass(frozen=True, slots=True)
class FrameTiming:
    """Latency breakdown for one inferred rendered frame."""

    estimated_render_time: float
    interaction_ids: tuple[int, ...]
    interaction_types: tuple[InteractionType, ...]
    duration: float
    input_delay: float
    total_processing_time: float
    processing_range: float
    presentation_delay: float
    pct_of_range: float
    pct_of_duration: float
    input_delay_pct: float
    presentation_delay_pct: float
    entry_count: int
    first_input_entry: TimingEntry
    first_processed_entry: TimingEntry | None
    last_processed_entry: TimingEntry | None
    diagnostics: tuple[str, ...] = ()

    @property
    def is_hover_only(self) -> bool:
        return all(kind is InteractionType.HOVER for kind in self.interaction_types)

    @property
    def is_consistent(self) -> bool:
        return not self.diagnostics

    def to_dict(self, *, places: int = 3) -> dict[str, object]:
        """Flatten into a row with rounded numbers and joined id/type lists."""
        return {
            "renderTime": round(self.estimated_render_time, places),
            "interactionIds": ",".join(str(ident) for ident in self.interaction_ids),
            "interactionTypes": ",".join(str(kind) for kind in self.interaction_types),
            "duration": round(self.duration, places),
            "firstDelay": round(self.input_delay, places),
            "psTime": round(self.total_processing_time, places),
            "psRange": round(self.processing_range, places),
            "lastPaintDelay": round(self.presentation_delay, places),
            "pctOfRange": round(self.pct_of_range, places),
            "pctOfDuration": round(self.pct_of_duration, places),
            "inputDelayPct": round(self.input_delay_pct, places),
            "presentationDelayPct": round(self.presentation_delay_pct, places),
            "entryCount": self.entry_count,
            "diagnostics": list(self.diagnostics),
        }


@dataclass(frozen=True, slots=True)
class InteractionBreakdown:
    """Phases of one interaction, each in milliseconds."""

    latency: float
    input_delay: float
    processing: float
    presentation: float


@dataclass(frozen=True, slots=True)
class LatencyNotification:
    """Change notification for the running worst-interaction metric."""

    value: float
    representative_entry: TimingEntry
    estimated_interaction_count: float

    def breakdown(self) -> InteractionBreakdown | None:
        """Split the representative entry into delay/processing/presentation.

        Returns ``None`` when the entry lacks processing timestamps.
        """
        entry = self.representative_entry
        render_time = entry.render_time
        start = entry.start_time
        processing_start = entry.processing_start
        processing_end = entry.processing_end
        if render_time is None or start is None or processing_start is None or processing_end is None:
            return None
        return InteractionBreakdown(
            latency=self.value,
            input_delay=processing_start - start,
            processing=processing_end - processing_start,
            presentation=render_time - processing_end,
        )


@dataclass(frozen=True, slots=True)
class InteractionNotification:
    """Per-interaction notification, emitted for every tracked entry."""

    value: float
    entry: TimingEntry
    estimated_interaction_count: float
