from __future__ import annotations

import random

import pytest

from responsiveness.api.entry import InteractionType, TimingEntry
from responsiveness.core.processing import ProcessingTimeAggregator, total_processing_time
from tests.responsiveness.conftest import make_entry


def test_total_processing_time_merges_partial_overlap() -> None:
    entries = [make_entry(ps=0.0, pe=10.0), make_entry(ps=5.0, pe=15.0)]

    total, inverted = total_processing_time(entries)

    assert total == 15.0
    assert inverted == 0


def test_total_processing_time_skips_fully_contained_interval() -> None:
    entries = [make_entry(ps=0.0, pe=10.0), make_entry(ps=2.0, pe=5.0), make_entry(ps=12.0, pe=14.0)]

    assert total_processing_time(entries) == (12.0, 0)


def test_total_processing_time_sorts_reordered_processing() -> None:
    entries = [make_entry(ps=10.0, pe=12.0), make_entry(ps=0.0, pe=4.0)]

    assert total_processing_time(entries) == (6.0, 0)


def test_total_processing_time_counts_inverted_intervals_as_zero() -> None:
    entries = [make_entry(ps=0.0, pe=4.0), make_entry(ps=9.0, pe=7.0)]

    assert total_processing_time(entries) == (4.0, 1)


def test_aggregate_decomposes_frame_latency() -> None:
    down = make_entry("pointerdown", start=100.0, duration=24.0, ps=102.0, pe=110.0, interaction_id=7)
    up = make_entry("pointerup", start=104.0, duration=16.0, ps=111.0, pe=118.0, interaction_id=7)
    click = make_entry("click", start=104.0, duration=16.0, ps=118.0, pe=119.0, interaction_id=7)

    frame = ProcessingTimeAggregator().aggregate([up, click, down])

    assert frame is not None
    assert frame.estimated_render_time == 120.0
    assert frame.first_input_entry is down
    assert frame.first_processed_entry is down
    assert frame.last_processed_entry is click
    assert frame.interaction_ids == (7,)
    assert frame.interaction_types == (InteractionType.TAP,)
    assert frame.duration == 24.0
    assert frame.input_delay == 2.0
    assert frame.total_processing_time == 16.0
    assert frame.processing_range == 17.0
    assert frame.presentation_delay == 1.0
    assert frame.pct_of_range == pytest.approx(16.0 / 17.0)
    assert frame.pct_of_duration == pytest.approx(16.0 / 24.0)
    assert frame.input_delay_pct == pytest.approx(2.0 / 24.0)
    assert frame.presentation_delay_pct == pytest.approx(1.0 / 24.0)
    assert frame.entry_count == 3
    assert frame.diagnostics == ()


def test_aggregate_first_input_tie_keeps_first_encountered() -> None:
    first = make_entry("keydown", start=50.0, duration=16.0, interaction_id=14)
    second = make_entry("keypress", start=50.0, duration=16.0, interaction_id=14)

    frame = ProcessingTimeAggregator().aggregate([first, second])

    assert frame is not None
    assert frame.first_input_entry is first


def test_aggregate_last_processed_tie_keeps_later_entry() -> None:
    first = make_entry("keydown", start=50.0, duration=16.0, ps=51.0, pe=60.0, interaction_id=14)
    second = make_entry("keyup", start=52.0, duration=16.0, ps=55.0, pe=60.0, interaction_id=14)

    frame = ProcessingTimeAggregator().aggregate([first, second])

    assert frame is not None
    assert frame.last_processed_entry is second
    assert frame.first_processed_entry is first


def test_aggregate_empty_group_returns_none() -> None:
    assert ProcessingTimeAggregator().aggregate([]) is None


def test_aggregate_collects_distinct_ids_and_types_in_first_seen_order() -> None:
    entries = [
        make_entry("keydown", start=0.0, interaction_id=21),
        make_entry("click", start=1.0, interaction_id=0),
        make_entry("keyup", start=2.0, interaction_id=21),
        make_entry("pointerup", start=3.0, interaction_id=28),
    ]

    frame = ProcessingTimeAggregator().aggregate(entries)

    assert frame is not None
    assert frame.interaction_ids == (21, 28)
    assert frame.interaction_types == (InteractionType.KEY, InteractionType.TAP)
    assert not frame.is_hover_only


def test_aggregate_flags_inverted_interval_without_raising(caplog) -> None:
    entry = make_entry("click", start=0.0, duration=16.0, ps=9.0, pe=4.0)

    with caplog.at_level("WARNING", logger="responsiveness.processing"):
        frame = ProcessingTimeAggregator().aggregate([entry])

    assert frame is not None
    assert frame.total_processing_time == 0.0
    assert "inverted_processing_intervals=1" in frame.diagnostics
    assert any(item.startswith("processing_exceeds_range") for item in frame.diagnostics)
    assert not frame.is_consistent
    assert "frame_inconsistent" in caplog.text


def test_aggregate_excludes_entries_without_processing_fields() -> None:
    timed_only = TimingEntry(name="mouseover", start_time=0.0, duration=16.0)

    frame = ProcessingTimeAggregator().aggregate([timed_only])

    assert frame is not None
    assert frame.first_processed_entry is None
    assert frame.last_processed_entry is None
    assert frame.total_processing_time == 0.0
    assert frame.pct_of_range == 0.0
    assert frame.is_hover_only
    assert frame.diagnostics == ("skipped_unprocessed_entries=1",)


def test_aggregate_zero_duration_yields_zero_ratios() -> None:
    entry = make_entry("click", start=10.0, duration=0.0, ps=10.0, pe=10.0)

    frame = ProcessingTimeAggregator().aggregate([entry])

    assert frame is not None
    assert frame.pct_of_duration == 0.0
    assert frame.input_delay_pct == 0.0


def test_total_processing_time_never_exceeds_processing_range() -> None:
    rng = random.Random(1295718)
    aggregator = ProcessingTimeAggregator()
    for _ in range(200):
        group = []
        for _ in range(rng.randint(1, 8)):
            start = rng.uniform(0.0, 50.0)
            ps = start + rng.uniform(0.0, 20.0)
            pe = ps + rng.uniform(0.0, 30.0)
            group.append(make_entry("keydown", start=start, duration=96.0, ps=ps, pe=pe))
        frame = aggregator.aggregate(group)
        assert frame is not None
        assert frame.first_processed_entry is not None and frame.last_processed_entry is not None
        span = frame.last_processed_entry.processing_end - frame.first_processed_entry.processing_start
        assert frame.total_processing_time <= span + 1e-9
