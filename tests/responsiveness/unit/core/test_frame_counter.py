from __future__ import annotations

import pytest

from responsiveness.core.frame_counter import TimeWindowedFrameCounter, fps_from_frame_interval
from responsiveness.runtime.errors import ConfigurationError


def test_report_counts_frames_within_trailing_window() -> None:
    counter = TimeWindowedFrameCounter(1000.0)

    assert counter.report(0.0) == 1
    assert counter.report(500.0) == 2
    # 0.0 sits exactly on the window edge and is kept
    assert counter.report(1000.0) == 3
    assert counter.report(1001.0) == 3
    assert counter.count == 3


def test_refresh_decays_without_new_frames() -> None:
    counter = TimeWindowedFrameCounter(500.0, expected_fps=60.0)
    for ts in (0.0, 16.0, 33.0):
        counter.report(ts)

    assert counter.refresh(400.0) == 3
    assert counter.fps == pytest.approx(6.0)
    assert counter.refresh(5000.0) == 0
    assert counter.count == 0
    assert counter.percent_dropped == 1.0


def test_report_returns_count_not_rate_for_short_window() -> None:
    counter = TimeWindowedFrameCounter(500.0)

    assert counter.report(0.0) == 1
    assert counter.report(10.0) == 2
    assert counter.report(20.0) == 3
    assert counter.fps == pytest.approx(6.0)
    assert counter.report(520.0) == 2


def test_eviction_is_not_undone_by_older_refresh() -> None:
    counter = TimeWindowedFrameCounter(100.0)
    counter.report(0.0)
    counter.refresh(500.0)
    assert counter.refresh(50.0) == 0


def test_percent_dropped_against_expected_rate() -> None:
    counter = TimeWindowedFrameCounter(1000.0, expected_fps=60.0)
    for frame in range(30):
        counter.report(frame * 33.0)

    assert counter.fps == 30.0
    assert counter.percent_dropped == pytest.approx(0.5)


@pytest.mark.parametrize("kwargs", [{"window_ms": 0}, {"window_ms": -5.0}, {"expected_fps": 0}])
def test_rejects_non_positive_configuration(kwargs: dict[str, float]) -> None:
    with pytest.raises(ConfigurationError):
        TimeWindowedFrameCounter(**kwargs)


def test_fps_from_frame_interval() -> None:
    assert fps_from_frame_interval(16.0) == pytest.approx(62.5)
    assert fps_from_frame_interval(0.0) == 0.0
    assert fps_from_frame_interval(-3.0) == 0.0


def test_create_frame_counter_uses_configuration() -> None:
    from responsiveness import ResponsivenessConfig, create_frame_counter

    counter = create_frame_counter(config=ResponsivenessConfig(fps_window_ms=500.0, expected_fps=120.0))

    assert counter.window_ms == 500.0
    counter.report(0.0)
    assert counter.percent_dropped == pytest.approx(1.0 - 2.0 / 120.0)
