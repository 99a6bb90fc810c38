from __future__ import annotations

import pytest

from responsiveness.core.interaction_count import CountStrategy, InteractionCountEstimator
from responsiveness.runtime.errors import ConfigurationError


def test_id_spread_estimate_uses_step_between_min_and_max() -> None:
    estimator = InteractionCountEstimator()

    assert estimator.estimate([28, 7, 14]) == 4.0
    assert estimator.min_interaction_id == 7
    assert estimator.max_interaction_id == 28


def test_id_spread_estimate_is_zero_before_any_interaction() -> None:
    estimator = InteractionCountEstimator()

    assert estimator.estimate() == 0.0
    estimator.observe(0)
    assert estimator.estimate() == 0.0


def test_id_spread_single_interaction_counts_one() -> None:
    estimator = InteractionCountEstimator()
    estimator.observe(4242)
    assert estimator.estimate() == 1.0


def test_id_spread_accumulates_across_calls() -> None:
    estimator = InteractionCountEstimator(step=7)
    estimator.estimate([70])
    assert estimator.estimate([35]) == 6.0


def test_event_tally_sums_tap_drag_and_keyboard_counts() -> None:
    estimator = InteractionCountEstimator(CountStrategy.EVENT_TALLY)
    assert estimator.estimate() == 0.0

    estimator.update_event_counts({"pointerup": 3, "dragstart": 1, "keydown": 2, "click": 9})

    assert estimator.estimate([7, 700]) == 6.0


def test_strategy_accepts_string_value() -> None:
    assert InteractionCountEstimator("event_tally").strategy is CountStrategy.EVENT_TALLY


def test_reset_clears_observations() -> None:
    estimator = InteractionCountEstimator()
    estimator.estimate([7, 14])
    estimator.reset()
    assert estimator.estimate() == 0.0
    assert estimator.min_interaction_id is None


@pytest.mark.parametrize("step", [0, -7])
def test_rejects_non_positive_step(step: int) -> None:
    with pytest.raises(ConfigurationError):
        InteractionCountEstimator(step=step)


def test_rejects_unknown_strategy() -> None:
    with pytest.raises(ConfigurationError):
        InteractionCountEstimator("median")
