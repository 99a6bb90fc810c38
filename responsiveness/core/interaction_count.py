"""Approximate count of distinct user interactions in a session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum

from responsiveness.runtime.errors import ConfigurationError

# Event types whose cumulative counts each stand for one interaction.
TALLY_EVENT_TYPES: tuple[str, ...] = ("pointerup", "dragstart", "keydown")


class CountStrategy(StrEnum):
    ID_SPREAD = "id_spread"
    EVENT_TALLY = "event_tally"


class InteractionCountEstimator:
    """Estimate interactions from interaction-id spread or per-event-type tallies.

    The id-spread strategy assumes ids grow by a fixed ``step`` per interaction
    with none skipped or reused. The tally strategy is only meaningful when the
    source exposes cumulative per-event-type counts; it tends to do well on
    desktop and poorly on touch devices.
    """

    def __init__(
        self,
        strategy: CountStrategy | str = CountStrategy.ID_SPREAD,
        *,
        step: int = 7,
    ) -> None:
        try:
            self._strategy = CountStrategy(strategy)
        except ValueError as exc:
            raise ConfigurationError(f"unknown count strategy: {strategy!r}") from exc
        if isinstance(step, bool) or not isinstance(step, int) or step <= 0:
            raise ConfigurationError(f"step must be a positive int, got {step!r}")
        self._step = step
        self._min_id: int | None = None
        self._max_id: int | None = None
        self._event_counts: dict[str, int] = {}

    @property
    def strategy(self) -> CountStrategy:
        return self._strategy

    @property
    def min_interaction_id(self) -> int | None:
        return self._min_id

    @property
    def max_interaction_id(self) -> int | None:
        return self._max_id

    def observe(self, interaction_id: int) -> None:
        ident = int(interaction_id)
        if ident <= 0:
            return
        self._min_id = ident if self._min_id is None else min(self._min_id, ident)
        self._max_id = ident if self._max_id is None else max(self._max_id, ident)

    def update_event_counts(self, counts: Mapping[str, int]) -> None:
        """Replace the cumulative per-event-type counts."""
        self._event_counts = {
            str(name): int(value)
            for name, value in counts.items()
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
        }

    def estimate(self, observed_ids: Iterable[int] = ()) -> float:
        for ident in observed_ids:
            self.observe(ident)
        if self._strategy is CountStrategy.EVENT_TALLY:
            return float(sum(self._event_counts.get(name, 0) for name in TALLY_EVENT_TYPES))
        if self._min_id is None or self._max_id is None:
            return 0.0
        return (self._max_id - self._min_id) / self._step + 1

    def reset(self) -> None:
        self._min_id = None
        self._max_id = None
        self._event_counts = {}
