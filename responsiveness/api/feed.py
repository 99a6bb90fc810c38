"""Public entry feed contracts."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from responsiveness.api.entry import TimingEntry

RawEntry: TypeAlias = TimingEntry | Mapping[str, Any]
EntryBatch: TypeAlias = Sequence[RawEntry]
BatchHandler: TypeAlias = Callable[[EntryBatch], object]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class EntryFeed(Protocol):
    """Source of timing entry batches, delivered synchronously."""

    def subscribe(self, handler: BatchHandler) -> Subscription:
        """Subscribe handler for every delivered batch."""

    def unsubscribe(self, subscription: Subscription) -> None:
        """Unsubscribe token."""


def create_entry_feed() -> EntryFeed:
    """Create default in-process entry feed implementation."""
    from responsiveness.runtime.feed import RuntimeEntryFeed

    return RuntimeEntryFeed()
