"""Bounded top-K set of the longest interactions, one slot per interaction."""

from __future__ import annotations

import logging

from responsiveness.api.entry import TimingEntry
from responsiveness.runtime.errors import ConfigurationError

_LOG = logging.getLogger("responsiveness.top_k")


class TopKLatencyTracker:
    """Keep the ``capacity`` longest-duration entries, deduplicated by interaction id.

    One interaction is observed through several entries (keydown + keyup share
    an ``interaction_id``); only its longest entry competes for a slot so a
    single interaction cannot starve distinct ones.
    """

    def __init__(self, capacity: int = 10) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"capacity must be a positive int, got {capacity!r}")
        self._capacity = capacity
        self._entries: list[TimingEntry] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[TimingEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def offer(self, entry: TimingEntry) -> bool:
        """Admit ``entry`` if it ranks; return whether the retained set changed."""
        duration = entry.duration
        if duration is None:
            _LOG.debug("top_k_rejected_malformed name=%s id=%d", entry.name, entry.interaction_id)
            return False
        if len(self._entries) >= self._capacity and not duration > _duration(self._entries[-1]):
            return False
        existing = next(
            (
                index
                for index, other in enumerate(self._entries)
                if other.interaction_id == entry.interaction_id
            ),
            None,
        )
        if existing is not None:
            if not duration > _duration(self._entries[existing]):
                return False
            self._entries[existing] = entry
        else:
            self._entries.append(entry)
        self._entries.sort(key=_duration, reverse=True)
        del self._entries[self._capacity :]
        return True

    def select(self, index: int) -> TimingEntry | None:
        """Return the entry at ``index`` clamped to the last retained one."""
        if not self._entries:
            return None
        return self._entries[min(len(self._entries) - 1, max(0, int(index)))]

    def clear(self) -> None:
        self._entries.clear()


def _duration(entry: TimingEntry) -> float:
    return entry.duration if entry.duration is not None else 0.0
