"""Bounded diagnostics hub shared by the pipeline components."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

from responsiveness.diagnostics.event import DiagnosticEvent, utc_now_iso
from responsiveness.runtime.errors import require_positive

Subscriber = Callable[[DiagnosticEvent], None]


class DiagnosticHub:
    """Central diagnostics emission with a drop-oldest history."""

    def __init__(
        self,
        *,
        capacity: int = 1_000,
        enabled: bool = True,
        category_allowlist: tuple[str, ...] = (),
    ) -> None:
        self._enabled = bool(enabled)
        require_positive("capacity", capacity)
        self._buffer: deque[DiagnosticEvent] = deque(maxlen=int(capacity))
        self._subscribers: dict[int, Subscriber] = {}
        self._next_subscriber_id = 1
        self._seq = 0
        self._category_allowlist = tuple(
            str(item).strip().lower()
            for item in category_allowlist
            if str(item).strip()
        )

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def capacity(self) -> int:
        return self._buffer.maxlen or 0

    @property
    def emitted_count(self) -> int:
        return self._seq

    def emit(self, event: DiagnosticEvent) -> None:
        if not self._enabled:
            return
        self._buffer.append(event)
        for callback in tuple(self._subscribers.values()):
            callback(event)

    def emit_fast(
        self,
        *,
        category: str,
        name: str,
        level: str = "info",
        value: float | int | str | bool | dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        if not self._enabled:
            return
        normalized_category = str(category).strip().lower()
        if self._category_allowlist and normalized_category not in self._category_allowlist:
            return
        self._seq += 1
        self.emit(
            DiagnosticEvent(
                ts_utc=utc_now_iso(),
                seq=self._seq,
                category=normalized_category,
                name=name,
                level=level,
                value=value,
                metadata=dict(metadata or {}),
            )
        )

    def subscribe(self, callback: Subscriber) -> int:
        token = self._next_subscriber_id
        self._next_subscriber_id += 1
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self._subscribers.pop(token, None)

    def snapshot(
        self,
        *,
        limit: int | None = None,
        category: str | None = None,
        name: str | None = None,
    ) -> list[DiagnosticEvent]:
        events = list(self._buffer)
        if category is not None:
            events = [event for event in events if event.category == category]
        if name is not None:
            events = [event for event in events if event.name == name]
        if limit is None or limit >= len(events):
            return events
        return events[-max(0, int(limit)) :]
