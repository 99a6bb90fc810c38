"""Timing entry contract and interaction-type classification."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from responsiveness.runtime.errors import MalformedEntryError


class InteractionType(StrEnum):
    """Coarse interaction family of a DOM event name."""

    KEY = "KEY"
    TAP = "TAP"
    HOVER = "HOVER"
    DRAG = "DRAG"
    INPUT = "INPUT"
    OTHER = "OTHER"


_TYPE_BY_NAME: dict[str, InteractionType] = {
    **dict.fromkeys(("keydown", "keyup", "keypress"), InteractionType.KEY),
    **dict.fromkeys(
        (
            "pointerdown",
            "pointerup",
            "pointercancel",
            "touchstart",
            "touchend",
            "touchcancel",
            "mousedown",
            "mouseup",
            "gotpointercapture",
            "lostpointercapture",
            "click",
            "dblclick",
            "auxclick",
            "contextmenu",
        ),
        InteractionType.TAP,
    ),
    **dict.fromkeys(
        (
            "pointerleave",
            "pointerout",
            "pointerover",
            "pointerenter",
            "mouseout",
            "mouseover",
            "mouseleave",
            "mouseenter",
        ),
        InteractionType.HOVER,
    ),
    **dict.fromkeys(
        ("dragstart", "dragend", "dragenter", "dragleave", "dragover", "drop"),
        InteractionType.DRAG,
    ),
    **dict.fromkeys(
        ("beforeinput", "input", "compositionstart", "compositionupdate", "compositionend"),
        InteractionType.INPUT,
    ),
}


def classify_interaction(name: str) -> InteractionType:
    """Map a DOM event name to its interaction type.

    Synthesized events can land in the same frame as their source (a click
    after a keypress), so a frame may legitimately carry both KEY and TAP.
    """
    return _TYPE_BY_NAME.get(str(name).strip().lower(), InteractionType.OTHER)


@dataclass(frozen=True, slots=True)
class TimingEntry:
    """One observed interaction-related event timing, in milliseconds.

    Timing fields are ``None`` when the source record did not carry a usable
    number. ``target`` is an opaque label and never takes part in equality.
    """

    name: str
    start_time: float | None
    duration: float | None
    processing_start: float | None = None
    processing_end: float | None = None
    interaction_id: int = 0
    target: Any = field(default=None, compare=False)

    @property
    def render_time(self) -> float | None:
        # duration is rounded by the source, start_time is not
        if self.start_time is None or self.duration is None:
            return None
        return self.start_time + self.duration

    @property
    def has_render_time(self) -> bool:
        return self.start_time is not None and self.duration is not None

    @property
    def has_processing(self) -> bool:
        return self.processing_start is not None and self.processing_end is not None

    @property
    def interaction_type(self) -> InteractionType:
        return classify_interaction(self.name)

    @property
    def missing_fields(self) -> tuple[str, ...]:
        return tuple(
            name
            for name in ("start_time", "duration", "processing_start", "processing_end")
            if getattr(self, name) is None
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], *, strict: bool = False) -> TimingEntry:
        """Build an entry from a camelCase or snake_case record.

        With ``strict`` set, a record missing any timing field raises
        ``MalformedEntryError`` instead of producing ``None`` fields.
        """
        entry = cls(
            name=str(_pick(raw, "name", "name") or ""),
            start_time=_number(_pick(raw, "startTime", "start_time")),
            duration=_number(_pick(raw, "duration", "duration")),
            processing_start=_number(_pick(raw, "processingStart", "processing_start")),
            processing_end=_number(_pick(raw, "processingEnd", "processing_end")),
            interaction_id=_interaction_id(_pick(raw, "interactionId", "interaction_id")),
            target=_pick(raw, "target", "target"),
        )
        if strict and entry.missing_fields:
            raise MalformedEntryError(
                f"entry {entry.name!r} has unusable fields: {', '.join(entry.missing_fields)}"
            )
        return entry


def coerce_entry(raw: TimingEntry | Mapping[str, Any]) -> TimingEntry:
    if isinstance(raw, TimingEntry):
        return raw
    if isinstance(raw, Mapping):
        return TimingEntry.from_mapping(raw)
    raise MalformedEntryError(f"unsupported entry type: {type(raw).__name__}")


def _pick(raw: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in raw:
        return raw[camel]
    return raw.get(snake)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _interaction_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and (not value.is_integer()):
        return 0
    ident = int(value)
    return ident if ident > 0 else 0
