"""Structured diagnostics event schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """Single data-quality or state-change observation."""

    ts_utc: str
    seq: int
    category: str
    name: str
    level: str = "info"
    value: float | int | str | bool | dict[str, Any] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ts_utc": self.ts_utc,
            "seq": int(self.seq),
            "category": self.category,
            "name": self.name,
            "level": self.level,
            "value": self.value,
            "metadata": dict(self.metadata),
        }


def utc_now_iso() -> str:
    """Return an RFC3339-like UTC timestamp with milliseconds."""
    now = datetime.now(tz=UTC)
    return now.isoformat(timespec="milliseconds")
