from __future__ import annotations

from responsiveness.api.entry import TimingEntry


def make_entry(
    name: str = "pointerdown",
    *,
    start: float | None = 0.0,
    duration: float | None = 16.0,
    ps: float | None = None,
    pe: float | None = None,
    interaction_id: int = 0,
    target: object | None = None,
) -> TimingEntry:
    if ps is None and start is not None:
        ps = start
    if pe is None and ps is not None:
        pe = ps
    return TimingEntry(
        name=name,
        start_time=start,
        duration=duration,
        processing_start=ps,
        processing_end=pe,
        interaction_id=interaction_id,
        target=target,
    )


def at_render_time(render_time: float, *, name: str = "pointerdown", interaction_id: int = 0) -> TimingEntry:
    """Entry whose start_time + duration lands on ``render_time``."""
    return make_entry(name, start=render_time - 8.0, duration=8.0, interaction_id=interaction_id)
