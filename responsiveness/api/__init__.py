"""Public contracts for timing entries, output records and entry feeds."""

from responsiveness.api.entry import InteractionType, TimingEntry, classify_interaction, coerce_entry
from responsiveness.api.feed import EntryFeed, Subscription, create_entry_feed
from responsiveness.api.records import (
    FrameTiming,
    InteractionBreakdown,
    InteractionNotification,
    LatencyNotification,
)

__all__ = [
    "EntryFeed",
    "FrameTiming",
    "InteractionBreakdown",
    "InteractionNotification",
    "InteractionType",
    "LatencyNotification",
    "Subscription",
    "TimingEntry",
    "classify_interaction",
    "coerce_entry",
    "create_entry_feed",
]
