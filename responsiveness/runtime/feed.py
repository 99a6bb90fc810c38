"""In-process entry feed used to drive reporters."""

from __future__ import annotations

from responsiveness.api.feed import BatchHandler, EntryBatch, Subscription


class RuntimeEntryFeed:
    """Simple in-process pub/sub for timing entry batches."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, BatchHandler] = {}

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, handler: BatchHandler) -> Subscription:
        """Subscribe handler for every published batch."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = handler
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, batch: EntryBatch) -> int:
        """Deliver one batch and return number of invoked handlers."""
        invoked = 0
        for handler in tuple(self._subscriptions.values()):
            handler(batch)
            invoked += 1
        return invoked
