"""Remember which ECS service events have already been reported."""

from __future__ import annotations


class EventDeduplicator:
    """Process-lifetime set of reported event ids.

    Nothing is ever evicted, so memory grows with the number of distinct events
    the cluster produces while the process runs. Restarting the process forgets
    everything and recent events are reported again. Not thread safe: the
    scraper serializes access with its lock.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def has_seen(self, event_id: str) -> bool:
        return event_id in self._seen

    def mark_seen(self, event_id: str) -> None:
        self._seen.add(event_id)

    def __len__(self) -> int:
        return len(self._seen)
