"""
Event Recorder

Append-only log of events emitted by a distributor instance.
"""

from __future__ import annotations

from typing import Any, Optional

from .models import AnyEvent, DistributorEvent, EventKind


class EventRecorder:
    """
    Records events in emission order.

    Usage:
        recorder = EventRecorder()
        recorder.emit(Claimed(recipient=addr, amount=100))

        claims = recorder.get_events("Claimed")
    """

    def __init__(self) -> None:
        self._events: list[DistributorEvent] = []

    def emit(self, event: AnyEvent) -> AnyEvent:
        """Append an event, stamping its sequence number."""
        stamped = event.model_copy(update={"sequence": len(self._events)})
        self._events.append(stamped)
        return stamped

    def get_events(self, kind: Optional[EventKind] = None) -> list[DistributorEvent]:
        """Get all events, optionally only those of one kind."""
        if kind is None:
            return list(self._events)
        return [e for e in self._events if e.kind == kind]

    @property
    def last(self) -> Optional[DistributorEvent]:
        """Most recent event, or None if nothing was emitted."""
        return self._events[-1] if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events."""
        self._events.clear()

    def to_dict_list(self) -> list[dict[str, Any]]:
        """Convert all events to JSON-serializable dicts."""
        return [e.model_dump(mode="json") for e in self._events]
