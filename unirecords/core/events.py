"""
Record events and the in-memory event log.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from .enums import EventType
from .interfaces import EventHandler


@dataclass(frozen=True)
class RecordEvent:
    """A change that was applied to the records."""
    event_type: EventType
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventLog(EventHandler):
    """Collects published events in order, optionally filtered by type."""

    def __init__(self, event_types: Optional[Iterable[EventType]] = None):
        self._event_types: Optional[Set[EventType]] = set(event_types) if event_types is not None else None
        self._events: List[RecordEvent] = []

    def can_handle(self, event_type: EventType) -> bool:
        return self._event_types is None or event_type in self._event_types

    def handle_event(self, event: RecordEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> List[RecordEvent]:
        return self._events.copy()

    def replay(self) -> Iterator[RecordEvent]:
        """Yield recorded events in publication order."""
        for event in self._events:
            yield event

    def __len__(self) -> int:
        return len(self._events)
