"""Event log — bounded, thread-safe store of generation events.

Thread Safety:
    All methods are protected by a ``threading.Lock``, so a log may be
    shared with code running in worker threads (``asyncio.to_thread``).

"""

import threading
from collections import deque

from whisker.observability.events import GenerationEvent


class EventLog:
    """Ring buffer of events with simple queries.

    Args:
        max_events: Maximum number of events to retain; the oldest are
            discarded first.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[GenerationEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: GenerationEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        route: str | None = None,
    ) -> list[GenerationEvent]:
        """Return events in recording order, optionally filtered.

        Args:
            event_type: Only return events of this type.
            route: Only return events about this exact route.

        """
        with self._lock:
            events = list(self._events)

        return [
            event
            for event in events
            if (event_type is None or isinstance(event, event_type))
            and (route is None or getattr(event, "route", None) == route)
        ]

    def clear(self) -> int:
        """Clear all events and return the count that was cleared."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
