"""Event log — bounded, thread-safe store of load events.

The walker and ``load_api`` append through a :class:`LoadCollector`; callers
(the CLI banner, tests) read back with :meth:`EventLog.query` and
:meth:`EventLog.count`.
"""

import threading
from collections import deque

from fsroutes.observability.events import LoadEvent

# Attributes searched by the ``path`` filter of ``query``
_PATH_FIELDS = ("path", "filepath", "directory")


class EventLog:
    """Ring buffer of load events; the oldest are dropped when full.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[LoadEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: LoadEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        since_ns: int = 0,
        limit: int | None = None,
    ) -> list[LoadEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only events of this class.
            path: Keep only events whose route path, file or directory
                contains this substring.
            since_ns: Keep only events stamped at or after this time.
            limit: Maximum number of events; all when *None*.

        """
        with self._lock:
            snapshot = list(self._events)

        matched: list[LoadEvent] = []
        for event in reversed(snapshot):
            if limit is not None and len(matched) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and not any(
                path in str(getattr(event, name, "")) for name in _PATH_FIELDS
            ):
                continue
            matched.append(event)
        return matched

    def count(self, event_type: type) -> int:
        """Number of retained events of *event_type*."""
        with self._lock:
            return sum(1 for event in self._events if isinstance(event, event_type))

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
