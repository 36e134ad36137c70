"""Observability for route resolution.

Records what a load did as frozen events in a bounded, thread-safe log.

Quick Start:
    >>> from fsroutes.observability import EventLog, LoadCollector
    >>> collector = LoadCollector(EventLog())
    >>> # routes = await load_api(app, config, collector=collector)
    >>> # collector.log.query(event_type=RouteBound)

"""

from fsroutes.observability.collector import LoadCollector
from fsroutes.observability.events import (
    DirectoryWalked,
    LoadCompleted,
    LoadEvent,
    RouteBound,
    now_ns,
)
from fsroutes.observability.log import EventLog

__all__ = [
    "DirectoryWalked",
    "EventLog",
    "LoadCollector",
    "LoadCompleted",
    "LoadEvent",
    "RouteBound",
    "now_ns",
]
