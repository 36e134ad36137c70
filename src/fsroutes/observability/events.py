"""Event model for route resolution.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteBound:
    """A method node was resolved and handed to the loader.

    Attributes:
        path: Resolved route path.
        method: Lower-cased HTTP method.
        filepath: Endpoint file backing the route.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    method: str
    filepath: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class DirectoryWalked:
    """A directory finished walking (including its subdirectories).

    Attributes:
        directory: Absolute directory path.
        entries: Number of directory entries listed.
        routes: Number of routes produced by this directory and below.
        duration_ms: Time spent in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    directory: str
    entries: int
    routes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class LoadCompleted:
    """A top-level load finished.

    Attributes:
        search_paths: Absolute search path roots that were walked.
        routes: Total number of routes produced.
        duration_ms: Wall time of the whole load, hooks included.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    search_paths: tuple[str, ...]
    routes: int
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type LoadEvent = RouteBound | DirectoryWalked | LoadCompleted


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
