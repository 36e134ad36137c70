"""Load collector — records resolution events into an EventLog.

The walker and ``load_api`` call the ``record_*`` methods as routes are
bound and directories finish.  Pass a collector to ``load_api`` to inspect
what a load did after the fact.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fsroutes.observability.events import DirectoryWalked, LoadCompleted, RouteBound, now_ns
from fsroutes.observability.log import EventLog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fsroutes.route import RouteNode


class LoadCollector:
    """Event collector for route resolution.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_route(self, route: RouteNode) -> None:
        """Record a bound method node."""
        self._log.append(
            RouteBound(
                path=route.path,
                method=route.method or "",
                filepath=str(route.filepath),
                timestamp_ns=now_ns(),
            )
        )

    def record_directory(
        self,
        directory: str,
        *,
        entries: int,
        routes: int,
        duration_ms: float,
    ) -> None:
        """Record a finished directory walk."""
        self._log.append(
            DirectoryWalked(
                directory=directory,
                entries=entries,
                routes=routes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_load(
        self,
        search_paths: Sequence[str],
        *,
        routes: int,
        duration_ms: float,
    ) -> None:
        """Record a completed top-level load."""
        self._log.append(
            LoadCompleted(
                search_paths=tuple(search_paths),
                routes=routes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
