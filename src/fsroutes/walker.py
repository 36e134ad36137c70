"""Tree walker — turn a directory tree into route nodes.

Convention::

    routes/
        users/
            index.py        -> directory endpoint (may override the path)
            get.py          -> GET  users
            post.py         -> POST users
            {id}/
                get.py      -> GET  users/{id}
            create.py       -> bound only if a matcher names "create"

For each directory the walker builds a directory node (backed by
``index.py`` or a sibling ``<dirname>.py``), walks subdirectories
concurrently, and resolves files in name order.  Each method node is handed
to the binder as soon as it exists; directory nodes are never returned.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fsroutes.route import RouteNode

if TYPE_CHECKING:
    from fsroutes._types import Binder
    from fsroutes.adapter import AdapterHandle
    from fsroutes.config import SearchPath
    from fsroutes.matchers import MatcherTable
    from fsroutes.modules import ModuleResolver
    from fsroutes.observability import LoadCollector

logger = logging.getLogger("fsroutes.walker")

# Module file suffix for endpoint files
_MODULE_SUFFIX = ".py"

# Directory endpoint file name (without suffix)
_INDEX_NAME = "index"

# Subdirectories never walked
_SKIP_DIRS = frozenset({"__pycache__"})


@dataclass(frozen=True, slots=True)
class WalkContext:
    """State inherited by every directory of one search path.

    Attributes:
        settings: The search path being walked (prefix, endpoints).
        matchers: Effective matcher table for this search path.
        key: Base name of the directory being walked (``""`` at the root).
        parent: Directory node of the enclosing directory.

    """

    settings: SearchPath
    matchers: MatcherTable
    key: str = ""
    parent: RouteNode | None = None

    @property
    def prefix(self) -> str:
        return self.settings.prefix


@dataclass(frozen=True, slots=True)
class _Entry:
    name: str
    path: Path
    is_dir: bool


class TreeWalker:
    """Recursive, asynchronous directory walker.

    Args:
        resolver: Loads endpoint modules from file paths.
        route_class: ``RouteNode`` (sub)class used to build nodes.
        adapter: Adapter handle stored on every node.
        bind: Called once per method node as soon as it is created; may
            return an awaitable.  *None* for a pure resolution pass.
        collector: Optional event collector.

    """

    __slots__ = ("_adapter", "_bind", "_collector", "_resolver", "_route_class")

    def __init__(
        self,
        resolver: ModuleResolver,
        *,
        route_class: type[RouteNode] = RouteNode,
        adapter: AdapterHandle | None = None,
        bind: Binder | None = None,
        collector: LoadCollector | None = None,
    ) -> None:
        self._resolver = resolver
        self._route_class = route_class
        self._adapter = adapter
        self._bind = bind
        self._collector = collector

    async def walk(self, directory: Path, context: WalkContext) -> list[RouteNode]:
        """Walk *directory* and return its method nodes, subdirectories included.

        Raises:
            OSError: If the directory cannot be listed.
            MalformedModuleError: If an endpoint module fails to load.

        """
        start = time.perf_counter()
        entries, module_file = await asyncio.gather(
            asyncio.to_thread(_list_directory, directory),
            asyncio.to_thread(_directory_module, directory),
        )

        root = self._directory_node(directory, module_file, context)
        child_context = replace(context, parent=root)

        pending: list[asyncio.Task[list[RouteNode]] | list[RouteNode]] = []
        tasks: list[asyncio.Task[list[RouteNode]]] = []
        bound: set[str] = set()

        failures: list[BaseException] = []
        try:
            for entry in entries:
                if entry.is_dir:
                    if _skip_directory(entry.name):
                        continue
                    task = asyncio.create_task(
                        self.walk(entry.path, replace(child_context, key=entry.name))
                    )
                    tasks.append(task)
                    pending.append(task)
                elif _is_module_file(entry.name):
                    pending.append(await self._resolve_file(entry, root, context, bound))
        except Exception as exc:
            failures.append(exc)
        finally:
            # Sibling walks always run to completion, even if a file failed.
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        failures.extend(o for o in outcomes if isinstance(o, BaseException))
        if failures:
            for exc in failures[1:]:
                logger.error("Walk of %s also failed: %s", directory, exc)
            raise failures[0]

        routes: list[RouteNode] = []
        for item in pending:
            routes.extend(item.result() if isinstance(item, asyncio.Task) else item)

        if self._collector is not None:
            self._collector.record_directory(
                str(directory),
                entries=len(entries),
                routes=len(routes),
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return routes

    def _directory_node(
        self,
        directory: Path,
        module_file: Path | None,
        context: WalkContext,
    ) -> RouteNode:
        endpoint = self._resolver(module_file) if module_file is not None else None
        return self._route_class(
            key=context.key,
            filepath=module_file if module_file is not None else directory,
            endpoint=endpoint,
            prefix=context.prefix,
            parent=context.parent,
            settings=context.settings,
            adapter=self._adapter,
        )

    async def _resolve_file(
        self,
        entry: _Entry,
        root: RouteNode,
        context: WalkContext,
        bound: set[str],
    ) -> list[RouteNode]:
        """Bind *entry* to every method it matches, skipping methods already bound."""
        stem = entry.name[: -len(_MODULE_SUFFIX)]
        methods = context.matchers.methods_for(stem)
        if not methods:
            return []

        endpoint: Any = self._resolver(entry.path)
        routes: list[RouteNode] = []
        for method in methods:
            if method in bound:
                logger.debug("Skipping %s for %s: method already bound in %s",
                             method.upper(), entry.path, entry.path.parent)
                continue
            bound.add(method)
            route = self._route_class(
                key=root.key,
                method=method,
                filepath=entry.path,
                endpoint=endpoint,
                prefix=context.prefix,
                parent=root,
                settings=context.settings,
                adapter=self._adapter,
            )
            routes.append(route)
            logger.debug("Resolved %s %r from %s", method.upper(), route.path, entry.path)
            if self._bind is not None:
                result = self._bind(route)
                if inspect.isawaitable(result):
                    await result
            if self._collector is not None:
                self._collector.record_route(route)
        return routes


def _list_directory(directory: Path) -> list[_Entry]:
    """List *directory* sorted by name.  Raises ``OSError`` if unreadable."""
    with os.scandir(directory) as it:
        entries = [
            _Entry(name=item.name, path=Path(item.path), is_dir=item.is_dir())
            for item in it
        ]
    entries.sort(key=lambda entry: entry.name)
    return entries


def _directory_module(directory: Path) -> Path | None:
    """Return ``<dir>/index.py``, else a sibling ``<dir>.py``, else None."""
    index = directory / f"{_INDEX_NAME}{_MODULE_SUFFIX}"
    if index.is_file():
        return index
    if not directory.name:
        return None
    sibling = directory.with_name(directory.name + _MODULE_SUFFIX)
    if sibling.is_file():
        return sibling
    return None


def _is_module_file(name: str) -> bool:
    # "_list.py" binds only through a matcher; "__init__.py" never binds.
    return name.endswith(_MODULE_SUFFIX) and not name.startswith("__")


def _skip_directory(name: str) -> bool:
    return name in _SKIP_DIRS or name.startswith(".")
