"""Entry points — load a route table onto a server.

    from fsroutes import LoaderConfig, load_api

    config = LoaderConfig(paths=["routes", {"path": "admin", "prefix": "/admin"}])
    routes = await load_api(app, config)

Steps: resolve loader, adapter and route class (configuration errors surface
here, before any I/O), run the adapter's ``before`` hook, walk every search
path concurrently while binding each route, run the ``after`` hook, and
return the method nodes in search-path order.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fsroutes._errors import ConfigurationError
from fsroutes.adapter import resolve_adapter
from fsroutes.config import LoaderConfig
from fsroutes.loaders import resolve_loader
from fsroutes.matchers import MatcherTable
from fsroutes.modules import ImportlibResolver, resolve_reference
from fsroutes.route import RouteNode
from fsroutes.walker import TreeWalker, WalkContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fsroutes.modules import ModuleResolver
    from fsroutes.observability import LoadCollector

logger = logging.getLogger("fsroutes.api")

# Attribute looked up on a route module referenced without ``:attr``
_ROUTE_ATTR = "Route"


async def load_api(
    server: Any,
    config: LoaderConfig | None = None,
    *,
    resolver: ModuleResolver | None = None,
    collector: LoadCollector | None = None,
    **options: Any,
) -> list[RouteNode]:
    """Resolve every search path and bind each route on *server*.

    Args:
        server: Host server instance passed through to the loader.
        config: Base configuration; a default ``LoaderConfig()`` if omitted.
        resolver: Endpoint module resolver (defaults to importlib).
        collector: Optional event collector.
        **options: Per-call configuration overrides (``paths``, ``loader``...).
            Forwarded to the adapter hooks as ``options``.

    Returns:
        Method nodes of all search paths, in search-path order.

    Raises:
        ConfigurationError: Before any traversal, for unresolvable settings.
        OSError: If a search path cannot be listed.
        MalformedModuleError: If an endpoint module fails to load.

    """
    start = time.perf_counter()
    base = config if config is not None else LoaderConfig()
    effective = base.with_overrides(**options)
    resolver = resolver if resolver is not None else ImportlibResolver()

    loader = resolve_loader(effective.loader, effective.root, resolver)
    adapter = resolve_adapter(effective.adapter, effective.root, resolver)
    route_class = resolve_route_class(effective.route, effective.root, resolver)
    contexts = build_contexts(effective)

    if adapter is not None:
        await adapter.before(server, effective, options)

    def bind(route: RouteNode) -> Any:
        return loader(server, route, adapter)

    walker = TreeWalker(
        resolver,
        route_class=route_class,
        adapter=adapter,
        bind=bind,
        collector=collector,
    )
    routes = await _walk_all(walker, effective, contexts)

    if adapter is not None:
        await adapter.after(server, effective, options)

    duration_ms = (time.perf_counter() - start) * 1000
    if collector is not None:
        collector.record_load(
            [str(effective.search_root(entry)) for entry in effective.paths],
            routes=len(routes),
            duration_ms=duration_ms,
        )
    logger.info("Loaded %d route(s) from %d search path(s) in %.1fms",
                len(routes), len(effective.paths), duration_ms)
    return routes


def load(server: Any, config: LoaderConfig | None = None, **kwargs: Any) -> list[RouteNode]:
    """Synchronous wrapper around :func:`load_api` for non-async startup code."""
    return asyncio.run(load_api(server, config, **kwargs))


async def resolve_routes(
    config: LoaderConfig,
    *,
    resolver: ModuleResolver | None = None,
    collector: LoadCollector | None = None,
) -> list[RouteNode]:
    """Resolve the route table without binding it anywhere.

    The loader and adapter are not resolved and no hooks run; the custom
    route class is honoured.
    """
    resolver = resolver if resolver is not None else ImportlibResolver()
    route_class = resolve_route_class(config.route, config.root, resolver)
    contexts = build_contexts(config)
    walker = TreeWalker(resolver, route_class=route_class, collector=collector)
    return await _walk_all(walker, config, contexts)


def resolve_route_class(raw: Any, root: Path, resolver: ModuleResolver) -> type[RouteNode]:
    """Resolve the configured route class (default :class:`RouteNode`).

    Raises:
        ConfigurationError: If the result is not a ``RouteNode`` subclass.

    """
    if raw is None or raw == "":
        return RouteNode
    route_class = (
        resolve_reference(raw, root, resolver, default_attr=_ROUTE_ATTR)
        if isinstance(raw, str)
        else raw
    )
    if not (isinstance(route_class, type) and issubclass(route_class, RouteNode)):
        msg = f"custom route class {raw!r} must extend fsroutes.RouteNode"
        raise ConfigurationError(msg)
    return route_class


def build_contexts(config: LoaderConfig) -> list[WalkContext]:
    """Build the root walk context of every search path.

    Raises:
        ConfigurationError: If a matcher entry is malformed.

    """
    return [
        WalkContext(
            settings=entry,
            matchers=MatcherTable.build(config.endpoints, entry.endpoints),
        )
        for entry in config.paths
    ]


async def _walk_all(
    walker: TreeWalker,
    config: LoaderConfig,
    contexts: Sequence[WalkContext],
) -> list[RouteNode]:
    """Walk every search path concurrently; re-raise the first failure.

    Every branch runs to completion before a failure is raised, so bindings
    made by healthy branches are kept.
    """
    outcomes = await asyncio.gather(
        *(
            walker.walk(config.search_root(entry), context)
            for entry, context in zip(config.paths, contexts, strict=True)
        ),
        return_exceptions=True,
    )
    return _collect(outcomes, [config.search_root(entry) for entry in config.paths])


def _collect(outcomes: Sequence[Any], roots: Sequence[Path]) -> list[RouteNode]:
    failures = [
        (root, outcome)
        for root, outcome in zip(roots, outcomes, strict=True)
        if isinstance(outcome, BaseException)
    ]
    if failures:
        for root, exc in failures[1:]:
            logger.error("Search path %s also failed: %s", root, exc)
        raise failures[0][1]

    routes: list[RouteNode] = []
    for items in outcomes:
        routes.extend(items)
    return routes


__all__ = ["build_contexts", "load", "load_api", "resolve_route_class", "resolve_routes"]
