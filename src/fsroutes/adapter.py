"""Adapters — per-route handler plus optional lifecycle hooks.

An adapter customises how each resolved route is bound and may run code
once before and once after the whole load.  Three shapes are accepted and
classified once by :func:`resolve_adapter`:

    def adapter(server, route): ...             # function

    class Auth(Adapter):                        # class, instantiated
        def handler(self, server, route): ...
        async def before(self, server, config, options): ...

    handler = ...                               # object/module with handler

The result is an :class:`AdapterHandle`; loaders receive the handle and call
``adapter.handler(server, route)``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fsroutes._errors import ConfigurationError
from fsroutes.modules import ModuleResolver, resolve_reference

if TYPE_CHECKING:
    from fsroutes.route import RouteNode


class Adapter:
    """Base class for class-based adapters.

    Subclasses override :meth:`handler` and may define ``before`` and
    ``after`` hooks (sync or async) taking ``(server, config, options)``.
    """

    def handler(self, server: Any, route: RouteNode) -> Any:
        msg = "adapter.handler(server, route) has not been implemented"
        raise NotImplementedError(msg)


@dataclass(frozen=True, slots=True)
class AdapterHandle:
    """A classified adapter.

    Attributes:
        target: The adapter as configured (instance, function, object).
        handle: Callable invoked per route with ``(server, route)``.
        before_hook: Optional hook awaited once before the walk.
        after_hook: Optional hook awaited once after the walk.

    """

    target: Any
    handle: Callable[[Any, RouteNode], Any]
    before_hook: Callable[..., Any] | None = None
    after_hook: Callable[..., Any] | None = None

    def handler(self, server: Any, route: RouteNode) -> Any:
        """Invoke the adapter for one route."""
        return self.handle(server, route)

    async def before(self, server: Any, config: Any, options: dict[str, Any]) -> None:
        """Run the ``before`` hook, awaiting it if it is asynchronous."""
        await _run_hook(self.before_hook, server, config, options)

    async def after(self, server: Any, config: Any, options: dict[str, Any]) -> None:
        """Run the ``after`` hook, awaiting it if it is asynchronous."""
        await _run_hook(self.after_hook, server, config, options)


def resolve_adapter(
    raw: Any,
    root: Path,
    resolver: ModuleResolver,
) -> AdapterHandle | None:
    """Classify a configured adapter into an :class:`AdapterHandle`.

    Returns *None* when no adapter is configured.

    Raises:
        ConfigurationError: If the adapter is not a function, an
            ``Adapter`` class or an object exposing a ``handler`` function.

    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, AdapterHandle):
        return raw

    target = resolve_reference(raw, root, resolver) if isinstance(raw, str) else raw

    if isinstance(target, type):
        if not (issubclass(target, Adapter) or callable(getattr(target, "handler", None))):
            msg = (
                f"Adapter class {target.__name__} must extend fsroutes.Adapter "
                "or define a handler method"
            )
            raise ConfigurationError(msg)
        target = target()

    handle = getattr(target, "handler", None)
    if handle is None or not callable(handle):
        if inspect.isfunction(target) or inspect.ismethod(target) or inspect.isbuiltin(target):
            handle = target
        else:
            msg = (
                "adapter must be a function, an Adapter class or an object "
                f"with a handler function (got {type(target).__name__})"
            )
            raise ConfigurationError(msg)

    return AdapterHandle(
        target=target,
        handle=handle,
        before_hook=_hook(target, "before"),
        after_hook=_hook(target, "after"),
    )


def _hook(target: Any, name: str) -> Callable[..., Any] | None:
    hook = getattr(target, name, None)
    if hook is not None and callable(hook):
        return hook
    return None


async def _run_hook(hook: Callable[..., Any] | None, *args: Any) -> None:
    if hook is None:
        return
    result = hook(*args)
    if inspect.isawaitable(result):
        await result
