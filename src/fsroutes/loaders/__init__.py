"""Loaders — bind resolved routes to a concrete server.

A loader is any callable ``(server, route, adapter) -> None``.  It is
resolved once per invocation from configuration:

    loader=my_loader                  # callable, used as-is
    loader="chirp"                    # built-in registry name
    loader="myapp.routing:bind"       # importable module + attribute
    loader="./loaders/custom.py"      # file under the config root (``load``)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from fsroutes._errors import ConfigurationError
from fsroutes.modules import ModuleResolver, resolve_reference

if TYPE_CHECKING:
    from fsroutes._types import Loader

# Built-in loaders by name
BUILTIN_LOADERS: dict[str, str] = {
    "chirp": "fsroutes.loaders.chirp:load",
}

# Attribute looked up on a loader module referenced without ``:attr``
_DEFAULT_ATTR = "load"


def resolve_loader(raw: Any, root: Path, resolver: ModuleResolver) -> Loader:
    """Resolve the configured loader to a callable.

    Raises:
        ConfigurationError: If no loader is configured, the reference cannot
            be resolved, or the result is not callable.

    """
    if raw is None or raw == "":
        msg = "loader is undefined"
        raise ConfigurationError(msg)

    if isinstance(raw, str):
        target = BUILTIN_LOADERS.get(raw, raw)
        loader = resolve_reference(target, root, resolver, default_attr=_DEFAULT_ATTR)
    else:
        loader = raw

    if not callable(loader):
        msg = f"loader {raw!r} must resolve to a function, got {type(loader).__name__}"
        raise ConfigurationError(msg)
    return loader


__all__ = ["BUILTIN_LOADERS", "resolve_loader"]
