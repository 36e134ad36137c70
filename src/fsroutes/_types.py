"""Shared type definitions for fsroutes."""

from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fsroutes.adapter import AdapterHandle
    from fsroutes.route import RouteNode

# Lower-cased HTTP method token (e.g., "get", "post")
type MethodToken = str

# Route path produced by resolution (e.g., "api/users", "/custom/url")
type RoutePath = str

# Matcher value: literal filename or a ``{"name": ...}`` descriptor
type MatcherSpec = str | Mapping[str, Any]

# Server-specific binding function
type Loader = Callable[[Any, RouteNode, AdapterHandle | None], Awaitable[None] | None]

# Per-node binding callback used by the walker
type Binder = Callable[[RouteNode], Awaitable[None] | None]
