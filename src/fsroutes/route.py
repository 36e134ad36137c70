"""Route nodes — resolved routing units and path composition.

A walk produces one directory node per visited directory and one method node
per bound handler file.  Directory nodes only carry path context for their
descendants; method nodes are the route table entries.

Path resolution, in priority order:

    url = "/v2/health"        -> path is "/v2/health", verbatim
    path = "params/nested"    -> path is "params/nested", verbatim
    path = "~/rewrite"        -> own segment renamed: "<base>/rewrite"
    (method node)             -> its directory's path
    (directory node)          -> "<parent path>/<key>" or "<prefix>/<key>"

Descendants compose on the resolved path, so an ``index.py`` override moves
its whole subtree while a method file's override moves only that method.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from fsroutes._errors import MalformedModuleError

if TYPE_CHECKING:
    from fsroutes.adapter import AdapterHandle
    from fsroutes.config import SearchPath

# Prefix marking a ``path`` override as relative to the node's base
_RELATIVE_MARKER = "~/"

# Catch-all handler attribute used when no method-named attribute exists
_HANDLER_NAME = "handler"


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A resolved routing unit.

    Attributes:
        key: Base name of the originating directory (``""`` at forest roots).
        method: Lower-cased HTTP method, or *None* for directory nodes.
        filepath: Backing endpoint module, or the bare directory path when the
            directory has neither an ``index.py`` nor a sibling module.
        endpoint: Loaded endpoint module (or any value the resolver returned).
        prefix: Segment inherited from the search path.
        parent: Enclosing directory node; *None* for a subtree root.
        settings: The search path this node was discovered under.
        adapter: Adapter handle of the invocation, if any.
        base: Path this node's own segment is appended to.  Derived.
        path: Resolved route path.  Derived once at construction.
        name: Display name from the endpoint's ``name`` attribute.  Derived.

    """

    key: str = ""
    method: str | None = None
    filepath: Path | None = None
    endpoint: Any = field(default=None, repr=False, compare=False)
    prefix: str = ""
    parent: RouteNode | None = field(default=None, repr=False, compare=False)
    settings: SearchPath | None = field(default=None, repr=False, compare=False)
    adapter: AdapterHandle | None = field(default=None, repr=False, compare=False)
    base: str = field(init=False, default="", repr=False, compare=False)
    path: str = field(init=False, default="")
    name: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        base = self.resolve_base()
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "name", self.override("name"))
        object.__setattr__(self, "path", self.resolve_path(base))

    @property
    def is_handler(self) -> bool:
        """True for method nodes (route table entries)."""
        return self.method is not None

    def resolve_base(self) -> str:
        """Return the path this node's own segment composes onto."""
        parent = self.parent
        if parent is not None and self.method is not None:
            return parent.base
        if parent is not None and parent.path:
            return parent.path
        return self.prefix

    def resolve_path(self, base: str) -> str:
        """Compute the route path from overrides, parent and key.

        Subclasses may refine this; it runs once, during construction.
        """
        url = self.override("url")
        if url is not None:
            return url

        explicit = self.override("path")
        if explicit is not None:
            if explicit.startswith(_RELATIVE_MARKER):
                return join_path(base, explicit[len(_RELATIVE_MARKER):])
            return explicit

        if self.method is not None and self.parent is not None:
            return self.parent.path

        return join_path(base, self.key)

    def override(self, attr: str) -> str | None:
        """Read a string override from the endpoint (attribute or mapping key).

        Raises:
            MalformedModuleError: If the value is present but not a ``str``.

        """
        endpoint = self.endpoint
        if endpoint is None:
            return None
        if isinstance(endpoint, Mapping):
            value = endpoint.get(attr)
        else:
            value = getattr(endpoint, attr, None)
        if value is None:
            return None
        if not isinstance(value, str):
            msg = (
                f"Endpoint {self.filepath}: {attr!r} must be a str, "
                f"got {type(value).__name__}"
            )
            raise MalformedModuleError(msg)
        return value

    def resolve_handler(self) -> Callable[..., Any]:
        """Return the callable serving this route.

        Looks for an attribute named after the method (``get``, ``post``...),
        then a catch-all ``handler``, then the endpoint itself if callable.

        Raises:
            MalformedModuleError: If the endpoint exposes no callable.

        """
        endpoint = self.endpoint
        for attr in (self.method, _HANDLER_NAME):
            if attr is None:
                continue
            if isinstance(endpoint, Mapping):
                func = endpoint.get(attr)
            else:
                func = getattr(endpoint, attr, None)
            if func is not None and callable(func):
                return func
        if callable(endpoint):
            return endpoint
        msg = (
            f"Endpoint {self.filepath} has no handler for {self.method!r} "
            f"(define '{self.method}' or '{_HANDLER_NAME}')"
        )
        raise MalformedModuleError(msg)

    def ancestors(self) -> list[RouteNode]:
        """Return the parent chain, nearest first."""
        chain: list[RouteNode] = []
        node = self.parent
        while node is not None:
            chain.append(node)
            node = node.parent
        return chain


def join_path(*parts: str) -> str:
    """Join path segments with a single ``/``, skipping empty segments.

    ``join_path("", "users")``       -> ``users``
    ``join_path("/api/", "/users")`` -> ``/api/users``
    ``join_path("api", "")``         -> ``api``

    """
    segments = [part for part in parts if part]
    if not segments:
        return ""
    joined = segments[0]
    for segment in segments[1:]:
        joined = joined.rstrip("/") + "/" + segment.lstrip("/")
    return joined
