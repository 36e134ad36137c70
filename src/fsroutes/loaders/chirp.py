"""Built-in loader for Chirp applications.

Registers each resolved route through Chirp's decorator API::

    app.route("/users", methods=["GET"], name="users")(handler)

Only ``server.route`` is used, so any server exposing the same decorator
signature works.  When an adapter is configured it takes over the binding.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fsroutes._types import RoutePath
    from fsroutes.adapter import AdapterHandle
    from fsroutes.route import RouteNode


def load(server: Any, route: RouteNode, adapter: AdapterHandle | None = None) -> None:
    """Bind *route* on *server*, or delegate to *adapter* when present."""
    if adapter is not None:
        adapter.handler(server, route)
        return

    handler = route.resolve_handler()
    server.route(
        url_path(route.path),
        methods=[route.method.upper()] if route.method else None,
        name=route.name,
    )(handler)


def url_path(path: RoutePath) -> str:
    """Normalise a route path for Chirp (leading ``/``, no trailing ``/``).

    ``users/{id}`` -> ``/users/{id}``
    ``""``         -> ``/``

    """
    if not path.startswith("/"):
        path = "/" + path
    if path != "/":
        path = path.rstrip("/")
    return path
