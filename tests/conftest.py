"""Shared test fixtures for fsroutes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


def write_module(path: Path, content: str = "") -> Path:
    """Write a Python module (creating parent directories) and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def handler_source(name: str) -> str:
    """Source of an async handler function named *name*."""
    return f'async def {name}(request):\n    return "{name}"\n'


class RecordingServer:
    """Stand-in for a Chirp App: records ``app.route(...)(handler)`` calls."""

    def __init__(self) -> None:
        self.bound: list[tuple[str, tuple[str, ...], str | None, Callable[..., Any]]] = []

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.bound.append((path, tuple(methods or ()), name, func))
            return func

        return decorator


@pytest.fixture
def server() -> RecordingServer:
    return RecordingServer()


@pytest.fixture
def routes_tree(tmp_path: Path) -> Path:
    """Create a routes/ tree covering folder composition and overrides.

    Layout::

        routes/1/get.py, post.py                 -> 1
        routes/2/post.py                         -> 2
        routes/2/nested/index.py                 path = "params/nested"
        routes/2/nested/get.py                   -> params/nested
        routes/3/nested/get.py                   path = "~/rewrite" -> 3/rewrite
        routes/3/nested/post.py                  -> 3/nested
        routes/4/nested/nested/get.py            url = "/v2/custom"

    """
    routes = tmp_path / "routes"
    write_module(routes / "1" / "get.py", handler_source("get"))
    write_module(routes / "1" / "post.py", handler_source("post"))
    write_module(routes / "2" / "post.py", handler_source("post"))
    write_module(routes / "2" / "nested" / "index.py", 'path = "params/nested"\n')
    write_module(routes / "2" / "nested" / "get.py", handler_source("get"))
    write_module(
        routes / "3" / "nested" / "get.py",
        'path = "~/rewrite"\n\n\n' + handler_source("get"),
    )
    write_module(routes / "3" / "nested" / "post.py", handler_source("post"))
    write_module(
        routes / "4" / "nested" / "nested" / "get.py",
        'url = "/v2/custom"\n\n\n' + handler_source("get"),
    )
    return routes


@pytest.fixture
def advanced_tree(tmp_path: Path) -> Path:
    """A directory holding a single index.py with get and post handlers."""
    advanced = tmp_path / "advanced"
    write_module(
        advanced / "index.py",
        handler_source("get") + "\n\n" + handler_source("post"),
    )
    return advanced
