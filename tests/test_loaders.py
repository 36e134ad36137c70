"""Tests for fsroutes.loaders — loader resolution and the Chirp loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from fsroutes._errors import ConfigurationError
from fsroutes.adapter import AdapterHandle
from fsroutes.loaders import BUILTIN_LOADERS, resolve_loader
from fsroutes.loaders import chirp
from fsroutes.loaders.chirp import url_path
from fsroutes.modules import ImportlibResolver
from fsroutes.route import RouteNode
from tests.conftest import RecordingServer, write_module


class TestResolveLoader:
    """resolve_loader — callables, built-in names and references."""

    def test_builtin_chirp(self, tmp_path: Path) -> None:
        assert "chirp" in BUILTIN_LOADERS
        assert resolve_loader("chirp", tmp_path, ImportlibResolver()) is chirp.load

    def test_callable_passthrough(self, tmp_path: Path) -> None:
        def loader(server: Any, route: RouteNode, adapter: Any) -> None:
            pass

        assert resolve_loader(loader, tmp_path, ImportlibResolver()) is loader

    def test_dotted_reference(self, tmp_path: Path) -> None:
        loader = resolve_loader("fsroutes.loaders.chirp:load", tmp_path, ImportlibResolver())
        assert loader is chirp.load

    def test_file_reference_uses_load(self, tmp_path: Path) -> None:
        write_module(tmp_path / "bind.py", "def load(server, route, adapter):\n    return 'ok'\n")
        loader = resolve_loader("bind", tmp_path, ImportlibResolver())
        assert loader(None, None, None) == "ok"

    @pytest.mark.parametrize("raw", [None, ""])
    def test_undefined(self, tmp_path: Path, raw: Any) -> None:
        with pytest.raises(ConfigurationError, match="loader is undefined"):
            resolve_loader(raw, tmp_path, ImportlibResolver())

    def test_not_callable(self, tmp_path: Path) -> None:
        write_module(tmp_path / "bind.py", "load = 42\n")
        with pytest.raises(ConfigurationError, match="must resolve to a function"):
            resolve_loader("bind", tmp_path, ImportlibResolver())

    def test_unknown_name(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="unknown-server"):
            resolve_loader("unknown-server", tmp_path, ImportlibResolver())

    def test_missing_loader_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="no such file"):
            resolve_loader("./loaders/custom.py", tmp_path, ImportlibResolver())


class TestUrlPath:
    """url_path — Chirp path normalisation."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("", "/"),
            ("/", "/"),
            ("users", "/users"),
            ("/users/", "/users"),
            ("users/{id}", "/users/{id}"),
        ],
    )
    def test_normalised(self, path: str, expected: str) -> None:
        assert url_path(path) == expected


class TestChirpLoad:
    """chirp.load — binds through server.route()."""

    @staticmethod
    def _route(endpoint: Any, method: str = "get") -> RouteNode:
        parent = RouteNode(key="users")
        return RouteNode(key=method, method=method, endpoint=endpoint, parent=parent)

    def test_registers_method_handler(self) -> None:
        async def get(request: Any) -> str:
            return "users"

        class Endpoint:
            pass

        endpoint = Endpoint()
        endpoint.get = get  # type: ignore[attr-defined]
        server = RecordingServer()
        chirp.load(server, self._route(endpoint))
        assert server.bound == [("/users", ("GET",), None, get)]

    def test_passes_display_name(self) -> None:
        def handler(request: Any) -> None:
            pass

        server = RecordingServer()
        chirp.load(server, self._route({"name": "user-list", "handler": handler}, "post"))
        ((path, methods, name, func),) = server.bound
        assert (path, methods, name) == ("/users", ("POST",), "user-list")

    def test_adapter_takes_over(self) -> None:
        calls: list[tuple[Any, RouteNode]] = []
        adapter = AdapterHandle(target=None, handle=lambda s, r: calls.append((s, r)))
        server = RecordingServer()
        route = self._route(None)
        chirp.load(server, route, adapter)
        assert calls == [(server, route)]
        assert server.bound == []
