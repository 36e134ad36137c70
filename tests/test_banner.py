"""Tests for fsroutes.banner — summary banner and route table output."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path
from unittest.mock import patch

from fsroutes.banner import format_json, format_table, print_banner, print_routes
from fsroutes.config import LoaderConfig
from fsroutes.route import RouteNode


def _routes() -> list[RouteNode]:
    root = RouteNode(key="", filepath=Path("/srv/routes"))
    users = RouteNode(key="users", filepath=Path("/srv/routes/users"), parent=root)
    return [
        RouteNode(key="get", method="get", filepath=Path("/srv/routes/get.py"), parent=root),
        RouteNode(
            key="post", method="post", filepath=Path("/srv/routes/users/post.py"),
            parent=users, endpoint={"name": "create-user"},
        ),
    ]


class TestPrintBanner:
    """Tests for the resolution summary."""

    def _capture_banner(self, route_count: int = 5, **kwargs: object) -> str:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            config = LoaderConfig(
                root=Path("/tmp/test-app"),
                paths=["routes", {"path": "admin", "prefix": "/admin"}],
            )
            print_banner(config, route_count, **kwargs)
        return buf.getvalue()

    def test_summary(self) -> None:
        output = self._capture_banner(load_ms=42.5)
        assert "fsroutes" in output
        assert "5 routes resolved" in output
        assert "42ms" in output
        assert "/tmp/test-app/routes" in output
        assert "/admin" in output
        assert "root:" in output

    def test_single_route_singular(self) -> None:
        output = self._capture_banner(route_count=1)
        assert "1 route resolved" in output
        assert "routes resolved" not in output

    def test_no_timing_when_zero(self) -> None:
        assert "ms" not in self._capture_banner()

    def test_directories_walked(self) -> None:
        assert "3 directories walked" in self._capture_banner(directories=3)
        assert "1 directory walked" in self._capture_banner(directories=1)
        assert "walked" not in self._capture_banner()

    def test_warnings_displayed(self) -> None:
        output = self._capture_banner(warnings=["No search paths configured"])
        assert "No search paths configured" in output


class TestFormatTable:
    """format_table — aligned METHOD PATH FILE rows."""

    def test_rows(self) -> None:
        lines = format_table(_routes()).splitlines()
        assert len(lines) == 2
        assert lines[0].split() == ["GET", "/", "/srv/routes/get.py"]
        assert lines[1].split() == ["POST", "users", "/srv/routes/users/post.py"]

    def test_columns_aligned(self) -> None:
        lines = format_table(_routes()).splitlines()
        assert lines[0].index("/srv") == lines[1].index("/srv")

    def test_empty(self) -> None:
        assert format_table([]) == ""


class TestFormatJson:
    """format_json — machine-readable route table."""

    def test_fields(self) -> None:
        data = json.loads(format_json(_routes()))
        assert data[1] == {
            "method": "post",
            "path": "users",
            "filepath": "/srv/routes/users/post.py",
            "name": "create-user",
        }
        assert data[0]["path"] == ""


class TestPrintRoutes:
    """print_routes — stdout output."""

    def test_table_to_file(self) -> None:
        buf = io.StringIO()
        print_routes(_routes(), file=buf)
        assert "POST" in buf.getvalue()

    def test_json_to_file(self) -> None:
        buf = io.StringIO()
        print_routes(_routes(), as_json=True, file=buf)
        assert len(json.loads(buf.getvalue())) == 2

    def test_nothing_for_empty(self) -> None:
        buf = io.StringIO()
        print_routes([], file=buf)
        assert buf.getvalue() == ""
