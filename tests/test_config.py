"""Tests for fsroutes.config."""

from pathlib import Path

import pytest

from fsroutes._errors import ConfigurationError
from fsroutes.config import LoaderConfig, SearchPath


class TestSearchPath:
    """SearchPath.coerce — accepted entry shapes."""

    def test_from_string(self) -> None:
        entry = SearchPath.coerce("routes")
        assert entry == SearchPath(path=Path("routes"))
        assert entry.prefix == ""
        assert entry.endpoints == {}

    def test_from_path(self) -> None:
        assert SearchPath.coerce(Path("routes")).path == Path("routes")

    def test_from_mapping(self) -> None:
        entry = SearchPath.coerce({"path": "admin", "prefix": "/admin", "endpoints": {"get": "list"}})
        assert entry.path == Path("admin")
        assert entry.prefix == "/admin"
        assert entry.endpoints == {"get": "list"}

    def test_passthrough(self) -> None:
        entry = SearchPath(path=Path("routes"))
        assert SearchPath.coerce(entry) is entry

    def test_mapping_without_path(self) -> None:
        with pytest.raises(ConfigurationError, match="has no 'path'"):
            SearchPath.coerce({"prefix": "/api"})

    def test_non_string_prefix(self) -> None:
        with pytest.raises(ConfigurationError, match="'prefix' must be a str"):
            SearchPath.coerce({"path": "routes", "prefix": 1})

    def test_non_mapping_endpoints(self) -> None:
        with pytest.raises(ConfigurationError, match="'endpoints' must be a mapping"):
            SearchPath.coerce({"path": "routes", "endpoints": ["get"]})

    def test_unsupported_entry(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported"):
            SearchPath.coerce(42)


class TestLoaderConfig:
    """LoaderConfig — frozen dataclass with sensible defaults."""

    def test_defaults(self) -> None:
        config = LoaderConfig()
        assert config.root == Path.cwd()
        assert config.loader == "chirp"
        assert config.adapter is None
        assert config.route is None
        assert config.paths == ()
        assert config.endpoints == {}

    def test_frozen(self) -> None:
        config = LoaderConfig()
        with pytest.raises(AttributeError):
            config.loader = "other"  # type: ignore[misc]

    def test_relative_root_resolved(self) -> None:
        assert LoaderConfig(root=Path(".")).root == Path.cwd()

    def test_single_path_normalized(self, tmp_path: Path) -> None:
        config = LoaderConfig(root=tmp_path, paths="routes")
        assert config.paths == (SearchPath(path=Path("routes")),)

    def test_mixed_paths_normalized(self, tmp_path: Path) -> None:
        config = LoaderConfig(root=tmp_path, paths=["routes", {"path": "admin", "prefix": "/admin"}])
        assert [entry.path for entry in config.paths] == [Path("routes"), Path("admin")]
        assert config.paths[1].prefix == "/admin"

    def test_invalid_paths(self) -> None:
        with pytest.raises(ConfigurationError, match="'paths' must be"):
            LoaderConfig(paths=42)

    def test_invalid_endpoints(self) -> None:
        with pytest.raises(ConfigurationError, match="'endpoints' must be a mapping"):
            LoaderConfig(endpoints=["get"])

    def test_search_root(self, tmp_path: Path) -> None:
        config = LoaderConfig(root=tmp_path, paths="routes")
        assert config.search_root(config.paths[0]) == tmp_path / "routes"


class TestWithOverrides:
    """LoaderConfig.with_overrides — per-call options."""

    def test_no_options_returns_same(self) -> None:
        config = LoaderConfig()
        assert config.with_overrides() is config

    def test_overrides_applied(self, tmp_path: Path) -> None:
        config = LoaderConfig(root=tmp_path, paths="routes")
        updated = config.with_overrides(paths=["api"], loader="custom")
        assert [entry.path for entry in updated.paths] == [Path("api")]
        assert updated.loader == "custom"
        assert config.loader == "chirp"

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration option"):
            LoaderConfig().with_overrides(prefix="/api")
