"""fsroutes configuration.

LoaderConfig is the central configuration object, frozen after creation and
threaded explicitly through ``load_api``.  There is no process-wide default:
callers build one directly or via :func:`fsroutes.config_loader.load_config`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from fsroutes._errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class SearchPath:
    """One configured root directory to walk.

    Attributes:
        path: Directory to walk.  Relative paths resolve against
            ``LoaderConfig.root``.
        prefix: Segment prepended to every path resolved in this subtree.
        endpoints: Matcher entries for this subtree only; they override the
            global ``LoaderConfig.endpoints`` on key collision.

    """

    path: Path
    prefix: str = ""
    endpoints: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, entry: object) -> SearchPath:
        """Build a SearchPath from a string, path, mapping or SearchPath.

        Raises:
            ConfigurationError: If *entry* has no usable ``path``.

        """
        if isinstance(entry, SearchPath):
            return entry
        if isinstance(entry, (str, Path)):
            return cls(path=Path(entry))
        if isinstance(entry, Mapping):
            src = entry.get("path")
            if not isinstance(src, (str, Path)) or not str(src):
                msg = f"Search path entry {dict(entry)!r} has no 'path'"
                raise ConfigurationError(msg)
            prefix = entry.get("prefix") or ""
            if not isinstance(prefix, str):
                msg = f"Search path {src!r}: 'prefix' must be a str, got {type(prefix).__name__}"
                raise ConfigurationError(msg)
            endpoints = entry.get("endpoints") or {}
            if not isinstance(endpoints, Mapping):
                msg = f"Search path {src!r}: 'endpoints' must be a mapping"
                raise ConfigurationError(msg)
            return cls(path=Path(src), prefix=prefix, endpoints=dict(endpoints))
        msg = f"Unsupported search path entry: {entry!r}"
        raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Configuration for one ``load_api`` invocation.

    Attributes:
        root: Base directory for relative search paths and for loader,
              adapter and route references given as file paths.  Always
              resolved to an absolute path on construction.
        loader: Loader function, built-in loader name (``"chirp"``), or a
                reference (``"pkg.module:attr"`` or ``"path/to/file.py"``).
        adapter: Optional adapter function, class, object or reference.
        route: Optional custom ``RouteNode`` subclass or reference.
        paths: Search paths.  A single entry or a sequence of entries; each
               a path string, a ``{path, prefix, endpoints}`` mapping or a
               :class:`SearchPath`.
        endpoints: Global matcher table (method key -> filename or
                   ``{"name": ...}`` descriptor).

    """

    root: Path = field(default_factory=Path.cwd)
    loader: Any = "chirp"
    adapter: Any = None
    route: Any = None
    paths: tuple[SearchPath, ...] = ()
    endpoints: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        root = Path(self.root)
        if not root.is_absolute():
            root = root.resolve()
        object.__setattr__(self, "root", root)
        object.__setattr__(self, "paths", _normalize_paths(self.paths))
        if self.endpoints is None:
            object.__setattr__(self, "endpoints", {})
        elif not isinstance(self.endpoints, Mapping):
            msg = f"'endpoints' must be a mapping, got {type(self.endpoints).__name__}"
            raise ConfigurationError(msg)
        else:
            object.__setattr__(self, "endpoints", dict(self.endpoints))

    def with_overrides(self, **options: Any) -> LoaderConfig:
        """Return a copy with *options* applied.  Unknown keys are rejected."""
        if not options:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = f"Unknown configuration option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return replace(self, **options)

    def search_root(self, entry: SearchPath) -> Path:
        """Absolute directory for *entry*."""
        return self.root / entry.path


def _normalize_paths(paths: object) -> tuple[SearchPath, ...]:
    if paths is None or paths == "":
        return ()
    if isinstance(paths, (str, Path, Mapping, SearchPath)):
        return (SearchPath.coerce(paths),)
    if isinstance(paths, Sequence):
        return tuple(SearchPath.coerce(entry) for entry in paths)
    msg = f"'paths' must be a path, mapping or sequence, got {type(paths).__name__}"
    raise ConfigurationError(msg)
