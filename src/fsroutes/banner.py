"""Route table output — summary banner and table for the CLI.

The banner goes to stderr with ANSI styling; the table goes to stdout
unstyled so it can be piped.  Detects ``NO_COLOR`` / ``TERM`` for safe
fallback.
"""

from __future__ import annotations

import json
import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fsroutes.config import LoaderConfig
    from fsroutes.route import RouteNode


# ---------------------------------------------------------------------------
# ANSI helpers: respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: LoaderConfig,
    route_count: int,
    *,
    load_ms: float = 0.0,
    directories: int = 0,
    warnings: list[str] | None = None,
) -> None:
    """Print the resolution summary to stderr.

    Args:
        config: Effective LoaderConfig.
        route_count: Number of routes resolved.
        load_ms: Time spent resolving in milliseconds.
        directories: Number of directories walked (omitted when 0).
        warnings: Optional list of warning messages to display.

    """
    from fsroutes import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}fsroutes{_RESET} {_DIM}v{__version__}{_RESET}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    routes_label = "route" if route_count == 1 else "routes"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(f"  {_DIM}├─{_RESET} {route_count} {routes_label} resolved{timing}")
    if directories:
        dirs_label = "directory" if directories == 1 else "directories"
        lines.append(f"  {_DIM}├─{_RESET} {directories} {dirs_label} walked")

    for entry in config.paths:
        prefix = f" {_CYAN}{entry.prefix}{_RESET}" if entry.prefix else ""
        lines.append(f"  {_DIM}├─{_RESET} {config.search_root(entry)}{prefix}")

    lines.append(f"  {_DIM}└─{_RESET} root: {_DIM}{config.root}{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def format_table(routes: Sequence[RouteNode]) -> str:
    """Render routes as an aligned ``METHOD  PATH  FILE`` table."""
    rows = [
        ((route.method or "").upper(), route.path or "/", str(route.filepath))
        for route in routes
    ]
    if not rows:
        return ""
    method_width = max(len(row[0]) for row in rows)
    path_width = max(len(row[1]) for row in rows)
    return "\n".join(
        f"{method:<{method_width}}  {path:<{path_width}}  {filepath}"
        for method, path, filepath in rows
    )


def format_json(routes: Sequence[RouteNode]) -> str:
    """Render routes as a JSON array of ``{method, path, filepath, name}``."""
    return json.dumps(
        [
            {
                "method": route.method,
                "path": route.path,
                "filepath": str(route.filepath),
                "name": route.name,
            }
            for route in routes
        ],
        indent=2,
    )


def print_routes(routes: Sequence[RouteNode], *, as_json: bool = False, file: TextIO | None = None) -> None:
    """Write the route table (or JSON) to *file* (default stdout)."""
    output = format_json(routes) if as_json else format_table(routes)
    if output:
        print(output, file=file if file is not None else sys.stdout)
