"""fsroutes CLI — fsroutes routes.

Entry point for the ``fsroutes`` command-line interface.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the fsroutes CLI."""
    parser = argparse.ArgumentParser(
        prog="fsroutes",
        description="Resolve a directory tree into an HTTP route table.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # fsroutes routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved route table",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    routes_parser.add_argument(
        "--path",
        dest="paths",
        action="append",
        default=None,
        help="Search path to walk (repeatable; replaces configured paths)",
    )
    routes_parser.add_argument(
        "--prefix", default="", help="Prefix applied to every search path",
    )
    routes_parser.add_argument(
        "--json", action="store_true", help="Print routes as JSON",
    )
    routes_parser.add_argument(
        "--quiet", action="store_true", help="Suppress the summary banner",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from fsroutes import __version__

    return __version__


def _routes_command(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from fsroutes._errors import FsRoutesError
    from fsroutes.api import resolve_routes
    from fsroutes.banner import print_banner, print_routes
    from fsroutes.config_loader import load_config
    from fsroutes.observability import DirectoryWalked, LoadCollector

    paths = None
    if args.paths:
        paths = [{"path": path, "prefix": args.prefix} for path in args.paths]

    start = time.perf_counter()
    try:
        config = load_config(args.root, paths=paths)
        if args.prefix and not args.paths:
            # --prefix alone re-prefixes the configured search paths
            config = config.with_overrides(
                paths=[replace(entry, prefix=args.prefix) for entry in config.paths],
            )
        collector = LoadCollector()
        routes = asyncio.run(resolve_routes(config, collector=collector))
    except (FsRoutesError, OSError) as exc:
        print(f"fsroutes: error: {exc}", file=sys.stderr)
        return 1
    load_ms = (time.perf_counter() - start) * 1000

    if not args.quiet:
        warnings = [] if config.paths else ["No search paths configured"]
        print_banner(
            config,
            len(routes),
            load_ms=load_ms,
            directories=collector.log.count(DirectoryWalked),
            warnings=warnings,
        )
    print_routes(routes, as_json=args.json)
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        sys.exit(_routes_command(args))


if __name__ == "__main__":
    main()
