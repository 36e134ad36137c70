"""fsroutes error hierarchy.

All fsroutes-specific errors inherit from FsRoutesError for easy catching.
Filesystem failures surface as the built-in ``OSError`` and are not wrapped.
"""


class FsRoutesError(Exception):
    """Base error for all fsroutes operations."""


class ConfigurationError(FsRoutesError):
    """Invalid or unresolvable configuration.

    Raised before any directory is walked: unknown loader, malformed adapter,
    custom route class not extending ``RouteNode``, bad search paths or
    matcher entries, unparseable config files.
    """


class MalformedModuleError(FsRoutesError):
    """An endpoint module failed to evaluate or exposes invalid metadata."""
