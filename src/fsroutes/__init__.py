"""fsroutes — Turn a directory tree into HTTP routes.

Folders become path segments, files named after HTTP methods become
handlers, and a pluggable loader binds each resolved route to your server.

Quick start::

    from fsroutes import LoaderConfig, load_api

    config = LoaderConfig(paths=["routes"])
    routes = await load_api(app, config)

Layout::

    routes/
        users/
            index.py      # optional: path = "people" renames the folder
            get.py        # GET  users
            post.py       # POST users

Synchronous startup code can call ``fsroutes.load(app, config)``.  To inspect
the route table without binding anything, use ``resolve_routes(config)`` or
the ``fsroutes routes`` command.

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "Adapter",
    "ConfigurationError",
    "FsRoutesError",
    "LoaderConfig",
    "MalformedModuleError",
    "RouteNode",
    "SearchPath",
    "__version__",
    "load",
    "load_api",
    "load_config",
    "resolve_routes",
]

_LAZY: dict[str, str] = {
    "Adapter": "fsroutes.adapter",
    "ConfigurationError": "fsroutes._errors",
    "FsRoutesError": "fsroutes._errors",
    "MalformedModuleError": "fsroutes._errors",
    "LoaderConfig": "fsroutes.config",
    "SearchPath": "fsroutes.config",
    "RouteNode": "fsroutes.route",
    "load": "fsroutes.api",
    "load_api": "fsroutes.api",
    "resolve_routes": "fsroutes.api",
    "load_config": "fsroutes.config_loader",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import fsroutes`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is not None:
        import importlib

        return getattr(importlib.import_module(module_name), name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
