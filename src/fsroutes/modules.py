"""Endpoint module resolution.

The walker never imports anything itself; it asks a :class:`ModuleResolver`
for the value exported at a file path.  :class:`ImportlibResolver` is the
default, and tests substitute any callable returning canned values.

References to loaders, adapters and route classes in configuration are
resolved by :func:`resolve_reference`::

    "fsroutes.loaders.chirp:load"   -> importable module + attribute
    "./adapters/auth.py"            -> file relative to the config root
    "adapters/auth:AuthAdapter"     -> file (``.py`` optional) + attribute
"""

import hashlib
import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any, Protocol

from fsroutes._errors import ConfigurationError, MalformedModuleError


class ModuleResolver(Protocol):
    """Return the endpoint value exported by the module at *path*."""

    def __call__(self, path: Path) -> Any: ...


class ImportlibResolver:
    """Load Python files as modules without touching ``sys.path``.

    Each file is executed at most once per resolver; later lookups return the
    cached module.  Modules are registered in ``sys.modules`` under a name
    derived from their absolute path.  The namespace package itself is not
    registered, so endpoints cannot use relative imports.

    Args:
        namespace: Prefix for the generated module names.

    """

    __slots__ = ("_cache", "_namespace")

    def __init__(self, namespace: str = "fsroutes_endpoints") -> None:
        self._namespace = namespace
        self._cache: dict[Path, Any] = {}

    def __call__(self, path: Path) -> Any:
        path = Path(path).resolve()
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        module_name = self._module_name(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            msg = f"Cannot load endpoint module {path}"
            raise MalformedModuleError(msg)

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except OSError:
            sys.modules.pop(module_name, None)
            raise
        except Exception as exc:
            sys.modules.pop(module_name, None)
            msg = f"Failed to load endpoint module {path}: {exc}"
            raise MalformedModuleError(msg) from exc

        self._cache[path] = module
        return module

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and Path(path).resolve() in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def _module_name(self, path: Path) -> str:
        # routes/api/get.py -> fsroutes_endpoints.get_1a2b3c4d5e6f
        digest = hashlib.sha1(str(path).encode(), usedforsecurity=False).hexdigest()[:12]
        stem = "".join(ch if ch.isalnum() else "_" for ch in path.stem)
        return f"{self._namespace}.{stem}_{digest}"


def resolve_reference(
    target: str,
    root: Path,
    resolver: ModuleResolver,
    *,
    default_attr: str | None = None,
) -> Any:
    """Resolve a configuration reference to a Python object.

    *target* is ``"<module>[:attr]"`` where ``<module>`` is a file path
    relative to *root* (``.py`` suffix optional) or an importable module name.
    Without ``:attr``, *default_attr* is taken from the module when present;
    otherwise the module itself is returned.

    Raises:
        ConfigurationError: If the module cannot be found or lacks ``attr``.

    """
    module_part, sep, attr = target.rpartition(":")
    if not sep or not attr.isidentifier():
        module_part, attr = target, ""

    file_path = _locate_file(module_part, root)
    if file_path is not None:
        module = resolver(file_path)
    elif _is_file_reference(module_part):
        msg = f"Cannot resolve {target!r}: no such file under {root}"
        raise ConfigurationError(msg)
    else:
        try:
            module = importlib.import_module(module_part)
        except (ImportError, ValueError) as exc:
            msg = f"Cannot resolve {target!r}: no file under {root} and no importable module"
            raise ConfigurationError(msg) from exc

    if attr:
        if not hasattr(module, attr):
            msg = f"Cannot resolve {target!r}: module has no attribute {attr!r}"
            raise ConfigurationError(msg)
        return getattr(module, attr)
    if default_attr is not None and hasattr(module, default_attr):
        return getattr(module, default_attr)
    return module


def _locate_file(reference: str, root: Path) -> Path | None:
    """Find *reference* as a Python file under *root*, or return None."""
    if not reference:
        return None
    candidate = root / reference
    if candidate.is_file():
        return candidate
    with_suffix = candidate.with_name(candidate.name + ".py")
    if with_suffix.is_file():
        return with_suffix
    index = candidate / "index.py"
    if candidate.is_dir() and index.is_file():
        return index
    return None


def _is_file_reference(reference: str) -> bool:
    """True for references that can only name a file (``./x``, ``a/b``, ``x.py``)."""
    return (
        reference.startswith(".")
        or "/" in reference
        or "\\" in reference
        or reference.endswith(".py")
    )
