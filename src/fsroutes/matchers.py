"""Matcher table — bind non-conventionally named files to HTTP methods.

Configured as a mapping from method key to either a literal filename or a
``{"name": ...}`` descriptor::

    endpoints = {
        "post": "index",             # index.py handles POST
        "get": {"name": "index"},    # ...and GET
        "delete": {},                # delete.py (name defaults to the key)
    }

Matching is case-insensitive on the file stem.  Keys that are not HTTP
methods never match, but still reserve their name from the conventional
``<method>.py`` check.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fsroutes._errors import ConfigurationError
from fsroutes.methods import HTTP_METHODS, is_method

if TYPE_CHECKING:
    from fsroutes._types import MatcherSpec, MethodToken


@dataclass(frozen=True, slots=True)
class MethodMatcher:
    """A single matcher entry.

    Attributes:
        method: Lower-cased HTTP method the matched file is bound to.
        name: File stem to match (compared case-insensitively).

    """

    method: str
    name: str

    def matches(self, stem: str) -> bool:
        return self.name.lower() == stem.lower()


@dataclass(frozen=True, slots=True)
class MatcherTable:
    """Effective matcher table for one search path.

    Attributes:
        matchers: Matchers for recognised HTTP methods, in configuration order.
        reserved: Lower-cased keys of every configured entry.

    """

    matchers: tuple[MethodMatcher, ...] = ()
    reserved: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        global_endpoints: Mapping[str, MatcherSpec] | None = None,
        local_endpoints: Mapping[str, MatcherSpec] | None = None,
    ) -> MatcherTable:
        """Merge global and per-path matcher entries (per-path wins).

        Raises:
            ConfigurationError: If an entry is neither a string, a mapping
                nor a :class:`MethodMatcher`.

        """
        merged: dict[str, Any] = {**(global_endpoints or {}), **(local_endpoints or {})}
        matchers: list[MethodMatcher] = []
        for key, spec in merged.items():
            method = str(key).lower()
            name = _matcher_name(key, spec)
            if method not in HTTP_METHODS:
                continue
            matchers.append(MethodMatcher(method=method, name=name))
        reserved = frozenset(str(key).lower() for key in merged)
        return cls(matchers=tuple(matchers), reserved=reserved)

    def methods_for(self, stem: str) -> tuple[MethodToken, ...]:
        """Return the methods a file named *stem* is bound to.

        Configured matchers win; every matching entry binds.  Otherwise a stem
        that is itself an HTTP method binds to that method, unless a matcher
        key reserves the name.
        """
        matched = tuple(m.method for m in self.matchers if m.matches(stem))
        if matched:
            return matched
        lowered = stem.lower()
        if lowered in self.reserved:
            return ()
        if is_method(lowered):
            return (lowered,)
        return ()

    def __len__(self) -> int:
        return len(self.matchers)


def _matcher_name(key: object, spec: object) -> str:
    if isinstance(spec, MethodMatcher):
        return spec.name
    if isinstance(spec, str):
        return spec
    if isinstance(spec, Mapping):
        name = spec.get("name") or key
        if not isinstance(name, str):
            msg = f"Matcher {key!r}: 'name' must be a str, got {type(name).__name__}"
            raise ConfigurationError(msg)
        return name
    msg = f"Matcher {key!r} must be a filename or a {{'name': ...}} mapping, got {spec!r}"
    raise ConfigurationError(msg)
