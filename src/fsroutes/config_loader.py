"""Load LoaderConfig from a project directory.

Looks in *root*, first match wins:

    .fsroutes                 JSON
    fsroutes.yaml / .yml      YAML
    fsroutes.toml             TOML
    pyproject.toml            [tool.fsroutes] table

A top-level ``fsroutes`` table inside a file is flattened.  A ``config`` key
redirects to another JSON, YAML or TOML file relative to *root*, which then
replaces the settings that referenced it.  Keyword overrides take
precedence over file values.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml

from fsroutes._errors import ConfigurationError
from fsroutes.config import LoaderConfig

# Keys accepted from config files
_CONFIG_KEYS = frozenset({"loader", "adapter", "route", "paths", "endpoints"})

# Section name inside a file (and under ``[tool]`` in pyproject.toml)
_SECTION = "fsroutes"

# Redirect to an "advanced" config file
_REDIRECT_KEY = "config"


def load_config(root: Path | str = ".", **overrides: Any) -> LoaderConfig:
    """Load LoaderConfig from *root*, merging any discovered config file.

    Raises:
        ConfigurationError: If a config file exists but cannot be parsed.

    """
    root = Path(root).resolve()
    file_config = read_config(root)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}
    return LoaderConfig(root=root, **merged)


def read_config(root: Path) -> dict[str, Any]:
    """Read the first config file found in *root*.  Empty dict if none."""
    for name, parser in (
        (".fsroutes", _parse_json),
        ("fsroutes.yaml", _parse_yaml),
        ("fsroutes.yml", _parse_yaml),
        ("fsroutes.toml", _parse_toml),
    ):
        path = root / name
        if path.is_file():
            return _follow_redirect(root, _flatten_section(parser(path), path))

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _parse_toml(pyproject).get("tool", {})
        section = tool.get(_SECTION) if isinstance(tool, dict) else None
        if isinstance(section, dict):
            return _follow_redirect(root, _select(section, pyproject))
    return {}


def _follow_redirect(root: Path, data: dict[str, Any]) -> dict[str, Any]:
    target = data.pop(_REDIRECT_KEY, None)
    if target is None:
        return data
    if not isinstance(target, str):
        msg = f"'{_REDIRECT_KEY}' must be a path string, got {type(target).__name__}"
        raise ConfigurationError(msg)
    path = root / target
    if not path.is_file():
        msg = f"Config file {path} referenced by '{_REDIRECT_KEY}' does not exist"
        raise ConfigurationError(msg)
    parser = _PARSERS_BY_SUFFIX.get(path.suffix, _parse_json)
    # The referenced file replaces the settings that pointed at it.
    resolved = _flatten_section(parser(path), path)
    resolved.pop(_REDIRECT_KEY, None)
    return resolved


def _parse_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Unable to parse {path} as JSON: {exc}"
        raise ConfigurationError(msg) from exc
    return _require_mapping(data, path)


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Unable to parse {path} as YAML: {exc}"
        raise ConfigurationError(msg) from exc
    return _require_mapping(data, path)


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Unable to parse {path} as TOML: {exc}"
        raise ConfigurationError(msg) from exc
    return _require_mapping(data, path)


_PARSERS_BY_SUFFIX = {
    ".json": _parse_json,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
    ".toml": _parse_toml,
}


def _require_mapping(data: object, path: Path) -> dict[str, Any]:
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping, got {type(data).__name__}"
        raise ConfigurationError(msg)
    return data


def _flatten_section(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Merge a top-level ``fsroutes`` table over the file's own keys."""
    result = {k: v for k, v in data.items() if k != _SECTION}
    section = data.get(_SECTION)
    if isinstance(section, dict):
        result.update(section)
    return _select(result, path)


def _select(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Keep config keys and the redirect key; reject unknown keys."""
    unknown = sorted(set(data) - _CONFIG_KEYS - {_REDIRECT_KEY})
    if unknown:
        msg = f"Unknown key(s) in {path}: {', '.join(unknown)}"
        raise ConfigurationError(msg)
    return dict(data)
