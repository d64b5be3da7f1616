"""Configuration file loading (YAML or JSON).

Example::

    defaults:
      comparator: maven
      include_snapshots: false
      search_reactor: true
    repository_url: https://repo1.maven.org/maven2
    components:
      - coordinate: org.example:lib
        version: 1.2.0
        upper_bound: 2.0.0
        versions: [1.2.0, 1.2.5, 1.3.0, 2.0.0]
    reactor:
      - org.example:lib:1.4.0-SNAPSHOT
    excludes:
      - org.example:internal
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants
from versioning.errors import ConfigError
from versioning.models import ComponentRequest
from versioning.parser import parse_config_entry
from versioning.settings import ComponentSettings, EngineSettings

logger = logging.getLogger(__name__)

_DEFAULT_KEYS = {
    "comparator": str,
    "include_snapshots": bool,
    "show_all": bool,
    "search_reactor": bool,
    "prefer_reactor": bool,
}
_COMPONENT_KEYS = {
    f.name: (bool if f.name.startswith(("include_", "search_", "prefer_")) else str)
    for f in fields(ComponentSettings)
}
_TOP_LEVEL_KEYS = {"defaults", "repository_url", "components", "reactor", "excludes"}
_NUMERIC_TAGS = {"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"}


class _StringScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric-looking scalars such as ``1.10`` as strings."""


_StringScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass
class LoadedConfig:
    """Everything a configuration file contributes to a run."""
    settings: EngineSettings = field(default_factory=EngineSettings)
    requests: List[ComponentRequest] = field(default_factory=list)
    versions: Dict[str, List[str]] = field(default_factory=dict)
    reactor: List[str] = field(default_factory=list)
    repository_url: Optional[str] = None


def _read(path: str) -> Any:
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as handle:
            if path.lower().endswith(".json"):
                return json.load(handle)
            return yaml.load(handle, Loader=_StringScalarLoader)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc


def _typed(where: str, key: str, value: Any, expected: type) -> Any:
    if value is None:
        return None
    if expected is str and isinstance(value, (int, float)) and not isinstance(value, bool):
        raise ConfigError(f"{where}: '{key}' must be a string; quote numeric versions such as \"{value}\"")
    if not isinstance(value, expected):
        raise ConfigError(f"{where}: '{key}' must be {expected.__name__}, got {type(value).__name__}")
    return value


def _string_list(where: str, value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list")
    return [str(_typed(where, "entry", item, str)) for item in value]


def _check_comparator(where: str, name: Optional[str]) -> None:
    if name is not None and name.strip().lower() not in Constants.SUPPORTED_COMPARATORS:
        raise ConfigError(
            f"{where}: unknown comparator '{name}' (expected one of: {', '.join(Constants.SUPPORTED_COMPARATORS)})"
        )


def _component(index: int, entry: Any, loaded: LoadedConfig) -> None:
    where = f"components[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} must be a mapping")
    unknown = set(entry) - set(_COMPONENT_KEYS) - {"version", "versions"}
    if unknown:
        raise ConfigError(f"{where}: unknown keys {', '.join(sorted(unknown))}")
    coordinate = _typed(where, "coordinate", entry.get("coordinate"), str)
    if not coordinate or coordinate.count(":") != 1:
        raise ConfigError(f"{where}: 'coordinate' must be groupId:artifactId")

    values = {key: _typed(where, key, entry.get(key), kind) for key, kind in _COMPONENT_KEYS.items()}
    values["coordinate"] = coordinate
    _check_comparator(where, values["comparator"])
    loaded.settings.components[coordinate] = ComponentSettings(**values)

    version = _typed(where, "version", entry.get("version"), str)
    loaded.requests.append(parse_config_entry(coordinate, version))
    if "versions" in entry:
        loaded.versions[coordinate] = _string_list(f"{where}.versions", entry["versions"])


def load_config(path: str) -> LoadedConfig:
    """Load and type-check a configuration file.

    Raises:
        ConfigError: if the file is missing, unreadable or ill-typed
    """
    data = _read(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigError(f"{path}: unknown keys {', '.join(sorted(unknown))}")

    loaded = LoadedConfig()
    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        raise ConfigError("defaults must be a mapping")
    for key, value in defaults.items():
        if key not in _DEFAULT_KEYS:
            raise ConfigError(f"defaults: unknown key '{key}'")
        loaded.settings.override(**{key: _typed("defaults", key, value, _DEFAULT_KEYS[key])})
    _check_comparator("defaults", loaded.settings.comparator)

    loaded.repository_url = _typed(path, "repository_url", data.get("repository_url"), str)

    components = data.get("components") or []
    if not isinstance(components, list):
        raise ConfigError("components must be a list")
    for index, entry in enumerate(components):
        _component(index, entry, loaded)

    loaded.reactor = _string_list("reactor", data.get("reactor"))
    loaded.settings.excludes = _string_list("excludes", data.get("excludes"))

    logger.debug("Loaded config from %s: %d components", path, len(loaded.requests))
    return loaded
