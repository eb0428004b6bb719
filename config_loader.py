"""Helpers for resolving aggregation settings from config files and env."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from bundles.models import DEFAULT_MAX_CHUNK_BYTES, AggregateConfig

DEFAULT_CONFIG_NAME = "aggregate.config.json"

ENV_CONFIG = "AGGREGATE_CONFIG"
ENV_MAX_CHUNK_BYTES = "AGGREGATE_MAX_CHUNK_BYTES"
ENV_MAX_CHUNK_ITEMS = "AGGREGATE_MAX_CHUNK_ITEMS"
ENV_VERSION = "GITHUB_SHA"


class ConfigError(Exception):
    """Raised when runtime configuration cannot be loaded."""


def _resolve_config_path(
    path: Optional[str], environ: Mapping[str, str]
) -> Optional[str]:
    """Return the config path to load, or None when no file applies.

    An explicitly requested file (argument or environment) must exist; the
    default file name is optional.
    """
    requested = path or environ.get(ENV_CONFIG)
    candidate = requested or DEFAULT_CONFIG_NAME
    expanded = os.path.expanduser(candidate)
    if os.path.isabs(expanded):
        if os.path.isfile(expanded):
            return expanded
    else:
        resolved = os.path.abspath(os.path.join(os.getcwd(), expanded))
        if os.path.isfile(resolved):
            return resolved

    if requested:
        raise ConfigError(f"Configuration file not found: {candidate}")
    return None


def _resolve_path(value: str, base_dir: str) -> str:
    """Resolve ``value`` into an absolute path relative to ``base_dir``."""
    expanded = os.path.expanduser(value)
    if os.path.isabs(expanded):
        return expanded
    return os.path.abspath(os.path.join(base_dir, expanded))


def _positive_int(value: Any, name: str) -> int:
    """Coerce ``value`` into a positive integer or raise ConfigError."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    try:
        number = int(str(value).strip(), 10)
    except ValueError as exc:
        raise ConfigError(
            f"{name} must be a positive integer, got {value!r}"
        ) from exc
    if number <= 0:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")
    return number


def load_config(
    path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Load a JSON config file and normalize any filesystem paths."""
    env = os.environ if environ is None else environ
    config_path = _resolve_config_path(path, env)
    if config_path is None:
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as config_file:
            data = json.load(config_file)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be an object: {config_path}")

    base_dir = os.path.dirname(config_path)
    resolved: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str) and key.endswith(("_dir", "_path")):
            resolved[key] = _resolve_path(value, base_dir)
        else:
            resolved[key] = value

    return resolved


def config_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Return the settings supplied through environment variables."""
    env = os.environ if environ is None else environ
    settings: Dict[str, Any] = {}
    if env.get(ENV_MAX_CHUNK_BYTES):
        settings["max_chunk_bytes"] = env[ENV_MAX_CHUNK_BYTES]
    if env.get(ENV_MAX_CHUNK_ITEMS):
        settings["max_chunk_items"] = env[ENV_MAX_CHUNK_ITEMS]
    if env.get(ENV_VERSION):
        settings["version"] = env[ENV_VERSION]
    return settings


def resolve_aggregate_config(
    *,
    config_path: Optional[str] = None,
    root: Optional[str] = None,
    max_chunk_bytes: Optional[int] = None,
    max_chunk_items: Optional[int] = None,
    version: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AggregateConfig:
    """Combine CLI overrides, environment and config file into a config.

    Precedence is CLI arguments, then environment variables, then the JSON
    config file, then the built-in defaults. A blank version stamp counts as
    no version at all.
    """
    file_settings = load_config(config_path, environ)
    env_settings = config_from_env(environ)

    def pick(key: str, override: Any) -> Any:
        if override is not None:
            return override
        if key in env_settings:
            return env_settings[key]
        return file_settings.get(key)

    resolved_root = root or file_settings.get("root_dir") or os.getcwd()

    raw_bytes = pick("max_chunk_bytes", max_chunk_bytes)
    resolved_bytes = (
        _positive_int(raw_bytes, "max_chunk_bytes")
        if raw_bytes is not None
        else DEFAULT_MAX_CHUNK_BYTES
    )

    raw_items = pick("max_chunk_items", max_chunk_items)
    resolved_items = (
        _positive_int(raw_items, "max_chunk_items")
        if raw_items is not None
        else None
    )

    raw_version = pick("version", version)
    resolved_version = str(raw_version).strip() if raw_version else None

    return AggregateConfig(
        root=Path(_resolve_path(str(resolved_root), os.getcwd())),
        max_chunk_bytes=resolved_bytes,
        version=resolved_version or None,
        max_chunk_items=resolved_items,
    )
