"""Settings loading (YAML-first + strict env expansion).

- YAML is the primary source of truth for project-wide defaults.
- A `.env` next to the settings file is loaded when present, without
  overriding variables that are already set.

Env expansion syntax:
  - `${ENV_VAR}` inside YAML string values.
  - Expansion is strict: missing or empty env values raise ConfigError.

Example::

    detect_order: [ASCII, UTF-8, "${LEGACY_ENCODING}"]
    default_fill: " "
"""

from __future__ import annotations

import codecs
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .errors import ConfigError

__all__ = [
    "ConfigError",
    "DEFAULT_DETECT_ORDER",
    "DEFAULT_FILL",
    "Settings",
    "get_settings",
    "load_settings",
    "settings_from_mapping",
    "use_settings",
]


DEFAULT_DETECT_ORDER: tuple[str, ...] = ("ASCII", "UTF-8")
DEFAULT_FILL = " "

_ENV_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


@dataclass(frozen=True, slots=True)
class Settings:
    detect_order: tuple[str, ...] = DEFAULT_DETECT_ORDER
    default_fill: str = DEFAULT_FILL


_active = Settings()


def get_settings() -> Settings:
    return _active


def use_settings(settings: Settings) -> Settings:
    """Make `settings` the process-wide defaults and return the previous ones."""

    global _active
    previous = _active
    _active = settings
    return previous


def _expand_env_in_str(value: str, *, path: str) -> str:
    def repl(match: re.Match[str]) -> str:
        key = match.group(1)
        resolved = os.environ.get(key)
        if resolved is None:
            raise ConfigError(f"environment variable {key!r} is missing", path=path)
        if resolved == "":
            raise ConfigError(f"environment variable {key!r} is empty", path=path)
        return resolved

    return _ENV_PATTERN.sub(repl, value)


def _expand_env(obj: Any, *, path: str) -> Any:
    if isinstance(obj, str):
        return _expand_env_in_str(obj, path=path)
    if isinstance(obj, list):
        return [_expand_env(v, path=f"{path}[{i}]") for i, v in enumerate(obj)]
    if isinstance(obj, dict):
        return {k: _expand_env(v, path=f"{path}.{k}" if path else str(k)) for k, v in obj.items()}
    return obj


def _check_encoding(label: Any, *, path: str) -> str:
    if not isinstance(label, str) or not label.strip():
        raise ConfigError("must be a non-empty string", path=path)
    try:
        codecs.lookup(label)
    except LookupError as e:
        raise ConfigError(f"unknown encoding {label!r}", path=path) from e
    return label


def settings_from_mapping(raw: Mapping[str, Any]) -> Settings:
    order_raw = raw.get("detect_order", list(DEFAULT_DETECT_ORDER))
    if isinstance(order_raw, str):
        order_raw = [part.strip() for part in order_raw.split(",")]
    if not isinstance(order_raw, list) or not order_raw:
        raise ConfigError("must be a non-empty list of encodings", path="detect_order")
    detect_order = tuple(
        _check_encoding(label, path=f"detect_order[{i}]") for i, label in enumerate(order_raw)
    )

    fill = raw.get("default_fill", DEFAULT_FILL)
    if not isinstance(fill, str) or fill == "":
        raise ConfigError("must be a non-empty string", path="default_fill")

    return Settings(detect_order=detect_order, default_fill=fill)


def load_settings(path: str | Path) -> Settings:
    """Load a YAML settings file and expand `${ENV_VAR}` placeholders.

    Raises:
        ConfigError: If the file is missing, invalid, or references missing env vars.
    """

    settings_path = Path(path).expanduser()
    if not settings_path.exists():
        raise ConfigError("settings file not found", path=str(settings_path))

    env_path = settings_path.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path, override=False)

    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to parse YAML: {e}", path=str(settings_path)) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError("top level must be a YAML mapping", path=str(settings_path))

    return settings_from_mapping(_expand_env(raw, path=""))
