#!/usr/bin/env python3
# lineconsole/config.py
from __future__ import annotations

"""
Console settings.

Sources, later ones winning:
  1) built-in defaults (the _FIELDS table)
  2) files in the base directory, in _SOURCES order
  3) environment variables named LINECONSOLE_<KEY>

Every key in _FIELDS maps to one ConsoleConfig attribute and is coerced by
the function listed next to it. Keys nobody recognizes land in `extra`.
"""

import configparser
import json
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "LINECONSOLE_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ConsoleConfig:
    prompt: str = "> "
    # no history file unless one is configured
    history_file_path: Path | None = None
    log_file_path: Path | None = None
    log_level: str = "WARNING"
    max_completions: int = 100
    enable_completion: bool = True
    show_banner: bool = True
    clear_on_init: bool = True
    propagate_handler_errors: bool = False
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- coercion ----------

def _text(key: str, value: Any) -> str:
    return "" if value is None else str(value)


def _switch(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower()
    if word in ("1", "true", "yes", "y", "on"):
        return True
    if word in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"{key} must be a boolean, got: {value!r}")


def _positive(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an integer, got: {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer, got: {value!r}") from exc
    if number < 1:
        raise ValueError(f"{key} must be >= 1, got: {number}")
    return number


def _level(key: str, value: Any) -> str:
    name = str(value).strip().upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"{key} must be one of {list(LOG_LEVELS)}, got: {value!r}")
    return name


def _optional_path(key: str, value: Any) -> Path | None:
    """Empty or 'none' disables the file; otherwise expand ~ and $VARS."""
    if value is None or str(value).strip().lower() in ("", "none"):
        return None
    return Path(os.path.expandvars(os.path.expanduser(str(value)))).resolve()


_Coerce = Callable[[str, Any], Any]

# KEY: (attribute, default, coercion)
_FIELDS: dict[str, tuple[str, Any, _Coerce]] = {
    "PROMPT": ("prompt", "> ", _text),
    "HISTORY_FILE_PATH": ("history_file_path", "~/.lineconsole_history", _optional_path),
    "LOG_FILE_PATH": ("log_file_path", None, _optional_path),
    "LOG_LEVEL": ("log_level", "WARNING", _level),
    "MAX_COMPLETIONS": ("max_completions", 100, _positive),
    "ENABLE_COMPLETION": ("enable_completion", True, _switch),
    "SHOW_BANNER": ("show_banner", True, _switch),
    "CLEAR_ON_INIT": ("clear_on_init", True, _switch),
    "PROPAGATE_HANDLER_ERRORS": ("propagate_handler_errors", False, _switch),
}

DEFAULTS: dict[str, Any] = {key: default for key, (_, default, _) in _FIELDS.items()}


# ---------- sources ----------

def _read_dotenv(path: Path) -> Mapping[str, Any]:
    """KEY=VALUE lines; '#' comments; one pair of surrounding quotes is dropped."""
    entries: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.startswith("#") or not key.strip():
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        entries[key.strip()] = value
    return entries


def _read_ini(path: Path) -> Mapping[str, Any]:
    # section names are ignored; every section feeds the same flat key space
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> Mapping[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _read_toml(path: Path) -> Mapping[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


_SOURCES: tuple[tuple[str, Callable[[Path], Mapping[str, Any]]], ...] = (
    (".env", _read_dotenv),
    ("config.ini", _read_ini),
    ("config.json", _read_json),
    ("config.toml", _read_toml),
)


def _flatten(data: Any, prefix: str = "") -> dict[str, Any]:
    """{'console': {'prompt': '$ '}} -> {'CONSOLE_PROMPT': '$ '}"""
    if not isinstance(data, Mapping):
        return {}
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}_{key}".upper() if prefix else str(key).upper()
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


def _read_sources(base: Path) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for filename, reader in _SOURCES:
        path = base / filename
        if not path.is_file():
            continue
        try:
            merged.update(_flatten(reader(path)))
        except (json.JSONDecodeError, tomllib.TOMLDecodeError, configparser.Error) as exc:
            logger.warning("Ignoring unreadable %s: %s", path, exc)
    return merged


# ---------- public API ----------

def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> ConsoleConfig:
    """
    Build a ConsoleConfig from defaults, config files under `base` (default:
    the working directory) and LINECONSOLE_* variables in `environ` (default:
    os.environ). Raises ValueError on a malformed value. Writes nothing.
    """
    environ = os.environ if environ is None else environ
    raw = dict(DEFAULTS)
    raw.update(_read_sources(base or Path.cwd()))
    raw.update({
        name[len(ENV_PREFIX):]: value
        for name, value in environ.items()
        if name.startswith(ENV_PREFIX) and name[len(ENV_PREFIX):]
    })

    values = {attr: coerce(key, raw[key]) for key, (attr, _, coerce) in _FIELDS.items()}
    extra = {key: value for key, value in raw.items() if key not in _FIELDS}
    return ConsoleConfig(**values, extra=extra)
