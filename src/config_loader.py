"""Configuration loader that parses and validates the optional jcheck TOML file."""

from __future__ import annotations

import tomllib
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

from .datatypes import AppConfig, CLIConfig, DisplayConfig, DocumentConfig, ParseConfig

_SECTIONS = {
    "parse": ParseConfig,
    "display": DisplayConfig,
    "document": DocumentConfig,
    "cli": CLIConfig,
}


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _sanitize_section(raw: Any, name: str, cls):
    """
    Coerce a raw TOML table into an instance of ``cls`` with cleaned booleans.

    Parameters:
        raw (Any): Raw TOML section data.
        name (str): Section name used when reporting validation errors.
        cls: Dataclass type used to construct the section object.

    Returns:
        Any: Instantiated dataclass populated with values from ``raw``.

    Raises:
        ConfigError: If the section is not a table or contains unknown keys.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"[{name}] must be a table")
    bool_fields = {field.name for field in fields(cls) if field.type is bool}
    cleaned: Dict[str, Any] = {}
    for key, value in raw.items():
        if key in bool_fields:
            cleaned[key] = _coerce_bool(value, f"{name}.{key}")
        else:
            cleaned[key] = value
    try:
        return cls(**cleaned)
    except TypeError as exc:
        raise ConfigError(f"Invalid keys in [{name}]: {exc}") from exc


def _validate_parse(parse: ParseConfig) -> None:
    if isinstance(parse.begin, bool) or not isinstance(parse.begin, int) or parse.begin < 0:
        raise ConfigError("parse.begin must be an integer >= 0")
    if parse.end is None:
        return
    if isinstance(parse.end, bool) or not isinstance(parse.end, int) or parse.end < 0:
        raise ConfigError("parse.end must be an integer >= 0")
    if parse.end < parse.begin:
        raise ConfigError("parse.end must be >= parse.begin")


def load_config_text(text: str) -> AppConfig:
    """Parse TOML *text* into a validated :class:`AppConfig`."""

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc

    unknown = sorted(set(raw) - set(_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {', '.join(unknown)}")

    app = AppConfig(
        **{name: _sanitize_section(raw.get(name, {}), name, cls) for name, cls in _SECTIONS.items()}
    )
    _validate_parse(app.parse)
    loader = app.document.loader
    if not isinstance(loader, str):
        raise ConfigError("document.loader must be a string")
    loader = loader.strip()
    if loader and ":" not in loader:
        raise ConfigError("document.loader must look like 'package.module:callable'")
    app.document.loader = loader
    return app


def load_config(path: str | Path) -> AppConfig:
    """
    Load and validate an application configuration from a TOML file.

    The file must be UTF-8 (a BOM is accepted). Missing sections fall back to the
    dataclass defaults.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ConfigError: If the file is not UTF-8, TOML parsing fails or a value is invalid.
    """
    with open(path, "rb") as handle:
        raw_bytes = handle.read()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        text = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc
    return load_config_text(text)


__all__ = ["ConfigError", "load_config", "load_config_text"]
