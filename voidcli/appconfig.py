"""Application-level settings: name, colours and service connection, read from TOML."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


def _field(data: Mapping[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"invalid value for field `{name}`: {value!r}")
    return value


@dataclass
class AppTheme:
    primary_color: str
    secondary_color: str
    background_color: str


@dataclass
class ConnectionConfig:
    endpoint: str
    api_key: str | None
    timeout_sec: int


@dataclass
class AppConfig:
    """Application name, theme colours and connection settings."""

    app_name: str
    theme: AppTheme
    connection: ConnectionConfig

    @classmethod
    def default(cls) -> AppConfig:
        log.warning("Using default configuration")
        return cls(
            app_name="Void_CLI",
            theme=AppTheme(
                primary_color="#5E81AC",
                secondary_color="#88C0D0",
                background_color="#2E3440",
            ),
            connection=ConnectionConfig(endpoint="", api_key=None, timeout_sec=30),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> AppConfig:
        """Read a TOML configuration file."""
        log.info("Loading config from: %s", path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise OSError(exc.errno, f"Failed to read config file: {path}") from exc
        except UnicodeDecodeError as exc:
            raise OSError(f"Failed to read config file: {path}") from exc

        try:
            return cls._from_mapping(tomllib.loads(text))
        except ValueError as exc:
            raise ValueError("Failed to parse file") from exc

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> AppConfig:
        theme = _field(data, "theme", Mapping)
        connection = _field(data, "connection", Mapping)
        api_key = connection.get("api_key")
        if api_key is not None and not isinstance(api_key, str):
            raise ValueError(f"invalid value for field `api_key`: {api_key!r}")
        return cls(
            app_name=_field(data, "app_name", str),
            theme=AppTheme(
                primary_color=_field(theme, "primary_color", str),
                secondary_color=_field(theme, "secondary_color", str),
                background_color=_field(theme, "background_color", str),
            ),
            connection=ConnectionConfig(
                endpoint=_field(connection, "endpoint", str),
                api_key=api_key,
                timeout_sec=_field(connection, "timeout_sec", int),
            ),
        )