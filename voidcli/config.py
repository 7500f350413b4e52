"""User configuration of the terminal, read from YAML."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_SHELL = "/bin/bash"


def _field(data: Mapping[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if kind is float:
        valid = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"invalid value for field `{name}`: {value!r}")
    return float(value) if kind is float else value


@dataclass
class FontConfig:
    name: str
    size: float
    line_height: float


@dataclass
class TerminalConfig:
    shell: str
    scrollback_lines: int
    cursor_blink: bool


@dataclass
class KeybindingsConfig:
    pass


@dataclass
class PerformanceConfig:
    gpu_acceleration: bool
    vsync: bool


@dataclass
class Config:
    """Theme, font, terminal, keybinding and performance settings."""

    theme: str
    font: FontConfig
    terminal: TerminalConfig
    keybindings: KeybindingsConfig
    performance: PerformanceConfig

    @classmethod
    def default(cls) -> Config:
        return cls(
            theme="dark",
            font=FontConfig(name="JetBrains Mono", size=14.0, line_height=1.2),
            terminal=TerminalConfig(
                shell=os.environ.get("SHELL", _DEFAULT_SHELL),
                scrollback_lines=10000,
                cursor_blink=True,
            ),
            keybindings=KeybindingsConfig(),
            performance=PerformanceConfig(gpu_acceleration=True, vsync=True),
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Config:
        """Read a configuration; ValueError when the YAML is malformed or incomplete."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValueError("configuration must be a mapping")
        return cls._from_mapping(data)

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> Config:
        font = _field(data, "font", Mapping)
        terminal = _field(data, "terminal", Mapping)
        _field(data, "keybindings", Mapping)
        performance = _field(data, "performance", Mapping)
        return cls(
            theme=_field(data, "theme", str),
            font=FontConfig(
                name=_field(font, "name", str),
                size=_field(font, "size", float),
                line_height=_field(font, "line_height", float),
            ),
            terminal=TerminalConfig(
                shell=_field(terminal, "shell", str),
                scrollback_lines=_field(terminal, "scrollback_lines", int),
                cursor_blink=_field(terminal, "cursor_blink", bool),
            ),
            keybindings=KeybindingsConfig(),
            performance=PerformanceConfig(
                gpu_acceleration=_field(performance, "gpu_acceleration", bool),
                vsync=_field(performance, "vsync", bool),
            ),
        )