"""Colour schemes and styling, built in or loaded from YAML."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class ThemeColors:
    background: str
    foreground: str
    accent: str
    error: str
    success: str
    warning: str


@dataclass(frozen=True)
class ThemeStyles:
    font_family: str
    font_size: int
    line_height: float
    padding: int
    border_radius: int


@dataclass(frozen=True)
class Theme:
    name: str
    colors: ThemeColors
    styles: ThemeStyles


class ThemeNotFoundError(LookupError):
    """Raised when a theme name is not among the built-in themes."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Theme not found: {name}")
        self.name = name


_DEFAULT_STYLES = ThemeStyles(
    font_family="monospace",
    font_size=14,
    line_height=1.5,
    padding=8,
    border_radius=4,
)

_BUILTIN: dict[str, Theme] = {
    "dark": Theme(
        name="dark",
        colors=ThemeColors(
            background="#1a1a1a",
            foreground="#ffffff",
            accent="#007acc",
            error="#ff5555",
            success="#50fa7b",
            warning="#ffb86c",
        ),
        styles=_DEFAULT_STYLES,
    ),
    "light": Theme(
        name="light",
        colors=ThemeColors(
            background="#ffffff",
            foreground="#000000",
            accent="#007acc",
            error="#ff0000",
            success="#00ff00",
            warning="#ffa500",
        ),
        styles=_DEFAULT_STYLES,
    ),
}


def builtin_themes() -> dict[str, Theme]:
    """The built-in themes by name."""
    return dict(_BUILTIN)


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


def _theme_from_mapping(data: Mapping[str, Any]) -> Theme:
    colors = _field(data, "colors", Mapping)
    styles = _field(data, "styles", Mapping)
    return Theme(
        name=_field(data, "name", str),
        colors=ThemeColors(
            **{key: _field(colors, key, str) for key in ThemeColors.__dataclass_fields__}
        ),
        styles=ThemeStyles(
            font_family=_field(styles, "font_family", str),
            font_size=_field(styles, "font_size", int),
            line_height=_field(styles, "line_height", float),
            padding=_field(styles, "padding", int),
            border_radius=_field(styles, "border_radius", int),
        ),
    )


class ThemeManager:
    """Holds the active theme; starts with the built-in dark theme."""

    def __init__(self) -> None:
        self._current = _BUILTIN["dark"]

    def get_theme(self, name: str) -> Theme | None:
        return _BUILTIN.get(name)

    def load_theme_from_file(self, path: str | os.PathLike[str]) -> None:
        """Make a theme read from a YAML file the active one."""
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid YAML: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ValueError("theme must be a mapping")
        self._current = _theme_from_mapping(data)

    def current_theme(self) -> Theme:
        return self._current

    def set_theme(self, name: str) -> None:
        """Activate a built-in theme by name."""
        try:
            self._current = _BUILTIN[name]
        except KeyError:
            raise ThemeNotFoundError(name) from None