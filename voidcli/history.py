"""Persistent command history stored as one JSON object per line."""

from __future__ import annotations

import contextlib
import dataclasses
import json
import os
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_HISTORY_FILE_NAME = ".void_history"
_MAX_ENTRIES = 1000


def default_history_path() -> Path:
    """The history file in the user's home directory."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path()
    return home / _HISTORY_FILE_NAME


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def _require(data: Mapping[str, Any], name: str) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    return data[name]


def _check_int(name: str, value: Any, *, unsigned: bool, optional: bool) -> Any:
    if value is None and optional:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or (unsigned and value < 0):
        raise ValueError(f"invalid value for field `{name}`: {value!r}")
    return value


@dataclass(frozen=True)
class HistoryEntry:
    """One executed command with when and where it ran."""

    command: str
    timestamp: int = 0
    working_dir: str = ""
    exit_code: int | None = None
    duration_ms: int | None = None

    @classmethod
    def create(cls, command: str) -> HistoryEntry:
        """An entry stamped with the current time and directory."""
        return cls(command=command, timestamp=int(time.time()), working_dir=_current_dir())

    def with_exit_code(self, exit_code: int) -> HistoryEntry:
        return dataclasses.replace(self, exit_code=exit_code)

    def with_duration(self, duration_ms: int) -> HistoryEntry:
        return dataclasses.replace(self, duration_ms=duration_ms)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> HistoryEntry:
        """Build from a decoded JSON object; ValueError when it does not fit."""
        if not isinstance(data, Mapping):
            raise ValueError("history entry must be an object")
        command = _require(data, "command")
        working_dir = _require(data, "working_dir")
        if not isinstance(command, str):
            raise ValueError(f"invalid value for field `command`: {command!r}")
        if not isinstance(working_dir, str):
            raise ValueError(f"invalid value for field `working_dir`: {working_dir!r}")
        return cls(
            command=command,
            timestamp=_check_int(
                "timestamp", _require(data, "timestamp"), unsigned=True, optional=False
            ),
            working_dir=working_dir,
            exit_code=_check_int(
                "exit_code", data.get("exit_code"), unsigned=False, optional=True
            ),
            duration_ms=_check_int(
                "duration_ms", data.get("duration_ms"), unsigned=True, optional=True
            ),
        )


class History:
    """Command history kept in memory and mirrored to a file."""

    def __init__(
        self, path: str | os.PathLike[str] | None = None, *, max_entries: int = _MAX_ENTRIES
    ) -> None:
        self.path = Path(path) if path is not None else default_history_path()
        self.max_entries = max_entries
        self._entries: list[HistoryEntry] = []
        self._position = 0
        with contextlib.suppress(OSError, ValueError):
            self.load()

    def load(self) -> None:
        """Replace the entries with those in the file; bad lines are skipped."""
        if not self.path.exists():
            return
        with self.path.open(encoding="utf-8", newline="") as handle:
            self._entries.clear()
            for raw in handle:
                line = raw.removesuffix("\n").removesuffix("\r")
                if not line:
                    continue
                try:
                    self._entries.append(HistoryEntry.from_dict(json.loads(line)))
                except ValueError:
                    continue
        self._position = len(self._entries)

    def save(self) -> None:
        with self.path.open("w", encoding="utf-8") as handle:
            for entry in self._entries:
                handle.write(
                    json.dumps(entry.to_dict(), separators=(",", ":"), ensure_ascii=False)
                )
                handle.write("\n")

    def add(self, entry: HistoryEntry) -> None:
        """Record a command, ignoring blanks and repeats of the last one."""
        if not entry.command.strip():
            return
        if self._entries and self._entries[-1].command == entry.command:
            return
        self._entries.append(entry)
        if len(self._entries) > self.max_entries:
            del self._entries[: len(self._entries) - self.max_entries]
        self._position = len(self._entries)
        with contextlib.suppress(OSError):
            self.save()

    def up(self) -> HistoryEntry | None:
        """The previous entry, or None at the oldest."""
        if self._position > 0:
            self._position -= 1
            return self._entries[self._position]
        return None

    def down(self) -> HistoryEntry | None:
        """The next entry, or None at the newest."""
        if self._position < len(self._entries) - 1:
            self._position += 1
            return self._entries[self._position]
        return None

    def search(self, query: str) -> list[HistoryEntry]:
        """Entries whose command contains the query, ignoring case."""
        needle = query.lower()
        return [entry for entry in self._entries if needle in entry.command.lower()]

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._position = 0
        self.save()