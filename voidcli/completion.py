"""Completion of command names from PATH and of file-system paths."""

from __future__ import annotations

import os
import stat


def _is_regular_executable(entry: os.DirEntry) -> bool:
    try:
        info = entry.stat(follow_symlinks=False)
    except OSError:
        return False
    return stat.S_ISREG(info.st_mode) and bool(info.st_mode & 0o111)


def _executables_in(directory: str | os.PathLike[str]) -> list[str]:
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if _is_regular_executable(entry)]
    except OSError:
        return []


def _is_executable(path: str) -> bool:
    if os.name == "posix":
        try:
            return bool(os.stat(path).st_mode & 0o111)
        except OSError:
            return False
    return os.path.splitext(path)[1] in (".exe", ".bat", ".cmd")


def _split_partial(partial: str) -> tuple[str, str]:
    """The directory to list and the name prefix to match."""
    if "/" not in partial and "\\" not in partial:
        return ".", partial
    stripped = partial.rstrip("/")
    if not stripped:
        return ".", partial
    return os.path.split(stripped)


class CommandCompletion:
    """Completes command names from the executables found on PATH."""

    def __init__(self) -> None:
        self.cache: list[str] = []
        self.system_paths: list[str] = []

    def initialize_cache(self) -> None:
        """Scan every PATH directory and cache the executables found there."""
        path_var = os.environ.get("PATH")
        if path_var is not None:
            self.system_paths = path_var.split(":")
        for directory in self.system_paths:
            self.cache.extend(_executables_in(directory))

    def get_completions(self, prefix: str) -> list[str]:
        return [name for name in self.cache if name.startswith(prefix)]

    def scan_directory(self, dir_path: str | os.PathLike[str]) -> list[str]:
        """Names of the executable regular files in one directory."""
        return _executables_in(dir_path)


class Completion:
    """Completes the command word from PATH and later words as paths."""

    def __init__(self) -> None:
        path_var = os.environ.get("PATH")
        self.system_paths: list[str] = (
            path_var.split(os.pathsep) if path_var is not None else []
        )
        self._command_cache: list[str] = []
        self._cache_initialized = False

    @property
    def cache_initialized(self) -> bool:
        return self._cache_initialized

    def initialize_cache(self) -> None:
        """Fill the command cache once from the PATH directories."""
        if self._cache_initialized:
            return
        for directory in self.system_paths:
            if not os.path.isdir(directory):
                continue
            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError:
                continue
            for entry in entries:
                if os.path.isdir(entry.path):
                    continue
                if _is_executable(entry.path):
                    self._command_cache.append(entry.name)
        self._cache_initialized = True

    def complete_command(self, partial: str) -> list[str]:
        if not self._cache_initialized:
            self.initialize_cache()
        return [name for name in self._command_cache if name.startswith(partial)]

    def complete_path(self, partial: str) -> list[str]:
        """Entries matching a partial path; directories end with a slash."""
        dir_path, prefix = _split_partial(partial)
        results: list[str] = []
        try:
            with os.scandir(dir_path) as entries:
                for entry in entries:
                    if not entry.name.startswith(prefix):
                        continue
                    text = entry.name if dir_path == "." else f"{dir_path}/{entry.name}"
                    try:
                        is_dir = entry.is_dir()
                    except OSError:
                        is_dir = False
                    if is_dir:
                        text += "/"
                    results.append(text)
        except OSError:
            return []
        return results

    def complete(self, line: str, cursor_pos: int) -> list[str]:
        """Completions for the word before the cursor."""
        if not line:
            return []
        if not 0 <= cursor_pos <= len(line):
            raise ValueError(f"cursor position {cursor_pos} outside line of length {len(line)}")
        tokens = line[:cursor_pos].split()
        if not tokens:
            return []
        if len(tokens) == 1:
            return self.complete_command(tokens[0])
        return self.complete_path(tokens[-1])