"""Captured output of a finished or running command."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field


def _as_bytes(data: bytes | str | None) -> bytearray:
    if data is None:
        return bytearray()
    if isinstance(data, str):
        return bytearray(data.encode("utf-8"))
    return bytearray(data)


@dataclass
class Output:
    """Standard output, standard error and exit status of a command."""

    stdout: bytearray = field(default_factory=bytearray)
    stderr: bytearray = field(default_factory=bytearray)
    status: int | None = None

    def __post_init__(self) -> None:
        self.stdout = bytearray(self.stdout)
        self.stderr = bytearray(self.stderr)

    def append_stdout(self, data: bytes) -> None:
        self.stdout.extend(data)

    def append_stderr(self, data: bytes) -> None:
        self.stderr.extend(data)

    def stdout_text(self) -> str:
        """Standard output decoded as UTF-8, invalid bytes replaced."""
        return self.stdout.decode("utf-8", errors="replace")

    def stderr_text(self) -> str:
        """Standard error decoded as UTF-8, invalid bytes replaced."""
        return self.stderr.decode("utf-8", errors="replace")

    def success(self) -> bool:
        """True when the command exited with status zero."""
        return self.status == 0

    @classmethod
    def from_completed(cls, completed: subprocess.CompletedProcess) -> Output:
        """Build from a finished subprocess; a signal death leaves no status."""
        code = completed.returncode
        return cls(
            stdout=_as_bytes(completed.stdout),
            stderr=_as_bytes(completed.stderr),
            status=code if code is not None and code >= 0 else None,
        )