"""Pseudo-terminal pairs with a resizable master side."""

from __future__ import annotations

import contextlib
import os
import struct

try:
    import fcntl
    import termios
except ImportError:  # not a POSIX system
    fcntl = None
    termios = None

DEFAULT_ROWS = 24
DEFAULT_COLS = 80
_U16_MAX = 0xFFFF


def _winsize(rows: int, cols: int) -> bytes:
    for name, value in (("rows", rows), ("cols", cols)):
        if not isinstance(value, int) or not 0 <= value <= _U16_MAX:
            raise ValueError(f"{name} must be between 0 and {_U16_MAX}, got {value!r}")
    return struct.pack("HHHH", rows, cols, 0, 0)


def _set_size(fd: int, rows: int, cols: int) -> None:
    packed = _winsize(rows, cols)
    try:
        fcntl.ioctl(fd, termios.TIOCSWINSZ, packed)
    except OSError as exc:
        raise OSError(exc.errno, f"Failed to resize PTY: {exc.strerror}") from exc


def _closed() -> ValueError:
    return ValueError("operation on closed pty")


class PtyMaster:
    """The controlling side of a pseudo-terminal."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    @property
    def closed(self) -> bool:
        return self._fd < 0

    def fileno(self) -> int:
        if self._fd < 0:
            raise _closed()
        return self._fd

    def resize(self, rows: int, cols: int) -> None:
        """Set the window size seen by the program on the slave side."""
        _set_size(self.fileno(), rows, cols)

    def read(self, size: int = 4096) -> bytes:
        """Read up to size bytes; an empty result means end of file."""
        return os.read(self.fileno(), size)

    def write(self, data: bytes) -> int:
        """Write bytes and return how many were written."""
        return os.write(self.fileno(), data)

    def close(self) -> None:
        if self._fd >= 0:
            fd, self._fd = self._fd, -1
            os.close(fd)

    def __enter__(self) -> PtyMaster:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        with contextlib.suppress(OSError):
            self.close()


class PtySlave:
    """The side of a pseudo-terminal a child program is attached to."""

    def __init__(self, fd: int) -> None:
        self._fd = fd

    @property
    def closed(self) -> bool:
        return self._fd < 0

    def fileno(self) -> int:
        if self._fd < 0:
            raise _closed()
        return self._fd

    def close(self) -> None:
        if self._fd >= 0:
            fd, self._fd = self._fd, -1
            os.close(fd)

    def __enter__(self) -> PtySlave:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        with contextlib.suppress(OSError):
            self.close()


class PtyPair:
    """A master and slave pseudo-terminal opened together."""

    def __init__(self, master: PtyMaster, slave: PtySlave) -> None:
        self.master = master
        self.slave = slave

    @classmethod
    def open(cls, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> PtyPair:
        """Open a new pseudo-terminal with the given window size."""
        if fcntl is None or termios is None:
            raise NotImplementedError("pseudo-terminals are not supported on this platform")
        _winsize(rows, cols)
        try:
            master_fd, slave_fd = os.openpty()
        except OSError as exc:
            raise OSError(exc.errno, f"Failed to open PTY: {exc.strerror}") from exc
        pair = cls(PtyMaster(master_fd), PtySlave(slave_fd))
        try:
            pair.master.resize(rows, cols)
        except BaseException:
            pair.close()
            raise
        return pair

    def close(self) -> None:
        try:
            self.master.close()
        finally:
            self.slave.close()

    def __enter__(self) -> PtyPair:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()