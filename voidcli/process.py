"""Running a shell attached to a pseudo-terminal and reporting what it does."""

from __future__ import annotations

import asyncio
import contextlib
import errno
import logging
import os
from dataclasses import dataclass
from typing import Protocol, Union

from .pty import PtyMaster, PtyPair

log = logging.getLogger(__name__)

TERM_TYPE = "xterm-256color"
_READ_SIZE = 4096
_WRITE_RETRY_DELAY = 0.01


@dataclass(frozen=True)
class OutputEvent:
    """Bytes the process wrote to its terminal."""

    data: bytes


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    cols: int
    rows: int


@dataclass(frozen=True)
class ProcessExitEvent:
    """The process exited; -1 when it carries no exit code."""

    code: int


@dataclass(frozen=True)
class ErrorEvent:
    """Something went wrong while talking to the process."""

    message: str


TermEvent = Union[OutputEvent, ResizeEvent, ProcessExitEvent, ErrorEvent]


class EventSink(Protocol):
    def put_nowait(self, item: TermEvent) -> None: ...


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return "/"


class ProcessManager:
    """Starts a shell on a pseudo-terminal and forwards its output as events.

    Events go to any queue-like object with ``put_nowait``.
    """

    def __init__(
        self,
        shell: str,
        event_sender: EventSink,
        working_directory: str | None = None,
        env_vars: list[tuple[str, str]] | None = None,
    ) -> None:
        self.shell = shell
        self.working_directory = (
            working_directory if working_directory is not None else _current_dir()
        )
        self.env_vars: list[tuple[str, str]] = list(env_vars or [])
        self._events = event_sender
        self._process: asyncio.subprocess.Process | None = None
        self._pty: PtyPair | None = None
        self._reader: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    @property
    def returncode(self) -> int | None:
        return self._process.returncode if self._process is not None else None

    def add_env_var(self, key: str, value: str) -> None:
        self.env_vars.append((key, value))

    async def spawn(self) -> None:
        """Start the shell on a new pseudo-terminal and begin reading its output."""
        if self.running:
            raise RuntimeError("process already running")
        pty = PtyPair.open()
        env = dict(os.environ)
        env.update(self.env_vars)
        env["TERM"] = TERM_TYPE
        slave = pty.slave.fileno()
        try:
            process = await asyncio.create_subprocess_exec(
                self.shell,
                cwd=self.working_directory,
                env=env,
                stdin=slave,
                stdout=slave,
                stderr=slave,
                start_new_session=True,
            )
        except OSError as exc:
            pty.close()
            raise OSError(exc.errno, f"Failed to spawn process: {exc.strerror or exc}") from exc
        pty.slave.close()
        self._process = process
        self._pty = pty
        self._reader = asyncio.create_task(self._pump(pty.master))

    def _send(self, event: TermEvent) -> bool:
        try:
            self._events.put_nowait(event)
        except Exception:  # the receiving side is gone or full
            return False
        return True

    async def _pump(self, master: PtyMaster) -> None:
        loop = asyncio.get_running_loop()
        fd = master.fileno()
        os.set_blocking(fd, False)
        ready = asyncio.Event()
        loop.add_reader(fd, ready.set)
        try:
            while True:
                await ready.wait()
                ready.clear()
                try:
                    data = master.read(_READ_SIZE)
                except BlockingIOError:
                    continue
                except OSError as exc:
                    # EIO on the master side means every slave handle is closed.
                    if exc.errno != errno.EIO:
                        self._send(ErrorEvent(f"Error reading from process: {exc}"))
                    break
                if not data or not self._send(OutputEvent(data)):
                    break
        finally:
            loop.remove_reader(fd)
        log.info("Process output stream closed")

    async def write(self, data: bytes) -> None:
        """Send bytes to the process as if typed at its terminal."""
        if self._process is None or self._pty is None or self._pty.master.closed:
            return
        view = memoryview(bytes(data))
        while view:
            try:
                written = self._pty.master.write(view)
            except BlockingIOError:
                await asyncio.sleep(_WRITE_RETRY_DELAY)
                continue
            view = view[written:]

    async def resize(self, cols: int, rows: int) -> None:
        """Change the window size the process sees."""
        if self._pty is not None and not self._pty.master.closed:
            self._pty.master.resize(rows, cols)

    async def kill(self) -> None:
        """Kill a running process, or report the exit of one that has finished."""
        process = self._process
        if process is None:
            return
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        else:
            code = process.returncode
            self._send(ProcessExitEvent(code if code >= 0 else -1))

    async def wait(self) -> int:
        """Wait for the process to exit and its output to be drained."""
        if self._process is None:
            raise RuntimeError("no process has been spawned")
        code = await self._process.wait()
        if self._reader is not None:
            await self._reader
        return code

    async def close(self) -> None:
        """Kill the process if needed and release the terminal."""
        if self.running:
            await self.kill()
        if self._reader is not None:
            self._reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._reader
        if self._pty is not None:
            self._pty.close()