import asyncio
import os
import signal

import pytest

from voidcli.process import (
    OutputEvent,
    ProcessExitEvent,
    ProcessManager,
)

SHELL = "/bin/sh"


async def read_until(events, marker, timeout=10.0):
    seen = bytearray()

    async def collect():
        while marker not in seen:
            event = await events.get()
            if isinstance(event, OutputEvent):
                seen.extend(event.data)

    await asyncio.wait_for(collect(), timeout)
    return bytes(seen)


def drain(events):
    items = []
    while not events.empty():
        items.append(events.get_nowait())
    return items


@pytest.mark.asyncio
async def test_output_reaches_event_queue():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.spawn()
    try:
        await manager.write(b'echo ab""cd\n')
        seen = await read_until(events, b"abcd")
        assert b"abcd" in seen
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_added_env_var_is_visible():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    manager.add_env_var("VOIDCLI_SAMPLE", "bar")
    assert manager.env_vars == [("VOIDCLI_SAMPLE", "bar")]
    await manager.spawn()
    try:
        await manager.write(b'echo "v=$VOIDCLI_SAMPLE"\n')
        seen = await read_until(events, b"v=bar")
        assert b"v=bar" in seen
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_term_type_is_set():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.spawn()
    try:
        await manager.write(b'echo "t=$TERM"\n')
        seen = await read_until(events, b"t=xterm-256color")
        assert b"t=xterm-256color" in seen
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_runs_in_working_directory(tmp_path):
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events, working_directory=str(tmp_path))
    await manager.spawn()
    try:
        await manager.write(b'echo "d=$(pwd -P)"\n')
        expected = f"d={os.path.realpath(tmp_path)}".encode()
        seen = await read_until(events, expected)
        assert expected in seen
    finally:
        await manager.close()


def test_default_working_directory_is_current():
    manager = ProcessManager(SHELL, asyncio.Queue())
    assert manager.working_directory == os.getcwd()


@pytest.mark.asyncio
async def test_exit_code_and_kill_after_exit_reports_it():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.spawn()
    try:
        await manager.write(b"exit 3\n")
        code = await asyncio.wait_for(manager.wait(), 10)
        assert code == 3
        assert not manager.running
        await manager.kill()
        exits = [e for e in drain(events) if isinstance(e, ProcessExitEvent)]
        assert exits == [ProcessExitEvent(3)]
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_kill_running_process():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.spawn()
    try:
        assert manager.running
        await manager.kill()
        assert manager.returncode == -signal.SIGKILL
        assert not any(isinstance(e, ProcessExitEvent) for e in drain(events))
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_resize_changes_window_size():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.spawn()
    try:
        await manager.resize(100, 30)
        await manager.write(b"stty size\n")
        seen = await read_until(events, b"30 100")
        assert b"30 100" in seen
    finally:
        await manager.close()


@pytest.mark.asyncio
async def test_operations_before_spawn_do_nothing():
    events = asyncio.Queue()
    manager = ProcessManager(SHELL, events)
    await manager.write(b"ignored\n")
    await manager.resize(10, 10)
    await manager.kill()
    assert events.empty()
    assert manager.running is False
    assert manager.returncode is None


@pytest.mark.asyncio
async def test_wait_without_spawn_raises():
    manager = ProcessManager(SHELL, asyncio.Queue())
    with pytest.raises(RuntimeError):
        await manager.wait()


@pytest.mark.asyncio
async def test_spawn_missing_shell_raises(tmp_path):
    manager = ProcessManager(str(tmp_path / "no-such-shell"), asyncio.Queue())
    with pytest.raises(OSError, match="Failed to spawn process"):
        await manager.spawn()
    assert manager.running is False