import fcntl
import os
import struct
import termios

import pytest

from voidcli.pty import DEFAULT_COLS, DEFAULT_ROWS, PtyMaster, PtyPair, PtySlave


def _size(fd):
    packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, b"\0" * 8)
    rows, cols, _, _ = struct.unpack("HHHH", packed)
    return rows, cols


@pytest.fixture
def pair():
    opened = PtyPair.open()
    yield opened
    opened.close()


def test_default_size(pair):
    assert _size(pair.slave.fileno()) == (DEFAULT_ROWS, DEFAULT_COLS)
    assert (DEFAULT_ROWS, DEFAULT_COLS) == (24, 80)


def test_open_with_size():
    with PtyPair.open(rows=30, cols=100) as opened:
        assert _size(opened.slave.fileno()) == (30, 100)


def test_resize_changes_window_size(pair):
    pair.master.resize(40, 120)
    assert _size(pair.slave.fileno()) == (40, 120)
    assert _size(pair.master.fileno()) == (40, 120)


def test_distinct_descriptors(pair):
    assert pair.master.fileno() != pair.slave.fileno()
    assert os.isatty(pair.slave.fileno())


def test_slave_output_reaches_master(pair):
    os.write(pair.slave.fileno(), b"ping")
    assert pair.master.read(100) == b"ping"


def test_master_write_reaches_slave(pair):
    written = pair.master.write(b"hello\n")
    assert written == len(b"hello\n")
    assert os.read(pair.slave.fileno(), 100) == b"hello\n"


def test_close_marks_closed_and_is_idempotent():
    opened = PtyPair.open()
    opened.close()
    opened.close()
    assert opened.master.closed
    assert opened.slave.closed
    with pytest.raises(ValueError):
        opened.master.fileno()
    with pytest.raises(ValueError):
        opened.slave.fileno()


def test_operations_on_closed_master_raise():
    opened = PtyPair.open()
    opened.close()
    with pytest.raises(ValueError):
        opened.master.write(b"x")
    with pytest.raises(ValueError):
        opened.master.read(1)
    with pytest.raises(ValueError):
        opened.master.resize(10, 10)


def test_context_manager_closes_both():
    with PtyPair.open() as opened:
        master_fd = opened.master.fileno()
        assert not opened.master.closed
    assert opened.master.closed and opened.slave.closed
    with pytest.raises(OSError):
        os.fstat(master_fd)


def test_ends_close_individually():
    master_fd, slave_fd = os.openpty()
    with PtyMaster(master_fd) as master, PtySlave(slave_fd) as slave:
        assert master.fileno() == master_fd
        assert slave.fileno() == slave_fd
    assert master.closed and slave.closed


@pytest.mark.parametrize("rows, cols", [(-1, 80), (24, 70000), (24, "80")])
def test_invalid_size_rejected(rows, cols):
    with pytest.raises(ValueError):
        PtyPair.open(rows=rows, cols=cols)


def test_invalid_resize_rejected(pair):
    with pytest.raises(ValueError):
        pair.master.resize(65536, 10)
    assert _size(pair.slave.fileno()) == (DEFAULT_ROWS, DEFAULT_COLS)