"""Parsing of terminal output into actions, including escape sequences."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

_ESC = 0x1B
_BEL = 0x07
_BACKSLASH = 0x5C

_UNSIGNED = re.compile(r"\+?[0-9]+")
_U32_MAX = 0xFFFF_FFFF
_U8_MAX = 0xFF


class TerminalAction:
    """Base of every action the parser produces."""

    __slots__ = ()


@dataclass(frozen=True)
class Print(TerminalAction):
    """Print one byte to the terminal."""

    byte: int


@dataclass(frozen=True)
class Bell(TerminalAction):
    pass


@dataclass(frozen=True)
class Backspace(TerminalAction):
    pass


@dataclass(frozen=True)
class Tab(TerminalAction):
    pass


@dataclass(frozen=True)
class LineFeed(TerminalAction):
    pass


@dataclass(frozen=True)
class CarriageReturn(TerminalAction):
    pass


@dataclass(frozen=True)
class CursorUp(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorDown(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorForward(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorBackward(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorNextLine(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorPreviousLine(TerminalAction):
    count: int


@dataclass(frozen=True)
class CursorPosition(TerminalAction):
    """Move the cursor to a 1-based row and column."""

    row: int
    col: int


@dataclass(frozen=True)
class EraseInDisplay(TerminalAction):
    """Erase in display (0=below, 1=above, 2=all, 3=saved lines)."""

    mode: int


@dataclass(frozen=True)
class EraseInLine(TerminalAction):
    """Erase in line (0=to right, 1=to left, 2=all)."""

    mode: int


@dataclass(frozen=True)
class SetGraphicsRendition(TerminalAction):
    params: tuple[int, ...]


@dataclass(frozen=True)
class Reset(TerminalAction):
    pass


@dataclass(frozen=True)
class ScrollUp(TerminalAction):
    count: int


@dataclass(frozen=True)
class SetWindowTitle(TerminalAction):
    title: str


@dataclass(frozen=True)
class SetColorPalette(TerminalAction):
    index: int
    color: str


class _State(enum.Enum):
    NORMAL = enum.auto()
    ESCAPE = enum.auto()
    OSC = enum.auto()
    CSI = enum.auto()


_CONTROLS: dict[int, TerminalAction] = {
    0x07: Bell(),
    0x08: Backspace(),
    0x09: Tab(),
    0x0A: LineFeed(),
    0x0D: CarriageReturn(),
}

_SIMPLE_ESCAPES: dict[int, TerminalAction] = {
    ord("A"): CursorUp(1),
    ord("B"): CursorDown(1),
    ord("C"): CursorForward(1),
    ord("D"): CursorBackward(1),
    ord("E"): CursorNextLine(1),
    ord("F"): CursorPreviousLine(1),
    ord("H"): CursorPosition(1, 1),
    ord("J"): EraseInDisplay(0),
    ord("K"): EraseInLine(0),
    ord("M"): ScrollUp(1),
    ord("c"): Reset(),
}

_CSI_ONE_PARAM = {
    ord("J"): (EraseInDisplay, 0),
    ord("K"): (EraseInLine, 0),
    ord("A"): (CursorUp, 1),
    ord("B"): (CursorDown, 1),
    ord("C"): (CursorForward, 1),
    ord("D"): (CursorBackward, 1),
}


def _parse_unsigned(text: str, limit: int) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


class TerminalParser:
    """Turns a stream of terminal output bytes into actions.

    State carries over between calls, so a sequence may be split across chunks.
    """

    def __init__(self, max_escape_len: int = 1024) -> None:
        self._state = _State.NORMAL
        self._buffer = bytearray()
        self.max_escape_len = max_escape_len

    def parse(self, data: bytes) -> list[TerminalAction]:
        """Parse a chunk of output and return the actions it produces."""
        actions: list[TerminalAction] = []
        for byte in bytes(data):
            action = self._step(byte)
            if action is not None:
                actions.append(action)
        return actions

    def _step(self, byte: int) -> TerminalAction | None:
        if self._state is _State.NORMAL:
            if byte == _ESC:
                self._buffer.clear()
                self._buffer.append(byte)
                self._state = _State.ESCAPE
                return None
            return _CONTROLS.get(byte, Print(byte))

        self._buffer.append(byte)

        if self._state is _State.ESCAPE:
            if byte == ord("]"):
                self._state = _State.OSC
            elif byte == ord("["):
                self._state = _State.CSI
            else:
                self._state = _State.NORMAL
                return self._simple_escape()
            return None

        action = None
        if self._state is _State.CSI:
            if 0x40 <= byte <= 0x7E:
                action = self._csi_sequence()
                self._state = _State.NORMAL
        elif byte == _BEL or (
            byte == _BACKSLASH and len(self._buffer) >= 2 and self._buffer[-2] == _ESC
        ):
            action = self._osc_sequence()
            self._state = _State.NORMAL

        if len(self._buffer) > self.max_escape_len:
            self._state = _State.NORMAL
        return action

    def _simple_escape(self) -> TerminalAction | None:
        if len(self._buffer) < 2:
            return None
        return _SIMPLE_ESCAPES.get(self._buffer[1])

    def _csi_sequence(self) -> TerminalAction | None:
        if len(self._buffer) < 3:
            return None
        final = self._buffer[-1]
        params = [
            value
            for part in _decode(self._buffer[2:-1]).split(";")
            if (value := _parse_unsigned(part, _U32_MAX)) is not None
        ]

        if final == ord("m"):
            return SetGraphicsRendition(tuple(params))
        if final in (ord("H"), ord("f")):
            row = params[0] if params else 1
            col = params[1] if len(params) > 1 else 1
            return CursorPosition(row, col)
        if final in _CSI_ONE_PARAM:
            kind, default = _CSI_ONE_PARAM[final]
            return kind(params[0] if params else default)
        return None

    def _osc_sequence(self) -> TerminalAction | None:
        if len(self._buffer) < 4:
            return None
        data = _decode(self._buffer[2:-1])
        cmd, separator, args = data.partition(";")
        if not separator:
            return None
        if cmd in ("0", "2"):
            return SetWindowTitle(args)
        if cmd == "4":
            index_text, separator, color = args.partition(";")
            if not separator:
                return None
            index = _parse_unsigned(index_text, _U8_MAX)
            if index is not None:
                return SetColorPalette(index, color)
        return None