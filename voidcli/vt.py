"""A virtual terminal screen that applies parsed terminal actions to a cell grid."""

from __future__ import annotations

import dataclasses
from collections import deque
from dataclasses import dataclass

from .parser import (
    Backspace,
    Bell,
    CarriageReturn,
    CursorBackward,
    CursorDown,
    CursorForward,
    CursorNextLine,
    CursorPosition,
    CursorPreviousLine,
    CursorUp,
    EraseInDisplay,
    EraseInLine,
    LineFeed,
    Print,
    Reset,
    ScrollUp,
    SetColorPalette,
    SetGraphicsRendition,
    SetWindowTitle,
    Tab,
    TerminalAction,
)

DEFAULT_COLORS: tuple[str, ...] = (
    "#000000",  # Black
    "#CC0000",  # Red
    "#4E9A06",  # Green
    "#C4A000",  # Yellow
    "#3465A4",  # Blue
    "#75507B",  # Magenta
    "#06989A",  # Cyan
    "#D3D7CF",  # White
    "#555753",  # Bright Black
    "#EF2929",  # Bright Red
    "#8AE234",  # Bright Green
    "#FCE94F",  # Bright Yellow
    "#729FCF",  # Bright Blue
    "#AD7FA8",  # Bright Magenta
    "#34E2E2",  # Bright Cyan
    "#EEEEEC",  # Bright White
)

RGB_FLAG = 0x1000000
_U32_MASK = 0xFFFF_FFFF
_UNKNOWN_COLOR = "#FFFFFF"
_TAB_WIDTH = 8

DEFAULT_FG = 7
DEFAULT_BG = 0


def _hex(red: int, green: int, blue: int) -> str:
    return f"#{red:02X}{green:02X}{blue:02X}"


def default_palette() -> list[str]:
    """The 256-colour palette: 16 ANSI colours, a 6x6x6 cube and 24 greys."""
    palette = list(DEFAULT_COLORS)
    levels = [0] + [step * 40 + 55 for step in range(1, 6)]
    palette.extend(_hex(r, g, b) for r in levels for g in levels for b in levels)
    palette.extend(_hex(v, v, v) for v in (8 + i * 10 for i in range(24)))
    return palette


@dataclass(frozen=True)
class CellAttributes:
    """Colours and styles of a cell; RGB colours carry the RGB_FLAG bit."""

    fg_color: int | None = DEFAULT_FG
    bg_color: int | None = DEFAULT_BG
    bold: bool = False
    italic: bool = False
    underline: bool = False
    blink: bool = False
    reverse: bool = False
    hidden: bool = False
    strikethrough: bool = False


@dataclass(frozen=True)
class TerminalCell:
    """One character on the screen together with its attributes."""

    character: str = " "
    attributes: CellAttributes = dataclasses.field(default_factory=CellAttributes)


_DEFAULT_CELL = TerminalCell()

_SGR_FLAGS: dict[int, tuple[str, bool]] = {
    1: ("bold", True),
    3: ("italic", True),
    4: ("underline", True),
    5: ("blink", True),
    7: ("reverse", True),
    8: ("hidden", True),
    9: ("strikethrough", True),
    21: ("bold", False),
    22: ("bold", False),
    23: ("italic", False),
    24: ("underline", False),
    25: ("blink", False),
    27: ("reverse", False),
    28: ("hidden", False),
    29: ("strikethrough", False),
}


def _check_size(cols: int, rows: int) -> None:
    if cols < 1 or rows < 1:
        raise ValueError(f"terminal size must be at least 1x1, got {cols}x{rows}")


def _blank_row(cols: int) -> list[TerminalCell]:
    return [_DEFAULT_CELL] * cols


def _blank_grid(cols: int, rows: int) -> list[list[TerminalCell]]:
    return [_blank_row(cols) for _ in range(rows)]


def _extended_color(queue: deque[int]) -> tuple[str, int] | None:
    """Consume the parameters after 38/48; say which colour form was found."""
    if not queue:
        return None
    kind = queue.popleft()
    if kind == 5 and queue:
        return "indexed", queue.popleft()
    if kind == 2 and len(queue) >= 3:
        red, green, blue = queue.popleft(), queue.popleft(), queue.popleft()
        rgb = ((red << 16) | (green << 8) | blue) & _U32_MASK
        return "rgb", rgb | RGB_FLAG
    return None


class VirtualTerminal:
    """The terminal grid, cursor, attributes, palette and title."""

    def __init__(self, cols: int, rows: int) -> None:
        _check_size(cols, rows)
        self.cols = cols
        self.rows = rows
        self.title = "Terminal"
        self._grid = _blank_grid(cols, rows)
        self._cursor_row = 0
        self._cursor_col = 0
        self._attributes = CellAttributes()
        self._palette = default_palette()
        self._scroll_region = (0, rows - 1)
        self._alt_active = False
        self._main_grid: list[list[TerminalCell]] | None = None

    @property
    def current_attributes(self) -> CellAttributes:
        """Attributes given to newly written cells."""
        return self._attributes

    @property
    def alternate_buffer_active(self) -> bool:
        return self._alt_active

    def resize(self, cols: int, rows: int) -> None:
        """Change the size, keeping the overlapping cells and clamping the cursor."""
        _check_size(cols, rows)
        new_grid = []
        for old_row in self._grid[:rows]:
            kept = old_row[:cols]
            new_grid.append(kept + _blank_row(cols - len(kept)))
        new_grid.extend(_blank_row(cols) for _ in range(rows - len(new_grid)))
        self._grid = new_grid
        self.cols = cols
        self.rows = rows
        self._cursor_row = min(self._cursor_row, rows - 1)
        self._cursor_col = min(self._cursor_col, cols - 1)
        self._scroll_region = (0, rows - 1)

    def process_action(self, action: TerminalAction) -> None:
        """Apply one parsed action to the screen."""
        match action:
            case Print(byte):
                self._put_char(chr(byte))
            case Bell():
                pass
            case Backspace():
                if self._cursor_col > 0:
                    self._cursor_col -= 1
            case Tab():
                target = (self._cursor_col + _TAB_WIDTH) // _TAB_WIDTH * _TAB_WIDTH
                self._cursor_col = min(target, self.cols - 1)
            case LineFeed():
                self._line_feed()
            case CarriageReturn():
                self._cursor_col = 0
            case CursorUp(count):
                self._cursor_row = max(self._cursor_row - count, 0)
            case CursorDown(count):
                self._cursor_row = min(self._cursor_row + count, self.rows - 1)
            case CursorForward(count):
                self._cursor_col = min(self._cursor_col + count, self.cols - 1)
            case CursorBackward(count):
                self._cursor_col = max(self._cursor_col - count, 0)
            case CursorNextLine(count):
                self._cursor_row = min(self._cursor_row + count, self.rows - 1)
                self._cursor_col = 0
            case CursorPreviousLine(count):
                self._cursor_row = max(self._cursor_row - count, 0)
                self._cursor_col = 0
            case CursorPosition(row, col):
                self._cursor_row = min(max(row - 1, 0), self.rows - 1)
                self._cursor_col = min(max(col - 1, 0), self.cols - 1)
            case EraseInDisplay(mode):
                self._erase_in_display(mode)
            case EraseInLine(mode):
                self._erase_in_line(mode)
            case SetGraphicsRendition(params):
                self._process_sgr(params)
            case Reset():
                self._attributes = CellAttributes()
                self._cursor_row = 0
                self._cursor_col = 0
                self._scroll_region = (0, self.rows - 1)
                self._erase_region(0, 0, self.rows - 1, self.cols - 1)
            case ScrollUp(count):
                self._scroll_up(count)
            case SetWindowTitle(title):
                self.title = title
            case SetColorPalette(index, color):
                if 0 <= index < len(self._palette):
                    self._palette[index] = color
            case _:
                raise TypeError(f"not a terminal action: {action!r}")

    def use_alternate_buffer(self, enable: bool) -> None:
        """Switch to a blank alternate screen, or back to the saved main one."""
        if enable == self._alt_active:
            return
        if enable:
            self._main_grid = self._grid
            self._grid = _blank_grid(self.cols, self.rows)
        elif self._main_grid is not None:
            self._grid = self._main_grid
            self._main_grid = None
        self._alt_active = enable

    def get_cell(self, row: int, col: int) -> TerminalCell | None:
        """The cell at a position, or None outside the screen."""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self._grid[row][col]
        return None

    def cursor_position(self) -> tuple[int, int]:
        """The cursor as a 0-based (row, column) pair."""
        return self._cursor_row, self._cursor_col

    def get_color(self, index: int) -> str:
        """A colour as #RRGGBB, from the palette or an RGB-flagged value."""
        if index & RGB_FLAG:
            return _hex((index >> 16) & 0xFF, (index >> 8) & 0xFF, index & 0xFF)
        if 0 <= index < len(self._palette):
            return self._palette[index]
        return _UNKNOWN_COLOR

    def _line_feed(self) -> None:
        self._cursor_row += 1
        bottom = self._scroll_region[1]
        if self._cursor_row > bottom:
            self._scroll_up(1)
            self._cursor_row = bottom

    def _put_char(self, char: str) -> None:
        control = {
            "\n": LineFeed(),
            "\r": CarriageReturn(),
            "\t": Tab(),
            "\x08": Backspace(),
            "\x07": Bell(),
        }.get(char)
        if control is not None:
            self.process_action(control)
            return

        if self._cursor_row < self.rows and self._cursor_col < self.cols:
            self._grid[self._cursor_row][self._cursor_col] = TerminalCell(
                char, self._attributes
            )

        self._cursor_col += 1
        if self._cursor_col >= self.cols:
            self._cursor_col = 0
            self._line_feed()

    def _erase_in_display(self, mode: int) -> None:
        last_row, last_col = self.rows - 1, self.cols - 1
        if mode == 0:
            self._erase_region(self._cursor_row, self._cursor_col, last_row, last_col)
        elif mode == 1:
            self._erase_region(0, 0, self._cursor_row, self._cursor_col)
        elif mode in (2, 3):
            self._erase_region(0, 0, last_row, last_col)

    def _erase_in_line(self, mode: int) -> None:
        row, last_col = self._cursor_row, self.cols - 1
        if mode == 0:
            self._erase_region(row, self._cursor_col, row, last_col)
        elif mode == 1:
            self._erase_region(row, 0, row, self._cursor_col)
        elif mode == 2:
            self._erase_region(row, 0, row, last_col)

    def _erase_region(self, start_row: int, start_col: int, end_row: int, end_col: int) -> None:
        start_row = min(start_row, self.rows - 1)
        start_col = min(start_col, self.cols - 1)
        end_row = min(end_row, self.rows - 1)
        end_col = min(end_col, self.cols - 1)
        blank = TerminalCell(" ", self._attributes)
        for row in range(start_row, end_row + 1):
            first = start_col if row == start_row else 0
            last = end_col if row == end_row else self.cols - 1
            width = max(0, last - first + 1)
            self._grid[row][first : last + 1] = [blank] * width

    def _scroll_up(self, count: int) -> None:
        top, bottom = self._scroll_region
        count = min(count, bottom - top + 1)
        if count <= 0:
            return
        blank = TerminalCell(" ", self._attributes)
        kept = self._grid[top + count : bottom + 1]
        fresh = [[blank] * self.cols for _ in range(count)]
        self._grid[top : bottom + 1] = kept + fresh

    def _process_sgr(self, params: tuple[int, ...] | list[int]) -> None:
        if not params:
            self._attributes = CellAttributes()
            return

        queue = deque(params)
        attrs = self._attributes
        while queue:
            code = queue.popleft()
            if code == 0:
                attrs = CellAttributes()
            elif code in _SGR_FLAGS:
                name, value = _SGR_FLAGS[code]
                attrs = dataclasses.replace(attrs, **{name: value})
            elif 30 <= code <= 37:
                attrs = dataclasses.replace(attrs, fg_color=code - 30)
            elif code == 38:
                found = _extended_color(queue)
                if found is not None:
                    attrs = dataclasses.replace(attrs, fg_color=found[1])
            elif code == 39:
                attrs = dataclasses.replace(attrs, fg_color=DEFAULT_FG)
            elif 40 <= code <= 47:
                attrs = dataclasses.replace(attrs, bg_color=code - 40)
            elif code == 48:
                found = _extended_color(queue)
                if found is not None:
                    kind, value = found
                    # A 24-bit background colour lands on the foreground, as before.
                    field_name = "bg_color" if kind == "indexed" else "fg_color"
                    attrs = dataclasses.replace(attrs, **{field_name: value})
            elif code == 49:
                attrs = dataclasses.replace(attrs, bg_color=DEFAULT_BG)
            elif 90 <= code <= 97:
                attrs = dataclasses.replace(attrs, fg_color=code - 90 + 8)
            elif 100 <= code <= 107:
                attrs = dataclasses.replace(attrs, bg_color=code - 100 + 8)
        self._attributes = attrs