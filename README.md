# voidcli

This package holds the building blocks of a terminal emulator:

- **Escape-sequence parser.** `voidcli.parser.TerminalParser` turns raw output bytes into action objects such as `Print`, `LineFeed`, `CursorPosition`, `EraseInDisplay`, `SetGraphicsRendition`, `SetWindowTitle` and `SetColorPalette`. It keeps its state between calls to `parse`, so a sequence may arrive split across chunks.
- **Virtual screen.** `voidcli.vt.VirtualTerminal` applies those actions to a grid of `TerminalCell`s. It tracks the cursor, the current `CellAttributes`, the window title and an alternate screen buffer (`use_alternate_buffer`). It also holds a 256-colour palette (`default_palette()`), and `get_color` turns a colour index into `#RRGGBB`.
- **Pseudo-terminals.** `voidcli.pty.PtyPair.open(rows, cols)` opens a master/slave pair. The master side offers `read`, `write` and `resize`. This part needs a POSIX system.
- **Shell processes.** `voidcli.process.ProcessManager` starts a shell on a pseudo-terminal with `TERM=xterm-256color`. It forwards output as `OutputEvent`s, and read errors as `ErrorEvent`s, to any queue-like object that has `put_nowait`. It also provides `write`, `resize`, `kill`, `wait` and `close`.
- **Command blocks.** The block modules are:
  - `voidcli.command`: `Command` and `tokenize`. Tokenizing honours quotes and backslash escapes.
  - `voidcli.output`: `Output`, the captured stdout, stderr and status of a command.
  - `voidcli.block`: `Block` and `BlockManager`.
  - `voidcli.navigation`: `BlockNavigation`, with back/forward history and bookmarks.
- **History, completion and suggestions.**
  - `voidcli.history.History` stores one JSON object per line. By default it uses `~/.void_history` and keeps at most 1000 entries.
  - `voidcli.completion.Completion` completes command names from the executables on `PATH`, and later words as file-system paths.
  - `voidcli.suggestions.SuggestionEngine` offers built-in and custom command suggestions.
  - `voidcli.palette.CommandPalette` brings these together.
- **Configuration and themes.**
  - `voidcli.config.Config` holds the terminal settings and is read from YAML.
  - `voidcli.appconfig.AppConfig` holds the application name, colours and connection settings, and is read from TOML.
  - `voidcli.themes.ThemeManager` provides the built-in `dark` and `light` themes and can load a theme from YAML.

## Installation

```
pip install .
```

## Running

```
voidcli [CONFIG]
```

`CONFIG` is an optional path to a YAML configuration file, read by `Config.from_file`. Without it, `Config.default()` is used. If the file cannot be read or is invalid, the command prints an error and exits with status 1. The log level comes from the `VOIDCLI_LOG` environment variable and defaults to `WARNING`.

## Library use

```python
from voidcli.parser import TerminalParser
from voidcli.vt import VirtualTerminal

parser = TerminalParser()
screen = VirtualTerminal(80, 24)
for action in parser.parse(b"\x1b[1;31mHello"):
    screen.process_action(action)

print(screen.get_cell(0, 0).character)   # "H"
print(screen.cursor_position())          # (0, 5)
```

Tokenizing a command line:

```python
from voidcli.command import Command, tokenize

tokenize('echo "hello world"')           # ["echo", "hello world"]
Command.parse("ls -la").program()        # "ls"
```

Themes:

```python
from voidcli.themes import ThemeManager

manager = ThemeManager()
manager.set_theme("light")
manager.current_theme().colors.background   # "#ffffff"
```

An unknown theme name raises `ThemeNotFoundError`.

## What it does not do

The package does not draw anything. It has no window, no renderer and no GPU drawing.

The `voidcli` command does three things:

1. It loads the configuration.
2. It builds a `VoidCLI` application.
3. It runs that application's `EventLoop`, which handles the events already queued and then returns.

It does not start a shell or show a screen. To connect a shell to a screen, use `ProcessManager`, `TerminalParser` and `VirtualTerminal` from your own code. Keybindings are accepted in the configuration but are not used.

`SuggestionEngine.get_ai_suggestions` calls no service. When enabled, it returns one fixed placeholder suggestion.

## Tests

```
pip install .[test]
pytest
```