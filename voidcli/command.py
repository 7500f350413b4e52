"""Commands entered by the user and the tokenizer that splits them."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field

_QUOTES = "\"'"
_BLANKS = " \t"


def tokenize(text: str) -> list[str]:
    """Split a command line into tokens, honouring quotes and backslash escapes."""
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    escape_next = False

    for char in text:
        if escape_next:
            current.append(char)
            escape_next = False
        elif char == "\\":
            escape_next = True
        elif char in _QUOTES:
            if quote is None:
                quote = char
            elif char == quote:
                quote = None
            else:
                current.append(char)
        elif char in _BLANKS and quote is None:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return "/"


@dataclass
class Command:
    """A command line as typed, with its tokens, environment and directory."""

    raw: str
    tokens: list[str] = field(default_factory=list)
    env_vars: list[tuple[str, str]] = field(default_factory=list)
    working_dir: str = field(default_factory=_current_dir)

    @classmethod
    def parse(cls, raw: str) -> Command:
        """Build a command from the raw text, tokenizing it."""
        return cls(raw=raw, tokens=tokenize(raw))

    def program(self) -> str | None:
        """The program name, or None for an empty command."""
        return self.tokens[0] if self.tokens else None

    def args(self) -> list[str]:
        """Every token after the program name."""
        return list(self.tokens[1:])

    def with_env_var(self, key: str, value: str) -> Command:
        """A copy of this command with one more environment variable."""
        return dataclasses.replace(
            self,
            tokens=list(self.tokens),
            env_vars=[*self.env_vars, (key, value)],
        )

    def with_working_dir(self, directory: str) -> Command:
        """A copy of this command that runs in another directory."""
        return dataclasses.replace(
            self,
            tokens=list(self.tokens),
            env_vars=list(self.env_vars),
            working_dir=directory,
        )

    def __str__(self) -> str:
        return self.raw