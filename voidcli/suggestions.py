"""Built-in and user-defined command suggestions."""

from __future__ import annotations

import enum
from dataclasses import dataclass

DEFAULT_SUGGESTIONS: tuple[tuple[str, str], ...] = (
    ("ls", "List directory contents"),
    ("cd", "Change directory"),
    ("pwd", "Print working directory"),
    ("cp", "Copy files and directories"),
    ("mv", "Move files and directories"),
    ("rm", "Remove files or directories"),
    ("mkdir", "Make directories"),
    ("touch", "Change file timestamps"),
    ("grep", "Print lines matching a pattern"),
    ("find", "Search for files in a directory hierarchy"),
    ("cat", "Concatenate files and print on the standard output"),
    ("echo", "Display a line of text"),
)


class SuggestionSource(enum.Enum):
    HISTORY = "history"
    AI = "ai"
    CUSTOM = "custom"
    BUILTIN = "builtin"


@dataclass(frozen=True)
class CommandSuggestion:
    command: str
    description: str
    source: SuggestionSource


class SuggestionEngine:
    """Offers commands from the built-in list and user-added entries."""

    def __init__(self) -> None:
        self._builtin: dict[str, str] = dict(DEFAULT_SUGGESTIONS)
        self._custom: dict[str, str] = {}
        self.ai_suggestions_enabled = False

    def add_custom_suggestion(self, command: str, description: str) -> None:
        self._custom[command] = description

    def remove_custom_suggestion(self, command: str) -> bool:
        """Remove a custom suggestion; True when it existed."""
        return self._custom.pop(command, None) is not None

    def _all(self) -> list[CommandSuggestion]:
        results = [
            CommandSuggestion(cmd, desc, SuggestionSource.BUILTIN)
            for cmd, desc in self._builtin.items()
        ]
        results.extend(
            CommandSuggestion(cmd, desc, SuggestionSource.CUSTOM)
            for cmd, desc in self._custom.items()
        )
        results.sort(key=lambda suggestion: suggestion.command)
        return results

    def get_suggestions(self, partial: str) -> list[CommandSuggestion]:
        """Suggestions whose command starts with the text, sorted by command."""
        return [s for s in self._all() if s.command.startswith(partial)]

    async def get_ai_suggestions(self, context: str) -> list[CommandSuggestion]:
        """The AI suggestion for a context; empty while AI suggestions are off."""
        if not self.ai_suggestions_enabled:
            return []
        return [
            CommandSuggestion(
                command="ai_suggestion",
                description="AI suggested command based on context",
                source=SuggestionSource.AI,
            )
        ]

    def get_all_suggestions(self) -> list[CommandSuggestion]:
        """Every suggestion, sorted by command."""
        return self._all()