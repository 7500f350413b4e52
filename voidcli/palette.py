"""The command palette: history, completion and suggestions together."""

from __future__ import annotations

import inspect

from .completion import Completion
from .history import History
from .suggestions import CommandSuggestion, SuggestionEngine


class CommandPalette:
    """Gathers the sources that help the user pick a command."""

    def __init__(
        self,
        history: History | None = None,
        completion: Completion | None = None,
        suggestions: SuggestionEngine | None = None,
    ) -> None:
        self.history = history if history is not None else History()
        self.completion = completion if completion is not None else Completion()
        self.suggestions = suggestions if suggestions is not None else SuggestionEngine()

    async def get_suggestions(self, text: str) -> list[CommandSuggestion]:
        """Suggestions for the typed text: engine matches first, then AI ones.

        Blank input yields no suggestions. A command offered by more than one
        source is listed once, from the first source that offered it.
        """
        prefix = text.strip()
        if not prefix:
            return []

        found = list(self.suggestions.get_suggestions(prefix))

        ai = self.suggestions.get_ai_suggestions(text)
        if inspect.isawaitable(ai):
            ai = await ai
        found.extend(ai)

        seen: set[str] = set()
        unique: list[CommandSuggestion] = []
        for suggestion in found:
            if suggestion.command not in seen:
                seen.add(suggestion.command)
                unique.append(suggestion)
        return unique