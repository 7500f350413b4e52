"""Back/forward navigation and bookmarks between blocks."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class BlockNavigation:
    """Tracks the focused block, the jump history and named bookmarks."""

    def __init__(self) -> None:
        self._history: list[int] = []
        self._position = 0
        self._bookmarks: dict[str, int] = {}

    def current_block_id(self) -> int | None:
        return self._history[self._position] if self._history else None

    def set_current_block(self, block_id: int) -> None:
        """Focus a block, dropping any forward history."""
        if block_id == self.current_block_id():
            return
        if self._history:
            del self._history[self._position + 1 :]
        self._history.append(block_id)
        self._position = len(self._history) - 1

    def go_back(self) -> int | None:
        """Step back in history; None when already at the oldest entry."""
        if self._position > 0:
            self._position -= 1
            return self._history[self._position]
        return None

    def go_forward(self) -> int | None:
        """Step forward in history; None when already at the newest entry."""
        if self._position + 1 < len(self._history):
            self._position += 1
            return self._history[self._position]
        return None

    def bookmark(self, name: str, block_id: int) -> None:
        self._bookmarks[name] = block_id

    def go_to_bookmark(self, name: str) -> int | None:
        """Focus the block bookmarked under a name, if there is one."""
        block_id = self._bookmarks.get(name)
        if block_id is not None:
            self.set_current_block(block_id)
        return block_id

    def bookmarks(self) -> Mapping[str, int]:
        """A read-only view of the bookmarks."""
        return MappingProxyType(self._bookmarks)