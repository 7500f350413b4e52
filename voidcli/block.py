"""Terminal blocks: one command with its output, and their manager."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar

from .command import Command
from .output import Output

StateT = TypeVar("StateT")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Block:
    """A command entered in the terminal together with what it produced."""

    id: int
    command: Command
    output: Output = field(default_factory=Output)
    created_at: datetime = field(default_factory=_utc_now)
    exit_code: int | None = None
    duration_ms: int | None = None
    is_pinned: bool = False
    is_folded: bool = False


class BlockManager(Generic[StateT]):
    """Keeps the terminal's blocks in the order they were added."""

    def __init__(self, state: StateT) -> None:
        self.state = state
        self._blocks: list[Block] = []

    def add_block(self, block: Block) -> None:
        self._blocks.append(block)

    def get_block(self, index: int) -> Block | None:
        """The block at a position, or None when there is none."""
        if 0 <= index < len(self._blocks):
            return self._blocks[index]
        return None

    def current_block(self) -> Block | None:
        """The most recently added block, if any."""
        return self._blocks[-1] if self._blocks else None

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(self._blocks)