"""The application: shared state, the event loop and the top-level object."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass

from .block import BlockManager
from .config import Config

log = logging.getLogger(__name__)

EVENT_QUEUE_SIZE = 100


@dataclass
class AppState:
    """State shared between the application's components."""


class Event(enum.Enum):
    QUIT = "quit"


class EventLoop:
    """Handles application events taken from a queue."""

    def __init__(self, state: AppState, events: asyncio.Queue[Event]) -> None:
        self.state = state
        self.events = events
        self.quit_requested = False

    async def run(self) -> None:
        """Handle the events already queued, stopping at a quit request."""
        while not self.quit_requested:
            try:
                event = self.events.get_nowait()
            except asyncio.QueueEmpty:
                return
            if event is Event.QUIT:
                self.quit_requested = True


class VoidCLI:
    """The terminal application, wiring state, blocks and events together."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.state = AppState()
        self.events: asyncio.Queue[Event] = asyncio.Queue(maxsize=EVENT_QUEUE_SIZE)
        self.block_manager: BlockManager[AppState] = BlockManager(self.state)
        self.event_loop = EventLoop(self.state, self.events)

    async def run(self) -> None:
        log.info("Initializing application components")
        await self.event_loop.run()