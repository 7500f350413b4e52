"""Terminal emulator core: escape-sequence parsing, a virtual screen, pseudo-terminals, command blocks, history, completion, configuration and themes."""

__version__ = "0.1.0"