"""Command-line entry point of the terminal."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from .app import VoidCLI
from .config import Config

log = logging.getLogger(__name__)


def _log_level() -> str:
    level = os.environ.get("VOIDCLI_LOG", "WARNING").upper()
    return level if level in logging.getLevelNamesMapping() else "WARNING"


def main(argv: list[str] | None = None) -> int:
    """Start the terminal, with the configuration file given or the defaults."""
    parser = argparse.ArgumentParser(
        prog="voidcli", description="A modern terminal emulator"
    )
    parser.add_argument("config", nargs="?", help="path of a YAML configuration file")
    args = parser.parse_args(argv)

    logging.basicConfig(level=_log_level())
    log.info("Starting VoidCLI Terminal")

    try:
        config = Config.from_file(args.config) if args.config else Config.default()
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    asyncio.run(VoidCLI(config).run())
    log.info("Shutting down")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())