"""Entry-point for the `typquest` console script."""
from __future__ import annotations

import logging

from .presentation.cli import render
from .presentation.cli.app import main as cli_main


def configure_logging() -> None:
    """Send log records to stderr; TYPQUEST_DEBUG=1 turns on DEBUG output."""
    level = logging.DEBUG if render.debug_enabled() else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main() -> None:
    configure_logging()
    cli_main()


if __name__ == "__main__":
    main()
