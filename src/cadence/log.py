# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler


def configure_logging(level: str = "WARNING") -> None:
    """Route library loggers through rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
