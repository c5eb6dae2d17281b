"""Logging setup for the CLI and the protocol servers."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from bqcontext.cli.common.output import err_console

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def setup_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries protocol traffic."""
    name = level.upper()
    if name not in _LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    logging.basicConfig(
        level=name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
