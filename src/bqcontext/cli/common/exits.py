"""Exit handling for bqctx commands.

Errors print to stderr through `out`; exit codes are 1 for configuration and
warehouse failures, 2 for invalid user input.
"""

from typing import NoReturn

import typer

from bqcontext.cli.common.output import out


def die(msg: str, code: int = 1, *, cause: BaseException | None = None) -> NoReturn:
    """Print an error and exit, chaining `cause` when the exit comes from an exception."""
    out.error(msg)
    raise typer.Exit(code) from cause


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Print a warning and exit (0 unless told otherwise)."""
    out.warn(msg)
    raise typer.Exit(code)
