"""Error types raised by the core.

Every request-level error carries an `ErrorKind`, so transports can map
failures onto their own error responses without parsing messages.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class ErrorKind(str, Enum):
    """
    Classification of request-level failures.

    Values:
        INVALID_INPUT: The caller supplied a missing or malformed argument.
        NOT_FOUND: A bare table name matched no table in any dataset.
        UPSTREAM: The warehouse client failed (network, auth, missing object).
    """

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"


class BqContextError(Exception):
    """Base class for request-level errors."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT


class InvalidIdentifierError(BqContextError, ValueError):
    """Raised when a table identifier is empty, not a string or malformed."""

    kind = ErrorKind.INVALID_INPUT


class InvalidRequestError(BqContextError, ValueError):
    """Raised when a protocol request carries unusable arguments."""

    kind = ErrorKind.INVALID_INPUT


class TableNotFoundError(BqContextError, LookupError):
    """Raised when a bare table name is not present in any dataset."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, table: str):
        super().__init__(f"Table '{table}' not found in any dataset.")
        self.table = table


class UpstreamError(BqContextError):
    """Raised when a warehouse call fails. The original error is `__cause__`."""

    kind = ErrorKind.UPSTREAM


@contextmanager
def upstream_errors() -> Iterator[None]:
    """Re-raise anything but our own errors as `UpstreamError`, keeping the message."""
    try:
        yield
    except BqContextError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise UpstreamError(str(exc) or type(exc).__name__) from exc
