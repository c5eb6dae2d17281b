"""Line-delimited JSON command protocol.

Each input line is an object `{"command": ..., "argument": ...}`. The only
command is `bq-schema`; a missing or null argument means `all-tables`. Every
line gets exactly one response line, `{"response": ...}` or `{"error": ...}`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, TextIO

from bqcontext.core.errors import BqContextError, InvalidRequestError
from bqcontext.core.models import ALL_TABLES
from bqcontext.core.service import SchemaService

logger = logging.getLogger(__name__)

SCHEMA_COMMAND = "bq-schema"


def _parse_line(line: str) -> tuple[str, Any]:
    """Return (command, argument) from one request line."""
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as exc:
        raise InvalidRequestError(f"Malformed command line: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise InvalidRequestError("Command line must be a JSON object.")

    command = payload.get("command")
    if command != SCHEMA_COMMAND:
        raise InvalidRequestError(f"Unknown command: {command}")

    argument = payload.get("argument")
    return command, ALL_TABLES if argument is None else argument


def handle_line(service: SchemaService, line: str) -> dict[str, str]:
    """Handle one request line and return the response object."""
    try:
        _command, argument = _parse_line(line)
        return {"response": service.schema_text(argument)}
    except BqContextError as exc:
        logger.error("Command failed (%s): %s", exc.kind.value, exc)
        return {"error": str(exc)}


def serve_lines(service: SchemaService, stdin: TextIO, stdout: TextIO) -> int:
    """
    Process request lines until end of input.

    Returns:
        The number of requests handled.
    """
    handled = 0
    for line in stdin:
        if not line.strip():
            continue
        response = handle_line(service, line)
        stdout.write(json.dumps(response) + "\n")
        stdout.flush()
        handled += 1
    return handled
