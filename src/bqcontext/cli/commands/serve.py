from __future__ import annotations

import logging
import sys

import anyio
import typer

from bqcontext.cli.common.context import AppContext
from bqcontext.cli.common.exits import die
from bqcontext.server.line_protocol import serve_lines
from bqcontext.server.mcp_server import serve_stdio

logger = logging.getLogger(__name__)


def serve(ctx: typer.Context):
    """Run the MCP server on stdin/stdout."""
    appctx: AppContext = ctx.obj
    logger.info("Starting server. Project: %s", appctx.settings.project_id)
    try:
        anyio.run(serve_stdio, appctx.service)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Server stopped with an error")
        die(f"Server failed: {exc}", code=1, cause=exc)


def commands(ctx: typer.Context):
    """Answer line-delimited JSON commands from stdin on stdout."""
    appctx: AppContext = ctx.obj
    logger.info("Reading commands. Project: %s", appctx.settings.project_id)
    handled = serve_lines(appctx.service, sys.stdin, sys.stdout)
    logger.info("Input closed after %d command(s)", handled)
