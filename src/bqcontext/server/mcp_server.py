"""MCP (Model Context Protocol) server exposing BigQuery table schemas.

Exposes:
- one `bigquery://<project>/<dataset>/<table>/schema` resource per table
- the `bq-schema` tool (all tables, or one `[dataset.]table`)
- the `bq-schema` prompt, with completion of its `table` argument

Usage:
    # Start with stdio transport (what MCP clients launch)
    bqctx serve
"""

from __future__ import annotations

import logging
import re
from typing import Any

import anyio
import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from bqcontext.core.errors import BqContextError, ErrorKind, InvalidRequestError
from bqcontext.core.models import ALL_TABLES
from bqcontext.core.schema import describe_identifier, to_json_text
from bqcontext.core.service import SchemaService

logger = logging.getLogger(__name__)

SERVER_NAME = "bigquery-context-server"
SERVER_VERSION = "0.1.1"

SCHEMA_PATH = "schema"
SCHEMA_TOOL_NAME = "bq-schema"
SCHEMA_PROMPT_NAME = "bq-schema"
SCHEMA_MIME_TYPE = "application/json"

# MCP caps completion responses at 100 values
MAX_COMPLETION_VALUES = 100

_RESOURCE_URI_RE = re.compile(r"^bigquery://([^/]+)/([^/]+)/([^/]+)/schema$")
_HAS_WHITESPACE_RE = re.compile(r"\S*\s")

SCHEMA_TOOL = types.Tool(
    name=SCHEMA_TOOL_NAME,
    description="Returns the schema for a BigQuery table.",
    inputSchema={
        "type": "object",
        "properties": {
            "mode": {
                "type": "string",
                "enum": ["all", "specific"],
                "description": "Mode of schema retrieval",
            },
            "table": {
                "type": "string",
                "description": "Table name (required if mode is 'specific'). Format: [dataset.]table",
            },
        },
        "required": ["mode"],
        "if": {"properties": {"mode": {"const": "specific"}}},
        "then": {"required": ["table"]},
    },
)

SCHEMA_PROMPT = types.Prompt(
    name=SCHEMA_PROMPT_NAME,
    description="Retrieve the schema for a given table in BigQuery",
    arguments=[
        types.PromptArgument(
            name="table",
            description="the table to describe (format: [dataset.]table)",
            required=True,
        )
    ],
)


# ---------------------------------------------------------------------------
# Request handling (synchronous, runs in a worker thread)
# ---------------------------------------------------------------------------


def resource_uri(project_id: str, dataset_id: str, table_id: str) -> str:
    return f"bigquery://{project_id}/{dataset_id}/{table_id}/{SCHEMA_PATH}"


def list_schema_resources(service: SchemaService) -> list[types.Resource]:
    """One schema resource per table in the project."""
    return [
        types.Resource(
            uri=resource_uri(service.project_id, t.dataset_id, t.table_id),
            name=f'"{t.full_name}" table schema',
            mimeType=SCHEMA_MIME_TYPE,
        )
        for t in service.aggregator.list_tables()
    ]


def read_schema_resource(service: SchemaService, uri: str) -> str:
    """Return the schema of the table named by a resource URI as JSON text."""
    match = _RESOURCE_URI_RE.match(uri)
    if not match:
        raise InvalidRequestError("Invalid resource URI")
    # the project segment is informational; reads use the configured project
    _project, dataset_id, table_id = match.groups()
    return to_json_text(service.aggregator.get_table_schema(dataset_id, table_id))


def _require_table(arguments: dict[str, Any] | None) -> str:
    table = (arguments or {}).get("table")
    if not isinstance(table, str) or not table:
        raise InvalidRequestError(f"Invalid table: {table}")
    return table


def call_schema_tool(service: SchemaService, name: str, arguments: dict[str, Any] | None) -> str:
    """Run the `bq-schema` tool and return the rendered schema JSON."""
    if name != SCHEMA_TOOL_NAME:
        raise InvalidRequestError("Tool not found")

    mode = (arguments or {}).get("mode")
    if mode == "all":
        return service.schema_text(ALL_TABLES)
    if mode == "specific":
        return service.schema_text(_require_table(arguments))
    raise InvalidRequestError(f"Invalid mode: {mode}")


def get_schema_prompt(
    service: SchemaService, name: str, arguments: dict[str, str] | None
) -> types.GetPromptResult:
    """Build the `bq-schema` prompt for a table (or all tables)."""
    if name != SCHEMA_PROMPT_NAME:
        raise InvalidRequestError(f"Prompt '{name}' not implemented")

    table = _require_table(arguments)
    text = service.schema_text(table)
    return types.GetPromptResult(
        description=describe_identifier(table),
        messages=[
            types.PromptMessage(
                role="user",
                content=types.TextContent(type="text", text=text),
            )
        ],
    )


def complete_table_argument(service: SchemaService, value: str) -> types.Completion:
    """
    Suggest table names for the first token of the prompt argument.

    Once the value contains whitespace the argument is considered complete
    and nothing is suggested.
    """
    if _HAS_WHITESPACE_RE.search(value):
        return types.Completion(values=[])

    matches = [c for c in service.table_candidates() if c.startswith(value)]
    return types.Completion(
        values=matches[:MAX_COMPLETION_VALUES],
        total=len(matches),
        hasMore=len(matches) > MAX_COMPLETION_VALUES,
    )


def to_mcp_error(exc: BqContextError) -> McpError:
    """Map a request-level error onto a JSON-RPC error by kind."""
    code = types.INTERNAL_ERROR if exc.kind is ErrorKind.UPSTREAM else types.INVALID_PARAMS
    return McpError(types.ErrorData(code=code, message=str(exc)))


# ---------------------------------------------------------------------------
# Server wiring
# ---------------------------------------------------------------------------


def build_server(service: SchemaService) -> Server:
    """Create an MCP server whose handlers use the given schema service."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    async def _run(action: str, fn, *args):
        try:
            return await anyio.to_thread.run_sync(fn, service, *args)
        except BqContextError as exc:
            logger.error("Error %s (%s): %s", action, exc.kind.value, exc)
            raise to_mcp_error(exc) from exc

    @server.list_resources()
    async def handle_list_resources() -> list[types.Resource]:
        return await _run("listing resources", list_schema_resources)

    @server.read_resource()
    async def handle_read_resource(uri) -> list[ReadResourceContents]:
        text = await _run("reading resource", read_schema_resource, str(uri))
        return [ReadResourceContents(content=text, mime_type=SCHEMA_MIME_TYPE)]

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [SCHEMA_TOOL]

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        # the SDK turns raised errors into tool error results
        try:
            text = await anyio.to_thread.run_sync(call_schema_tool, service, name, arguments)
        except BqContextError as exc:
            logger.error("Error calling tool (%s): %s", exc.kind.value, exc)
            raise
        return [types.TextContent(type="text", text=text)]

    @server.list_prompts()
    async def handle_list_prompts() -> list[types.Prompt]:
        logger.info("Handling prompts/list request")
        return [SCHEMA_PROMPT]

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
        logger.info("Handling prompts/get request")
        return await _run("getting prompt", get_schema_prompt, name, arguments)

    @server.completion()
    async def handle_completion(ref, argument, context) -> types.Completion | None:
        logger.info("Handling completion/complete request")
        if not isinstance(ref, types.PromptReference) or ref.name != SCHEMA_PROMPT_NAME:
            raise to_mcp_error(InvalidRequestError("unknown prompt"))
        return await _run("completing", complete_table_argument, argument.value)

    return server


async def serve_stdio(service: SchemaService) -> None:
    """Run the MCP server over stdin/stdout until the client disconnects."""
    server = build_server(service)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Server running with stdio transport")
        await server.run(read_stream, write_stream, server.create_initialization_options())
