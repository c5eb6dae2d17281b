"""CLI application for the BigQuery context server."""

import typer

from bqcontext.cli.commands import schema as schema_cmds
from bqcontext.cli.commands import serve as serve_cmds
from bqcontext.cli.common.context import build_context
from bqcontext.cli.common.exits import die
from bqcontext.cli.common.logs import setup_logging
from bqcontext.cli.common.options import CredentialsOpt, LogLevelOpt, ProjectOpt

app = typer.Typer(
    help="bqctx - BigQuery table schemas for MCP clients",
    no_args_is_help=True,
)


@app.callback()
def _init(
    ctx: typer.Context,
    project: str | None = ProjectOpt,
    credentials: str | None = CredentialsOpt,
    log_level: str = LogLevelOpt,
):
    """Load configuration and build the BigQuery client."""
    if ctx.resilient_parsing:
        return
    try:
        setup_logging(log_level)
    except ValueError as exc:
        die(str(exc), code=2)
    ctx.obj = build_context(project, credentials)


app.command("serve", help="Run the MCP server over stdio.")(serve_cmds.serve)
app.command("commands", help="Run the line-delimited JSON command protocol.")(
    serve_cmds.commands
)
app.command("tables", help="List tables in the project.")(schema_cmds.tables)
app.command("schema", help="Print table schemas as JSON.")(schema_cmds.schema)


if __name__ == "__main__":
    app()
