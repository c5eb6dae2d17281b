from __future__ import annotations

import re

import typer

from bqcontext.cli.common.context import AppContext
from bqcontext.cli.common.exits import die, warn_exit
from bqcontext.cli.common.options import DatasetOpt, NameOpt, PickOpt
from bqcontext.cli.common.output import out
from bqcontext.cli.tui import select_table
from bqcontext.core.errors import BqContextError, ErrorKind
from bqcontext.core.models import ALL_TABLES
from bqcontext.core.schema import describe_target, render_schema


def _compile_regex_or_exit(pattern: str | None, *, option_name: str) -> re.Pattern | None:
    """Compile a regex pattern and convert invalid syntax into CLI input errors."""
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        out.error(f"Invalid regex for {option_name}: {exc}")
        raise typer.Exit(2) from exc


def _exit_code_for(exc: BqContextError) -> int:
    return 2 if exc.kind is ErrorKind.INVALID_INPUT else 1


def tables(
    ctx: typer.Context,
    dataset: str | None = DatasetOpt,
    name: str | None = NameOpt,
):
    """List BigQuery tables in the project."""
    appctx: AppContext = ctx.obj
    aggregator = appctx.service.aggregator
    name_rx = _compile_regex_or_exit(name, option_name="--name")

    try:
        with out.status("Loading tables..."):
            found = aggregator.list_tables()
    except BqContextError as exc:
        die(f"Could not list tables: {exc}", code=_exit_code_for(exc), cause=exc)

    if dataset:
        found = [t for t in found if t.dataset_id == dataset]

    if name_rx:
        found = [t for t in found if name_rx.search(t.full_name)]

    if not found:
        warn_exit("No tables found.")

    out.header("Tables")
    out.info(f"Project: {appctx.settings.project_id} | Tables: {len(found)}")
    out.tables_table(found, title="Tables")


def schema(
    ctx: typer.Context,
    identifier: str | None = typer.Argument(
        None, help="Table as [dataset.]table, or all-tables (default)"
    ),
    pick: bool = PickOpt,
):
    """Print table schemas as JSON."""
    appctx: AppContext = ctx.obj
    service = appctx.service

    if pick:
        try:
            with out.status("Loading tables..."):
                candidates = service.table_candidates()
        except BqContextError as exc:
            die(f"Could not list tables: {exc}", code=1, cause=exc)
        identifier = select_table(candidates)
        if identifier is None:
            warn_exit("No table selected.")

    try:
        target = service.resolver.resolve(identifier or ALL_TABLES)
        with out.status(f"Loading {describe_target(target)}..."):
            text = render_schema(service.aggregator.get_schema(target))
    except BqContextError as exc:
        die(str(exc), code=_exit_code_for(exc), cause=exc)

    out.json(text)
