"""Common CLI options for the CLI."""

import typer

from bqcontext.core.auth import CREDENTIALS_ENV, PROJECT_ENV

ProjectOpt = typer.Option(
    None,
    "--project",
    envvar=PROJECT_ENV,
    help="Google Cloud project that holds the BigQuery datasets",
    show_envvar=True,
)

CredentialsOpt = typer.Option(
    None,
    "--credentials",
    envvar=CREDENTIALS_ENV,
    help="Service account key file (or its JSON content)",
    show_envvar=True,
)

LogLevelOpt = typer.Option(
    "INFO",
    "--log-level",
    envvar="BQCTX_LOG_LEVEL",
    help="Log level for messages written to stderr",
    case_sensitive=False,
)

DatasetOpt = typer.Option(
    None,
    "--dataset",
    "-d",
    help="Only list tables of this dataset",
)

NameOpt = typer.Option(
    None,
    "--name",
    help="Regex filter for dataset.table names",
)

PickOpt = typer.Option(
    False,
    "--pick",
    help="Pick the table interactively",
)
