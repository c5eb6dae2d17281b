"""Application context management for the CLI."""

from dataclasses import dataclass

from google.cloud import bigquery

from bqcontext.cli.common.exits import die
from bqcontext.core.adapters.bigquery import BigQueryAdapter
from bqcontext.core.auth import AuthError, ConfigError, Settings, get_client, load_settings
from bqcontext.core.service import SchemaService


@dataclass
class AppContext:
    """Application context holding settings, BigQuery client and schema service."""

    settings: Settings
    client: bigquery.Client
    service: SchemaService


def build_context(project: str | None, credentials: str | None) -> AppContext:
    """Build the application context, exiting with status 1 on bad configuration.

    Args:
        project: Project id (falls back to GOOGLE_CLOUD_PROJECT).
        credentials: Key file path or JSON (falls back to GOOGLE_APPLICATION_CREDENTIALS).

    Returns:
        AppContext: Context with a configured client and schema service.
    """
    try:
        settings = load_settings(project, credentials)
        client = get_client(settings)
    except (ConfigError, AuthError) as exc:
        die(str(exc), code=1, cause=exc)
    service = SchemaService.for_adapter(BigQueryAdapter(client), settings.project_id)
    return AppContext(settings=settings, client=client, service=service)
