"""Configuration and authentication helpers for BigQuery.

This module centralizes the startup settings (project and credentials) and
the creation of a BigQuery client from them. Settings are built once and
passed explicitly to everything that needs a client.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Mapping

from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery
from google.oauth2 import service_account

PROJECT_ENV = "GOOGLE_CLOUD_PROJECT"
CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"


class ConfigError(RuntimeError):
    """Raised when required startup configuration is missing."""


class AuthError(RuntimeError):
    """Raised when BigQuery credentials cannot be loaded."""


@dataclass(frozen=True)
class Settings:
    """Startup configuration shared by every transport."""

    project_id: str
    credentials: str


def _clean(value: str | None) -> str | None:
    """Strip surrounding whitespace and treat blank values as missing."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(
    project_id: str | None = None,
    credentials: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Build Settings from explicit values, falling back to the environment.

    Raises:
        ConfigError: if the project or the credentials reference is missing.
    """
    env = os.environ if environ is None else environ
    project_id = _clean(project_id) or _clean(env.get(PROJECT_ENV))
    credentials = _clean(credentials) or _clean(env.get(CREDENTIALS_ENV))

    missing = [
        name
        for name, value in ((PROJECT_ENV, project_id), (CREDENTIALS_ENV, credentials))
        if not value
    ]
    if missing:
        raise ConfigError(
            f"Please provide {' and '.join(missing)} "
            "(environment variables or --project/--credentials)."
        )
    return Settings(project_id=project_id, credentials=credentials)


def load_credentials(reference: str) -> service_account.Credentials:
    """
    Load service-account credentials.

    The reference is either a path to a key file or the key's JSON content
    inline (values starting with `{`).
    """
    try:
        if reference.lstrip().startswith("{"):
            return service_account.Credentials.from_service_account_info(
                json.loads(reference)
            )
        return service_account.Credentials.from_service_account_file(reference)
    except FileNotFoundError as exc:
        raise AuthError(f"Credentials file not found: {reference}") from exc
    except (ValueError, GoogleAuthError) as exc:
        raise AuthError(f"BigQuery credentials could not be loaded: {exc}") from exc


def get_client(settings: Settings) -> bigquery.Client:
    """Create a BigQuery client bound to the configured project."""
    credentials = load_credentials(settings.credentials)
    return bigquery.Client(project=settings.project_id, credentials=credentials)
