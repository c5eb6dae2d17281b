import pytest

from bqcontext.core import auth
from bqcontext.core.auth import AuthError, ConfigError, Settings, load_credentials, load_settings


def test_load_settings_from_environment():
    settings = load_settings(
        environ={
            "GOOGLE_CLOUD_PROJECT": " my-proj ",
            "GOOGLE_APPLICATION_CREDENTIALS": "/keys/sa.json",
        }
    )

    assert settings == Settings(project_id="my-proj", credentials="/keys/sa.json")


def test_explicit_values_win_over_environment():
    settings = load_settings(
        "cli-proj",
        None,
        environ={
            "GOOGLE_CLOUD_PROJECT": "env-proj",
            "GOOGLE_APPLICATION_CREDENTIALS": "/keys/sa.json",
        },
    )

    assert settings.project_id == "cli-proj"
    assert settings.credentials == "/keys/sa.json"


@pytest.mark.parametrize(
    "environ, missing",
    [
        ({}, "GOOGLE_CLOUD_PROJECT and GOOGLE_APPLICATION_CREDENTIALS"),
        ({"GOOGLE_CLOUD_PROJECT": "p"}, "GOOGLE_APPLICATION_CREDENTIALS"),
        ({"GOOGLE_APPLICATION_CREDENTIALS": "k", "GOOGLE_CLOUD_PROJECT": "  "}, "GOOGLE_CLOUD_PROJECT"),
    ],
)
def test_load_settings_requires_project_and_credentials(environ, missing):
    with pytest.raises(ConfigError, match=f"Please provide {missing} "):
        load_settings(environ=environ)


def test_load_credentials_missing_file(tmp_path):
    with pytest.raises(AuthError, match="Credentials file not found"):
        load_credentials(str(tmp_path / "missing.json"))


def test_load_credentials_inline_json_is_parsed(monkeypatch):
    seen = {}

    def _from_info(info):
        seen.update(info)
        return "creds"

    monkeypatch.setattr(
        auth.service_account.Credentials, "from_service_account_info", _from_info
    )

    assert load_credentials('{"type": "service_account", "project_id": "p"}') == "creds"
    assert seen == {"type": "service_account", "project_id": "p"}


def test_load_credentials_invalid_inline_json():
    with pytest.raises(AuthError, match="could not be loaded"):
        load_credentials("{not json")
