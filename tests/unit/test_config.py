"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from jira_plan_creator.config import JiraSettings, MissingCredentials

_ENV_VARS = (
    "JIRA_BASE_URL",
    "JIRA_USERNAME",
    "JIRA_TOKEN",
    "JIRA_AUTH_METHOD",
    "JIRA_PROJECT_KEY",
    "JIRA_LABEL",
    "JIRA_STORY_POINTS_FIELD",
    "JIRA_TYPE_SUBTASK",
    "JIRA_THROTTLE_SECONDS",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "JIRA_BASE_URL=https://jira.example.com",
                "JIRA_USERNAME=alice",
                "JIRA_TOKEN=test-token",
                "JIRA_PROJECT_KEY=ACME",
                "JIRA_TYPE_SUBTASK=Subtask",
                "JIRA_STORY_POINTS_FIELD=customfield_10026",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = JiraSettings()

    assert settings.base_url == "https://jira.example.com"
    assert settings.token == "test-token"
    assert settings.log_level == "DEBUG"
    settings.require_credentials()

    config = settings.field_config()
    assert config.project_key == "ACME"
    assert config.type_subtask == "Subtask"
    assert config.story_points_field == "customfield_10026"
    assert config.label == "EATL"


def test_settings_defaults_work_without_credentials(clean_env: Path) -> None:
    settings = JiraSettings()

    assert settings.auth_method == "Basic"
    assert settings.throttle_seconds == 0.3
    assert settings.field_config().type_epic == "Epic"
    assert settings.field_config().epic_link_field == "customfield_10014"

    with pytest.raises(MissingCredentials, match="JIRA_TOKEN"):
        settings.require_credentials()


def test_bearer_auth_does_not_require_username(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("JIRA_TOKEN", "pat")
    monkeypatch.setenv("JIRA_AUTH_METHOD", "Bearer")

    JiraSettings().require_credentials()

    monkeypatch.setenv("JIRA_AUTH_METHOD", "Basic")
    with pytest.raises(MissingCredentials, match="JIRA_USERNAME"):
        JiraSettings().require_credentials()


def test_invalid_values_are_rejected(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JIRA_AUTH_METHOD", "Digest")
    with pytest.raises(ValidationError):
        JiraSettings()

    monkeypatch.setenv("JIRA_AUTH_METHOD", "Basic")
    monkeypatch.setenv("JIRA_THROTTLE_SECONDS", "-1")
    with pytest.raises(ValidationError):
        JiraSettings()


def test_empty_label_disables_labels(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JIRA_LABEL", "")

    assert JiraSettings().field_config().label == ""
