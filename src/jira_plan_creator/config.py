"""Configuration for jira-plan-creator.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Credentials are optional at load time so that parsing and dry runs work without
a Jira account. Commands that talk to Jira call :meth:`JiraSettings.require_credentials`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jira_plan_creator.jira.client import IssueFieldConfig


class MissingCredentials(ValueError):
    """Raised when a command needs Jira access but credentials are not configured."""


class JiraSettings(BaseSettings):
    """Settings for the Jira connection and issue layout.

    Environment variables:
    - JIRA_BASE_URL, JIRA_USERNAME, JIRA_TOKEN, JIRA_AUTH_METHOD
    - JIRA_PROJECT_KEY, JIRA_LABEL
    - JIRA_EPIC_NAME_FIELD, JIRA_EPIC_LINK_FIELD, JIRA_STORY_POINTS_FIELD
    - JIRA_TYPE_EPIC, JIRA_TYPE_STORY, JIRA_TYPE_SUBTASK, JIRA_TYPE_TASK
    - JIRA_THROTTLE_SECONDS  (optional)
    - LOG_LEVEL, LOG_FORMAT  (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `JiraSettings(_env_file=path_to_env)`.
    """

    base_url: str = Field(
        default="https://jira.yourcompany.com",
        validation_alias="JIRA_BASE_URL",
        description="Jira server URL (without /rest/api/2)",
    )
    username: str = Field(
        default="",
        validation_alias="JIRA_USERNAME",
        description="Username for Basic authentication",
    )
    token: str = Field(
        default="",
        validation_alias="JIRA_TOKEN",
        description="API token or password (Basic) / personal access token (Bearer)",
    )
    auth_method: Literal["Basic", "Bearer"] = Field(
        default="Basic",
        validation_alias="JIRA_AUTH_METHOD",
        description="Basic (username + token) or Bearer (PAT, Jira 8.14+)",
    )

    project_key: str = Field(default="PROJ", validation_alias="JIRA_PROJECT_KEY")
    label: str = Field(
        default="EATL",
        validation_alias="JIRA_LABEL",
        description="Label applied to every created issue (empty for none)",
    )

    # Custom field ids vary per Jira instance; `jira-plan-creator discover-fields` lists them.
    epic_name_field: str = Field(
        default="customfield_10011", validation_alias="JIRA_EPIC_NAME_FIELD"
    )
    epic_link_field: str = Field(
        default="customfield_10014", validation_alias="JIRA_EPIC_LINK_FIELD"
    )
    story_points_field: str = Field(
        default="customfield_10016", validation_alias="JIRA_STORY_POINTS_FIELD"
    )

    type_epic: str = Field(default="Epic", validation_alias="JIRA_TYPE_EPIC")
    type_story: str = Field(default="Story", validation_alias="JIRA_TYPE_STORY")
    type_subtask: str = Field(default="Sub-task", validation_alias="JIRA_TYPE_SUBTASK")
    type_task: str = Field(default="Task", validation_alias="JIRA_TYPE_TASK")

    throttle_seconds: float = Field(
        default=0.3,
        ge=0.0,
        validation_alias="JIRA_THROTTLE_SECONDS",
        description="Pause after each successful issue creation (Jira rate limit)",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        validation_alias="LOG_FORMAT",
        description="Log record format on stderr",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    def require_credentials(self) -> None:
        """Raise MissingCredentials unless the settings are usable for Jira API calls."""

        if not self.base_url.strip():
            raise MissingCredentials("JIRA_BASE_URL is required")
        if not self.token.strip():
            raise MissingCredentials("JIRA_TOKEN is required")
        if self.auth_method == "Basic" and not self.username.strip():
            raise MissingCredentials("JIRA_USERNAME is required for Basic authentication")

    def field_config(self) -> IssueFieldConfig:
        return IssueFieldConfig(
            project_key=self.project_key,
            label=self.label,
            epic_name_field=self.epic_name_field,
            epic_link_field=self.epic_link_field,
            story_points_field=self.story_points_field,
            type_epic=self.type_epic,
            type_story=self.type_story,
            type_subtask=self.type_subtask,
            type_task=self.type_task,
        )
