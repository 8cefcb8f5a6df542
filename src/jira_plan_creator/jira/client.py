"""Jira REST API (v2) client.

This intentionally wraps `requests` to keep HTTP calls out of the creation
orchestrator and CLI code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

import requests

from jira_plan_creator.jira.fields import JiraField, is_relevant_field

logger = logging.getLogger(__name__)

AuthMethod = Literal["Basic", "Bearer"]

ERROR_DETAIL_LIMIT = 300


class JiraApiError(RuntimeError):
    """Raised when Jira answers with a non-success status code."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail[:ERROR_DETAIL_LIMIT]
        message = f"HTTP {status_code}"
        if self.detail:
            message += f": {self.detail}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class IssueFieldConfig:
    """Project, issue type names and custom field ids used when creating issues.

    Custom field ids differ between Jira instances; an empty id disables the
    corresponding field.
    """

    project_key: str
    label: str = ""
    epic_name_field: str = ""
    epic_link_field: str = ""
    story_points_field: str = ""
    type_epic: str = "Epic"
    type_story: str = "Story"
    type_subtask: str = "Sub-task"
    type_task: str = "Task"


@dataclass(frozen=True, slots=True)
class JiraUser:
    display_name: str
    account_id: str | None = None


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    key: str
    id: str | None = None


def build_issue_fields(
    config: IssueFieldConfig,
    issue_type: str,
    summary: str,
    *,
    description: str | None = None,
    story_points: int | None = None,
    epic_key: str | None = None,
    parent_key: str | None = None,
    epic_name: str | None = None,
) -> dict[str, Any]:
    """Build the `fields` object of a create-issue request.

    Type specific slots are only set for the matching issue type: the epic name
    for epics, the epic link for stories and the parent reference for subtasks.
    """

    fields: dict[str, Any] = {
        "project": {"key": config.project_key},
        "summary": summary,
        "issuetype": {"name": issue_type},
        "labels": [config.label] if config.label else [],
    }

    if description:
        fields["description"] = description
    if story_points and story_points > 0 and config.story_points_field:
        fields[config.story_points_field] = story_points
    if issue_type == config.type_epic and epic_name and config.epic_name_field:
        fields[config.epic_name_field] = epic_name
    if issue_type == config.type_story and epic_key and config.epic_link_field:
        fields[config.epic_link_field] = epic_key
    if issue_type == config.type_subtask and parent_key:
        fields["parent"] = {"key": parent_key}

    return fields


class JiraClient:
    """Small wrapper around the Jira REST API for the operations we need."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        field_config: IssueFieldConfig,
        username: str = "",
        auth_method: AuthMethod = "Basic",
        session: requests.Session | None = None,
    ) -> None:
        if not base_url.strip():
            raise ValueError("Jira base URL is required")
        if not token:
            raise ValueError("Jira token is required")
        if auth_method == "Basic" and not username:
            raise ValueError("Jira username is required for Basic authentication")

        self._api_root = f"{base_url.rstrip('/')}/rest/api/2"
        self._field_config = field_config
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": "jira-plan-creator",
            }
        )
        if auth_method == "Bearer":
            self._session.headers["Authorization"] = f"Bearer {token}"
        else:
            self._session.auth = (username, token)

        logger.debug(
            "Jira client configured",
            extra={"api_root": self._api_root, "auth_method": auth_method},
        )

    @property
    def field_config(self) -> IssueFieldConfig:
        return self._field_config

    def _url(self, endpoint: str) -> str:
        return f"{self._api_root}/{endpoint.lstrip('/')}"

    def _request(self, method: str, endpoint: str, payload: dict[str, Any] | None = None) -> Any:
        resp = self._session.request(method, self._url(endpoint), json=payload, timeout=30)
        if not resp.ok:
            raise JiraApiError(resp.status_code, resp.text or "")
        return resp.json()

    def who_am_i(self) -> JiraUser:
        """Return the authenticated user; used as the connectivity check."""

        data = self._request("GET", "myself")
        if not isinstance(data, dict):
            raise ValueError("Unexpected myself response: expected an object")

        display_name = data.get("displayName")
        if not isinstance(display_name, str):
            display_name = ""
        account_id = data.get("accountId") or data.get("name")
        return JiraUser(
            display_name=display_name,
            account_id=account_id if isinstance(account_id, str) else None,
        )

    def list_fields(self) -> list[JiraField]:
        data = self._request("GET", "field")
        if not isinstance(data, list):
            raise ValueError("Unexpected field response: expected a list")

        fields: list[JiraField] = []
        for item in data:
            if not isinstance(item, dict):
                continue
            field_id = item.get("id")
            name = item.get("name")
            if not isinstance(field_id, str) or not isinstance(name, str):
                continue
            schema = item.get("schema")
            schema_type = schema.get("type") if isinstance(schema, dict) else None
            fields.append(
                JiraField(
                    id=field_id,
                    name=name,
                    schema_type=schema_type if isinstance(schema_type, str) else None,
                )
            )
        return fields

    def discover_fields(self) -> list[JiraField]:
        """Return the fields relevant for epic/story/estimate slots, sorted by name."""

        relevant = [f for f in self.list_fields() if is_relevant_field(f)]
        return sorted(relevant, key=lambda f: f.name.lower())

    def create_issue(
        self,
        issue_type: str,
        summary: str,
        *,
        description: str | None = None,
        story_points: int | None = None,
        epic_key: str | None = None,
        parent_key: str | None = None,
        epic_name: str | None = None,
    ) -> CreatedIssue:
        if not summary.strip():
            raise ValueError("Issue summary is required")

        fields = build_issue_fields(
            self._field_config,
            issue_type,
            summary,
            description=description,
            story_points=story_points,
            epic_key=epic_key,
            parent_key=parent_key,
            epic_name=epic_name,
        )
        data = self._request("POST", "issue", {"fields": fields})
        if not isinstance(data, dict):
            raise ValueError("Unexpected create issue response: expected an object")

        key = data.get("key")
        if not isinstance(key, str) or not key.strip():
            raise ValueError("Unexpected create issue response: missing key")
        issue_id = data.get("id")

        logger.debug(
            "Jira issue created",
            extra={"key": key, "issue_type": issue_type, "summary": summary},
        )
        return CreatedIssue(key=key, id=issue_id if isinstance(issue_id, str) else None)

    def close(self) -> None:
        self._session.close()
