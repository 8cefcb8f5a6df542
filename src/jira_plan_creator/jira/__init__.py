"""Jira REST integration."""

from jira_plan_creator.jira.client import (
    CreatedIssue,
    IssueFieldConfig,
    JiraApiError,
    JiraClient,
    JiraUser,
    build_issue_fields,
)
from jira_plan_creator.jira.fields import FieldSlot, JiraField, suggest_field_slot

__all__ = [
    "CreatedIssue",
    "FieldSlot",
    "IssueFieldConfig",
    "JiraApiError",
    "JiraClient",
    "JiraField",
    "JiraUser",
    "build_issue_fields",
    "suggest_field_slot",
]
