"""Staged Jira issue creation."""

from jira_plan_creator.creation.orchestrator import (
    CreationOrchestrator,
    CreationResult,
    IssueTracker,
    LogEntry,
    LogStatus,
)

__all__ = [
    "CreationOrchestrator",
    "CreationResult",
    "IssueTracker",
    "LogEntry",
    "LogStatus",
]
