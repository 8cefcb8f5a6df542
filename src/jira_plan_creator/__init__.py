"""Jira Plan Creator.

Turns a PLANNING.md document (epics, stories, subtask tables and a flat task
table) into Jira issues:
- configuration loaded from `.env`
- structured logging
- staged issue creation with dry-run support
"""

__version__ = "0.1.0"

from jira_plan_creator.config import JiraSettings

__all__ = ["__version__", "JiraSettings"]
