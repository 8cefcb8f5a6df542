"""Planning document parsing.

Turns a PLANNING.md file into a typed epic/story/subtask/task hierarchy.
"""

from jira_plan_creator.planning.models import (
    Epic,
    IssueCounts,
    ParsedPlan,
    Story,
    Subtask,
    Task,
)
from jira_plan_creator.planning.parser import count_issues, parse_plan

__all__ = [
    "Epic",
    "IssueCounts",
    "ParsedPlan",
    "Story",
    "Subtask",
    "Task",
    "count_issues",
    "parse_plan",
]
