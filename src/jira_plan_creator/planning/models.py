"""Typed hierarchy parsed from a planning document.

Epics own stories, stories own subtasks, tasks sit at the top level next to epics.
`jira_key` is empty until the issue has been created in Jira.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


class Subtask(BaseModel):
    """A row of a story's subtask table."""

    title: str
    story_points: int = 0
    jira_key: str | None = None


class Story(BaseModel):
    id: str
    title: str
    description: str = ""
    story_points: int = 0
    subtasks: list[Subtask] = Field(default_factory=list)
    jira_key: str | None = None


class Epic(BaseModel):
    id: str
    title: str
    description: str = ""
    stories: list[Story] = Field(default_factory=list)
    jira_key: str | None = None


class Task(BaseModel):
    """A standalone task from the flat tasks table.

    `title` already carries the task id prefix (``"TASK-1: Title"``).
    """

    id: str
    title: str
    description: str = ""
    story_points: int = 0
    jira_key: str | None = None


class ParsedPlan(BaseModel):
    """Root aggregate; list order is document order."""

    epics: list[Epic] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)

    def find_epic(self, epic_id: str) -> Epic | None:
        for epic in self.epics:
            if epic.id == epic_id:
                return epic
        return None


@dataclass(frozen=True, slots=True)
class IssueCounts:
    epics: int
    stories: int
    subtasks: int
    tasks: int
    total: int
