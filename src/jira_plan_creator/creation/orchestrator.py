"""Staged creation of a parsed plan in Jira.

Issues are created strictly sequentially, one phase after the other, so that
parent keys exist before children reference them:

1. epics
2. stories (linked to their epic)
3. subtasks (parented to their story)
4. standalone tasks

A failed item is logged and skipped; nothing is retried. Only a failed
connectivity check stops the run before any issue is created.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from jira_plan_creator.jira.client import CreatedIssue, IssueFieldConfig, JiraUser
from jira_plan_creator.planning.models import Epic, IssueCounts, ParsedPlan, Story
from jira_plan_creator.planning.parser import count_issues

logger = logging.getLogger(__name__)

DEFAULT_THROTTLE_SECONDS = 0.3

DRY_EPIC_KEY = "DRY-EPIC"
DRY_STORY_KEY = "DRY-STORY"
DRY_SUBTASK_KEY = "DRY-SUB"
DRY_TASK_KEY = "DRY-TASK"


class LogStatus(str, Enum):
    INFO = "info"
    OK = "ok"
    ERR = "err"
    SKIP = "skip"
    DRY = "dry"


_LOG_LEVELS: dict[LogStatus, int] = {
    LogStatus.INFO: logging.INFO,
    LogStatus.OK: logging.INFO,
    LogStatus.DRY: logging.INFO,
    LogStatus.SKIP: logging.WARNING,
    LogStatus.ERR: logging.ERROR,
}


class LogEntry(BaseModel):
    """One event of a creation run."""

    model_config = ConfigDict(frozen=True)

    status: LogStatus
    message: str


class IssueTracker(Protocol):
    """The subset of :class:`~jira_plan_creator.jira.client.JiraClient` used here."""

    @property
    def field_config(self) -> IssueFieldConfig: ...

    def who_am_i(self) -> JiraUser: ...

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
    ) -> CreatedIssue: ...


@dataclass(frozen=True, slots=True)
class CreationResult:
    log: list[LogEntry]
    counts: IssueCounts
    dry_run: bool
    aborted: bool = False

    @property
    def error_count(self) -> int:
        return sum(1 for entry in self.log if entry.status is LogStatus.ERR)

    @property
    def succeeded(self) -> bool:
        return not self.aborted and self.error_count == 0


class CreationOrchestrator:
    """Walk a :class:`ParsedPlan` and create its issues through an issue tracker.

    Jira keys are written into the plan in place as issues are created. In dry
    run mode no remote call is made and placeholder keys are assigned instead.
    """

    def __init__(
        self,
        *,
        tracker: IssueTracker | None,
        field_config: IssueFieldConfig | None = None,
        throttle_seconds: float = DEFAULT_THROTTLE_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        on_log: Callable[[LogEntry], None] | None = None,
    ) -> None:
        if throttle_seconds < 0:
            raise ValueError("throttle_seconds must be >= 0")

        # Issue type names must be the ones the tracker attaches custom fields for.
        if field_config is None:
            if tracker is None:
                raise ValueError("field_config is required without an issue tracker")
            field_config = tracker.field_config
        elif tracker is not None and tracker.field_config != field_config:
            raise ValueError("field_config does not match the issue tracker's field configuration")

        self._tracker = tracker
        self._types = field_config
        self._throttle_seconds = throttle_seconds
        self._sleep = sleep
        self._on_log = on_log
        self._log: list[LogEntry] = []

    def execute(self, plan: ParsedPlan, *, dry_run: bool = False) -> CreationResult:
        if not dry_run and self._tracker is None:
            raise ValueError("An issue tracker is required unless dry_run is set")

        self._log = []
        counts = count_issues(plan)
        logger.info(
            "Starting creation run",
            extra={"dry_run": dry_run, "total": counts.total},
        )

        if not dry_run and not self._check_connection():
            return CreationResult(log=self._log, counts=counts, dry_run=dry_run, aborted=True)

        self._create_epics(plan, dry_run=dry_run)
        self._create_stories(plan, dry_run=dry_run)
        self._create_subtasks(plan, dry_run=dry_run)
        self._create_tasks(plan, dry_run=dry_run)

        errors = sum(1 for entry in self._log if entry.status is LogStatus.ERR)
        suffix = " (dry run)" if dry_run else ""
        self._add(LogStatus.INFO, f"── Done: {counts.total} issues{suffix}, {errors} errors ──")
        return CreationResult(log=self._log, counts=counts, dry_run=dry_run)

    @property
    def _remote(self) -> IssueTracker:
        if self._tracker is None:
            raise RuntimeError("No issue tracker configured")
        return self._tracker

    def _add(self, status: LogStatus, message: str) -> None:
        entry = LogEntry(status=status, message=message)
        self._log.append(entry)
        # A log callback already shows the entry; keep the logger record for debugging only.
        level = logging.DEBUG if self._on_log is not None else _LOG_LEVELS[status]
        logger.log(level, message, extra={"status": status.value})
        if self._on_log is not None:
            self._on_log(entry)

    def _throttle(self) -> None:
        if self._throttle_seconds:
            self._sleep(self._throttle_seconds)

    def _check_connection(self) -> bool:
        self._add(LogStatus.INFO, "Testing connection...")
        try:
            me = self._remote.who_am_i()
        except Exception as e:
            self._add(LogStatus.ERR, f"Connection failed: {e}")
            return False
        self._add(LogStatus.OK, f"Connected as: {me.display_name}")
        return True

    def _create_epics(self, plan: ParsedPlan, *, dry_run: bool) -> None:
        self._add(LogStatus.INFO, "── Phase 1/4: Epics ──")
        for epic in plan.epics:
            summary = f"{epic.id}: {epic.title}"
            if dry_run:
                self._add(LogStatus.DRY, f"[Epic] {summary}")
                epic.jira_key = DRY_EPIC_KEY
                continue

            try:
                created = self._remote.create_issue(
                    self._types.type_epic,
                    summary,
                    description=epic.description,
                    epic_name=summary,
                )
            except Exception as e:
                self._add(LogStatus.ERR, f"Epic failed [{epic.id}]: {e}")
                continue

            epic.jira_key = created.key
            self._add(LogStatus.OK, f"Epic -> {created.key}  [{epic.id}] {epic.title}")
            self._throttle()

    def _create_stories(self, plan: ParsedPlan, *, dry_run: bool) -> None:
        self._add(LogStatus.INFO, "── Phase 2/4: Stories ──")
        for epic in plan.epics:
            for story in epic.stories:
                self._create_story(epic, story, dry_run=dry_run)

    def _create_story(self, epic: Epic, story: Story, *, dry_run: bool) -> None:
        summary = f"{story.id}: {story.title}"
        if dry_run:
            self._add(
                LogStatus.DRY,
                f"  [Story] {summary} ({story.story_points}SP)  epic={epic.jira_key}",
            )
            story.jira_key = DRY_STORY_KEY
            return

        try:
            # A failed epic leaves epic_key empty; the story is still created, unlinked.
            created = self._remote.create_issue(
                self._types.type_story,
                summary,
                description=story.description,
                story_points=story.story_points,
                epic_key=epic.jira_key,
            )
        except Exception as e:
            self._add(LogStatus.ERR, f"Story failed [{story.id}]: {e}")
            return

        story.jira_key = created.key
        self._add(LogStatus.OK, f"Story -> {created.key}  [{story.id}] {story.title}")
        self._throttle()

    def _create_subtasks(self, plan: ParsedPlan, *, dry_run: bool) -> None:
        self._add(LogStatus.INFO, "── Phase 3/4: Subtasks ──")
        for epic in plan.epics:
            for story in epic.stories:
                self._create_story_subtasks(story, dry_run=dry_run)

    def _create_story_subtasks(self, story: Story, *, dry_run: bool) -> None:
        for sub in story.subtasks:
            if dry_run:
                self._add(
                    LogStatus.DRY,
                    f"    [Subtask] {sub.title} ({sub.story_points}SP)  parent={story.jira_key}",
                )
                sub.jira_key = DRY_SUBTASK_KEY
                continue

            if not story.jira_key:
                self._add(LogStatus.SKIP, f"    Skipped subtask (no parent key): {sub.title}")
                continue

            try:
                created = self._remote.create_issue(
                    self._types.type_subtask,
                    sub.title,
                    story_points=sub.story_points,
                    parent_key=story.jira_key,
                )
            except Exception as e:
                self._add(LogStatus.ERR, f"  Subtask failed [{sub.title}]: {e}")
                continue

            sub.jira_key = created.key
            self._add(LogStatus.OK, f"  Subtask -> {created.key}  {sub.title}")
            self._throttle()

    def _create_tasks(self, plan: ParsedPlan, *, dry_run: bool) -> None:
        self._add(LogStatus.INFO, "── Phase 4/4: Tasks ──")
        for task in plan.tasks:
            if dry_run:
                self._add(LogStatus.DRY, f"[Task] {task.title} ({task.story_points}SP)")
                task.jira_key = DRY_TASK_KEY
                continue

            try:
                created = self._remote.create_issue(
                    self._types.type_task,
                    task.title,
                    description=task.description,
                    story_points=task.story_points,
                )
            except Exception as e:
                self._add(LogStatus.ERR, f"Task failed [{task.id}]: {e}")
                continue

            task.jira_key = created.key
            self._add(LogStatus.OK, f"Task -> {created.key}  {task.title}")
            self._throttle()
