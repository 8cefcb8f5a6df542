"""Plain-text rendering of a parsed plan for the CLI."""

from __future__ import annotations

from jira_plan_creator.planning.models import IssueCounts, ParsedPlan


def format_counts(counts: IssueCounts) -> str:
    return (
        f"{counts.epics} epics, {counts.stories} stories, {counts.subtasks} subtasks, "
        f"{counts.tasks} tasks, {counts.total} total"
    )


def format_plan_tree(plan: ParsedPlan) -> list[str]:
    """Return one line per epic/story/subtask, then the flat tasks block.

    Jira keys are appended in brackets once an item has been created.
    """

    lines: list[str] = []
    for epic in plan.epics:
        lines.append(f"{epic.id} · {epic.title}{_key_suffix(epic.jira_key)}")
        for story in epic.stories:
            lines.append(
                f"  {story.id} · {story.title} ({story.story_points}SP)"
                f"{_key_suffix(story.jira_key)}"
            )
            for sub in story.subtasks:
                lines.append(
                    f"    - {sub.title} ({sub.story_points}SP){_key_suffix(sub.jira_key)}"
                )

    if plan.tasks:
        lines.append(f"Tasks ({len(plan.tasks)})")
        for task in plan.tasks:
            lines.append(
                f"  {task.title} ({task.story_points}SP){_key_suffix(task.jira_key)}"
            )
    return lines


def _key_suffix(key: str | None) -> str:
    return f"  [{key}]" if key else ""
