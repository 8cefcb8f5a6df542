"""Parse a PLANNING.md document into epics, stories, subtasks and tasks.

The document follows a fixed heading/table convention::

    ## 🟣 EPIC-1 · Platform
    > *Epic description*

    ### 🔵 STORY-1.1 · Login
    **"As a user I want to log in"**

    | Subtask | SP |
    |---------|----|
    | ⬜ Build form | 3 |
    | **Toplam** | **3** |

    ## 🟡 TASK'LAR
    | TASK-1 | Set up CI | 2 | GitHub Actions |

Parsing is line oriented and tolerant: lines that match no rule are skipped.
Everything after the summary table / sprint planning sections is ignored since
those sections repeat the same ids in report form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from jira_plan_creator.planning.models import (
    Epic,
    IssueCounts,
    ParsedPlan,
    Story,
    Subtask,
    Task,
)

TERMINATOR_RES = (
    re.compile(r"^## Özet Tablo"),
    re.compile(r"^## Önerilen Sprint"),
)

EPIC_RE = re.compile(r"^## .* (EPIC-\d+) . (.+)$", re.ASCII)
EPIC_DESCRIPTION_RE = re.compile(r"^> \*(.+)\*$")
TASKS_SECTION_RE = re.compile(r"^## .* TASK")
STORY_RE = re.compile(r"^### .* (STORY-(\d+)\.\d+) . (.+)$", re.ASCII)
STORY_DESCRIPTION_RE = re.compile(r'^\*\*"(.+)"\*\*$')

TOTAL_ROW_MARKER = "**Toplam**"
BOLD_NUMBER_RE = re.compile(r"\*\*(\d+)\*\*", re.ASCII)
TABLE_SEPARATOR_RE = re.compile(r"^\|[- ]+\|")
TABLE_HEADER_RE = re.compile(r"^\| Subtask")
SUBTASK_ROW_RE = re.compile(r"^\| ⬜ (.+?) \| (\d+) \|", re.ASCII)

TASK_ROW_RE = re.compile(r"^\| (TASK-\d+) \| (.+?) \| (\d+) \|(.*)", re.ASCII)


@dataclass(slots=True)
class _ScanState:
    current_epic: Epic | None = None
    current_story: Story | None = None
    in_tasks_section: bool = False


def parse_plan(text: str) -> ParsedPlan:
    """Parse planning markdown into a :class:`ParsedPlan`.

    Stories are attached to the epic whose number matches the story prefix
    (``STORY-2.3`` belongs to ``EPIC-2``). A story whose epic has not been seen
    is still tracked for its description and subtasks, but it is not part of
    the returned tree.
    """

    plan = ParsedPlan()
    state = _ScanState()

    for raw_line in text.split("\n"):
        line = raw_line.rstrip()

        if any(r.match(line) for r in TERMINATOR_RES):
            break

        if _consume_line(plan, state, line):
            continue

    return plan


def _consume_line(plan: ParsedPlan, state: _ScanState, line: str) -> bool:
    epic_match = EPIC_RE.match(line)
    if epic_match:
        epic = Epic(id=epic_match.group(1), title=epic_match.group(2).strip())
        plan.epics.append(epic)
        state.current_epic = epic
        state.current_story = None
        state.in_tasks_section = False
        return True

    if state.current_epic is not None and state.current_story is None:
        description_match = EPIC_DESCRIPTION_RE.match(line)
        if description_match:
            state.current_epic.description = description_match.group(1).strip()
            return True

    if TASKS_SECTION_RE.match(line):
        state.in_tasks_section = True
        state.current_story = None
        return True

    if state.in_tasks_section:
        task = _parse_task_row(line)
        if task is not None:
            plan.tasks.append(task)
            return True
        return False

    story_match = STORY_RE.match(line)
    if story_match:
        story = Story(id=story_match.group(1), title=story_match.group(3).strip())
        parent = plan.find_epic(f"EPIC-{story_match.group(2)}")
        if parent is not None:
            parent.stories.append(story)
        state.current_story = story
        return True

    story = state.current_story
    if story is None:
        return False

    user_story_match = STORY_DESCRIPTION_RE.match(line)
    if user_story_match:
        story.description = user_story_match.group(1).strip()
        return True

    if TOTAL_ROW_MARKER in line:
        numbers = BOLD_NUMBER_RE.findall(line)
        if numbers:
            story.story_points = int(numbers[-1])
        return True

    if TABLE_SEPARATOR_RE.match(line) or TABLE_HEADER_RE.match(line):
        return True

    subtask_match = SUBTASK_ROW_RE.match(line)
    if subtask_match:
        story.subtasks.append(
            Subtask(
                title=subtask_match.group(1).strip().replace("`", ""),
                story_points=int(subtask_match.group(2)),
            )
        )
        return True

    return False


def _parse_task_row(line: str) -> Task | None:
    match = TASK_ROW_RE.match(line)
    if not match:
        return None

    task_id = match.group(1).strip()
    notes = match.group(4).strip().removeprefix("|").removesuffix("|").strip()
    return Task(
        id=task_id,
        title=f"{task_id}: {match.group(2).strip()}",
        description=f"Notes: {notes}" if notes else "",
        story_points=int(match.group(3)),
    )


def count_issues(plan: ParsedPlan) -> IssueCounts:
    """Count the issues a plan will create (orphaned stories are not in the tree)."""

    stories = sum(len(epic.stories) for epic in plan.epics)
    subtasks = sum(len(story.subtasks) for epic in plan.epics for story in epic.stories)
    return IssueCounts(
        epics=len(plan.epics),
        stories=stories,
        subtasks=subtasks,
        tasks=len(plan.tasks),
        total=len(plan.epics) + stories + subtasks + len(plan.tasks),
    )
