"""Unit tests for the PLANNING.md parser."""

from __future__ import annotations

from jira_plan_creator.planning.models import IssueCounts
from jira_plan_creator.planning.parser import count_issues, parse_plan


def test_parse_plan_builds_epic_story_subtask_hierarchy(planning_md: str) -> None:
    plan = parse_plan(planning_md)

    assert [e.id for e in plan.epics] == ["EPIC-1", "EPIC-2"]
    epic = plan.epics[0]
    assert epic.title == "Platform Foundation"
    assert epic.description == "Core services every feature depends on"
    assert [s.id for s in epic.stories] == ["STORY-1.1", "STORY-1.2"]

    story = epic.stories[0]
    assert story.title == "User login"
    assert story.description == "As a user I want to log in so that I can see my data"
    assert story.story_points == 5
    assert [(s.title, s.story_points) for s in story.subtasks] == [
        ("Build LoginForm component", 3),
        ("Session endpoint", 2),
    ]
    assert story.jira_key is None


def test_parse_plan_reads_flat_tasks_with_notes(planning_md: str) -> None:
    plan = parse_plan(planning_md)

    assert [t.id for t in plan.tasks] == ["TASK-1", "TASK-2"]
    first, second = plan.tasks
    assert first.title == "TASK-1: Set up CI"
    assert first.description == "Notes: GitHub Actions"
    assert first.story_points == 2
    assert second.title == "TASK-2: Write README"
    assert second.description == ""


def test_count_issues_matches_recognised_entries(planning_md: str) -> None:
    counts = count_issues(parse_plan(planning_md))

    assert counts == IssueCounts(epics=2, stories=3, subtasks=5, tasks=2, total=12)


def test_parse_plan_is_idempotent(planning_md: str) -> None:
    assert parse_plan(planning_md) == parse_plan(planning_md)


def test_content_after_summary_section_is_ignored() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · First",
            "## Önerilen Sprint Planı",
            "## 🟣 EPIC-2 · Never parsed",
            "### 🔵 STORY-2.1 · Never parsed",
            "## 🟡 TASK'LAR",
            "| TASK-1 | Never parsed | 1 | |",
        ]
    )

    plan = parse_plan(doc)

    assert [e.id for e in plan.epics] == ["EPIC-1"]
    assert plan.tasks == []


def test_orphaned_story_is_dropped_from_tree() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · Known",
            "### 🔵 STORY-7.1 · Orphan",
            "| ⬜ Lost subtask | 3 |",
            "### 🔵 STORY-1.1 · Kept",
            "| ⬜ Kept subtask | 2 |",
        ]
    )

    plan = parse_plan(doc)

    assert [s.id for s in plan.epics[0].stories] == ["STORY-1.1"]
    assert [s.title for s in plan.epics[0].stories[0].subtasks] == ["Kept subtask"]
    assert count_issues(plan) == IssueCounts(epics=1, stories=1, subtasks=1, tasks=0, total=3)


def test_story_before_its_epic_is_orphaned() -> None:
    doc = "\n".join(
        [
            "### 🔵 STORY-1.1 · Too early",
            "## 🟣 EPIC-1 · Late epic",
        ]
    )

    plan = parse_plan(doc)

    assert plan.epics[0].stories == []


def test_worked_example_counts() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · Epic",
            "### 🔵 STORY-1.1 · Story",
            "| Subtask | SP |",
            "|---|---|",
            "| ⬜ One | 2 |",
            "| ⬜ Two | 3 |",
            "| **Toplam** | **5** |",
            "## 🟡 TASK'LAR",
            "| TASK-1 | Task | 1 | |",
        ]
    )

    plan = parse_plan(doc)

    assert plan.epics[0].stories[0].story_points == 5
    assert count_issues(plan) == IssueCounts(epics=1, stories=1, subtasks=2, tasks=1, total=5)


def test_total_row_uses_last_bold_number() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · Epic",
            "### 🔵 STORY-1.1 · Story",
            "| **Toplam** | **2** | **13** |",
        ]
    )

    plan = parse_plan(doc)

    assert plan.epics[0].stories[0].story_points == 13
    assert plan.epics[0].stories[0].subtasks == []


def test_windows_line_endings_are_tolerated() -> None:
    doc = "## 🟣 EPIC-1 · Epic\r\n> *Described*\r\n### 🔵 STORY-1.1 · Story\r\n| ⬜ Sub | 1 |\r\n"

    plan = parse_plan(doc)

    assert plan.epics[0].title == "Epic"
    assert plan.epics[0].description == "Described"
    assert plan.epics[0].stories[0].subtasks[0].title == "Sub"


def test_epic_description_only_before_first_story() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · Epic",
            "### 🔵 STORY-1.1 · Story",
            "> *Not the epic description*",
        ]
    )

    plan = parse_plan(doc)

    assert plan.epics[0].description == ""


def test_story_headings_in_tasks_section_are_ignored() -> None:
    doc = "\n".join(
        [
            "## 🟣 EPIC-1 · Epic",
            "## 🟡 TASK'LAR",
            "### 🔵 STORY-1.1 · Not a story",
            "| ⬜ Not a subtask | 1 |",
            "| TASK-3 | Real task | 2 | `notes` |",
        ]
    )

    plan = parse_plan(doc)

    assert plan.epics[0].stories == []
    assert [t.id for t in plan.tasks] == ["TASK-3"]
    assert plan.tasks[0].description == "Notes: `notes`"


def test_new_epic_leaves_tasks_section() -> None:
    doc = "\n".join(
        [
            "## 🟡 TASK'LAR",
            "## 🟣 EPIC-1 · Epic",
            "### 🔵 STORY-1.1 · Story",
            "| TASK-1 | Not a task here | 1 | |",
        ]
    )

    plan = parse_plan(doc)

    assert [s.id for s in plan.epics[0].stories] == ["STORY-1.1"]
    assert plan.tasks == []


def test_unrecognised_input_yields_empty_plan() -> None:
    plan = parse_plan("just some\nrandom *text*\n| a | b |")

    assert plan.epics == []
    assert plan.tasks == []
    assert count_issues(plan).total == 0


def test_only_ascii_digits_count_as_story_points() -> None:
    plan = parse_plan(
        "\n".join(
            [
                "## 🟣 EPIC-1 · Epic",
                "### 🔵 STORY-1.1 · Story",
                "| ⬜ Eastern digits | ٣ |",
                "| ⬜ Western digits | 3 |",
                "## 🟡 TASK'LAR",
                "| TASK-1 | Eastern | ٢ | |",
            ]
        )
    )

    assert [s.title for s in plan.epics[0].stories[0].subtasks] == ["Western digits"]
    assert plan.tasks == []
