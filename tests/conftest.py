"""Test configuration and fixtures."""

from __future__ import annotations

import pytest

from jira_plan_creator.jira.client import IssueFieldConfig

SAMPLE_PLANNING_MD = """\
# Project Planning

## 🟣 EPIC-1 · Platform Foundation
> *Core services every feature depends on*

### 🔵 STORY-1.1 · User login
**"As a user I want to log in so that I can see my data"**

| Subtask | SP |
|---------|----|
| ⬜ Build `LoginForm` component | 3 |
| ⬜ Session endpoint | 2 |
| **Toplam** | **5** |

### 🔵 STORY-1.2 · Password reset

| Subtask | SP |
|---------|----|
| ⬜ Reset email | 1 |
| **Toplam** | **1** |

## 🟣 EPIC-2 · Reporting
> *Dashboards for managers*

### 🔵 STORY-2.1 · Weekly report
**"As a manager I want a weekly report"**

| Subtask | SP |
|---------|----|
| ⬜ Aggregation job | 5 |
| ⬜ Report template | 3 |
| **Toplam** | **8** |

## 🟡 TASK'LAR

| ID | Task | SP | Notes |
|----|------|----|-------|
| TASK-1 | Set up CI | 2 | GitHub Actions |
| TASK-2 | Write README | 1 | |

## Özet Tablo

| EPIC-9 | Summary only | 99 |
| TASK-99 | Not a task | 1 | ignored |
"""


@pytest.fixture
def planning_md() -> str:
    """Provide a planning document with two epics, three stories and two tasks."""
    return SAMPLE_PLANNING_MD


@pytest.fixture
def field_config() -> IssueFieldConfig:
    """Provide a test issue field configuration."""
    return IssueFieldConfig(
        project_key="PROJ",
        label="EATL",
        epic_name_field="customfield_10011",
        epic_link_field="customfield_10014",
        story_points_field="customfield_10016",
    )
