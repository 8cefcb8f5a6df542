"""Custom field discovery helpers.

Jira stores epic name, epic link and story points in instance specific custom
fields (``customfield_10011`` and friends). These helpers narrow the field list
down to plausible candidates and map a field onto the setting that configures it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FIELD_KEYWORDS: tuple[str, ...] = (
    "epic",
    "story",
    "point",
    "estimate",
    "sprint",
    "rank",
    "parent",
)


@dataclass(frozen=True, slots=True)
class JiraField:
    id: str
    name: str
    schema_type: str | None = None


class FieldSlot(str, Enum):
    EPIC_NAME = "epic_name_field"
    EPIC_LINK = "epic_link_field"
    STORY_POINTS = "story_points_field"

    @property
    def env_var(self) -> str:
        return f"JIRA_{self.value.upper()}"


def is_relevant_field(field: JiraField) -> bool:
    name = field.name.lower()
    return any(keyword in name for keyword in FIELD_KEYWORDS)


def suggest_field_slot(field: JiraField) -> FieldSlot | None:
    """Guess which configurable slot a discovered field belongs to."""

    name = field.name.lower()
    if "epic name" in name:
        return FieldSlot.EPIC_NAME
    if "epic link" in name:
        return FieldSlot.EPIC_LINK
    if "story point" in name or "estimate" in name:
        return FieldSlot.STORY_POINTS
    return None
