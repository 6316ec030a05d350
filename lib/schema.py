"""Airtable schema: closed enumerations for every field name the workflows touch.

Business code refers to these members instead of spelling Airtable field
names, so a schema rename only changes this module.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class NoteCategory(str, Enum):
    ACCOMPLISHMENT = "Accomplishment"
    PLANNED_ACTION = "Planned Action"
    DEPENDENCY = "Dependency"
    BLOCKER = "Blocker / Challenge"
    INTERNAL_NOTE = "Internal Note"

    @classmethod
    def parse(cls, value: Any) -> Optional["NoteCategory"]:
        """Map a single-select cell (string or {"name": ...}) to a category, else None."""
        if isinstance(value, dict):
            value = value.get("name")
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class SummaryStatus(str, Enum):
    PENDING_REVIEW = "Pending Review"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class IntakeField(str, Enum):
    """Fields of the "Submitted Requests" table."""

    INTAKE_ID = "Intake ID"
    PROJECT_NAME = "Project Name"
    STATUS_SUMMARY = "Status Summary"
    STATUS_SUMMARY_STATUS = "Status Summary Status"


class NoteField(str, Enum):
    """Fields of the "Status Notes" table."""

    INTAKE_ID = "Intake ID"
    CATEGORY = "Note Category"
    NOTES = "Notes"
    ADDED_ON = "Added On"
    ADDED_BY = "Added By"


class ProjectField(str, Enum):
    """Fields of the "Projects" table."""

    INTAKE_ID = "Intake ID"


class IssueField(str, Enum):
    """Fields of the "JIRA Sync" table."""

    ISSUE_KEY = "Issue Key"
    PARENT = "Parent"
    PARENT_EPIC = "Parent Epic"
    COMMENTS = "Comments"


def field_names(*fields: Enum) -> list[str]:
    return [field.value for field in fields]


def to_airtable_fields(values: dict[Enum, Any]) -> dict[str, Any]:
    """Translate an enum-keyed mapping into the Airtable field-name payload."""
    return {field.value: value for field, value in values.items()}
