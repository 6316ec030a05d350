"""Airtable client for the intake, status-note, project, and JIRA sync tables."""
from __future__ import annotations

from typing import Any, Dict, List, Optional
import logging

from pyairtable import Api

from lib import config
from lib.schema import (
    IntakeField,
    IssueField,
    NoteField,
    ProjectField,
    field_names,
)
from utils.errors import AirtableError

logger = logging.getLogger(__name__)


def _safe_table_call(table, method_name: str, *args, **kwargs):
    """Invoke a pyairtable method and log failures with table context."""
    method = getattr(table, method_name)
    table_name = getattr(table, "name", getattr(table, "_table_name", "<unknown>"))
    try:
        return method(*args, **kwargs)
    except Exception as exc:
        logger.error("Airtable %s.%s failed: %s", table_name, method_name, exc)
        raise AirtableError(f"Airtable {table_name}.{method_name} failed: {exc}") from exc


def match_formula(field: str, value: str) -> str:
    """
    Build an exact-match filter formula, e.g. ``{Intake ID} = 'DATA COE - 10035'``.

    Single quotes and backslashes in the value are escaped.
    """
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"{{{field}}} = '{escaped}'"


class StatusStore:
    """
    Narrow view of the Airtable base used by the workflows.

    Every method returns plain pyairtable record dicts
    (``{"id": ..., "fields": {...}, "createdTime": ...}``).
    """

    def __init__(self, api_key: str, base_id: str) -> None:
        self._api = Api(api_key)
        self._base_id = base_id

    @classmethod
    def from_env(cls) -> "StatusStore":
        """Build a store from AIRTABLE_API_KEY / AIRTABLE_BASE_ID; raises ConfigError."""
        api_key, base_id = config.require_airtable_config()
        return cls(api_key, base_id)

    def _table(self, table_name: str):
        return self._api.table(self._base_id, table_name)

    # Submitted Requests -------------------------------------------------

    def find_intake(self, intake_id: str) -> Optional[Dict[str, Any]]:
        """Return the first "Submitted Requests" record whose Intake ID equals ``intake_id``."""
        table = self._table(config.SUBMITTED_REQUESTS_TABLE)
        records = _safe_table_call(
            table,
            "all",
            formula=match_formula(IntakeField.INTAKE_ID.value, intake_id),
        )
        return records[0] if records else None

    def update_intake(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        table = self._table(config.SUBMITTED_REQUESTS_TABLE)
        return _safe_table_call(table, "update", record_id, fields)

    # Status Notes -------------------------------------------------------

    def list_status_notes(self, intake_id: str) -> List[Dict[str, Any]]:
        table = self._table(config.STATUS_NOTES_TABLE)
        return _safe_table_call(
            table,
            "all",
            formula=match_formula(NoteField.INTAKE_ID.value, intake_id),
            fields=field_names(
                NoteField.INTAKE_ID,
                NoteField.CATEGORY,
                NoteField.NOTES,
                NoteField.ADDED_ON,
                NoteField.ADDED_BY,
            ),
        )

    def update_status_note(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        table = self._table(config.STATUS_NOTES_TABLE)
        return _safe_table_call(table, "update", record_id, fields)

    def create_status_note(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        # typecast lets Airtable resolve select options and linked records by name
        table = self._table(config.STATUS_NOTES_TABLE)
        return _safe_table_call(table, "create", fields, typecast=True)

    # Projects -----------------------------------------------------------

    def find_project(self, intake_id: str) -> Optional[Dict[str, Any]]:
        table = self._table(config.PROJECTS_TABLE)
        records = _safe_table_call(
            table,
            "all",
            formula=match_formula(ProjectField.INTAKE_ID.value, intake_id),
            fields=field_names(ProjectField.INTAKE_ID),
        )
        return records[0] if records else None

    # JIRA Sync ----------------------------------------------------------

    def list_issue_records(self) -> List[Dict[str, Any]]:
        table = self._table(config.JIRA_SYNC_TABLE)
        return _safe_table_call(
            table,
            "all",
            fields=field_names(
                IssueField.ISSUE_KEY,
                IssueField.PARENT,
                IssueField.PARENT_EPIC,
                IssueField.COMMENTS,
            ),
        )
