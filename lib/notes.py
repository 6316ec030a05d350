"""Status note entity and its mapping from Airtable records."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from lib.dates import parse_date
from lib.schema import NoteCategory, NoteField


class Note(BaseModel):
    """One status update as read from the "Status Notes" table."""

    model_config = ConfigDict(frozen=True)

    category: Optional[NoteCategory] = None
    text: str = ""
    added_on: Optional[datetime] = None
    added_by: str = ""
    record_id: Optional[str] = None

    @field_validator("added_on", mode="before")
    @classmethod
    def _as_utc(cls, value: Any) -> Optional[datetime]:
        return parse_date(value)


def _collaborator_name(value: Any) -> str:
    if isinstance(value, dict):
        return value.get("name") or ""
    if isinstance(value, str):
        return value
    return ""


def note_from_record(record: Dict[str, Any]) -> Note:
    """
    Build a Note from a pyairtable record dict ({"id", "fields", ...}).

    Unknown categories map to None and unparseable dates to None; the
    classifier and composer skip such notes.
    """
    fields = record.get("fields", {})
    text = fields.get(NoteField.NOTES.value) or ""
    return Note(
        category=NoteCategory.parse(fields.get(NoteField.CATEGORY.value)),
        text=text if isinstance(text, str) else str(text),
        added_on=fields.get(NoteField.ADDED_ON.value),
        added_by=_collaborator_name(fields.get(NoteField.ADDED_BY.value)),
        record_id=record.get("id"),
    )


def notes_from_records(records: List[Dict[str, Any]]) -> List[Note]:
    return [note_from_record(record) for record in records]
