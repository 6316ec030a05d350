"""Input contract for the status-note upserter trigger."""
from __future__ import annotations

import json
import re
from datetime import date
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from lib.dates import parse_date
from lib.schema import NoteCategory
from utils.errors import ValidationError


class StatusSummaryBlock(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    accomplishment: Optional[str] = Field(None, alias="Accomplishment")
    dependency: Optional[str] = Field(None, alias="Dependency")
    blockers: Optional[str] = Field(None, alias="Blockers")
    internal_note: Optional[str] = Field(None, alias="Internal Note")
    planned_action: Optional[str] = Field(None, alias="Planned Action")

    def by_category(self) -> Dict[NoteCategory, Optional[str]]:
        return {
            NoteCategory.ACCOMPLISHMENT: self.accomplishment,
            NoteCategory.PLANNED_ACTION: self.planned_action,
            NoteCategory.DEPENDENCY: self.dependency,
            NoteCategory.BLOCKER: self.blockers,
            NoteCategory.INTERNAL_NOTE: self.internal_note,
        }


class StatusNotesPayload(BaseModel):
    """
    Version 1 of the status block produced upstream::

        {
          "version": 1,
          "Todays Date": "2024-01-17",
          "summary": {
            "Accomplishment": "...", "Dependency": "...", "Blockers": "...",
            "Internal Note": "...", "Planned Action": "..."
          }
        }

    "Todays Date" is the producer's local calendar day; the upserter reads
    it in the ``NOTES_TIMEZONE`` zone.
    """

    model_config = ConfigDict(populate_by_name=True)

    version: Literal[1] = 1
    todays_date: date = Field(..., alias="Todays Date")
    summary: StatusSummaryBlock

    @field_validator("todays_date", mode="before")
    @classmethod
    def _parse_todays_date(cls, value: Any) -> date:
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"Unparseable date: {value!r}")
        return parsed.date()


# Compatibility shim for the upstream producer, which emits the summary as a
# quoted JSON string with raw newlines instead of a nested object.
_QUOTED_SUMMARY_OPEN_RE = re.compile(r'"summary":\s*"{')
_QUOTED_OBJECT_CLOSE_RE = re.compile(r'}"')


def clean_legacy_json(raw: str) -> str:
    cleaned = _QUOTED_SUMMARY_OPEN_RE.sub('"summary": {', raw)
    cleaned = _QUOTED_OBJECT_CLOSE_RE.sub("}", cleaned)
    return cleaned.replace("\n", "").strip()


def parse_status_payload(raw: Union[str, Dict[str, Any]]) -> StatusNotesPayload:
    """
    Parse the trigger payload from a dict or JSON text.

    Text that is not valid JSON is passed through ``clean_legacy_json``
    before a second attempt.

    Raises:
        ValidationError: The payload cannot be decoded or fails the contract.
    """
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            try:
                data = json.loads(clean_legacy_json(raw))
            except json.JSONDecodeError as exc:
                raise ValidationError(f"Status payload is not valid JSON: {exc}") from exc
    else:
        data = raw

    if isinstance(data, dict) and isinstance(data.get("summary"), str):
        try:
            data = {**data, "summary": json.loads(data["summary"])}
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Status payload summary is not valid JSON: {exc}") from exc

    try:
        return StatusNotesPayload.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid status payload: {exc}") from exc


def intake_id_from_label(label: str) -> str:
    """Return the intake id from a record label such as ``"DATA COE - 10035|Project X"``."""
    intake_id = (label or "").split("|", 1)[0].strip()
    if not intake_id:
        raise ValidationError(f"No Intake ID in record label: {label!r}")
    return intake_id
