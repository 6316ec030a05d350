"""Create or update one Status Notes row per category per day for an intake."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from dateutil import tz as dateutil_tz

from lib import config
from lib.airtable_client import StatusStore
from lib.dates import local_day
from lib.notes import notes_from_records
from lib.schema import NoteCategory, NoteField, to_airtable_fields
from lib.validation import validate_intake_id
from services.status_notes.payload import StatusNotesPayload, parse_status_payload
from services.status_summary.classifier import latest_by_category
from utils.decorators import log_execution
from utils.errors import ConfigError
from utils.logging import log_error, log_event

logger = logging.getLogger(__name__)

WORKFLOW_ID = "status_notes"


@dataclass(frozen=True)
class CreationStrategy:
    """One way of linking a new Status Notes row to its intake."""

    name: str
    intake_link: Callable[[], List[str]]


@dataclass
class UpsertOutcome:
    category: NoteCategory
    action: str  # updated | created | failed | skipped
    strategy: Optional[str] = None
    record_id: Optional[str] = None
    errors: List[str] = field(default_factory=list)


@dataclass
class UpsertReport:
    intake_id: str
    payload: StatusNotesPayload
    outcomes: List[UpsertOutcome] = field(default_factory=list)

    def outcome_for(self, category: NoteCategory) -> Optional[UpsertOutcome]:
        return next((o for o in self.outcomes if o.category is category), None)

    def outputs(self) -> Dict[str, Any]:
        """Named values handed back to the invoking Airtable automation."""
        summary = self.payload.summary
        return {
            "todaysDate": self.payload.todays_date.isoformat(),
            "accomplishment": summary.accomplishment,
            "dependency": summary.dependency,
            "blocker": summary.blockers,
            "internalNote": summary.internal_note,
            "plannedActions": summary.planned_action,
            "IntakeID": self.intake_id,
            "processingComplete": True,
        }


def creation_strategies(intake_id: str, project_id: Optional[str]) -> List[CreationStrategy]:
    """
    Ordered ways to link a new row: the Projects record id when one was
    found, then the bare intake id resolved by Airtable typecast.
    """
    strategies = []
    if project_id:
        strategies.append(CreationStrategy("linked_project", lambda: [project_id]))
    strategies.append(CreationStrategy("intake_name", lambda: [intake_id]))
    return strategies


def _create_note(
    store: StatusStore,
    category: NoteCategory,
    text: str,
    strategies: List[CreationStrategy],
) -> UpsertOutcome:
    outcome = UpsertOutcome(category=category, action="failed")
    for strategy in strategies:
        fields = to_airtable_fields(
            {
                NoteField.INTAKE_ID: strategy.intake_link(),
                NoteField.CATEGORY: category.value,
                NoteField.NOTES: text,
            }
        )
        try:
            created = store.create_status_note(fields)
        except Exception as exc:
            logger.warning("Error creating %s record with %s: %s", category.value, strategy.name, exc)
            outcome.errors.append(f"{strategy.name}: {exc}")
            continue
        outcome.action = "created"
        outcome.strategy = strategy.name
        outcome.record_id = created.get("id")
        logger.info("Created %s record %s using %s", category.value, outcome.record_id, strategy.name)
        return outcome
    return outcome


@log_execution
def upsert_status_notes(
    payload: Union[StatusNotesPayload, str, Dict[str, Any]],
    intake_id: str,
    *,
    store: Optional[StatusStore] = None,
    timezone_name: Optional[str] = None,
) -> UpsertReport:
    """
    Write the payload's category texts as Status Notes rows for ``intake_id``.

    For each category with text: when the latest existing row for that
    category was added on the payload's date its Notes are replaced,
    otherwise a new row is created. A failing category is reported and
    the remaining categories still run.

    Added On timestamps are compared with "Todays Date" as calendar days in
    ``timezone_name`` (default ``NOTES_TIMEZONE``), the zone the producer
    dates its payload in. Date-only Added On cells are compared as written.
    """
    intake_id = validate_intake_id(intake_id)
    if not isinstance(payload, StatusNotesPayload):
        payload = parse_status_payload(payload)
    timezone_name = timezone_name or config.NOTES_TIMEZONE
    notes_tz = dateutil_tz.gettz(timezone_name)
    if notes_tz is None:
        raise ConfigError(f"Unknown timezone: {timezone_name}")
    store = store or StatusStore.from_env()

    report = UpsertReport(intake_id=intake_id, payload=payload)
    records = store.list_status_notes(intake_id)
    added_on_cells = {r.get("id"): r.get("fields", {}).get(NoteField.ADDED_ON.value) for r in records}
    existing = notes_from_records(records)
    latest = latest_by_category(existing)
    log_event(
        WORKFLOW_ID,
        "load",
        "Found existing status notes",
        {"intake_id": intake_id, "count": len(existing)},
    )

    strategies: Optional[List[CreationStrategy]] = None
    for category, text in payload.summary.by_category().items():
        if not text or not text.strip():
            logger.info("Skipping category %s: no data", category.value)
            report.outcomes.append(UpsertOutcome(category=category, action="skipped"))
            continue

        current = latest.get(category)
        try:
            if (
                current is not None
                and local_day(added_on_cells.get(current.record_id), notes_tz) == payload.todays_date
            ):
                store.update_status_note(current.record_id, to_airtable_fields({NoteField.NOTES: text}))
                report.outcomes.append(
                    UpsertOutcome(category=category, action="updated", record_id=current.record_id)
                )
                logger.info("Updated existing %s record %s", category.value, current.record_id)
                continue

            if strategies is None:
                project = store.find_project(intake_id)
                if project is None:
                    logger.info("Could not find project with Intake ID: %s", intake_id)
                strategies = creation_strategies(intake_id, project["id"] if project else None)
        except Exception as exc:
            log_error(WORKFLOW_ID, "upsert", exc, {"intake_id": intake_id, "category": category.value})
            report.outcomes.append(UpsertOutcome(category=category, action="failed", errors=[str(exc)]))
            continue

        outcome = _create_note(store, category, text, strategies)
        if outcome.action == "failed":
            log_event(
                WORKFLOW_ID,
                "create",
                "All creation strategies failed",
                {"intake_id": intake_id, "category": category.value, "errors": outcome.errors},
            )
        report.outcomes.append(outcome)

    log_event(
        WORKFLOW_ID,
        "done",
        "Status notes processed",
        {"intake_id": intake_id, "outcomes": {o.category.value: o.action for o in report.outcomes}},
    )
    return report
