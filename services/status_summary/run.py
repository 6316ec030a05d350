"""Entry point for the status summary pipeline: fetch, compose, refine, publish."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from langchain_core.runnables import Runnable

from lib.airtable_client import StatusStore
from lib.notes import notes_from_records
from lib.schema import IntakeField, SummaryStatus, to_airtable_fields
from lib.validation import validate_intake_id
from lib.webhook_client import WebhookClient
from services.status_summary.classifier import latest_by_category
from services.status_summary.composer import NextStepRule, compose_digest
from services.status_summary.refiner import refine_summary
from services.status_summary.review_card import publish_review_card
from utils.decorators import log_execution
from utils.errors import DeliveryError, NotFoundError
from utils.logging import log_error, log_event

WORKFLOW_ID = "status_summary"


@log_execution
def process_intake(
    intake_id: str,
    *,
    store: Optional[StatusStore] = None,
    llm: Optional[Runnable] = None,
    webhook: Optional[WebhookClient] = None,
    next_step_rule: NextStepRule = NextStepRule.MENTIONED_DATE,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Generate a status summary for one intake and send it for review.

    Args:
        intake_id: Exact "Intake ID" value of the Submitted Requests record.
        store: Airtable store; built from the environment when omitted.
        llm: Chat model for refinement; None keeps the raw digest.
        webhook: Relay client used to publish the review card.
        next_step_rule: Planned-action selection rule for the digest.
        now: Processing time override.

    Returns:
        ``{"status": "pending_approval", "summary": <text>}``

    Raises:
        ConfigError: Airtable credentials are missing.
        NotFoundError: No intake record matches ``intake_id``.
        DeliveryError: The review card could not be delivered.
    """
    intake_id = validate_intake_id(intake_id)
    log_event(WORKFLOW_ID, "start", "Processing intake", {"intake_id": intake_id})

    try:
        store = store or StatusStore.from_env()

        intake = store.find_intake(intake_id)
        if not intake:
            raise NotFoundError(f"No request found for Intake ID: {intake_id}")

        notes = notes_from_records(store.list_status_notes(intake_id))
        latest = latest_by_category(notes)
        log_event(
            WORKFLOW_ID,
            "classify",
            "Fetched status notes",
            {
                "intake_id": intake_id,
                "note_count": len(notes),
                "latest": {category.value: note.added_on for category, note in latest.items()},
            },
        )

        digest = compose_digest(notes, now=now, next_step_rule=next_step_rule)
        summary = refine_summary(digest, llm)

        if not publish_review_card(summary, intake_id, webhook):
            raise DeliveryError(f"Failed to send Teams message for Intake ID: {intake_id}")

        store.update_intake(
            intake["id"],
            to_airtable_fields(
                {
                    IntakeField.STATUS_SUMMARY: summary,
                    IntakeField.STATUS_SUMMARY_STATUS: SummaryStatus.PENDING_REVIEW.value,
                }
            ),
        )
    except Exception as exc:
        log_error(WORKFLOW_ID, "process_intake", exc, {"intake_id": intake_id})
        raise

    log_event(WORKFLOW_ID, "publish", "Summary sent for review", {"intake_id": intake_id})
    return {"status": "pending_approval", "summary": summary}
