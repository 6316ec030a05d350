"""Apply a reviewer's approve/reject/modify decision to the intake record."""
from __future__ import annotations

from typing import Any, Dict, Optional

from lib.airtable_client import StatusStore
from lib.schema import IntakeField, SummaryStatus, to_airtable_fields
from lib.validation import validate_intake_id
from lib.webhook_client import WebhookClient
from utils.decorators import log_execution
from utils.errors import InvalidActionError, NotFoundError, ValidationError
from utils.logging import log_error, log_event

WORKFLOW_ID = "review_response"

APPROVE = "approve"
REJECT = "reject"
MODIFY = "modify"

STATUS_MESSAGES = {
    APPROVE: "Approved summary",
    REJECT: "Rejected summary",
    MODIFY: "Modified and approved summary",
}

PAST_TENSE = {
    APPROVE: "approved",
    REJECT: "rejected",
    MODIFY: "modified",
}


def build_update_fields(action: str, summary: Optional[str], modified_text: Optional[str]) -> Dict[str, Any]:
    """Map a reviewer action to the Submitted Requests fields it writes."""
    if action == APPROVE:
        values = {IntakeField.STATUS_SUMMARY_STATUS: SummaryStatus.APPROVED.value}
        # Without a summary the stored draft is what gets approved.
        if summary and summary.strip():
            values[IntakeField.STATUS_SUMMARY] = summary
    elif action == REJECT:
        values = {IntakeField.STATUS_SUMMARY_STATUS: SummaryStatus.REJECTED.value}
    elif action == MODIFY:
        if not modified_text or not modified_text.strip():
            raise ValidationError("modifiedText is required for the modify action.")
        values = {
            IntakeField.STATUS_SUMMARY: modified_text,
            IntakeField.STATUS_SUMMARY_STATUS: SummaryStatus.APPROVED.value,
        }
    else:
        raise InvalidActionError(f"Invalid action: {action}")
    return to_airtable_fields(values)


def send_confirmation(action: str, intake_id: str, webhook: Optional[WebhookClient]) -> bool:
    """Tell the Teams channel the decision was recorded; failures are only logged."""
    if webhook is None:
        return False
    message = {
        "type": "message",
        "text": f"Status summary {PAST_TENSE[action]} for Intake ID: {intake_id}",
    }
    delivered = webhook.post(message)
    if not delivered:
        log_event(WORKFLOW_ID, "confirm", "Confirmation message not delivered", {"intake_id": intake_id})
    return delivered


@log_execution
def handle_review_response(
    action: str,
    intake_id: str,
    summary: Optional[str] = None,
    modified_text: Optional[str] = None,
    *,
    store: StatusStore,
    webhook: Optional[WebhookClient] = None,
) -> Dict[str, Any]:
    """
    Persist the reviewer's decision and confirm it in Teams.

    Raises:
        InvalidActionError: ``action`` is not approve, reject, or modify.
        ValidationError: Missing intake id, or modify without text.
        NotFoundError: No intake record matches ``intake_id``.
    """
    try:
        intake_id = validate_intake_id(intake_id)
        fields = build_update_fields(action, summary, modified_text)

        intake = store.find_intake(intake_id)
        if not intake:
            raise NotFoundError(f"No record found for Intake ID: {intake_id}")

        store.update_intake(intake["id"], fields)
    except Exception as exc:
        log_error(WORKFLOW_ID, "apply_decision", exc, {"intake_id": intake_id, "action": action})
        raise

    status_message = STATUS_MESSAGES[action]
    log_event(WORKFLOW_ID, "apply_decision", status_message, {"intake_id": intake_id, "action": action})

    send_confirmation(action, intake_id, webhook)

    return {
        "success": True,
        "message": status_message,
        "intakeId": intake_id,
        "action": action,
    }
