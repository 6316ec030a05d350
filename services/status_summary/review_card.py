"""Adaptive card messages sent to Teams through the Logic App relay."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from lib.schema import SummaryStatus
from lib.webhook_client import WebhookClient

logger = logging.getLogger(__name__)

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
REVIEW_CARD_TITLE = "Status Summary Review Required"


def _teams_message(body: List[Dict[str, Any]], actions: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    content: Dict[str, Any] = {
        "type": "AdaptiveCard",
        "version": "1.0",
        "body": body,
    }
    if actions:
        content["actions"] = actions
    return {
        "type": "message",
        "attachments": [
            {
                "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
                "content": content,
            }
        ],
    }


def _submit_action(title: str, message_text: str, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "Action.Submit",
        "title": title,
        "data": {
            "msteams": {"type": "messageBack", "text": message_text},
            **data,
        },
    }


def build_review_card(summary: str, intake_id: str, generated_on: Optional[date] = None) -> Dict[str, Any]:
    """
    Build the approve/reject/modify review card for a generated summary.

    The Modify action opens an inline form whose ``modifiedText`` input is
    merged by Teams into the submitted data.
    """
    generated_on = generated_on or datetime.now().date()
    body = [
        {"type": "TextBlock", "size": "Medium", "weight": "Bolder", "text": REVIEW_CARD_TITLE},
        {"type": "TextBlock", "text": f"Intake ID: {intake_id}", "wrap": True},
        {"type": "TextBlock", "text": summary, "wrap": True},
        {
            "type": "FactSet",
            "facts": [
                {"title": "Status", "value": SummaryStatus.PENDING_REVIEW.value},
                {"title": "Generated On", "value": generated_on.isoformat()},
            ],
        },
    ]
    actions = [
        _submit_action("Approve", "approved", {"actionId": "approve", "intakeId": intake_id, "summary": summary}),
        _submit_action("Reject", "rejected", {"actionId": "reject", "intakeId": intake_id}),
        {
            "type": "Action.ShowCard",
            "title": "Modify",
            "card": {
                "type": "AdaptiveCard",
                "body": [
                    {
                        "type": "Input.Text",
                        "id": "modifiedText",
                        "placeholder": "Enter modified summary...",
                        "isMultiline": True,
                        "value": summary,
                    }
                ],
                "actions": [
                    _submit_action("Submit Modified", "modified", {"actionId": "modify", "intakeId": intake_id}),
                ],
            },
        },
    ]
    return _teams_message(body, actions)


def publish_review_card(summary: str, intake_id: str, webhook: Optional[WebhookClient]) -> bool:
    """Post the review card once; returns False (after logging) when delivery fails."""
    if webhook is None:
        logger.error("LOGIC_APP_URL is not configured; cannot publish review card for %s", intake_id)
        return False
    return webhook.post(build_review_card(summary, intake_id))


def build_connection_test_card(sent_at: Optional[datetime] = None) -> Dict[str, Any]:
    sent_at = sent_at or datetime.now()
    return _teams_message(
        [
            {"type": "TextBlock", "text": "Test Connection", "weight": "Bolder"},
            {"type": "TextBlock", "text": f"Test message sent at: {sent_at.isoformat(sep=' ', timespec='seconds')}"},
        ]
    )


def send_connection_test(webhook: Optional[WebhookClient]) -> bool:
    """Send a minimal card to verify the relay is reachable."""
    if webhook is None:
        logger.error("LOGIC_APP_URL is not configured")
        return False
    logger.info("Sending test message to Logic App URL: %s", webhook.url)
    return webhook.post(build_connection_test_card())
