"""Tests for the status summary pipeline entry point."""

import pytest
from langchain_core.runnables import RunnableLambda

from lib import config
from services.status_summary.run import process_intake
from utils.errors import ConfigError, DeliveryError, NotFoundError

INTAKE_ID = "DATA COE - 10035"


def test_process_intake_publishes_digest_for_review(store, webhook) -> None:
    result = process_intake(INTAKE_ID, store=store, webhook=webhook)

    assert result["status"] == "pending_approval"
    summary = result["summary"]
    assert "Recent Updates:\n* Jan 17: Shipped v2" in summary
    assert "Current Blockers:\n* Jan 17: API down" in summary

    card = webhook.messages[0]["attachments"][0]["content"]
    assert card["actions"][0]["data"] == {
        "msteams": {"type": "messageBack", "text": "approved"},
        "actionId": "approve",
        "intakeId": INTAKE_ID,
        "summary": summary,
    }
    assert store.intake_updates == [
        (
            "recIntake1",
            {"Status Summary": summary, "Status Summary Status": "Pending Review"},
        )
    ]


def test_process_intake_uses_refined_text_when_model_available(store, webhook) -> None:
    llm = RunnableLambda(lambda prompt: "**Current Status:** Green")

    result = process_intake(INTAKE_ID, store=store, llm=llm, webhook=webhook)

    assert result == {"status": "pending_approval", "summary": "**Current Status:** Green"}


def test_process_intake_fails_for_unknown_intake(store, webhook) -> None:
    with pytest.raises(NotFoundError):
        process_intake("DATA COE - 99999", store=store, webhook=webhook)

    assert webhook.messages == []
    assert store.intake_updates == []


def test_process_intake_raises_when_card_not_delivered(store, make_webhook) -> None:
    with pytest.raises(DeliveryError):
        process_intake(INTAKE_ID, store=store, webhook=make_webhook(ok=False))

    assert store.intake_updates == []


def test_process_intake_without_store_credentials(monkeypatch: pytest.MonkeyPatch, webhook) -> None:
    monkeypatch.setattr(config, "AIRTABLE_API_KEY", None)
    monkeypatch.setattr(config, "AIRTABLE_BASE_ID", None)

    with pytest.raises(ConfigError):
        process_intake(INTAKE_ID, webhook=webhook)

    assert webhook.messages == []
