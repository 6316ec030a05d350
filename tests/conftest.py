"""Shared in-memory doubles for the Airtable store and the Logic App relay."""

from typing import Any, Dict, List, Optional

import pytest

from utils.errors import AirtableError

INTAKE_ID = "DATA COE - 10035"


class FakeStore:
    """In-memory stand-in for lib.airtable_client.StatusStore."""

    def __init__(
        self,
        intakes: Optional[List[Dict[str, Any]]] = None,
        notes: Optional[List[Dict[str, Any]]] = None,
        projects: Optional[List[Dict[str, Any]]] = None,
        issues: Optional[List[Dict[str, Any]]] = None,
        today: str = "2024-01-17",
    ) -> None:
        self.intakes = intakes or []
        self.notes = notes or []
        self.projects = projects or []
        self.issues = issues or []
        self.today = today
        self.failing_links: set = set()
        self.intake_updates: List[tuple] = []
        self.note_updates: List[tuple] = []
        self.create_attempts: List[Dict[str, Any]] = []

    def _intake_for_link(self, link: str) -> str:
        for project in self.projects:
            if project["id"] == link:
                return project["fields"]["Intake ID"]
        return link

    def find_intake(self, intake_id: str):
        return next((r for r in self.intakes if r["fields"].get("Intake ID") == intake_id), None)

    def update_intake(self, record_id: str, fields: Dict[str, Any]):
        self.intake_updates.append((record_id, fields))
        record = next(r for r in self.intakes if r["id"] == record_id)
        record["fields"].update(fields)
        return record

    def list_status_notes(self, intake_id: str):
        return [
            r
            for r in self.notes
            if any(self._intake_for_link(link) == intake_id for link in r["fields"].get("Intake ID", []))
        ]

    def update_status_note(self, record_id: str, fields: Dict[str, Any]):
        self.note_updates.append((record_id, fields))
        record = next(r for r in self.notes if r["id"] == record_id)
        record["fields"].update(fields)
        return record

    def create_status_note(self, fields: Dict[str, Any]):
        self.create_attempts.append(fields)
        link = fields["Intake ID"][0]
        if link in self.failing_links:
            raise AirtableError(f"cannot link {link}")
        record = {
            "id": f"recNote{len(self.notes) + 1}",
            "fields": {**fields, "Added On": self.today},
        }
        self.notes.append(record)
        return record

    def find_project(self, intake_id: str):
        return next((r for r in self.projects if r["fields"].get("Intake ID") == intake_id), None)

    def list_issue_records(self):
        return self.issues


class FakeWebhook:
    url = "https://relay.example/trigger"

    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.messages: List[Dict[str, Any]] = []

    def post(self, message: Dict[str, Any]) -> bool:
        self.messages.append(message)
        return self.ok


def note_record(record_id: str, category: str, text: str, added_on: str, intake_id: str = INTAKE_ID) -> Dict[str, Any]:
    return {
        "id": record_id,
        "fields": {
            "Intake ID": [intake_id],
            "Note Category": category,
            "Notes": text,
            "Added On": added_on,
            "Added By": {"id": "usr1", "email": "pm@example.com", "name": "Pat Manager"},
        },
    }


@pytest.fixture
def intake_record() -> Dict[str, Any]:
    return {
        "id": "recIntake1",
        "fields": {"Intake ID": INTAKE_ID, "Project Name": "Data Platform"},
    }


@pytest.fixture
def store(intake_record) -> FakeStore:
    return FakeStore(
        intakes=[intake_record],
        notes=[
            note_record("recN1", "Accomplishment", "Shipped v2", "2024-01-17T10:00:00.000Z"),
            note_record("recN2", "Blocker / Challenge", "API down", "2024-01-17T09:00:00.000Z"),
        ],
        projects=[{"id": "recProj1", "fields": {"Intake ID": INTAKE_ID}}],
    )


@pytest.fixture
def webhook() -> FakeWebhook:
    return FakeWebhook()


@pytest.fixture
def make_note_record():
    return note_record


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def make_webhook():
    return FakeWebhook
