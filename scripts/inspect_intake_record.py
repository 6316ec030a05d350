import os
import sys
from dotenv import load_dotenv

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

load_dotenv()

from lib.airtable_client import StatusStore  # noqa: E402
from lib.notes import notes_from_records  # noqa: E402
from lib.schema import IntakeField  # noqa: E402
from services.status_summary.composer import compose_digest  # noqa: E402
from utils.errors import StatusDigestError  # noqa: E402


def inspect_intake(intake_id: str):
    try:
        store = StatusStore.from_env()
        print(f"🔍 Fetching intake: {intake_id}...")
        intake = store.find_intake(intake_id)
        if not intake:
            print(f"❌ FAILURE: No record found for Intake ID: {intake_id}")
            return
        fields = intake.get("fields", {})
        notes = notes_from_records(store.list_status_notes(intake_id))
    except StatusDigestError as e:
        print(f"❌ ERROR: {e}")
        return

    print("\n" + "=" * 50)
    print(f"RECORD ID: {intake.get('id')}")
    print(f"PROJECT:   {fields.get(IntakeField.PROJECT_NAME.value, 'N/A')}")
    print(f"STATUS:    {fields.get(IntakeField.STATUS_SUMMARY_STATUS.value, 'N/A')}")
    print(f"NOTES:     {len(notes)}")
    print("-" * 50)
    print("DIGEST PREVIEW:")
    print(compose_digest(notes))
    print("=" * 50 + "\n")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/inspect_intake_record.py <INTAKE_ID>")
    else:
        inspect_intake(sys.argv[1])
