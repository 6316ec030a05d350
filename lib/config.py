"""Configuration management for the application."""
import os
from dotenv import load_dotenv

from utils.errors import ConfigError

# Load environment variables from .env file
load_dotenv()

# Airtable configuration
AIRTABLE_API_KEY = os.getenv("AIRTABLE_API_KEY")
AIRTABLE_BASE_ID = os.getenv("AIRTABLE_BASE_ID")

SUBMITTED_REQUESTS_TABLE = os.getenv("SUBMITTED_REQUESTS_TABLE", "Submitted Requests")
STATUS_NOTES_TABLE = os.getenv("STATUS_NOTES_TABLE", "Status Notes")
PROJECTS_TABLE = os.getenv("PROJECTS_TABLE", "Projects")
JIRA_SYNC_TABLE = os.getenv("JIRA_SYNC_TABLE", "JIRA Sync")

# Gemini configuration. A missing key disables summary refinement.
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite")

# Logic App relay into Teams
LOGIC_APP_URL = os.getenv("LOGIC_APP_URL")
WEBHOOK_TIMEOUT_SECONDS = float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "30"))

# Timezone of the "Todays Date" value sent by the status-note producer
NOTES_TIMEZONE = os.getenv("NOTES_TIMEZONE", "UTC")

# HTTP server
SERVER_URL = os.getenv("SERVER_URL")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def require_airtable_config() -> tuple[str, str]:
    """Return (api_key, base_id) or raise ConfigError when either is missing."""
    if not AIRTABLE_API_KEY or not AIRTABLE_BASE_ID:
        raise ConfigError(
            "Missing required Airtable configuration: set AIRTABLE_API_KEY and AIRTABLE_BASE_ID."
        )
    return AIRTABLE_API_KEY, AIRTABLE_BASE_ID
