"""Client for the Logic App webhook that relays messages into Microsoft Teams."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from lib import config
from utils.errors import ConfigError

logger = logging.getLogger(__name__)


class WebhookClient:
    """Posts JSON message bodies to a single relay URL."""

    def __init__(self, url: str, timeout: float = 30.0, session: Optional[requests.Session] = None) -> None:
        if not url:
            raise ConfigError("Webhook URL is required.")
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls) -> Optional["WebhookClient"]:
        """Return a client for LOGIC_APP_URL, or None when it is not configured."""
        if not config.LOGIC_APP_URL:
            return None
        return cls(config.LOGIC_APP_URL, timeout=config.WEBHOOK_TIMEOUT_SECONDS)

    def post(self, message: Dict[str, Any]) -> bool:
        """
        Send ``message`` once.

        Returns:
            True on a 2xx response, False on any transport or HTTP error.
        """
        logger.debug("Sending message to Logic App: %s", json.dumps(message, indent=2))
        try:
            response = self._session.post(self.url, json=message, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            status = getattr(getattr(exc, "response", None), "status_code", None)
            logger.error("Error sending message to Logic App (status=%s): %s", status, exc)
            return False
        logger.info("Logic App response: %s %s", response.status_code, response.reason)
        return True
