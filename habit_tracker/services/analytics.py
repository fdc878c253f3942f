"""
Client for the event counter service.
Sends (event, page) pairs fire-and-forget; failures are logged and dropped.
"""
import logging
from typing import Optional

import requests

from habit_tracker.constants import TRACK_ENDPOINT, TRACK_TIMEOUT_SECONDS, EVENT_PAGE_VIEW

logger = logging.getLogger("habit_tracker.analytics")


class EventTracker:
    """Posts frontend events to the /track endpoint"""

    def __init__(self, endpoint: Optional[str] = TRACK_ENDPOINT, timeout: float = TRACK_TIMEOUT_SECONDS):
        self.endpoint = endpoint
        self.timeout = timeout

    def track_event(self, event: str, page: str) -> bool:
        """
        Send one event.

        Returns:
            True if the counter service accepted it
        """
        if not self.endpoint:
            logger.error("Track endpoint is not configured (HABIT_TRACKER_TRACK_ENDPOINT)")
            return False

        try:
            response = requests.post(
                self.endpoint,
                json={"event": event, "page": page},
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send metrics: {e}")
            return False
        return True

    def track_page_view(self, page: str) -> bool:
        return self.track_event(EVENT_PAGE_VIEW, page)
