"""
Notification Provider - Delivery of Follow-up Slack Messages
============================================================

Slack gives every slash command and button click a response_url that accepts
up to five follow-up messages for thirty minutes. Announcements, deferred
commentary and prompt replacements are posted there.

USAGE:
    provider = ResponseUrlProvider(timeout=5)
    provider.send(response_url, {"response_type": "in_channel", "text": "Hi"})

Delivery is fire-and-forget from the user's point of view: callers run it
after the HTTP response and only log failures.
"""

import logging
from abc import ABC, abstractmethod

import requests

from ...domain.errors import UpstreamCollaboratorError

logger = logging.getLogger(__name__)


class NotificationError(UpstreamCollaboratorError):
    """A follow-up message could not be delivered."""
    pass


class NotificationProvider(ABC):
    """
    Abstract base class for follow-up message delivery.
    Implement this interface to add new delivery backends.
    """

    @abstractmethod
    def send(self, url: str, payload: dict) -> None:
        """Deliver payload to url. Raises NotificationError on failure."""
        ...


class ResponseUrlProvider(NotificationProvider):
    """Posts JSON payloads to Slack response URLs with requests."""

    def __init__(self, timeout: float = 5.0):
        self._timeout = timeout

    def send(self, url: str, payload: dict) -> None:
        if not url:
            raise NotificationError("No response_url to deliver to")

        try:
            response = requests.post(url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationError(f"Failed to post to response_url: {e}") from e

        logger.debug(f"Delivered follow-up ({len(payload.get('text', ''))} chars)")
