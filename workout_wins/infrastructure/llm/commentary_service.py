"""
Commentary Service - LLM Weekly Workout Commentary
==================================================

ARCHITECTURAL DECISION:
- Uses OpenRouter API (OpenAI-compatible chat completions)
- Without an API key the service reports itself as not configured;
  callers show a message instead of calling it
- Any API failure raises CommentaryServiceError, no retries

EXTENSIBILITY:
- To use different model: set OPENROUTER_MODEL
- To use OpenAI or a local server: change OPENROUTER_API_URL and key
"""

import json
import logging
import requests
from typing import Optional

from ...domain.errors import UpstreamCollaboratorError
from ..config import LLMSettings, get_settings

logger = logging.getLogger(__name__)


class CommentaryServiceError(UpstreamCollaboratorError):
    """Text generation failed or returned nothing usable."""
    pass


class CommentaryService:
    """
    Weekly commentary generator using LLM.

    USAGE:
        service = CommentaryService()
        if service.is_configured:
            text = service.comment(table_text, matrix.to_dict())
    """

    SYSTEM_PROMPT = (
        "You are an upbeat workout buddy in a team chat. "
        "Keep replies under 120 words and use at most three emoji."
    )

    PROMPT_TEMPLATE = (
        "Here is this week's workout attendance table. Each star is one workout.\n\n"
        "{table}\n\n"
        "Structured data (JSON):\n{data}\n\n"
        "Write a short commentary: call out who is leading, who is on a streak, "
        "and give the group one encouraging nudge for the rest of the week."
    )

    def __init__(self, settings: Optional[LLMSettings] = None):
        """Initialize commentary service with settings."""
        settings = settings or get_settings().llm
        self._api_key = settings.api_key
        self._api_url = settings.api_url
        self._model = settings.model
        self._temperature = settings.temperature
        self._max_tokens = settings.max_tokens
        self._timeout = settings.timeout_seconds

        if not self._api_key:
            logger.warning("No OPENROUTER_API_KEY set. Weekly commentary is disabled.")

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def comment(self, table_text: str, weekly_data: dict) -> str:
        """
        Generate commentary for a rendered weekly table.

        Args:
            table_text: Output of render_weekly_table.
            weekly_data: WeeklyMatrix.to_dict() for the same week.

        Returns:
            Commentary text.

        Raises:
            CommentaryServiceError: not configured, API failure or empty reply.
        """
        if not self.is_configured:
            raise CommentaryServiceError("Commentary service is not configured")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": "https://github.com/workout-wins",  # Required by OpenRouter
        }

        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": self.PROMPT_TEMPLATE.format(
                        table=table_text,
                        data=json.dumps(weekly_data, ensure_ascii=False),
                    ),
                },
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }

        try:
            response = requests.post(
                self._api_url,
                headers=headers,
                json=payload,
                timeout=self._timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.Timeout as e:
            logger.warning("LLM API timeout")
            raise CommentaryServiceError("The commentary service timed out") from e

        except requests.RequestException as e:
            logger.warning(f"LLM API error: {e}")
            raise CommentaryServiceError(f"The commentary service failed: {e}") from e

        except ValueError as e:
            logger.warning(f"LLM API returned invalid JSON: {e}")
            raise CommentaryServiceError("The commentary service returned an invalid response") from e

        content = self._extract_response_content(data)
        if not content:
            raise CommentaryServiceError("The commentary service returned an empty reply")

        logger.debug(f"LLM commentary: {content[:80]}")
        return content

    def _extract_response_content(self, data: dict) -> str:
        """Extract text content from API response."""
        try:
            choices = data.get("choices", [])
            if choices:
                message = choices[0].get("message", {})
                return (message.get("content") or "").strip()
        except (KeyError, IndexError, TypeError, AttributeError):
            pass
        return ""
