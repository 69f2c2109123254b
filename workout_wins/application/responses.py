"""
Responses - What the Bot Sends Back
===================================

BotResponse is platform neutral (visibility + text + optional interactive
blocks); to_slack() produces the Slack wire payload.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..domain.workflow import AwaitingConfirmation


class Visibility(Enum):
    PRIVATE = "private"
    PUBLIC = "public"


SLACK_RESPONSE_TYPES = {
    Visibility.PRIVATE: "ephemeral",
    Visibility.PUBLIC: "in_channel",
}


@dataclass(frozen=True)
class BotResponse:
    text: str
    visibility: Visibility = Visibility.PRIVATE
    blocks: Optional[List[dict]] = None
    replace_original: bool = False
    delete_original: bool = False

    @classmethod
    def private(cls, text: str, **kwargs) -> "BotResponse":
        return cls(text=text, visibility=Visibility.PRIVATE, **kwargs)

    @classmethod
    def public(cls, text: str, **kwargs) -> "BotResponse":
        return cls(text=text, visibility=Visibility.PUBLIC, **kwargs)

    @property
    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    def to_slack(self) -> dict:
        payload = {
            "response_type": SLACK_RESPONSE_TYPES[self.visibility],
            "text": self.text,
        }
        if self.blocks:
            payload["blocks"] = self.blocks
        if self.replace_original:
            payload["replace_original"] = True
        if self.delete_original:
            payload["delete_original"] = True
        return payload


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of one inbound request.

    response is sent synchronously (None means an empty acknowledgement).
    deferred, if set, builds a follow-up message after the response has gone
    out. It must not be allowed to fail the primary response.
    """
    response: Optional[BotResponse]
    deferred: Optional[Callable[[], BotResponse]] = None


def confirmation_blocks(prompt: str, outcome: AwaitingConfirmation) -> List[dict]:
    """Section with the prompt plus Confirm / Cancel buttons carrying the DayKey."""
    return [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": prompt},
        },
        {
            "type": "actions",
            "block_id": "star_confirmation",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "Add another star"},
                    "style": "primary",
                    "action_id": outcome.confirm_action,
                    "value": outcome.day_key,
                },
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": "Cancel"},
                    "action_id": outcome.cancel_action,
                    "value": outcome.day_key,
                },
            ],
        },
    ]
