"""
Star Recording Workflow - First Star, Repeat Star, Confirm, Cancel
==================================================================

States:
    Idle -> Recording -> Announced
                      -> AwaitingConfirmation -> Confirmed
                                              -> Cancelled

ARCHITECTURAL DECISION:
- Every tap is a real star: the increment happens before we know whether it
  is a repeat, and cancelling does not roll it back. Confirmation only gates
  the announcement.
- No server-side session: the pending DayKey travels inside the prompt's
  buttons and comes back with the confirm/cancel action.
- Each outcome is its own type so callers handle all of them explicitly.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .calendar import is_day_key
from .errors import InvalidDayKey, MissingUser
from .star_store import StarStore

logger = logging.getLogger(__name__)

CONFIRM_ACTION = "confirm"
CANCEL_ACTION = "cancel"


@dataclass(frozen=True)
class Announced:
    """First star for this user and day; announce it publicly."""
    user_id: str
    display_label: str
    day_key: str
    count: int = 1


@dataclass(frozen=True)
class AwaitingConfirmation:
    """Repeat star; ask the user privately whether to add another."""
    user_id: str
    display_label: str
    day_key: str
    count: int
    confirm_action: str = CONFIRM_ACTION
    cancel_action: str = CANCEL_ACTION


@dataclass(frozen=True)
class Confirmed:
    """User confirmed; a further star was recorded."""
    user_id: str
    display_label: str
    day_key: str
    count: int


@dataclass(frozen=True)
class Cancelled:
    """User dismissed the prompt. The earlier star stays recorded."""
    user_id: str
    day_key: str


StarOutcome = Union[Announced, AwaitingConfirmation, Confirmed, Cancelled]


class StarRecorder:
    """
    The only writer to the star store.

    USAGE:
        recorder = StarRecorder(store)
        outcome = recorder.record_star("U1", "alice", "2025-01-06")
        if isinstance(outcome, AwaitingConfirmation):
            outcome = recorder.confirm("U1", "alice", outcome.day_key)
    """

    def __init__(self, store: StarStore):
        self._store = store

    def record_star(self, user_id: str, display_name: Optional[str], day_key: str) -> StarOutcome:
        """
        Add a star for user_id on day_key.

        Returns:
            Announced for the first star of the day,
            AwaitingConfirmation for any repeat.

        Raises:
            MissingUser: user_id is empty. Nothing is written.
            StoreUnavailable: the backend failed.
        """
        count = self._increment(user_id, display_name, day_key)
        label = self._label(user_id, display_name)

        if count == 1:
            return Announced(user_id=user_id, display_label=label, day_key=day_key)

        logger.info(f"Repeat star for {user_id} on {day_key} (count {count}), asking for confirmation")
        return AwaitingConfirmation(user_id=user_id, display_label=label, day_key=day_key, count=count)

    def confirm(self, user_id: str, display_name: Optional[str], day_key: str) -> Confirmed:
        """
        Record one more star for the pending day. This is a real increment.

        day_key comes back from the client, so it is checked before any write.

        Raises:
            MissingUser: user_id is empty.
            InvalidDayKey: day_key is not a YYYY-MM-DD date.
        """
        _check_day_key(day_key)
        count = self._increment(user_id, display_name, day_key)
        return Confirmed(user_id=user_id, display_label=self._label(user_id, display_name),
                         day_key=day_key, count=count)

    def cancel(self, user_id: str, day_key: str) -> Cancelled:
        """Dismiss the prompt without touching the store."""
        if not user_id:
            raise MissingUser("Missing user_id.")
        _check_day_key(day_key)
        logger.info(f"Repeat star for {user_id} on {day_key} cancelled; earlier star kept")
        return Cancelled(user_id=user_id, day_key=day_key)

    def _increment(self, user_id: str, display_name: Optional[str], day_key: str) -> int:
        if not user_id:
            raise MissingUser("Missing user_id.")

        self._store.register_user(user_id, display_name)
        count = self._store.increment_star(user_id, day_key)
        logger.info(f"Star recorded for {user_id} on {day_key} (count {count})")
        return count

    def _label(self, user_id: str, display_name: Optional[str]) -> str:
        return display_name or self._store.get_display_names().get(user_id) or user_id


def _check_day_key(day_key: str) -> None:
    if not is_day_key(day_key):
        logger.warning(f"Rejected action for malformed day key {day_key!r}")
        raise InvalidDayKey(f"Not a valid day: {day_key!r}")
