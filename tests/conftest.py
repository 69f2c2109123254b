"""Shared fixtures for the workout-wins test suite."""

from datetime import datetime

import pytest
import pytz

from workout_wins.domain.errors import StoreUnavailable, UpstreamCollaboratorError
from workout_wins.infrastructure.persistence import InMemoryStarStore
from workout_wins.infrastructure.slack import NotificationError, NotificationProvider

# Wednesday 8 January 2025, midday UTC. Its week runs 2025-01-06 .. 2025-01-12.
WEDNESDAY = datetime(2025, 1, 8, 12, 0, tzinfo=pytz.utc)
WEEK_OF_WEDNESDAY = [
    "2025-01-06", "2025-01-07", "2025-01-08", "2025-01-09",
    "2025-01-10", "2025-01-11", "2025-01-12",
]


class FakeCommentary:
    """Stands in for CommentaryService."""

    def __init__(self, reply="Great week, team!", configured=True, error=None):
        self.reply = reply
        self.configured = configured
        self.error = error
        self.calls = []

    @property
    def is_configured(self):
        return self.configured

    def comment(self, table_text, weekly_data):
        self.calls.append((table_text, weekly_data))
        if self.error:
            raise self.error
        return self.reply


class RecordingNotifier(NotificationProvider):
    """Collects follow-up messages instead of posting them."""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send(self, url, payload):
        if self.fail:
            raise NotificationError("response_url rejected the message")
        self.sent.append((url, payload))


class BrokenStore(InMemoryStarStore):
    """A store whose backend is down."""

    def _down(self, *args, **kwargs):
        raise StoreUnavailable("backend down")

    register_user = _down
    increment_star = _down
    get_user_day_counts = _down
    list_users = _down
    get_display_names = _down


@pytest.fixture
def utc():
    return pytz.utc


@pytest.fixture
def store():
    return InMemoryStarStore()


@pytest.fixture
def commentary():
    return FakeCommentary()


@pytest.fixture
def failing_commentary():
    return FakeCommentary(error=UpstreamCollaboratorError("model overloaded"))


@pytest.fixture
def notifier():
    return RecordingNotifier()
