import pytest

from workout_wins.domain.errors import InvalidDayKey, MissingUser
from workout_wins.domain.workflow import (
    CANCEL_ACTION,
    CONFIRM_ACTION,
    Announced,
    AwaitingConfirmation,
    Cancelled,
    Confirmed,
    StarRecorder,
)


@pytest.fixture
def recorder(store):
    return StarRecorder(store)


def test_first_star_is_announced(recorder, store):
    outcome = recorder.record_star("U1", "Al", "2025-01-06")

    assert outcome == Announced(user_id="U1", display_label="Al", day_key="2025-01-06", count=1)
    assert store.list_users() == ["U1"]
    assert store.get_display_names() == {"U1": "Al"}


def test_repeat_star_awaits_confirmation(recorder, store):
    recorder.record_star("U1", "Al", "2025-01-06")
    outcome = recorder.record_star("U1", "Al", "2025-01-06")

    assert isinstance(outcome, AwaitingConfirmation)
    assert outcome.count == 2
    assert outcome.day_key == "2025-01-06"
    assert (outcome.confirm_action, outcome.cancel_action) == (CONFIRM_ACTION, CANCEL_ACTION)
    # the repeat tap is already counted
    assert store.get_user_day_counts("U1") == {"2025-01-06": 2}


def test_confirm_performs_another_increment(recorder, store):
    recorder.record_star("U1", "Al", "2025-01-06")
    recorder.record_star("U1", "Al", "2025-01-06")

    outcome = recorder.confirm("U1", "Al", "2025-01-06")

    assert outcome == Confirmed(user_id="U1", display_label="Al", day_key="2025-01-06", count=3)
    assert store.get_user_day_counts("U1") == {"2025-01-06": 3}


def test_cancel_keeps_the_earlier_star(recorder, store):
    recorder.record_star("U1", "Al", "2025-01-06")
    recorder.record_star("U1", "Al", "2025-01-06")

    outcome = recorder.cancel("U1", "2025-01-06")

    assert outcome == Cancelled(user_id="U1", day_key="2025-01-06")
    assert store.get_user_day_counts("U1") == {"2025-01-06": 2}


def test_every_later_tap_asks_again(recorder):
    recorder.record_star("U1", "Al", "2025-01-06")
    recorder.record_star("U1", "Al", "2025-01-06")
    recorder.confirm("U1", "Al", "2025-01-06")

    outcome = recorder.record_star("U1", "Al", "2025-01-06")

    assert isinstance(outcome, AwaitingConfirmation)
    assert outcome.count == 4


def test_different_day_is_a_new_first_star(recorder):
    recorder.record_star("U1", "Al", "2025-01-06")
    assert isinstance(recorder.record_star("U1", "Al", "2025-01-07"), Announced)


def test_label_falls_back_to_user_id(recorder):
    assert recorder.record_star("U1", "", "2025-01-06").display_label == "U1"


@pytest.mark.parametrize("call", [
    lambda r: r.record_star("", "Al", "2025-01-06"),
    lambda r: r.confirm("", "Al", "2025-01-06"),
    lambda r: r.cancel("", "2025-01-06"),
])
def test_missing_user_changes_nothing(recorder, store, call):
    with pytest.raises(MissingUser):
        call(recorder)

    assert store.list_users() == []
    assert store.get_user_day_counts("") == {}


def test_label_uses_stored_name_when_request_has_none(recorder):
    recorder.record_star("U1", "Al", "2025-01-06")

    assert recorder.record_star("U1", "", "2025-01-06").display_label == "Al"
    assert recorder.confirm("U1", None, "2025-01-06").display_label == "Al"


@pytest.mark.parametrize("day", ["", "lol; drop", "9999-99-99", "2025-1-6"])
def test_confirm_rejects_malformed_day_without_writing(recorder, store, day):
    recorder.record_star("U1", "Al", "2025-01-06")

    with pytest.raises(InvalidDayKey):
        recorder.confirm("U1", "Al", day)

    assert store.get_user_day_counts("U1") == {"2025-01-06": 1}


@pytest.mark.parametrize("day", ["", "not-a-day"])
def test_cancel_rejects_malformed_day(recorder, day):
    with pytest.raises(InvalidDayKey):
        recorder.cancel("U1", day)


def test_invalid_day_from_unknown_user_registers_nothing(recorder, store):
    with pytest.raises(InvalidDayKey):
        recorder.confirm("U9", "ghost", "")

    assert store.list_users() == []
