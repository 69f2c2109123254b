import pytest

from workout_wins.domain.aggregation import LeaderboardEntry, WeeklyAggregator
from tests.conftest import WEDNESDAY, WEEK_OF_WEDNESDAY


def add_stars(store, user_id, name, day_counts):
    store.register_user(user_id, name)
    for day, count in day_counts.items():
        for _ in range(count):
            store.increment_star(user_id, day)


@pytest.fixture
def aggregator(store, utc):
    return WeeklyAggregator(store, utc)


def test_weekly_total_sums_only_this_week(store, aggregator):
    add_stars(store, "U1", "alice", {
        "2025-01-05": 4,   # previous Sunday
        "2025-01-06": 1,
        "2025-01-08": 2,
        "2025-01-12": 1,
        "2025-01-13": 3,   # next Monday
    })

    assert aggregator.weekly_total("U1", WEDNESDAY) == 4


def test_weekly_total_unknown_user_is_zero(aggregator):
    assert aggregator.weekly_total("nobody", WEDNESDAY) == 0


def test_weekly_total_is_stable_without_writes(store, aggregator):
    add_stars(store, "U1", "alice", {"2025-01-07": 2})

    assert aggregator.weekly_total("U1", WEDNESDAY) == aggregator.weekly_total("U1", WEDNESDAY)


def test_leaderboard_sorted_and_excludes_zero(store, aggregator):
    add_stars(store, "A", "A", {"2025-01-06": 1, "2025-01-07": 2})
    add_stars(store, "B", "B", {"2025-01-06": 2, "2025-01-08": 2, "2025-01-09": 1})
    add_stars(store, "C", "C", {"2024-12-01": 7})

    board = aggregator.weekly_leaderboard(WEDNESDAY)

    assert [(e.display_label, e.total) for e in board] == [("B", 5), ("A", 3)]


def test_leaderboard_ties_keep_registration_order(store, aggregator):
    add_stars(store, "U2", "zoe", {"2025-01-06": 2})
    add_stars(store, "U1", "adam", {"2025-01-07": 2})
    add_stars(store, "U3", "max", {"2025-01-08": 3})

    board = aggregator.weekly_leaderboard(WEDNESDAY)

    assert [e.user_id for e in board] == ["U3", "U2", "U1"]


def test_leaderboard_label_falls_back_to_user_id(store, aggregator):
    add_stars(store, "U9", None, {"2025-01-06": 1})

    assert aggregator.weekly_leaderboard(WEDNESDAY) == [LeaderboardEntry("U9", "U9", 1)]


def test_leaderboard_empty(aggregator):
    assert aggregator.weekly_leaderboard(WEDNESDAY) == []


def test_matrix_includes_users_with_empty_weeks(store, aggregator):
    add_stars(store, "U1", "alice", {"2025-01-07": 1, "2025-01-08": 2})
    store.register_user("U2", "bob")

    matrix = aggregator.weekly_matrix(WEDNESDAY)

    assert matrix.day_keys == WEEK_OF_WEDNESDAY
    assert [row.user_id for row in matrix.rows] == ["U1", "U2"]
    assert matrix.rows[0].counts == [0, 1, 2, 0, 0, 0, 0]
    assert matrix.rows[0].total == 3
    assert matrix.rows[1].counts == [0] * 7
    assert matrix.rows[1].display_label == "bob"


def test_matrix_to_dict(store, aggregator):
    add_stars(store, "U1", "alice", {"2025-01-06": 1})

    data = aggregator.weekly_matrix(WEDNESDAY).to_dict()

    assert data["day_keys"] == WEEK_OF_WEDNESDAY
    assert data["rows"][0] == {
        "user_id": "U1",
        "display_label": "alice",
        "counts": [1, 0, 0, 0, 0, 0, 0],
        "total": 1,
    }
