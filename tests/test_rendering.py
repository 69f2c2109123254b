from workout_wins.domain.aggregation import LeaderboardEntry, MatrixRow, WeeklyMatrix
from workout_wins.domain.rendering import (
    NO_LEADERBOARD_DATA,
    NO_TABLE_DATA,
    format_stars_this_week,
    render_leaderboard,
    render_star_cell,
    render_weekly_table,
)
from tests.conftest import WEEK_OF_WEDNESDAY


def matrix_of(*rows):
    return WeeklyMatrix(
        day_keys=WEEK_OF_WEDNESDAY,
        rows=[MatrixRow(uid, label, counts, sum(counts)) for uid, label, counts in rows],
    )


def cells(line):
    return [cell.strip() for cell in line.split("|")[2:-1]]


def test_star_cell():
    assert render_star_cell(0) == ""
    assert render_star_cell(1) == "⭐"
    assert render_star_cell(2) == "⭐×2"
    assert render_star_cell(11) == "⭐×11"


def test_empty_table_sentinel():
    assert render_weekly_table(WeeklyMatrix(day_keys=WEEK_OF_WEDNESDAY)) == NO_TABLE_DATA


def test_table_row_cells():
    text = render_weekly_table(matrix_of(("U1", "Al", [0, 1, 2, 0, 0, 0, 0])))
    lines = text.split("\n")

    assert lines[0] == "*Weekly Workout Table*"
    assert lines[1] == "```"
    assert lines[-1] == "```"
    assert cells(lines[2]) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert lines[3].startswith("|------------|")
    assert lines[4].startswith("| Al         |")
    assert cells(lines[4]) == ["", "⭐", "⭐×2", "", "", "", ""]


def test_table_has_one_row_per_user():
    text = render_weekly_table(matrix_of(
        ("U1", "alice", [1, 0, 0, 0, 0, 0, 0]),
        ("U2", "bob", [0] * 7),
    ))
    rows = text.split("\n")[4:-1]

    assert [row.split("|")[1].strip() for row in rows] == ["alice", "bob"]


def test_long_names_are_truncated_and_columns_align():
    text = render_weekly_table(matrix_of(
        ("U1", "Bartholomew Fitzgerald-Smith", [1] * 7),
        ("U2", "Al", [0] * 7),
    ))
    lines = text.split("\n")

    assert "| Bartholomew Fitzgera |" in lines[4]
    assert "Bartholomew Fitzgerald" not in text
    assert lines[4].index("|", 1) == lines[5].index("|", 1) == lines[2].index("|", 1)


def test_leaderboard_format():
    text = render_leaderboard(
        [LeaderboardEntry("B", "bob", 5), LeaderboardEntry("A", "alice", 3)],
        "2025-W02",
    )

    assert text == (
        ":trophy: *Weekly Star Leaderboard (2025-W02)*\n"
        "1. bob – 5 :star:\n"
        "2. alice – 3 :star:"
    )


def test_empty_leaderboard_sentinel():
    assert render_leaderboard([], "2025-W02") == NO_LEADERBOARD_DATA


def test_stars_this_week():
    assert format_stars_this_week(4) == ":star: 4 stars this week."
