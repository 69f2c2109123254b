"""
Renderer - Weekly Table and Leaderboard Text
============================================

Pure functions from aggregated data to Slack mrkdwn text.
"""

from typing import List, Sequence

from .aggregation import LeaderboardEntry, WeeklyMatrix

STAR_GLYPH = "⭐"
STAR_EMOJI = ":star:"
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

NAME_MAX_LENGTH = 20
NAME_MIN_WIDTH = 10
CELL_WIDTH = 3

NO_TABLE_DATA = "No stars recorded yet this week."
NO_LEADERBOARD_DATA = "No stars this week yet!"


def render_star_cell(count: int) -> str:
    """Blank for 0, one star for 1, star×N above that."""
    if count <= 0:
        return ""
    if count == 1:
        return STAR_GLYPH
    return f"{STAR_GLYPH}×{count}"


def render_weekly_table(matrix: WeeklyMatrix) -> str:
    """Monospaced Mon-Sun table with one row per known user."""
    if not matrix.rows:
        return NO_TABLE_DATA

    names = [row.display_label[:NAME_MAX_LENGTH] for row in matrix.rows]
    width = max([NAME_MIN_WIDTH] + [len(name) for name in names])

    lines = ["*Weekly Workout Table*", "```"]
    lines.append(_table_line("Name".ljust(width), DAY_NAMES))
    lines.append("|" + "-" * (width + 2) + ("|" + "-" * (CELL_WIDTH + 2)) * len(DAY_NAMES) + "|")

    for name, row in zip(names, matrix.rows):
        cells = [render_star_cell(count) for count in row.counts]
        lines.append(_table_line(name.ljust(width), cells))

    lines.append("```")
    return "\n".join(lines)


def _table_line(first: str, cells: Sequence[str]) -> str:
    padded = [cell.ljust(CELL_WIDTH) for cell in cells]
    return f"| {first} | " + " | ".join(padded) + " |"


def render_leaderboard(entries: List[LeaderboardEntry], week_label: str) -> str:
    """Numbered list, most stars first. Entries must already be sorted."""
    if not entries:
        return NO_LEADERBOARD_DATA

    lines = [f":trophy: *Weekly Star Leaderboard ({week_label})*"]
    for rank, entry in enumerate(entries, start=1):
        lines.append(f"{rank}. {entry.display_label} – {entry.total} {STAR_EMOJI}")
    return "\n".join(lines)


def format_stars_this_week(total: int) -> str:
    return f"{STAR_EMOJI} {total} stars this week."
