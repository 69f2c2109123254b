import pytest

from workout_wins.application.commands import CommandKind, ParsedCommand, parse_command


@pytest.mark.parametrize("text, expected", [
    ("star me", ParsedCommand(CommandKind.STAR_ME)),
    ("  STAR   Me  ", ParsedCommand(CommandKind.STAR_ME)),
    ("star me 8/18/2025", ParsedCommand(CommandKind.STAR_ME, date_token="8/18/2025")),
    ("star me for 8/18/2025", ParsedCommand(CommandKind.STAR_ME, date_token="8/18/2025")),
    ("star me for Aug 18", ParsedCommand(CommandKind.STAR_ME, date_token="aug 18")),
    ("star me for", ParsedCommand(CommandKind.STAR_ME)),
    ("my stars", ParsedCommand(CommandKind.MY_STARS)),
    ("My  Stars", ParsedCommand(CommandKind.MY_STARS)),
    ("weekly stars", ParsedCommand(CommandKind.WEEKLY_STARS)),
    ("weekly table", ParsedCommand(CommandKind.WEEKLY_TABLE)),
    ("weekly table public", ParsedCommand(CommandKind.WEEKLY_TABLE, public=True)),
    ("analyze", ParsedCommand(CommandKind.ANALYZE)),
    ("Analyze PUBLIC", ParsedCommand(CommandKind.ANALYZE, public=True)),
    ("", ParsedCommand(CommandKind.HELP)),
    (None, ParsedCommand(CommandKind.HELP)),
    ("star", ParsedCommand(CommandKind.HELP)),
    ("help", ParsedCommand(CommandKind.HELP)),
    ("publish weekly table", ParsedCommand(CommandKind.HELP)),
])
def test_parse_command(text, expected):
    assert parse_command(text) == expected
