"""
Command Parsing - Slash Command Vocabulary
==========================================

    star me [for <date>]
    my stars
    weekly stars
    weekly table [public]
    analyze [public]

Matching is case-insensitive and ignores extra whitespace. Anything else
is answered with the usage message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(Enum):
    STAR_ME = "star me"
    MY_STARS = "my stars"
    WEEKLY_STARS = "weekly stars"
    WEEKLY_TABLE = "weekly table"
    ANALYZE = "analyze"
    HELP = "help"


@dataclass(frozen=True)
class ParsedCommand:
    kind: CommandKind
    date_token: Optional[str] = None
    public: bool = False


def normalize_text(raw_text: Optional[str]) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join((raw_text or "").lower().split())


def parse_command(raw_text: Optional[str]) -> ParsedCommand:
    """
    Parse the text after the slash command.

    Examples:
        "star me"                -> STAR_ME, no date
        "Star me for 8/18/2025"  -> STAR_ME, date_token "8/18/2025"
        "weekly table public"    -> WEEKLY_TABLE, public
    """
    parts = normalize_text(raw_text).split()
    head = " ".join(parts[:2])
    rest = parts[2:]

    if head == CommandKind.STAR_ME.value:
        if rest and rest[0] == "for":
            rest = rest[1:]
        return ParsedCommand(CommandKind.STAR_ME, date_token=" ".join(rest) or None)

    if head == CommandKind.MY_STARS.value:
        return ParsedCommand(CommandKind.MY_STARS)

    if head == CommandKind.WEEKLY_STARS.value:
        return ParsedCommand(CommandKind.WEEKLY_STARS)

    if head == CommandKind.WEEKLY_TABLE.value:
        return ParsedCommand(CommandKind.WEEKLY_TABLE, public="public" in rest)

    if parts and parts[0] == CommandKind.ANALYZE.value:
        return ParsedCommand(CommandKind.ANALYZE, public="public" in parts[1:])

    return ParsedCommand(CommandKind.HELP)
