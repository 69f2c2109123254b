"""
Command Router - Slash Commands and Button Actions
==================================================

Dispatches a parsed command or button action to the star engine and turns
the result into a BotResponse. This is the only place where engine errors
become user-facing text.

USAGE:
    router = CommandRouter(store, get_timezone("UTC"), commentary=None)
    result = router.handle_command(SlashCommand("U1", "alice", "star me", now))
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from ..domain.aggregation import WeeklyAggregator
from ..domain.calendar import iso_week_label, resolve_target_day
from ..domain.errors import (
    InvalidDayKey,
    MissingUser,
    StoreUnavailable,
    UpstreamCollaboratorError,
)
from ..domain.rendering import (
    format_stars_this_week,
    render_leaderboard,
    render_weekly_table,
)
from ..domain.star_store import StarStore
from ..domain.workflow import (
    CANCEL_ACTION,
    CONFIRM_ACTION,
    Announced,
    AwaitingConfirmation,
    Cancelled,
    Confirmed,
    StarOutcome,
    StarRecorder,
)
from ..infrastructure.llm import CommentaryService
from .commands import CommandKind, ParsedCommand, parse_command
from .responses import BotResponse, CommandResult, confirmation_blocks

logger = logging.getLogger(__name__)

# ── Message Templates ──────────────────────────────────────────────
MISSING_USER_TEXT = "Missing user_id."
STORE_FAILURE_TEXT = "Something went wrong saving your stars. Please try again later."
ANNOUNCE_TEMPLATE = ":star: {name} got a star for {day}"
REPEAT_PROMPT_TEMPLATE = (
    ":star: You already have a star for {day}. That tap was counted "
    "({count} for the day). Add another one?"
)
CONFIRMED_TEMPLATE = ":star: Extra star added! {name} now has {count} stars for {day}."
CANCELLED_TEMPLATE = "Okay, no extra star for {day}."
UNKNOWN_ACTION_TEXT = "Sorry, I don't recognise that button."
STALE_PROMPT_TEXT = "That prompt is no longer valid."
ANALYZE_NOT_CONFIGURED_TEXT = (
    ":robot_face: Weekly analysis is not configured. "
    "Ask an admin to set OPENROUTER_API_KEY."
)
ANALYZE_PENDING_TEXT = ":hourglass_flowing_sand: Crunching this week's numbers..."
ANALYZE_FAILED_TEMPLATE = ":warning: Weekly analysis failed: {error}"
ANALYZE_HEADER_TEMPLATE = ":robot_face: *Weekly Analysis ({week})*"

USAGE_TEMPLATE = """Usage:
• `{cmd} star me` – Add a star
• `{cmd} star me for mm/dd/yyyy` – Add a star for a specific day
• `{cmd} my stars` – View your weekly total
• `{cmd} weekly stars` – View the leaderboard
• `{cmd} weekly table` – View the weekly table (add `public` to share it)
• `{cmd} analyze` – Get an AI commentary on the week (add `public` to share it)"""


@dataclass(frozen=True)
class SlashCommand:
    """Inbound slash command."""
    user_id: str
    display_name: str
    raw_text: str
    now: datetime
    response_url: str = ""


@dataclass(frozen=True)
class Interaction:
    """Inbound button click on a confirmation prompt."""
    action_id: str
    user_id: str
    display_name: str
    day_key: str
    response_url: str = ""


class CommandRouter:
    """Routes commands to the workflow and aggregation engine."""

    def __init__(
        self,
        store: StarStore,
        tz: tzinfo,
        commentary: Optional[CommentaryService] = None,
        command_name: str = "/workout-wins",
    ):
        self._tz = tz
        self._commentary = commentary
        self._command_name = command_name
        self._recorder = StarRecorder(store)
        self._aggregator = WeeklyAggregator(store, tz)

        self._handlers = {
            CommandKind.STAR_ME: self._star_me,
            CommandKind.MY_STARS: self._my_stars,
            CommandKind.WEEKLY_STARS: self._weekly_stars,
            CommandKind.WEEKLY_TABLE: self._weekly_table,
            CommandKind.ANALYZE: self._analyze,
            CommandKind.HELP: self._usage,
        }

    # ── Entry points ───────────────────────────────────────────────

    def handle_command(self, command: SlashCommand) -> CommandResult:
        parsed = parse_command(command.raw_text)
        logger.info(f"Command '{parsed.kind.value}' from {command.user_id or '<unknown>'}")

        try:
            return self._handlers[parsed.kind](command, parsed)

        except MissingUser:
            return CommandResult(BotResponse.private(MISSING_USER_TEXT))
        except StoreUnavailable as e:
            logger.error(f"Store unavailable while handling '{parsed.kind.value}': {e}")
            return CommandResult(BotResponse.private(STORE_FAILURE_TEXT))

    def handle_interaction(self, interaction: Interaction) -> CommandResult:
        logger.info(f"Action '{interaction.action_id}' from {interaction.user_id or '<unknown>'} "
                    f"for {interaction.day_key}")

        try:
            if interaction.action_id == CONFIRM_ACTION:
                outcome = self._recorder.confirm(
                    interaction.user_id, interaction.display_name, interaction.day_key
                )
            elif interaction.action_id == CANCEL_ACTION:
                outcome = self._recorder.cancel(interaction.user_id, interaction.day_key)
            else:
                logger.warning(f"Unknown action id: {interaction.action_id}")
                return CommandResult(BotResponse.private(UNKNOWN_ACTION_TEXT))

            return CommandResult(self.outcome_response(outcome))

        except MissingUser:
            return CommandResult(BotResponse.private(MISSING_USER_TEXT))
        except InvalidDayKey:
            return CommandResult(BotResponse.private(STALE_PROMPT_TEXT, replace_original=True))
        except StoreUnavailable as e:
            logger.error(f"Store unavailable while handling action '{interaction.action_id}': {e}")
            return CommandResult(BotResponse.private(STORE_FAILURE_TEXT, replace_original=True))

    def outcome_response(self, outcome: StarOutcome) -> BotResponse:
        """Message for each workflow outcome. Unknown outcome types are a programming error."""
        if isinstance(outcome, Announced):
            return BotResponse.public(
                ANNOUNCE_TEMPLATE.format(name=outcome.display_label, day=outcome.day_key)
            )

        if isinstance(outcome, AwaitingConfirmation):
            prompt = REPEAT_PROMPT_TEMPLATE.format(day=outcome.day_key, count=outcome.count)
            return BotResponse.private(prompt, blocks=confirmation_blocks(prompt, outcome))

        if isinstance(outcome, Confirmed):
            return BotResponse.private(
                CONFIRMED_TEMPLATE.format(
                    name=outcome.display_label, count=outcome.count, day=outcome.day_key
                ),
                replace_original=True,
            )

        if isinstance(outcome, Cancelled):
            return BotResponse.private(
                CANCELLED_TEMPLATE.format(day=outcome.day_key), replace_original=True
            )

        raise TypeError(f"Unhandled star outcome: {type(outcome).__name__}")

    # ── Command handlers ───────────────────────────────────────────

    def _star_me(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        day = resolve_target_day(parsed.date_token, command.now, self._tz)
        outcome = self._recorder.record_star(command.user_id, command.display_name, day)
        response = self.outcome_response(outcome)

        if isinstance(outcome, Announced):
            # Acknowledge silently; the public announcement follows as its own message
            return CommandResult(None, deferred=lambda: response)
        return CommandResult(response)

    def _my_stars(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        if not command.user_id:
            raise MissingUser(MISSING_USER_TEXT)
        total = self._aggregator.weekly_total(command.user_id, command.now)
        return CommandResult(BotResponse.private(format_stars_this_week(total)))

    def _weekly_stars(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        entries = self._aggregator.weekly_leaderboard(command.now)
        text = render_leaderboard(entries, iso_week_label(command.now))
        return CommandResult(BotResponse.public(text))

    def _weekly_table(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        text = render_weekly_table(self._aggregator.weekly_matrix(command.now))
        if parsed.public:
            return CommandResult(BotResponse.public(text))
        return CommandResult(BotResponse.private(text))

    def _analyze(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        if self._commentary is None or not self._commentary.is_configured:
            return CommandResult(BotResponse.private(ANALYZE_NOT_CONFIGURED_TEXT))

        matrix = self._aggregator.weekly_matrix(command.now)
        table = render_weekly_table(matrix)
        header = ANALYZE_HEADER_TEMPLATE.format(week=iso_week_label(command.now))
        commentary = self._commentary

        def followup() -> BotResponse:
            try:
                text = commentary.comment(table, matrix.to_dict())
            except UpstreamCollaboratorError as e:
                return BotResponse.private(ANALYZE_FAILED_TEMPLATE.format(error=e))

            message = f"{header}\n{text}"
            if parsed.public:
                return BotResponse.public(message)
            return BotResponse.private(message)

        return CommandResult(BotResponse.private(ANALYZE_PENDING_TEXT), deferred=followup)

    def _usage(self, command: SlashCommand, parsed: ParsedCommand) -> CommandResult:
        return CommandResult(BotResponse.private(USAGE_TEMPLATE.format(cmd=self._command_name)))
