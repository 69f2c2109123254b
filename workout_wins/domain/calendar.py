"""
Calendar - Day Keys, Display Weeks and ISO Week Labels
======================================================

All star counts are bucketed by a DayKey: the calendar date ("YYYY-MM-DD")
of an instant in one configured timezone. Weeks run Monday through Sunday in
that same timezone.

ARCHITECTURAL DECISION:
- Conversions go through pytz zones, never fixed UTC offsets, so day
  boundaries stay correct across daylight-saving transitions
- The ISO week label is computed separately from the UTC calendar date and
  may disagree with the local Monday-start week near year boundaries
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Union

import pytz

logger = logging.getLogger(__name__)

Reference = Union[datetime, date]

DAY_KEY_FORMAT = "%Y-%m-%d"
DAYS_IN_WEEK = 7

# Tried in order; the first format that parses wins
DATE_TOKEN_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
    "%b %d %Y",
    "%B %d %Y",
)

# Parsed with the current year appended
NO_YEAR_FORMATS = (
    "%m/%d",
    "%m-%d",
    "%b %d",
    "%B %d",
)


def get_timezone(name: str) -> tzinfo:
    """Resolve an IANA timezone name. Raises ValueError for unknown zones."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def local_date(reference: Reference, tz: tzinfo) -> date:
    """
    Calendar date of the reference in the given timezone.

    A plain date is already a calendar day and is returned as-is.
    Naive datetimes are interpreted as UTC.
    """
    if not isinstance(reference, datetime):
        return reference
    if reference.tzinfo is None:
        reference = pytz.utc.localize(reference)
    return reference.astimezone(tz).date()


def day_key(instant: Reference, tz: tzinfo) -> str:
    """Format the instant's local calendar date as YYYY-MM-DD."""
    return local_date(instant, tz).strftime(DAY_KEY_FORMAT)


def is_day_key(token: str) -> bool:
    """True only for a real calendar date written exactly as YYYY-MM-DD."""
    try:
        return datetime.strptime(token, DAY_KEY_FORMAT).strftime(DAY_KEY_FORMAT) == token
    except (TypeError, ValueError):
        return False


def week_day_keys(reference: Reference, tz: tzinfo) -> List[str]:
    """DayKeys of the Monday-to-Sunday week containing the reference."""
    today = local_date(reference, tz)
    monday = today - timedelta(days=today.weekday())
    return [
        (monday + timedelta(days=offset)).strftime(DAY_KEY_FORMAT)
        for offset in range(DAYS_IN_WEEK)
    ]


def iso_week_label(reference: Reference) -> str:
    """
    ISO-8601 week label, e.g. "2025-W01".

    Uses the UTC calendar date of the reference. isocalendar() shifts to the
    Thursday of the week, so the ISO year can differ from the calendar year
    in the last days of December and the first days of January.
    """
    iso_year, iso_week, _ = local_date(reference, pytz.utc).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def parse_date_token(token: str, today: Optional[date] = None) -> Optional[date]:
    """
    Leniently parse a user supplied date.

    Accepts "today", "yesterday", ISO dates, US style month/day/year, month
    names ("aug 18 2025") and month/day without a year (current year).
    Returns None when nothing matches.
    """
    if not token:
        return None

    today = today or date.today()
    cleaned = " ".join(token.lower().replace(",", " ").split()).rstrip(".")

    if cleaned == "today":
        return today
    if cleaned == "yesterday":
        return today - timedelta(days=1)

    for fmt in DATE_TOKEN_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    # Appending the year keeps Feb 29 valid in leap years
    for fmt in NO_YEAR_FORMATS:
        try:
            return datetime.strptime(f"{cleaned} {today.year}", f"{fmt} %Y").date()
        except ValueError:
            continue

    return None


def resolve_target_day(token: Optional[str], now: datetime, tz: tzinfo) -> str:
    """DayKey for the requested date, or today's DayKey if absent or unparseable."""
    today = local_date(now, tz)
    parsed = parse_date_token(token, today) if token else None

    if parsed is None:
        if token:
            logger.debug(f"Could not parse date '{token}', falling back to {today}")
        return today.strftime(DAY_KEY_FORMAT)

    return parsed.strftime(DAY_KEY_FORMAT)
