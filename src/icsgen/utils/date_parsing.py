"""Date expression parsing for the generator's start option."""

import re
from datetime import datetime, timedelta
from typing import Optional

import pytz
from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

from icsgen.config.constants import DAYS_OF_WEEK
from icsgen.exceptions.errors import DateExpressionError

# "+3 days", "-1 week", "2 months ago", "in 4 hours"
OFFSET_PATTERN = re.compile(
    r"^(?:in\s+)?([+-]?\d+)\s*(minute|hour|day|week|month|year)s?(\s+ago)?$",
    re.IGNORECASE
)

# "next week", "next month", "next year"
NEXT_PERIOD_PATTERN = re.compile(r"^next\s+(week|month|year)$", re.IGNORECASE)

# "friday", "next friday"
WEEKDAY_PATTERN = re.compile(
    r"^(next\s+)?(" + "|".join(DAYS_OF_WEEK) + r")$", re.IGNORECASE
)


def utc_now() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_relative_date(text: str, reference_date: Optional[datetime] = None) -> Optional[datetime]:
    """Parse a relative date term into an absolute date.

    Args:
        text: Text containing a relative date term.
        reference_date: Reference date for relative calculations (default: UTC now).

    Returns:
        Parsed datetime or None if not recognized.
    """
    text_lower = text.lower().strip()
    ref = reference_date or utc_now()

    if text_lower == "now":
        return ref

    if text_lower == "today":
        return _midnight(ref)

    if text_lower == "tomorrow":
        return _midnight(ref + timedelta(days=1))

    if text_lower == "yesterday":
        return _midnight(ref - timedelta(days=1))

    match = NEXT_PERIOD_PATTERN.match(text_lower)
    if match:
        unit = match.group(1)
        return _midnight(ref + relativedelta(**{f"{unit}s": 1}))

    match = OFFSET_PATTERN.match(text_lower)
    if match:
        amount = int(match.group(1))
        if match.group(3):
            amount = -amount
        return ref + relativedelta(**{f"{match.group(2)}s": amount})

    match = WEEKDAY_PATTERN.match(text_lower)
    if match:
        days_ahead = (DAYS_OF_WEEK[match.group(2)] - ref.weekday()) % 7
        # "next monday" on a Monday is a week away, "monday" is today
        if match.group(1) and days_ahead == 0:
            days_ahead = 7
        return _midnight(ref + timedelta(days=days_ahead))

    return None


def resolve_date_expression(text: str, reference_date: Optional[datetime] = None) -> datetime:
    """Turn a start expression into a naive datetime.

    Relative terms are tried first, then anything dateutil can parse.
    Timezone-aware results are converted to UTC and made naive.

    Args:
        text: Expression such as "today", "+3 days" or "2024-05-01 09:00".
        reference_date: Reference date for relative terms (default: UTC now).

    Returns:
        The resolved naive datetime.

    Raises:
        DateExpressionError: If the expression is not understood.
    """
    if not isinstance(text, str) or not text.strip():
        raise DateExpressionError(str(text))

    ref = reference_date or utc_now()
    parsed = parse_relative_date(text, ref)
    if parsed is None:
        try:
            parsed = dateutil_parser.parse(text, default=_midnight(ref))
        except (ValueError, OverflowError) as exc:
            raise DateExpressionError(text) from exc

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(pytz.utc).replace(tzinfo=None)
    return parsed
