"""Date helpers shared by the summary and status-note workflows.

None of these functions raise on bad input: parsing failures come back as
``None``, ``False`` or the ``"Invalid Date"`` sentinel.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Any, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

INVALID_DATE = "Invalid Date"

# Fixed English abbreviations so output does not depend on the process locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MONTH_LOOKUP = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

MENTIONED_DATE_RE = re.compile(
    r"\b(?P<month>" + "|".join(sorted(_MONTH_LOOKUP, key=len, reverse=True)) + r")\.?"
    r"\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?\b"
    r"(?:,?\s+(?P<year>\d{4})\b)?",
    re.IGNORECASE,
)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an Airtable date/datetime cell into an aware UTC datetime.

    Args:
        value: ``datetime``, ``date``, or a string such as
            ``"2024-01-17"`` or ``"2024-01-17T10:00:00.000Z"``.

    Returns:
        The parsed datetime, or None when the value is empty or unparseable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError) as exc:
            logger.debug("Unparseable date %r: %s", value, exc)
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: Any) -> str:
    """Format as ``"Jan 17"``; unparseable input yields ``"Invalid Date"``."""
    parsed = parse_date(value)
    if parsed is None:
        logger.warning("Date formatting error: %r is not a valid date", value)
        return INVALID_DATE
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.day}"


def is_within_last_days(value: Any, days: int, reference: Any = None) -> bool:
    parsed = parse_date(value)
    if parsed is None:
        return False
    reference_dt = parse_date(reference) if reference is not None else datetime.now(timezone.utc)
    if reference_dt is None:
        return False
    return parsed >= reference_dt - timedelta(days=days)


def extract_future_date(text: Optional[str], reference: Any) -> Optional[date]:
    """
    Find the first calendar date mentioned in ``text`` that falls after ``reference``.

    Matches month names (full or abbreviated) followed by a day and an
    optional year, e.g. "Mar 3", "March 3rd", "Mar. 3, 2025". A missing year
    is taken from the reference date. Impossible dates (Feb 30) are skipped.

    Returns:
        The first qualifying date, or None.
    """
    if not text:
        return None
    reference_dt = parse_date(reference)
    if reference_dt is None:
        return None
    reference_day = reference_dt.date()

    for match in MENTIONED_DATE_RE.finditer(text):
        month = _MONTH_LOOKUP[match.group("month").lower()]
        year = int(match.group("year")) if match.group("year") else reference_day.year
        try:
            candidate = date(year, month, int(match.group("day")))
        except ValueError:
            continue
        if candidate > reference_day:
            return candidate
    return None


_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def local_day(value: Any, tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Calendar day of a date/datetime cell as seen in ``tz`` (UTC by default).

    Date-only values (``"2024-01-17"`` or a ``date``) are returned as written;
    only timestamps are shifted into ``tz``.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and _DATE_ONLY_RE.match(value.strip()):
        return date.fromisoformat(value.strip())
    parsed = parse_date(value)
    if parsed is None:
        return None
    return parsed.astimezone(tz or timezone.utc).date()
