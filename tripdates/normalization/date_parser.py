"""
Trip date parsing and calendar validation.

Accepts the three shapes users type into the planning forms:
- ISO: 2026-01-20
- European long: 20/01/2026 or 20-01-2026
- European short: 20/01 or 20-01 (year inferred as the next occurrence)

Everything works on plain integers, no datetime arithmetic, so results never
depend on the server timezone.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from tripdates.config import Config

logger = logging.getLogger(__name__)

ISO_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
EU_LONG_PATTERN = re.compile(r"(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})", re.ASCII)
EU_SHORT_PATTERN = re.compile(r"(\d{1,2})[/\-](\d{1,2})", re.ASCII)

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


@dataclass(frozen=True)
class DateTriple:
    """Validated calendar date as plain integers"""
    year: int
    month: int
    day: int
    year_inferred: bool = False  # True when the input had no year (DD/MM)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    """Number of days in a month, February resolved by the Gregorian rule"""
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def check_date_parts(year: int, month: int, day: int) -> Optional[str]:
    """
    Validate date parts without creating date objects.

    Returns:
        None if the parts form a valid trip date, otherwise an issue code
        ("invalid_month", "invalid_day" or "year_out_of_range")
    """
    if month < 1 or month > 12:
        return "invalid_month"

    if day < 1 or day > days_in_month(month, year):
        return "invalid_day"

    if year < Config.MIN_TRIP_YEAR or year > Config.MAX_TRIP_YEAR:
        return "year_out_of_range"

    return None


def is_valid_date_parts(year: int, month: int, day: int) -> bool:
    return check_date_parts(year, month, day) is None


def infer_future_year(month: int, day: int, today: Optional[date] = None) -> int:
    """
    Pick the year of the next occurrence of month/day.

    A month/day still ahead of (or equal to) today stays in the current year,
    one already past moves to the next year. 29/02 moves on to the next leap
    year. Month/day values that are not a calendar date at all keep the
    plain rule and are rejected by check_date_parts afterwards.

    Args:
        month: Month number (1-12)
        day: Day of month
        today: Reference date, defaults to the local date

    Returns:
        Inferred year
    """
    if today is None:
        today = date.today()

    year = today.year
    if (month, day) < (today.month, today.day):
        year += 1

    if month == 2 and day == 29:
        while not is_leap_year(year):
            year += 1

    return year


def parse_trip_date_with_reason(
    text: str,
    today: Optional[date] = None
) -> Tuple[Optional[DateTriple], Optional[str]]:
    """
    Parse a trip date and report why it was rejected.

    Shapes are tried in order: ISO, European long, European short.

    Args:
        text: Raw user input
        today: Reference date for year inference on the short shape

    Returns:
        Tuple of (triple, issue)
        - (DateTriple, None) on success
        - (None, "issue_code") on failure

    Raises:
        TypeError: if text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Trip date must be a string, got {type(text).__name__}")

    trimmed = text.strip()
    if not trimmed:
        return (None, "missing_date")

    year_inferred = False

    match = ISO_PATTERN.fullmatch(trimmed)
    if match:
        year, month, day = (int(part) for part in match.groups())
    else:
        match = EU_LONG_PATTERN.fullmatch(trimmed)
        if match:
            day, month, year = (int(part) for part in match.groups())
        else:
            match = EU_SHORT_PATTERN.fullmatch(trimmed)
            if not match:
                return (None, "unrecognized_format")
            day, month = (int(part) for part in match.groups())
            year = infer_future_year(month, day, today)
            year_inferred = True

    issue = check_date_parts(year, month, day)
    if issue:
        logger.debug(f"Rejected trip date '{trimmed}': {issue}")
        return (None, issue)

    return (DateTriple(year, month, day, year_inferred), None)


def parse_trip_date(text: str, today: Optional[date] = None) -> Optional[DateTriple]:
    """
    Parse a trip date into a validated DateTriple.

    Returns:
        DateTriple, or None for unparseable or invalid input
    """
    triple, _ = parse_trip_date_with_reason(text, today)
    return triple


def is_canonical_date(text: str) -> bool:
    """Check that text is a valid YYYY-MM-DD trip date"""
    if not isinstance(text, str):
        return False

    match = ISO_PATTERN.fullmatch(text)
    if not match:
        return False

    year, month, day = (int(part) for part in match.groups())
    return is_valid_date_parts(year, month, day)
