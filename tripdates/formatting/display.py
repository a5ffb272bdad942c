"""
Display formatting for trip and flight dates.

These helpers sit on the rendering path, so they never raise: input they
cannot read is passed through unchanged or rendered as an empty string.
Date-times are read as wall-clock values, never converted between timezones.
"""

import logging
from typing import Optional, Tuple

import ciso8601

from tripdates.config import Config
from tripdates.normalization.date_parser import ISO_PATTERN

logger = logging.getLogger(__name__)


def format_date_it(date_str: str) -> str:
    """
    Format a canonical date for Italian display.

    Input: "2026-01-20" -> "20/01/2026". Anything else is returned as is.
    """
    if not isinstance(date_str, str):
        return ""

    match = ISO_PATTERN.fullmatch(date_str)
    if not match:
        return date_str

    year, month, day = match.groups()
    return f"{day}/{month}/{year}"


def extract_date_only(iso_string: str) -> str:
    """
    Date portion of an ISO date-time.

    Input: "2026-01-20T10:30:00" -> "2026-01-20"
    """
    if not iso_string or not isinstance(iso_string, str):
        return ""
    return iso_string[:10]


def format_flight_date_time(iso_string: str) -> str:
    """
    Format an ISO date-time as "DD/MM/YYYY HH:MM" in its own local time.

    Input: "2026-01-20T10:30:00+01:00" -> "20/01/2026 10:30"
    A date without a time renders as "DD/MM/YYYY".
    """
    if not iso_string or not isinstance(iso_string, str):
        return ""

    value = iso_string.strip()
    try:
        parsed = ciso8601.parse_datetime(value)
    except ValueError:
        # Positional fallback for strings ciso8601 rejects
        date_part = value[:10]
        time_part = value[11:16]
        return f"{date_part[8:10]}/{date_part[5:7]}/{date_part[0:4]} {time_part}".strip()

    if len(value) <= 10:
        return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d}"
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d} {parsed.hour:02d}:{parsed.minute:02d}"


def _split_date(date_str: str) -> Optional[Tuple[int, int, int]]:
    """Year, month, day of a YYYY-MM-DD prefix, or None"""
    match = ISO_PATTERN.fullmatch(extract_date_only(date_str))
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12 or day < 1:
        return None
    return (year, month, day)


def format_date_range(start_date: str, end_date: str, locale: Optional[str] = None) -> str:
    """
    Format a trip date range as a phrase.

    - same month: "10-15 Gennaio 2026"
    - different months: "28 Gennaio - 5 Febbraio 2026"
    - different years: "28 Dicembre 2026 - 3 Gennaio 2027"

    Args:
        start_date: Departure date (YYYY-MM-DD, time suffix allowed)
        end_date: Return date (YYYY-MM-DD, time suffix allowed)
        locale: Month-name locale, defaults to Config.DEFAULT_LOCALE

    Returns:
        Formatted range, or "" if either date is missing or unreadable
    """
    if not start_date or not end_date:
        return ""

    start = _split_date(start_date)
    end = _split_date(end_date)
    if start is None or end is None:
        return ""

    locale = locale or Config.DEFAULT_LOCALE
    months = Config.month_names(locale)
    if months is None:
        logger.warning(f"Unknown locale '{locale}', using '{Config.DEFAULT_LOCALE}'")
        months = Config.MONTH_NAMES[Config.DEFAULT_LOCALE]

    start_year, start_month, start_day = start
    end_year, end_month, end_day = end

    if start_year != end_year:
        return (f"{start_day} {months[start_month - 1]} {start_year} - "
                f"{end_day} {months[end_month - 1]} {end_year}")

    if start_month == end_month:
        return f"{start_day}-{end_day} {months[start_month - 1]} {start_year}"

    return f"{start_day} {months[start_month - 1]} - {end_day} {months[end_month - 1]} {start_year}"


def format_date_range_it(start_date: str, end_date: str) -> str:
    return format_date_range(start_date, end_date, locale="it")
