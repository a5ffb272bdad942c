"""
Date normalization module for trip dates.

Normalizes accepted date shapes to the canonical YYYY-MM-DD string.
"""

import logging
import re
from datetime import date, datetime
from typing import List, Optional

import ciso8601
import dateparser

from tripdates.config import Config
from tripdates.normalization.date_parser import (
    check_date_parts,
    infer_future_year,
    parse_trip_date,
    parse_trip_date_with_reason,
)

logger = logging.getLogger(__name__)

# Inputs starting like an ISO date are parsed by ciso8601 only
ISO_PREFIX_PATTERN = re.compile(r"\d{4}-?\d{2}", re.ASCII)


def normalize_trip_date(text: str, today: Optional[date] = None) -> Optional[str]:
    """
    Normalize a trip date to YYYY-MM-DD.

    Accepts "YYYY-MM-DD", "DD/MM/YYYY", "DD-MM-YYYY", "DD/MM" and "DD-MM".
    User-provided years are kept as they are. Inputs without a year get the
    year of the next occurrence relative to today.

    Returns:
        Canonical date string, or None if the input cannot be used
    """
    if not isinstance(text, str):
        return None

    triple = parse_trip_date(text, today)
    if triple is None:
        return None
    return triple.isoformat()


def normalize_future_trip_date(text: str, today: Optional[date] = None) -> Optional[str]:
    """
    Normalize a trip date that must not lie in the past.

    Without a reference date this is normalize_trip_date: deciding what
    "now" is belongs to the caller. With one, a date before it is moved to
    the next occurrence of the same day and month.
    """
    if today is None:
        return normalize_trip_date(text)

    if not isinstance(text, str):
        return None

    triple = parse_trip_date(text, today)
    if triple is None:
        return None

    if (triple.year, triple.month, triple.day) >= (today.year, today.month, today.day):
        return triple.isoformat()

    year = infer_future_year(triple.month, triple.day, today)
    if check_date_parts(year, triple.month, triple.day):
        return None

    logger.debug(f"Moved past trip date {triple.isoformat()} to {year}")
    return f"{year:04d}-{triple.month:02d}-{triple.day:02d}"


class TripDateNormalizer:
    """Normalizes strict trip dates, with a free-text fallback for chat input"""

    def __init__(
        self,
        enabled: bool = True,
        allow_free_text: bool = True,
        languages: Optional[List[str]] = None,
        today: Optional[date] = None
    ):
        """
        Initialize trip date normalizer.

        Args:
            enabled: When False every input normalizes to None
            allow_free_text: Try ciso8601 and dateparser when the strict shapes fail
            languages: dateparser languages, defaults to Config.DATEPARSER_LANGUAGES
            today: Reference date for year inference, defaults to the local date
        """
        self.enabled = enabled
        self.allow_free_text = allow_free_text
        self.languages = languages or Config.DATEPARSER_LANGUAGES
        self.today = today

    def normalize_date(self, date_str: str) -> Optional[str]:
        """
        Normalize date to YYYY-MM-DD.

        Only inputs in none of the strict shapes reach the free-text fallback.
        A strict-shaped date that fails the calendar check stays None.
        """
        if not self.enabled or not isinstance(date_str, str):
            return None

        triple, issue = parse_trip_date_with_reason(date_str, self.today)
        if triple is not None:
            return triple.isoformat()

        if issue != "unrecognized_format" or not self.allow_free_text:
            return None

        return self._normalize_free_text(date_str.strip())

    def _normalize_free_text(self, date_str: str) -> Optional[str]:
        """
        Fallback for ISO date-times and written-out dates.

        ISO-looking input is left to ciso8601 alone and must carry a full
        year-month-day date. Everything else goes to dateparser, which must
        find a day, a month and a year.

        Returns:
            Canonical date string if the parsed date passes the year policy
        """
        if not date_str:
            return None

        if ISO_PREFIX_PATTERN.match(date_str):
            # ISO date-times ("2026-01-20T10:30:00+01:00", "20260120")
            date_part = re.split(r"[T ]", date_str, maxsplit=1)[0]
            if len(date_part) not in (8, 10):
                logger.debug(f"ISO date without a day component: '{date_str}'")
                return None
            try:
                parsed = ciso8601.parse_datetime(date_str).date()
            except ValueError:
                logger.debug(f"Invalid ISO date-time: '{date_str}'")
                return None
        else:
            # Flexible fallback ("15 giugno 2026", "June 15th, 2026")
            reference = self.today or date.today()
            dt = dateparser.parse(
                date_str,
                languages=self.languages,
                settings={
                    "DATE_ORDER": "DMY",
                    "PREFER_DATES_FROM": "future",
                    "RELATIVE_BASE": datetime(reference.year, reference.month, reference.day),
                    "REQUIRE_PARTS": ["day", "month", "year"],
                }
            )
            if not dt:
                logger.debug(f"Free-text date not recognized: '{date_str}'")
                return None
            parsed = dt.date()

        issue = check_date_parts(parsed.year, parsed.month, parsed.day)
        if issue:
            logger.debug(f"Free-text date '{date_str}' rejected: {issue}")
            return None

        return parsed.isoformat()
