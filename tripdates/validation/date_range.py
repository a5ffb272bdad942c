"""
Trip length and date range checks.

Both functions accept any shape the parser accepts. Bad input never raises:
trip length degrades to 0 and range validity to False, so display code can
call them on whatever the forms sent.
"""

from datetime import date
from typing import Optional

from tripdates.normalization.date_parser import parse_trip_date
from tripdates.normalization.day_count import to_day_count


def calculate_trip_days(start_date: str, end_date: str, today: Optional[date] = None) -> int:
    """
    Days between two trip dates.

    Returns:
        end - start in days, 0 if either date is invalid or the range is inverted
    """
    if not isinstance(start_date, str) or not isinstance(end_date, str):
        return 0

    start = parse_trip_date(start_date, today)
    end = parse_trip_date(end_date, today)
    if not start or not end:
        return 0

    return max(0, to_day_count(end) - to_day_count(start))


def is_valid_date_range(start_date: str, end_date: str, today: Optional[date] = None) -> bool:
    """Check that the return date is strictly after the departure date"""
    if not isinstance(start_date, str) or not isinstance(end_date, str):
        return False

    start = parse_trip_date(start_date, today)
    end = parse_trip_date(end_date, today)
    if not start or not end:
        return False

    return to_day_count(end) > to_day_count(start)
