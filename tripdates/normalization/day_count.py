"""
Day counts for comparing and subtracting trip dates.

A day count is only meaningful as a difference between two values produced
here. Its absolute value is an implementation detail.
"""

from tripdates.normalization.date_parser import DateTriple, is_leap_year

# Days before the first of each month in a common year
CUMULATIVE_MONTH_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def day_count_from_parts(year: int, month: int, day: int) -> int:
    """
    Convert date parts to a monotonic day number.

    Counts every day of the previous years (leap days included), the days of
    the previous months of this year and the day of the month.
    """
    previous = year - 1
    leap_days = previous // 4 - previous // 100 + previous // 400

    days = previous * 365 + leap_days
    days += CUMULATIVE_MONTH_DAYS[month - 1]
    if month > 2 and is_leap_year(year):
        days += 1

    return days + day


def to_day_count(triple: DateTriple) -> int:
    return day_count_from_parts(triple.year, triple.month, triple.day)
