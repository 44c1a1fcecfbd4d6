"""Calendar arithmetic for recurring due dates.

Due-date rules are written against these helpers instead of relying on
date rollover: a day that does not exist in a month is clamped to that
month's last day (Feb 30 becomes Feb 28/29), never carried into the next
month.
"""

import calendar
from datetime import date


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return calendar.monthrange(year, month)[1]


def day_exists_in_month(year: int, month: int, day: int) -> bool:
    """True when ``day`` is a valid day-of-month for ``year``/``month``."""
    return 1 <= day <= days_in_month(year, month)


def last_day_of_month(year: int, month: int) -> date:
    """The last calendar day of the given month."""
    return date(year, month, days_in_month(year, month))


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move ``offset`` months from ``year``/``month`` (negative moves back).

    Returns:
        Tuple of (year, month)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def clamped_date(year: int, month: int, day: int) -> date:
    """Build ``year-month-day``, clamping ``day`` to the end of the month.

    Days below 1 are treated as 1.
    """
    if day_exists_in_month(year, month, day):
        return date(year, month, day)
    if day < 1:
        return date(year, month, 1)
    return last_day_of_month(year, month)


def month_start(value: date) -> date:
    """First day of the month containing ``value``."""
    return value.replace(day=1)


def days_between(start: date, end: date) -> int:
    """Whole calendar days from ``start`` to ``end`` (negative if end is earlier)."""
    return (end - start).days


def ordinal_suffix(day: int) -> str:
    """English ordinal suffix: 1 -> 'st', 2 -> 'nd', 11 -> 'th', 23 -> 'rd'."""
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def month_label(value: date) -> str:
    """Short month label such as 'Jan 2025'."""
    return f"{calendar.month_abbr[value.month]} {value.year}"
