"""Date utilities for fintrack.

Pure functions for month keys, month windows, week-of-month buckets and
display formatting. Weeks start on Sunday.
"""

import calendar
from datetime import date, datetime, timedelta

from fintrack.domain.models import MonthKey, WeekIndex


def month_key(day: date) -> MonthKey:
    """Get the YYYY-MM grouping key for a date."""
    return MonthKey(f"{day.year:04d}-{day.month:02d}")


def current_month(today: date | None = None) -> MonthKey:
    """Get the month key for today (or the given date)."""
    return month_key(today or date.today())


def month_range(month: MonthKey) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def month_label(month: MonthKey) -> str:
    """Human-readable month, e.g. "March 2024"."""
    return month_range(month)[2]


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of the 1st of the month, 0=Sunday .. 6=Saturday."""
    # date.weekday() is 0=Monday
    return (date(year, month, 1).weekday() + 1) % 7


def week_of_month(day: date) -> WeekIndex:
    """Zero-based Sunday-starting week of the month containing ``day``.

    The 1st always falls in week 0. Later weeks begin on each Sunday, so a
    month can span up to six buckets (indices 0-5).
    """
    offset = first_weekday_of_month(day.year, day.month)
    return WeekIndex((day.day - 1 + offset) // 7)


def weeks_in_month(month: MonthKey) -> int:
    """Number of week buckets the month spans.

    Raises:
        ValueError: If month is not a valid YYYY-MM string.
    """
    dt = datetime.strptime(month, "%Y-%m")
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    return week_of_month(date(dt.year, dt.month, last_day)) + 1


def format_display_date(day: date) -> str:
    """Format a date as MM/DD/YYYY for display."""
    return day.strftime("%m/%d/%Y")
