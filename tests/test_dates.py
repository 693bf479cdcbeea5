"""Tests for fintrack.dates pure functions."""

from datetime import date

import pytest

from fintrack.dates import (
    current_month,
    first_weekday_of_month,
    format_display_date,
    month_key,
    month_label,
    month_range,
    week_of_month,
    weeks_in_month,
)
from fintrack.domain.models import MonthKey


class TestMonthRange:
    """Tests for month_range."""

    def test_january_range(self) -> None:
        """Should calculate range for January."""
        since, until, label = month_range(MonthKey("2025-01"))

        assert since == "2025-01-01"
        assert until == "2025-02-01"
        assert label == "January 2025"

    def test_december_range_crosses_year(self) -> None:
        """Should handle December (crosses year boundary)."""
        since, until, label = month_range(MonthKey("2025-12"))

        assert since == "2025-12-01"
        assert until == "2026-01-01"
        assert label == "December 2025"

    def test_february_leap_year(self) -> None:
        """Should handle February in leap year."""
        since, until, label = month_range(MonthKey("2024-02"))

        assert since == "2024-02-01"
        assert until == "2024-03-01"  # 29 days in Feb 2024
        assert label == "February 2024"

    def test_invalid_month_format_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month format."""
        with pytest.raises(ValueError):
            month_range(MonthKey("invalid"))

    def test_invalid_month_number_raises_valueerror(self) -> None:
        """Should raise ValueError for invalid month number."""
        with pytest.raises(ValueError):
            month_range(MonthKey("2025-13"))

    def test_month_label(self) -> None:
        """Should return the human-readable label."""
        assert month_label(MonthKey("2024-03")) == "March 2024"


class TestMonthKey:
    """Tests for month_key and current_month."""

    def test_month_key_pads_month(self) -> None:
        """Should format as YYYY-MM with zero padding."""
        assert month_key(date(2024, 3, 15)) == "2024-03"
        assert month_key(date(2024, 11, 1)) == "2024-11"

    def test_current_month_uses_given_day(self) -> None:
        """Should derive the key from the supplied date."""
        assert current_month(date(2026, 10, 17)) == "2026-10"


class TestWeekOfMonth:
    """Tests for week_of_month and weeks_in_month."""

    def test_first_weekday_is_sunday_based(self) -> None:
        """Should number weekdays 0=Sunday..6=Saturday."""
        assert first_weekday_of_month(2015, 2) == 0  # Sunday
        assert first_weekday_of_month(2024, 3) == 5  # Friday
        assert first_weekday_of_month(2024, 6) == 6  # Saturday

    def test_first_of_month_is_week_zero(self) -> None:
        """Should always put the 1st in week 0."""
        for month in range(1, 13):
            assert week_of_month(date(2024, month, 1)) == 0

    def test_new_week_starts_on_sunday(self) -> None:
        """Should start a new bucket on each Sunday."""
        # March 2024 starts on a Friday
        assert week_of_month(date(2024, 3, 2)) == 0  # Saturday
        assert week_of_month(date(2024, 3, 3)) == 1  # Sunday
        assert week_of_month(date(2024, 3, 9)) == 1  # Saturday
        assert week_of_month(date(2024, 3, 10)) == 2  # Sunday

    def test_28_day_month_starting_sunday_has_four_weeks(self) -> None:
        """Should use exactly indices 0-3 for February 2015."""
        weeks = {week_of_month(date(2015, 2, day)) for day in range(1, 29)}

        assert weeks == {0, 1, 2, 3}
        assert weeks_in_month(MonthKey("2015-02")) == 4

    def test_month_can_span_six_weeks(self) -> None:
        """Should produce indices up to 5 for long months starting late in the week."""
        assert week_of_month(date(2024, 3, 31)) == 5
        assert weeks_in_month(MonthKey("2024-03")) == 6
        assert weeks_in_month(MonthKey("2024-06")) == 6

    def test_five_week_month(self) -> None:
        """Should count five buckets for January 2025."""
        assert week_of_month(date(2025, 1, 31)) == 4
        assert weeks_in_month(MonthKey("2025-01")) == 5

    def test_indices_are_non_negative(self) -> None:
        """Should never return a negative index."""
        for day in range(1, 32):
            assert week_of_month(date(2025, 1, day)) >= 0


class TestFormatDisplayDate:
    """Tests for format_display_date."""

    def test_formats_as_month_day_year(self) -> None:
        """Should format as MM/DD/YYYY without shifting the day."""
        assert format_display_date(date(2024, 3, 1)) == "03/01/2024"
        assert format_display_date(date(2024, 12, 31)) == "12/31/2024"
