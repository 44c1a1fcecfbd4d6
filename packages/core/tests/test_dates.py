"""Tests for calendar helpers."""

from datetime import date

import pytest

from paywise_core.dates import (
    clamped_date,
    day_exists_in_month,
    days_between,
    days_in_month,
    last_day_of_month,
    month_label,
    month_start,
    ordinal_suffix,
    shift_month,
)


class TestMonthArithmetic:
    """Test suite for month lengths and shifting."""

    def test_days_in_month(self):
        assert days_in_month(2025, 4) == 30
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2024, 2) == 29

    def test_day_exists(self):
        assert day_exists_in_month(2025, 1, 31)
        assert not day_exists_in_month(2025, 4, 31)
        assert not day_exists_in_month(2025, 4, 0)

    def test_last_day(self):
        assert last_day_of_month(2025, 12) == date(2025, 12, 31)

    @pytest.mark.parametrize(
        "start, offset, expected",
        [
            ((2025, 12), 1, (2026, 1)),
            ((2025, 1), -1, (2024, 12)),
            ((2025, 4), -5, (2024, 11)),
            ((2025, 4), 0, (2025, 4)),
            ((2025, 4), 24, (2027, 4)),
        ],
    )
    def test_shift_month(self, start, offset, expected):
        """Shifting crosses year boundaries in both directions."""
        assert shift_month(*start, offset) == expected


class TestClampedDate:
    """Test suite for end-of-month clamping."""

    def test_valid_day_unchanged(self):
        assert clamped_date(2025, 4, 15) == date(2025, 4, 15)

    def test_clamps_to_month_end(self):
        """Days past the month end land on the last day, never the next month."""
        assert clamped_date(2025, 4, 31) == date(2025, 4, 30)
        assert clamped_date(2025, 2, 30) == date(2025, 2, 28)
        assert clamped_date(2024, 2, 30) == date(2024, 2, 29)

    def test_clamps_low_day(self):
        assert clamped_date(2025, 4, 0) == date(2025, 4, 1)


class TestFormatting:
    """Test suite for labels and ordinals."""

    @pytest.mark.parametrize(
        "day, suffix",
        [(1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"),
         (13, "th"), (21, "st"), (22, "nd"), (23, "rd"), (31, "st")],
    )
    def test_ordinal_suffix(self, day: int, suffix: str):
        assert ordinal_suffix(day) == suffix

    def test_month_label(self):
        assert month_label(date(2025, 1, 20)) == "Jan 2025"

    def test_month_start(self):
        assert month_start(date(2025, 4, 17)) == date(2025, 4, 1)

    def test_days_between(self):
        assert days_between(date(2025, 4, 10), date(2025, 4, 12)) == 2
        assert days_between(date(2025, 4, 10), date(2025, 4, 8)) == -2
