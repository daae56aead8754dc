"""
Todoist MCP - Due Date Classification Tests
"""

import pytest
from datetime import date, timedelta

from todoist_mcp.tasks.due import classify_due


class TestClassifyDue:
    """Tests for overdue/today/tomorrow flags."""

    def test_no_date(self, frozen_today):
        """Missing date yields all flags false and no date."""
        flags = classify_due(None, frozen_today)
        assert flags.date is None
        assert not (flags.is_overdue or flags.is_today or flags.is_tomorrow)

    def test_empty_string_is_no_date(self, frozen_today):
        flags = classify_due("", frozen_today)
        assert flags.date is None
        assert not flags.is_overdue

    def test_today(self, frozen_today):
        flags = classify_due("2025-01-15", frozen_today)
        assert flags.date == "2025-01-15"
        assert flags.is_today
        assert not flags.is_overdue
        assert not flags.is_tomorrow

    def test_tomorrow(self, frozen_today):
        flags = classify_due("2025-01-16", frozen_today)
        assert flags.is_tomorrow
        assert not flags.is_today
        assert not flags.is_overdue

    def test_overdue(self, frozen_today):
        flags = classify_due("2025-01-14", frozen_today)
        assert flags.is_overdue
        assert not flags.is_today
        assert not flags.is_tomorrow

    def test_far_future_has_no_flags(self, frozen_today):
        flags = classify_due("2025-03-01", frozen_today)
        assert flags.date == "2025-03-01"
        assert not (flags.is_overdue or flags.is_today or flags.is_tomorrow)

    @pytest.mark.parametrize(
        "today, tomorrow",
        [
            (date(2024, 1, 31), "2024-02-01"),
            (date(2024, 2, 28), "2024-02-29"),
            (date(2023, 2, 28), "2023-03-01"),
            (date(2024, 12, 31), "2025-01-01"),
        ],
    )
    def test_tomorrow_rolls_over_boundaries(self, today, tomorrow):
        """Tomorrow crosses month, leap-day and year boundaries."""
        assert classify_due(tomorrow, today).is_tomorrow

    def test_datetime_classified_by_day(self, frozen_today):
        """A due datetime is compared on its calendar day; the string is kept."""
        flags = classify_due("2025-01-15T09:30:00", frozen_today)
        assert flags.is_today
        assert flags.date == "2025-01-15T09:30:00"

    def test_flags_are_mutually_exclusive(self, frozen_today):
        for offset in range(-3, 4):
            day = (frozen_today + timedelta(days=offset)).isoformat()
            flags = classify_due(day, frozen_today)
            assert sum([flags.is_overdue, flags.is_today, flags.is_tomorrow]) <= 1
            assert flags.is_overdue == (offset < 0)
            assert flags.is_today == (offset == 0)
            assert flags.is_tomorrow == (offset == 1)

    def test_reclassified_when_day_changes(self, frozen_clock):
        """Classification follows the clock rather than being cached."""
        assert classify_due("2025-01-16", frozen_clock()).is_tomorrow
        frozen_clock.advance(1)
        assert classify_due("2025-01-16", frozen_clock()).is_today
        frozen_clock.advance(1)
        assert classify_due("2025-01-16", frozen_clock()).is_overdue
