"""Tests for schedule projections."""

from datetime import date

import pytest

from churchcal.core.calendar import Category, Event, Month
from churchcal.core.schedule import ScheduleRow, month_schedule, year_overview, year_schedule

YOUTH = Category("A", "Youth", "#ff0000")
WOMEN = Category("B", "Women", "#00ff00")


@pytest.fixture
def events():
    return [
        Event("3", "Retreat", "2026-04-01T12:00:00Z", "A", YOUTH),
        Event("1", "Vigil", "2026-03-05T12:00:00Z", "A", YOUTH),
        Event("2", "Tea", "2026-03-31T12:00:00Z", "B", WOMEN),
        Event("4", "Orphan", "2026-03-31T09:00:00Z", "zzz"),
        Event("5", "Last year", "2025-12-25T12:00:00Z", "A", YOUTH),
        Event("6", "Broken", "someday", "A", YOUTH),
    ]


class TestScheduleRow:
    def test_labels(self):
        row = ScheduleRow("1", date(2026, 3, 5), "Vigil", "Youth", "#ff0000")
        assert row.day_label() == "05"
        assert row.date_label() == "05/03/2026"


class TestMonthSchedule:
    def test_rows_in_start_order(self, events):
        rows = month_schedule(events, Month(2026, 3))
        assert [r.event_id for r in rows] == ["1", "4", "2"]
        assert rows[0] == ScheduleRow("1", date(2026, 3, 5), "Vigil", "Youth", "#ff0000")

    def test_unresolved_category_falls_back(self, events):
        rows = month_schedule(events, Month(2026, 3), fallback_color="#999")
        orphan = next(r for r in rows if r.event_id == "4")
        assert orphan.category_name == ""
        assert orphan.color == "#999"

    def test_empty_month(self, events):
        assert month_schedule(events, Month(2026, 7)) == []

    def test_rows_follow_written_day(self):
        """Offsets never pull a row ahead of an earlier written day."""
        events = [
            Event("b", "Breakfast", "2026-03-06T01:00:00Z"),
            Event("a", "Late vigil", "2026-03-05T23:00:00-10:00"),
        ]
        rows = month_schedule(events, Month(2026, 3))
        assert [r.day_label() for r in rows] == ["05", "06"]


class TestYearSchedule:
    def test_only_requested_year(self, events):
        rows = year_schedule(events, 2026)
        assert [r.event_id for r in rows] == ["1", "4", "2", "3"]

    def test_previous_year(self, events):
        assert [r.event_id for r in year_schedule(events, 2025)] == ["5"]


class TestYearOverview:
    def test_counts_and_badges(self, events):
        summaries = year_overview(events, 2026)
        assert len(summaries) == 12
        march = summaries[2]
        assert march.month == Month(2026, 3)
        assert march.count == 3
        assert march.badges == (
            (5, "#ff0000", "Vigil"),
            (31, "#999999", "Orphan"),
            (31, "#00ff00", "Tea"),
        )

    def test_empty_months(self, events):
        summaries = year_overview(events, 2026)
        assert summaries[0].is_empty
        assert not summaries[3].is_empty

    def test_no_events(self):
        assert all(s.is_empty for s in year_overview([], 2026))
