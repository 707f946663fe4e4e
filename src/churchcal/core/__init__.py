"""Functional core - pure business logic with no I/O."""

from .calendar import (
    Month,
    Category,
    Event,
    EventDraft,
    CalendarDay,
    MonthBucket,
    MalformedDateError,
    event_day,
    sort_events,
    find_malformed,
    months_of_year,
    days_for_month_view,
    bucket_events_by_day,
    bucket_events_by_month,
    filter_events_in_month,
    project_month,
    project_year,
    resolve_categories,
)
from .schedule import ScheduleRow, MonthSummary, month_schedule, year_schedule, year_overview

__all__ = [
    # Calendar
    "Month",
    "Category",
    "Event",
    "EventDraft",
    "CalendarDay",
    "MonthBucket",
    "MalformedDateError",
    "event_day",
    "sort_events",
    "find_malformed",
    "months_of_year",
    "days_for_month_view",
    "bucket_events_by_day",
    "bucket_events_by_month",
    "filter_events_in_month",
    "project_month",
    "project_year",
    "resolve_categories",
    # Schedule
    "ScheduleRow",
    "MonthSummary",
    "month_schedule",
    "year_schedule",
    "year_overview",
]
