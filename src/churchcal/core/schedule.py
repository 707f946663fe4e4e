"""Pure schedule projections for the printable listings - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date

from .calendar import (
    DEFAULT_FALLBACK_COLOR,
    Event,
    Month,
    category_color,
    category_label,
    event_day,
    filter_events_in_month,
    project_year,
    sort_events,
)


@dataclass(frozen=True)
class ScheduleRow:
    """One line of a schedule table."""

    event_id: str
    day: date
    title: str
    category_name: str
    color: str

    def day_label(self) -> str:
        return f"{self.day.day:02d}"

    def date_label(self) -> str:
        return self.day.strftime("%d/%m/%Y")


@dataclass(frozen=True)
class MonthSummary:
    """A month card in the year overview."""

    month: Month
    count: int
    badges: tuple[tuple[int, str, str], ...]  # (day of month, color, title)

    @property
    def is_empty(self) -> bool:
        return self.count == 0


def _row(event: Event, fallback_color: str) -> ScheduleRow:
    return ScheduleRow(
        event_id=event.id,
        day=event_day(event),
        title=event.title,
        category_name=category_label(event),
        color=category_color(event, fallback_color),
    )


def month_schedule(
    events: list[Event],
    month: Month,
    fallback_color: str = DEFAULT_FALLBACK_COLOR,
) -> list[ScheduleRow]:
    """Detailed schedule for one month, in start order."""
    return [_row(e, fallback_color) for e in filter_events_in_month(events, month)]


def year_schedule(
    events: list[Event],
    year: int,
    fallback_color: str = DEFAULT_FALLBACK_COLOR,
) -> list[ScheduleRow]:
    """Annual programme: every event of the year, in start order."""
    return [
        _row(e, fallback_color)
        for e in sort_events(events)
        if event_day(e).year == year
    ]


def year_overview(
    events: list[Event],
    year: int,
    fallback_color: str = DEFAULT_FALLBACK_COLOR,
) -> list[MonthSummary]:
    """Twelve month cards with an event count and a day badge per event."""
    summaries = []
    for bucket in project_year(events, year):
        badges = tuple(
            (event_day(e).day, category_color(e, fallback_color), e.title)
            for e in bucket.events
        )
        summaries.append(MonthSummary(month=bucket.month, count=len(bucket.events), badges=badges))
    return summaries
