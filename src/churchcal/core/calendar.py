"""Pure calendar projection logic - no I/O dependencies.

Turns the flat event list fetched from the backend into the nested structures
the year overview, month grid and schedule listing render.
"""

import calendar
import logging
import re
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable

logger = logging.getLogger(__name__)

SUNDAY = calendar.SUNDAY
DEFAULT_FALLBACK_COLOR = "#999999"

# Events are stored at midday UTC so that no local offset can move them to
# an adjacent day.
MIDDAY_UTC = time(12, 0)

_WEEKDAYS = {name.lower(): i for i, name in enumerate(calendar.day_name)}
_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")
_ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


class MalformedDateError(ValueError):
    """Raised when an event's start date is not a calendar date."""

    def __init__(self, event_id: str, value: object):
        self.event_id = event_id
        self.value = value
        super().__init__(f"Event {event_id!r} has malformed start date {value!r}")


@dataclass(frozen=True, order=True)
class Month:
    """A calendar month (year, month) with no day or time component."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def from_date(cls, d: date) -> "Month":
        return cls(d.year, d.month)

    @classmethod
    def parse(cls, value: str) -> "Month":
        """Parse "YYYY-MM", or take the literal year-month of a full ISO date."""
        text = value.strip()
        try:
            match = _MONTH_PATTERN.match(text)
            if match:
                return cls(int(match.group(1)), int(match.group(2)))
            if _ISO_DATE_PREFIX.match(text):
                parsed = date.fromisoformat(text) if len(text) == 10 else datetime.fromisoformat(text)
                return cls(parsed.year, parsed.month)
        except ValueError:
            pass
        raise ValueError(f"Not a month: {value!r}")

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def contains(self, d: date) -> bool:
        return d.year == self.year and d.month == self.month

    def next(self) -> "Month":
        if self.month == 12:
            return Month(self.year + 1, 1)
        return Month(self.year, self.month + 1)

    def previous(self) -> "Month":
        if self.month == 1:
            return Month(self.year - 1, 12)
        return Month(self.year, self.month - 1)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def label(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"


@dataclass(frozen=True)
class Category:
    """Reference data used to tag events with a label and color."""

    id: str
    name: str
    color: str

    @classmethod
    def from_record(cls, data: dict) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            color=data.get("color") or "",
        )


@dataclass(frozen=True)
class Event:
    """A calendar event as stored by the backend."""

    id: str
    title: str
    start_date: str
    category_id: str | None = None
    category: Category | None = None

    @classmethod
    def from_record(cls, data: dict) -> "Event":
        """Build an Event from a backend row.

        The row may carry the joined category as ``categories: {name, color}``;
        it becomes an explicit Category reference keyed by ``category_id``.
        """
        category_id = data.get("category_id")
        category_id = str(category_id) if category_id else None

        category = None
        joined = data.get("categories")
        if isinstance(joined, dict) and category_id:
            category = Category(
                id=category_id,
                name=joined.get("name") or "",
                color=joined.get("color") or "",
            )

        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            start_date=data.get("start_date") or "",
            category_id=category_id,
            category=category,
        )


@dataclass(frozen=True)
class CalendarDay:
    """One cell of a month grid."""

    date: date
    in_current_month: bool
    events: tuple[Event, ...] = ()


@dataclass(frozen=True)
class MonthBucket:
    """Events falling within one calendar month."""

    month: Month
    events: tuple[Event, ...] = ()


@dataclass
class EventDraft:
    """Form data for creating or editing an event."""

    title: str
    day: date
    category_id: str | None = None

    @classmethod
    def from_event(cls, event: Event) -> "EventDraft":
        return cls(title=event.title, day=event_day(event), category_id=event.category_id)

    def to_record(self) -> dict:
        """Record shape sent to the backend, dated at the midday marker."""
        start = datetime.combine(self.day, MIDDAY_UTC)
        return {
            "title": self.title,
            "start_date": start.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "category_id": self.category_id,
        }


def parse_week_start(name: str) -> int:
    """Weekday name ("Sunday", "monday") to a calendar module weekday number."""
    try:
        return _WEEKDAYS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown weekday: {name!r}") from None


def _parse_start(event: Event) -> datetime:
    value = event.start_date
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateError(event.id, value)
    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time())
        return datetime.fromisoformat(text)
    except ValueError:
        raise MalformedDateError(event.id, value) from None


def event_day(event: Event) -> date:
    """
    The calendar day an event occurs on.

    This is the literal date of the stored timestamp. The offset is never
    applied, so the result does not depend on the local timezone.
    """
    return _parse_start(event).date()


def _sort_key(event: Event) -> tuple[date, datetime, str]:
    # Day first, so ordering agrees with the literal-date bucketing
    start = _parse_start(event)
    day = start.date()
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return day, start, event.id


def _valid(events: Iterable[Event]) -> list[tuple[date, Event]]:
    """Pair each event with its day, excluding malformed records."""
    dated = []
    for event in events:
        try:
            dated.append((event_day(event), event))
        except MalformedDateError:
            continue
    return dated


def find_malformed(events: Iterable[Event]) -> list[MalformedDateError]:
    """
    Diagnostics for the records the projections exclude.

    Projections drop malformed records silently; this is the one place they
    are reported and logged.
    """
    errors = []
    for event in events:
        try:
            event_day(event)
        except MalformedDateError as e:
            logger.warning(f"Excluding event from calendar: {e}")
            errors.append(e)
    return errors


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Sort by day, then start instant, then id. Malformed records are dropped."""
    return sorted((e for _, e in _valid(events)), key=_sort_key)


def months_of_year(year: int) -> list[Month]:
    """January through December of the given year."""
    return [Month(year, m) for m in range(1, 13)]


def days_for_month_view(month: Month, week_start: int = SUNDAY) -> list[CalendarDay]:
    """
    Calendar cells for a month grid.

    Covers the month's first through last day, padded with days of the
    adjacent months to complete the first and last weeks.

    Args:
        month: Month being rendered
        week_start: First weekday of each row (calendar module numbering,
            0 = Monday ... 6 = Sunday)

    Returns:
        CalendarDays in ascending order, a multiple of 7 long
    """
    first = month.first_day()
    last = month.last_day()

    range_start = first - timedelta(days=(first.weekday() - week_start) % 7)
    week_end = (week_start - 1) % 7
    range_end = last + timedelta(days=(week_end - last.weekday()) % 7)

    days = []
    current = range_start
    while current <= range_end:
        days.append(CalendarDay(date=current, in_current_month=month.contains(current)))
        current += timedelta(days=1)
    return days


def bucket_events_by_day(
    events: list[Event],
    days: list[CalendarDay],
) -> dict[date, list[Event]]:
    """
    Group events under the supplied days.

    Every supplied day gets a bucket (possibly empty). Events whose day is not
    among them are dropped. Buckets are sorted by start, then id.
    """
    buckets: dict[date, list[Event]] = {d.date: [] for d in days}
    for day, event in _valid(events):
        if day in buckets:
            buckets[day].append(event)
    return {d: sorted(evts, key=_sort_key) for d, evts in buckets.items()}


def bucket_events_by_month(
    events: list[Event],
    months: list[Month],
) -> dict[Month, list[Event]]:
    """Group events under the supplied months, sorted by start, then id."""
    buckets: dict[Month, list[Event]] = {m: [] for m in months}
    for day, event in _valid(events):
        key = Month.from_date(day)
        if key in buckets:
            buckets[key].append(event)
    return {m: sorted(evts, key=_sort_key) for m, evts in buckets.items()}


def filter_events_in_month(events: list[Event], month: Month) -> list[Event]:
    """Events occurring in a month, sorted by start, then id."""
    return sorted((e for day, e in _valid(events) if month.contains(day)), key=_sort_key)


def project_month(
    events: list[Event],
    month: Month,
    week_start: int = SUNDAY,
) -> list[CalendarDay]:
    """Month grid with each day's events attached."""
    days = days_for_month_view(month, week_start)
    buckets = bucket_events_by_day(events, days)
    return [replace(d, events=tuple(buckets[d.date])) for d in days]


def project_year(events: list[Event], year: int) -> list[MonthBucket]:
    """Twelve month buckets for a year overview."""
    buckets = bucket_events_by_month(events, months_of_year(year))
    return [MonthBucket(month=m, events=tuple(evts)) for m, evts in buckets.items()]


def resolve_categories(events: list[Event], categories: list[Category]) -> list[Event]:
    """
    Attach each event's Category by looking up its category_id.

    Events whose id has no matching category keep whatever category they
    already carry (possibly none) and render with the fallback.
    """
    by_id = {c.id: c for c in categories}
    resolved = []
    for event in events:
        category = by_id.get(event.category_id) if event.category_id else None
        if category is None:
            if event.category_id and event.category is None:
                logger.debug(f"Event {event.id!r} references unknown category {event.category_id!r}")
            resolved.append(event)
        else:
            resolved.append(replace(event, category=category))
    return resolved


def category_color(event: Event, fallback: str = DEFAULT_FALLBACK_COLOR) -> str:
    if event.category and event.category.color:
        return event.category.color
    return fallback


def category_label(event: Event, fallback: str = "") -> str:
    if event.category and event.category.name:
        return event.category.name
    return fallback
