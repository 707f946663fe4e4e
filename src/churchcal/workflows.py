"""Shared workflow layer between the CLI and the backends.

Each load_* function fetches fresh events and categories, resolves category
references and returns a fully projected view. Mutations re-fetch the full
event list afterwards; nothing derived is cached.
"""

from dataclasses import dataclass, field

from .adapters.file_store import FileEventStore
from .adapters.supabase_rest import SupabaseAdapter
from .config import Config
from .core.calendar import (
    SUNDAY,
    DEFAULT_FALLBACK_COLOR,
    CalendarDay,
    Event,
    EventDraft,
    MalformedDateError,
    Month,
    find_malformed,
    project_month,
    resolve_categories,
)
from .core.schedule import MonthSummary, ScheduleRow, month_schedule, year_overview, year_schedule
from .ports.event_repo import EventRepository


@dataclass
class MonthView:
    """Everything the month screen renders."""

    month: Month
    days: list[CalendarDay]
    schedule: list[ScheduleRow]
    diagnostics: list[MalformedDateError] = field(default_factory=list)


@dataclass
class YearView:
    """Everything the year screen renders."""

    year: int
    months: list[MonthSummary]
    schedule: list[ScheduleRow]
    diagnostics: list[MalformedDateError] = field(default_factory=list)


def get_repository(config: Config) -> EventRepository:
    """Resolve the configured backend."""
    if config.backend == "supabase":
        return SupabaseAdapter(config)
    return FileEventStore(config.data_path())


def fetch_events(repo: EventRepository) -> list[Event]:
    """Fetch events and resolve their categories against the category list."""
    return resolve_categories(repo.list_events(), repo.list_categories())


def load_month_view(
    repo: EventRepository,
    month: Month,
    week_start: int = SUNDAY,
    fallback_color: str = DEFAULT_FALLBACK_COLOR,
) -> MonthView:
    events = fetch_events(repo)
    return MonthView(
        month=month,
        days=project_month(events, month, week_start),
        schedule=month_schedule(events, month, fallback_color),
        diagnostics=find_malformed(events),
    )


def load_year_view(
    repo: EventRepository,
    year: int,
    fallback_color: str = DEFAULT_FALLBACK_COLOR,
) -> YearView:
    events = fetch_events(repo)
    return YearView(
        year=year,
        months=year_overview(events, year, fallback_color),
        schedule=year_schedule(events, year, fallback_color),
        diagnostics=find_malformed(events),
    )


def save_event(
    repo: EventRepository,
    draft: EventDraft,
    event_id: str | None = None,
) -> list[Event]:
    """Create (or update, given an id) an event, then return the fresh event list."""
    if event_id:
        repo.update_event(event_id, draft.to_record())
    else:
        repo.create_event(draft.to_record())
    return fetch_events(repo)


def remove_event(repo: EventRepository, event_id: str) -> list[Event]:
    """Delete an event, then return the fresh event list."""
    repo.delete_event(event_id)
    return fetch_events(repo)


def find_event(repo: EventRepository, event_id: str) -> Event | None:
    return next((e for e in fetch_events(repo) if e.id == event_id), None)
