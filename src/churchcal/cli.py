"""churchcal CLI - church event calendar."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.file_store import FileEventStore
from .adapters.supabase_rest import BackendError
from .config import load_config
from .core.calendar import (
    EventDraft,
    MalformedDateError,
    Month,
    category_label,
    event_day,
    find_malformed,
    parse_week_start,
    sort_events,
)
from .render import format_event_line, format_month_grid, format_schedule, format_year_overview
from .workflows import (
    fetch_events,
    find_event,
    get_repository,
    load_month_view,
    load_year_view,
    remove_event,
    save_event,
)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _parse_month(value: str | None) -> Month:
    if not value:
        return Month.from_date(date.today())
    try:
        return Month.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}")


def _warn_malformed(diagnostics) -> None:
    if diagnostics:
        click.echo(
            f"Warning: {len(diagnostics)} event(s) with unreadable dates were left out. Run 'churchcal check'.",
            err=True,
        )


@click.group()
@click.version_option(package_name="churchcal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """churchcal - church event calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--year", "year", type=int, default=None, help="Year to show (default from config)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def year(year: int | None, as_json: bool):
    """Show the twelve months of a year with their events."""
    config = load_config()
    target = year or config.calendar_year
    try:
        view = load_year_view(get_repository(config), target, config.fallback_color)
    except BackendError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "month": s.month.isoformat(),
                        "count": s.count,
                        "events": [{"day": day, "color": color, "title": title} for day, color, title in s.badges],
                    }
                    for s in view.months
                ],
                indent=2,
            )
        )
    else:
        click.echo(format_year_overview(view.months, f"{config.calendar_title} {target}"))
    _warn_malformed(view.diagnostics)


@main.command()
@click.argument("month", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def month(month: str | None, as_json: bool):
    """Show a month grid and its detailed schedule (MONTH is YYYY-MM)."""
    config = load_config()
    target = _parse_month(month)
    try:
        week_start = parse_week_start(config.week_start)
    except ValueError as e:
        _fail(f"WEEK_START: {e}")

    try:
        view = load_month_view(get_repository(config), target, week_start, config.fallback_color)
    except BackendError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "month": target.isoformat(),
                    "days": [
                        {
                            "date": d.date.isoformat(),
                            "in_current_month": d.in_current_month,
                            "events": [e.id for e in d.events],
                        }
                        for d in view.days
                    ],
                    "schedule": [
                        {
                            "id": r.event_id,
                            "day": r.day.isoformat(),
                            "title": r.title,
                            "category": r.category_name,
                            "color": r.color,
                        }
                        for r in view.schedule
                    ],
                },
                indent=2,
            )
        )
    else:
        click.echo(format_month_grid(view.days, target, today=date.today()))
        click.echo()
        click.echo("Detailed schedule")
        click.echo(format_schedule(view.schedule))
    _warn_malformed(view.diagnostics)


@main.command()
@click.option("--year", "year", type=int, default=None, help="Year to list (default from config)")
@click.option("--month", "month", default=None, help="List a single month (YYYY-MM)")
def schedule(year: int | None, month: str | None):
    """Printable schedule of events."""
    config = load_config()
    repo = get_repository(config)
    try:
        if month:
            target = _parse_month(month)
            view = load_month_view(repo, target, fallback_color=config.fallback_color)
            click.echo(f"{target.label()}\n")
            click.echo(format_schedule(view.schedule))
        else:
            target_year = year or config.calendar_year
            view = load_year_view(repo, target_year, config.fallback_color)
            click.echo(f"{config.calendar_title} - {target_year}\n")
            click.echo(format_schedule(view.schedule, with_year=True))
    except BackendError as e:
        _fail(str(e))
    _warn_malformed(view.diagnostics)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def categories(as_json: bool):
    """List event categories."""
    config = load_config()
    try:
        cats = get_repository(config).list_categories()
    except BackendError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([{"id": c.id, "name": c.name, "color": c.color} for c in cats], indent=2))
        return

    if not cats:
        click.echo("No categories.")
        return
    for c in cats:
        click.echo(f"{c.color:<9} {c.name}  (id: {c.id})")


@main.command("category-add")
@click.argument("name")
@click.argument("color")
def category_add(name: str, color: str):
    """Add a category to the local file backend."""
    config = load_config()
    repo = get_repository(config)
    if not isinstance(repo, FileEventStore):
        _fail("Categories can only be added to the file backend; manage them in the hosted database.")
    try:
        category = repo.add_category(name, color)
    except BackendError as e:
        _fail(str(e))
    click.echo(f"✓ Added category {category.name} (id: {category.id})")


@main.command()
@click.option("--title", required=True, help="Event name")
@click.option("--date", "day", required=True, help="Event date (YYYY-MM-DD)")
@click.option("--category", "category_id", default=None, help="Category id")
def add(title: str, day: str, category_id: str | None):
    """Schedule a new event."""
    config = load_config()
    draft = EventDraft(title=title.strip(), day=_parse_day(day), category_id=category_id)
    if not draft.title:
        raise click.BadParameter("Title must not be empty", param_hint="--title")

    try:
        events = save_event(get_repository(config), draft)
    except BackendError as e:
        _fail(f"Could not save: {e}")

    click.echo(f"✓ Scheduled {draft.title} on {draft.day.isoformat()}")
    click.echo(f"  {len(events)} events in calendar")


@main.command()
@click.argument("event_id")
@click.option("--title", default=None, help="New event name")
@click.option("--date", "day", default=None, help="New event date (YYYY-MM-DD)")
@click.option("--category", "category_id", default=None, help="New category id")
def edit(event_id: str, title: str | None, day: str | None, category_id: str | None):
    """Edit an existing event."""
    if title is not None and not title.strip():
        raise click.BadParameter("Title must not be empty", param_hint="--title")
    config = load_config()
    repo = get_repository(config)
    try:
        existing = find_event(repo, event_id)
        if existing is None:
            _fail(f"No event with id {event_id!r}")

        # A new --date repairs an event whose stored date is unreadable
        if day is not None:
            draft = EventDraft(existing.title, _parse_day(day), existing.category_id)
        else:
            draft = EventDraft.from_event(existing)
        if title is not None:
            draft.title = title.strip()
        if category_id is not None:
            draft.category_id = category_id

        events = save_event(repo, draft, event_id=event_id)
    except BackendError as e:
        _fail(f"Could not save: {e}")
    except MalformedDateError as e:
        _fail(f"{e}. Pass --date to fix it.")

    updated = next((e for e in events if e.id == event_id), None)
    if updated:
        click.echo("✓ " + format_event_line(updated.id, event_day(updated), updated.title, category_label(updated)))
    else:
        click.echo(f"✓ Saved {event_id}")


@main.command()
@click.argument("event_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
def delete(event_id: str, yes: bool):
    """Delete an event."""
    config = load_config()
    if not yes and not click.confirm(f"Delete event {event_id}?"):
        return
    try:
        remove_event(get_repository(config), event_id)
    except BackendError as e:
        _fail(f"Could not delete: {e}")
    click.echo(f"✓ Deleted {event_id}")


@main.command("list")
def list_events():
    """List every event with its id."""
    config = load_config()
    try:
        events = sort_events(fetch_events(get_repository(config)))
    except BackendError as e:
        _fail(str(e))

    if not events:
        click.echo("No events.")
        return
    for e in events:
        click.echo(format_event_line(e.id, event_day(e), e.title, category_label(e)))


@main.command()
def check():
    """Report events whose dates cannot be read."""
    config = load_config()
    try:
        events = get_repository(config).list_events()
    except BackendError as e:
        _fail(str(e))

    problems = find_malformed(events)
    if not problems:
        click.echo(f"All {len(events)} events have valid dates.")
        return
    for problem in problems:
        click.echo(f"✗ {problem}")
    sys.exit(1)


if __name__ == "__main__":
    main()
