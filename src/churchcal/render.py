"""Plain-text rendering of calendar views."""

from datetime import date

from .core.calendar import CalendarDay, Event, Month, category_label
from .core.schedule import MonthSummary, ScheduleRow

CELL_WIDTH = 16


def _cell(text: str) -> str:
    if len(text) > CELL_WIDTH - 1:
        text = text[: CELL_WIDTH - 2] + "…"
    return f"{text:<{CELL_WIDTH}}"


def _event_label(event: Event) -> str:
    label = category_label(event)
    return f"{event.title} [{label}]" if label else event.title


def _day_number(day: CalendarDay, today: date | None) -> str:
    label = str(day.date.day)
    if not day.in_current_month:
        label = f"({label})"
    if today and day.date == today:
        label = f"*{label}"
    return label


def format_month_grid(days: list[CalendarDay], month: Month, today: date | None = None) -> str:
    """
    Render a month grid as text.

    One block per week: a line of day numbers, then one line per event slot.
    Days from adjacent months are shown in parentheses, today is marked *.
    """
    lines = [month.label(), ""]
    lines.append("".join(_cell(d.date.strftime("%a")) for d in days[:7]).rstrip())

    for i in range(0, len(days), 7):
        week = days[i : i + 7]
        lines.append("".join(_cell(_day_number(d, today)) for d in week).rstrip())
        depth = max(len(d.events) for d in week)
        for slot in range(depth):
            row = []
            for d in week:
                row.append(_cell(_event_label(d.events[slot]) if slot < len(d.events) else ""))
            lines.append("".join(row).rstrip())
        lines.append("")

    if not any(d.events for d in days if d.in_current_month):
        lines.append("No events this month.")

    return "\n".join(lines).rstrip()


def format_year_overview(summaries: list[MonthSummary], title: str = "") -> str:
    """Render the twelve month cards of a year."""
    lines = []
    if title:
        lines.extend([title, ""])
    for summary in summaries:
        name = summary.month.label().split(" ")[0]
        noun = "event" if summary.count == 1 else "events"
        lines.append(f"{name:<10} {summary.count:>3} {noun}")
        if summary.is_empty:
            lines.append("  Empty")
        else:
            lines.append("  " + " ".join(f"{day:02d}" for day, _, _ in summary.badges))
    return "\n".join(lines)


def format_schedule(rows: list[ScheduleRow], with_year: bool = False) -> str:
    """Render a schedule table (day, event, category)."""
    if not rows:
        return "No events scheduled."

    date_width = 10 if with_year else 3
    title_width = max(len("Event"), *(len(r.title) for r in rows))
    header = f"{'Date' if with_year else 'Day':<{date_width}}  {'Event':<{title_width}}  Category"
    lines = [header, "-" * len(header)]
    for row in rows:
        when = row.date_label() if with_year else row.day_label()
        category = row.category_name or "-"
        lines.append(f"{when:<{date_width}}  {row.title:<{title_width}}  {category}".rstrip())
    return "\n".join(lines)


def format_event_line(event_id: str, day: date, title: str, category: str) -> str:
    label = f" [{category}]" if category else ""
    return f"{day.isoformat()}  {title}{label}  (id: {event_id})"
