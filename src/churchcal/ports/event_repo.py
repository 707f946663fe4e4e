"""Event repository interface."""

from typing import Protocol

from churchcal.core.calendar import Category, Event


class EventRepository(Protocol):
    """Interface for reading and writing calendar events on any backend."""

    def list_events(self) -> list[Event]:
        """Fetch every event, with its joined category where available."""
        ...

    def list_categories(self) -> list[Category]:
        """Fetch all categories."""
        ...

    def create_event(self, record: dict) -> Event:
        """Insert an event from a {title, start_date, category_id} record."""
        ...

    def update_event(self, event_id: str, record: dict) -> Event:
        """Overwrite the fields of an existing event."""
        ...

    def delete_event(self, event_id: str) -> None:
        """Delete an event by id."""
        ...
