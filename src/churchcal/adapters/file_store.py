"""File-based event storage adapter."""

import json
import logging
import uuid
from pathlib import Path

from churchcal.core.calendar import Category, Event

from .errors import BackendError

logger = logging.getLogger(__name__)


class FileEventStore:
    """
    File-based event storage.

    Implements EventRepository protocol. One JSON document holds the
    categories and events, in the same row shapes the hosted backend uses.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> dict:
        if not self.path.exists():
            return {"categories": [], "events": []}
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise BackendError(f"Corrupt event file {self.path}: {e}") from e
        data.setdefault("categories", [])
        data.setdefault("events", [])
        return data

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))

    def _joined(self, row: dict, categories: list[dict]) -> Event:
        """Attach the category row the same way the hosted backend's join does."""
        category = next((c for c in categories if str(c["id"]) == str(row.get("category_id"))), None)
        if category:
            row = {**row, "categories": {"name": category.get("name"), "color": category.get("color")}}
        return Event.from_record(row)

    def list_events(self) -> list[Event]:
        data = self._load()
        return [self._joined(row, data["categories"]) for row in data["events"]]

    def list_categories(self) -> list[Category]:
        data = self._load()
        categories = [Category.from_record(row) for row in data["categories"]]
        return sorted(categories, key=lambda c: c.name)

    def add_category(self, name: str, color: str) -> Category:
        """Append a category. Categories are never edited or removed."""
        data = self._load()
        row = {"id": uuid.uuid4().hex, "name": name, "color": color}
        data["categories"].append(row)
        self._save(data)
        return Category.from_record(row)

    def create_event(self, record: dict) -> Event:
        data = self._load()
        row = {"id": uuid.uuid4().hex, **record}
        data["events"].append(row)
        self._save(data)
        logger.debug(f"Created event {row['id']} in {self.path}")
        return self._joined(row, data["categories"])

    def update_event(self, event_id: str, record: dict) -> Event:
        data = self._load()
        for row in data["events"]:
            if str(row["id"]) == str(event_id):
                row.update(record)
                self._save(data)
                return self._joined(row, data["categories"])
        raise BackendError(f"No event with id {event_id!r}")

    def delete_event(self, event_id: str) -> None:
        data = self._load()
        remaining = [row for row in data["events"] if str(row["id"]) != str(event_id)]
        if len(remaining) == len(data["events"]):
            raise BackendError(f"No event with id {event_id!r}")
        data["events"] = remaining
        self._save(data)
