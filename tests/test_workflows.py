"""Tests for the shared workflow layer."""

import logging
from datetime import date
from unittest.mock import MagicMock

import pytest

from churchcal.adapters.file_store import FileEventStore
from churchcal.adapters.supabase_rest import SupabaseAdapter
from churchcal.config import Config
from churchcal.core.calendar import Category, Event, EventDraft, Month
from churchcal.workflows import (
    fetch_events,
    find_event,
    get_repository,
    load_month_view,
    load_year_view,
    remove_event,
    save_event,
)


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.list_events.return_value = [
        Event("1", "Vigil", "2026-03-05T12:00:00Z", "A"),
        Event("2", "Tea", "2026-03-31T12:00:00Z", "B"),
        Event("3", "Retreat", "2026-04-01T12:00:00Z", "A"),
        Event("4", "Broken", "31/03/2026", "A"),
    ]
    repo.list_categories.return_value = [Category("A", "Youth", "#f00")]
    return repo


class TestGetRepository:
    def test_file_backend(self, tmp_path):
        config = Config(backend="file", data_file=str(tmp_path / "events.json"))
        repo = get_repository(config)
        assert isinstance(repo, FileEventStore)
        assert repo.path == tmp_path / "events.json"

    def test_supabase_backend(self):
        config = Config(backend="supabase", supabase_url="https://abc.supabase.co", supabase_key="k")
        repo = get_repository(config)
        assert isinstance(repo, SupabaseAdapter)
        assert repo.config is config


class TestFetchEvents:
    def test_resolves_categories(self, repo):
        events = fetch_events(repo)
        assert events[0].category == Category("A", "Youth", "#f00")
        assert events[1].category is None


class TestLoadMonthView:
    def test_projects_grid_and_schedule(self, repo):
        view = load_month_view(repo, Month(2026, 3))

        assert view.month == Month(2026, 3)
        assert len(view.days) % 7 == 0
        by_date = {d.date: d for d in view.days}
        assert [e.id for e in by_date[date(2026, 3, 5)].events] == ["1"]
        assert [r.event_id for r in view.schedule] == ["1", "2"]
        assert view.schedule[0].color == "#f00"
        assert view.schedule[1].color == "#999999"

    def test_reports_malformed_records(self, repo):
        view = load_month_view(repo, Month(2026, 3))
        assert [d.event_id for d in view.diagnostics] == ["4"]

    def test_malformed_record_logged_once(self, repo, caplog):
        with caplog.at_level(logging.WARNING, logger="churchcal.core.calendar"):
            load_month_view(repo, Month(2026, 3))
        excluded = [r for r in caplog.records if "Excluding event" in r.getMessage()]
        assert len(excluded) == 1
        assert "'4'" in excluded[0].getMessage()

    def test_fetches_fresh_each_time(self, repo):
        load_month_view(repo, Month(2026, 3))
        load_month_view(repo, Month(2026, 3))
        assert repo.list_events.call_count == 2
        assert repo.list_categories.call_count == 2


class TestLoadYearView:
    def test_projects_overview_and_schedule(self, repo):
        view = load_year_view(repo, 2026, fallback_color="#3b82f6")
        assert [s.count for s in view.months][2:4] == [2, 1]
        assert [r.event_id for r in view.schedule] == ["1", "2", "3"]
        assert view.months[2].badges[1] == (31, "#3b82f6", "Tea")


class TestMutations:
    def test_save_creates_then_refetches(self, repo):
        draft = EventDraft("Vigil", date(2026, 3, 5), "A")
        events = save_event(repo, draft)
        repo.create_event.assert_called_once_with(
            {"title": "Vigil", "start_date": "2026-03-05T12:00:00Z", "category_id": "A"}
        )
        repo.update_event.assert_not_called()
        assert len(events) == 4

    def test_save_with_id_updates(self, repo):
        draft = EventDraft("Vigil", date(2026, 3, 6), "A")
        save_event(repo, draft, event_id="1")
        repo.update_event.assert_called_once_with(
            "1", {"title": "Vigil", "start_date": "2026-03-06T12:00:00Z", "category_id": "A"}
        )
        repo.create_event.assert_not_called()

    def test_remove_then_refetches(self, repo):
        remove_event(repo, "2")
        repo.delete_event.assert_called_once_with("2")
        repo.list_events.assert_called_once()

    def test_find_event(self, repo):
        assert find_event(repo, "3").title == "Retreat"
        assert find_event(repo, "ghost") is None


class TestFileBackendRoundTrip:
    def test_add_then_view(self, tmp_path):
        store = FileEventStore(tmp_path / "events.json")
        youth = store.add_category("Youth", "#f00")

        save_event(store, EventDraft("Vigil", date(2026, 3, 5), youth.id))
        view = load_month_view(store, Month(2026, 3))

        assert [(r.title, r.category_name, r.day_label()) for r in view.schedule] == [("Vigil", "Youth", "05")]
