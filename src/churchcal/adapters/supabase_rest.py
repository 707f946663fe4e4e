"""Supabase REST adapter - HTTP client for the hosted events database."""

import logging

import requests

from churchcal.config import Config, load_config
from churchcal.core.calendar import Category, Event

from .errors import AuthenticationError, BackendError

logger = logging.getLogger(__name__)

EVENT_COLUMNS = "id,title,start_date,category_id,categories(name,color)"


class SupabaseAdapter:
    """
    Supabase (PostgREST) adapter.

    Implements EventRepository protocol. Handles request headers, error
    translation and row parsing. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, timeout: float = 10.0):
        self.config = config or load_config()
        self.timeout = timeout
        self._session = requests.Session()

    @property
    def _base(self) -> str:
        if not self.config.supabase_url or not self.config.supabase_key:
            raise AuthenticationError(
                "Missing Supabase credentials. Set SUPABASE_URL and SUPABASE_KEY in config/churchcal.conf"
            )
        return f"{self.config.supabase_url}/rest/v1"

    def _headers(self) -> dict[str, str]:
        token = self.config.supabase_access_token or self.config.supabase_key
        return {
            "apikey": self.config.supabase_key,
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        table: str,
        params: dict | None = None,
        json: list | dict | None = None,
        prefer: str | None = None,
    ) -> list:
        """Make an authenticated request against a table endpoint."""
        url = f"{self._base}/{table}"
        headers = self._headers()
        if prefer:
            headers["Prefer"] = prefer

        logger.debug(f"{method} {url} {params or ''}")
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BackendError(f"Could not reach backend: {e}") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError(f"Backend refused credentials: {self._error_detail(resp)}")
        if not resp.ok:
            raise BackendError(f"{method} {table} failed ({resp.status_code}): {self._error_detail(resp)}")

        if not resp.content:
            return []
        return resp.json()

    @staticmethod
    def _error_detail(resp: requests.Response) -> str:
        try:
            data = resp.json()
        except ValueError:
            return resp.text
        if isinstance(data, dict):
            return data.get("message") or data.get("error_description") or data.get("error") or resp.text
        return resp.text

    def list_events(self) -> list[Event]:
        """Fetch every event with its joined category."""
        rows = self._request("GET", "events", params={"select": EVENT_COLUMNS})
        return [Event.from_record(row) for row in rows]

    def list_categories(self) -> list[Category]:
        """Fetch all categories ordered by name."""
        rows = self._request("GET", "categories", params={"select": "*", "order": "name"})
        return [Category.from_record(row) for row in rows]

    def create_event(self, record: dict) -> Event:
        rows = self._request(
            "POST",
            "events",
            params={"select": EVENT_COLUMNS},
            json=[record],
            prefer="return=representation",
        )
        if not rows:
            raise BackendError("Insert returned no rows")
        return Event.from_record(rows[0])

    def update_event(self, event_id: str, record: dict) -> Event:
        rows = self._request(
            "PATCH",
            "events",
            params={"id": f"eq.{event_id}", "select": EVENT_COLUMNS},
            json=record,
            prefer="return=representation",
        )
        if not rows:
            raise BackendError(f"No event with id {event_id!r}")
        return Event.from_record(rows[0])

    def delete_event(self, event_id: str) -> None:
        self._request("DELETE", "events", params={"id": f"eq.{event_id}"})
