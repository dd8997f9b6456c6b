# SPDX-License-Identifier: MIT

import json
from copy import deepcopy
from typing import Any, Optional
from urllib.parse import urlsplit

import pendulum
import pytest

from acari import time
from acari.client.client import Client
from acari.error import BackendError
from acari.model.account import Account
from acari.model.customer import Customer
from acari.model.entity_id import (
    NumericId,
    ProjectId,
    ServiceId,
    TimeEntryId,
)
from acari.model.project import Project
from acari.model.query import DateSpan, Day, resolve_date_span, resolve_day
from acari.model.service import Service
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker, empty_tracker
from acari.model.user import User
from acari.time import Minutes

TODAY = pendulum.date(2024, 3, 4)


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        reason: str = "OK",
        body: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        if body is not None:
            self.content = body.encode()
        elif payload is None:
            self.content = b""
        else:
            self.content = json.dumps(payload).encode()

    def json(self) -> Any:
        return json.loads(self.content)


class FakeSession:
    """Replays canned responses per (method, path) and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Any]] = {}
        self.requests: list[dict[str, Any]] = []

    def add(
        self,
        method: str,
        uri: str,
        payload: Any = None,
        status_code: int = 200,
        reason: str = "OK",
        body: Optional[str] = None,
    ) -> None:
        self.routes.setdefault((method, uri), []).append(
            FakeResponse(status_code, payload, reason, body)
        )

    def add_error(self, method: str, uri: str, error: Exception) -> None:
        self.routes.setdefault((method, uri), []).append(error)

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        json: Any = None,
    ) -> FakeResponse:
        parts = urlsplit(url)
        uri = f"{parts.path}?{parts.query}" if parts.query else parts.path
        self.requests.append(
            {"method": method, "uri": uri, "headers": headers, "json": json}
        )
        responses = self.routes.get((method, uri))
        if not responses:
            raise AssertionError(f"unexpected request {method} {uri}")
        # The last response of a route keeps being replayed
        response = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(response, Exception):
            raise response
        return response


def _created(offset: int) -> pendulum.DateTime:
    return pendulum.datetime(2024, 1, 1, tz="UTC").add(minutes=offset)


class FakeClient(Client):
    """
    In-memory backend with one customer "acme", its projects "web" and
    "app" and the services "dev" and "meeting". Counts calls per method.
    """

    def __init__(self) -> None:
        self.calls: dict[str, int] = {}
        self.fail_with: Optional[Exception] = None
        self.account: Account = {
            "id": NumericId(1),
            "name": "demo",
            "title": "Demo Inc.",
            "currency": "EUR",
            "created_at": _created(0),
        }
        self.user: User = {
            "id": NumericId(10),
            "name": "Jane Doe",
            "email": "jane@example.com",
            "note": "",
            "role": "owner",
            "language": "en",
            "archived": False,
            "created_at": _created(0),
        }
        self.customers: list[Customer] = [
            {
                "id": NumericId(100),
                "name": "acme",
                "note": "",
                "archived": False,
                "created_at": _created(0),
            },
            {
                "id": NumericId(101),
                "name": "globex",
                "note": "",
                "archived": True,
                "created_at": _created(0),
            },
        ]
        self.projects: list[Project] = [
            {
                "id": NumericId(200),
                "name": "web",
                "customer_id": NumericId(100),
                "customer_name": "acme",
                "note": "",
                "archived": False,
                "created_at": _created(0),
            },
            {
                "id": NumericId(201),
                "name": "app",
                "customer_id": NumericId(100),
                "customer_name": "acme",
                "note": "",
                "archived": False,
                "created_at": _created(0),
            },
        ]
        self.services: list[Service] = [
            {
                "id": NumericId(300),
                "name": "dev",
                "note": "",
                "billable": True,
                "archived": False,
                "created_at": _created(0),
            },
            {
                "id": NumericId(301),
                "name": "meeting",
                "note": "",
                "billable": False,
                "archived": False,
                "created_at": _created(0),
            },
        ]
        self.entries: list[TimeEntry] = []
        self.tracker: Tracker = empty_tracker()
        self._next_id = 1000

    def _count(self, name: str) -> None:
        self.calls[name] = self.calls.get(name, 0) + 1
        if self.fail_with is not None:
            raise self.fail_with

    def _find_entry(self, entry_id: TimeEntryId) -> TimeEntry:
        for entry in self.entries:
            if entry["id"] == entry_id:
                return entry
        raise BackendError(404, f"No time entry {entry_id}")

    def seed_entry(
        self,
        date: pendulum.Date,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: str = "",
    ) -> TimeEntry:
        project = next(p for p in self.projects if p["id"] == project_id)
        service = next(s for s in self.services if s["id"] == service_id)
        self._next_id += 1
        entry: TimeEntry = {
            "id": NumericId(self._next_id),
            "date_at": date,
            "minutes": minutes,
            "customer_id": project["customer_id"],
            "customer_name": project["customer_name"],
            "project_id": project["id"],
            "project_name": project["name"],
            "service_id": service["id"],
            "service_name": service["name"],
            "user_id": self.user["id"],
            "user_name": self.user["name"],
            "note": note,
            "billable": service["billable"],
            "locked": False,
            "created_at": _created(self._next_id),
            "updated_at": None,
        }
        self.entries.append(entry)
        return deepcopy(entry)

    def get_domain(self) -> str:
        return "demo.example.com"

    def get_account(self) -> Account:
        self._count("get_account")
        return deepcopy(self.account)

    def get_myself(self) -> User:
        self._count("get_myself")
        return deepcopy(self.user)

    def get_customers(self) -> list[Customer]:
        self._count("get_customers")
        return deepcopy(self.customers)

    def get_projects(self) -> list[Project]:
        self._count("get_projects")
        return deepcopy(self.projects)

    def get_services(self, project_id: ProjectId) -> list[Service]:
        self._count("get_services")
        return deepcopy(self.services)

    def get_time_entries(self, date_span: DateSpan) -> list[TimeEntry]:
        self._count("get_time_entries")
        start, end = resolve_date_span(date_span, time.today_local())
        return [deepcopy(e) for e in self.entries if start <= e["date_at"] <= end]

    def create_time_entry(
        self,
        day: Day,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: Optional[str],
    ) -> TimeEntry:
        self._count("create_time_entry")
        date = resolve_day(day, time.today_local())
        return self.seed_entry(date, project_id, service_id, minutes, note or "")

    def update_time_entry(
        self, entry_id: TimeEntryId, minutes: Minutes, note: Optional[str]
    ) -> None:
        self._count("update_time_entry")
        entry = self._find_entry(entry_id)
        entry["minutes"] = minutes
        entry["note"] = note or ""

    def delete_time_entry(self, entry_id: TimeEntryId) -> None:
        self._count("delete_time_entry")
        self.entries.remove(self._find_entry(entry_id))

    def get_tracker(self) -> Tracker:
        self._count("get_tracker")
        return deepcopy(self.tracker)

    def create_tracker(self, entry_id: TimeEntryId) -> Tracker:
        self._count("create_tracker")
        self.tracker = {
            "since": pendulum.datetime(2024, 3, 4, 9, tz="UTC"),
            "tracking_time_entry": deepcopy(self._find_entry(entry_id)),
            "stopped_time_entry": None,
        }
        return deepcopy(self.tracker)

    def delete_tracker(self, entry_id: TimeEntryId) -> Tracker:
        self._count("delete_tracker")
        self.tracker = {
            "since": None,
            "tracking_time_entry": None,
            "stopped_time_entry": deepcopy(self._find_entry(entry_id)),
        }
        return deepcopy(self.tracker)


@pytest.fixture
def frozen_today(monkeypatch: pytest.MonkeyPatch) -> pendulum.Date:
    monkeypatch.setattr(time, "today_local", lambda: TODAY)
    return TODAY


@pytest.fixture
def fake_client(frozen_today: pendulum.Date) -> FakeClient:
    return FakeClient()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
