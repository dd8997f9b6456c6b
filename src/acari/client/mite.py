# SPDX-License-Identifier: MIT

import logging
from dataclasses import dataclass
from typing import Any, Optional

import pendulum
import requests

from acari import time
from acari.client.client import Client
from acari.client.requester import Requester, convert_payload
from acari.error import BackendError
from acari.model.account import Account
from acari.model.customer import Customer
from acari.model.entity_id import (
    EntityId,
    ProjectId,
    ServiceId,
    TimeEntryId,
    entity_id_from_json,
    entity_id_to_json,
    entity_id_to_path,
)
from acari.model.project import Project
from acari.model.query import DateSpan, Day, mite_date_span_query, resolve_day
from acari.model.service import Service
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.model.user import User
from acari.time import Minutes

logger = logging.getLogger(__name__)


def decode_mite_error(status: int, payload: Any) -> Optional[BackendError]:
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return BackendError(status, payload["error"])
    return None


def _unexpected(payload: Any) -> BackendError:
    return BackendError(400, f"Unexpected response: {payload!r}")


def _unwrap(payload: Any, tag: str) -> dict[str, Any]:
    """Single entity responses are wrapped like {"account": {...}}."""
    if isinstance(payload, dict) and isinstance(payload.get(tag), dict):
        return payload[tag]
    raise _unexpected(payload)


def _filter_tagged(payload: Any, tag: str) -> list[dict[str, Any]]:
    """List responses mix single-key tagged objects, keep the requested kind."""
    if not isinstance(payload, list):
        raise _unexpected(payload)
    return [
        item[tag]
        for item in payload
        if isinstance(item, dict) and isinstance(item.get(tag), dict)
    ]


def _convert_account(raw: dict[str, Any]) -> Account:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "title": raw.get("title") or "",
        "currency": raw.get("currency") or "",
        "created_at": time.datetime_from_str(raw["created_at"]),
    }


def _convert_user(raw: dict[str, Any]) -> User:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "email": raw.get("email") or "",
        "note": raw.get("note") or "",
        "role": raw.get("role") or "",
        "language": raw.get("language") or "",
        "archived": bool(raw.get("archived", False)),
        "created_at": time.datetime_from_str(raw["created_at"]),
    }


def _convert_customer(raw: dict[str, Any]) -> Customer:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "note": raw.get("note") or "",
        "archived": bool(raw.get("archived", False)),
        "created_at": time.datetime_from_str(raw["created_at"]),
    }


def _convert_project(raw: dict[str, Any]) -> Project:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "customer_id": entity_id_from_json(raw["customer_id"]),
        "customer_name": raw.get("customer_name") or "",
        "note": raw.get("note") or "",
        "archived": bool(raw.get("archived", False)),
        "created_at": time.datetime_from_str(raw["created_at"]),
    }


def _convert_service(raw: dict[str, Any]) -> Service:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "note": raw.get("note") or "",
        "billable": bool(raw.get("billable", True)),
        "archived": bool(raw.get("archived", False)),
        "created_at": time.datetime_from_str(raw["created_at"]),
    }


def _convert_time_entry(raw: dict[str, Any]) -> TimeEntry:
    return {
        "id": entity_id_from_json(raw["id"]),
        "date_at": time.date_from_str(raw["date_at"]),
        "minutes": int(raw["minutes"]),
        "customer_id": entity_id_from_json(raw["customer_id"]),
        "customer_name": raw.get("customer_name") or "",
        "project_id": entity_id_from_json(raw["project_id"]),
        "project_name": raw.get("project_name") or "",
        "service_id": entity_id_from_json(raw["service_id"]),
        "service_name": raw.get("service_name") or "",
        "user_id": entity_id_from_json(raw["user_id"]),
        "user_name": raw.get("user_name") or "",
        "note": raw.get("note") or "",
        "billable": bool(raw.get("billable", True)),
        "locked": bool(raw.get("locked", False)),
        "created_at": time.datetime_from_str(raw["created_at"]),
        "updated_at": time.datetime_from_str_optional(raw.get("updated_at")),
    }


@dataclass(frozen=True)
class TrackerRefs:
    tracking_id: Optional[EntityId]
    tracking_minutes: Minutes
    since: Optional[pendulum.DateTime]
    stopped_id: Optional[EntityId]


def _convert_tracker_refs(raw: dict[str, Any]) -> TrackerRefs:
    tracking_id: Optional[EntityId] = None
    tracking_minutes: Minutes = 0
    since: Optional[pendulum.DateTime] = None
    raw_tracking = raw.get("tracking_time_entry")
    if raw_tracking is not None:
        tracking_id = entity_id_from_json(raw_tracking["id"])
        tracking_minutes = int(raw_tracking["minutes"])
        since = time.datetime_from_str_optional(raw_tracking.get("since"))

    stopped_id: Optional[EntityId] = None
    raw_stopped = raw.get("stopped_time_entry")
    if raw_stopped is not None:
        stopped_id = entity_id_from_json(raw_stopped["id"])

    return TrackerRefs(tracking_id, tracking_minutes, since, stopped_id)


class MiteClient(Client):
    """Client for the numeric-id backend (one endpoint per entity kind)."""

    def __init__(
        self,
        domain: str,
        token: str,
        session: Optional[requests.Session] = None,
        scheme: str = "https",
    ) -> None:
        self._requester = Requester(
            domain, "X-MiteApiKey", token, decode_mite_error, session, scheme
        )

    def get_domain(self) -> str:
        return self._requester.domain

    def get_account(self) -> Account:
        payload = self._requester.request("GET", "/account.json")
        return convert_payload(_convert_account, _unwrap(payload, "account"))

    def get_myself(self) -> User:
        payload = self._requester.request("GET", "/myself.json")
        return convert_payload(_convert_user, _unwrap(payload, "user"))

    def get_customers(self) -> list[Customer]:
        payload = self._requester.request("GET", "/customers.json")
        return [
            convert_payload(_convert_customer, raw)
            for raw in _filter_tagged(payload, "customer")
        ]

    def get_projects(self) -> list[Project]:
        payload = self._requester.request("GET", "/projects.json")
        return [
            convert_payload(_convert_project, raw)
            for raw in _filter_tagged(payload, "project")
        ]

    def get_services(self, project_id: ProjectId) -> list[Service]:
        # Services are account wide on this backend
        payload = self._requester.request("GET", "/services.json")
        return [
            convert_payload(_convert_service, raw)
            for raw in _filter_tagged(payload, "service")
        ]

    def get_time_entries(self, date_span: DateSpan) -> list[TimeEntry]:
        payload = self._requester.request(
            "GET",
            f"/time_entries.json?user=current&{mite_date_span_query(date_span)}",
        )
        return [
            convert_payload(_convert_time_entry, raw)
            for raw in _filter_tagged(payload, "time_entry")
        ]

    def get_time_entry(self, entry_id: TimeEntryId) -> TimeEntry:
        payload = self._requester.request(
            "GET", f"/time_entries/{entity_id_to_path(entry_id)}.json"
        )
        return convert_payload(_convert_time_entry, _unwrap(payload, "time_entry"))

    def create_time_entry(
        self,
        day: Day,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: Optional[str],
    ) -> TimeEntry:
        payload = self._requester.request(
            "POST",
            "/time_entries.json",
            {
                "time_entry": {
                    "date_at": time.date_to_str(resolve_day(day, time.today_local())),
                    "project_id": entity_id_to_json(project_id),
                    "service_id": entity_id_to_json(service_id),
                    "minutes": minutes,
                    "note": note or "",
                }
            },
        )
        return convert_payload(_convert_time_entry, _unwrap(payload, "time_entry"))

    def update_time_entry(
        self, entry_id: TimeEntryId, minutes: Minutes, note: Optional[str]
    ) -> None:
        self._requester.request(
            "PATCH",
            f"/time_entries/{entity_id_to_path(entry_id)}.json",
            {"time_entry": {"minutes": minutes, "note": note or ""}},
        )

    def delete_time_entry(self, entry_id: TimeEntryId) -> None:
        self._requester.request(
            "DELETE", f"/time_entries/{entity_id_to_path(entry_id)}.json"
        )

    def get_tracker(self) -> Tracker:
        payload = self._requester.request("GET", "/tracker.json")
        return self.__convert_tracker(_unwrap(payload, "tracker"))

    def create_tracker(self, entry_id: TimeEntryId) -> Tracker:
        payload = self._requester.request(
            "PATCH", f"/tracker/{entity_id_to_path(entry_id)}.json"
        )
        return self.__convert_tracker(_unwrap(payload, "tracker"))

    def delete_tracker(self, entry_id: TimeEntryId) -> Tracker:
        payload = self._requester.request(
            "DELETE", f"/tracker/{entity_id_to_path(entry_id)}.json"
        )
        return self.__convert_tracker(_unwrap(payload, "tracker"))

    def __convert_tracker(self, raw: dict[str, Any]) -> Tracker:
        """
        The tracker resource only carries ids and minutes. The full entries
        are fetched by id, the tracking entry keeps the live minutes of the
        tracker since they keep counting up.
        """
        refs = convert_payload(_convert_tracker_refs, raw)
        logger.debug(
            "tracker: tracking=%s stopped=%s",
            refs.tracking_id is not None,
            refs.stopped_id is not None,
        )

        tracking_time_entry: Optional[TimeEntry] = None
        if refs.tracking_id is not None:
            tracking_time_entry = self.get_time_entry(refs.tracking_id)
            tracking_time_entry["minutes"] = refs.tracking_minutes

        stopped_time_entry: Optional[TimeEntry] = None
        if refs.stopped_id is not None:
            stopped_time_entry = self.get_time_entry(refs.stopped_id)

        return {
            "since": refs.since,
            "tracking_time_entry": tracking_time_entry,
            "stopped_time_entry": stopped_time_entry,
        }
