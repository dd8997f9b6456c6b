# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional

import pendulum
import requests

from acari import time
from acari.client.client import Client
from acari.client.requester import Requester, convert_payload
from acari.error import BackendError, InternalError
from acari.model.account import Account
from acari.model.customer import Customer
from acari.model.entity_id import (
    CustomerId,
    ProjectId,
    ServiceId,
    TextualId,
    TimeEntryId,
    UserId,
    entity_id_from_encoded,
    entity_id_from_json,
    entity_id_to_encoded,
    entity_id_to_json,
    entity_id_to_path,
)
from acari.model.project import Project
from acari.model.query import DateSpan, Day, everhour_date_span_query, resolve_day
from acari.model.service import Service
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker, empty_tracker
from acari.model.user import User
from acari.time import Minutes

logger = logging.getLogger(__name__)

TIME_ENTRY_ID_SEPARATOR = "|"


def decode_everhour_error(status: int, payload: Any) -> Optional[BackendError]:
    if (
        isinstance(payload, dict)
        and isinstance(payload.get("code"), int)
        and isinstance(payload.get("message"), str)
    ):
        return BackendError(payload["code"], payload["message"])
    return None


def build_time_entry_id(
    user_id: UserId, service_id: ServiceId, date: pendulum.Date
) -> TimeEntryId:
    """
    This backend has no time entry ids, an entry is identified by the user,
    the task and the day. The composite id is
    "<encoded user>|<encoded task>|YYYY-MM-DD".
    """
    return TextualId(
        TIME_ENTRY_ID_SEPARATOR.join(
            [
                entity_id_to_encoded(user_id),
                entity_id_to_encoded(service_id),
                time.date_to_str(date),
            ]
        )
    )


def parse_time_entry_id(
    entry_id: TimeEntryId,
) -> tuple[UserId, ServiceId, pendulum.Date]:
    if not isinstance(entry_id, TextualId):
        raise InternalError(f"Invalid time entry id (not textual): {entry_id}")
    parts = entry_id.value.split(TIME_ENTRY_ID_SEPARATOR)
    if len(parts) != 3:
        raise InternalError(f"Invalid time entry id (invalid parts): {entry_id}")
    try:
        date = time.date_from_str(parts[2])
    except ValueError as e:
        raise InternalError(f"Invalid time entry id (invalid date): {entry_id}") from e
    return entity_id_from_encoded(parts[0]), entity_id_from_encoded(parts[1]), date


def _seconds_to_minutes(seconds: Optional[int]) -> Minutes:
    if seconds is None:
        return 0
    return int(seconds) // 60


def _minutes_to_seconds(minutes: Minutes) -> int:
    return minutes * 60


def _parse_timestamp(value: str) -> pendulum.DateTime:
    # Either "YYYY-MM-DD HH:MM:SS" or a bare "YYYY-MM-DD", both UTC
    return time.datetime_from_str(value)


def _is_open(raw: dict[str, Any]) -> bool:
    return raw.get("status") == "open"


def _convert_account(raw_user: dict[str, Any]) -> Account:
    team = raw_user["team"]
    return {
        "id": entity_id_from_json(team["id"]),
        "name": team["name"],
        "title": team["name"],
        "currency": (team.get("currencyDetails") or {}).get("code", ""),
        "created_at": _parse_timestamp(team["createdAt"]),
    }


def _convert_user(raw: dict[str, Any]) -> User:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "email": raw.get("email") or "",
        "note": raw.get("headline") or "",
        "role": raw.get("role") or "",
        "language": "",
        "archived": bool(raw.get("isSuspended", False)),
        "created_at": _parse_timestamp(raw["createdAt"]),
    }


def _convert_project(raw: dict[str, Any]) -> Project:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "customer_id": entity_id_from_json(raw["workspaceId"]),
        "customer_name": raw.get("workspaceName") or "",
        "note": "",
        "archived": not _is_open(raw),
        "created_at": _parse_timestamp(raw["createdAt"]),
    }


def _convert_service(raw: dict[str, Any]) -> Service:
    return {
        "id": entity_id_from_json(raw["id"]),
        "name": raw["name"],
        "note": raw.get("iteration") or "",
        "billable": True,
        "archived": not _is_open(raw),
        "created_at": _parse_timestamp(raw["createdAt"]),
    }


def _task_project_id(task: dict[str, Any]) -> Optional[ProjectId]:
    """A task may belong to several projects, the first one is shown."""
    task_projects = task.get("projects") or []
    if not task_projects:
        return None
    return entity_id_from_json(task_projects[0])


def group_customers(projects: list[Project]) -> list[Customer]:
    """
    Customers do not exist on this backend, they are the workspaces the
    projects belong to. A customer is as old as its oldest project and is
    archived only when all of its projects are.
    """
    customers: dict[CustomerId, Customer] = {}
    for project in projects:
        customer = customers.get(project["customer_id"])
        if customer is None:
            customers[project["customer_id"]] = {
                "id": project["customer_id"],
                "name": project["customer_name"],
                "note": "",
                "archived": project["archived"],
                "created_at": project["created_at"],
            }
            continue
        if project["created_at"] < customer["created_at"]:
            customer["created_at"] = project["created_at"]
        if not project["archived"]:
            customer["archived"] = False
    return list(customers.values())


class EverhourClient(Client):
    """Client for the string-id backend (tasks, workspaces and timers)."""

    def __init__(
        self,
        domain: str,
        token: str,
        session: Optional[requests.Session] = None,
        scheme: str = "https",
    ) -> None:
        self._requester = Requester(
            domain, "X-Api-Key", token, decode_everhour_error, session, scheme
        )

    def get_domain(self) -> str:
        return self._requester.domain

    def get_account(self) -> Account:
        return convert_payload(_convert_account, self.__get_raw_user())

    def get_myself(self) -> User:
        return convert_payload(_convert_user, self.__get_raw_user())

    def get_customers(self) -> list[Customer]:
        return group_customers(self.get_projects())

    def get_projects(self) -> list[Project]:
        return [
            convert_payload(_convert_project, raw)
            for raw in self.__get_raw_projects()
        ]

    def get_services(self, project_id: ProjectId) -> list[Service]:
        payload = self._requester.request(
            "GET", f"/projects/{entity_id_to_path(project_id)}/tasks"
        )
        return [
            convert_payload(_convert_service, raw) for raw in self.__as_list(payload)
        ]

    def get_time_entries(self, date_span: DateSpan) -> list[TimeEntry]:
        user = self.get_myself()
        projects = self.__get_project_map()
        payload = self._requester.request(
            "GET", f"/users/me/time?{everhour_date_span_query(date_span)}"
        )

        entries: list[TimeEntry] = []
        for raw in self.__as_list(payload):
            entry = convert_payload(
                lambda r: self.__convert_time_entry(r, projects, user), raw
            )
            if entry is not None:
                entries.append(entry)
        return entries

    def create_time_entry(
        self,
        day: Day,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: Optional[str],
    ) -> TimeEntry:
        user = self.get_myself()
        projects = self.__get_project_map()
        date = resolve_day(day, time.today_local())

        payload = self.__post_time_record(user["id"], service_id, date, minutes, note)

        entry = convert_payload(
            lambda r: self.__convert_time_entry(r, projects, user), payload
        )
        if entry is None:
            raise InternalError(
                f"Created time entry does not belong to a known project: {payload!r}"
            )
        return entry

    def update_time_entry(
        self, entry_id: TimeEntryId, minutes: Minutes, note: Optional[str]
    ) -> None:
        user_id, service_id, date = parse_time_entry_id(entry_id)
        self.__post_time_record(user_id, service_id, date, minutes, note)

    def delete_time_entry(self, entry_id: TimeEntryId) -> None:
        user_id, service_id, date = parse_time_entry_id(entry_id)
        self._requester.request(
            "DELETE",
            f"/tasks/{entity_id_to_path(service_id)}/time",
            {"user": entity_id_to_json(user_id), "date": time.date_to_str(date)},
        )

    def get_tracker(self) -> Tracker:
        timer = self._requester.request("GET", "/timers/current")
        entry = self.__entry_from_timer(timer)
        if entry is None:
            # Without an active timer nothing distinguishes "stopped" from idle
            return empty_tracker()
        return {
            "since": entry["created_at"],
            "tracking_time_entry": entry,
            "stopped_time_entry": None,
        }

    def create_tracker(self, entry_id: TimeEntryId) -> Tracker:
        _, service_id, date = parse_time_entry_id(entry_id)
        timer = self._requester.request(
            "POST",
            "/timers",
            {"task": entity_id_to_json(service_id), "userDate": time.date_to_str(date)},
        )
        entry = self.__entry_from_timer(timer)
        return {
            "since": entry["created_at"] if entry is not None else time.now_utc(),
            "tracking_time_entry": entry,
            "stopped_time_entry": None,
        }

    def delete_tracker(self, entry_id: TimeEntryId) -> Tracker:
        timer = self._requester.request("DELETE", "/timers/current")
        return {
            "since": None,
            "tracking_time_entry": None,
            "stopped_time_entry": self.__entry_from_timer(timer, require_active=False),
        }

    def __get_raw_user(self) -> dict[str, Any]:
        payload = self._requester.request("GET", "/users/me")
        if not isinstance(payload, dict):
            raise InternalError(f"Unexpected user payload: {payload!r}")
        return payload

    def __get_raw_projects(self) -> list[dict[str, Any]]:
        return self.__as_list(self._requester.request("GET", "/projects"))

    def __get_project_map(self) -> dict[ProjectId, Project]:
        return {project["id"]: project for project in self.get_projects()}

    def __as_list(self, payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, list):
            raise InternalError(f"Expected a list payload: {payload!r}")
        return payload

    def __post_time_record(
        self,
        user_id: UserId,
        service_id: ServiceId,
        date: pendulum.Date,
        minutes: Minutes,
        note: Optional[str],
    ) -> Any:
        return self._requester.request(
            "POST",
            f"/tasks/{entity_id_to_path(service_id)}/time",
            {
                "date": time.date_to_str(date),
                "user": entity_id_to_json(user_id),
                "time": _minutes_to_seconds(minutes),
                "comment": note,
            },
        )

    def __convert_time_entry(
        self, raw: dict[str, Any], projects: dict[ProjectId, Project], user: User
    ) -> Optional[TimeEntry]:
        task = raw.get("task")
        if task is None:
            return None
        project = next(
            (
                projects[project_id]
                for project_id in map(entity_id_from_json, task.get("projects") or [])
                if project_id in projects
            ),
            None,
        )
        if project is None:
            logger.debug("skipping time entry of task %s without project", task["id"])
            return None

        user_id = entity_id_from_json(raw["user"])
        service_id = entity_id_from_json(task["id"])
        date = time.date_from_str(raw["date"])
        return {
            "id": build_time_entry_id(user_id, service_id, date),
            "date_at": date,
            "minutes": _seconds_to_minutes(raw.get("time")),
            "customer_id": project["customer_id"],
            "customer_name": project["customer_name"],
            "project_id": project["id"],
            "project_name": project["name"],
            "service_id": service_id,
            "service_name": task["name"],
            "user_id": user["id"],
            "user_name": user["name"],
            "note": raw.get("comment") or "",
            "billable": True,
            "locked": bool(raw.get("isLocked", False)),
            "created_at": _parse_timestamp(raw["createdAt"]),
            "updated_at": None,
        }

    def __entry_from_timer(
        self, timer: Any, require_active: bool = True
    ) -> Optional[TimeEntry]:
        """
        Build the entry a timer is running for. The timer only names its task,
        the project is looked up to fill in the customer and project names.
        """
        if not isinstance(timer, dict):
            return None
        task = timer.get("task")
        user = timer.get("user")
        if task is None or user is None:
            return None
        if require_active and timer.get("status") != "active":
            return None

        project: Optional[Project] = None
        project_id = convert_payload(_task_project_id, task)
        if project_id is not None:
            raw_project = self._requester.request(
                "GET", f"/projects/{entity_id_to_path(project_id)}"
            )
            project = convert_payload(_convert_project, raw_project)

        return convert_payload(
            lambda t: self.__convert_timer(t, task, user, project), timer
        )

    def __convert_timer(
        self,
        timer: dict[str, Any],
        task: dict[str, Any],
        user: dict[str, Any],
        project: Optional[Project],
    ) -> TimeEntry:
        started_at = (
            _parse_timestamp(timer["startedAt"])
            if timer.get("startedAt")
            else time.now_utc()
        )
        date = (
            time.date_from_str(timer["userDate"])
            if timer.get("userDate")
            else started_at.date()
        )
        user_id = entity_id_from_json(user["id"])
        service_id = entity_id_from_json(task["id"])
        return {
            "id": build_time_entry_id(user_id, service_id, date),
            "date_at": date,
            "minutes": _seconds_to_minutes(timer.get("duration")),
            "customer_id": (
                project["customer_id"] if project is not None else TextualId("")
            ),
            "customer_name": project["customer_name"] if project is not None else "",
            "project_id": project["id"] if project is not None else TextualId(""),
            "project_name": project["name"] if project is not None else "",
            "service_id": service_id,
            "service_name": task["name"],
            "user_id": user_id,
            "user_name": user.get("name") or "",
            "note": timer.get("comment") or "",
            "billable": True,
            "locked": False,
            "created_at": started_at,
            "updated_at": None,
        }
