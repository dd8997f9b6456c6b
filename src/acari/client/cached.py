# SPDX-License-Identifier: MIT

import json
import logging
import shutil
from pathlib import Path
from typing import Any, Callable, Optional, cast
from urllib.parse import quote

import pendulum

from acari.client.client import Client
from acari.error import InternalError, TransportError
from acari.model.account import Account
from acari.model.customer import Customer
from acari.model.entity_id import (
    ProjectId,
    ServiceId,
    TimeEntryId,
    entity_id_to_encoded,
)
from acari.model.project import Project
from acari.model.query import DateSpan, Day
from acari.model.serialization import entity_from_serialized, entity_to_serializable
from acari.model.service import Service
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.model.user import User
from acari.time import Minutes

logger = logging.getLogger(__name__)


def clear_cache(cache_root: Path) -> None:
    """Remove every cached file of every domain."""
    if not cache_root.exists():
        return
    try:
        shutil.rmtree(cache_root)
    except OSError as e:
        raise TransportError(f"Unable to clear cache {cache_root}: {e}") from e


class CachedClient(Client):
    """
    Wraps another client and keeps the rarely changing reference data
    (account, user, customers, projects, services) in JSON files.

    Time entries and the tracker are never cached and writes do not
    invalidate anything, a cached list is refreshed once it is older than
    the ttl. A failed refresh keeps the old file.
    """

    def __init__(
        self, client: Client, cache_dir: Path, cache_ttl: pendulum.Duration
    ) -> None:
        self._client = client
        self._cache_dir = cache_dir
        self._cache_ttl = cache_ttl
        try:
            self._cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TransportError(f"Unable to create cache {cache_dir}: {e}") from e

    def __file_age(self, cache_file: Path) -> Optional[pendulum.Duration]:
        try:
            modified = cache_file.stat().st_mtime
        except FileNotFoundError:
            return None
        return pendulum.now("UTC") - pendulum.from_timestamp(modified)

    def __cache_data(self, cache_name: str, fetch_data: Callable[[], Any]) -> Any:
        cache_file = self._cache_dir / cache_name
        age = self.__file_age(cache_file)

        if age is not None and age < self._cache_ttl:
            logger.debug("cache hit %s", cache_file)
            try:
                return self.__read(cache_file)
            except (OSError, TypeError, ValueError, InternalError) as e:
                # Another invocation may have been writing it, fetch instead
                logger.debug("unreadable cache file %s: %s", cache_file, e)

        logger.debug("cache miss %s", cache_file)
        data = fetch_data()
        self.__write(cache_file, data)
        return data

    def __read(self, cache_file: Path) -> Any:
        serialized = json.loads(cache_file.read_text())
        if isinstance(serialized, list):
            return [entity_from_serialized(item) for item in serialized]
        return entity_from_serialized(serialized)

    def __write(self, cache_file: Path, data: Any) -> None:
        if isinstance(data, list):
            serialized: Any = [entity_to_serializable(item) for item in data]
        else:
            serialized = entity_to_serializable(data)
        try:
            cache_file.write_text(json.dumps(serialized))
        except OSError as e:
            raise TransportError(f"Unable to write cache {cache_file}: {e}") from e
        logger.debug("cache written %s", cache_file)

    def get_domain(self) -> str:
        return self._client.get_domain()

    def get_account(self) -> Account:
        return cast(
            Account, self.__cache_data("account.json", self._client.get_account)
        )

    def get_myself(self) -> User:
        return cast(User, self.__cache_data("user.json", self._client.get_myself))

    def get_customers(self) -> list[Customer]:
        return cast(
            list[Customer],
            self.__cache_data("customers.json", self._client.get_customers),
        )

    def get_projects(self) -> list[Project]:
        return cast(
            list[Project],
            self.__cache_data("projects.json", self._client.get_projects),
        )

    def get_services(self, project_id: ProjectId) -> list[Service]:
        return cast(
            list[Service],
            self.__cache_data(
                f"services-{quote(entity_id_to_encoded(project_id), safe='')}.json",
                lambda: self._client.get_services(project_id),
            ),
        )

    def get_time_entries(self, date_span: DateSpan) -> list[TimeEntry]:
        return self._client.get_time_entries(date_span)

    def create_time_entry(
        self,
        day: Day,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: Optional[str],
    ) -> TimeEntry:
        return self._client.create_time_entry(
            day, project_id, service_id, minutes, note
        )

    def update_time_entry(
        self, entry_id: TimeEntryId, minutes: Minutes, note: Optional[str]
    ) -> None:
        self._client.update_time_entry(entry_id, minutes, note)

    def delete_time_entry(self, entry_id: TimeEntryId) -> None:
        self._client.delete_time_entry(entry_id)

    def get_tracker(self) -> Tracker:
        return self._client.get_tracker()

    def create_tracker(self, entry_id: TimeEntryId) -> Tracker:
        return self._client.create_tracker(entry_id)

    def delete_tracker(self, entry_id: TimeEntryId) -> Tracker:
        return self._client.delete_tracker(entry_id)
