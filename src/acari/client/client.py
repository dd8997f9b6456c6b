# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

from acari.model.account import Account
from acari.model.customer import Customer
from acari.model.entity_id import ProjectId, ServiceId, TimeEntryId
from acari.model.project import Project
from acari.model.query import DateSpan, Day
from acari.model.service import Service
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.model.user import User
from acari.time import Minutes


class Client(ABC):
    """The one capability every time tracking backend has to provide."""

    @abstractmethod
    def get_domain(self) -> str:
        pass

    @abstractmethod
    def get_account(self) -> Account:
        pass

    @abstractmethod
    def get_myself(self) -> User:
        pass

    @abstractmethod
    def get_customers(self) -> list[Customer]:
        pass

    @abstractmethod
    def get_projects(self) -> list[Project]:
        pass

    @abstractmethod
    def get_services(self, project_id: ProjectId) -> list[Service]:
        pass

    @abstractmethod
    def get_time_entries(self, date_span: DateSpan) -> list[TimeEntry]:
        pass

    @abstractmethod
    def create_time_entry(
        self,
        day: Day,
        project_id: ProjectId,
        service_id: ServiceId,
        minutes: Minutes,
        note: Optional[str],
    ) -> TimeEntry:
        pass

    @abstractmethod
    def update_time_entry(
        self, entry_id: TimeEntryId, minutes: Minutes, note: Optional[str]
    ) -> None:
        pass

    @abstractmethod
    def delete_time_entry(self, entry_id: TimeEntryId) -> None:
        pass

    @abstractmethod
    def get_tracker(self) -> Tracker:
        pass

    @abstractmethod
    def create_tracker(self, entry_id: TimeEntryId) -> Tracker:
        pass

    @abstractmethod
    def delete_tracker(self, entry_id: TimeEntryId) -> Tracker:
        pass
