# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from acari import time
from acari.client.client import Client
from acari.model.entity_id import ProjectId, ServiceId
from acari.model.query import Day, date_span_of_day, day_of, resolve_day
from acari.model.time_entry import TimeEntry
from acari.service.lookup import find_slot
from acari.time import Minutes

logger = logging.getLogger(__name__)


def get_day_entries(client: Client, day: Day) -> list[TimeEntry]:
    date = resolve_day(day, time.today_local())
    return [
        entry
        for entry in client.get_time_entries(date_span_of_day(day_of(date)))
        if entry["date_at"] == date
    ]


def slot_entries(
    entries: list[TimeEntry], project_id: ProjectId, service_id: ServiceId
) -> list[TimeEntry]:
    return [
        entry
        for entry in entries
        if entry["project_id"] == project_id and entry["service_id"] == service_id
    ]


def set_time_entry(
    client: Client,
    day: Day,
    customer_name: str,
    project_name: str,
    service_name: str,
    minutes: Minutes,
    note: Optional[str] = None,
) -> list[TimeEntry]:
    """
    Make the slot (day, project, service) hold exactly one entry with the
    given minutes.

    The first existing entry of the slot is updated and any further ones are
    deleted, otherwise a new entry is created. This is not atomic, a failure
    half way leaves duplicates which the next run cleans up. Returns all
    entries of the day afterwards.
    """
    _, project, service = find_slot(client, customer_name, project_name, service_name)
    date = resolve_day(day, time.today_local())
    existing = slot_entries(get_day_entries(client, day), project["id"], service["id"])

    if existing:
        first, *duplicates = existing
        logger.debug("updating time entry %s to %d minutes", first["id"], minutes)
        client.update_time_entry(
            first["id"], minutes, note if note is not None else first["note"]
        )
        for duplicate in duplicates:
            logger.debug("deleting duplicate time entry %s", duplicate["id"])
            client.delete_time_entry(duplicate["id"])
    else:
        logger.debug("creating time entry for %s", time.date_to_str(date))
        client.create_time_entry(
            day_of(date), project["id"], service["id"], minutes, note
        )

    return get_day_entries(client, day_of(date))


def add_time_entry(
    client: Client,
    day: Day,
    customer_name: str,
    project_name: str,
    service_name: str,
    minutes: Minutes,
    note: Optional[str] = None,
) -> list[TimeEntry]:
    """Always create a new entry, even if the slot already has one."""
    _, project, service = find_slot(client, customer_name, project_name, service_name)
    date = resolve_day(day, time.today_local())

    client.create_time_entry(day_of(date), project["id"], service["id"], minutes, note)

    return get_day_entries(client, day_of(date))
