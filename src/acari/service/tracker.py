# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from acari import time
from acari.client.client import Client
from acari.model.query import day_of
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.service.lookup import find_slot
from acari.service.time_entry import get_day_entries, slot_entries
from acari.time import Minutes

logger = logging.getLogger(__name__)


def start_tracking(
    client: Client,
    customer_name: str,
    project_name: str,
    service_name: str,
    offset: Optional[Minutes] = None,
    note: Optional[str] = None,
) -> tuple[TimeEntry, Tracker]:
    """
    Start the tracker on today's entry of the slot.

    With an offset a fresh entry starting at that many minutes is created.
    Without one the most recently created entry of the slot is continued,
    or an empty one is created if there is none yet.
    """
    _, project, service = find_slot(client, customer_name, project_name, service_name)
    today = day_of(time.today_local())

    entry: Optional[TimeEntry] = None
    if offset is None:
        existing = slot_entries(
            get_day_entries(client, today), project["id"], service["id"]
        )
        if existing:
            entry = max(existing, key=lambda e: e["created_at"])
            logger.debug("continuing time entry %s", entry["id"])

    if entry is None:
        logger.debug("creating time entry to track")
        entry = client.create_time_entry(
            today, project["id"], service["id"], offset or 0, note
        )

    tracker = client.create_tracker(entry["id"])
    return entry, tracker


def stop_tracking(client: Client) -> tuple[Optional[TimeEntry], Tracker]:
    """
    Stop whatever is tracking. If nothing is but an entry was stopped
    recently, that entry is reported again.
    """
    tracker = client.get_tracker()
    tracking = tracker["tracking_time_entry"]
    if tracking is not None:
        logger.debug("stopping tracker of time entry %s", tracking["id"])
        stopped = client.delete_tracker(tracking["id"])
        # The stopped view is missing on backends that forget a stopped timer
        if stopped["stopped_time_entry"] is None:
            stopped["stopped_time_entry"] = tracking
        return stopped["stopped_time_entry"], stopped
    if tracker["stopped_time_entry"] is not None:
        return tracker["stopped_time_entry"], tracker
    return None, tracker


def get_tracking(client: Client) -> tuple[Optional[TimeEntry], Tracker]:
    tracker = client.get_tracker()
    if tracker["tracking_time_entry"] is not None:
        return tracker["tracking_time_entry"], tracker
    return tracker["stopped_time_entry"], tracker
