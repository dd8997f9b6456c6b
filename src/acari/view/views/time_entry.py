# SPDX-License-Identifier: MIT

from itertools import groupby
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.time import Minutes, date_to_str, minutes_to_str
from acari.view.util import print_flat, print_json, styled, to_json_value
from acari.view.views.header import header


def _tracking_minutes(
    entry: TimeEntry, tracker: Optional[Tracker]
) -> Optional[Minutes]:
    """The live minutes if the tracker is running on this entry."""
    if tracker is None:
        return None
    tracking = tracker["tracking_time_entry"]
    if tracking is not None and tracking["id"] == entry["id"]:
        return tracking["minutes"]
    return None


def _entry_minutes(entry: TimeEntry, tracker: Optional[Tracker]) -> Minutes:
    tracking_minutes = _tracking_minutes(entry, tracker)
    return tracking_minutes if tracking_minutes is not None else entry["minutes"]


def _entry_status(entry: TimeEntry, tracker: Optional[Tracker]) -> str:
    if _tracking_minutes(entry, tracker) is not None:
        return "TRACKING"
    if entry["locked"]:
        return "LOCKED"
    return "OPEN"


def entries_view(
    domain: str,
    entries: list[TimeEntry],
    tracker: Optional[Tracker] = None,
    sub_header: str = "entries",
) -> None:
    """
    Time entries grouped by day. A running tracker replaces the minutes of
    its entry with the live count.
    """
    entries = sorted(entries, key=lambda e: e["date_at"])

    match state.get_output_format():
        case "json":
            json_entries: list[dict[str, Any]] = []
            for entry in entries:
                json_entry = to_json_value(entry)
                json_entry["minutes"] = _entry_minutes(entry, tracker)
                json_entry["tracking"] = _tracking_minutes(entry, tracker) is not None
                json_entries.append(json_entry)
            print_json(json_entries)
        case "flat":
            for entry in entries:
                print_flat(
                    date_to_str(entry["date_at"]),
                    entry["customer_name"],
                    entry["project_name"],
                    entry["service_name"],
                    minutes_to_str(_entry_minutes(entry, tracker)),
                    _entry_status(entry, tracker),
                )
        case _:
            header(domain, sub_header)
            if not entries:
                Console().print(" No entries found")
                return
            Console().print(_entries_table(entries, tracker))


def _entries_table(entries: list[TimeEntry], tracker: Optional[Tracker]) -> Table:
    table = Table(box=box.SIMPLE)
    for column in ("Day", "Time", "Customer", "Project", "Service", "Note"):
        table.add_column(column)

    days = [
        (date, list(group))
        for date, group in groupby(entries, lambda e: e["date_at"])
    ]
    total = 0
    for date, group in days:
        day_sum = sum(_entry_minutes(entry, tracker) for entry in group)
        total += day_sum
        table.add_row(
            f"[bold cyan]{date_to_str(date)}[/bold cyan]",
            f"[bold cyan]{minutes_to_str(day_sum)}[/bold cyan]",
        )
        for entry in group:
            match _entry_status(entry, tracker):
                case "TRACKING":
                    style: Optional[str] = "yellow"
                case "LOCKED":
                    style = "red"
                case _:
                    style = None
            table.add_row(
                "",
                styled(minutes_to_str(_entry_minutes(entry, tracker)), style),
                styled(entry["customer_name"], style),
                styled(entry["project_name"], style),
                styled(entry["service_name"], style),
                styled(entry["note"], style),
            )

    if len(days) > 1:
        table.add_row("", "-----")
        table.add_row("", f"[bold]{minutes_to_str(total)}[/bold]")
    return table
