# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.time_entry import TimeEntry
from acari.model.tracker import Tracker
from acari.time import (
    date_to_str,
    datetime_to_display_local_datetime_str,
    datetime_to_iso_str_optional,
    minutes_to_str,
)
from acari.view.util import print_flat, print_json, styled, to_json_value
from acari.view.views.header import header

NOT_TRACKING = "Currently not tracking anything"


def _is_same(entry: TimeEntry, other: Optional[TimeEntry]) -> bool:
    return other is not None and other["id"] == entry["id"]


def tracking_view(domain: str, entry: Optional[TimeEntry], tracker: Tracker) -> None:
    """Show the entry being tracked, or the one just stopped."""
    tracking = tracker["tracking_time_entry"]
    stopped = tracker["stopped_time_entry"]

    match state.get_output_format():
        case "json":
            if entry is not None and tracking is not None and _is_same(entry, tracking):
                print_json(
                    {
                        "entry": to_json_value(entry),
                        "tracking": to_json_value(tracking),
                        "since": datetime_to_iso_str_optional(tracker["since"]),
                    }
                )
            elif entry is not None and _is_same(entry, stopped):
                print_json({"stopped": to_json_value(entry)})
            else:
                print_json({})
        case "flat":
            if entry is not None and tracking is not None and _is_same(entry, tracking):
                print_flat(
                    f"Tracking {date_to_str(entry['date_at'])}",
                    entry["customer_name"],
                    entry["project_name"],
                    entry["service_name"],
                    minutes_to_str(tracking["minutes"]),
                )
            elif entry is not None and _is_same(entry, stopped):
                print_flat(
                    f"Stopped {date_to_str(entry['date_at'])}",
                    entry["customer_name"],
                    entry["project_name"],
                    entry["service_name"],
                    minutes_to_str(entry["minutes"]),
                )
            else:
                print_flat("NotTracking")
        case _:
            header(domain, "tracking")
            console = Console()
            if entry is not None and tracking is not None and _is_same(entry, tracking):
                if tracker["since"] is not None:
                    since = datetime_to_display_local_datetime_str(tracker["since"])
                    console.print(f" Currently tracking since {since}")
                else:
                    console.print(" Currently tracking")
                console.print(_entry_table(entry, tracking["minutes"], "yellow"))
            elif entry is not None and _is_same(entry, stopped):
                console.print(" Stopped tracking")
                console.print(_entry_table(entry, entry["minutes"], None))
            else:
                console.print(f" {NOT_TRACKING}")


def _entry_table(entry: TimeEntry, minutes: int, time_style: Optional[str]) -> Table:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("property", style="cyan")
    table.add_column("value")
    table.add_row("Day", date_to_str(entry["date_at"]))
    table.add_row("Customer", styled(entry["customer_name"], None))
    table.add_row("Project", styled(entry["project_name"], None))
    table.add_row("Service", styled(entry["service_name"], None))
    table.add_row("Time", styled(minutes_to_str(minutes), time_style))
    return table
