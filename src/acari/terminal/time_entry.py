# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from acari.model.query import DateSpan, Day, today
from acari.service.time_entry import add_time_entry, set_time_entry
from acari.terminal.parse import parse_date_span, parse_day_optional, parse_minutes
from acari.terminal.util import get_client, handle_errors
from acari.view.views.time_entry import entries_view

SPAN_HELP = (
    "today, yesterday, this-week, last-week, this-month, last-month, "
    "YYYY-MM-DD or YYYY-MM-DD/YYYY-MM-DD"
)

CustomerArgument = Annotated[str, typer.Argument(help="Customer name")]
ProjectArgument = Annotated[str, typer.Argument(help="Project name")]
ServiceArgument = Annotated[str, typer.Argument(help="Service name")]
MinutesArgument = Annotated[
    int,
    typer.Argument(parser=parse_minutes, help="Minutes or H:MM", metavar="TIME"),
]
DayArgument = Annotated[
    Optional[Day],
    typer.Argument(
        parser=parse_day_optional,
        help="today, yesterday or YYYY-MM-DD (default: today)",
        metavar="[DAY]",
    ),
]
NoteOption = Annotated[
    Optional[str], typer.Option("--note", "-n", help="Note of the time entry")
]


@handle_errors
def entries(
    span: Annotated[
        DateSpan,
        typer.Argument(parser=parse_date_span, help=SPAN_HELP, metavar="SPAN"),
    ],
) -> None:
    """Show time entries of a day, week, month or range."""
    client = get_client()
    tracker = client.get_tracker()
    entries_view(client.get_domain(), client.get_time_entries(span), tracker)


@handle_errors
def add(
    customer: CustomerArgument,
    project: ProjectArgument,
    service: ServiceArgument,
    minutes: MinutesArgument,
    day: DayArgument = None,
    note: NoteOption = None,
) -> None:
    """Add a new time entry, even if there already is one for the service."""
    client = get_client()
    day_entries = add_time_entry(
        client, day or today(), customer, project, service, minutes, note
    )
    entries_view(client.get_domain(), day_entries, client.get_tracker())


@handle_errors
def set_entry(
    customer: CustomerArgument,
    project: ProjectArgument,
    service: ServiceArgument,
    minutes: MinutesArgument,
    day: DayArgument = None,
    note: NoteOption = None,
) -> None:
    """Set the time booked on a service for a day to exactly TIME."""
    client = get_client()
    day_entries = set_time_entry(
        client, day or today(), customer, project, service, minutes, note
    )
    entries_view(client.get_domain(), day_entries, client.get_tracker())
