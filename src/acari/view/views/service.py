# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.service import Service
from acari.view.util import archived_style, print_flat, print_json_entities, styled
from acari.view.views.header import header


def services_view(domain: str, services: list[Service]) -> None:
    services = sorted(services, key=lambda s: s["name"])

    match state.get_output_format():
        case "json":
            print_json_entities(services)
        case "flat":
            for service in services:
                if not service["archived"]:
                    print_flat(service["name"])
        case _:
            header(domain, "services")
            table = Table(box=box.SIMPLE)
            table.add_column("Service")
            table.add_column("Billable")
            table.add_column("Note")
            for service in services:
                table.add_row(
                    styled(service["name"], archived_style(service["archived"])),
                    "yes" if service["billable"] else "no",
                    styled(service["note"], None),
                )
            Console().print(table)
