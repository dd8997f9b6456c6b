# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.customer import Customer
from acari.view.util import archived_style, print_flat, print_json_entities, styled
from acari.view.views.header import header


def customers_view(domain: str, customers: list[Customer]) -> None:
    """Archived customers are highlighted in pretty output and left out of flat."""
    customers = sorted(customers, key=lambda c: c["name"])

    match state.get_output_format():
        case "json":
            print_json_entities(customers)
        case "flat":
            for customer in customers:
                if not customer["archived"]:
                    print_flat(customer["name"])
        case _:
            header(domain, "customers")
            table = Table(box=box.SIMPLE)
            table.add_column("Customers")
            for customer in customers:
                table.add_row(
                    styled(customer["name"], archived_style(customer["archived"]))
                )
            Console().print(table)
