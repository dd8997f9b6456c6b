# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from acari import state
from acari.model.account import Account
from acari.model.user import User
from acari.time import datetime_to_display_local_datetime_str
from acari.view.util import print_flat, print_json, styled, to_json_value
from acari.view.views.header import header


def _property_table(title: str, rows: list[tuple[str, str]]) -> Table:
    table = Table(title=title, box=box.SIMPLE, show_header=False)
    table.add_column("property", style="cyan")
    table.add_column("value")
    for name, value in rows:
        table.add_row(name, styled(value, None))
    return table


def check_view(domain: str, account: Account, user: User) -> None:
    """Show the account and the user a token belongs to."""
    match state.get_output_format():
        case "json":
            print_json({"account": to_json_value(account), "user": to_json_value(user)})
        case "flat":
            print_flat("account", account["id"], account["name"], account["currency"])
            print_flat("user", user["id"], user["name"], user["email"])
        case _:
            header(domain, "check")
            console = Console()
            console.print(
                _property_table(
                    "Account",
                    [
                        ("Id", str(account["id"])),
                        ("Name", account["name"]),
                        ("Title", account["title"]),
                        ("Currency", account["currency"]),
                        (
                            "Created at",
                            datetime_to_display_local_datetime_str(
                                account["created_at"]
                            ),
                        ),
                    ],
                )
            )
            console.print(
                _property_table(
                    "User",
                    [
                        ("Id", str(user["id"])),
                        ("Name", user["name"]),
                        ("Email", user["email"]),
                        ("Role", user["role"]),
                        ("Language", user["language"]),
                        (
                            "Created at",
                            datetime_to_display_local_datetime_str(user["created_at"]),
                        ),
                    ],
                )
            )
