# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.markup import escape
from rich.padding import Padding


def header(domain: str, sub_header: Optional[str] = None) -> None:
    """Print the application header naming the backend domain."""
    print(
        Padding(
            f"[dark_orange]acari[/dark_orange] [plum1]{escape(domain)}[/plum1]",
            (1, 0, 0, 1),
        )
    )
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{escape(sub_header)}[/sandy_brown]", (0, 1)))
