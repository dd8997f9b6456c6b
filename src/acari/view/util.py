# SPDX-License-Identifier: MIT

import json
from typing import Any, Mapping, Sequence

import typer
from rich.markup import escape

from acari.model.serialization import entity_to_serializable


def to_json_value(entity: Mapping[str, Any]) -> dict[str, Any]:
    return entity_to_serializable(entity, encode_ids=False)


def print_json(value: Any) -> None:
    typer.echo(json.dumps(value, indent=2))


def print_json_entities(entities: Sequence[Mapping[str, Any]]) -> None:
    print_json([to_json_value(entity) for entity in entities])


def print_flat(*columns: Any) -> None:
    typer.echo("\t".join(str(column) for column in columns))


def styled(value: str, style: str | None) -> str:
    """Escape a value for rich markup, optionally wrapping it in a style."""
    if style is None:
        return escape(value)
    return f"[{style}]{escape(value)}[/{style}]"


def archived_style(archived: bool) -> str | None:
    return "yellow" if archived else None
