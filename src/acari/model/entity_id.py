# SPDX-License-Identifier: MIT

import re
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote

from acari.error import InternalError


@dataclass(frozen=True)
class NumericId:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TextualId:
    value: str

    def __str__(self) -> str:
        return self.value


EntityId: TypeAlias = NumericId | TextualId

AccountId: TypeAlias = EntityId
UserId: TypeAlias = EntityId
CustomerId: TypeAlias = EntityId
ProjectId: TypeAlias = EntityId
ServiceId: TypeAlias = EntityId
TimeEntryId: TypeAlias = EntityId


def entity_id_from_json(value: Any) -> EntityId:
    """Wire ids are either JSON numbers or JSON strings."""
    if isinstance(value, bool):
        raise InternalError(f"Invalid entity id: {value!r}")
    if isinstance(value, int):
        return NumericId(value)
    if isinstance(value, str):
        return TextualId(value)
    raise InternalError(f"Invalid entity id: {value!r}")


def entity_id_to_json(entity_id: EntityId) -> int | str:
    return entity_id.value


def entity_id_to_encoded(entity_id: EntityId) -> str:
    """
    Lossless string form of an id: "n<digits>" for numeric ids and
    "s<text>" for textual ids.
    """
    if isinstance(entity_id, NumericId):
        return f"n{entity_id.value}"
    return f"s{entity_id.value}"


def entity_id_from_encoded(encoded: str) -> EntityId:
    if encoded.startswith("n"):
        digits = encoded[1:]
        if re.fullmatch(r"[0-9]+", digits) is None:
            raise InternalError(f"Invalid encoded id: {encoded}")
        return NumericId(int(digits))
    if encoded.startswith("s"):
        return TextualId(encoded[1:])
    raise InternalError(f"Invalid encoded id: {encoded}")


def entity_id_to_path(entity_id: EntityId) -> str:
    """Render an id for use as a single URL path segment."""
    if isinstance(entity_id, NumericId):
        return str(entity_id.value)
    return quote(entity_id.value, safe="")
