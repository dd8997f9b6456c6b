# SPDX-License-Identifier: MIT

from typing import Any, Mapping

import pendulum

from acari import time
from acari.model.entity_id import (
    NumericId,
    TextualId,
    entity_id_from_encoded,
    entity_id_to_encoded,
    entity_id_to_json,
)

ID_FIELDS = ("id", "customer_id", "project_id", "service_id", "user_id")
DATETIME_FIELDS = ("created_at", "updated_at", "since")
DATE_FIELDS = ("date_at",)
NESTED_FIELDS = ("tracking_time_entry", "stopped_time_entry")


def entity_to_serializable(
    entity: Mapping[str, Any], encode_ids: bool = True
) -> dict[str, Any]:
    """
    Convert an entity into plain JSON values.

    With encode_ids the ids keep their kind ("n12" / "sas:12") so the
    result can be read back by entity_from_serialized. Without it ids are
    written bare, which is what the json output format shows.
    """
    serializable: dict[str, Any] = {}
    for key, value in entity.items():
        if isinstance(value, (NumericId, TextualId)):
            serializable[key] = (
                entity_id_to_encoded(value) if encode_ids else entity_id_to_json(value)
            )
        elif isinstance(value, pendulum.DateTime):
            serializable[key] = time.datetime_to_iso_str(value)
        elif isinstance(value, pendulum.Date):
            serializable[key] = time.date_to_str(value)
        elif key in NESTED_FIELDS and value is not None:
            serializable[key] = entity_to_serializable(value, encode_ids)
        else:
            serializable[key] = value
    return serializable


def entity_from_serialized(serialized: dict[str, Any]) -> dict[str, Any]:
    entity = dict(serialized)
    for key in ID_FIELDS:
        if isinstance(entity.get(key), str):
            entity[key] = entity_id_from_encoded(entity[key])
    for key in DATETIME_FIELDS:
        if key in entity:
            entity[key] = time.datetime_from_str_optional(entity[key])
    for key in DATE_FIELDS:
        if isinstance(entity.get(key), str):
            entity[key] = time.date_from_str(entity[key])
    for key in NESTED_FIELDS:
        if isinstance(entity.get(key), dict):
            entity[key] = entity_from_serialized(entity[key])
    return entity
