# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from acari.error import UserError
from acari.model.query import DateSpan, Day, date_span_from_str, day_from_str
from acari.time import Minutes, minutes_from_str


def parse_day(day_param: str) -> Day:
    try:
        return day_from_str(day_param)
    except UserError as e:
        raise typer.BadParameter(str(e)) from e


def parse_day_optional(day_param: Optional[str]) -> Optional[Day]:
    if day_param is None:
        return None
    return parse_day(day_param)


def parse_date_span(span_param: str) -> DateSpan:
    try:
        return date_span_from_str(span_param)
    except UserError as e:
        raise typer.BadParameter(str(e)) from e


def parse_minutes(minutes_param: str) -> Minutes:
    """Accepts plain minutes ("90") or hours and minutes ("1:30")."""
    try:
        return minutes_from_str(minutes_param)
    except UserError as e:
        raise typer.BadParameter(str(e)) from e


def parse_minutes_optional(minutes_param: Optional[str]) -> Optional[Minutes]:
    if minutes_param is None:
        return None
    return parse_minutes(minutes_param)
