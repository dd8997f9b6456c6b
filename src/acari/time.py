# SPDX-License-Identifier: MIT

import re
from typing import Optional, TypeAlias, cast

import pendulum

from acari.error import UserError

Minutes: TypeAlias = int

_MINUTES_RE = re.compile(r"^([0-9]+):([0-9]{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    """Parse an ISO-8601 timestamp, naive values are taken as UTC."""
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime, tz="UTC"))
    return pendulum_date_time.in_tz("UTC")


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD HH:mm")


def date_to_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD")


def date_from_str(date_str: str) -> pendulum.Date:
    """Strictly parse a 'YYYY-MM-DD' string, raising ValueError otherwise."""
    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Not a YYYY-MM-DD date: {date_str}")
    return pendulum.from_format(date_str, "YYYY-MM-DD").date()


def minutes_from_str(minutes: str) -> Minutes:
    """
    Parse a minute count from either a bare integer ("90") or hours and
    minutes ("1:30"). Hours are unbounded, minutes must be below 60.
    """
    value = minutes.strip()
    if re.match(r"^[0-9]+$", value):
        return int(value)

    match = _MINUTES_RE.match(value)
    if match is None:
        raise UserError(f"Invalid minutes (expected minutes or H:MM): {minutes}")
    hours = int(match.group(1))
    mins = int(match.group(2))
    if mins >= 60:
        raise UserError(f"Minutes must be between 0 and 59, got {minutes}")
    return hours * 60 + mins


def minutes_to_str(minutes: Minutes) -> str:
    return f"{minutes // 60}:{minutes % 60:02d}"
