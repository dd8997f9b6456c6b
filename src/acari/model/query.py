# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from acari.error import UserError
from acari.time import date_from_str, date_to_str, today_local

DayKind = Literal["today", "yesterday", "date"]
DateSpanKind = Literal[
    "this_week", "last_week", "this_month", "last_month", "day", "range"
]


class Day(TypedDict):
    kind: DayKind
    date: Optional[pendulum.Date]


class DateSpan(TypedDict):
    kind: DateSpanKind
    day: Optional[Day]
    start: Optional[pendulum.Date]
    end: Optional[pendulum.Date]


def today() -> Day:
    return {"kind": "today", "date": None}


def yesterday() -> Day:
    return {"kind": "yesterday", "date": None}


def day_of(date: pendulum.Date) -> Day:
    return {"kind": "date", "date": date}


def day_from_str(day: str) -> Day:
    value = day.strip().lower()
    if value in ("today", "now"):
        return today()
    if value == "yesterday":
        return yesterday()
    try:
        return day_of(date_from_str(value))
    except ValueError:
        raise UserError(f"Invalid day (expected today, yesterday or YYYY-MM-DD): {day}")


def resolve_day(day: Day, today: pendulum.Date) -> pendulum.Date:
    """Turn a day into a calendar date relative to the given today."""
    if day["kind"] == "today":
        return today
    if day["kind"] == "yesterday":
        return today.subtract(days=1)
    if day["date"] is None:
        raise ValueError("explicit day without a date")
    return day["date"]


def date_span_of_day(day: Day) -> DateSpan:
    return {"kind": "day", "day": day, "start": None, "end": None}


def date_span_of_range(start: pendulum.Date, end: pendulum.Date) -> DateSpan:
    return {"kind": "range", "day": None, "start": start, "end": end}


def _symbolic_span(kind: DateSpanKind) -> DateSpan:
    return {"kind": kind, "day": None, "start": None, "end": None}


def date_span_from_str(span: str) -> DateSpan:
    """
    Parse a date span.

    Recognized (case-insensitive): today, now, yesterday, this-week, week,
    last-week, this-month, month, last-month, YYYY-MM-DD/YYYY-MM-DD and a
    single YYYY-MM-DD.

    Raises:
        UserError: If the text is none of the above
    """
    value = span.strip().lower()
    if value in ("today", "now"):
        return date_span_of_day(today())
    if value == "yesterday":
        return date_span_of_day(yesterday())
    if value in ("this-week", "week"):
        return _symbolic_span("this_week")
    if value == "last-week":
        return _symbolic_span("last_week")
    if value in ("this-month", "month"):
        return _symbolic_span("this_month")
    if value == "last-month":
        return _symbolic_span("last_month")

    try:
        if "/" in value:
            start_str, end_str = value.split("/", 1)
            return date_span_of_range(date_from_str(start_str), date_from_str(end_str))
        return date_span_of_day(day_of(date_from_str(value)))
    except ValueError:
        raise UserError(
            f"Invalid date span (expected today, yesterday, this-week, last-week, "
            f"this-month, last-month, YYYY-MM-DD or YYYY-MM-DD/YYYY-MM-DD): {span}"
        )


def _month_range(reference: pendulum.Date) -> tuple[pendulum.Date, pendulum.Date]:
    start = reference.start_of("month")
    end = start.add(months=1).subtract(days=1)
    return start, end


def _week_range(reference: pendulum.Date) -> tuple[pendulum.Date, pendulum.Date]:
    # pendulum weeks start on Monday (ISO-8601)
    start = reference.start_of("week")
    return start, start.add(days=6)


def resolve_date_span(
    span: DateSpan, today: pendulum.Date
) -> tuple[pendulum.Date, pendulum.Date]:
    """Resolve a span into an inclusive (start, end) pair of dates."""
    kind = span["kind"]
    if kind == "this_week":
        return _week_range(today)
    if kind == "last_week":
        this_monday = today.start_of("week")
        return _week_range(this_monday.subtract(days=1))
    if kind == "this_month":
        return _month_range(today)
    if kind == "last_month":
        return _month_range(today.start_of("month").subtract(days=1))
    if kind == "day":
        if span["day"] is None:
            raise ValueError("day span without a day")
        date = resolve_day(span["day"], today)
        return date, date
    if span["start"] is None or span["end"] is None:
        raise ValueError("range span without bounds")
    return span["start"], span["end"]


def mite_day_query(day: Day) -> str:
    if day["kind"] == "today":
        return "today"
    if day["kind"] == "yesterday":
        return "yesterday"
    return date_to_str(resolve_day(day, today_local()))


def mite_date_span_query(span: DateSpan) -> str:
    """Query parameters in the symbolic dialect of the numeric-id backend."""
    kind = span["kind"]
    if kind in ("this_week", "last_week", "this_month", "last_month"):
        return f"at={kind}"
    if kind == "day" and span["day"] is not None:
        return f"at={mite_day_query(span['day'])}"
    start, end = resolve_date_span(span, today_local())
    return f"from={date_to_str(start)}&to={date_to_str(end)}"


def everhour_date_span_query(
    span: DateSpan, today: Optional[pendulum.Date] = None
) -> str:
    """The string-id backend only understands explicit from/to dates."""
    if today is None:
        today = today_local()
    start, end = resolve_date_span(span, today)
    return f"from={date_to_str(start)}&to={date_to_str(end)}"
