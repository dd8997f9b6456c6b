# SPDX-License-Identifier: MIT

import pendulum
import pytest

from acari.error import UserError
from acari.model.query import (
    date_span_from_str,
    date_span_of_day,
    date_span_of_range,
    day_from_str,
    day_of,
    everhour_date_span_query,
    mite_date_span_query,
    resolve_date_span,
    resolve_day,
    today,
    yesterday,
)

WEDNESDAY = pendulum.date(2024, 3, 6)


def test_day_from_str() -> None:
    assert day_from_str("today") == today()
    assert day_from_str("NOW") == today()
    assert day_from_str("Yesterday") == yesterday()
    assert day_from_str("2024-03-04") == day_of(pendulum.date(2024, 3, 4))


def test_invalid_day_names_the_text() -> None:
    with pytest.raises(UserError) as exc_info:
        day_from_str("tomorrow")
    assert "tomorrow" in str(exc_info.value)


def test_resolve_day() -> None:
    assert resolve_day(today(), WEDNESDAY) == WEDNESDAY
    assert resolve_day(yesterday(), pendulum.date(2024, 3, 1)) == pendulum.date(
        2024, 2, 29
    )


@pytest.mark.parametrize(
    "text, kind",
    [
        ("this-week", "this_week"),
        ("week", "this_week"),
        ("LAST-WEEK", "last_week"),
        ("month", "this_month"),
        ("this-month", "this_month"),
        ("last-month", "last_month"),
        ("today", "day"),
        ("yesterday", "day"),
        ("2024-03-04", "day"),
        ("2024-03-01/2024-03-31", "range"),
    ],
)
def test_date_span_from_str(text, kind) -> None:
    assert date_span_from_str(text)["kind"] == kind


@pytest.mark.parametrize("text", ["fortnight", "2024-03-01/", "2024-03-01/x"])
def test_invalid_date_span_names_the_text(text) -> None:
    with pytest.raises(UserError) as exc_info:
        date_span_from_str(text)
    assert text in str(exc_info.value)


@pytest.mark.parametrize(
    "text, start, end",
    [
        ("this-week", (2024, 3, 4), (2024, 3, 10)),
        ("last-week", (2024, 2, 26), (2024, 3, 3)),
        ("this-month", (2024, 3, 1), (2024, 3, 31)),
        ("last-month", (2024, 2, 1), (2024, 2, 29)),
        ("today", (2024, 3, 6), (2024, 3, 6)),
        ("yesterday", (2024, 3, 5), (2024, 3, 5)),
        ("2024-01-10/2024-01-20", (2024, 1, 10), (2024, 1, 20)),
    ],
)
def test_resolve_date_span(text, start, end) -> None:
    assert resolve_date_span(date_span_from_str(text), WEDNESDAY) == (
        pendulum.date(*start),
        pendulum.date(*end),
    )


def test_weeks_start_on_monday_even_on_sunday() -> None:
    sunday = pendulum.date(2024, 3, 10)
    assert resolve_date_span(date_span_from_str("week"), sunday) == (
        pendulum.date(2024, 3, 4),
        pendulum.date(2024, 3, 10),
    )
    monday = pendulum.date(2024, 3, 11)
    assert resolve_date_span(date_span_from_str("last-week"), monday) == (
        pendulum.date(2024, 3, 4),
        pendulum.date(2024, 3, 10),
    )


def test_last_week_across_new_year() -> None:
    assert resolve_date_span(
        date_span_from_str("last-week"), pendulum.date(2021, 1, 6)
    ) == (pendulum.date(2020, 12, 28), pendulum.date(2021, 1, 3))


@pytest.mark.parametrize("year", range(2019, 2031))
def test_last_month_on_new_years_day_is_december(year) -> None:
    start, end = resolve_date_span(
        date_span_from_str("last-month"), pendulum.date(year, 1, 1)
    )
    assert start == pendulum.date(year - 1, 12, 1)
    assert end == pendulum.date(year - 1, 12, 31)


def test_mite_query_keeps_symbolic_spans() -> None:
    assert mite_date_span_query(date_span_from_str("week")) == "at=this_week"
    assert mite_date_span_query(date_span_from_str("last-month")) == "at=last_month"
    assert mite_date_span_query(date_span_from_str("today")) == "at=today"
    assert mite_date_span_query(date_span_from_str("yesterday")) == "at=yesterday"
    assert (
        mite_date_span_query(date_span_of_day(day_of(pendulum.date(2024, 3, 4))))
        == "at=2024-03-04"
    )
    assert (
        mite_date_span_query(
            date_span_of_range(pendulum.date(2024, 3, 1), pendulum.date(2024, 3, 5))
        )
        == "from=2024-03-01&to=2024-03-05"
    )


def test_everhour_query_is_always_explicit() -> None:
    assert (
        everhour_date_span_query(date_span_from_str("week"), WEDNESDAY)
        == "from=2024-03-04&to=2024-03-10"
    )
    assert (
        everhour_date_span_query(date_span_from_str("yesterday"), WEDNESDAY)
        == "from=2024-03-05&to=2024-03-05"
    )
