"""
UTC helpers for instants.

Weekday and time-of-day are only ever read through these helpers so that
the ambient local timezone never shifts a day boundary.
"""

from datetime import datetime
from typing import Iterator

import pendulum
from pendulum import DateTime

UTC = "UTC"


def as_utc(value: datetime) -> DateTime:
    """
    Normalise any datetime to a pendulum DateTime in UTC.

    Naive datetimes are read as UTC wall-clock time.
    """
    return pendulum.instance(value, tz=UTC).in_timezone(UTC)


def utc_weekday(value: datetime) -> int:
    """Return the UTC day of week, 0=Sunday."""
    return as_utc(value).isoweekday() % 7


def utc_day_start(value: datetime) -> DateTime:
    return as_utc(value).start_of("day")


def at_time_of_day(day: datetime, time_of_day) -> DateTime:
    """
    Anchor a time of day on the UTC date of ``day``.

    Values past 23:59 roll over into the following day instead of failing.
    """
    offset = time_of_day.hours * 60 + time_of_day.minutes
    return utc_day_start(day).add(minutes=offset)


def iter_utc_days(range_start: datetime, range_end: datetime) -> Iterator[DateTime]:
    """Yield the start of every UTC calendar day from range_start to range_end inclusive."""
    current = utc_day_start(range_start)
    last = as_utc(range_end)

    while current <= last:
        yield current
        current = current.add(days=1)
