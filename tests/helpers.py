"""
Shared builders for tests.
"""

import pendulum

from bookingslots.domain.models import Buffer, CalendarEvent, CalendarSlot


def utc(value: str) -> pendulum.DateTime:
    return pendulum.parse(value, tz="UTC")


def event(start: str, end: str, before: int = 0, after: int = 0, buffered: bool = True) -> CalendarEvent:
    buffer = Buffer(before=before, after=after) if buffered else None
    return CalendarEvent(start=utc(start), end=utc(end), buffer=buffer)


def slot(start: str, duration: int = 30) -> CalendarSlot:
    return CalendarSlot(start=utc(start), duration_minutes=duration)


def starts(slots) -> list:
    """Return slot starts as 'YYYY-MM-DD HH:mm' strings."""
    return [s.start.format("YYYY-MM-DD HH:mm") for s in slots]
