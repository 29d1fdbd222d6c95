"""
Shared overlap primitive for slots against booked events.

Every enumerator and validator goes through ``conflicts_with_any`` so that
buffered and unbuffered checks use the same half-open rule.
"""

from typing import Iterable

from .models import CalendarEvent, TimeRange


def blocked_range(event: CalendarEvent, apply_buffer: bool = True) -> TimeRange:
    """Return the interval an event blocks, widened by its buffer when requested."""
    if apply_buffer:
        return event.buffered_range()
    return event.nominal_range()


def overlaps(first: TimeRange, second: TimeRange) -> bool:
    """Half-open overlap test; touching endpoints are not a conflict."""
    return first.overlaps(second)


def conflicts_with_any(
    slot_range: TimeRange,
    events: Iterable[CalendarEvent],
    apply_buffer: bool = True,
) -> bool:
    """Check whether a slot overlaps the blocked interval of any event."""
    return any(
        overlaps(slot_range, blocked_range(event, apply_buffer))
        for event in events
    )
