"""
Yes/no availability checks for a single proposed slot.
"""

from typing import Optional, Sequence

from .conflicts import conflicts_with_any
from .models import CalendarAvailability, CalendarEvent, CalendarSlot, TimeRange
from .utc import as_utc, at_time_of_day, utc_weekday


class SlotValidator:
    """
    Decides whether one slot can be booked.

    Only the first (start, end) pair of the weekday's window is consulted.
    With ``apply_buffer`` the events' buffers widen their blocked interval,
    otherwise the nominal start/end are used.
    """

    def __init__(self, apply_buffer: bool = True):
        self.apply_buffer = apply_buffer

    def is_available(
        self,
        availability: CalendarAvailability,
        events: Sequence[CalendarEvent],
        slot: CalendarSlot,
    ) -> bool:
        """Check the slot against the availability window and the events."""
        if not self.is_within_availability(availability, slot):
            return False

        return not conflicts_with_any(slot.time_range, events, apply_buffer=self.apply_buffer)

    def is_within_availability(
        self,
        availability: CalendarAvailability,
        slot: CalendarSlot,
    ) -> bool:
        """Check only that the slot lies inside the weekday's first window."""
        window = self._first_window_range(availability, slot)
        if window is None:
            return False

        return window.contains(slot.time_range)

    @staticmethod
    def _first_window_range(
        availability: CalendarAvailability,
        slot: CalendarSlot,
    ) -> Optional[TimeRange]:
        start = as_utc(slot.start)
        window = availability.window_for(utc_weekday(start))
        if window is None or len(window.range) < 2:
            return None

        return TimeRange(
            start=at_time_of_day(start, window.range[0]),
            end=at_time_of_day(start, window.range[1]),
        )


def is_slot_available(availability: CalendarAvailability, slot: CalendarSlot) -> bool:
    """Check a slot against availability only, ignoring any bookings."""
    return SlotValidator().is_within_availability(availability, slot)


def is_slot_available_with_events(
    availability: CalendarAvailability,
    events: Sequence[CalendarEvent],
    slot: CalendarSlot,
) -> bool:
    """Check a slot against availability and events, ignoring buffers."""
    return SlotValidator(apply_buffer=False).is_available(availability, events, slot)


def is_slot_available_with_buffer(
    availability: CalendarAvailability,
    events: Sequence[CalendarEvent],
    slot: CalendarSlot,
) -> bool:
    """Check a slot against availability and buffered events."""
    return SlotValidator(apply_buffer=True).is_available(availability, events, slot)
