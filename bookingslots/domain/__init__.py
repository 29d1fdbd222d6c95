"""
Domain layer - Pure business logic without external dependencies.
"""

from .exceptions import BookingSlotsError, ConfigurationError, UnknownParticipantError
from .models import (
    Attendee,
    AvailabilityWindow,
    Buffer,
    CalendarAvailability,
    CalendarEvent,
    CalendarSlot,
    TimeOfDay,
    TimeRange,
    Weekday,
)
from .multi_person import MultiPersonSlotEnumerator
from .range_intersector import RangeIntersector, intersect_all, intersect_ranges
from .slot_enumerator import SlotEnumerator
from .slot_validator import (
    SlotValidator,
    is_slot_available,
    is_slot_available_with_buffer,
    is_slot_available_with_events,
)

__all__ = [
    "Attendee",
    "AvailabilityWindow",
    "BookingSlotsError",
    "Buffer",
    "CalendarAvailability",
    "CalendarEvent",
    "CalendarSlot",
    "ConfigurationError",
    "MultiPersonSlotEnumerator",
    "RangeIntersector",
    "SlotEnumerator",
    "SlotValidator",
    "TimeOfDay",
    "TimeRange",
    "UnknownParticipantError",
    "Weekday",
    "intersect_all",
    "intersect_ranges",
    "is_slot_available",
    "is_slot_available_with_buffer",
    "is_slot_available_with_events",
]
