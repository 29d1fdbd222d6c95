"""
Tests for single slot validation.
"""

from bookingslots.domain.models import make_availability
from bookingslots.domain.slot_validator import (
    SlotValidator,
    is_slot_available,
    is_slot_available_with_buffer,
    is_slot_available_with_events,
)
from tests.helpers import event, slot

SUNDAY_9_TO_11 = make_availability({0: [(9, 0), (11, 0)]})


class TestWithinAvailability:
    """Window-only checks."""

    def test_inside_window(self):
        assert is_slot_available(SUNDAY_9_TO_11, slot("2024-11-24 09:00", 120))

    def test_overhanging_window(self):
        assert not is_slot_available(SUNDAY_9_TO_11, slot("2024-11-24 10:45", 30))

    def test_starting_before_window(self):
        assert not is_slot_available(SUNDAY_9_TO_11, slot("2024-11-24 08:45", 30))

    def test_weekday_without_window(self):
        """No entry for the weekday means no availability."""
        assert not is_slot_available(SUNDAY_9_TO_11, slot("2024-11-25 09:00", 30))

    def test_only_first_pair_is_consulted(self):
        """A later pair on the same day is not evaluated."""
        availability = make_availability({0: [(9, 0), (10, 0), (14, 0), (16, 0)]})

        assert is_slot_available(availability, slot("2024-11-24 09:30"))
        assert not is_slot_available(availability, slot("2024-11-24 14:00"))

    def test_malformed_window_is_rejected_without_error(self):
        availability = make_availability({0: [(9, 0)]})

        assert not is_slot_available(availability, slot("2024-11-24 09:00"))


class TestWithEvents:
    """Checks against booked events."""

    def test_overlapping_event(self):
        events = [event("2024-11-24 09:15", "2024-11-24 09:45", buffered=False)]

        assert not is_slot_available_with_events(SUNDAY_9_TO_11, events, slot("2024-11-24 09:00"))
        assert is_slot_available_with_events(SUNDAY_9_TO_11, events, slot("2024-11-24 09:45"))

    def test_unbuffered_variant_ignores_buffer(self):
        """Buffers are not applied by the plain events check."""
        events = [event("2024-11-24 09:00", "2024-11-24 09:30", after=15)]

        assert is_slot_available_with_events(SUNDAY_9_TO_11, events, slot("2024-11-24 09:30"))
        assert not is_slot_available_with_buffer(SUNDAY_9_TO_11, events, slot("2024-11-24 09:30"))

    def test_buffered_boundaries(self):
        """The slot right after the buffered end is free."""
        events = [event("2024-11-24 09:00", "2024-11-24 09:30", after=15)]

        assert is_slot_available_with_buffer(SUNDAY_9_TO_11, events, slot("2024-11-24 09:45"))

    def test_touching_buffered_start(self):
        events = [event("2024-11-24 10:30", "2024-11-24 11:00", before=30)]

        assert is_slot_available_with_buffer(SUNDAY_9_TO_11, events, slot("2024-11-24 09:30"))
        assert not is_slot_available_with_buffer(SUNDAY_9_TO_11, events, slot("2024-11-24 09:45"))

    def test_event_inside_slot(self):
        """A short event contained in the slot is a conflict."""
        events = [event("2024-11-24 09:40", "2024-11-24 09:50", buffered=False)]

        assert not SlotValidator().is_available(SUNDAY_9_TO_11, events, slot("2024-11-24 09:30", 60))

    def test_idempotent(self):
        validator = SlotValidator()
        events = [event("2024-11-24 10:00", "2024-11-24 10:30", before=5)]
        candidate = slot("2024-11-24 09:30")

        first = validator.is_available(SUNDAY_9_TO_11, events, candidate)
        second = validator.is_available(SUNDAY_9_TO_11, events, candidate)

        assert first is second is False
