"""
Tests for single-person slot enumeration.
"""

from bookingslots.domain.models import make_availability
from bookingslots.domain.slot_enumerator import SlotEnumerator
from bookingslots.domain.slot_validator import SlotValidator
from tests.helpers import event, starts, utc

SUNDAY_9_TO_10 = make_availability({0: [(9, 0), (10, 0)]})


class TestPairRangeSlots:
    """Tests for enumerate_pair_range_slots."""

    def test_free_hour_yields_two_slots(self):
        """A free hour splits into two 30 minute slots."""
        enumerator = SlotEnumerator()

        slots = enumerator.enumerate_pair_range_slots(
            SUNDAY_9_TO_10, [], utc("2024-11-24 09:00"), utc("2024-11-24 10:00")
        )

        assert starts(slots) == ["2024-11-24 09:00", "2024-11-24 09:30"]
        assert all(s.duration_minutes == 30 for s in slots)
        assert slots[-1].end == utc("2024-11-24 10:00")

    def test_event_across_both_slots(self):
        """An event straddling the half hour blocks both slots."""
        slots = SlotEnumerator().enumerate(
            SUNDAY_9_TO_10,
            [event("2024-11-24 09:15", "2024-11-24 09:45", buffered=False)],
            utc("2024-11-24 09:00"),
            utc("2024-11-24 10:00"),
        )

        assert slots == []

    def test_buffer_after_pushes_next_slot(self):
        """A 15 minute trailing buffer blocks the following half hour."""
        availability = make_availability({0: [(9, 0), (11, 0)]})

        slots = SlotEnumerator().enumerate(
            availability,
            [event("2024-11-24 09:00", "2024-11-24 09:30", after=15)],
            utc("2024-11-24 00:00"),
            utc("2024-11-24 23:59"),
        )

        assert starts(slots) == ["2024-11-24 10:00", "2024-11-24 10:30"]

    def test_slot_touching_buffered_start_is_free(self):
        """Ending exactly where the buffered event starts is not a conflict."""
        availability = make_availability({0: [(9, 0), (11, 0)]})

        slots = SlotEnumerator().enumerate(
            availability,
            [event("2024-11-24 10:00", "2024-11-24 10:15", before=30, after=15)],
            utc("2024-11-24 00:00"),
            utc("2024-11-24 23:59"),
        )

        assert starts(slots) == ["2024-11-24 09:00", "2024-11-24 10:30"]

    def test_walks_several_days_and_pairs(self):
        """Days without a window are skipped; output is ascending."""
        availability = make_availability({
            0: [(9, 0), (10, 0)],
            2: [(8, 0), (9, 0), (14, 0), (15, 0)],
        })

        slots = SlotEnumerator(slot_duration_minutes=60).enumerate(
            availability, [], utc("2024-11-24 00:00"), utc("2024-11-27 23:59")
        )

        assert starts(slots) == [
            "2024-11-24 09:00",
            "2024-11-26 08:00",
            "2024-11-26 14:00",
        ]

    def test_clipped_to_range(self):
        """Slots outside [range_start, range_end] are not emitted."""
        availability = make_availability({0: [(9, 0), (12, 0)]})

        slots = SlotEnumerator().enumerate(
            availability, [], utc("2024-11-24 09:30"), utc("2024-11-24 11:00")
        )

        assert starts(slots) == ["2024-11-24 09:30", "2024-11-24 10:00", "2024-11-24 10:30"]

    def test_partial_trailing_slot_is_dropped(self):
        """A window that is not a multiple of the duration keeps only full slots."""
        availability = make_availability({0: [(9, 0), (9, 45)]})

        slots = SlotEnumerator().enumerate(
            availability, [], utc("2024-11-24 00:00"), utc("2024-11-24 23:59")
        )

        assert starts(slots) == ["2024-11-24 09:00"]

    def test_non_positive_duration_yields_nothing(self):
        assert SlotEnumerator(slot_duration_minutes=0).enumerate(
            SUNDAY_9_TO_10, [], utc("2024-11-24 00:00"), utc("2024-11-24 23:59")
        ) == []


class TestFixedBlockSlots:
    """Tests for enumerate_fixed_block_slots."""

    def test_each_entry_opens_one_block(self):
        """Every range entry starts a block as long as one slot."""
        availability = make_availability({0: [(9, 0), (10, 0)]})

        slots = SlotEnumerator().enumerate_fixed_block_slots(
            availability, [], utc("2024-11-24 00:00"), utc("2024-11-24 23:59")
        )

        assert starts(slots) == ["2024-11-24 09:00", "2024-11-24 10:00"]

    def test_block_stops_at_range_end(self):
        """A sub-slot ending after range_end stops the block."""
        slots = SlotEnumerator().enumerate_fixed_block_slots(
            SUNDAY_9_TO_10, [], utc("2024-11-24 09:00"), utc("2024-11-24 10:00"), block_minutes=60
        )

        assert starts(slots) == ["2024-11-24 09:00", "2024-11-24 09:30"]

    def test_block_stops_before_range_start(self):
        """A block starting before range_start contributes nothing."""
        slots = SlotEnumerator().enumerate_fixed_block_slots(
            SUNDAY_9_TO_10, [], utc("2024-11-24 09:15"), utc("2024-11-24 23:59")
        )

        assert starts(slots) == ["2024-11-24 10:00"]

    def test_conflicting_sub_slot_is_skipped(self):
        slots = SlotEnumerator().enumerate_fixed_block_slots(
            SUNDAY_9_TO_10,
            [event("2024-11-24 09:15", "2024-11-24 09:45")],
            utc("2024-11-24 09:00"),
            utc("2024-11-24 10:00"),
            block_minutes=60,
        )

        assert slots == []


class TestEnumeratorProperties:
    """Cross-cutting properties of the enumerator."""

    def test_buffer_monotonicity(self):
        """Growing a buffer can only remove slots."""
        availability = make_availability({0: [(8, 0), (18, 0)], 1: [(8, 0), (18, 0)]})
        start, end = utc("2024-11-24 00:00"), utc("2024-11-25 23:59")
        enumerator = SlotEnumerator()

        previous = None
        for minutes in (0, 15, 30, 90):
            events = [
                event("2024-11-24 12:00", "2024-11-24 13:00", before=minutes, after=minutes),
                event("2024-11-25 09:10", "2024-11-25 09:20", after=minutes),
            ]
            current = set(starts(enumerator.enumerate(availability, events, start, end)))
            if previous is not None:
                assert current <= previous
            previous = current

    def test_enumerated_slots_validate(self):
        """Every enumerated slot passes the buffered validator."""
        availability = make_availability({d: [(9, 0), (17, 0)] for d in range(7)})
        events = [
            event("2024-11-25 10:00", "2024-11-25 11:00", before=15, after=15),
            event("2024-11-26 13:20", "2024-11-26 13:40"),
        ]
        slots = SlotEnumerator().enumerate(availability, events, utc("2024-11-24 00:00"), utc("2024-11-30 23:59"))
        validator = SlotValidator(apply_buffer=True)

        assert slots
        assert all(validator.is_available(availability, events, s) for s in slots)

    def test_inputs_are_not_mutated(self):
        range_start = utc("2024-11-24 09:00")
        events = [event("2024-11-24 09:15", "2024-11-24 09:45", after=5)]

        SlotEnumerator().enumerate(SUNDAY_9_TO_10, events, range_start, utc("2024-11-24 10:00"))

        assert range_start == utc("2024-11-24 09:00")
        assert events[0].start == utc("2024-11-24 09:15")
