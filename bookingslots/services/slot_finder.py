"""
Application services for finding bookable slots.

The service coordinates fetching availability and events via a calendar
source adapter and delegates the actual slot arithmetic to the domain layer.
This keeps the CLI thin and lets tests plug in a stub source through a
simple protocol.
"""

from __future__ import annotations

import logging
from typing import List, Literal, Protocol, Sequence

from pendulum import DateTime

from ..domain.models import Attendee, CalendarAvailability, CalendarEvent, CalendarSlot, TimeOfDay
from ..domain.multi_person import MultiPersonSlotEnumerator
from ..domain.slot_enumerator import SlotEnumerator
from ..domain.slot_validator import SlotValidator

logger = logging.getLogger(__name__)

EnumerationMode = Literal["pairs", "fixed-block"]


class CalendarSourceProtocol(Protocol):
    """Protocol describing the calendar source behaviour needed by the service."""

    def get_availability(self, participant: str) -> CalendarAvailability:
        """Return the recurring availability template of a participant."""

    def get_events(
        self,
        participant: str,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[CalendarEvent]:
        """Return booked events that may affect the window."""


class SlotFinderService:
    """
    Orchestrates calendar retrieval and slot calculation.

    A single participant goes through ``SlotEnumerator``, several participants
    through ``MultiPersonSlotEnumerator``.
    """

    def __init__(
        self,
        calendar_source: CalendarSourceProtocol,
        slot_duration_minutes: int = 30,
        apply_buffer: bool = True,
    ) -> None:
        self._calendar_source = calendar_source
        self._slot_enumerator = SlotEnumerator(slot_duration_minutes=slot_duration_minutes)
        self._multi_enumerator = MultiPersonSlotEnumerator(slot_duration_minutes=slot_duration_minutes)
        self._validator = SlotValidator(apply_buffer=apply_buffer)

    def find_slots(
        self,
        *,
        participants: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
        mode: EnumerationMode = "pairs",
    ) -> List[CalendarSlot]:
        """
        Retrieve calendar data and compute open slots.

        ``mode`` only applies to a single participant; several participants
        always use the pair-sequence reading.
        """
        attendees = self.fetch_attendees(
            participants=participants,
            start_date=start_date,
            end_date=end_date,
        )

        if not attendees:
            return []

        if len(attendees) == 1:
            attendee = attendees[0]
            if mode == "fixed-block":
                slots = self._slot_enumerator.enumerate_fixed_block_slots(
                    attendee.availability, attendee.events, start_date, end_date
                )
            else:
                slots = self._slot_enumerator.enumerate_pair_range_slots(
                    attendee.availability, attendee.events, start_date, end_date
                )
        else:
            if mode == "fixed-block":
                logger.warning(
                    "fixed-block mode ignored for %d participants; using pair ranges",
                    len(attendees),
                )
            slots = self._multi_enumerator.enumerate(attendees, start_date, end_date)

        logger.info("Found %d slot(s) for %s", len(slots), ", ".join(participants))
        return slots

    def check_slot(self, *, participant: str, slot: CalendarSlot) -> bool:
        """Check whether a single slot can be booked for a participant."""
        availability = self._calendar_source.get_availability(participant)
        events = self._calendar_source.get_events(participant, slot.time_range.start, slot.end)
        return self._validator.is_available(availability, events, slot)

    def common_availability(
        self,
        *,
        participants: Sequence[str],
        weekday: int,
    ) -> List[TimeOfDay]:
        """Return the windows shared by all participants on a weekday."""
        attendees = [
            Attendee(availability=self._calendar_source.get_availability(name), name=name)
            for name in participants
        ]
        return MultiPersonSlotEnumerator.common_range_for_day(attendees, weekday) or []

    def fetch_attendees(
        self,
        *,
        participants: Sequence[str],
        start_date: DateTime,
        end_date: DateTime,
    ) -> List[Attendee]:
        """Fetch availability and events for the requested participants."""
        attendees: List[Attendee] = []

        for name in participants:
            availability = self._calendar_source.get_availability(name)
            events = self._calendar_source.get_events(name, start_date, end_date)
            attendees.append(Attendee(availability=availability, events=tuple(events), name=name))

        return attendees
