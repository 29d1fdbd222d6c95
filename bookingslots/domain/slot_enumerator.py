"""
Enumeration of open fixed-duration slots for a single person.

Pure domain logic: no I/O, inputs are never mutated.
"""

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from pendulum import DateTime

from .conflicts import conflicts_with_any
from .models import CalendarAvailability, CalendarEvent, CalendarSlot, TimeRange
from .utc import as_utc, at_time_of_day, iter_utc_days, utc_weekday

logger = logging.getLogger(__name__)

DEFAULT_SLOT_DURATION_MINUTES = 30


class SlotEnumerator:
    """
    Lists every bookable slot for one person inside a date range.

    Two readings of an availability window are supported:

    - ``enumerate_fixed_block_slots``: every entry of the window's range opens
      a block of fixed length (``block_minutes``), regardless of pairing.
    - ``enumerate_pair_range_slots``: entries are read as (start, end) pairs.

    Both walk UTC days in order and emit slots ascending by start time.
    """

    def __init__(self, slot_duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES):
        self.slot_duration_minutes = slot_duration_minutes

    def enumerate(
        self,
        availability: CalendarAvailability,
        events: Sequence[CalendarEvent],
        range_start: datetime,
        range_end: datetime,
    ) -> List[CalendarSlot]:
        """Enumerate slots using the pair-sequence reading of availability."""
        return self.enumerate_pair_range_slots(availability, events, range_start, range_end)

    def enumerate_fixed_block_slots(
        self,
        availability: CalendarAvailability,
        events: Sequence[CalendarEvent],
        range_start: datetime,
        range_end: datetime,
        block_minutes: Optional[int] = None,
    ) -> List[CalendarSlot]:
        """
        Enumerate slots where each range entry starts a fixed-length block.

        Args:
            availability: Weekly availability template
            events: Booked events, buffers applied
            range_start: Earliest allowed slot start
            range_end: Latest allowed slot end
            block_minutes: Length of each block, defaults to the slot duration

        Returns:
            Open slots ordered by start time
        """
        if block_minutes is None:
            block_minutes = self.slot_duration_minutes

        lower = as_utc(range_start)
        upper = as_utc(range_end)
        slots: List[CalendarSlot] = []

        for day in iter_utc_days(lower, upper):
            window = availability.window_for(utc_weekday(day))
            if window is None:
                logger.debug("No availability on %s, skipping", day.to_date_string())
                continue

            for entry in window.range:
                block_start = at_time_of_day(day, entry)
                block_end = block_start.add(minutes=block_minutes)
                slots.extend(self._walk_block(block_start, block_end, lower, upper, events))

        return slots

    def enumerate_pair_range_slots(
        self,
        availability: CalendarAvailability,
        events: Sequence[CalendarEvent],
        range_start: datetime,
        range_end: datetime,
    ) -> List[CalendarSlot]:
        """
        Enumerate slots inside each (start, end) pair of the day's window.

        A slot is emitted only when it fits entirely inside its pair and inside
        ``[range_start, range_end]`` and does not touch any buffered event.
        """
        lower = as_utc(range_start)
        upper = as_utc(range_end)
        slots: List[CalendarSlot] = []

        for day in iter_utc_days(lower, upper):
            window = availability.window_for(utc_weekday(day))
            if window is None:
                logger.debug("No availability on %s, skipping", day.to_date_string())
                continue

            for pair_start, pair_end in window.pairs():
                slots.extend(
                    self._walk_window(
                        at_time_of_day(day, pair_start),
                        at_time_of_day(day, pair_end),
                        lower,
                        upper,
                        events,
                    )
                )

        return slots

    def _walk_block(
        self,
        block_start: DateTime,
        block_end: DateTime,
        lower: DateTime,
        upper: DateTime,
        events: Iterable[CalendarEvent],
    ) -> List[CalendarSlot]:
        """
        Walk sub-slots from block start while they start before the block end.

        The walk stops at the first sub-slot that falls outside the range.
        """
        slots: List[CalendarSlot] = []
        if self.slot_duration_minutes <= 0:
            return slots

        current = block_start

        while current < block_end:
            slot_end = current.add(minutes=self.slot_duration_minutes)
            if current < lower or slot_end > upper:
                break

            if not conflicts_with_any(TimeRange(current, slot_end), events):
                slots.append(CalendarSlot(start=current, duration_minutes=self.slot_duration_minutes))

            current = slot_end

        return slots

    def _walk_window(
        self,
        window_start: DateTime,
        window_end: DateTime,
        lower: DateTime,
        upper: DateTime,
        events: Iterable[CalendarEvent],
    ) -> List[CalendarSlot]:
        """Walk sub-slots that fit entirely inside the window and the range."""
        slots: List[CalendarSlot] = []
        if self.slot_duration_minutes <= 0:
            return slots

        current = window_start
        rejected = 0

        while True:
            slot_end = current.add(minutes=self.slot_duration_minutes)
            if slot_end > window_end or slot_end > upper:
                break

            if current >= lower:
                if conflicts_with_any(TimeRange(current, slot_end), events):
                    rejected += 1
                else:
                    slots.append(CalendarSlot(start=current, duration_minutes=self.slot_duration_minutes))

            current = slot_end

        if rejected:
            logger.debug("Rejected %d slot(s) between %s and %s", rejected, window_start, window_end)

        return slots
