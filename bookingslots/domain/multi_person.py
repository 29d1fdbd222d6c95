"""
Mutually free slots for several attendees.

Pure domain logic: no I/O, inputs are never mutated.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from pendulum import DateTime

from .conflicts import conflicts_with_any
from .models import Attendee, CalendarSlot, TimeOfDay, TimeRange
from .range_intersector import RangeIntersector
from .slot_enumerator import DEFAULT_SLOT_DURATION_MINUTES
from .utc import as_utc, at_time_of_day, iter_utc_days, utc_weekday

logger = logging.getLogger(__name__)


class MultiPersonSlotEnumerator:
    """
    Finds slots where every attendee is available and unbooked.

    Algorithm, per UTC day:
    1. Look up every attendee's window for the weekday; any gap skips the day
    2. Intersect all windows left to right into one common pair-sequence
    3. Walk fixed-duration sub-slots through each common pair
    4. Keep a sub-slot only if it clears every attendee's buffered events
    """

    def __init__(self, slot_duration_minutes: int = DEFAULT_SLOT_DURATION_MINUTES):
        self.slot_duration_minutes = slot_duration_minutes

    def enumerate(
        self,
        attendees: Sequence[Attendee],
        range_start: datetime,
        range_end: datetime,
    ) -> List[CalendarSlot]:
        """
        Find all mutually free slots in the range.

        Args:
            attendees: Availability and events per attendee
            range_start: Earliest allowed slot start
            range_end: Latest allowed slot end

        Returns:
            Slots ordered by day, then window, then time
        """
        if not attendees or self.slot_duration_minutes <= 0:
            return []

        lower = as_utc(range_start)
        upper = as_utc(range_end)
        slots: List[CalendarSlot] = []

        for day in iter_utc_days(lower, upper):
            common = self.common_range_for_day(attendees, utc_weekday(day))
            if not common:
                logger.debug("No common availability on %s", day.to_date_string())
                continue

            for index in range(0, len(common) - 1, 2):
                slots.extend(
                    self._walk_window(
                        at_time_of_day(day, common[index]),
                        at_time_of_day(day, common[index + 1]),
                        lower,
                        upper,
                        attendees,
                    )
                )

        return slots

    @staticmethod
    def common_range_for_day(
        attendees: Sequence[Attendee],
        weekday: int,
    ) -> Optional[List[TimeOfDay]]:
        """
        Intersect every attendee's window for a weekday.

        Returns None when at least one attendee has no window that day.
        """
        ranges = []
        for attendee in attendees:
            window = attendee.availability.window_for(weekday)
            if window is None:
                return None
            ranges.append(window.range)

        return RangeIntersector.intersect_all(ranges)

    def _walk_window(
        self,
        window_start: DateTime,
        window_end: DateTime,
        lower: DateTime,
        upper: DateTime,
        attendees: Sequence[Attendee],
    ) -> List[CalendarSlot]:
        slots: List[CalendarSlot] = []
        current = window_start

        while True:
            slot_end = current.add(minutes=self.slot_duration_minutes)
            if slot_end > window_end or slot_end > upper:
                break

            slot_range = TimeRange(current, slot_end)
            if current >= lower and not any(
                conflicts_with_any(slot_range, attendee.events)
                for attendee in attendees
            ):
                slots.append(CalendarSlot(start=current, duration_minutes=self.slot_duration_minutes))

            current = slot_end

        return slots
