"""
Domain models for recurring availability, booked events and slots.

All entities are immutable value objects. Instants are pendulum ``DateTime``
values in UTC; see ``utc.py`` for the helpers that enforce that.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from pendulum import DateTime

from .utc import as_utc


class Weekday(IntEnum):
    """UTC day of week, 0=Sunday."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A wall-clock time within a UTC day, without a date component.

    Ordering follows minutes since midnight.
    """
    hours: int
    minutes: int = 0

    def to_minutes(self) -> int:
        """Return minutes since midnight."""
        return self.hours * 60 + self.minutes

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        return cls(hours=total // 60, minutes=total % 60)

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """
        Parse a ``HH:MM`` string.

        Raises:
            ValueError: If the string is not of the form HH:MM
        """
        hours_str, sep, minutes_str = value.strip().partition(":")
        if not sep or not hours_str.isdigit() or not minutes_str.isdigit():
            raise ValueError(f"Expected time as HH:MM, got '{value}'")
        return cls(hours=int(hours_str), minutes=int(minutes_str))

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


@dataclass(frozen=True)
class AvailabilityWindow:
    """
    Recurring open hours for one weekday.

    ``range`` is a pair-sequence: even indices open a window, odd indices
    close it. Pairs are expected ascending and non-overlapping.
    """
    weekday: Weekday
    range: Tuple[TimeOfDay, ...]

    def pairs(self) -> Iterator[Tuple[TimeOfDay, TimeOfDay]]:
        """Yield (start, end) pairs; a trailing unpaired entry is ignored."""
        for index in range(0, len(self.range) - 1, 2):
            yield self.range[index], self.range[index + 1]


@dataclass(frozen=True)
class CalendarAvailability:
    """The full recurring weekly template for one person."""
    include: Tuple[AvailabilityWindow, ...] = ()

    def window_for(self, weekday: int) -> Optional[AvailabilityWindow]:
        """Return the window for a weekday, or None if the person is not available."""
        for window in self.include:
            if window.weekday == weekday:
                return window
        return None


@dataclass(frozen=True)
class TimeRange:
    """
    Half-open interval ``[start, end)`` between two UTC instants.

    Touching endpoints do not overlap.
    """
    start: DateTime
    end: DateTime

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and self.end > other.start

    def contains(self, other: "TimeRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def intersect(self, other: "TimeRange") -> "TimeRange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def __str__(self) -> str:
        return f"{self.start.format('YYYY-MM-DD HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class Buffer:
    """Minutes blocked immediately before and after an event."""
    before: int = 0
    after: int = 0


@dataclass(frozen=True)
class CalendarEvent:
    """An already booked event, optionally padded by a buffer."""
    start: DateTime
    end: DateTime
    buffer: Optional[Buffer] = None

    def buffered_range(self) -> TimeRange:
        """Return ``[start - before, end + after]``; absent buffer counts as zero."""
        buffer = self.buffer or Buffer()
        return TimeRange(
            start=as_utc(self.start).subtract(minutes=buffer.before),
            end=as_utc(self.end).add(minutes=buffer.after),
        )

    def nominal_range(self) -> TimeRange:
        return TimeRange(start=as_utc(self.start), end=as_utc(self.end))


@dataclass(frozen=True)
class CalendarSlot:
    """
    A candidate or resulting booking window.

    The end is always derived from the start and the duration.
    """
    start: DateTime
    duration_minutes: int

    @property
    def end(self) -> DateTime:
        return as_utc(self.start).add(minutes=self.duration_minutes)

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=as_utc(self.start), end=self.end)

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Weekday, YYYY-MM-DD | HH:MM – HH:MM UTC
        """
        start = as_utc(self.start)
        weekday = Weekday(start.isoweekday() % 7).name.capitalize()
        date_str = start.format("YYYY-MM-DD")
        time_str = f"{start.format('HH:mm')} – {self.end.format('HH:mm')} UTC"

        return f"{weekday}, {date_str} | {time_str} ({self.duration_minutes} min)"


@dataclass(frozen=True)
class Attendee:
    """One participant's availability template and booked events."""
    availability: CalendarAvailability
    events: Tuple[CalendarEvent, ...] = field(default_factory=tuple)
    name: str = ""


def make_availability(windows: dict) -> CalendarAvailability:
    """
    Build a ``CalendarAvailability`` from ``{weekday: [(h, m), ...]}``.

    Convenience for callers holding plain tuples instead of domain objects.
    """
    include: List[AvailabilityWindow] = []
    for weekday, times in windows.items():
        include.append(
            AvailabilityWindow(
                weekday=Weekday(weekday),
                range=tuple(TimeOfDay(hours=h, minutes=m) for h, m in times),
            )
        )
    return CalendarAvailability(include=tuple(include))
