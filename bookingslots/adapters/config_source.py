"""
Calendar source backed by the YAML configuration.
"""

import logging
from typing import List

from pendulum import DateTime

from ..config import AppConfig
from ..domain.exceptions import UnknownParticipantError
from ..domain.models import CalendarAvailability, CalendarEvent, TimeRange
from ..domain.utc import as_utc

logger = logging.getLogger(__name__)


class ConfigCalendarSource:
    """
    Serves availability templates and booked events straight from ``AppConfig``.

    Useful for running the finder without any external calendar, and as the
    reference implementation of ``CalendarSourceProtocol``.
    """

    def __init__(self, config: AppConfig):
        """
        Initialize the source.

        Args:
            config: Loaded application configuration
        """
        self.config = config

    def _participant(self, name: str):
        participant = self.config.find_participant(name)
        if participant is None:
            raise UnknownParticipantError(f"Unknown participant: '{name}'")
        return participant

    def get_availability(self, participant: str) -> CalendarAvailability:
        """Return the participant's weekly availability template."""
        return self._participant(participant).to_availability()

    def get_events(
        self,
        participant: str,
        start_time: DateTime,
        end_time: DateTime,
    ) -> List[CalendarEvent]:
        """
        Return events whose buffered interval overlaps the requested window.

        Args:
            participant: Configured participant name
            start_time: Start of the time window
            end_time: End of the time window

        Returns:
            Events relevant to the window, in configuration order
        """
        window = TimeRange(start=as_utc(start_time), end=as_utc(end_time))
        events = self._participant(participant).to_events()

        relevant = [event for event in events if event.buffered_range().overlaps(window)]
        logger.debug(
            "Using %d of %d event(s) for %s", len(relevant), len(events), participant
        )
        return relevant
