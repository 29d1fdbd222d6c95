"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .slot_finder import CalendarSourceProtocol, SlotFinderService

__all__ = ["CalendarSourceProtocol", "SlotFinderService"]
