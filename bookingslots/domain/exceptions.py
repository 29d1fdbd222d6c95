"""
Domain-specific exception hierarchy for the booking slots application.

The slot engine itself never raises for malformed data; these are used by the
configuration, service and CLI layers.
"""


class BookingSlotsError(Exception):
    """Base class for all application-level errors."""


class ConfigurationError(BookingSlotsError):
    """Raised when the configuration file is missing or invalid."""


class UnknownParticipantError(BookingSlotsError):
    """Raised when a participant name cannot be resolved."""
