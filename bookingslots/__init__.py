"""
Bookable slot finder - recurring availability, buffered events and
multi-attendee intersection under UTC day semantics.
"""

__version__ = "0.1.0"
