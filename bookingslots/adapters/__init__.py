"""
Adapters layer - Calendar sources feeding the service layer.
"""

from .config_source import ConfigCalendarSource

__all__ = ["ConfigCalendarSource"]
