"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .domain.exceptions import ConfigurationError, UnknownParticipantError
from .domain.models import (
    AvailabilityWindow,
    Buffer,
    CalendarAvailability,
    CalendarEvent,
    TimeOfDay,
    Weekday,
)
from .domain.utc import as_utc


class DefaultsConfig(BaseModel):
    """Default settings for slot search."""
    slot_duration_minutes: int = 30
    apply_buffer: bool = True
    mode: Literal["pairs", "fixed-block"] = "pairs"

    @field_validator("slot_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("slot_duration_minutes must be greater than zero")
        return value


class WindowConfig(BaseModel):
    """One weekday of a participant's recurring availability."""
    weekday: int  # 0=Sunday, 6=Saturday
    range: List[str]

    @field_validator("weekday")
    @classmethod
    def validate_weekday(cls, value: int) -> int:
        if value not in range(7):
            raise ValueError(f"weekday must be between 0 and 6, got {value}")
        return value

    @field_validator("range")
    @classmethod
    def validate_range(cls, value: List[str]) -> List[str]:
        """Ensure the range is an ascending, non-overlapping pair-sequence."""
        if len(value) % 2 != 0:
            raise ValueError("range must contain start/end pairs (even length)")

        minutes = []
        for item in value:
            time_of_day = TimeOfDay.parse(item)
            if not 0 <= time_of_day.hours <= 23 or not 0 <= time_of_day.minutes <= 59:
                raise ValueError(f"Time out of range: '{item}'")
            minutes.append(time_of_day.to_minutes())

        for index in range(0, len(minutes), 2):
            if minutes[index] >= minutes[index + 1]:
                raise ValueError(f"range pair must start before it ends, got {value}")
            # Touching pairs are fine: intervals are half-open.
            if index > 0 and minutes[index - 1] > minutes[index]:
                raise ValueError(f"range pairs must be ascending and not overlap, got {value}")
        return value

    def to_window(self) -> AvailabilityWindow:
        return AvailabilityWindow(
            weekday=Weekday(self.weekday),
            range=tuple(TimeOfDay.parse(item) for item in self.range),
        )


class BufferConfig(BaseModel):
    """Buffer minutes around an event."""
    before: int = 0
    after: int = 0

    @field_validator("before", "after")
    @classmethod
    def validate_minutes(cls, value: int) -> int:
        if value < 0:
            raise ValueError("buffer minutes must not be negative")
        return value


class EventConfig(BaseModel):
    """A booked event."""
    start: datetime
    end: datetime
    buffer: Optional[BufferConfig] = None

    @model_validator(mode="after")
    def validate_order(self) -> "EventConfig":
        """Ensure the event starts before it ends."""
        if as_utc(self.start) >= as_utc(self.end):
            raise ValueError(f"Event start {self.start} must be before end {self.end}")
        return self

    def to_event(self) -> CalendarEvent:
        buffer = None
        if self.buffer is not None:
            buffer = Buffer(before=self.buffer.before, after=self.buffer.after)
        return CalendarEvent(start=as_utc(self.start), end=as_utc(self.end), buffer=buffer)


class ParticipantConfig(BaseModel):
    """Participant configuration: recurring availability plus booked events."""
    name: str  # Used as alias
    availability: List[WindowConfig] = Field(default_factory=list)
    events: List[EventConfig] = Field(default_factory=list)

    @field_validator("availability")
    @classmethod
    def validate_unique_weekdays(cls, value: List[WindowConfig]) -> List[WindowConfig]:
        """A weekday may appear at most once per participant."""
        seen: set[int] = set()
        for window in value:
            if window.weekday in seen:
                raise ValueError(f"Duplicate availability for weekday {window.weekday}")
            seen.add(window.weekday)
        return value

    def to_availability(self) -> CalendarAvailability:
        return CalendarAvailability(include=tuple(window.to_window() for window in self.availability))

    def to_events(self) -> List[CalendarEvent]:
        return [event.to_event() for event in self.events]


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    participants: List[ParticipantConfig] = Field(default_factory=list)

    @field_validator("participants")
    @classmethod
    def validate_participants(cls, value: List[ParticipantConfig]) -> List[ParticipantConfig]:
        """Ensure participant names are unique."""
        seen_names: set[str] = set()
        for participant in value:
            name_key = participant.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate participant name detected: {participant.name}")
            seen_names.add(name_key)
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If the file is missing, not valid YAML or fails validation
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    def find_participant(self, name: str) -> ParticipantConfig | None:
        """Find a participant by name, case-insensitively."""
        for participant in self.participants:
            if participant.name.lower() == name.lower():
                return participant
        return None

    def resolve_participants(self, names: Sequence[str]) -> List[ParticipantConfig]:
        """
        Resolve participant names, dropping duplicates.

        Raises:
            UnknownParticipantError: If any name is not configured
        """
        if not names:
            raise UnknownParticipantError("No participants provided.")

        resolved: List[ParticipantConfig] = []
        unknown: List[str] = []

        for name in names:
            participant = self.find_participant(name)
            if participant is None:
                unknown.append(name)
            elif participant not in resolved:
                resolved.append(participant)

        if unknown:
            missing = ", ".join(sorted(set(unknown)))
            raise UnknownParticipantError(
                f"Unknown participant(s): {missing}. "
                "Ensure they exist in the configuration."
            )

        return resolved


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    config_path = Path.cwd() / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        config_path = Path(__file__).parent.parent / "config.yaml"

    return config_path
