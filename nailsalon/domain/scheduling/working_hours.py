"""Typed weekly working hours, validated once at the store boundary"""

import json
import logging
import re
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from .exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)

# Index matches date.weekday(): 0 = Monday
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight"""
    match = TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM" """
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def weekday_name(day: date) -> str:
    """Locale-independent weekday key for a calendar date"""
    return WEEKDAYS[day.weekday()]


class DayHours(BaseModel):
    """Working window for one weekday"""

    start: str
    end: str
    isWorking: bool = False

    class Config:
        extra = "forbid"

    @field_validator("start", "end")
    @classmethod
    def validate_time(cls, v):
        # Normalise "9:00" to "09:00"
        return format_minutes(parse_hhmm(v))

    @model_validator(mode="after")
    def validate_window(self):
        if self.isWorking and self.start_minutes > self.end_minutes:
            raise ValueError("Working hours must start before they end")
        return self

    @property
    def start_minutes(self) -> int:
        return parse_hhmm(self.start)

    @property
    def end_minutes(self) -> int:
        return parse_hhmm(self.end)


class WorkingHours(BaseModel):
    """Weekly working hours; an absent day is a non-working day"""

    monday: Optional[DayHours] = None
    tuesday: Optional[DayHours] = None
    wednesday: Optional[DayHours] = None
    thursday: Optional[DayHours] = None
    friday: Optional[DayHours] = None
    saturday: Optional[DayHours] = None
    sunday: Optional[DayHours] = None

    class Config:
        extra = "forbid"

    def for_date(self, day: date) -> Optional[DayHours]:
        return getattr(self, weekday_name(day))

    def to_storage(self) -> dict:
        """JSON-ready dict with non-configured days left out"""
        return self.model_dump(exclude_none=True)


def parse_working_hours(raw: Any) -> Optional[WorkingHours]:
    """
    Parse a stored working-hours value.

    Returns None when nothing is configured. Malformed values raise
    InvalidConfiguration instead of silently falling back to defaults.
    """
    if raw is None or raw == "" or raw == {}:
        return None

    if isinstance(raw, WorkingHours):
        return raw

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Working hours are not valid JSON: {e}")
            raise InvalidConfiguration() from e

    if not isinstance(raw, dict):
        raise InvalidConfiguration()

    try:
        return WorkingHours.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Working hours failed validation: {e.errors()}")
        raise InvalidConfiguration() from e
