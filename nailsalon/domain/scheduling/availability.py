"""
Availability calculator.

Pure interval arithmetic over one employee's single working day. All times are
minutes since midnight; intervals are half-open, so an appointment ending at
10:00 does not collide with one starting at 10:00.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from .working_hours import DayHours, format_minutes

DEFAULT_SLOT_GRANULARITY = 30


@dataclass(frozen=True)
class TimeInterval:
    start: int
    end: int

    @classmethod
    def from_start(cls, start: int, duration_minutes: int) -> "TimeInterval":
        return cls(start=start, end=start + duration_minutes)

    @classmethod
    def from_datetime(cls, start: datetime, duration_minutes: int) -> "TimeInterval":
        return cls.from_start(minutes_since_midnight(start), duration_minutes)

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict:
        return {"start": format_minutes(self.start), "end": format_minutes(self.end)}


def minutes_since_midnight(value: datetime) -> int:
    return value.hour * 60 + value.minute


def _align(current: int, origin: int, granularity: int) -> int:
    """Round current up to the next granularity step counted from origin"""
    remainder = (current - origin) % granularity
    return current if remainder == 0 else current + granularity - remainder


def compute_available_slots(
    working_hours: Optional[DayHours],
    existing_appointments: Iterable[TimeInterval],
    requested_duration_minutes: int,
    slot_granularity_minutes: int = DEFAULT_SLOT_GRANULARITY,
) -> list[TimeInterval]:
    """
    Free slots of exactly ``requested_duration_minutes`` for one working day.

    Candidate starts advance by ``slot_granularity_minutes`` from the start of
    the working window. When the walk reaches a busy interval it jumps past
    its end and re-aligns to the granularity grid.
    """
    if requested_duration_minutes <= 0:
        raise ValueError("Requested duration must be positive")
    if slot_granularity_minutes <= 0:
        raise ValueError("Slot granularity must be positive")

    if working_hours is None or not working_hours.isWorking:
        return []

    work_start = working_hours.start_minutes
    work_end = working_hours.end_minutes

    # sorted() is stable, equal starts keep their input order
    busy = sorted(existing_appointments, key=lambda interval: interval.start)

    slots: list[TimeInterval] = []
    current = work_start

    for interval in busy:
        limit = min(interval.start, work_end)
        while current + requested_duration_minutes <= limit:
            slots.append(TimeInterval.from_start(current, requested_duration_minutes))
            current += slot_granularity_minutes
        current = _align(max(current, interval.end), work_start, slot_granularity_minutes)

    while current + requested_duration_minutes <= work_end:
        slots.append(TimeInterval.from_start(current, requested_duration_minutes))
        current += slot_granularity_minutes

    return slots


def has_conflict(
    proposed_start: int,
    proposed_duration_minutes: int,
    existing_appointments: Iterable[TimeInterval],
) -> bool:
    proposed = TimeInterval.from_start(proposed_start, proposed_duration_minutes)
    return any(proposed.overlaps(existing) for existing in existing_appointments)


def is_within_working_hours(
    proposed_start: int,
    proposed_duration_minutes: int,
    working_hours: Optional[DayHours],
) -> bool:
    if working_hours is None or not working_hours.isWorking:
        return False
    return (
        proposed_start >= working_hours.start_minutes
        and proposed_start + proposed_duration_minutes <= working_hours.end_minutes
    )
