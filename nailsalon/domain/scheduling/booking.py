"""Booking validation chain run before an appointment with an employee is persisted"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from .availability import TimeInterval, has_conflict, is_within_working_hours, minutes_since_midnight
from .exceptions import NotWorkingThisDay, OutsideWorkingHours, TimeConflict
from .working_hours import WorkingHours, weekday_name

logger = logging.getLogger(__name__)


def service_totals(services: Iterable) -> tuple[int, float]:
    """
    Sum duration and price over the requested services.

    Order does not matter and a service requested twice counts twice.
    """
    total_duration = 0
    total_price = 0.0
    for service in services:
        total_duration += service.duration
        total_price += service.price
    return total_duration, round(total_price, 2)


def validate_booking(
    working_hours: Optional[WorkingHours],
    start: datetime,
    total_duration: int,
    existing_appointments: Iterable[TimeInterval],
) -> None:
    """
    Raise a BookingRejected subclass when the proposed appointment cannot be booked.

    Checks run in a fixed order: working day, working window, then overlaps.
    """
    day_hours = working_hours.for_date(start.date()) if working_hours else None
    if day_hours is None or not day_hours.isWorking:
        raise NotWorkingThisDay(f"The employee does not work on {weekday_name(start.date()).title()}")

    start_minutes = minutes_since_midnight(start)
    if not is_within_working_hours(start_minutes, total_duration, day_hours):
        raise OutsideWorkingHours(
            f"The appointment is outside working hours ({day_hours.start}-{day_hours.end})"
        )

    if has_conflict(start_minutes, total_duration, existing_appointments):
        raise TimeConflict()
