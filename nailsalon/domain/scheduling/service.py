"""Availability service - connects the calculator to the employee and appointment stores"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_SLOT_DURATION_MINUTES, SLOT_GRANULARITY_MINUTES
from ...models import Appointment, Employee
from ..appointments.repository import AppointmentRepository
from ..catalog.repository import ServiceRepository
from ..employees.repository import EmployeeRepository
from . import booking
from .availability import TimeInterval, compute_available_slots
from .exceptions import BookingRejected, InvalidConfiguration
from .working_hours import WorkingHours, parse_working_hours

logger = logging.getLogger(__name__)


def busy_intervals(appointments: list[Appointment]) -> list[TimeInterval]:
    return [TimeInterval.from_datetime(a.date, a.total_duration) for a in appointments]


class AvailabilityService:
    """Free slots per employee and booking validation against stored data"""

    def __init__(self, db: Session, slot_granularity: int = SLOT_GRANULARITY_MINUTES):
        self.db = db
        self.slot_granularity = slot_granularity
        self.appointments_repo = AppointmentRepository()
        self.employees_repo = EmployeeRepository()
        self.services_repo = ServiceRepository()

    @staticmethod
    def get_working_hours(employee: Employee) -> Optional[WorkingHours]:
        """Typed working hours; raises InvalidConfiguration for malformed stored data"""
        return parse_working_hours(employee.working_hours)

    def get_busy_intervals(
        self, employee_id: int, day: date, exclude_appointment_id: Optional[int] = None
    ) -> list[TimeInterval]:
        appointments = self.appointments_repo.fetch_appointments(
            self.db, employee_id, day, exclude_appointment_id
        )
        return busy_intervals(appointments)

    def resolve_duration(self, service_id: Optional[int], duration: Optional[int]) -> int:
        """Explicit duration, else the service's duration, else the configured default"""
        if duration is not None:
            return duration

        if service_id is not None:
            service = self.services_repo.get_service_by_id(self.db, service_id)
            if not service:
                raise HTTPException(status_code=404, detail="Service not found")
            return service.duration

        return DEFAULT_SLOT_DURATION_MINUTES

    def employee_availability(self, employee: Employee, day: date, duration: int) -> dict:
        """Open slots for one employee on one day, with a reason when there are none"""
        try:
            working_hours = self.get_working_hours(employee)
        except InvalidConfiguration as e:
            logger.warning(f"Employee {employee.id} has invalid working hours: {e.message}")
            return {
                "isAvailable": False,
                "availableSlots": [],
                "dayWorkingHours": None,
                "reason": e.message,
            }

        day_hours = working_hours.for_date(day) if working_hours else None
        if day_hours is None or not day_hours.isWorking:
            return {
                "isAvailable": False,
                "availableSlots": [],
                "dayWorkingHours": None,
                "reason": "Does not work on this day",
            }

        slots = compute_available_slots(
            day_hours,
            self.get_busy_intervals(employee.id, day),
            duration,
            self.slot_granularity,
        )
        return {
            "isAvailable": bool(slots),
            "availableSlots": [slot.to_dict() for slot in slots],
            "dayWorkingHours": day_hours.model_dump(),
            "reason": None if slots else "No available appointments",
        }

    def available_employees(
        self, day: date, duration: int, service_id: Optional[int] = None
    ) -> list[tuple[Employee, dict]]:
        employees = self.employees_repo.get_active_employees(self.db, service_id)
        return [(e, self.employee_availability(e, day, duration)) for e in employees]

    def validate_booking(
        self,
        employee: Employee,
        start: datetime,
        total_duration: int,
        exclude_appointment_id: Optional[int] = None,
    ) -> None:
        """Run the booking validation chain against the employee's stored schedule"""
        try:
            working_hours = self.get_working_hours(employee)
            booking.validate_booking(
                working_hours,
                start,
                total_duration,
                self.get_busy_intervals(employee.id, start.date(), exclude_appointment_id),
            )
        except BookingRejected as e:
            logger.info(
                f"Booking rejected for employee {employee.id} at {start.isoformat()} "
                f"({total_duration} min): {e.code}"
            )
            raise
