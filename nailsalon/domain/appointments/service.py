"""Appointment service - Booking and editing appointments"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...booking_lock import employee_booking_lock
from ...models import Appointment, AppointmentStatus, Employee, Service
from ..catalog.repository import ServiceRepository
from ..customers.repository import CustomerRepository
from ..employees.repository import EmployeeRepository
from ..scheduling.booking import service_totals
from ..scheduling.exceptions import TimeConflict
from ..scheduling.service import AvailabilityService
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentPatch, AppointmentUpdate

logger = logging.getLogger(__name__)


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.customers_repo = CustomerRepository()
        self.employees_repo = EmployeeRepository()
        self.services_repo = ServiceRepository()
        self.availability = AvailabilityService(db)

    def get_appointments(self) -> list[Appointment]:
        return self.repo.get_appointments(self.db)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def _require_customer(self, customer_id: int) -> None:
        if not self.customers_repo.get_customer_by_id(self.db, customer_id):
            raise HTTPException(status_code=400, detail="Customer not found")

    def _require_active_employee(self, employee_id: int) -> Employee:
        employee = self.employees_repo.get_active_employee(self.db, employee_id)
        if not employee:
            raise HTTPException(status_code=400, detail="Invalid or inactive employee")
        return employee

    def _resolve_services(self, service_ids: list[int], require_active: bool) -> list[Service]:
        """One Service per requested ID, duplicates included, in request order"""
        found = {s.id: s for s in self.services_repo.get_services_by_ids(self.db, service_ids)}

        missing = sorted({sid for sid in service_ids if sid not in found})
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown service IDs: {missing}")

        if require_active:
            inactive = sorted({sid for sid in service_ids if not found[sid].is_active})
            if inactive:
                raise HTTPException(
                    status_code=400, detail=f"Services no longer offered: {inactive}"
                )

        return [found[sid] for sid in service_ids]

    # ------------------------------------------------------------------
    # Persistence under the booking lock
    # ------------------------------------------------------------------

    @contextmanager
    def _booking_guard(self, employee_id: Optional[int]) -> Iterator[None]:
        """
        Serialise validate-then-write for one employee.

        The unique (employee_id, date) constraint is still mapped to a
        TimeConflict in case another process wins the race.
        """
        if employee_id is None:
            yield
            return

        with employee_booking_lock(employee_id):
            yield

    @contextmanager
    def _write(self) -> Iterator[None]:
        """Flush or commit inside the block; a unique index violation is a TimeConflict"""
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Appointment write rejected by constraint: {e.orig}")
            raise TimeConflict() from e

    def _validate_slot(
        self,
        employee_id: Optional[int],
        start: datetime,
        total_duration: int,
        status: str,
        exclude_appointment_id: Optional[int] = None,
    ) -> None:
        """Booking validation applies only to live appointments with an employee"""
        if employee_id is None or status == AppointmentStatus.CANCELLED.value:
            return

        employee = self._require_active_employee(employee_id)
        self.availability.validate_booking(
            employee, start, total_duration, exclude_appointment_id=exclude_appointment_id
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        self._require_customer(data.customerId)
        if data.employeeId is not None:
            self._require_active_employee(data.employeeId)

        services = self._resolve_services(data.serviceIds, require_active=True)
        total_duration, total_price = service_totals(services)

        with self._booking_guard(data.employeeId):
            self._validate_slot(
                data.employeeId, data.date, total_duration, AppointmentStatus.SCHEDULED.value
            )

            appointment = Appointment(
                customer_id=data.customerId,
                employee_id=data.employeeId,
                date=data.date,
                notes=data.notes,
                status=AppointmentStatus.SCHEDULED.value,
                total_duration=total_duration,
                total_price=total_price,
            )
            with self._write():
                self.repo.add_appointment(self.db, appointment, data.serviceIds)

        appointment = self.get_appointment(appointment.id)

        logger.info(
            f"Booked appointment {appointment.id} for customer {data.customerId} "
            f"at {data.date.isoformat()} ({total_duration} min, {total_price:.2f})"
        )
        return appointment

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        """Full edit; re-validates the slot when timing, employee or services change"""
        appointment = self.get_appointment(appointment_id)
        provided = data.model_fields_set

        if data.customerId is not None:
            self._require_customer(data.customerId)

        employee_id = appointment.employee_id
        if data.employeeId is not None:
            # Resending the current employee keeps past bookings editable after they leave
            if data.employeeId != appointment.employee_id:
                self._require_active_employee(data.employeeId)
            employee_id = data.employeeId

        start = data.date or appointment.date
        status = data.status.value if data.status else appointment.status

        total_duration, total_price = appointment.total_duration, appointment.total_price
        if data.serviceIds is not None:
            services = self._resolve_services(data.serviceIds, require_active=False)
            total_duration, total_price = service_totals(services)

        schedule_changed = (
            employee_id != appointment.employee_id
            or start != appointment.date
            or total_duration != appointment.total_duration
            or (
                appointment.status == AppointmentStatus.CANCELLED.value
                and status != AppointmentStatus.CANCELLED.value
            )
        )

        with self._booking_guard(employee_id if schedule_changed else None):
            if schedule_changed:
                self._validate_slot(
                    employee_id, start, total_duration, status, exclude_appointment_id=appointment.id
                )

            with self._write():
                if data.serviceIds is not None:
                    self.repo.replace_services(self.db, appointment, data.serviceIds)
                    appointment.total_duration = total_duration
                    appointment.total_price = total_price
                if data.customerId is not None:
                    appointment.customer_id = data.customerId
                appointment.employee_id = employee_id
                appointment.date = start
                appointment.status = status
                if "notes" in provided:
                    appointment.notes = data.notes

        logger.info(f"Updated appointment {appointment_id}")
        return self.get_appointment(appointment_id)

    def patch_appointment(self, appointment_id: int, data: AppointmentPatch) -> Appointment:
        """Reschedule, retag or annotate an appointment"""
        appointment = self.get_appointment(appointment_id)

        start = data.date or appointment.date
        status = data.status.value if data.status else appointment.status
        reactivated = (
            appointment.status == AppointmentStatus.CANCELLED.value
            and status != AppointmentStatus.CANCELLED.value
        )
        schedule_changed = start != appointment.date or reactivated

        with self._booking_guard(appointment.employee_id if schedule_changed else None):
            if schedule_changed:
                self._validate_slot(
                    appointment.employee_id,
                    start,
                    appointment.total_duration,
                    status,
                    exclude_appointment_id=appointment.id,
                )

            with self._write():
                appointment.date = start
                appointment.status = status
                if "notes" in data.model_fields_set:
                    appointment.notes = data.notes

        if data.status:
            logger.info(f"Appointment {appointment_id} status set to {status}")
        return self.get_appointment(appointment_id)

    def delete_appointment(self, appointment_id: int) -> dict:
        appointment = self.get_appointment(appointment_id)
        self.repo.delete_appointment(self.db, appointment)
        logger.info(f"Deleted appointment {appointment_id}")
        return {"success": True}
