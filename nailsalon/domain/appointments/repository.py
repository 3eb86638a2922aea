"""Appointment repository - Database operations for appointments"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, AppointmentServiceLink, AppointmentStatus


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _with_relations(query):
        return query.options(
            joinedload(Appointment.customer),
            joinedload(Appointment.employee),
            selectinload(Appointment.services).joinedload(AppointmentServiceLink.service),
        )

    def get_appointments(self, db: Session) -> list[Appointment]:
        """All appointments, newest first"""
        return self._with_relations(db.query(Appointment)).order_by(Appointment.date.desc()).all()

    def get_appointment_by_id(self, db: Session, appointment_id: int) -> Optional[Appointment]:
        return (
            self._with_relations(db.query(Appointment))
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def fetch_appointments(
        db: Session,
        employee_id: int,
        day: date,
        exclude_appointment_id: Optional[int] = None,
    ) -> list[Appointment]:
        """Non-cancelled appointments of one employee on one calendar day"""
        day_start = datetime.combine(day, time.min)
        day_end = day_start + timedelta(days=1)

        query = db.query(Appointment).filter(
            Appointment.employee_id == employee_id,
            Appointment.date >= day_start,
            Appointment.date < day_end,
            Appointment.status != AppointmentStatus.CANCELLED.value,
        )
        if exclude_appointment_id is not None:
            query = query.filter(Appointment.id != exclude_appointment_id)

        return query.order_by(Appointment.date.asc()).all()

    @staticmethod
    def add_appointment(db: Session, appointment: Appointment, service_ids: list[int]) -> Appointment:
        """Stage a new appointment with one service link per requested service"""
        appointment.services = [AppointmentServiceLink(service_id=sid) for sid in service_ids]
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def replace_services(db: Session, appointment: Appointment, service_ids: list[int]) -> None:
        appointment.services.clear()
        db.flush()
        appointment.services.extend(AppointmentServiceLink(service_id=sid) for sid in service_ids)

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.commit()
