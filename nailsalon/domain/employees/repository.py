"""Employee repository - Database operations for employees"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, AppointmentServiceLink, Employee, EmployeeServiceLink


class EmployeeRepository:
    """Repository for employee database operations"""

    @staticmethod
    def get_employees_with_counts(db: Session) -> list[tuple[Employee, int]]:
        """Get all employees ordered by name with their appointment counts"""
        counts = (
            db.query(Appointment.employee_id, func.count(Appointment.id).label("appointment_count"))
            .filter(Appointment.employee_id.isnot(None))
            .group_by(Appointment.employee_id)
            .subquery()
        )
        rows = (
            db.query(Employee, func.coalesce(counts.c.appointment_count, 0))
            .outerjoin(counts, counts.c.employee_id == Employee.id)
            .options(selectinload(Employee.employee_services).joinedload(EmployeeServiceLink.service))
            .order_by(Employee.name.asc())
            .all()
        )
        return [(employee, int(count)) for employee, count in rows]

    @staticmethod
    def get_employee_by_id(db: Session, employee_id: int) -> Optional[Employee]:
        return db.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def get_active_employee(db: Session, employee_id: int) -> Optional[Employee]:
        return (
            db.query(Employee)
            .filter(Employee.id == employee_id, Employee.is_active.is_(True))
            .first()
        )

    @staticmethod
    def get_active_employees(db: Session, service_id: Optional[int] = None) -> list[Employee]:
        """Active employees, optionally only those who perform a given service"""
        query = db.query(Employee).filter(Employee.is_active.is_(True))

        if service_id is not None:
            query = query.filter(
                Employee.employee_services.any(EmployeeServiceLink.service_id == service_id)
            )

        return query.order_by(Employee.name.asc()).all()

    @staticmethod
    def get_recent_appointments(db: Session, employee_id: int, limit: int = 10) -> list[Appointment]:
        return (
            db.query(Appointment)
            .options(
                joinedload(Appointment.customer),
                selectinload(Appointment.services).joinedload(AppointmentServiceLink.service),
            )
            .filter(Appointment.employee_id == employee_id)
            .order_by(Appointment.date.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_appointments(db: Session, employee_id: int) -> int:
        return (
            db.query(func.count(Appointment.id))
            .filter(Appointment.employee_id == employee_id)
            .scalar()
        )

    @staticmethod
    def create_employee(db: Session, service_ids: list[int], **employee_data) -> Employee:
        """Create an employee together with their service links"""
        employee = Employee(**employee_data)
        employee.employee_services = [EmployeeServiceLink(service_id=sid) for sid in service_ids]
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def update_employee(
        db: Session, employee: Employee, service_ids: Optional[list[int]] = None, **updates
    ) -> Employee:
        """Update an employee; a service_ids list replaces all existing links"""
        for key, value in updates.items():
            if hasattr(employee, key):
                setattr(employee, key, value)

        if service_ids is not None:
            employee.employee_services.clear()
            db.flush()
            employee.employee_services.extend(
                EmployeeServiceLink(service_id=sid) for sid in service_ids
            )

        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def delete_employee(db: Session, employee: Employee) -> None:
        """Delete an employee; their appointments keep existing without an employee"""
        db.delete(employee)
        db.commit()
