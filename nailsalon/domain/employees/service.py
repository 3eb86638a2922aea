"""Employee service - Business logic for employee operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, Employee
from ..catalog.repository import ServiceRepository
from .repository import EmployeeRepository
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service layer for employee business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = EmployeeRepository()
        self.services_repo = ServiceRepository()

    def get_employees(self) -> list[tuple[Employee, int]]:
        return self.repo.get_employees_with_counts(self.db)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self.repo.get_employee_by_id(self.db, employee_id)
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")
        return employee

    def get_employee_detail(self, employee_id: int) -> tuple[Employee, list[Appointment], int]:
        """Employee with their 10 most recent appointments and total appointment count"""
        employee = self.get_employee(employee_id)
        recent = self.repo.get_recent_appointments(self.db, employee_id, limit=10)
        return employee, recent, self.repo.count_appointments(self.db, employee_id)

    def _resolve_service_ids(self, service_ids: Optional[list[int]]) -> list[int]:
        """Deduplicate and check that every referenced service exists"""
        if not service_ids:
            return []

        unique_ids = list(dict.fromkeys(service_ids))
        found = {s.id for s in self.services_repo.get_services_by_ids(self.db, unique_ids)}
        missing = [sid for sid in unique_ids if sid not in found]
        if missing:
            raise HTTPException(status_code=400, detail=f"Unknown service IDs: {missing}")
        return unique_ids

    def create_employee(self, data: EmployeeCreate) -> Employee:
        service_ids = self._resolve_service_ids(data.specialties)

        employee = self.repo.create_employee(
            self.db,
            service_ids,
            name=data.name,
            email=data.email,
            phone=data.phone,
            working_hours=data.workingHours.to_storage() if data.workingHours else None,
            is_active=data.isActive,
        )
        logger.info(f"Created employee {employee.id} with {len(service_ids)} service(s)")
        return employee

    def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = self.get_employee(employee_id)
        provided = data.model_fields_set

        updates = {}
        if data.name is not None:
            updates["name"] = data.name
        if "email" in provided:
            updates["email"] = data.email
        if "phone" in provided:
            updates["phone"] = data.phone
        if data.isActive is not None:
            updates["is_active"] = data.isActive
        if "workingHours" in provided:
            updates["working_hours"] = data.workingHours.to_storage() if data.workingHours else None

        service_ids = None
        if data.specialties is not None:
            service_ids = self._resolve_service_ids(data.specialties)

        return self.repo.update_employee(self.db, employee, service_ids=service_ids, **updates)

    def delete_employee(self, employee_id: int) -> dict:
        employee = self.get_employee(employee_id)
        self.repo.delete_employee(self.db, employee)
        logger.info(f"Deleted employee {employee_id}")
        return {"message": "Employee deleted"}
