"""Employee router - FastAPI endpoints for employee operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ..appointments.schemas import appointment_to_response
from .schemas import EmployeeCreate, EmployeeResponse, EmployeeUpdate, employee_to_response
from .service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/employees", tags=["Employees"])


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    """Dependency injection for EmployeeService"""
    return EmployeeService(db)


@router.get("", response_model=list[EmployeeResponse])
async def get_employees(service: EmployeeService = Depends(get_employee_service)):
    """Get all employees ordered by name with their services and appointment counts"""
    return [employee_to_response(e, count) for e, count in service.get_employees()]


@router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    data: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    """Create a new employee and link the services they perform"""
    return employee_to_response(service.create_employee(data))


@router.get("/{employee_id}")
async def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    """Get an employee with their 10 most recent appointments"""
    employee, recent, count = service.get_employee_detail(employee_id)
    response = employee_to_response(employee, count).model_dump()
    response["appointments"] = [appointment_to_response(a).model_dump() for a in recent]
    return response


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
):
    """Update an employee; specialties replace the linked services"""
    return employee_to_response(service.update_employee(employee_id, data))


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    """Delete an employee"""
    return service.delete_employee(employee_id)
