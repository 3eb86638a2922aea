"""Availability router - free slots per employee and day"""

import logging
from datetime import date as date_type
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...config import MIN_SLOT_DURATION_MINUTES
from ...database import get_db
from ..employees.schemas import employee_to_response
from .service import AvailabilityService

logger = logging.getLogger(__name__)

# Registered before the employees router so "/availability" is not taken for an employee ID
router = APIRouter(prefix="/api/employees", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.get("/availability")
async def get_available_employees(
    date: Optional[date_type] = Query(None, description="Target day, defaults to today"),
    serviceId: Optional[int] = Query(None, description="Only employees who perform this service"),
    duration: Optional[int] = Query(None, ge=MIN_SLOT_DURATION_MINUTES, description="Minutes"),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Active employees with their open slots for the requested day"""
    target_day = date or date_type.today()
    requested = service.resolve_duration(serviceId, duration)

    employees = []
    for employee, availability in service.available_employees(target_day, requested, serviceId):
        employees.append({**employee_to_response(employee).model_dump(), **availability})

    return {
        "date": target_day.isoformat(),
        "serviceId": serviceId,
        "duration": requested,
        "employees": employees,
    }


@router.get("/{employee_id}/availability")
async def get_employee_availability(
    employee_id: int,
    date: Optional[date_type] = Query(None, description="Target day, defaults to today"),
    duration: Optional[int] = Query(None, ge=MIN_SLOT_DURATION_MINUTES, description="Minutes"),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Open slots for one employee on the requested day"""
    employee = service.employees_repo.get_employee_by_id(service.db, employee_id)
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")

    target_day = date or date_type.today()
    requested = service.resolve_duration(None, duration)

    return {
        "date": target_day.isoformat(),
        "duration": requested,
        "employeeId": employee.id,
        **service.employee_availability(employee, target_day, requested),
    }
