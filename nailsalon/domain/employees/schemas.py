"""Employee domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, field_validator

from ...shared.validators import validate_phone, validate_required_text
from ..catalog.schemas import ServiceResponse, service_to_response
from ..scheduling.exceptions import InvalidConfiguration
from ..scheduling.working_hours import WorkingHours, parse_working_hours


class EmployeeCreate(BaseModel):
    """Schema for creating a new employee"""

    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    specialties: Optional[list[int]] = None  # IDs of services the employee performs
    workingHours: Optional[WorkingHours] = None
    isActive: bool = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_required_text(v, "Name")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return None


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee - only provided fields change"""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    specialties: Optional[list[int]] = None
    workingHours: Optional[WorkingHours] = None
    isActive: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None:
            return validate_required_text(v, "Name")
        return v

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        if v:
            return validate_phone(v)
        return None


class EmployeeResponse(BaseModel):
    """Schema for employee response"""

    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    specialties: list[int]
    services: list[ServiceResponse]
    workingHours: Optional[dict[str, Any]]
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    appointmentCount: Optional[int] = None


def working_hours_to_response(raw) -> Optional[dict[str, Any]]:
    """Stored hours as a dict; values that do not parse are reported as None"""
    try:
        working_hours = parse_working_hours(raw)
    except InvalidConfiguration:
        return None
    return working_hours.to_storage() if working_hours else None


def employee_to_response(employee, appointment_count: Optional[int] = None) -> EmployeeResponse:
    services = [link.service for link in employee.employee_services]
    return EmployeeResponse(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        phone=employee.phone,
        specialties=[s.id for s in services],
        services=[service_to_response(s) for s in services],
        workingHours=working_hours_to_response(employee.working_hours),
        isActive=employee.is_active,
        createdAt=employee.created_at,
        updatedAt=employee.updated_at,
        appointmentCount=appointment_count,
    )
