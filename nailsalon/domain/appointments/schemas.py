"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AppointmentStatus
from ...utils.sanitization import clean_text
from ..catalog.schemas import ServiceResponse, service_to_response
from ..customers.schemas import CustomerResponse, customer_to_response
from ..scheduling.working_hours import format_minutes


def normalize_start(value: Optional[datetime]) -> Optional[datetime]:
    """Wall-clock start time truncated to the minute; time zones are not tracked"""
    if value is None:
        return value
    return value.replace(tzinfo=None, second=0, microsecond=0)


def normalize_status(value):
    """Accept "no-show" / "completed" style spellings for the status tag"""
    if isinstance(value, str):
        return value.strip().upper().replace("-", "_")
    return value


class AppointmentCreate(BaseModel):
    """Schema for booking a new appointment"""

    customerId: int
    date: datetime
    serviceIds: list[int] = Field(..., min_length=1)
    employeeId: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return normalize_start(v)

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        return clean_text(v)


class AppointmentUpdate(BaseModel):
    """Schema for a full appointment edit - services are replaced when given"""

    customerId: Optional[int] = None
    date: Optional[datetime] = None
    serviceIds: Optional[list[int]] = Field(None, min_length=1)
    employeeId: Optional[int] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return normalize_start(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return normalize_status(v)

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        return clean_text(v)


class AppointmentPatch(BaseModel):
    """Schema for quick changes: reschedule, status tag or notes"""

    date: Optional[datetime] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return normalize_start(v)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return normalize_status(v)

    @field_validator("notes")
    @classmethod
    def check_notes(cls, v):
        return clean_text(v)


class EmployeeSummary(BaseModel):
    id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    isActive: bool


class AppointmentServiceResponse(BaseModel):
    id: int
    serviceId: int
    service: ServiceResponse


class AppointmentResponse(BaseModel):
    """Schema for appointment response"""

    id: int
    date: datetime
    time: str
    duration: int
    totalDuration: int
    totalPrice: float
    status: str
    notes: Optional[str]
    customerId: int
    customer: Optional[CustomerResponse] = None
    employeeId: Optional[int]
    employee: Optional[EmployeeSummary] = None
    services: list[AppointmentServiceResponse]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def appointment_to_response(appointment) -> AppointmentResponse:
    employee = appointment.employee
    return AppointmentResponse(
        id=appointment.id,
        date=appointment.date,
        time=format_minutes(appointment.date.hour * 60 + appointment.date.minute),
        duration=appointment.total_duration,
        totalDuration=appointment.total_duration,
        totalPrice=appointment.total_price,
        status=appointment.status,
        notes=appointment.notes,
        customerId=appointment.customer_id,
        customer=customer_to_response(appointment.customer) if appointment.customer else None,
        employeeId=appointment.employee_id,
        employee=(
            EmployeeSummary(
                id=employee.id,
                name=employee.name,
                email=employee.email,
                phone=employee.phone,
                isActive=employee.is_active,
            )
            if employee
            else None
        ),
        services=[
            AppointmentServiceResponse(
                id=link.id, serviceId=link.service_id, service=service_to_response(link.service)
            )
            for link in appointment.services
        ],
        createdAt=appointment.created_at,
        updatedAt=appointment.updated_at,
    )
