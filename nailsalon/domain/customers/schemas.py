"""Customer domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_phone, validate_required_text
from ...utils.sanitization import clean_text


class CustomerCreate(BaseModel):
    """Schema for creating a new customer"""

    name: str
    phone: str
    email: Optional[str] = None
    notes: Optional[str] = None
    preferences: Optional[str] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_required_text(v, "Name")

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v):
        v = validate_required_text(v, "Phone")
        return validate_phone(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        if v:
            return validate_email(v)
        return None

    @field_validator("notes", "preferences")
    @classmethod
    def check_free_text(cls, v):
        return clean_text(v)


class CustomerUpdate(CustomerCreate):
    """Schema for updating a customer - name and phone stay mandatory"""


class CustomerResponse(BaseModel):
    """Schema for customer response"""

    id: int
    name: str
    phone: str
    email: Optional[str]
    notes: Optional[str]
    preferences: Optional[str]
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
    appointmentCount: Optional[int] = None


def customer_to_response(customer, appointment_count: Optional[int] = None) -> CustomerResponse:
    return CustomerResponse(
        id=customer.id,
        name=customer.name,
        phone=customer.phone,
        email=customer.email,
        notes=customer.notes,
        preferences=customer.preferences,
        createdAt=customer.created_at,
        updatedAt=customer.updated_at,
        appointmentCount=appointment_count,
    )
