"""Service catalog schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_required_text
from ...utils.sanitization import clean_text


class ServiceCreate(BaseModel):
    """Schema for creating a salon service"""

    name: str
    description: Optional[str] = None
    duration: int = Field(..., gt=0, description="Duration in minutes")
    price: float = Field(..., gt=0)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_required_text(v, "Name")

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        return clean_text(v)


class ServiceUpdate(BaseModel):
    """Schema for updating a salon service - only provided fields change"""

    name: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, gt=0)
    isActive: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None:
            return validate_required_text(v, "Name")
        return v


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    name: str
    description: Optional[str]
    duration: int
    price: float
    isActive: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def service_to_response(service) -> ServiceResponse:
    return ServiceResponse(
        id=service.id,
        name=service.name,
        description=service.description,
        duration=service.duration,
        price=service.price,
        isActive=service.is_active,
        createdAt=service.created_at,
        updatedAt=service.updated_at,
    )
