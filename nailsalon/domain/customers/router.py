"""Customer router - FastAPI endpoints for customer operations"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ..appointments.schemas import appointment_to_response
from .schemas import CustomerCreate, CustomerResponse, CustomerUpdate, customer_to_response
from .service import CustomerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/customers", tags=["Customers"])


def get_customer_service(db: Session = Depends(get_db)) -> CustomerService:
    """Dependency injection for CustomerService"""
    return CustomerService(db)


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    data: CustomerCreate,
    service: CustomerService = Depends(get_customer_service),
):
    """Create a new customer; phone numbers are unique"""
    return customer_to_response(service.create_customer(data))


@router.get("/list", response_model=list[CustomerResponse])
async def list_customers(service: CustomerService = Depends(get_customer_service)):
    """Get all customers, newest first, with appointment counts"""
    return [customer_to_response(c, count) for c, count in service.get_customers()]


@router.get("/search")
async def search_customer(
    phone: str = Query(..., min_length=1, description="Customer phone number"),
    service: CustomerService = Depends(get_customer_service),
):
    """Look up a customer by phone number, including appointment history"""
    customer, appointments = service.search_by_phone(phone)
    response = customer_to_response(customer, len(appointments)).model_dump()
    response["appointments"] = [appointment_to_response(a).model_dump() for a in appointments]
    return response


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    """Get a specific customer"""
    return customer_to_response(service.get_customer(customer_id))


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    data: CustomerUpdate,
    service: CustomerService = Depends(get_customer_service),
):
    """Update a customer"""
    return customer_to_response(service.update_customer(customer_id, data))


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service),
):
    """Delete a customer without appointments"""
    return service.delete_customer(customer_id)
