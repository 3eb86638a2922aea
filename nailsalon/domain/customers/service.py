"""Customer service - Business logic for customer operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, Customer
from ...shared.validators import validate_phone
from .repository import CustomerRepository
from .schemas import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


class CustomerService:
    """Service layer for customer business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CustomerRepository()

    def get_customers(self) -> list[tuple[Customer, int]]:
        """All customers with their appointment counts"""
        return self.repo.get_customers_with_counts(self.db)

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.repo.get_customer_by_id(self.db, customer_id)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer

    def search_by_phone(self, phone: str) -> tuple[Customer, list[Appointment]]:
        """Find a customer by phone number together with their appointment history"""
        try:
            normalized = validate_phone(phone)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        customer = self.repo.get_customer_by_phone(self.db, normalized)
        if not customer:
            raise HTTPException(status_code=404, detail="Customer not found")
        return customer, self.repo.get_customer_appointments(self.db, customer.id)

    def create_customer(self, data: CustomerCreate) -> Customer:
        if self.repo.get_customer_by_phone(self.db, data.phone):
            raise HTTPException(
                status_code=409, detail="Customer with this phone number already exists"
            )

        customer = self.repo.create_customer(
            self.db,
            name=data.name,
            phone=data.phone,
            email=data.email,
            notes=data.notes,
            preferences=data.preferences,
        )
        logger.info(f"Created customer {customer.id}")
        return customer

    def update_customer(self, customer_id: int, data: CustomerUpdate) -> Customer:
        customer = self.get_customer(customer_id)

        if self.repo.get_customer_by_phone(self.db, data.phone, exclude_id=customer_id):
            raise HTTPException(
                status_code=409,
                detail="Another customer with this phone number already exists",
            )

        return self.repo.update_customer(
            self.db,
            customer,
            name=data.name,
            phone=data.phone,
            email=data.email,
            notes=data.notes,
            preferences=data.preferences,
        )

    def delete_customer(self, customer_id: int) -> dict:
        customer = self.get_customer(customer_id)

        if self.repo.count_appointments(self.db, customer_id) > 0:
            raise HTTPException(
                status_code=400, detail="Cannot delete customer with existing appointments"
            )

        self.repo.delete_customer(self.db, customer)
        logger.info(f"Deleted customer {customer_id}")
        return {"success": True}
