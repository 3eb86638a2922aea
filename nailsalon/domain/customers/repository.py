"""Customer repository - Database operations for customers"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Appointment, AppointmentServiceLink, Customer


class CustomerRepository:
    """Repository for customer database operations"""

    @staticmethod
    def get_customers_with_counts(db: Session) -> list[tuple[Customer, int]]:
        """Get all customers, newest first, with their appointment count"""
        counts = (
            db.query(Appointment.customer_id, func.count(Appointment.id).label("appointment_count"))
            .group_by(Appointment.customer_id)
            .subquery()
        )
        rows = (
            db.query(Customer, func.coalesce(counts.c.appointment_count, 0))
            .outerjoin(counts, counts.c.customer_id == Customer.id)
            .order_by(Customer.created_at.desc(), Customer.id.desc())
            .all()
        )
        return [(customer, int(count)) for customer, count in rows]

    @staticmethod
    def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
        """Get a specific customer by ID"""
        return db.query(Customer).filter(Customer.id == customer_id).first()

    @staticmethod
    def get_customer_by_phone(
        db: Session, phone: str, exclude_id: Optional[int] = None
    ) -> Optional[Customer]:
        """Get a customer by phone number, optionally ignoring one customer"""
        query = db.query(Customer).filter(Customer.phone == phone)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        return query.first()

    @staticmethod
    def get_customer_appointments(db: Session, customer_id: int) -> list[Appointment]:
        """Get a customer's appointments with their services, newest first"""
        return (
            db.query(Appointment)
            .options(
                joinedload(Appointment.employee),
                selectinload(Appointment.services).joinedload(AppointmentServiceLink.service),
            )
            .filter(Appointment.customer_id == customer_id)
            .order_by(Appointment.date.desc())
            .all()
        )

    @staticmethod
    def count_appointments(db: Session, customer_id: int) -> int:
        return (
            db.query(func.count(Appointment.id))
            .filter(Appointment.customer_id == customer_id)
            .scalar()
        )

    @staticmethod
    def create_customer(db: Session, **customer_data) -> Customer:
        """Create a new customer"""
        customer = Customer(**customer_data)
        db.add(customer)
        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def update_customer(db: Session, customer: Customer, **updates) -> Customer:
        """Update a customer with provided fields"""
        for key, value in updates.items():
            if hasattr(customer, key):
                setattr(customer, key, value)

        db.commit()
        db.refresh(customer)
        return customer

    @staticmethod
    def delete_customer(db: Session, customer: Customer) -> None:
        """Delete a customer"""
        db.delete(customer)
        db.commit()
