"""Service catalog repository - Database operations for salon services"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import AppointmentServiceLink, Service


class ServiceRepository:
    """Repository for salon service database operations"""

    @staticmethod
    def get_active_services(db: Session) -> list[Service]:
        return db.query(Service).filter(Service.is_active.is_(True)).order_by(Service.name.asc()).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_services_by_ids(db: Session, service_ids: list[int]) -> list[Service]:
        """Get the distinct services matching the given IDs"""
        if not service_ids:
            return []
        return db.query(Service).filter(Service.id.in_(set(service_ids))).all()

    @staticmethod
    def count_appointment_usages(db: Session, service_id: int) -> int:
        return (
            db.query(func.count(AppointmentServiceLink.id))
            .filter(AppointmentServiceLink.service_id == service_id)
            .scalar()
        )

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        """Update a service with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
