"""Service catalog business logic"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Service
from .repository import ServiceRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the salon's service catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ServiceRepository()

    def get_services(self) -> list[Service]:
        """Active services ordered by name"""
        return self.repo.get_active_services(self.db)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create_service(
            self.db,
            name=data.name,
            description=data.description,
            duration=data.duration,
            price=data.price,
            is_active=True,
        )
        logger.info(f"Created service {service.id} ({service.name}, {service.duration} min)")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)

        updates = {
            "name": data.name,
            "duration": data.duration,
            "price": data.price,
            "is_active": data.isActive,
        }
        # Description may be cleared explicitly
        if "description" in data.model_fields_set:
            service.description = data.description

        return self.repo.update_service(self.db, service, **updates)

    def delete_service(self, service_id: int) -> dict:
        service = self.get_service(service_id)

        if self.repo.count_appointment_usages(self.db, service_id) > 0:
            raise HTTPException(
                status_code=400,
                detail="Cannot delete a service used by appointments, deactivate it instead",
            )

        self.repo.delete_service(self.db, service)
        logger.info(f"Deleted service {service_id}")
        return {"success": True}
