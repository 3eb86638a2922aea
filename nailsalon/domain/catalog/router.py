"""Service catalog router - FastAPI endpoints for salon services"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate, service_to_response
from .service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
async def get_services(service: CatalogService = Depends(get_catalog_service)):
    """Get all active services ordered by name"""
    return [service_to_response(s) for s in service.get_services()]


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a new salon service"""
    return service_to_response(service.create_service(data))


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update a salon service"""
    return service_to_response(service.update_service(service_id, data))


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a salon service that no appointment references"""
    return service.delete_service(service_id)
