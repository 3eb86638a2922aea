"""Statistics router - dashboard endpoint"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import StatisticsResponse
from .service import StatisticsService

router = APIRouter(prefix="/api/statistics", tags=["Statistics"])


def get_statistics_service(db: Session = Depends(get_db)) -> StatisticsService:
    return StatisticsService(db)


@router.get("", response_model=StatisticsResponse)
async def get_statistics(service: StatisticsService = Depends(get_statistics_service)):
    """Appointment, revenue and customer figures for the dashboard"""
    return service.get_statistics()
