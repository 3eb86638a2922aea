"""Appointment router - FastAPI endpoints for booking"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AppointmentCreate,
    AppointmentPatch,
    AppointmentResponse,
    AppointmentUpdate,
    appointment_to_response,
)
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(service: AppointmentService = Depends(get_appointment_service)):
    """Get all appointments, newest first"""
    return [appointment_to_response(a) for a in service.get_appointments()]


# Booking handlers are sync so a held employee lock blocks a worker thread, not the event loop

@router.post("", response_model=AppointmentResponse, status_code=201)
def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """
    Book an appointment.

    When an employee is given the booking must fall on one of their working
    days, inside their working hours and clear of their other appointments.
    Rejections come back as 400 with a machine readable ``code``.
    """
    return appointment_to_response(service.create_appointment(data))


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    return appointment_to_response(service.get_appointment(appointment_id))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Full edit of an appointment"""
    return appointment_to_response(service.update_appointment(appointment_id, data))


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
def patch_appointment(
    appointment_id: int,
    data: AppointmentPatch,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Reschedule, change status or edit notes"""
    return appointment_to_response(service.patch_appointment(appointment_id, data))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id)
