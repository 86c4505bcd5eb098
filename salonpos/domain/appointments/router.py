"""Appointment router - FastAPI endpoints for appointment operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    MessageResponse,
)
from .service import AppointmentService

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentResponse])
def get_appointments(
    date_from: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, inclusive"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Appointments in an optional date range, earliest first"""
    return service.list_appointments(date_from, date_to)


@router.get("/search", response_model=list[AppointmentResponse])
def search_appointments(
    client: Optional[str] = Query(None, description="At least 2 characters of the client's name"),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Latest appointments of clients whose name matches"""
    return service.search_by_client(client)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.create_appointment(data)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(appointment_id, data)


@router.delete("/{appointment_id}", response_model=MessageResponse)
def delete_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.delete_appointment(appointment_id)
