"""Appointment domain schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import AppointmentStatus
from ..clients.schemas import ClientInfo


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment.

    ``final_price`` and ``final_duration_minutes`` default to the service's
    base values; ``ends_at`` defaults to ``starts_at`` plus the duration.
    """

    employee_id: int
    service_id: int
    client: Optional[ClientInfo] = None
    final_price: Optional[Decimal] = Field(None, ge=0)
    final_duration_minutes: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None
    starts_at: datetime
    ends_at: Optional[datetime] = None


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment; omitted fields keep their value"""

    employee_id: Optional[int] = None
    service_id: Optional[int] = None
    client: Optional[ClientInfo] = None
    final_price: Optional[Decimal] = Field(None, ge=0)
    final_duration_minutes: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is None:
            return v
        v = v.strip().upper()
        if v not in AppointmentStatus.ALL:
            raise ValueError(f"Status must be one of: {', '.join(AppointmentStatus.ALL)}")
        return v


class AppointmentResponse(BaseModel):
    """Schema for appointment response, with display names of related rows"""

    id: int
    employee_id: int
    client_id: Optional[int]
    service_id: int
    final_price: float
    final_duration_minutes: Optional[int]
    notes: Optional[str]
    starts_at: datetime
    ends_at: datetime
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    employee_name: Optional[str] = None
    employee_color: Optional[str] = None
    service_name: Optional[str] = None
    client_name: Optional[str] = None
    client_phone: Optional[str] = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str
