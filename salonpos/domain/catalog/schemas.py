"""Catalog domain schemas - Pydantic models for services and their ranks"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...models import UNORDERED_RANK
from ...shared.validators import normalize_name


class ServiceCreate(BaseModel):
    """Schema for creating a new service"""

    name: str
    base_price: Optional[Decimal] = Field(None, ge=0)
    base_duration_minutes: int = Field(60, gt=0)
    category: Optional[str] = None
    orden_prioridad: int = Field(UNORDERED_RANK, ge=1, le=UNORDERED_RANK)
    active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return normalize_name(v)

    @field_validator("category")
    @classmethod
    def strip_category(cls, v):
        if v is None:
            return v
        return v.strip() or None


class ServiceUpdate(BaseModel):
    """Schema for updating a service; omitted fields keep their value"""

    name: Optional[str] = None
    base_price: Optional[Decimal] = Field(None, ge=0)
    base_duration_minutes: Optional[int] = Field(None, gt=0)
    category: Optional[str] = None
    orden_prioridad: Optional[int] = Field(None, ge=1, le=UNORDERED_RANK)
    active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return normalize_name(v)

    @field_validator("category")
    @classmethod
    def strip_category(cls, v):
        if v is None:
            return v
        return v.strip()


class ServiceResponse(BaseModel):
    """Schema for service response"""

    id: int
    name: str
    base_price: float
    base_duration_minutes: int
    category: Optional[str]
    orden_prioridad: int
    active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ServiceDeleteResponse(BaseModel):
    message: str
    service: Optional[ServiceResponse] = None


class ServiceStats(BaseModel):
    total_appointments: int
    completed_appointments: int
    average_price: Optional[float]
    total_revenue: float
    last_appointment: Optional[datetime]
    first_appointment: Optional[datetime]


class PrioritiesInfo(BaseModel):
    """Ranks in use and the first free slot to offer for a new service"""

    usedPriorities: list[int]
    nextAvailable: int
    maxUsedPriority: int
