"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import normalize_name, normalize_phone


class ClientInfo(BaseModel):
    """Client identity embedded in appointment requests; every field optional"""

    full_name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if v is None or not v.strip():
            return None
        return normalize_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class ClientCreate(BaseModel):
    """Schema for creating (or refreshing) a client by full name"""

    full_name: str
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        return normalize_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    full_name: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        return normalize_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class ClientResponse(BaseModel):
    """Schema for client response"""

    id: int
    full_name: str
    phone: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ClientSearchResult(BaseModel):
    id: int
    full_name: str
    phone: Optional[str]
    total_appointments: int
    last_appointment: Optional[datetime]


class FrequentService(BaseModel):
    name: str
    frequency: int


class ClientStats(BaseModel):
    total_appointments: int
    completed_appointments: int
    average_price: Optional[float]
    total_revenue: float
    last_appointment: Optional[datetime]
    first_appointment: Optional[datetime]
    frequent_services: list[FrequentService]
