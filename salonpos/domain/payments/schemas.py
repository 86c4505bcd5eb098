"""Payment domain schemas - Pydantic models for validation"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PaymentLine(BaseModel):
    """One line of a payment batch.

    Lines missing a method or a positive amount are skipped, not rejected.
    """

    method: Optional[str] = None
    amount: Optional[Decimal] = None


class PaymentBatch(BaseModel):
    """Body of ``POST /api/payments``"""

    appointment_id: int
    payments: list[PaymentLine]


class PaymentResponse(BaseModel):
    id: int
    method: str
    amount: float
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentRecordResult(BaseModel):
    pagos: list[PaymentResponse]
    totalPagado: float
    status: str
    statusChanged: bool


class PaymentDeleteResult(BaseModel):
    message: str
    appointment_id: int
    totalPagado: float
    status: str
    statusChanged: bool
