"""Payment router - FastAPI endpoints for payment operations"""

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    PaymentBatch,
    PaymentDeleteResult,
    PaymentLine,
    PaymentRecordResult,
    PaymentResponse,
)
from .service import PaymentService

router = APIRouter(prefix="/api/payments", tags=["Payments"])


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    """Dependency injection for PaymentService"""
    return PaymentService(db)


@router.post("", response_model=PaymentRecordResult, status_code=status.HTTP_201_CREATED)
def create_payments(
    data: PaymentBatch,
    service: PaymentService = Depends(get_payment_service),
):
    """Record payments sent as ``{appointment_id, payments: [...]}``"""
    return service.record_payments(data.appointment_id, data.payments)


@router.post(
    "/{appointment_id}",
    response_model=PaymentRecordResult,
    status_code=status.HTTP_201_CREATED,
)
def record_payments(
    appointment_id: int,
    payments: list[PaymentLine] = Body(...),
    service: PaymentService = Depends(get_payment_service),
):
    """Record payments sent as a bare array of ``{method, amount}``"""
    return service.record_payments(appointment_id, payments)


@router.get("/{appointment_id}", response_model=list[PaymentResponse])
def get_payments(
    appointment_id: int,
    service: PaymentService = Depends(get_payment_service),
):
    return service.list_payments(appointment_id)


@router.delete("/payment/{payment_id}", response_model=PaymentDeleteResult)
def delete_payment(
    payment_id: int,
    service: PaymentService = Depends(get_payment_service),
):
    """Delete a payment; a DONE appointment no longer paid in full goes back to SCHEDULED"""
    return service.delete_payment(payment_id)
