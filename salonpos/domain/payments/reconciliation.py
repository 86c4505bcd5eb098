"""
Payment reconciliation

Recomputes what an appointment has been paid and derives its status from
that total. Recording and deleting payments both go through ``reconcile``;
only deletion may move a DONE appointment back to SCHEDULED.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus
from ...shared.exceptions import NotFound
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


@dataclass
class Reconciliation:
    appointment_id: int
    total_paid: Decimal
    final_price: Decimal
    status: str
    status_changed: bool


def settled_status(
    final_price: Decimal, total_paid: Decimal, current_status: str, allow_demote: bool = False
) -> str:
    """
    Status an appointment should have given its price and what was paid.

    - Appointments without a positive price are never moved.
    - Paid in full → DONE.
    - DONE but no longer paid in full → SCHEDULED, only when ``allow_demote``
      (payment deletion). Recording payments never demotes.
    - Anything else keeps its status.
    """
    if final_price is None or final_price <= 0:
        return current_status
    if total_paid >= final_price:
        return AppointmentStatus.DONE
    if allow_demote and current_status == AppointmentStatus.DONE:
        return AppointmentStatus.SCHEDULED
    return current_status


def reconcile(db: Session, appointment_id: int, allow_demote: bool = False) -> Reconciliation:
    """Recompute the paid total and apply the resulting status; caller commits"""
    appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()
    if appointment is None:
        raise NotFound("Appointment not found")

    total_paid = PaymentRepository.total_paid(db, appointment_id)
    final_price = Decimal(str(appointment.final_price or 0))
    previous_status = appointment.status
    new_status = settled_status(final_price, total_paid, previous_status, allow_demote)

    changed = new_status != previous_status
    if changed:
        appointment.status = new_status
        db.flush()
        logger.info(
            f"🔄 Appointment {appointment_id}: {previous_status} → {new_status} "
            f"(paid {total_paid} of {final_price})"
        )

    return Reconciliation(
        appointment_id=appointment_id,
        total_paid=total_paid,
        final_price=final_price,
        status=new_status,
        status_changed=changed,
    )
