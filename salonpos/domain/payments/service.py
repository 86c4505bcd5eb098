"""Payment service - Records and reverses payments against appointments"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Payment, PaymentMethod
from ...shared.exceptions import InternalError, NotFound, ValidationError
from .reconciliation import reconcile
from .repository import PaymentRepository
from .schemas import PaymentLine

logger = logging.getLogger(__name__)


class PaymentService:
    """Service layer for the payment allocator.

    A batch is written in a single transaction together with the status
    change it causes, and the appointment row stays locked meanwhile, so an
    invalid line never leaves earlier lines behind.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepository()

    @staticmethod
    def accepted_lines(lines: list[PaymentLine]) -> list[PaymentLine]:
        """
        Filter a batch down to the lines to insert.

        Lines without a method or a positive amount are dropped. An unknown
        method rejects the whole batch.
        """
        if not lines:
            raise ValidationError("At least one payment is required")

        accepted = []
        for line in lines:
            if not line.method or line.amount is None or line.amount <= 0:
                continue
            if line.method not in PaymentMethod.ALL:
                raise ValidationError(f"Invalid payment method: {line.method}")
            accepted.append(line)
        return accepted

    def list_payments(self, appointment_id: int) -> list[Payment]:
        if not self.repo.get_appointment(self.db, appointment_id):
            raise NotFound("Appointment not found")
        return self.repo.get_payments(self.db, appointment_id)

    def record_payments(self, appointment_id: int, lines: list[PaymentLine]) -> dict:
        accepted = self.accepted_lines(lines)

        appointment = self.repo.get_appointment_for_update(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")

        try:
            payments = [
                self.repo.create_payment(self.db, appointment_id, line.method, line.amount)
                for line in accepted
            ]
            result = reconcile(self.db, appointment_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error recording payments for appointment {appointment_id}: {e}")
            raise InternalError("Error recording payments") from e

        for payment in payments:
            self.db.refresh(payment)

        logger.info(
            f"💰 Recorded {len(payments)} payment(s) on appointment {appointment_id}, "
            f"total paid {result.total_paid}"
        )
        return {
            "pagos": payments,
            "totalPagado": result.total_paid,
            "status": result.status,
            "statusChanged": result.status_changed,
        }

    def delete_payment(self, payment_id: int) -> dict:
        """Remove one payment and re-derive the appointment status"""
        payment = self.repo.get_payment_by_id(self.db, payment_id)
        if not payment:
            raise NotFound("Payment not found")

        # Needed after the row is gone
        appointment_id = payment.appointment_id

        try:
            self.repo.get_appointment_for_update(self.db, appointment_id)
            self.repo.delete_payment(self.db, payment)
            result = reconcile(self.db, appointment_id, allow_demote=True)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting payment {payment_id}: {e}")
            raise InternalError("Error deleting payment") from e

        logger.info(
            f"🗑️ Payment {payment_id} deleted from appointment {appointment_id}, "
            f"total paid {result.total_paid}"
        )
        return {
            "message": "Payment deleted",
            "appointment_id": appointment_id,
            "totalPagado": result.total_paid,
            "status": result.status,
            "statusChanged": result.status_changed,
        }
