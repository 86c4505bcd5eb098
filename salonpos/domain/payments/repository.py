"""Payment repository - Database operations for payments"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, Payment

CENT = Decimal("0.01")


class PaymentRepository:
    """Repository for payment database operations"""

    @staticmethod
    def get_appointment(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_appointment_for_update(db: Session, appointment_id: int) -> Optional[Appointment]:
        """Load an appointment and lock its row until the transaction ends"""
        return (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .with_for_update()
            .first()
        )

    @staticmethod
    def get_payments(db: Session, appointment_id: int) -> list[Payment]:
        return (
            db.query(Payment)
            .filter(Payment.appointment_id == appointment_id)
            .order_by(Payment.created_at.asc(), Payment.id.asc())
            .all()
        )

    @staticmethod
    def get_payment_by_id(db: Session, payment_id: int) -> Optional[Payment]:
        return db.query(Payment).filter(Payment.id == payment_id).first()

    @staticmethod
    def create_payment(db: Session, appointment_id: int, method: str, amount: Decimal) -> Payment:
        payment = Payment(appointment_id=appointment_id, method=method, amount=amount)
        db.add(payment)
        db.flush()
        return payment

    @staticmethod
    def delete_payment(db: Session, payment: Payment) -> None:
        db.delete(payment)
        db.flush()

    @staticmethod
    def total_paid(db: Session, appointment_id: int) -> Decimal:
        """Sum of every payment recorded against the appointment"""
        total = (
            db.query(func.sum(Payment.amount))
            .filter(Payment.appointment_id == appointment_id)
            .scalar()
        )
        return Decimal(str(total or 0)).quantize(CENT)
