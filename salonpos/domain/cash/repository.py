"""Cash register repository - read-only payment rollups"""

from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus, Employee, Payment


class CashRepository:
    """Repository for cash register queries"""

    @staticmethod
    def get_method_totals(db: Session, day_start: datetime, day_end: datetime) -> list[tuple]:
        """
        Payment totals per employee and method for DONE appointments
        starting in [day_start, day_end).

        Rows are ``(employee_id, employee_name, method, total)``.
        """
        return (
            db.query(
                Employee.id,
                Employee.name,
                Payment.method,
                func.sum(Payment.amount),
            )
            .join(Appointment, Appointment.id == Payment.appointment_id)
            .join(Employee, Employee.id == Appointment.employee_id)
            .filter(
                Appointment.status == AppointmentStatus.DONE,
                Appointment.starts_at >= day_start,
                Appointment.starts_at < day_end,
            )
            .group_by(Employee.id, Employee.name, Payment.method)
            .order_by(Employee.name, Payment.method)
            .all()
        )
