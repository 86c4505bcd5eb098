"""Appointment repository - Database operations for appointments"""

from datetime import datetime
from typing import Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload

from ...models import Appointment, AppointmentStatus, Client, Employee, Service
from ...shared.validators import contains_pattern

SEARCH_LIMIT = 50


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def _with_relations(db: Session):
        return db.query(Appointment).options(
            joinedload(Appointment.employee),
            joinedload(Appointment.service),
            joinedload(Appointment.client),
        )

    @staticmethod
    def get_appointments(
        db: Session,
        starts_from: Optional[datetime] = None,
        ends_before: Optional[datetime] = None,
    ) -> list[Appointment]:
        """Appointments starting at/after ``starts_from`` and ending before ``ends_before``"""
        query = AppointmentRepository._with_relations(db)

        if starts_from is not None:
            query = query.filter(Appointment.starts_at >= starts_from)

        if ends_before is not None:
            query = query.filter(Appointment.ends_at < ends_before)

        return query.order_by(Appointment.starts_at.asc(), Appointment.id.asc()).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return (
            AppointmentRepository._with_relations(db)
            .filter(Appointment.id == appointment_id)
            .first()
        )

    @staticmethod
    def search_by_client_name(db: Session, term: str, limit: int = SEARCH_LIMIT) -> list[Appointment]:
        """Case-insensitive substring match on the client's full name, newest first"""
        return (
            AppointmentRepository._with_relations(db)
            .join(Client, Appointment.client_id == Client.id)
            .filter(Client.full_name.ilike(contains_pattern(term), escape="\\"))
            .order_by(Appointment.starts_at.desc(), Appointment.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.flush()
        return appointment

    @staticmethod
    def delete_appointment(db: Session, appointment: Appointment) -> None:
        db.delete(appointment)
        db.flush()

    @staticmethod
    def get_employee(db: Session, employee_id: int) -> Optional[Employee]:
        return db.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_stats(db: Session, *criteria) -> dict:
        """Volume and revenue figures over the appointments matching ``criteria``"""
        is_done = Appointment.status == AppointmentStatus.DONE
        total, completed, average, revenue, last, first = (
            db.query(
                func.count(Appointment.id),
                func.sum(case((is_done, 1), else_=0)),
                func.avg(Appointment.final_price),
                func.sum(case((is_done, Appointment.final_price), else_=0)),
                func.max(Appointment.starts_at),
                func.min(Appointment.starts_at),
            )
            .filter(*criteria)
            .one()
        )
        return {
            "total_appointments": total or 0,
            "completed_appointments": int(completed or 0),
            "average_price": round(float(average), 2) if average is not None else None,
            "total_revenue": round(float(revenue or 0), 2),
            "last_appointment": last,
            "first_appointment": first,
        }
