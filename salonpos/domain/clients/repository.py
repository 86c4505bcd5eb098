"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Appointment, Client, Service
from ...shared.validators import contains_pattern
from ..appointments.repository import AppointmentRepository

SEARCH_LIMIT = 10


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session) -> list[Client]:
        return db.query(Client).order_by(Client.full_name).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_client_by_name(db: Session, full_name: str) -> Optional[Client]:
        return db.query(Client).filter(Client.full_name == full_name).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.flush()
        return client

    @staticmethod
    def search_clients(db: Session, term: str, limit: int = SEARCH_LIMIT) -> list[dict]:
        """Clients whose name contains ``term``, busiest first"""
        total_appointments = func.count(Appointment.id).label("total_appointments")
        rows = (
            db.query(
                Client.id,
                Client.full_name,
                Client.phone,
                total_appointments,
                func.max(Appointment.starts_at).label("last_appointment"),
            )
            .outerjoin(Appointment, Appointment.client_id == Client.id)
            .filter(Client.full_name.ilike(contains_pattern(term), escape="\\"))
            .group_by(Client.id, Client.full_name, Client.phone)
            .order_by(total_appointments.desc(), Client.full_name.asc())
            .limit(limit)
            .all()
        )
        return [dict(row._mapping) for row in rows]

    @staticmethod
    def get_client_stats(db: Session, client_id: int) -> dict:
        return AppointmentRepository.get_stats(db, Appointment.client_id == client_id)

    @staticmethod
    def get_frequent_services(db: Session, client_id: int, limit: int = 5) -> list[dict]:
        frequency = func.count(Appointment.id).label("frequency")
        rows = (
            db.query(Service.name, frequency)
            .join(Appointment, Appointment.service_id == Service.id)
            .filter(Appointment.client_id == client_id)
            .group_by(Service.name)
            .order_by(frequency.desc(), Service.name.asc())
            .limit(limit)
            .all()
        )
        return [{"name": name, "frequency": count} for name, count in rows]
