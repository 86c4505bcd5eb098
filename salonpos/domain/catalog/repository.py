"""Catalog repository - Database operations for services and the rank ledger"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import PARKED_RANK, UNORDERED_RANK, Appointment, Service
from ..appointments.repository import AppointmentRepository


class CatalogRepository:
    """Repository for service database operations.

    Write helpers only flush; the calling service owns the transaction.
    """

    @staticmethod
    def get_services(db: Session, include_inactive: bool = False) -> list[Service]:
        """Services ordered by rank, then category, then name"""
        query = db.query(Service)
        if not include_inactive:
            query = query.filter(Service.active.is_(True))
        return query.order_by(
            Service.orden_prioridad.asc(), Service.category, Service.name
        ).all()

    @staticmethod
    def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.flush()
        return service

    @staticmethod
    def max_real_rank(db: Session) -> int:
        """Highest rank in use, ignoring the unordered and parked sentinels"""
        result = (
            db.query(func.max(Service.orden_prioridad))
            .filter(Service.orden_prioridad < UNORDERED_RANK)
            .scalar()
        )
        return result or 0

    @staticmethod
    def shift_ranks(db: Session, from_rank: int, delta: int, inclusive: bool = True) -> int:
        """
        Add ``delta`` to every real rank at or above ``from_rank``
        (strictly above when ``inclusive`` is False).

        Rows at a sentinel rank never move. Returns the number of rows shifted.
        """
        rank = Service.orden_prioridad
        bound = rank >= from_rank if inclusive else rank > from_rank
        return (
            db.query(Service)
            .filter(rank < UNORDERED_RANK, bound)
            .update({Service.orden_prioridad: rank + delta}, synchronize_session=False)
        )

    @staticmethod
    def park(db: Session, service: Service) -> None:
        """Move a service out of the live rank range while others are shifted"""
        service.orden_prioridad = PARKED_RANK
        db.flush()

    @staticmethod
    def get_used_ranks(db: Session) -> list[int]:
        """Distinct real ranks held by active services, ascending"""
        rows = (
            db.query(Service.orden_prioridad)
            .filter(Service.active.is_(True), Service.orden_prioridad < UNORDERED_RANK)
            .distinct()
            .order_by(Service.orden_prioridad.asc())
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def count_appointments(db: Session, service_id: int) -> int:
        return (
            db.query(func.count(Appointment.id))
            .filter(Appointment.service_id == service_id)
            .scalar()
        )

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.flush()

    @staticmethod
    def get_service_stats(db: Session, service_id: int) -> dict:
        return AppointmentRepository.get_stats(db, Appointment.service_id == service_id)
