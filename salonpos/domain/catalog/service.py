"""Catalog service - Service CRUD and the priority rank ledger"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import UNORDERED_RANK, Service
from ...shared.exceptions import Conflict, InternalError, NotFound
from .repository import CatalogRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A service with that name already exists"

# Fields an explicit null clears; a null on any other field is ignored
CLEARABLE_FIELDS = {"category"}


class CatalogService:
    """Service layer for the service catalog.

    Active services with a real rank (anything but ``UNORDERED_RANK``) always
    hold the ranks ``1..k`` with no duplicates. Every rank-changing write runs
    in a single transaction: park the moving row, close the gap it leaves,
    open the target slot, then place the row.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def list_ordered_active(self) -> list[Service]:
        return self.repo.get_services(self.db)

    def list_all(self) -> list[Service]:
        """Every service, including deactivated ones, for administration"""
        return self.repo.get_services(self.db, include_inactive=True)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service_by_id(self.db, service_id)
        if not service:
            raise NotFound("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        """Insert a service, opening a slot first when it is given a real rank"""
        rank = data.orden_prioridad
        if not data.active and rank != UNORDERED_RANK:
            # Only active services hold real ranks
            logger.info(f"Service '{data.name}' created inactive, rank {rank} ignored")
            rank = UNORDERED_RANK

        try:
            if rank != UNORDERED_RANK:
                # A rank past the end would leave a gap
                rank = min(rank, self.repo.max_real_rank(self.db) + 1)
                shifted = self.repo.shift_ranks(self.db, from_rank=rank, delta=1)
                logger.debug(f"Opened rank {rank}, shifted {shifted} service(s)")

            service = self.repo.create_service(
                self.db,
                name=data.name,
                base_price=data.base_price or 0,
                base_duration_minutes=data.base_duration_minutes,
                category=data.category,
                orden_prioridad=rank,
                active=data.active,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate service name on create: {data.name}")
            raise Conflict(DUPLICATE_NAME_MESSAGE) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating service '{data.name}': {e}")
            raise InternalError("Error creating service") from e

        self.db.refresh(service)
        logger.info(f"✅ Created service {service.id} '{service.name}' at rank {service.orden_prioridad}")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        """Apply a partial update, rebalancing ranks when the rank changes"""
        service = self.get_service(service_id)

        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in CLEARABLE_FIELDS
        }
        new_rank = updates.pop("orden_prioridad", None)

        try:
            if new_rank is not None and new_rank != service.orden_prioridad:
                self._move(service, new_rank)

            for key, value in updates.items():
                setattr(service, key, value)

            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate service name on update of service {service_id}")
            raise Conflict(DUPLICATE_NAME_MESSAGE) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating service {service_id}: {e}")
            raise InternalError("Error updating service") from e

        self.db.refresh(service)
        logger.info(f"✅ Updated service {service.id} (rank {service.orden_prioridad})")
        return service

    def _move(self, service: Service, new_rank: int) -> None:
        """Reposition ``service`` within the ledger; caller commits"""
        previous_rank = service.orden_prioridad
        self.repo.park(self.db, service)

        if previous_rank < UNORDERED_RANK:
            self.repo.shift_ranks(self.db, from_rank=previous_rank, delta=-1, inclusive=False)

        if new_rank == UNORDERED_RANK:
            service.orden_prioridad = UNORDERED_RANK
            return

        new_rank = min(new_rank, self.repo.max_real_rank(self.db) + 1)
        self.repo.shift_ranks(self.db, from_rank=new_rank, delta=1)
        service.orden_prioridad = new_rank
        logger.info(f"🔢 Service {service.id} moved from rank {previous_rank} to {new_rank}")

    def deactivate_or_delete(self, service_id: int) -> dict:
        """
        Hard-delete a service nobody booked; otherwise only deactivate it.

        Deactivated services keep their rank, so the active ranks may show a gap.
        """
        service = self.get_service(service_id)
        appointment_count = self.repo.count_appointments(self.db, service_id)

        try:
            if appointment_count > 0:
                service.active = False
                self.db.commit()
                self.db.refresh(service)
                logger.info(
                    f"Service {service_id} deactivated ({appointment_count} appointment(s) reference it)"
                )
                return {"message": "Service deactivated (it has appointments)", "service": service}

            self.repo.delete_service(self.db, service)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting service {service_id}: {e}")
            raise InternalError("Error deleting service") from e

        logger.info(f"🗑️ Service {service_id} deleted")
        return {"message": "Service deleted"}

    def get_service_stats(self, service_id: int) -> dict:
        self.get_service(service_id)
        return self.repo.get_service_stats(self.db, service_id)

    def get_priorities_info(self) -> dict:
        """Used ranks plus the lowest positive rank nobody holds"""
        used = self.repo.get_used_ranks(self.db)
        taken = set(used)
        next_available = 1
        while next_available in taken:
            next_available += 1

        return {
            "usedPriorities": used,
            "nextAvailable": next_available,
            "maxUsedPriority": max(used) if used else 0,
        }
