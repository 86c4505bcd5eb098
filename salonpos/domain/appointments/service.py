"""Appointment service - Booking, editing and lookup of appointments"""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentStatus
from ...shared.exceptions import Conflict, InternalError, NotFound, ValidationError
from ...shared.timeutils import start_of_day, to_business_time
from ...shared.validators import parse_iso_date, require_search_term
from ..clients.schemas import ClientInfo
from ..clients.service import ClientService
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate

logger = logging.getLogger(__name__)

# Fields an explicit null clears; a null on any other field is ignored
CLEARABLE_FIELDS = {"notes"}


class AppointmentService:
    """Service layer for the appointment lifecycle.

    New appointments start as SCHEDULED. The move to DONE normally comes from
    payment reconciliation; a direct ``status`` edit is accepted as a manual
    override and does not look at payments.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.clients = ClientService(db)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")
        return appointment

    def list_appointments(
        self, date_from: Optional[str] = None, date_to: Optional[str] = None
    ) -> list[Appointment]:
        """Appointments starting on/after ``date_from`` and ending on/before ``date_to``"""
        starts_from = None
        ends_before = None
        if date_from:
            starts_from = start_of_day(parse_iso_date(date_from, "from date"))
        if date_to:
            ends_before = start_of_day(parse_iso_date(date_to, "to date") + timedelta(days=1))

        return self.repo.get_appointments(self.db, starts_from, ends_before)

    def search_by_client(self, client_query: Optional[str]) -> list[Appointment]:
        term = require_search_term(client_query)
        return self.repo.search_by_client_name(self.db, term)

    def _resolve_client_id(self, client: Optional[ClientInfo]) -> Optional[int]:
        """Upsert the client when a name was given; None otherwise"""
        if client is None or not client.full_name:
            return None
        return self.clients.upsert_client(client.full_name, client.phone).id

    def _require_employee(self, employee_id: int) -> None:
        if not self.repo.get_employee(self.db, employee_id):
            raise NotFound("Employee not found")

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        self._require_employee(data.employee_id)
        service = self.repo.get_service(self.db, data.service_id)
        if not service:
            raise NotFound("Service not found")

        duration = data.final_duration_minutes or service.base_duration_minutes
        final_price = data.final_price if data.final_price is not None else service.base_price
        starts_at = to_business_time(data.starts_at)
        ends_at = to_business_time(data.ends_at) or starts_at + timedelta(minutes=duration)
        if ends_at < starts_at:
            raise ValidationError("ends_at must not be earlier than starts_at")

        try:
            client_id = self._resolve_client_id(data.client)
            appointment = self.repo.create_appointment(
                self.db,
                employee_id=data.employee_id,
                client_id=client_id,
                service_id=data.service_id,
                final_price=final_price,
                final_duration_minutes=duration,
                notes=data.notes,
                starts_at=starts_at,
                ends_at=ends_at,
                status=AppointmentStatus.SCHEDULED,
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Integrity error creating appointment: {e}")
            raise Conflict("Appointment conflicts with existing data") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating appointment: {e}")
            raise InternalError("Error creating appointment") from e

        logger.info(
            f"📅 Created appointment {appointment.id} for employee {data.employee_id} at {starts_at.isoformat()}"
        )
        return self.get_appointment(appointment.id)

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        """Partial update: only the fields present in ``data`` change"""
        appointment = self.get_appointment(appointment_id)

        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True, exclude={"client"}).items()
            if v is not None or k in CLEARABLE_FIELDS
        }

        if "employee_id" in updates:
            self._require_employee(updates["employee_id"])
        if "service_id" in updates and not self.repo.get_service(self.db, updates["service_id"]):
            raise NotFound("Service not found")

        for field in ("starts_at", "ends_at"):
            if field in updates:
                updates[field] = to_business_time(updates[field])

        starts_at = updates.get("starts_at", appointment.starts_at)
        ends_at = updates.get("ends_at", appointment.ends_at)
        if to_business_time(ends_at) < to_business_time(starts_at):
            raise ValidationError("ends_at must not be earlier than starts_at")

        if "status" in updates and updates["status"] != appointment.status:
            logger.info(
                f"✏️ Manual status change on appointment {appointment_id}: "
                f"{appointment.status} → {updates['status']}"
            )

        try:
            client_id = self._resolve_client_id(data.client)
            if client_id is not None:
                appointment.client_id = client_id

            for key, value in updates.items():
                setattr(appointment, key, value)

            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Integrity error updating appointment {appointment_id}: {e}")
            raise Conflict("Appointment conflicts with existing data") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating appointment {appointment_id}: {e}")
            raise InternalError("Error updating appointment") from e

        return self.get_appointment(appointment_id)

    def delete_appointment(self, appointment_id: int) -> dict:
        """Delete an appointment together with its payments"""
        appointment = self.get_appointment(appointment_id)

        try:
            self.repo.delete_appointment(self.db, appointment)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error deleting appointment {appointment_id}: {e}")
            raise InternalError("Error deleting appointment") from e

        logger.info(f"🗑️ Appointment {appointment_id} deleted")
        return {"message": "Appointment deleted"}
