"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Client
from ...shared.exceptions import Conflict, InternalError, NotFound
from ...shared.validators import require_search_term
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self) -> list[Client]:
        return self.repo.get_clients(self.db)

    def get_client(self, client_id: int) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise NotFound("Client not found")
        return client

    def upsert_client(self, full_name: str, phone: Optional[str] = None) -> Client:
        """
        Find a client by full name or create it.

        An existing client's phone is replaced when a phone is supplied. Only
        flushes: the caller commits, so the upsert can share the caller's
        transaction.
        """
        client = self.repo.get_client_by_name(self.db, full_name)
        if client is None:
            client = self.repo.create_client(self.db, full_name=full_name, phone=phone)
            logger.info(f"👤 Created client {client.id} '{full_name}'")
        elif phone is not None and phone != client.phone:
            client.phone = phone
            self.db.flush()
            logger.info(f"👤 Updated phone of client {client.id}")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        try:
            client = self.upsert_client(data.full_name, data.phone)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Concurrent insert of client '{data.full_name}'")
            raise Conflict("A client with that name already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating client: {e}")
            raise InternalError("Error creating client") from e

        self.db.refresh(client)
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = self.get_client(client_id)

        try:
            if data.full_name is not None:
                client.full_name = data.full_name
            if data.phone is not None:
                client.phone = data.phone
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Rename of client {client_id} collides with an existing client")
            raise Conflict("A client with that name already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error updating client {client_id}: {e}")
            raise InternalError("Error updating client") from e

        self.db.refresh(client)
        return client

    def search_clients(self, query: Optional[str]) -> list[dict]:
        term = require_search_term(query)
        return self.repo.search_clients(self.db, term)

    def get_client_stats(self, client_id: int) -> dict:
        self.get_client(client_id)
        stats = self.repo.get_client_stats(self.db, client_id)
        stats["frequent_services"] = self.repo.get_frequent_services(self.db, client_id)
        return stats
