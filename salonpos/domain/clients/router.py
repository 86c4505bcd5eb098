"""Client router - FastAPI endpoints for client operations"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    ClientCreate,
    ClientResponse,
    ClientSearchResult,
    ClientStats,
    ClientUpdate,
)
from .service import ClientService

router = APIRouter(prefix="/api/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=list[ClientResponse])
def get_clients(service: ClientService = Depends(get_client_service)):
    return service.get_clients()


@router.get("/search", response_model=list[ClientSearchResult])
def search_clients(
    q: Optional[str] = Query(None, description="At least 2 characters of the client's name"),
    service: ClientService = Depends(get_client_service),
):
    return service.search_clients(q)


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
):
    """Create a client, or refresh the phone of the one with the same name"""
    return service.create_client(data)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: int,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    return service.update_client(client_id, data)


@router.get("/{client_id}/stats", response_model=ClientStats)
def get_client_stats(
    client_id: int,
    service: ClientService = Depends(get_client_service),
):
    return service.get_client_stats(client_id)
