"""Catalog router - FastAPI endpoints for services and their display ranks"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    PrioritiesInfo,
    ServiceCreate,
    ServiceDeleteResponse,
    ServiceResponse,
    ServiceStats,
    ServiceUpdate,
)
from .service import CatalogService

router = APIRouter(prefix="/api/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("", response_model=list[ServiceResponse])
def list_services(service: CatalogService = Depends(get_catalog_service)):
    """Active services in display order"""
    return service.list_ordered_active()


@router.get("/admin", response_model=list[ServiceResponse])
def list_services_admin(service: CatalogService = Depends(get_catalog_service)):
    """All services, including deactivated ones"""
    return service.list_all()


@router.get("/priorities/info", response_model=PrioritiesInfo)
def get_priorities_info(service: CatalogService = Depends(get_catalog_service)):
    """Ranks in use and the next free one"""
    return service.get_priorities_info()


@router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(
    data: ServiceCreate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_service(data)


@router.patch("/{service_id}", response_model=ServiceResponse)
def update_service(
    service_id: int,
    data: ServiceUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_service(service_id, data)


@router.delete("/{service_id}", response_model=ServiceDeleteResponse)
def delete_service(
    service_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a service, or deactivate it when appointments reference it"""
    return service.deactivate_or_delete(service_id)


@router.get("/{service_id}/stats", response_model=ServiceStats)
def get_service_stats(
    service_id: int,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_service_stats(service_id)
