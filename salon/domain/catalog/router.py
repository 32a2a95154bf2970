"""Catalog router - Public service list and admin maintenance"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Actor, Capability, require_capability
from ...database import get_db
from ...models import Service
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

router = APIRouter(prefix="/services", tags=["Services"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


def to_response(s: Service) -> ServiceResponse:
    return ServiceResponse(
        service_id=s.id,
        name=s.name,
        description=s.description,
        price=s.price,
        duration_min=s.duration_min,
        manicurist_commission_rate=s.manicurist_commission_rate,
        created_at=s.created_at,
    )


@router.get("", response_model=list[ServiceResponse])
async def get_services(service: CatalogService = Depends(get_catalog_service)):
    """List all services (public)"""
    return [to_response(s) for s in service.get_services()]


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    actor: Actor = Depends(require_capability(Capability.MANAGE_CATALOG)),
    service: CatalogService = Depends(get_catalog_service),
):
    return to_response(service.create_service(data))


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: int,
    data: ServiceUpdate,
    actor: Actor = Depends(require_capability(Capability.MANAGE_CATALOG)),
    service: CatalogService = Depends(get_catalog_service),
):
    return to_response(service.update_service(service_id, data))


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    actor: Actor = Depends(require_capability(Capability.MANAGE_CATALOG)),
    service: CatalogService = Depends(get_catalog_service),
):
    """Delete a service that no appointment references"""
    service.delete_service(service_id)
    return {"message": "Service deleted successfully"}
