"""Catalog service - Business rules for the service list"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, ValidationError
from ...models import Service
from .repository import CatalogRepository
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def get_services(self) -> list[Service]:
        return self.repo.get_services(self.db)

    def get_service(self, service_id: int) -> Service:
        service = self.repo.get_service(self.db, service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create_service(self.db, **data.model_dump())
        logger.info(f"💅 Service {service.id} '{service.name}' created")
        return service

    def update_service(self, service_id: int, data: ServiceUpdate) -> Service:
        """Existing commissions keep the price and rate they were created with"""
        service = self.get_service(service_id)
        service = self.repo.update_service(self.db, service, **data.model_dump())
        logger.info(f"💅 Service {service_id} updated")
        return service

    def delete_service(self, service_id: int) -> None:
        service = self.get_service(service_id)
        if self.repo.count_appointments(self.db, service_id) > 0:
            raise ValidationError(
                "Cannot delete: there are appointments for this service", code="SERVICE_IN_USE"
            )
        self.repo.delete_service(self.db, service)
        logger.info(f"🗑️ Service {service_id} deleted")
