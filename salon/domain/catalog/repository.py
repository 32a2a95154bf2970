"""Catalog repository - Database operations for salon services"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Service


class CatalogRepository:
    """Repository for service catalog operations"""

    @staticmethod
    def get_services(db: Session) -> list[Service]:
        return db.query(Service).order_by(Service.name).all()

    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if hasattr(service, key):
                setattr(service, key, value)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def count_appointments(db: Session, service_id: int) -> int:
        return db.query(Appointment).filter(Appointment.service_id == service_id).count()

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()
