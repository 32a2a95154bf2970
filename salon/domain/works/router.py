"""Work router - Walk-in endpoints for manicurists and administrators"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import Actor, Capability, require_capability
from ...database import get_db
from ...models import Appointment
from .schemas import (
    AdminWorkCreate,
    WorkCreate,
    WorkCreated,
    WorkListResponse,
    WorkRecord,
    WorkSummary,
    WorkUpdate,
    WorkUpdated,
)
from .service import WorkService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/works", tags=["Works"])


def get_work_service(db: Session = Depends(get_db)) -> WorkService:
    """Dependency injection for WorkService"""
    return WorkService(db)


def to_record(w: Appointment) -> WorkRecord:
    return WorkRecord(
        work_id=w.id,
        work_date=w.start_time,
        client_name=w.client_name_walkin,
        manicurist_id=w.manicurist_id,
        manicurist_name=w.manicurist.full_name if w.manicurist else None,
        service_name=w.service.name if w.service else None,
        default_price=w.service.price if w.service else None,
        paid_price=w.commission.service_price if w.commission else None,
        commission_amount=w.commission.commission_amount if w.commission else None,
        is_paid=w.commission.is_paid if w.commission else None,
        payment_date=w.commission.payment_date if w.commission else None,
    )


def to_list_response(works: list[Appointment], summary: dict) -> WorkListResponse:
    return WorkListResponse(works=[to_record(w) for w in works], summary=WorkSummary(**summary))


@router.post("", response_model=WorkCreated, status_code=201)
async def create_work(
    data: WorkCreate,
    actor: Actor = Depends(require_capability(Capability.RECORD_OWN_WORK)),
    service: WorkService = Depends(get_work_service),
):
    """Record a walk-in performed by the authenticated manicurist"""
    work = service.record(
        manicurist_id=actor.user_id,
        service_id=data.service_id,
        work_date=data.work_date,
        client_name=data.client_name,
        service_price_custom=data.service_price_custom,
    )
    return WorkCreated(
        message="Work recorded successfully",
        work_id=work.id,
        commission_amount=work.commission.commission_amount,
    )


@router.post("/admin", response_model=WorkCreated, status_code=201)
async def create_work_admin(
    data: AdminWorkCreate,
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_WORKS)),
    service: WorkService = Depends(get_work_service),
):
    """Record a walk-in for any manicurist"""
    work = service.record(
        manicurist_id=data.manicurist_id,
        service_id=data.service_id,
        work_date=data.work_date,
        client_name=data.client_name,
        service_price_custom=data.service_price_custom,
    )
    return WorkCreated(
        message="Work recorded successfully",
        work_id=work.id,
        commission_amount=work.commission.commission_amount,
    )


@router.get("/my-works", response_model=WorkListResponse)
async def get_my_works(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    actor: Actor = Depends(require_capability(Capability.RECORD_OWN_WORK)),
    service: WorkService = Depends(get_work_service),
):
    works, summary = service.list_works(actor.user_id, start_date, end_date)
    return to_list_response(works, summary)


@router.get("/all", response_model=WorkListResponse)
async def get_all_works(
    manicurist_id: Optional[int] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_WORKS)),
    service: WorkService = Depends(get_work_service),
):
    works, summary = service.list_works(manicurist_id, start_date, end_date)
    return to_list_response(works, summary)


@router.put("/{work_id}", response_model=WorkUpdated)
async def update_work(
    work_id: int,
    data: WorkUpdate,
    actor: Actor = Depends(require_capability(Capability.RECORD_OWN_WORK, Capability.MANAGE_ALL_WORKS)),
    service: WorkService = Depends(get_work_service),
):
    """Correct the charged price; the commission is recomputed"""
    new_commission = service.update_price(work_id, actor, data.service_price_custom)
    return WorkUpdated(message="Work updated successfully", new_commission=new_commission)


@router.put("/{work_id}/paid")
async def mark_work_paid(
    work_id: int,
    actor: Actor = Depends(require_capability(Capability.MANAGE_ALL_WORKS)),
    service: WorkService = Depends(get_work_service),
):
    work = service.mark_paid(work_id)
    return {
        "message": "Commission marked as paid",
        "work_id": work.id,
        "payment_date": work.commission.payment_date,
    }


@router.delete("/{work_id}")
async def delete_work(
    work_id: int,
    actor: Actor = Depends(require_capability(Capability.RECORD_OWN_WORK, Capability.MANAGE_ALL_WORKS)),
    service: WorkService = Depends(get_work_service),
):
    service.delete(work_id, actor)
    return {"message": "Work deleted successfully"}
