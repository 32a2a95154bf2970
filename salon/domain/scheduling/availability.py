"""Manicurist availability - half-open interval overlap against stored appointments"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import ValidationError
from ...models import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """[start_a, end_a) and [start_b, end_b) share an instant; touching endpoints do not"""
    return start_a < end_b and start_b < end_a


def compute_end_time(start: datetime, duration_min: int) -> datetime:
    # bool is an int subclass; True minutes is not a duration
    if isinstance(duration_min, bool) or not isinstance(duration_min, int) or duration_min <= 0:
        raise ValidationError("Service duration must be a positive number of minutes")
    return start + timedelta(minutes=duration_min)


def has_conflict(
    db: Session,
    manicurist_id: int,
    start: datetime,
    end: datetime,
    excluding_appointment_id: Optional[int] = None,
) -> bool:
    """
    True when any non-cancelled appointment of the manicurist overlaps [start, end).

    Completed appointments still block the slot. Pass excluding_appointment_id
    when moving an existing appointment so it does not collide with itself.
    """
    query = db.query(Appointment.id).filter(
        Appointment.manicurist_id == manicurist_id,
        Appointment.status != AppointmentStatus.CANCELLED.value,
        Appointment.start_time < end,
        Appointment.end_time > start,
    )
    if excluding_appointment_id is not None:
        query = query.filter(Appointment.id != excluding_appointment_id)

    conflict = db.query(query.exists()).scalar()
    if conflict:
        logger.debug(f"Manicurist {manicurist_id} busy between {start.isoformat()} and {end.isoformat()}")
    return bool(conflict)
