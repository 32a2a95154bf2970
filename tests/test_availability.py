from datetime import datetime

import pytest

from conftest import at
from salon.domain.scheduling import compute_end_time, has_conflict, intervals_overlap
from salon.errors import ValidationError
from salon.models import Appointment, AppointmentStatus


def book(db, manicurist_id, start, end, status=AppointmentStatus.SCHEDULED, service_id=1):
    appointment = Appointment(
        client_id=None,
        manicurist_id=manicurist_id,
        service_id=service_id,
        start_time=start,
        end_time=end,
        status=status.value,
    )
    db.add(appointment)
    db.commit()
    return appointment.id


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((at(10), at(11)), (at(10, 30), at(11, 30)), True),
        ((at(10), at(11)), (at(11), at(12)), False),
        ((at(11), at(12)), (at(10), at(11)), False),
        ((at(10), at(12)), (at(10, 15), at(10, 45)), True),
        ((at(10), at(11)), (at(10), at(11)), True),
    ],
)
def test_half_open_overlap(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


def test_end_time_adds_duration():
    assert compute_end_time(at(10), 60) == at(11)
    assert compute_end_time(at(23, 30), 45) == datetime(2024, 6, 2, 0, 15)


@pytest.mark.parametrize("duration", [0, -15, True, 1.5, None])
def test_invalid_duration_rejected(duration):
    with pytest.raises(ValidationError):
        compute_end_time(at(10), duration)


def test_scheduled_appointment_blocks_overlap(db, salon):
    book(db, salon.manicurist, at(10), at(11))
    assert has_conflict(db, salon.manicurist, at(10, 30), at(11, 30))


def test_adjacent_slot_is_free(db, salon):
    book(db, salon.manicurist, at(10), at(11))
    assert not has_conflict(db, salon.manicurist, at(11), at(12))
    assert not has_conflict(db, salon.manicurist, at(9), at(10))


def test_cancelled_appointment_does_not_block(db, salon):
    book(db, salon.manicurist, at(10), at(11), status=AppointmentStatus.CANCELLED)
    assert not has_conflict(db, salon.manicurist, at(10), at(11))


def test_completed_appointment_still_blocks(db, salon):
    book(db, salon.manicurist, at(10), at(11), status=AppointmentStatus.COMPLETED)
    assert has_conflict(db, salon.manicurist, at(10, 59), at(11, 59))


def test_other_manicurist_is_independent(db, salon):
    book(db, salon.manicurist, at(10), at(11))
    assert not has_conflict(db, salon.other_manicurist, at(10), at(11))


def test_other_day_is_free(db, salon):
    book(db, salon.manicurist, at(10), at(11))
    assert not has_conflict(db, salon.manicurist, at(10, day=2), at(11, day=2))


def test_excluded_appointment_ignores_itself(db, salon):
    own = book(db, salon.manicurist, at(10), at(11))
    assert has_conflict(db, salon.manicurist, at(10, 30), at(11, 30))
    assert not has_conflict(db, salon.manicurist, at(10, 30), at(11, 30), excluding_appointment_id=own)


def test_exclusion_does_not_hide_others(db, salon):
    own = book(db, salon.manicurist, at(10), at(11))
    book(db, salon.manicurist, at(11), at(12))
    assert has_conflict(db, salon.manicurist, at(10, 30), at(11, 30), excluding_appointment_id=own)
