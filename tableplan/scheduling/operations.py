"""
Reservation mutation operations.

Every operation takes the current collection and returns a new one; the
input list and its reservations are never modified. Guarded operations
(create, move, resize) run the conflict detector on the reservations around
the candidate's service date before committing. Expected business
rejections are logged and reported through the return value, never raised.
"""

import uuid
from typing import List, Optional, Sequence

import structlog

from tableplan.models.reservation import Customer, Priority, Reservation, ReservationStatus
from tableplan.scheduling.conflicts import check_conflict
from tableplan.scheduling.intervals import (
    Instant,
    TimezoneLike,
    calculate_end_time,
    is_valid_duration,
    parse_instant,
    reservations_overlapping_day,
    utc_now,
)
from tableplan.schemas.reservation import (
    MutationResult,
    ReservationCreate,
    ReservationUpdate,
)

logger = structlog.get_logger()

REQUIRED_CUSTOMER_FIELDS = ("name", "phone")


def generate_id() -> str:
    """Fresh reservation id"""
    return str(uuid.uuid4())


def find_reservation(reservations: Sequence[Reservation], reservation_id: str) -> Optional[Reservation]:
    return next((res for res in reservations if res.id == reservation_id), None)


def add_reservation(
    reservations: Sequence[Reservation],
    data: ReservationCreate,
    tz: TimezoneLike = None,
) -> Optional[List[Reservation]]:
    """
    Create a reservation.

    Returns the new collection, or None when the duration is out of range or
    the placement overlaps an existing reservation on the table.
    """
    if not is_valid_duration(data.duration_minutes):
        logger.warning(
            "Cannot add reservation: invalid duration",
            table_id=data.table_id,
            duration_minutes=data.duration_minutes,
        )
        return None

    end_time = calculate_end_time(data.start_time, data.duration_minutes)
    conflict = check_conflict(
        reservations_overlapping_day(reservations, data.start_time, tz),
        data.table_id,
        data.start_time,
        end_time,
    )

    if conflict.has_conflict:
        logger.warning(
            "Cannot add reservation: conflict detected",
            table_id=data.table_id,
            conflicting_ids=conflict.conflicting_reservation_ids,
        )
        return None

    now = utc_now()
    reservation = Reservation(
        id=generate_id(),
        table_id=data.table_id,
        customer=data.customer,
        party_size=data.party_size,
        start_time=data.start_time,
        duration_minutes=data.duration_minutes,
        status=data.status or ReservationStatus.CONFIRMED,
        priority=data.priority or Priority.STANDARD,
        notes=data.notes,
        source=data.source,
        created_at=now,
        updated_at=now,
    )

    logger.info("Reservation added", reservation_id=reservation.id, table_id=reservation.table_id)
    return [*reservations, reservation]


def _apply_update(reservation: Reservation, data: ReservationUpdate) -> Reservation:
    changes = data.model_dump(exclude_unset=True, exclude={"id", "customer"})

    # Customer is merged field by field; nulling name or phone is ignored
    if data.customer is not None:
        customer_changes = {
            key: value
            for key, value in data.customer.model_dump(exclude_unset=True).items()
            if value is not None or key not in REQUIRED_CUSTOMER_FIELDS
        }
        changes["customer"] = Customer.model_validate({**reservation.customer.model_dump(), **customer_changes})

    # Nulling a required field is ignored
    for field in ("table_id", "party_size", "start_time", "duration_minutes", "status", "priority"):
        if field in changes and changes[field] is None:
            del changes[field]

    changes["updated_at"] = utc_now()
    return reservation.model_copy(update=changes)


def update_reservation(reservations: Sequence[Reservation], data: ReservationUpdate) -> List[Reservation]:
    """
    Merge a patch into one reservation.

    This is the unguarded building block: it performs no conflict check.
    End time follows from the effective start and duration because it is
    derived on the model.
    """
    return [_apply_update(res, data) if res.id == data.id else res for res in reservations]


def delete_reservation(reservations: Sequence[Reservation], reservation_id: str) -> List[Reservation]:
    return [res for res in reservations if res.id != reservation_id]


def change_reservation_status(
    reservations: Sequence[Reservation],
    reservation_id: str,
    status: ReservationStatus,
) -> List[Reservation]:
    """Set a status unconditionally; any status may follow any other"""
    return [
        res.model_copy(update={"status": status, "updated_at": utc_now()}) if res.id == reservation_id else res
        for res in reservations
    ]


def move_reservation(
    reservations: Sequence[Reservation],
    reservation_id: str,
    new_table_id: str,
    new_start_time: Instant,
    tz: TimezoneLike = None,
) -> MutationResult:
    """Move a reservation to another table and/or start time, keeping its duration"""
    reservation = find_reservation(reservations, reservation_id)

    if reservation is None:
        logger.warning("Cannot move reservation: not found", reservation_id=reservation_id)
        return MutationResult(success=False, reservations=list(reservations))

    new_start_time = parse_instant(new_start_time)
    new_end_time = calculate_end_time(new_start_time, reservation.duration_minutes)

    conflict = check_conflict(
        reservations_overlapping_day(reservations, new_start_time, tz),
        new_table_id,
        new_start_time,
        new_end_time,
        reservation_id,
    )

    if conflict.has_conflict:
        logger.warning(
            "Cannot move reservation: conflict detected",
            reservation_id=reservation_id,
            table_id=new_table_id,
            conflicting_ids=conflict.conflicting_reservation_ids,
        )
        return MutationResult(success=False, reservations=list(reservations))

    updated = update_reservation(
        reservations,
        ReservationUpdate(id=reservation_id, table_id=new_table_id, start_time=new_start_time),
    )
    return MutationResult(success=True, reservations=updated)


def resize_reservation(
    reservations: Sequence[Reservation],
    reservation_id: str,
    new_duration_minutes: int,
    tz: TimezoneLike = None,
) -> MutationResult:
    """Change a reservation's duration; the start stays fixed and only the end moves"""
    reservation = find_reservation(reservations, reservation_id)

    if reservation is None:
        logger.warning("Cannot resize reservation: not found", reservation_id=reservation_id)
        return MutationResult(success=False, reservations=list(reservations))

    if not is_valid_duration(new_duration_minutes):
        logger.warning(
            "Cannot resize reservation: invalid duration",
            reservation_id=reservation_id,
            duration_minutes=new_duration_minutes,
        )
        return MutationResult(success=False, reservations=list(reservations))

    new_end_time = calculate_end_time(reservation.start_time, new_duration_minutes)

    conflict = check_conflict(
        reservations_overlapping_day(reservations, reservation.start_time, tz),
        reservation.table_id,
        reservation.start_time,
        new_end_time,
        reservation_id,
    )

    if conflict.has_conflict:
        logger.warning(
            "Cannot resize reservation: conflict detected",
            reservation_id=reservation_id,
            conflicting_ids=conflict.conflicting_reservation_ids,
        )
        return MutationResult(success=False, reservations=list(reservations))

    updated = update_reservation(
        reservations,
        ReservationUpdate(id=reservation_id, duration_minutes=new_duration_minutes),
    )
    return MutationResult(success=True, reservations=updated)
