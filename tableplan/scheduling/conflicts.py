"""Conflict detection for table placements"""

from typing import Iterable, Optional

from tableplan.models.reservation import Reservation
from tableplan.models.table import Capacity
from tableplan.scheduling.intervals import Instant, TimeInterval, overlaps, parse_instant
from tableplan.schemas.reservation import ConflictCheck


def check_conflict(
    reservations: Iterable[Reservation],
    table_id: str,
    start_time: Instant,
    end_time: Instant,
    exclude_reservation_id: Optional[str] = None,
) -> ConflictCheck:
    """
    Check a proposed placement against existing reservations.

    Only reservations on ``table_id`` are considered, minus
    ``exclude_reservation_id`` (the reservation being moved or resized).
    Callers narrow ``reservations`` first with
    ``reservations_overlapping_day``; the result is correct for any superset.
    """
    candidate = TimeInterval(parse_instant(start_time), parse_instant(end_time))

    conflicting_ids = [
        res.id
        for res in reservations
        if res.table_id == table_id
        and res.id != exclude_reservation_id
        and overlaps(candidate, TimeInterval(res.start_time, res.end_time))
    ]

    return ConflictCheck(
        has_conflict=bool(conflicting_ids),
        conflicting_reservation_ids=conflicting_ids,
        reason="overlap" if conflicting_ids else None,
    )


def is_valid_capacity(party_size: int, capacity: Capacity) -> bool:
    """Whether a party fits a table's min/max envelope"""
    return capacity.min <= party_size <= capacity.max
