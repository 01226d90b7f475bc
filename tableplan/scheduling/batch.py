"""
Batch table assignment for imported reservations.

Requests arrive without a table. They are placed greedily: higher priority
and larger parties pick first, and each placement is remembered so later
rows in the same run cannot double-book a table. A row that cannot be
placed gets a reason; the rest of the batch carries on.
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import uuid

import structlog

from tableplan.models.reservation import (
    Customer,
    Priority,
    Reservation,
    ReservationSource,
    ReservationStatus,
)
from tableplan.models.table import Sector, Table
from tableplan.scheduling.intervals import (
    TimeInterval,
    TimezoneLike,
    local_instant,
    overlaps,
    reservations_on_date,
    reservations_overlapping_day,
    service_timezone,
    utc_now,
)
from tableplan.scheduling.suggestions import score_table
from tableplan.schemas.batch import (
    BatchAssignmentResult,
    BatchReservationRequest,
    TableAssignment,
)

logger = structlog.get_logger()

PRIORITY_ORDER = {
    Priority.VIP: 0,
    Priority.LARGE_GROUP: 1,
    Priority.STANDARD: 2,
}
MAX_ALTERNATIVES = 3

REASON_NO_CAPACITY = "No table has capacity for {party_size} guests"
REASON_FULLY_BOOKED = "All suitable tables are fully booked on this date"
REASON_TIME_CONFLICT = "Time conflict: every suitable table is occupied at this time"


def build_sector_map(sectors: Iterable[Sector]) -> Dict[str, str]:
    """Map sector names (as written and upper-cased) and ids to sector ids"""
    sector_map: Dict[str, str] = {}
    for sector in sectors:
        sector_map[sector.name] = sector.id
        sector_map[sector.name.upper()] = sector.id
        sector_map[sector.id] = sector.id
    return sector_map


def request_interval(request: BatchReservationRequest, tz: TimezoneLike = None) -> TimeInterval:
    """Absolute interval of a request given as local date and wall-clock time"""
    return TimeInterval.from_duration(local_instant(request.date, request.start_time, tz), request.duration_minutes)


def _resolve_sector(request: BatchReservationRequest, sector_map: Mapping[str, str]) -> Optional[str]:
    if not request.preferred_sector:
        return None
    return sector_map.get(request.preferred_sector) or sector_map.get(request.preferred_sector.upper())


def _is_table_available(
    table: Table,
    interval: TimeInterval,
    existing: Sequence[Reservation],
    pending: Mapping[str, List[TimeInterval]],
) -> bool:
    for res in existing:
        if res.table_id == table.id and overlaps(interval, TimeInterval(res.start_time, res.end_time)):
            return False
    return not any(overlaps(interval, taken) for taken in pending.get(table.id, []))


def _find_best_table(
    request: BatchReservationRequest,
    interval: TimeInterval,
    tables: Sequence[Table],
    existing: Sequence[Reservation],
    pending: Mapping[str, List[TimeInterval]],
    sector_map: Mapping[str, str],
) -> Tuple[Optional[Table], List[Table]]:
    preferred_sector_id = _resolve_sector(request, sector_map)

    scored = []
    for table in tables:
        if not _is_table_available(table, interval, existing, pending):
            continue
        score = score_table(table, request.party_size, preferred_sector_id)
        if score > 0:
            scored.append((score, table))

    if not scored:
        return None, []

    scored.sort(key=lambda item: -item[0])
    ranked = [table for _, table in scored]
    return ranked[0], ranked[1:1 + MAX_ALTERNATIVES]


def _failure_reason(
    request: BatchReservationRequest,
    tables: Sequence[Table],
    existing_on_day: Sequence[Reservation],
) -> str:
    suitable = [table for table in tables if table.capacity.max >= request.party_size]
    if not suitable:
        return REASON_NO_CAPACITY.format(party_size=request.party_size)

    booked_tables = {res.table_id for res in existing_on_day}
    if all(table.id in booked_tables for table in suitable):
        return REASON_FULLY_BOOKED

    return REASON_TIME_CONFLICT


def assign_tables_in_batch(
    requests: Sequence[BatchReservationRequest],
    tables: Sequence[Table],
    existing_reservations: Sequence[Reservation],
    sector_map: Mapping[str, str],
    tz: TimezoneLike = None,
) -> BatchAssignmentResult:
    """
    Assign the best free table to every request.

    Requests are processed VIP, then LARGE_GROUP, then STANDARD, larger
    parties first within a priority. A table is free for a request when it
    overlaps neither an existing reservation on that date nor an
    assignment made earlier in this run. Assignments are returned in
    processing order; ``row`` keeps each request's input position.
    """
    zone = service_timezone(tz)
    ordered = sorted(
        enumerate(requests),
        key=lambda item: (PRIORITY_ORDER[item[1].priority], -item[1].party_size),
    )

    pending: Dict[str, List[TimeInterval]] = defaultdict(list)
    assignments: List[TableAssignment] = []
    success_count = 0
    failure_count = 0

    for row, request in ordered:
        interval = request_interval(request, zone)
        nearby = reservations_overlapping_day(existing_reservations, request.date, zone)

        best_table, alternatives = _find_best_table(
            request, interval, tables, nearby, pending, sector_map
        )

        if best_table is not None:
            pending[best_table.id].append(interval)
            assignments.append(
                TableAssignment(
                    request=request,
                    row=row,
                    assigned_table=best_table,
                    alternatives=alternatives,
                )
            )
            success_count += 1
        else:
            existing_on_day = reservations_on_date(existing_reservations, request.date, zone)
            reason = _failure_reason(request, tables, existing_on_day)
            assignments.append(TableAssignment(request=request, row=row, reason=reason))
            failure_count += 1
            logger.info(
                "Batch row not assigned",
                row=row,
                customer=request.customer_name,
                party_size=request.party_size,
                reason=reason,
            )

    logger.info(
        "Batch assignment complete",
        total=len(requests),
        success_count=success_count,
        failure_count=failure_count,
    )

    return BatchAssignmentResult(
        assignments=assignments,
        success_count=success_count,
        failure_count=failure_count,
    )


def create_reservation_from_request(
    request: BatchReservationRequest,
    table_id: str,
    now: Optional[datetime] = None,
    tz: TimezoneLike = None,
) -> Reservation:
    """Materialize an assigned batch row as a confirmed reservation"""
    now = now or utc_now()
    return Reservation(
        id=str(uuid.uuid4()),
        table_id=table_id,
        customer=Customer(
            name=request.customer_name,
            phone=request.customer_phone,
            email=request.customer_email or None,
        ),
        party_size=request.party_size,
        start_time=local_instant(request.date, request.start_time, tz),
        duration_minutes=request.duration_minutes,
        status=ReservationStatus.CONFIRMED,
        priority=request.priority,
        notes=request.special_requests,
        source=ReservationSource.BATCH_IMPORT,
        created_at=now,
        updated_at=now,
    )


def create_reservations_from_assignments(
    assignments: Iterable[TableAssignment],
    tz: TimezoneLike = None,
) -> List[Reservation]:
    """Build reservations for the assigned rows only; failed rows are dropped"""
    now = utc_now()
    return [
        create_reservation_from_request(assignment.request, assignment.assigned_table.id, now, tz)
        for assignment in assignments
        if assignment.assigned_table is not None
    ]
