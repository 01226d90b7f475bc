"""Reservation management API endpoints"""

from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from tableplan.models.reservation import Reservation, ReservationStatus
from tableplan.scheduling.intervals import (
    MAX_RESERVATION_DURATION,
    MIN_RESERVATION_DURATION,
    calculate_end_time,
    is_valid_duration,
)
from tableplan.schemas.reservation import (
    ConflictCheck,
    ConflictCheckRequest,
    MoveRequest,
    ReservationCreate,
    ReservationDetailsUpdate,
    ReservationListResponse,
    ReservationUpdate,
    ResizeRequest,
    StatusChangeRequest,
)
from tableplan.store import ReservationStore, get_store

router = APIRouter()
logger = structlog.get_logger()

INVALID_DURATION_DETAIL = (
    f"Duration must be between {MIN_RESERVATION_DURATION} and {MAX_RESERVATION_DURATION} minutes"
)


def _get_or_404(store: ReservationStore, reservation_id: str) -> Reservation:
    reservation = store.get_reservation(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    date: date,
    sector_ids: Optional[List[str]] = Query(None),
    statuses: Optional[List[ReservationStatus]] = Query(None),
    q: Optional[str] = None,
    store: ReservationStore = Depends(get_store),
):
    """List reservations for a service day with optional filters"""
    items = store.filtered_reservations(date, sector_ids, statuses, q)
    items.sort(key=lambda res: res.start_time)
    return ReservationListResponse(date=date, items=items, total=len(items))


@router.post("", response_model=Reservation, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    store: ReservationStore = Depends(get_store),
):
    """Create a new reservation"""
    if not is_valid_duration(reservation_data.duration_minutes):
        logger.info("Create rejected: invalid duration", duration_minutes=reservation_data.duration_minutes)
        raise HTTPException(status_code=422, detail=INVALID_DURATION_DETAIL)

    if store.get_table(reservation_data.table_id) is None:
        raise HTTPException(status_code=404, detail="Table not found")

    reservation = store.add_reservation(reservation_data)

    if reservation is None:
        conflict = store.check_conflict(
            reservation_data.table_id,
            reservation_data.start_time,
            calculate_end_time(reservation_data.start_time, reservation_data.duration_minutes),
        )
        logger.info(
            "Create rejected: conflict",
            table_id=reservation_data.table_id,
            conflicting_ids=conflict.conflicting_reservation_ids,
        )
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Reservation overlaps an existing booking",
                "conflicting_reservation_ids": conflict.conflicting_reservation_ids,
            },
        )

    return reservation


@router.post("/conflicts/check", response_model=ConflictCheck)
async def check_conflict(
    request: ConflictCheckRequest,
    store: ReservationStore = Depends(get_store),
):
    """Check a proposed placement without creating anything"""
    return store.check_conflict(
        request.table_id,
        request.start_time,
        request.end_time,
        request.exclude_reservation_id,
    )


@router.get("/stats/status-counts", response_model=Dict[ReservationStatus, int])
async def status_counts(
    date: date,
    store: ReservationStore = Depends(get_store),
):
    """Reservation count per status for a service day"""
    return store.status_counts(date)


@router.get("/{reservation_id}", response_model=Reservation)
async def get_reservation(
    reservation_id: str,
    store: ReservationStore = Depends(get_store),
):
    """Get reservation details"""
    return _get_or_404(store, reservation_id)


@router.patch("/{reservation_id}", response_model=Reservation)
async def update_reservation(
    reservation_id: str,
    reservation_data: ReservationDetailsUpdate,
    store: ReservationStore = Depends(get_store),
):
    """Update customer, party size, status, priority or notes"""
    _get_or_404(store, reservation_id)

    patch = ReservationUpdate(
        id=reservation_id,
        **reservation_data.model_dump(exclude_unset=True),
    )
    return store.update_reservation(patch)


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: str,
    store: ReservationStore = Depends(get_store),
):
    """Remove a reservation"""
    if not store.delete_reservation(reservation_id):
        raise HTTPException(status_code=404, detail="Reservation not found")


@router.post("/{reservation_id}/status", response_model=Reservation)
async def change_status(
    reservation_id: str,
    request: StatusChangeRequest,
    store: ReservationStore = Depends(get_store),
):
    """Set a reservation's status"""
    reservation = store.change_reservation_status(reservation_id, request.status)
    if reservation is None:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return reservation


@router.post("/{reservation_id}/move", response_model=Reservation)
async def move_reservation(
    reservation_id: str,
    request: MoveRequest,
    store: ReservationStore = Depends(get_store),
):
    """Move a reservation to another table and/or start time"""
    _get_or_404(store, reservation_id)

    if store.get_table(request.table_id) is None:
        raise HTTPException(status_code=404, detail="Table not found")

    if not store.move_reservation(reservation_id, request.table_id, request.start_time):
        raise HTTPException(status_code=409, detail="Reservation cannot be moved there")

    return store.get_reservation(reservation_id)


@router.post("/{reservation_id}/resize", response_model=Reservation)
async def resize_reservation(
    reservation_id: str,
    request: ResizeRequest,
    store: ReservationStore = Depends(get_store),
):
    """Change a reservation's duration, keeping its start"""
    _get_or_404(store, reservation_id)

    if not is_valid_duration(request.duration_minutes):
        logger.info("Resize rejected: invalid duration", reservation_id=reservation_id)
        raise HTTPException(status_code=422, detail=INVALID_DURATION_DETAIL)

    if not store.resize_reservation(reservation_id, request.duration_minutes):
        raise HTTPException(status_code=409, detail="Resize overlaps another reservation")

    return store.get_reservation(reservation_id)
