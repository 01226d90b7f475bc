"""Occupancy analytics endpoints"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from tableplan.scheduling.analytics import TOP_SECTOR_KEYS, compare_sectors, get_top_sector
from tableplan.schemas.analytics import SectorComparison, SectorMetrics, TimeSlotCapacity
from tableplan.store import ReservationStore, get_store

router = APIRouter()


@router.get("/capacity", response_model=List[TimeSlotCapacity])
async def capacity_by_slot(
    date: date,
    store: ReservationStore = Depends(get_store),
):
    """Seats in use per 15-minute slot"""
    return store.capacity_by_time_slot(date)


@router.get("/sectors", response_model=List[SectorMetrics])
async def sector_metrics(
    date: date,
    store: ReservationStore = Depends(get_store),
):
    """Per-sector occupancy, party size and revenue estimate"""
    return store.sector_metrics(date)


@router.get("/sectors/compare", response_model=SectorComparison)
async def compare(
    date: date,
    first: str,
    second: str,
    store: ReservationStore = Depends(get_store),
):
    """Compare two sectors (first minus second)"""
    metrics = {m.sector_id: m for m in store.sector_metrics(date)}

    if first not in metrics or second not in metrics:
        raise HTTPException(status_code=404, detail="Sector not found")

    return compare_sectors(metrics[first], metrics[second])


@router.get("/sectors/top", response_model=SectorMetrics)
async def top_sector(
    date: date,
    by: str = Query("occupancy"),
    store: ReservationStore = Depends(get_store),
):
    """Best sector by occupancy, revenue or reservations"""
    if by not in TOP_SECTOR_KEYS:
        raise HTTPException(status_code=422, detail=f"by must be one of {sorted(TOP_SECTOR_KEYS)}")

    top = get_top_sector(store.sector_metrics(date), by)
    if top is None:
        raise HTTPException(status_code=404, detail="No sectors configured")
    return top
