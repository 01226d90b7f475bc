"""Floor plan reference data endpoints"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from tableplan.models.restaurant import Restaurant
from tableplan.models.table import Sector, Table
from tableplan.store import ReservationStore, get_store

router = APIRouter()


@router.get("/restaurant", response_model=Restaurant)
async def get_restaurant(store: ReservationStore = Depends(get_store)):
    """Restaurant details and service hours"""
    return store.restaurant


@router.get("/sectors", response_model=List[Sector])
async def list_sectors(store: ReservationStore = Depends(get_store)):
    """List sectors in display order"""
    return sorted(store.sectors, key=lambda sector: sector.sort_order)


@router.get("/tables", response_model=List[Table])
async def list_tables(
    sector_id: Optional[str] = None,
    store: ReservationStore = Depends(get_store),
):
    """List tables in display order, optionally for one sector"""
    tables = store.tables
    if sector_id:
        tables = [table for table in tables if table.sector_id == sector_id]
    return sorted(tables, key=lambda table: table.sort_order)
