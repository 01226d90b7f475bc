"""Table and time-slot suggestion endpoints"""

from typing import List

from fastapi import APIRouter, Depends

from tableplan.config import settings
from tableplan.schemas.suggestion import SuggestionRequest, TableSuggestion, TimeSlotSuggestion
from tableplan.store import ReservationStore, get_store

router = APIRouter()


@router.post("/tables", response_model=List[TableSuggestion])
async def suggest_tables(
    request: SuggestionRequest,
    store: ReservationStore = Depends(get_store),
):
    """Rank tables for a party at the requested time, available first"""
    return store.find_best_tables(
        request.party_size,
        request.start_time,
        request.duration_minutes or settings.default_duration_minutes,
        request.sector_preference,
    )


@router.post("/slots", response_model=List[TimeSlotSuggestion])
async def suggest_slots(
    request: SuggestionRequest,
    store: ReservationStore = Depends(get_store),
):
    """Nearby start times (up to an hour either side) with a free table"""
    return store.find_next_available_slots(
        request.party_size,
        request.start_time,
        request.duration_minutes or settings.default_duration_minutes,
        request.sector_preference,
    )
