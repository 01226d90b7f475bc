"""Batch import endpoints"""

from fastapi import APIRouter, Depends
import structlog

from tableplan.schemas.batch import BatchAssignmentResult, BatchAssignRequest, BatchImportResponse
from tableplan.store import ReservationStore, get_store

router = APIRouter()
logger = structlog.get_logger()


@router.post("/assign", response_model=BatchAssignmentResult)
async def preview_assignments(
    request: BatchAssignRequest,
    store: ReservationStore = Depends(get_store),
):
    """Work out table assignments for an import without saving them"""
    logger.info("Batch assignment preview", request_count=len(request.requests))
    return store.assign_batch(request.requests, request.sector_map)


@router.post("/import", response_model=BatchImportResponse)
async def import_reservations(
    request: BatchAssignRequest,
    store: ReservationStore = Depends(get_store),
):
    """Assign tables and create reservations for every row that got one"""
    logger.info("Batch import request", request_count=len(request.requests))
    return store.import_batch(request.requests, request.sector_map)
