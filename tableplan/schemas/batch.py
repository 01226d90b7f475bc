"""Batch import schemas"""

from datetime import date as date_type, time
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from tableplan.models.reservation import Priority, Reservation
from tableplan.models.table import Table


class BatchReservationRequest(BaseModel):
    """One pre-validated row of an import, without a table"""
    customer_name: str
    customer_phone: str
    customer_email: str = ""
    party_size: int = Field(gt=0)
    date: date_type
    start_time: time
    duration_minutes: int
    special_requests: Optional[str] = None
    priority: Priority = Priority.STANDARD
    preferred_sector: Optional[str] = None


class TableAssignment(BaseModel):
    """Outcome for a single batch row"""
    request: BatchReservationRequest
    row: int
    assigned_table: Optional[Table] = None
    reason: Optional[str] = None
    alternatives: List[Table] = []

    @property
    def is_assigned(self) -> bool:
        return self.assigned_table is not None


class BatchAssignmentResult(BaseModel):
    """Per-row outcomes plus aggregate counts"""
    assignments: List[TableAssignment]
    success_count: int
    failure_count: int


class BatchAssignRequest(BaseModel):
    requests: List[BatchReservationRequest]
    sector_map: Optional[Dict[str, str]] = None


class BatchImportResponse(BaseModel):
    """Assignment result and the reservations committed from it"""
    result: BatchAssignmentResult
    created: List[Reservation]
