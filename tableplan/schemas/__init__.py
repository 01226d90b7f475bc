"""Pydantic schemas for request/response validation"""

from tableplan.schemas.reservation import (
    ConflictCheck,
    ConflictCheckRequest,
    CustomerUpdate,
    MoveRequest,
    MutationResult,
    ReservationCreate,
    ReservationDetailsUpdate,
    ReservationListResponse,
    ReservationUpdate,
    ResizeRequest,
    StatusChangeRequest,
)
from tableplan.schemas.suggestion import (
    SuggestionRequest,
    TableSuggestion,
    TimeSlotSuggestion,
)
from tableplan.schemas.batch import (
    BatchAssignmentResult,
    BatchAssignRequest,
    BatchImportResponse,
    BatchReservationRequest,
    TableAssignment,
)
from tableplan.schemas.analytics import (
    SectorComparison,
    SectorMetrics,
    TimeSlotCapacity,
)

__all__ = [
    "ConflictCheck",
    "ConflictCheckRequest",
    "CustomerUpdate",
    "MoveRequest",
    "MutationResult",
    "ReservationCreate",
    "ReservationDetailsUpdate",
    "ReservationListResponse",
    "ReservationUpdate",
    "ResizeRequest",
    "StatusChangeRequest",
    "SuggestionRequest",
    "TableSuggestion",
    "TimeSlotSuggestion",
    "BatchAssignmentResult",
    "BatchAssignRequest",
    "BatchImportResponse",
    "BatchReservationRequest",
    "TableAssignment",
    "SectorComparison",
    "SectorMetrics",
    "TimeSlotCapacity",
]
