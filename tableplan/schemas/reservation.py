"""Reservation schemas"""

from datetime import date as date_type
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, Field

from tableplan.models.reservation import (
    Customer,
    Priority,
    Reservation,
    ReservationSource,
    ReservationStatus,
)


class CustomerUpdate(BaseModel):
    """Partial customer details, merged field by field"""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None


class ReservationCreate(BaseModel):
    """Create reservation request"""
    table_id: str
    customer: Customer
    party_size: int = Field(gt=0)
    start_time: AwareDatetime
    duration_minutes: int
    status: Optional[ReservationStatus] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None
    source: Optional[ReservationSource] = None


class ReservationUpdate(BaseModel):
    """Update reservation request; unset fields are left unchanged"""
    id: str
    table_id: Optional[str] = None
    customer: Optional[CustomerUpdate] = None
    party_size: Optional[int] = Field(default=None, gt=0)
    start_time: Optional[AwareDatetime] = None
    duration_minutes: Optional[int] = None
    status: Optional[ReservationStatus] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None


class ReservationDetailsUpdate(BaseModel):
    """Descriptive fields editable over HTTP; placement goes through move/resize"""
    customer: Optional[CustomerUpdate] = None
    party_size: Optional[int] = Field(default=None, gt=0)
    status: Optional[ReservationStatus] = None
    priority: Optional[Priority] = None
    notes: Optional[str] = None


class StatusChangeRequest(BaseModel):
    status: ReservationStatus


class MoveRequest(BaseModel):
    table_id: str
    start_time: AwareDatetime


class ResizeRequest(BaseModel):
    duration_minutes: int


class ConflictCheckRequest(BaseModel):
    """Ad-hoc conflict check for a proposed placement"""
    table_id: str
    start_time: AwareDatetime
    end_time: AwareDatetime
    exclude_reservation_id: Optional[str] = None


class ConflictCheck(BaseModel):
    """Result of checking a placement against existing reservations"""
    has_conflict: bool
    conflicting_reservation_ids: List[str] = []
    reason: Optional[str] = None  # "overlap" when has_conflict


class MutationResult(BaseModel):
    """Outcome of a guarded move/resize"""
    success: bool
    reservations: List[Reservation]


class ReservationListResponse(BaseModel):
    """Reservations visible on one timeline day"""
    date: date_type
    items: List[Reservation]
    total: int
