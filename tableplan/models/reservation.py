"""Reservation model"""

import enum
from datetime import datetime, timedelta
from typing import Optional

from pydantic import AwareDatetime, BaseModel, Field, computed_field


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle status (no transition table is enforced)"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SEATED = "SEATED"
    FINISHED = "FINISHED"
    NO_SHOW = "NO_SHOW"
    CANCELLED = "CANCELLED"


class Priority(str, enum.Enum):
    """Booking priority, also the batch processing order"""
    STANDARD = "STANDARD"
    VIP = "VIP"
    LARGE_GROUP = "LARGE_GROUP"


class ReservationSource(str, enum.Enum):
    """Channel a reservation came in through"""
    PHONE = "phone"
    WEB = "web"
    WALKIN = "walkin"
    APP = "app"
    BATCH_IMPORT = "BATCH_IMPORT"


class Customer(BaseModel):
    """Guest contact details"""
    name: str
    phone: str
    email: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        frozen = True


class Reservation(BaseModel):
    """A party placed on one table for a half-open time interval"""
    id: str
    
    # Placement
    table_id: str
    start_time: AwareDatetime
    duration_minutes: int
    
    # Details
    customer: Customer
    party_size: int = Field(gt=0)
    status: ReservationStatus = ReservationStatus.CONFIRMED
    priority: Priority = Priority.STANDARD
    notes: Optional[str] = None
    source: Optional[ReservationSource] = None
    
    # Metadata
    created_at: AwareDatetime
    updated_at: AwareDatetime

    @computed_field
    @property
    def end_time(self) -> datetime:
        """End instant, always derived from start and duration"""
        return self.start_time + timedelta(minutes=self.duration_minutes)

    class Config:
        frozen = True
