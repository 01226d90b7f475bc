"""Table suggestion schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import AwareDatetime, BaseModel, Field

from tableplan.models.table import Table


class TableSuggestion(BaseModel):
    """A table ranked for a party"""
    table: Table
    score: int
    reason: str
    is_available: bool


class TimeSlotSuggestion(BaseModel):
    """A nearby start time with at least one free table"""
    start_time: datetime
    offset_label: str
    suggestions: List[TableSuggestion]


class SuggestionRequest(BaseModel):
    """Party and time window to find tables for"""
    party_size: int = Field(gt=0)
    start_time: AwareDatetime
    duration_minutes: Optional[int] = None
    sector_preference: Optional[str] = None
