"""Analytics schemas"""

from datetime import datetime

from pydantic import BaseModel


class TimeSlotCapacity(BaseModel):
    """Occupancy of one 15-minute slot"""
    hour: int
    minute: int
    total_capacity: int
    occupied_seats: int
    occupancy_rate: float
    reservation_count: int
    timestamp: datetime
    level: str


class SectorMetrics(BaseModel):
    """Daily figures for a sector"""
    sector_id: str
    sector_name: str
    total_tables: int
    total_capacity: int
    total_reservations: int
    occupied_seats: int  # peak
    occupancy_rate: float
    average_party_size: float
    revenue_estimate: float


class SectorComparison(BaseModel):
    """Difference between two sectors (first minus second)"""
    occupancy_diff: float
    revenue_diff: float
    reservations_diff: int
