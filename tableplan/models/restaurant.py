"""Restaurant model"""

from typing import List

from pydantic import BaseModel


class ServiceHours(BaseModel):
    """One service window, as HH:MM wall-clock strings"""
    start: str
    end: str


class Restaurant(BaseModel):
    """Restaurant the timeline belongs to"""
    id: str
    name: str
    timezone: str
    service_hours: List[ServiceHours] = []
