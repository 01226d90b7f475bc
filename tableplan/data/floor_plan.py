"""Default restaurant floor plan used to bootstrap the store"""

from tableplan.config import settings
from tableplan.models.restaurant import Restaurant, ServiceHours
from tableplan.models.table import Capacity, Sector, Table


def default_restaurant() -> Restaurant:
    return Restaurant(
        id="REST_001",
        name=settings.restaurant_name,
        timezone=settings.restaurant_timezone,
        service_hours=[
            ServiceHours(start="12:00", end="16:00"),
            ServiceHours(start="20:00", end="00:00"),
        ],
    )


SECTORS = [
    Sector(id="SECTOR_MAIN", name="Main Hall", color="#3b82f6", sort_order=0),
    Sector(id="SECTOR_TERRACE", name="Terrace", color="#10b981", sort_order=1),
    Sector(id="SECTOR_BAR", name="Bar Area", color="#f59e0b", sort_order=2),
]

TABLES = [
    # Main hall
    Table(id="TABLE_M1", sector_id="SECTOR_MAIN", name="M1", capacity=Capacity(min=2, max=4), sort_order=0),
    Table(id="TABLE_M2", sector_id="SECTOR_MAIN", name="M2", capacity=Capacity(min=2, max=4), sort_order=1),
    Table(id="TABLE_M3", sector_id="SECTOR_MAIN", name="M3", capacity=Capacity(min=4, max=6), sort_order=2),
    Table(id="TABLE_M4", sector_id="SECTOR_MAIN", name="M4", capacity=Capacity(min=6, max=8), sort_order=3),
    # Terrace
    Table(id="TABLE_T1", sector_id="SECTOR_TERRACE", name="T1", capacity=Capacity(min=2, max=2), sort_order=4),
    Table(id="TABLE_T2", sector_id="SECTOR_TERRACE", name="T2", capacity=Capacity(min=2, max=4), sort_order=5),
    Table(id="TABLE_T3", sector_id="SECTOR_TERRACE", name="T3", capacity=Capacity(min=4, max=6), sort_order=6),
    # Bar
    Table(id="TABLE_B1", sector_id="SECTOR_BAR", name="B1", capacity=Capacity(min=1, max=2), sort_order=7),
    Table(id="TABLE_B2", sector_id="SECTOR_BAR", name="B2", capacity=Capacity(min=1, max=2), sort_order=8),
]
