"""Domain models"""

from tableplan.models.reservation import (
    Customer,
    Priority,
    Reservation,
    ReservationSource,
    ReservationStatus,
)
from tableplan.models.table import Capacity, Sector, Table
from tableplan.models.restaurant import Restaurant, ServiceHours

__all__ = [
    "Customer",
    "Priority",
    "Reservation",
    "ReservationSource",
    "ReservationStatus",
    "Capacity",
    "Sector",
    "Table",
    "Restaurant",
    "ServiceHours",
]
