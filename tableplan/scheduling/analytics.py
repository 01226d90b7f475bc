"""Read-only occupancy analytics over one service day"""

from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence

from tableplan.config import settings
from tableplan.models.reservation import Reservation
from tableplan.models.table import Sector, Table
from tableplan.scheduling.intervals import TimezoneLike, slot_start
from tableplan.schemas.analytics import SectorComparison, SectorMetrics, TimeSlotCapacity

SLOT_MINUTES = 15
FULL_THRESHOLD = 90
HIGH_THRESHOLD = 70


def occupancy_level(occupancy_rate: float) -> str:
    if occupancy_rate >= FULL_THRESHOLD:
        return "full"
    if occupancy_rate >= HIGH_THRESHOLD:
        return "high"
    return "available"


def _active_in_slot(reservation: Reservation, start: datetime, end: datetime) -> bool:
    return reservation.start_time < end and reservation.end_time > start


def _active_at(reservation: Reservation, instant: datetime) -> bool:
    return reservation.start_time <= instant < reservation.end_time


def _slot_capacity(
    reservations: Sequence[Reservation],
    total_capacity: int,
    hour: int,
    minute: int,
    start: datetime,
) -> TimeSlotCapacity:
    end = start + timedelta(minutes=SLOT_MINUTES)
    active = [res for res in reservations if _active_in_slot(res, start, end)]
    occupied = sum(res.party_size for res in active)
    rate = min(100.0, occupied / total_capacity * 100) if total_capacity > 0 else 0.0

    return TimeSlotCapacity(
        hour=hour,
        minute=minute,
        total_capacity=total_capacity,
        occupied_seats=occupied,
        occupancy_rate=rate,
        reservation_count=len(active),
        timestamp=start,
        level=occupancy_level(rate),
    )


def calculate_capacity_by_time_slot(
    reservations: Sequence[Reservation],
    tables: Sequence[Table],
    day: date,
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
    tz: TimezoneLike = None,
) -> List[TimeSlotCapacity]:
    """
    Seats in use for every 15-minute slot of the timeline.

    ``reservations`` should already be narrowed to ``day``. Total capacity
    is the sum of table maximums; the rate is capped at 100. A final slot
    at midnight covers reservations running past the end of the day.
    """
    start_hour = settings.timeline_start_hour if start_hour is None else start_hour
    end_hour = settings.timeline_end_hour if end_hour is None else end_hour
    total_capacity = sum(table.capacity.max for table in tables)

    slots = [
        _slot_capacity(reservations, total_capacity, hour, minute, slot_start(day, hour, minute, tz))
        for hour in range(start_hour, end_hour)
        for minute in range(0, 60, SLOT_MINUTES)
    ]
    slots.append(_slot_capacity(reservations, total_capacity, 0, 0, slot_start(day, 24, 0, tz)))
    return slots


def _peak_seats(
    table_ids: set,
    reservations: Sequence[Reservation],
    day: date,
    start_hour: int,
    end_hour: int,
    tz: TimezoneLike,
) -> int:
    peak = 0
    for hour in range(start_hour, end_hour):
        for minute in range(0, 60, SLOT_MINUTES):
            sample = slot_start(day, hour, minute, tz)
            seats = sum(
                res.party_size
                for res in reservations
                if res.table_id in table_ids and _active_at(res, sample)
            )
            peak = max(peak, seats)
    return peak


def calculate_sector_metrics(
    sectors: Sequence[Sector],
    tables: Sequence[Table],
    reservations: Sequence[Reservation],
    day: date,
    avg_ticket_per_person: Optional[float] = None,
    tz: TimezoneLike = None,
) -> List[SectorMetrics]:
    """
    Per-sector figures for a day.

    Occupancy is based on the peak number of seated guests, sampled every
    15 minutes across the timeline, not on guests accumulated over the day.
    Revenue is estimated from all guests booked in the sector.
    """
    if avg_ticket_per_person is None:
        avg_ticket_per_person = settings.avg_ticket_per_person

    metrics = []
    for sector in sectors:
        sector_tables = [table for table in tables if table.sector_id == sector.id]
        table_ids = {table.id for table in sector_tables}
        total_capacity = sum(table.capacity.max for table in sector_tables)
        sector_reservations = [res for res in reservations if res.table_id in table_ids]

        peak = _peak_seats(
            table_ids, reservations, day, settings.timeline_start_hour, settings.timeline_end_hour, tz
        )
        occupancy_rate = min(100.0, peak / total_capacity * 100) if total_capacity > 0 else 0.0

        total_guests = sum(res.party_size for res in sector_reservations)
        average_party_size = total_guests / len(sector_reservations) if sector_reservations else 0.0

        metrics.append(
            SectorMetrics(
                sector_id=sector.id,
                sector_name=sector.name,
                total_tables=len(sector_tables),
                total_capacity=total_capacity,
                total_reservations=len(sector_reservations),
                occupied_seats=peak,
                occupancy_rate=occupancy_rate,
                average_party_size=average_party_size,
                revenue_estimate=total_guests * avg_ticket_per_person,
            )
        )
    return metrics


def compare_sectors(first: SectorMetrics, second: SectorMetrics) -> SectorComparison:
    return SectorComparison(
        occupancy_diff=first.occupancy_rate - second.occupancy_rate,
        revenue_diff=first.revenue_estimate - second.revenue_estimate,
        reservations_diff=first.total_reservations - second.total_reservations,
    )


TOP_SECTOR_KEYS = {
    "occupancy": lambda m: m.occupancy_rate,
    "revenue": lambda m: m.revenue_estimate,
    "reservations": lambda m: m.total_reservations,
}


def get_top_sector(metrics: Sequence[SectorMetrics], by: str) -> Optional[SectorMetrics]:
    """Best sector by occupancy, revenue or reservations; the first wins ties"""
    if not metrics:
        return None
    if by not in TOP_SECTOR_KEYS:
        raise ValueError(f"Unknown metric: {by}")
    # max() keeps the first of equal elements
    return max(metrics, key=TOP_SECTOR_KEYS[by])
