"""Lookup and filtering helpers over reservations and floor data"""

from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from tableplan.models.reservation import Reservation, ReservationStatus
from tableplan.models.table import Sector, Table
from tableplan.scheduling.intervals import TimezoneLike, reservations_on_date


def get_reservation_by_id(reservations: Iterable[Reservation], reservation_id: str) -> Optional[Reservation]:
    return next((res for res in reservations if res.id == reservation_id), None)


def get_reservations_by_table(reservations: Iterable[Reservation], table_id: str) -> List[Reservation]:
    return [res for res in reservations if res.table_id == table_id]


def get_table_by_id(tables: Iterable[Table], table_id: str) -> Optional[Table]:
    return next((table for table in tables if table.id == table_id), None)


def get_sector_by_id(sectors: Iterable[Sector], sector_id: str) -> Optional[Sector]:
    return next((sector for sector in sectors if sector.id == sector_id), None)


def get_tables_by_sector(tables: Iterable[Table], sector_id: str) -> List[Table]:
    return [table for table in tables if table.sector_id == sector_id]


def get_filtered_reservations(
    reservations: Sequence[Reservation],
    tables: Sequence[Table],
    day: date,
    sector_ids: Optional[Sequence[str]] = None,
    statuses: Optional[Sequence[ReservationStatus]] = None,
    search_query: Optional[str] = None,
    tz: TimezoneLike = None,
) -> List[Reservation]:
    """
    Reservations for one service day, optionally narrowed by sector, status
    and a case-insensitive search over customer name, phone and email.
    Empty filters match everything.
    """
    filtered = reservations_on_date(reservations, day, tz)

    if sector_ids:
        table_ids = {table.id for table in tables if table.sector_id in sector_ids}
        filtered = [res for res in filtered if res.table_id in table_ids]

    if statuses:
        filtered = [res for res in filtered if res.status in statuses]

    query = (search_query or "").strip().lower()
    if query:
        filtered = [
            res
            for res in filtered
            if query in res.customer.name.lower()
            or query in res.customer.phone
            or (res.customer.email and query in res.customer.email.lower())
        ]

    return filtered


def get_reservations_by_table_map(reservations: Iterable[Reservation]) -> Dict[str, List[Reservation]]:
    grouped: Dict[str, List[Reservation]] = defaultdict(list)
    for res in reservations:
        grouped[res.table_id].append(res)
    return dict(grouped)


def get_tables_by_sector_map(tables: Iterable[Table]) -> Dict[str, List[Table]]:
    grouped: Dict[str, List[Table]] = defaultdict(list)
    for table in tables:
        grouped[table.sector_id].append(table)
    return dict(grouped)


def get_reservation_count_by_status(reservations: Iterable[Reservation]) -> Dict[ReservationStatus, int]:
    counts = {status: 0 for status in ReservationStatus}
    for res in reservations:
        counts[res.status] += 1
    return counts
