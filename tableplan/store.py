"""
In-memory reservation store.

The store owns one restaurant's floor plan and its current reservation
snapshot. It is the single writer for that snapshot: every mutation takes
the lock, runs a scheduling operation against the snapshot it read, and
swaps in the returned collection before releasing it. Two concurrent
requests therefore cannot both pass a conflict check against the same
stale snapshot.
"""

import threading
from datetime import date
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Set, Tuple
from zoneinfo import ZoneInfo

import structlog

from tableplan.data.floor_plan import SECTORS, TABLES, default_restaurant
from tableplan.models.reservation import Reservation, ReservationStatus
from tableplan.models.restaurant import Restaurant
from tableplan.models.table import Sector, Table
from tableplan.scheduling import analytics, batch, operations, selectors, suggestions
from tableplan.scheduling.conflicts import check_conflict, is_valid_capacity
from tableplan.scheduling.intervals import (
    Instant,
    parse_instant,
    reservations_on_date,
    reservations_overlapping_day,
)
from tableplan.schemas.analytics import SectorMetrics, TimeSlotCapacity
from tableplan.schemas.batch import (
    BatchAssignmentResult,
    BatchImportResponse,
    BatchReservationRequest,
)
from tableplan.schemas.reservation import ConflictCheck, ReservationCreate, ReservationUpdate
from tableplan.schemas.suggestion import TableSuggestion, TimeSlotSuggestion

logger = structlog.get_logger()


class ReservationStore:
    """Owner of a restaurant's reservation collection"""

    def __init__(
        self,
        restaurant: Restaurant,
        sectors: Sequence[Sector],
        tables: Sequence[Table],
        reservations: Sequence[Reservation] = (),
    ):
        self.restaurant = restaurant
        self.sectors = list(sectors)
        self.tables = list(tables)
        self._initial_reservations = tuple(reservations)
        self._reservations: Tuple[Reservation, ...] = tuple(reservations)
        self.selected_reservation_ids: Set[str] = set()
        self._lock = threading.RLock()

    @classmethod
    def from_floor_plan(cls) -> "ReservationStore":
        return cls(default_restaurant(), SECTORS, TABLES)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.restaurant.timezone)

    @property
    def reservations(self) -> List[Reservation]:
        """Snapshot of the current collection"""
        return list(self._reservations)

    def _commit(self, reservations: Sequence[Reservation]) -> None:
        self._reservations = tuple(reservations)

    # Lookups

    def get_reservation(self, reservation_id: str) -> Optional[Reservation]:
        return selectors.get_reservation_by_id(self._reservations, reservation_id)

    def get_table(self, table_id: str) -> Optional[Table]:
        return selectors.get_table_by_id(self.tables, table_id)

    def get_sector(self, sector_id: str) -> Optional[Sector]:
        return selectors.get_sector_by_id(self.sectors, sector_id)

    def filtered_reservations(
        self,
        day: date,
        sector_ids: Optional[Sequence[str]] = None,
        statuses: Optional[Sequence[ReservationStatus]] = None,
        search_query: Optional[str] = None,
    ) -> List[Reservation]:
        return selectors.get_filtered_reservations(
            self._reservations, self.tables, day, sector_ids, statuses, search_query, self.tz
        )

    def status_counts(self, day: date) -> Dict[ReservationStatus, int]:
        return selectors.get_reservation_count_by_status(
            reservations_on_date(self._reservations, day, self.tz)
        )

    # Mutations

    def add_reservation(self, data: ReservationCreate) -> Optional[Reservation]:
        """Create a reservation; None when rejected"""
        with self._lock:
            updated = operations.add_reservation(self._reservations, data, self.tz)
            if updated is None:
                return None
            self._commit(updated)
            return updated[-1]

    def update_reservation(self, data: ReservationUpdate) -> Optional[Reservation]:
        """Unguarded patch; callers must not use it to change placement"""
        with self._lock:
            if self.get_reservation(data.id) is None:
                return None
            self._commit(operations.update_reservation(self._reservations, data))
            return self.get_reservation(data.id)

    def delete_reservation(self, reservation_id: str) -> bool:
        with self._lock:
            self.selected_reservation_ids.discard(reservation_id)
            if self.get_reservation(reservation_id) is None:
                return False
            self._commit(operations.delete_reservation(self._reservations, reservation_id))
            logger.info("Reservation deleted", reservation_id=reservation_id)
            return True

    def change_reservation_status(self, reservation_id: str, status: ReservationStatus) -> Optional[Reservation]:
        with self._lock:
            if self.get_reservation(reservation_id) is None:
                return None
            self._commit(operations.change_reservation_status(self._reservations, reservation_id, status))
            logger.info("Reservation status changed", reservation_id=reservation_id, status=status.value)
            return self.get_reservation(reservation_id)

    def move_reservation(self, reservation_id: str, new_table_id: str, new_start_time: Instant) -> bool:
        """Move to another table/time; the party must fit the target table"""
        with self._lock:
            reservation = self.get_reservation(reservation_id)
            target = self.get_table(new_table_id)

            if reservation is None:
                logger.warning("Reservation not found", reservation_id=reservation_id)
                return False

            if target is None:
                logger.warning("Target table not found", table_id=new_table_id)
                return False

            if not is_valid_capacity(reservation.party_size, target.capacity):
                logger.warning(
                    "Party size incompatible with table capacity",
                    reservation_id=reservation_id,
                    party_size=reservation.party_size,
                    table_id=new_table_id,
                )
                return False

            result = operations.move_reservation(
                self._reservations, reservation_id, new_table_id, new_start_time, self.tz
            )
            if result.success:
                self._commit(result.reservations)
            return result.success

    def resize_reservation(self, reservation_id: str, new_duration_minutes: int) -> bool:
        with self._lock:
            result = operations.resize_reservation(
                self._reservations, reservation_id, new_duration_minutes, self.tz
            )
            if result.success:
                self._commit(result.reservations)
            return result.success

    # Queries

    def check_conflict(
        self,
        table_id: str,
        start_time: Instant,
        end_time: Instant,
        exclude_reservation_id: Optional[str] = None,
    ) -> ConflictCheck:
        """Conflict check against reservations around the candidate's service date"""
        start_time = parse_instant(start_time)
        return check_conflict(
            reservations_overlapping_day(self._reservations, start_time, self.tz),
            table_id,
            start_time,
            end_time,
            exclude_reservation_id,
        )

    def find_best_tables(
        self,
        party_size: int,
        start_time: Instant,
        duration_minutes: int,
        sector_preference: Optional[str] = None,
    ) -> List[TableSuggestion]:
        return suggestions.find_best_tables(
            self.tables, self._reservations, party_size, start_time, duration_minutes, sector_preference, self.tz
        )

    def find_next_available_slots(
        self,
        party_size: int,
        desired_start_time: Instant,
        duration_minutes: int,
        sector_preference: Optional[str] = None,
    ) -> List[TimeSlotSuggestion]:
        return suggestions.find_next_available_slots(
            self.tables,
            self._reservations,
            party_size,
            desired_start_time,
            duration_minutes,
            sector_preference,
            self.tz,
        )

    # Batch import

    def sector_map(self) -> Dict[str, str]:
        return batch.build_sector_map(self.sectors)

    def assign_batch(
        self,
        requests: Sequence[BatchReservationRequest],
        sector_map: Optional[Dict[str, str]] = None,
    ) -> BatchAssignmentResult:
        """Preview table assignments without committing anything"""
        return batch.assign_tables_in_batch(
            requests, self.tables, self._reservations, sector_map or self.sector_map(), self.tz
        )

    def import_batch(
        self,
        requests: Sequence[BatchReservationRequest],
        sector_map: Optional[Dict[str, str]] = None,
    ) -> BatchImportResponse:
        """Assign tables and commit the successful rows in one step"""
        with self._lock:
            result = self.assign_batch(requests, sector_map)
            created = batch.create_reservations_from_assignments(result.assignments, self.tz)
            self._commit([*self._reservations, *created])

        logger.info(
            "Batch imported",
            created=len(created),
            failed=result.failure_count,
        )
        return BatchImportResponse(result=result, created=created)

    # Analytics

    def capacity_by_time_slot(self, day: date) -> List[TimeSlotCapacity]:
        return analytics.calculate_capacity_by_time_slot(
            reservations_on_date(self._reservations, day, self.tz), self.tables, day, tz=self.tz
        )

    def sector_metrics(self, day: date) -> List[SectorMetrics]:
        return analytics.calculate_sector_metrics(
            self.sectors, self.tables, reservations_on_date(self._reservations, day, self.tz), day, tz=self.tz
        )

    # Selection

    def toggle_selection(self, reservation_id: str) -> None:
        if reservation_id in self.selected_reservation_ids:
            self.selected_reservation_ids.discard(reservation_id)
        else:
            self.selected_reservation_ids.add(reservation_id)

    def clear_selection(self) -> None:
        self.selected_reservation_ids.clear()

    def reset(self) -> None:
        """Restore the reservations the store was created with"""
        with self._lock:
            self._commit(self._initial_reservations)
            self.selected_reservation_ids.clear()


@lru_cache()
def get_store() -> ReservationStore:
    """Get the process-wide store instance"""
    return ReservationStore.from_floor_plan()
