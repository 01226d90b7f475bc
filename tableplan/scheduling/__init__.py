"""Reservation scheduling and conflict-resolution engine"""

from tableplan.scheduling.intervals import (
    MAX_RESERVATION_DURATION,
    MIN_RESERVATION_DURATION,
    TimeInterval,
    calculate_end_time,
    check_time_overlap,
    is_valid_duration,
    overlaps,
    parse_instant,
    reservations_on_date,
    reservations_overlapping_day,
    service_date,
)
from tableplan.scheduling.conflicts import check_conflict, is_valid_capacity
from tableplan.scheduling.operations import (
    add_reservation,
    change_reservation_status,
    delete_reservation,
    move_reservation,
    resize_reservation,
    update_reservation,
)
from tableplan.scheduling.suggestions import (
    find_best_tables,
    find_next_available_slots,
    format_time_difference,
    score_table,
)
from tableplan.scheduling.batch import (
    assign_tables_in_batch,
    build_sector_map,
    create_reservations_from_assignments,
)

__all__ = [
    "MAX_RESERVATION_DURATION",
    "MIN_RESERVATION_DURATION",
    "TimeInterval",
    "calculate_end_time",
    "check_time_overlap",
    "is_valid_duration",
    "overlaps",
    "parse_instant",
    "reservations_on_date",
    "reservations_overlapping_day",
    "service_date",
    "check_conflict",
    "is_valid_capacity",
    "add_reservation",
    "change_reservation_status",
    "delete_reservation",
    "move_reservation",
    "resize_reservation",
    "update_reservation",
    "find_best_tables",
    "find_next_available_slots",
    "format_time_difference",
    "score_table",
    "assign_tables_in_batch",
    "build_sector_map",
    "create_reservations_from_assignments",
]
