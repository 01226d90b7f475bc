"""
Table suggestion engine.

Tables are scored by how closely their maximum capacity fits the party
(never too small), with a bonus for the preferred sector. Available tables
always rank ahead of unavailable ones, whatever their score.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Set

from tableplan.models.reservation import Reservation
from tableplan.models.table import Table
from tableplan.scheduling.conflicts import check_conflict, is_valid_capacity
from tableplan.scheduling.intervals import (
    Instant,
    TimezoneLike,
    calculate_end_time,
    parse_instant,
    reservations_overlapping_day,
)
from tableplan.schemas.suggestion import TableSuggestion, TimeSlotSuggestion

SECTOR_PREFERENCE_BONUS = 10
SEARCH_WINDOWS = (15, 30, 60)
SEARCH_STEP_MINUTES = 15


def score_table(table: Table, party_size: int, preferred_sector_id: Optional[str] = None) -> int:
    """
    Score how well a table suits a party.

    0 means the party is outside the table's capacity. Otherwise the tier
    follows utilization (party size over max capacity): exact fit 100,
    >= 0.9 95, >= 0.75 80, >= 0.6 65, anything else 50; +10 in the
    preferred sector.
    """
    if not is_valid_capacity(party_size, table.capacity):
        return 0

    max_capacity = table.capacity.max
    utilization = party_size / max_capacity

    if party_size == max_capacity:
        score = 100
    elif utilization >= 0.9:
        score = 95
    elif utilization >= 0.75:
        score = 80
    elif utilization >= 0.6:
        score = 65
    else:
        score = 50

    if preferred_sector_id and table.sector_id == preferred_sector_id:
        score += SECTOR_PREFERENCE_BONUS

    return score


def suggestion_reason(table: Table, party_size: int) -> str:
    max_capacity = table.capacity.max
    utilization = party_size / max_capacity

    if party_size == max_capacity:
        return "Perfect capacity"
    if utilization >= 0.9:
        return "Excellent use of space"
    if utilization >= 0.75:
        return "Good fit"
    if utilization >= 0.6:
        return "Acceptable fit"
    return f"Capacity {table.capacity.min}-{max_capacity} guests"


def find_best_tables(
    tables: Sequence[Table],
    reservations: Sequence[Reservation],
    party_size: int,
    start_time: Instant,
    duration_minutes: int,
    sector_preference: Optional[str] = None,
    tz: TimezoneLike = None,
) -> List[TableSuggestion]:
    """Rank every table for a party and time window, available tables first"""
    start_time = parse_instant(start_time)
    end_time = calculate_end_time(start_time, duration_minutes)
    nearby = reservations_overlapping_day(reservations, start_time, tz)

    suggestions = []
    for table in tables:
        score = score_table(table, party_size, sector_preference)
        conflict = check_conflict(nearby, table.id, start_time, end_time)
        suggestions.append(
            TableSuggestion(
                table=table,
                score=score,
                reason=suggestion_reason(table, party_size),
                is_available=not conflict.has_conflict and score > 0,
            )
        )

    suggestions.sort(key=lambda s: (not s.is_available, -s.score))
    return suggestions


def format_time_difference(desired_time: datetime, actual_time: datetime) -> str:
    """Human label for an offset from the requested time, such as +15 min"""
    diff_minutes = round((actual_time - desired_time).total_seconds() / 60)
    if diff_minutes == 0:
        return "Requested time"
    sign = "+" if diff_minutes > 0 else ""
    return f"{sign}{diff_minutes} min"


def find_next_available_slots(
    tables: Sequence[Table],
    reservations: Sequence[Reservation],
    party_size: int,
    desired_start_time: Instant,
    duration_minutes: int,
    sector_preference: Optional[str] = None,
    tz: TimezoneLike = None,
) -> List[TimeSlotSuggestion]:
    """
    Probe start times around the desired one for free tables.

    Windows of +/-15, +/-30 and +/-60 minutes are explored in 15-minute
    steps; the desired time itself and times already probed by a narrower
    window are skipped. Slots come back closest-first.
    """
    desired_time = parse_instant(desired_start_time)
    searched: Set[datetime] = set()
    slots: List[TimeSlotSuggestion] = []

    for window in SEARCH_WINDOWS:
        for offset in range(-window, window + 1, SEARCH_STEP_MINUTES):
            if offset == 0:
                continue

            candidate = desired_time + timedelta(minutes=offset)
            if candidate in searched:
                continue
            searched.add(candidate)

            available = [
                suggestion
                for suggestion in find_best_tables(
                    tables, reservations, party_size, candidate, duration_minutes, sector_preference, tz
                )
                if suggestion.is_available
            ]
            if available:
                slots.append(
                    TimeSlotSuggestion(
                        start_time=candidate,
                        offset_label=format_time_difference(desired_time, candidate),
                        suggestions=available,
                    )
                )

    slots.sort(key=lambda slot: abs(slot.start_time - desired_time))
    return slots
