"""Tests for reservation mutation operations"""

from datetime import datetime
from itertools import combinations

import pytest

from tableplan.models.reservation import Customer, Priority, ReservationStatus
from tableplan.scheduling.intervals import TimeInterval, overlaps
from tableplan.scheduling.operations import (
    add_reservation,
    change_reservation_status,
    delete_reservation,
    move_reservation,
    resize_reservation,
    update_reservation,
)
from tableplan.schemas.reservation import CustomerUpdate, ReservationCreate, ReservationUpdate


def at(hhmm: str, day: str = "2025-10-20") -> datetime:
    return datetime.fromisoformat(f"{day}T{hhmm}:00+00:00")


def new_booking(table_id: str, start: datetime, duration: int, **kwargs) -> ReservationCreate:
    return ReservationCreate(
        table_id=table_id,
        customer=Customer(name="New Guest", phone="+15550001111"),
        party_size=kwargs.pop("party_size", 2),
        start_time=start,
        duration_minutes=duration,
        **kwargs,
    )


def assert_no_overlaps(reservations):
    for first, second in combinations(reservations, 2):
        if first.table_id == second.table_id:
            assert not overlaps(
                TimeInterval(first.start_time, first.end_time),
                TimeInterval(second.start_time, second.end_time),
            ), f"{first.id} overlaps {second.id}"


def get(reservations, reservation_id):
    return next(r for r in reservations if r.id == reservation_id)


def late_booking(make_reservation):
    """TABLE_M1, 23:00 until 01:00 the next day"""
    return make_reservation("RES_LATE", "TABLE_M1", at("23:00"), 120)


# Create


def test_add_reservation_defaults(reservations):
    updated = add_reservation(reservations, new_booking("TABLE_M2", at("20:00"), 90), tz="UTC")

    assert updated is not None
    assert len(updated) == 3
    created = updated[-1]
    assert created.id not in ("RES_A", "RES_B")
    assert created.status == ReservationStatus.CONFIRMED
    assert created.priority == Priority.STANDARD
    assert created.end_time == at("21:30")
    assert created.created_at == created.updated_at


def test_add_reservation_keeps_explicit_status(reservations):
    updated = add_reservation(
        reservations,
        new_booking("TABLE_M2", at("20:00"), 90, status="PENDING", priority="VIP", source="phone"),
        tz="UTC",
    )

    assert updated[-1].status == ReservationStatus.PENDING
    assert updated[-1].priority == Priority.VIP


def test_add_reservation_conflict_returns_none(reservations):
    """Overlapping a confirmed reservation leaves nothing changed"""
    result = add_reservation(reservations, new_booking("TABLE_M1", at("20:00"), 60), tz="UTC")

    assert result is None
    assert len(reservations) == 2


def test_add_reservation_in_exact_gap(reservations):
    updated = add_reservation(reservations, new_booking("TABLE_M1", at("21:00"), 30), tz="UTC")

    assert updated is not None
    assert_no_overlaps(updated)


@pytest.mark.parametrize("duration", [30, 240])
def test_add_reservation_duration_bounds_accepted(reservations, duration):
    assert add_reservation(reservations, new_booking("TABLE_M2", at("12:00"), duration), tz="UTC") is not None


@pytest.mark.parametrize("duration", [29, 241])
def test_add_reservation_duration_bounds_rejected(reservations, duration):
    assert add_reservation(reservations, new_booking("TABLE_M2", at("12:00"), duration), tz="UTC") is None


def test_add_reservation_ignores_other_days(reservations):
    """Same table and wall-clock time on the next day is free"""
    updated = add_reservation(reservations, new_booking("TABLE_M1", at("19:00", "2025-10-21"), 120), tz="UTC")

    assert updated is not None


# Update


def test_update_merges_customer_fields(reservations):
    updated = update_reservation(
        reservations,
        ReservationUpdate(id="RES_A", customer=CustomerUpdate(email="john@example.com")),
    )

    customer = get(updated, "RES_A").customer
    assert customer.name == "John Doe"
    assert customer.phone == "+1234567890"
    assert customer.email == "john@example.com"


def test_update_recomputes_end_time(reservations):
    updated = update_reservation(reservations, ReservationUpdate(id="RES_A", start_time=at("17:00")))

    res = get(updated, "RES_A")
    assert res.duration_minutes == 120
    assert res.end_time == at("19:00")


def test_update_uses_existing_start_for_new_duration(reservations):
    updated = update_reservation(reservations, ReservationUpdate(id="RES_A", duration_minutes=60))

    assert get(updated, "RES_A").end_time == at("20:00")


def test_update_refreshes_updated_at(reservation_a, reservations):
    updated = update_reservation(reservations, ReservationUpdate(id="RES_A", notes="Window seat"))

    res = get(updated, "RES_A")
    assert res.notes == "Window seat"
    assert res.updated_at > reservation_a.updated_at
    assert res.created_at == reservation_a.created_at


def test_update_does_not_check_conflicts(reservations):
    """The primitive is unguarded; move/resize do the checking"""
    updated = update_reservation(reservations, ReservationUpdate(id="RES_B", start_time=at("20:00")))

    assert get(updated, "RES_B").start_time == at("20:00")


def test_update_unknown_id_is_a_no_op(reservations):
    updated = update_reservation(reservations, ReservationUpdate(id="RES_MISSING", notes="x"))

    assert updated == reservations


def test_update_leaves_input_untouched(reservation_a, reservations):
    update_reservation(reservations, ReservationUpdate(id="RES_A", party_size=3))

    assert reservations[0] is reservation_a
    assert reservation_a.party_size == 4


# Delete and status


def test_delete_reservation(reservations):
    updated = delete_reservation(reservations, "RES_A")

    assert [r.id for r in updated] == ["RES_B"]
    assert len(reservations) == 2


def test_delete_unknown_id(reservations):
    assert delete_reservation(reservations, "RES_MISSING") == reservations


def test_change_status_is_unrestricted(reservations):
    finished = change_reservation_status(reservations, "RES_A", ReservationStatus.FINISHED)
    back_to_pending = change_reservation_status(finished, "RES_A", ReservationStatus.PENDING)

    assert get(finished, "RES_A").status == ReservationStatus.FINISHED
    assert get(back_to_pending, "RES_A").status == ReservationStatus.PENDING
    assert get(back_to_pending, "RES_B").status == ReservationStatus.CONFIRMED


# Move


def test_move_to_empty_table(reservations):
    result = move_reservation(reservations, "RES_A", "TABLE_M3", at("19:00"), tz="UTC")

    assert result.success is True
    moved = get(result.reservations, "RES_A")
    assert moved.table_id == "TABLE_M3"
    assert moved.start_time == at("19:00")
    assert moved.duration_minutes == 120
    assert moved.end_time == at("21:00")


def test_move_preserves_duration(reservations):
    result = move_reservation(reservations, "RES_B", "TABLE_M2", "2025-10-20T12:15:00Z", tz="UTC")

    moved = get(result.reservations, "RES_B")
    assert moved.duration_minutes == 90
    assert moved.end_time == at("13:45")


def test_move_into_conflict_fails(reservations):
    result = move_reservation(reservations, "RES_B", "TABLE_M1", at("20:00"), tz="UTC")

    assert result.success is False
    assert result.reservations == reservations


def test_move_to_same_place_is_a_no_op_success(reservations):
    result = move_reservation(reservations, "RES_A", "TABLE_M1", at("19:00"), tz="UTC")

    assert result.success is True
    assert get(result.reservations, "RES_A").start_time == at("19:00")


def test_move_into_exact_gap(reservations, make_reservation):
    other = make_reservation("RES_C", "TABLE_M2", at("21:00"), 30)

    result = move_reservation([*reservations, other], "RES_C", "TABLE_M1", at("21:00"), tz="UTC")

    assert result.success is True
    assert_no_overlaps(result.reservations)


def test_move_unknown_reservation(reservations):
    result = move_reservation(reservations, "RES_MISSING", "TABLE_M1", at("12:00"), tz="UTC")

    assert result.success is False
    assert result.reservations == reservations


# Resize


def test_resize_up_to_next_reservation(reservations):
    """A ends exactly where B starts"""
    result = resize_reservation(reservations, "RES_A", 150, tz="UTC")

    assert result.success is True
    resized = get(result.reservations, "RES_A")
    assert resized.end_time == at("21:30")
    assert resized.start_time == at("19:00")
    assert resized.duration_minutes == 150


def test_resize_into_next_reservation_fails(reservations):
    result = resize_reservation(reservations, "RES_A", 180, tz="UTC")

    assert result.success is False
    assert get(result.reservations, "RES_A").duration_minutes == 120
    assert result.reservations == reservations


def test_resize_shorter(reservations):
    result = resize_reservation(reservations, "RES_A", 90, tz="UTC")

    assert result.success is True
    assert get(result.reservations, "RES_A").end_time == at("20:30")


@pytest.mark.parametrize("duration", [30, 240])
def test_resize_duration_bounds_accepted(reservations, duration):
    result = resize_reservation(reservations, "RES_B", duration, tz="UTC")

    assert result.success is True
    assert get(result.reservations, "RES_B").duration_minutes == duration


@pytest.mark.parametrize("duration", [15, 29, 241, 300])
def test_resize_duration_bounds_rejected(reservations, duration):
    result = resize_reservation(reservations, "RES_B", duration, tz="UTC")

    assert result.success is False
    assert result.reservations == reservations


def test_resize_to_same_duration(reservations):
    assert resize_reservation(reservations, "RES_A", 120, tz="UTC").success is True


def test_resize_unknown_reservation(reservations):
    assert resize_reservation(reservations, "RES_MISSING", 60, tz="UTC").success is False


def test_guarded_sequence_never_double_books(reservations):
    """Accepted mutations keep every table free of overlaps"""
    current = reservations
    for start, duration in [("19:30", 60), ("21:00", 30), ("23:00", 60), ("18:00", 60)]:
        updated = add_reservation(current, new_booking("TABLE_M1", at(start), duration), tz="UTC")
        current = updated if updated is not None else current

    for reservation_id, duration in [("RES_A", 200), ("RES_B", 240)]:
        current = resize_reservation(current, reservation_id, duration, tz="UTC").reservations

    current = move_reservation(current, "RES_B", "TABLE_M1", at("20:00"), tz="UTC").reservations

    assert_no_overlaps(current)
    for res in current:
        assert (res.end_time - res.start_time).total_seconds() == res.duration_minutes * 60


# Across midnight


def test_add_after_midnight_conflicts_with_late_booking(make_reservation):
    late = late_booking(make_reservation)

    assert add_reservation([late], new_booking("TABLE_M1", at("00:30", "2025-10-21"), 60), tz="UTC") is None


def test_add_before_midnight_conflicts_with_early_booking(make_reservation):
    early = make_reservation("RES_EARLY", "TABLE_M1", at("00:30", "2025-10-21"), 60)

    assert add_reservation([early], new_booking("TABLE_M1", at("23:30"), 90), tz="UTC") is None


def test_add_after_late_booking_ends(make_reservation):
    late = late_booking(make_reservation)

    assert add_reservation([late], new_booking("TABLE_M1", at("01:00", "2025-10-21"), 60), tz="UTC") is not None


def test_move_after_midnight_into_late_booking(make_reservation, reservation_a):
    late = late_booking(make_reservation)

    result = move_reservation([reservation_a, late], "RES_A", "TABLE_M1", at("00:30", "2025-10-21"), tz="UTC")

    assert result.success is False
    assert get(result.reservations, "RES_A").start_time == at("19:00")


def test_resize_across_midnight_into_early_booking(make_reservation):
    late = make_reservation("RES_LATE", "TABLE_M1", at("22:30"), 90)
    early = make_reservation("RES_EARLY", "TABLE_M1", at("00:30", "2025-10-21"), 60)

    result = resize_reservation([late, early], "RES_LATE", 150, tz="UTC")

    assert result.success is False


# Customer patches


def test_update_ignores_null_customer_name_and_phone(reservations):
    updated = update_reservation(
        reservations,
        ReservationUpdate(id="RES_A", customer=CustomerUpdate(name=None, phone=None, email="john@example.com")),
    )

    customer = get(updated, "RES_A").customer
    assert customer.name == "John Doe"
    assert customer.phone == "+1234567890"
    assert customer.email == "john@example.com"


def test_update_can_clear_customer_email(reservations):
    updated = update_reservation(reservations, ReservationUpdate(id="RES_B", customer=CustomerUpdate(email=None)))

    assert get(updated, "RES_B").customer.email is None
    assert get(updated, "RES_B").customer.name == "Jane Smith"
