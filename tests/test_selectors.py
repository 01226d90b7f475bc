"""Tests for reservation lookups and filters"""

from datetime import date, datetime

import pytest

from tableplan.models.reservation import ReservationStatus
from tableplan.scheduling.selectors import (
    get_filtered_reservations,
    get_reservation_by_id,
    get_reservation_count_by_status,
    get_reservations_by_table,
    get_reservations_by_table_map,
    get_sector_by_id,
    get_table_by_id,
    get_tables_by_sector,
    get_tables_by_sector_map,
)

DAY = date(2025, 10, 20)


def at(hhmm: str, day: str = "2025-10-20") -> datetime:
    return datetime.fromisoformat(f"{day}T{hhmm}:00+00:00")


@pytest.fixture
def day_book(make_reservation, reservations):
    """A and B on M1, a seated terrace party and a booking for the next day"""
    terrace = make_reservation(
        "RES_T", "TABLE_T2", at("13:00"), 60, status=ReservationStatus.SEATED,
        name="Ana Torres", phone="+5491155550000", email="ana@Example.com",
    )
    tomorrow = make_reservation("RES_NEXT", "TABLE_M1", at("19:00", "2025-10-21"), 90, name="John Doe")
    return reservations + [terrace, tomorrow]


def test_lookups(day_book, tables, sectors):
    assert get_reservation_by_id(day_book, "RES_T").table_id == "TABLE_T2"
    assert get_reservation_by_id(day_book, "missing") is None
    assert [r.id for r in get_reservations_by_table(day_book, "TABLE_M1")] == ["RES_A", "RES_B", "RES_NEXT"]
    assert get_table_by_id(tables, "TABLE_B2").name == "B2"
    assert get_table_by_id(tables, "TABLE_Z9") is None
    assert get_sector_by_id(sectors, "SECTOR_BAR").name == "Bar Area"
    assert [t.id for t in get_tables_by_sector(tables, "SECTOR_TERRACE")] == ["TABLE_T1", "TABLE_T2", "TABLE_T3"]


class TestFilteredReservations:
    def test_date_only(self, day_book, tables):
        filtered = get_filtered_reservations(day_book, tables, DAY, tz="UTC")

        assert {r.id for r in filtered} == {"RES_A", "RES_B", "RES_T"}

    def test_empty_filters_match_everything(self, day_book, tables):
        filtered = get_filtered_reservations(day_book, tables, DAY, [], [], "  ", tz="UTC")

        assert len(filtered) == 3

    def test_by_sector(self, day_book, tables):
        filtered = get_filtered_reservations(day_book, tables, DAY, sector_ids=["SECTOR_TERRACE"], tz="UTC")

        assert [r.id for r in filtered] == ["RES_T"]

    def test_by_status(self, day_book, tables):
        filtered = get_filtered_reservations(
            day_book, tables, DAY, statuses=[ReservationStatus.CONFIRMED], tz="UTC"
        )

        assert {r.id for r in filtered} == {"RES_A", "RES_B"}

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("john", {"RES_A"}),
            ("SMITH", {"RES_B"}),
            ("+198765", {"RES_B"}),
            ("example.com", {"RES_B", "RES_T"}),
            ("nobody", set()),
        ],
    )
    def test_search(self, query, expected, day_book, tables):
        filtered = get_filtered_reservations(day_book, tables, DAY, search_query=query, tz="UTC")

        assert {r.id for r in filtered} == expected

    def test_filters_combine(self, day_book, tables):
        filtered = get_filtered_reservations(
            day_book, tables, DAY,
            sector_ids=["SECTOR_MAIN"], statuses=[ReservationStatus.SEATED], tz="UTC",
        )

        assert filtered == []

    def test_date_follows_restaurant_timezone(self, make_reservation, tables):
        """00:30Z on the 21st is still the evening of the 20th in Buenos Aires"""
        late = make_reservation("RES_LATE", "TABLE_B1", at("00:30", "2025-10-21"), 60)

        assert get_filtered_reservations([late], tables, DAY, tz="America/Argentina/Buenos_Aires") == [late]
        assert get_filtered_reservations([late], tables, DAY, tz="UTC") == []


def test_grouping(day_book, tables):
    by_table = get_reservations_by_table_map(day_book)
    by_sector = get_tables_by_sector_map(tables)

    assert len(by_table["TABLE_M1"]) == 3
    assert "TABLE_M2" not in by_table
    assert len(by_sector["SECTOR_MAIN"]) == 4
    assert len(by_sector["SECTOR_BAR"]) == 2


def test_count_by_status(day_book):
    counts = get_reservation_count_by_status(day_book)

    assert counts[ReservationStatus.CONFIRMED] == 3
    assert counts[ReservationStatus.SEATED] == 1
    assert counts[ReservationStatus.CANCELLED] == 0
    assert set(counts) == set(ReservationStatus)
