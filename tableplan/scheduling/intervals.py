"""
Time interval model.

Reservations occupy half-open intervals ``[start, end)``. Two intervals
overlap only when each starts strictly before the other ends, so a
reservation ending at 21:00 and another starting at 21:00 on the same
table are compatible.

All instants are timezone-aware. Calendar-date questions ("which day does
this reservation belong to?") are answered in the restaurant timezone by
``service_date`` and ``reservations_on_date``. Conflict and availability
checks narrow through ``reservations_overlapping_day`` instead, which also
keeps reservations crossing midnight.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterable, List, NamedTuple, Union
from zoneinfo import ZoneInfo

from tableplan.config import settings
from tableplan.models.reservation import Reservation

MIN_RESERVATION_DURATION = 30
MAX_RESERVATION_DURATION = 240

Instant = Union[datetime, str]
TimezoneLike = Union[tzinfo, str, None]


class TimeInterval(NamedTuple):
    """Half-open interval between two aware instants"""
    start: datetime
    end: datetime

    @classmethod
    def from_duration(cls, start: Instant, duration_minutes: int) -> "TimeInterval":
        start = parse_instant(start)
        return cls(start, calculate_end_time(start, duration_minutes))

    def overlaps(self, other: "TimeInterval") -> bool:
        return overlaps(self, other)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """Strict half-open overlap test; touching endpoints do not overlap"""
    return a.start < b.end and b.start < a.end


def check_time_overlap(start1: Instant, end1: Instant, start2: Instant, end2: Instant) -> bool:
    """Overlap test on raw instants (aware datetimes or ISO strings)"""
    return overlaps(
        TimeInterval(parse_instant(start1), parse_instant(end1)),
        TimeInterval(parse_instant(start2), parse_instant(end2)),
    )


def parse_instant(value: Instant) -> datetime:
    """
    Parse an ISO-8601 instant with an explicit offset.

    Naive values are rejected: comparing wall-clock times without an offset
    breaks the overlap predicate around midnight.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if not isinstance(value, datetime):
        raise TypeError(f"Expected datetime or ISO string, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"Instant {value.isoformat()} has no UTC offset")
    return value


def calculate_end_time(start_time: Instant, duration_minutes: int) -> datetime:
    return parse_instant(start_time) + timedelta(minutes=duration_minutes)


def is_valid_duration(minutes: int) -> bool:
    """Durations are accepted from 30 minutes to 4 hours, both inclusive"""
    return MIN_RESERVATION_DURATION <= minutes <= MAX_RESERVATION_DURATION


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def service_timezone(tz: TimezoneLike = None) -> tzinfo:
    """Resolve a timezone argument, defaulting to the configured restaurant zone"""
    if tz is None:
        return ZoneInfo(settings.restaurant_timezone)
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def service_date(instant: Instant, tz: TimezoneLike = None) -> date:
    """Calendar date of an instant in the restaurant timezone"""
    return parse_instant(instant).astimezone(service_timezone(tz)).date()


def local_instant(day: date, wall_time: time, tz: TimezoneLike = None) -> datetime:
    """Combine a local date and wall-clock time into an aware instant"""
    return datetime.combine(day, wall_time.replace(tzinfo=None), tzinfo=service_timezone(tz))


def reservations_on_date(
    reservations: Iterable[Reservation],
    day: Union[date, Instant],
    tz: TimezoneLike = None,
) -> List[Reservation]:
    """
    Reservations whose start falls on the given service date.

    ``day`` may be a date or an instant; an instant is first mapped to its
    service date.
    """
    zone = service_timezone(tz)
    if isinstance(day, str) or isinstance(day, datetime):
        day = service_date(day, zone)
    return [res for res in reservations if service_date(res.start_time, zone) == day]


def reservations_overlapping_day(
    reservations: Iterable[Reservation],
    day: Union[date, Instant],
    tz: TimezoneLike = None,
) -> List[Reservation]:
    """
    Reservations that can collide with a booking starting on a service date.

    The window runs from local midnight of ``day`` to the next midnight plus
    the longest allowed duration, so a reservation crossing midnight from
    the day before, or a candidate running past midnight, is still seen.
    """
    zone = service_timezone(tz)
    if isinstance(day, str) or isinstance(day, datetime):
        day = service_date(day, zone)
    window = TimeInterval(
        slot_start(day, 0, 0, zone),
        slot_start(day, 24, MAX_RESERVATION_DURATION, zone),
    )
    return [res for res in reservations if overlaps(window, TimeInterval(res.start_time, res.end_time))]


def slot_start(day: date, hour: int, minute: int, tz: TimezoneLike = None) -> datetime:
    """Local wall-clock slot start; hour 24 means midnight of the next day"""
    base = datetime.combine(day, time(0, 0), tzinfo=service_timezone(tz))
    return base + timedelta(hours=hour, minutes=minute)
