"""Date conversions, compass point names and unique identifiers."""

from __future__ import annotations

import enum
import re
from datetime import date, datetime, time, timedelta, timezone

#: Lower bound for a valid Julian date (January 1, 1583).
MIN_JD = 2299238

#: Upper bound for a valid Julian date (January 1, 3500).
MAX_JD = 2999408

_MS_PER_DAY = 86_400_000
_ORDINAL_TO_JDN = 1_721_425
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_INT_RE = re.compile(r"\s*[+-]?\d+\s*")


class CompassPoint(enum.IntEnum):
    """Points of the 16-point compass rose."""

    N = 0
    NNE = 1
    NE = 2
    ENE = 3
    E = 4
    ESE = 5
    SE = 6
    SSE = 7
    S = 8
    SSW = 9
    SW = 10
    WSW = 11
    W = 12
    WNW = 13
    NW = 14
    NNW = 15


class EventType(enum.Enum):
    """Kinds of events of eclipsing binaries."""

    UNDEFINED = 0
    PRIMARY_MINIMUM = 1
    SECONDARY_MINIMUM = 2


def to_julian_date(dt: datetime | None) -> float:
    """Julian date (UTC) of a time stamp; naive values are local time."""
    if dt is None:
        return 0.0
    utc = dt.astimezone(timezone.utc)
    jdn = utc.toordinal() + _ORDINAL_TO_JDN
    msecs_of_day = (
        (utc.hour * 3600 + utc.minute * 60 + utc.second) * 1000 + utc.microsecond // 1000
    )
    msecs = jdn * _MS_PER_DAY - _MS_PER_DAY // 2 + msecs_of_day
    return msecs / _MS_PER_DAY


def from_julian_date(jd_utc: float) -> datetime | None:
    """Local time stamp of a UTC Julian date, or None when out of range."""
    if not MIN_JD <= jd_utc <= MAX_JD:
        return None
    msecs = int((jd_utc + 0.5) * _MS_PER_DAY)
    day = date.fromordinal(msecs // _MS_PER_DAY - _ORDINAL_TO_JDN)
    utc = datetime.combine(day, time(0), tzinfo=timezone.utc) + timedelta(
        milliseconds=msecs % _MS_PER_DAY
    )
    return utc.astimezone()


def from_utc(dt: datetime | None) -> datetime | None:
    """Local time stamp of a UTC time stamp; naive values are taken as UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone()


def compass_point_name(point: CompassPoint | int) -> str:
    """Name of a compass point, e.g. ``"SSW"``; empty for unknown points."""
    try:
        return CompassPoint(point).name
    except ValueError:
        return ""


def event_type_short_caption(event_type: EventType) -> str:
    """One-letter caption of an event type; empty for other types."""
    if event_type is EventType.PRIMARY_MINIMUM:
        return "P"
    if event_type is EventType.SECONDARY_MINIMUM:
        return "S"
    return ""


def parse_unique_id(unique_id: str) -> tuple[str, int] | None:
    """Split ``"type:suffix"`` into its parts, or return None without a colon.

    A suffix that is not a valid integer reads as 0.
    """
    type_id, sep, rest = unique_id.partition(":")
    if not sep:
        return None
    suffix = 0
    if _INT_RE.fullmatch(rest):
        value = int(rest)
        if _INT_MIN <= value <= _INT_MAX:
            suffix = value
    return type_id, suffix


def create_unique_id(type_id: str, suffix: int) -> str:
    """Build a unique identifier ``"type:suffix"``."""
    return f"{type_id}:{suffix}"