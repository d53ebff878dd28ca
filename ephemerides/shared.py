"""Data shared by tools and views, with change notifications."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime


class Signal:
    """A list of callbacks invoked when a datum changes."""

    def __init__(self) -> None:
        self._slots: list[Callable[[], object]] = []

    def connect(self, slot: Callable[[], object]) -> None:
        """Call *slot* whenever the signal is emitted."""
        self._slots.append(slot)

    def disconnect(self, slot: Callable[[], object]) -> None:
        """Stop calling *slot*; raises ValueError if it is not connected."""
        self._slots.remove(slot)

    def emit(self) -> None:
        """Call every connected slot in the order of connection."""
        for slot in list(self._slots):
            slot()


@dataclass(frozen=True)
class GeoCoordinates:
    """Observer's geographic position in degrees (east longitude, north latitude)."""

    longitude: float = 0.0
    latitude: float = 0.0


@dataclass(frozen=True)
class EquCoordinates:
    """Equatorial coordinates in radians."""

    right_ascension: float = 0.0
    declination: float = 0.0


def _ra_to_rad(hours: float, minutes: float, seconds: float) -> float:
    return math.radians((hours + minutes / 60.0 + seconds / 3600.0) * 15.0)


def _dec_to_rad(degrees: float, minutes: float, seconds: float) -> float:
    return math.radians(degrees + minutes / 60.0 + seconds / 3600.0)


DEFAULT_GEO_LOCATION = GeoCoordinates(longitude=16.6103878, latitude=49.1944631)
DEFAULT_EQU_LOCATION = EquCoordinates(
    right_ascension=_ra_to_rad(18, 45, 48.6),
    declination=-_dec_to_rad(23, 1, 16.4),
)
DEFAULT_TWILIGHT_ELEVATION = 12.0


class SharedData:
    """Selected time, observer location and object position.

    Each setter emits the matching signal only when the value changes.
    """

    def __init__(self) -> None:
        self._local_datetime = datetime.now()
        self._geo_location = DEFAULT_GEO_LOCATION
        self._equ_location = DEFAULT_EQU_LOCATION
        #: Absolute Sun elevation in degrees that bounds twilight.
        self.twilight_elevation = DEFAULT_TWILIGHT_ELEVATION
        self.date_time_changed = Signal()
        self.geo_location_changed = Signal()
        self.equ_location_changed = Signal()

    @property
    def local_datetime(self) -> datetime:
        """Selected time stamp in the user's local time."""
        return self._local_datetime

    @property
    def geo_location(self) -> GeoCoordinates:
        """Observer's geographic coordinates."""
        return self._geo_location

    @property
    def equ_location(self) -> EquCoordinates:
        """Equatorial coordinates of the selected object."""
        return self._equ_location

    def save(self) -> dict[str, float]:
        """Return the values that are kept between runs."""
        return {
            "longitude": self._geo_location.longitude,
            "latitude": self._geo_location.latitude,
            "twilight": self.twilight_elevation,
        }

    def set_local_datetime(self, timestamp: datetime | None) -> None:
        """Select a local time stamp; None is ignored."""
        if timestamp is not None and timestamp != self._local_datetime:
            self._local_datetime = timestamp
            self.date_time_changed.emit()

    def set_geo_location(self, geoloc: GeoCoordinates) -> None:
        """Select the observer's geographic coordinates."""
        if geoloc != self._geo_location:
            self._geo_location = geoloc
            self.geo_location_changed.emit()

    def set_equ_location(self, equloc: EquCoordinates) -> None:
        """Select the equatorial coordinates of an object."""
        if equloc != self._equ_location:
            self._equ_location = equloc
            self.equ_location_changed.emit()