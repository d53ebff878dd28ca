"""Common interface of star catalogs and of the objects they hold."""

from __future__ import annotations

import enum
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import BinaryIO

from .shared import EquCoordinates

#: Magnitude reported when a catalog does not know it.
INVALID_MAG = -99.9

CancelledFn = Callable[[], bool]
ProgressFn = Callable[[int], object]

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_SPACE = r"[ \t\n\v\f\r]*"
_INT_RE = re.compile(_SPACE + r"([+-]?[0-9]+)")
_FLOAT_RE = re.compile(
    _SPACE
    + r"([+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _field(line: str, start: int, length: int) -> str:
    return line[start:start + length].split("\0", 1)[0]


def parse_int(line: str, start: int, length: int) -> int | None:
    """Integer at the start of a fixed-width field, or None if there is none.

    Leading white space is skipped and anything after the number is ignored;
    values beyond the 32-bit range are clamped.
    """
    match = _INT_RE.match(_field(line, start, length))
    if match is None:
        return None
    return max(_INT_MIN, min(_INT_MAX, int(match.group(1))))


def parse_float(line: str, start: int, length: int) -> float | None:
    """Number at the start of a fixed-width field, or None if there is none."""
    match = _FLOAT_RE.match(_field(line, start, length))
    if match is None:
        return None
    return float(match.group(1))


class ObjectType(enum.Enum):
    """Kinds of catalog objects."""

    UNDEFINED = 0
    STAR = 1
    VARIABLE_STAR = 2


class CatalogError(Exception):
    """Raised when a catalog or its cache cannot be read."""


class CatalogObject(ABC):
    """A member of a catalog."""

    def __init__(self, catalog: Catalog | None = None) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> Catalog | None:
        """The catalog the object belongs to."""
        return self._catalog

    @property
    @abstractmethod
    def object_type(self) -> ObjectType:
        """Kind of the object."""

    @property
    def remarks(self) -> str:
        """Free-form remarks; empty by default."""
        return ""


class StellarObject(CatalogObject):
    """A catalog object with a position and a brightness."""

    @property
    @abstractmethod
    def coords(self) -> EquCoordinates:
        """Equatorial J2000 coordinates."""

    @property
    @abstractmethod
    def vmag(self) -> float:
        """Visual magnitude."""


class VariableStar(StellarObject):
    """A stellar object whose brightness varies."""

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.VARIABLE_STAR

    @property
    @abstractmethod
    def variable_name(self) -> str:
        """Variable star designation."""

    @property
    @abstractmethod
    def rating(self) -> int:
        """Rating of the object."""

    @property
    @abstractmethod
    def minimum_mag(self) -> float:
        """Magnitude in minimum."""

    @property
    @abstractmethod
    def maximum_mag(self) -> float:
        """Magnitude in maximum."""

    @property
    @abstractmethod
    def period(self) -> float:
        """Period in days."""

    @property
    @abstractmethod
    def epoch(self) -> float:
        """Epoch of the minimum (Julian date)."""

    @property
    @abstractmethod
    def var_type_string(self) -> str:
        """Type of variability."""


class Catalog(ABC):
    """A catalog that can be loaded, cached and queried."""

    def __init__(self) -> None:
        self._error_message = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the catalog, also used as the cache key."""

    @property
    def user(self) -> bool:
        """True for a catalog that belongs to the user rather than to all users."""
        return False

    @property
    def error_message(self) -> str:
        """Description of the last failure, if any."""
        return self._error_message

    @abstractmethod
    def signature(self) -> str:
        """A string that changes when the catalog's source changes."""

    @abstractmethod
    def open(
        self,
        cancelled: CancelledFn | None = None,
        set_progress_max: ProgressFn | None = None,
        set_progress_value: ProgressFn | None = None,
    ) -> bool:
        """Load the catalog; return True if any object was loaded."""

    @abstractmethod
    def pickle(self, stream: BinaryIO) -> None:
        """Write the loaded catalog to a binary stream."""

    @abstractmethod
    def unpickle(self, stream: BinaryIO) -> None:
        """Restore the catalog from a binary stream; raise CatalogError on bad data."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of objects."""

    @abstractmethod
    def __getitem__(self, index: int) -> CatalogObject:
        """Object at a position."""

    def __iter__(self) -> Iterator[CatalogObject]:
        return (self[index] for index in range(len(self)))


class CatalogFile(Catalog):
    """A catalog stored as a regular file."""

    def __init__(self, file_path: str | os.PathLike) -> None:
        super().__init__()
        self._file_path = os.fspath(file_path)

    @property
    def file_path(self) -> str:
        """Path to the catalog file."""
        return self._file_path

    def signature(self) -> str:
        """``"size,mtime"`` of the file, or an empty string if it cannot be read."""
        if not self._file_path:
            return ""
        try:
            info = os.stat(self._file_path)
        except OSError:
            return ""
        return f"{info.st_size},{info.st_mtime_ns}"