"""The Variable Star Index, used to compute ephemerides of variable stars."""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterator
from typing import BinaryIO

from .catalog import (
    INVALID_MAG,
    CancelledFn,
    CatalogError,
    CatalogFile,
    ProgressFn,
    VariableStar,
    parse_float,
    parse_int,
)
from .shared import EquCoordinates

_MAGIC = b"VSX\0"
_HEADER = struct.Struct("<4siiiqii")
_ITEM = struct.Struct("<QQi4xdddd")
_PROGRESS_STEP = 10000
_LINE_RE = re.compile(rb"([^\r\n]*)([\r\n]*)")


class VSXVariableStar(VariableStar):
    """A variable star of the Variable Star Index.

    The designation and the variability type are read from the catalog file
    only; they are not kept in the binary cache.
    """

    def __init__(
        self,
        catalog: VSXCatalog | None,
        *,
        offset: int = 0,
        length: int = 0,
        oid: int = 0,
        name: str = "",
        var_type: str = "",
        coords: EquCoordinates = EquCoordinates(),
        epoch: float = 0.0,
        period: float = 0.0,
    ) -> None:
        super().__init__(catalog)
        self.offset = offset
        self.length = length
        self.oid = oid
        self.var_type = var_type
        self._name = name
        self._coords = coords
        self._epoch = epoch
        self._period = period

    @property
    def coords(self) -> EquCoordinates:
        return self._coords

    @property
    def vmag(self) -> float:
        return 0.0

    @property
    def variable_name(self) -> str:
        return self._name

    @property
    def rating(self) -> int:
        return 0

    @property
    def minimum_mag(self) -> float:
        return INVALID_MAG

    @property
    def maximum_mag(self) -> float:
        return INVALID_MAG

    @property
    def period(self) -> float:
        return self._period

    @property
    def epoch(self) -> float:
        return self._epoch

    @property
    def var_type_string(self) -> str:
        return ""

    def _record(self) -> tuple:
        return (
            self.offset,
            self.length,
            self.oid,
            self._name,
            self.var_type,
            self._coords,
            self._epoch,
            self._period,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VSXVariableStar):
            return NotImplemented
        return self._record() == other._record()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"VSXVariableStar(oid={self.oid}, name={self._name.strip()!r}, "
            f"epoch={self._epoch}, period={self._period})"
        )


def _is_record_line(text: str) -> bool:
    return (
        len(text) > 144
        and text[44] == "."
        and text[54] == "."
        and text[131] == "."
        and text[144] == "."
    )


def _parse_star(catalog: VSXCatalog, text: str, offset: int) -> VSXVariableStar | None:
    oid = parse_int(text, 0, 8) or 0
    ra = parse_float(text, 41, 9)
    dec = parse_float(text, 51, 9)
    epoch = parse_float(text, 124, 12)
    period = parse_float(text, 139, 12)
    if oid <= 0 or text[39] != "0" or None in (ra, dec, epoch, period):
        return None
    return VSXVariableStar(
        catalog,
        offset=offset,
        length=len(text),
        oid=oid,
        name=text[8:38],
        var_type=text[61:91],
        coords=EquCoordinates(math.radians(ra), math.radians(dec)),
        epoch=epoch,
        period=period,
    )


class VSXCatalog(CatalogFile):
    """Reader of the VSX catalog file, with a binary cache format."""

    def __init__(self, file_path) -> None:
        super().__init__(file_path)
        self._data = b""
        self._stars: list[VSXVariableStar] = []

    @property
    def name(self) -> str:
        return "VSX"

    def _reset(self) -> None:
        self._stars = []

    def open(
        self,
        cancelled: CancelledFn | None = None,
        set_progress_max: ProgressFn | None = None,
        set_progress_value: ProgressFn | None = None,
    ) -> bool:
        """Parse the catalog file; return True if any star was loaded.

        Raises CatalogError when the file cannot be read.
        """
        self._reset()
        try:
            with open(self._file_path, "rb") as stream:
                self._data = stream.read()
        except OSError as exc:
            self._error_message = f"Failed to open the file: {self._file_path}"
            raise CatalogError(self._error_message) from exc

        if set_progress_max is not None:
            set_progress_max(len(self._data))
        content = self._data.split(b"\0", 1)[0]
        offset = 0
        for count, match in enumerate(_LINE_RE.finditer(content), start=1):
            raw, terminators = match.group(1), match.group(2)
            if not raw and not terminators:
                break
            offset += len(raw) + len(terminators)
            text = raw.decode("latin-1")
            if _is_record_line(text):
                star = _parse_star(self, text, offset)
                if star is not None:
                    self._stars.append(star)
            if count % _PROGRESS_STEP == 0:
                if cancelled is not None and cancelled():
                    self._reset()
                    break
                if set_progress_value is not None:
                    set_progress_value(offset)
        return bool(self._stars)

    def pickle(self, stream: BinaryIO) -> None:
        """Write the raw file and the parsed stars to a binary stream."""
        stream.write(
            _HEADER.pack(_MAGIC, len(self._stars), _ITEM.size, 0, len(self._data), 0, 0)
        )
        if self._data:
            stream.write(self._data)
        for star in self._stars:
            stream.write(
                _ITEM.pack(
                    star.offset,
                    star.length,
                    star.oid,
                    star.coords.right_ascension,
                    star.coords.declination,
                    star.epoch,
                    star.period,
                )
            )

    def unpickle(self, stream: BinaryIO) -> None:
        """Restore the catalog written by pickle(); raise CatalogError on bad data."""
        self._reset()
        header = stream.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise CatalogError("VSX: Error in cache file header")
        magic, count, item_size, _, data_size, _, _ = _HEADER.unpack(header)
        if magic != _MAGIC or item_size != _ITEM.size or count < 0 or data_size < 0:
            raise CatalogError("VSX: Error in cache file header")

        data = stream.read(data_size)
        if len(data) != data_size:
            self._data = b""
            raise CatalogError("VSX: Error in cache file header")
        self._data = data

        stars = []
        for _ in range(count):
            item = stream.read(_ITEM.size)
            if len(item) != _ITEM.size:
                raise CatalogError("VSX: Error reading cache data")
            offset, length, oid, ra, dec, epoch, period = _ITEM.unpack(item)
            stars.append(
                VSXVariableStar(
                    self,
                    offset=offset,
                    length=length,
                    oid=oid,
                    coords=EquCoordinates(ra, dec),
                    epoch=epoch,
                    period=period,
                )
            )
        self._stars = stars

    def __len__(self) -> int:
        return len(self._stars)

    def __getitem__(self, index: int) -> VSXVariableStar:
        return self._stars[index]

    def __iter__(self) -> Iterator[VSXVariableStar]:
        return iter(self._stars)