"""The Bright Star Catalog (1991), used to draw overview sky charts."""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterator
from typing import BinaryIO

from .catalog import (
    CancelledFn,
    CatalogError,
    CatalogFile,
    ObjectType,
    ProgressFn,
    StellarObject,
    parse_float,
    parse_int,
)
from .shared import EquCoordinates

_MAGIC = b"BSC\0"
_HEADER = struct.Struct("<4siiiqii")
_ITEM = struct.Struct("<QQiiddd")
_PROGRESS_STEP = 10000
_MIN_LINE_LENGTH = 108
_LINE_RE = re.compile(rb"([^\r\n]*)([\r\n]*)")


class BSCStar(StellarObject):
    """A star of the Bright Star Catalog."""

    def __init__(
        self,
        catalog: BSC1991Catalog | None,
        *,
        offset: int = 0,
        length: int = 0,
        bs_num: int = 0,
        hd_num: int = 0,
        coords: EquCoordinates = EquCoordinates(),
        vmag: float = -99.9,
    ) -> None:
        super().__init__(catalog)
        self.offset = offset
        self.length = length
        self.bs_num = bs_num
        self.hd_num = hd_num
        self._coords = coords
        self._vmag = vmag

    @property
    def object_type(self) -> ObjectType:
        return ObjectType.STAR

    @property
    def coords(self) -> EquCoordinates:
        return self._coords

    @property
    def vmag(self) -> float:
        return self._vmag

    def _record(self) -> tuple:
        return (self.offset, self.length, self.bs_num, self.hd_num, self._coords, self._vmag)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BSCStar):
            return NotImplemented
        return self._record() == other._record()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"BSCStar(bs_num={self.bs_num}, hd_num={self.hd_num}, vmag={self._vmag})"


def _parse_star(catalog: BSC1991Catalog, text: str, offset: int) -> BSCStar | None:
    ra_h = parse_int(text, 75, 2)
    ra_m = parse_int(text, 77, 2)
    ra_s = parse_float(text, 79, 6)
    dec_d = parse_int(text, 84, 2)
    dec_m = parse_int(text, 86, 2)
    dec_s = parse_int(text, 88, 2)
    vmag = parse_float(text, 102, 7)
    if None in (ra_h, ra_m, ra_s, dec_d, dec_m, dec_s, vmag):
        return None
    sign = -1 if text[83] == "-" else 1
    ra = ra_h + ra_m / 60.0 + ra_s / 3600.0
    dec = sign * (dec_d + dec_m / 60.0 + dec_s / 3600.0)
    return BSCStar(
        catalog,
        offset=offset,
        length=len(text),
        bs_num=parse_int(text, 0, 4) or 0,
        hd_num=parse_int(text, 25, 6) or 0,
        coords=EquCoordinates(math.radians(ra), math.radians(dec)),
        vmag=vmag,
    )


class BSC1991Catalog(CatalogFile):
    """Reader of the Bright Star Catalog file, with a binary cache format."""

    def __init__(self, file_path) -> None:
        super().__init__(file_path)
        self._data = b""
        self._stars: list[BSCStar] = []

    @property
    def name(self) -> str:
        return "BSC 1991"

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
            if len(text) >= _MIN_LINE_LENGTH and text[83] in "+-":
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
                    star.bs_num,
                    star.hd_num,
                    star.coords.right_ascension,
                    star.coords.declination,
                    star.vmag,
                )
            )

    def unpickle(self, stream: BinaryIO) -> None:
        """Restore the catalog written by pickle(); raise CatalogError on bad data."""
        self._reset()
        header = stream.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise CatalogError("BSC1991: Error in cache file header")
        magic, count, item_size, _, data_size, _, _ = _HEADER.unpack(header)
        if magic != _MAGIC or item_size != _ITEM.size or count < 0 or data_size < 0:
            raise CatalogError("BSC1991: Error in cache file header")

        data = stream.read(data_size)
        if len(data) != data_size:
            self._data = b""
            raise CatalogError("BSC1991: Error in cache file header")
        self._data = data

        stars = []
        for _ in range(count):
            item = stream.read(_ITEM.size)
            if len(item) != _ITEM.size:
                raise CatalogError("BSC1991: Error reading cache data")
            offset, length, bs_num, hd_num, ra, dec, vmag = _ITEM.unpack(item)
            stars.append(
                BSCStar(
                    self,
                    offset=offset,
                    length=length,
                    bs_num=bs_num,
                    hd_num=hd_num,
                    coords=EquCoordinates(ra, dec),
                    vmag=vmag,
                )
            )
        self._stars = stars

    def __len__(self) -> int:
        return len(self._stars)

    def __getitem__(self, index: int) -> BSCStar:
        return self._stars[index]

    def __iter__(self) -> Iterator[BSCStar]:
        return iter(self._stars)