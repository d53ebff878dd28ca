import io
import os

import pytest

from ephemerides.bsc import BSC1991Catalog
from ephemerides.catalog import (
    Catalog,
    CatalogFile,
    CatalogObject,
    ObjectType,
    parse_float,
    parse_int,
)
from ephemerides.vsx import VSXCatalog


class _Plain(CatalogObject):
    @property
    def object_type(self):
        return ObjectType.UNDEFINED


class _ListCatalog(CatalogFile):
    def __init__(self, path, items=()):
        super().__init__(path)
        self._items = list(items)

    @property
    def name(self):
        return "list"

    def open(self, cancelled=None, set_progress_max=None, set_progress_value=None):
        return bool(self._items)

    def pickle(self, stream):
        stream.write(len(self._items).to_bytes(4, "little"))

    def unpickle(self, stream):
        self._items = [_Plain(self) for _ in range(int.from_bytes(stream.read(4), "little"))]

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]


def _put(buf, start, text):
    buf[start:start + len(text)] = list(text)


def _bsc_line():
    buf = [" "] * 114
    _put(buf, 0, "   1")
    _put(buf, 25, "   123")
    _put(buf, 75, "00")
    _put(buf, 77, "05")
    _put(buf, 79, "09.9")
    buf[83] = "+"
    _put(buf, 84, "45")
    _put(buf, 86, "13")
    _put(buf, 88, "45")
    _put(buf, 102, "  6.70")
    return "".join(buf)


def _vsx_line():
    buf = [" "] * 152
    _put(buf, 0, "1547583")
    _put(buf, 8, "ZTF J000000.14+721413.7")
    buf[39] = "0"
    _put(buf, 43, "0.00061")
    _put(buf, 51, "+72.23716")
    _put(buf, 61, "EW")
    _put(buf, 124, "2458388.7556")
    _put(buf, 143, "0.2991500")
    return "".join(buf)


@pytest.mark.parametrize(
    "line, start, length, expected",
    [
        ("  12abc", 0, 7, 12),
        ("x-5", 1, 2, -5),
        ("12345", 0, 3, 123),
        ("12", 0, 10, 12),
        ("+7", 0, 2, 7),
    ],
)
def test_parse_int_values(line, start, length, expected):
    assert parse_int(line, start, length) == expected


@pytest.mark.parametrize("line, start, length", [("abc", 0, 3), ("   ", 0, 3), ("12", 5, 2), ("+", 0, 1)])
def test_parse_int_missing(line, start, length):
    assert parse_int(line, start, length) is None


def test_parse_int_clamps_to_32_bits():
    assert parse_int("99999999999", 0, 11) == 2**31 - 1


@pytest.mark.parametrize(
    "line, start, length, expected",
    [
        ("  6.70 ", 0, 7, 6.70),
        ("12.3+45", 0, 7, 12.3),
        ("1e5", 0, 3, 100000.0),
        ("1e", 0, 2, 1.0),
        (".5", 0, 2, 0.5),
        ("-3.25xyz", 0, 8, -3.25),
    ],
)
def test_parse_float_values(line, start, length, expected):
    assert parse_float(line, start, length) == pytest.approx(expected)


@pytest.mark.parametrize("line", ["", "   ", "abc", "."])
def test_parse_float_missing(line):
    assert parse_float(line, 0, 5) is None


def test_parse_stops_at_nul():
    assert parse_int("1\x002", 0, 3) == 1


def test_catalog_object_defaults(tmp_path):
    path = tmp_path / "catalog"
    path.write_bytes((_bsc_line() + "\n").encode("latin-1"))
    cat = BSC1991Catalog(path)
    assert cat.open() is True
    obj = cat[0]
    assert obj.catalog is cat
    assert obj.remarks == ""


def test_variable_star_type(tmp_path):
    path = tmp_path / "vsx.dat"
    path.write_bytes((_vsx_line() + "\n").encode("latin-1"))
    cat = VSXCatalog(path)
    assert cat.open() is True
    assert cat[0].object_type is ObjectType.VARIABLE_STAR


def test_catalog_defaults():
    cat = BSC1991Catalog("path.dat")
    assert cat.user is False
    assert cat.error_message == ""
    assert cat.file_path == "path.dat"


def test_default_iteration_matches_indexing():
    cat = _ListCatalog("x")
    cat.unpickle(io.BytesIO((3).to_bytes(4, "little")))
    items = list(Catalog.__iter__(cat))
    assert items == [cat[0], cat[1], cat[2]]
    assert list(cat) == items


def test_signature_of_missing_file(tmp_path):
    assert BSC1991Catalog(tmp_path / "none.dat").signature() == ""


def test_signature_of_empty_path():
    assert BSC1991Catalog("").signature() == ""


def test_signature_reflects_file(tmp_path):
    path = tmp_path / "cat.dat"
    path.write_bytes(b"abcde")
    cat = BSC1991Catalog(path)
    first = cat.signature()
    assert first.startswith(f"{os.path.getsize(path)},")
    path.write_bytes(b"abcdefgh")
    os.utime(path, ns=(1, 1))
    second = cat.signature()
    assert second == f"{os.path.getsize(path)},1"
    assert second != first