# ephemerides

A library for planning observations of stars and variable stars. It reads
two fixed-width star catalogs and can write a parsed catalog to a binary
cache and read it back. It also holds the state that an observing session
shares between its parts and provides date and rotation helpers.

## Modules

- `ephemerides.catalog`: base classes for catalogs and their objects
  (`Catalog`, `CatalogFile`, `CatalogObject`, `StellarObject`,
  `VariableStar`, `ObjectType`). It also has the fixed-width field parsers
  `parse_int` and `parse_float`, which return `None` when a field holds no
  number. `CatalogFile.signature()` returns `"size,mtime"` of the file,
  or an empty string when the file cannot be read.
- `ephemerides.bsc`: `BSC1991Catalog` reads the Bright Star Catalog 1991
  file into `BSCStar` objects. Each star has its BS and HD numbers,
  coordinates and visual magnitude.
- `ephemerides.vsx`: `VSXCatalog` reads the Variable Star Index data file
  into `VSXVariableStar` objects. Each star has its OID, designation,
  coordinates, epoch and period.
- `ephemerides.shared`: `SharedData` holds the selected local time, the
  observer's `GeoCoordinates`, the target's `EquCoordinates` and the
  twilight elevation. It calls the callbacks on its `Signal`s
  (`date_time_changed`, `geo_location_changed`, `equ_location_changed`)
  when a value changes.
- `ephemerides.quaternion`: `Quaternion` supports rotations, Euler angles,
  axis and angle, and rotation matrices.
- `ephemerides.utils`: `to_julian_date`, `from_julian_date`, `from_utc`,
  `compass_point_name` with `CompassPoint`, `event_type_short_caption`
  with `EventType`, and the `"type:suffix"` identifiers `create_unique_id`
  and `parse_unique_id`.
- `ephemerides.config`: `load_json` and `save_json` read and write JSON
  documents and raise `ConfigError` on failure. Typed getters
  (`get_int`, `get_bool`, `get_real`, `get_string`, `get_map`,
  `get_list`) and `set_value` work on the loaded objects.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

Reading a catalog and caching it:

```python
import io
from ephemerides.bsc import BSC1991Catalog

catalog = BSC1991Catalog("catalog")
if catalog.open(lambda: False, lambda maximum: None, lambda value: None):
    for star in catalog:
        print(star.bs_num, star.coords, star.vmag)

cache = io.BytesIO()
catalog.pickle(cache)
cache.seek(0)
restored = BSC1991Catalog("catalog")
restored.unpickle(cache)   # raises CatalogError on damaged data
```

`open()` raises `CatalogError` when the file cannot be read. It returns
`False` when no object was loaded or when the `cancelled` callback stopped
the load. The callbacks may also be left out.

Dates and compass points:

```python
from datetime import datetime, timezone
from ephemerides.utils import to_julian_date, from_julian_date, compass_point_name, CompassPoint

jd = to_julian_date(datetime(2023, 1, 1, tzinfo=timezone.utc))   # 2459945.5
print(from_julian_date(jd))                  # local time, or None out of range
print(compass_point_name(CompassPoint.SSW))  # "SSW"
```

## What it does not do

The package is a library only. It installs no command and has no graphical
interface. It does not find data directories on its own. It does not keep a
list of the catalogs to load, and it does not manage a cache directory or a
catalog index. It does not load catalogs on a worker thread. To cache a
catalog, the caller passes a stream to `pickle()` and `unpickle()` and uses
`signature()` to notice when the source file has changed.