"""Reading, writing and querying JSON configuration documents."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from typing import Any

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or written."""


def load_json(file_path: str | os.PathLike) -> dict | list:
    """Load a JSON document (an object or an array) from a file."""
    try:
        with open(file_path, "rb") as stream:
            data = stream.read()
    except OSError as exc:
        raise ConfigError(
            f"Failed to open the file: {os.path.normpath(os.fspath(file_path))}"
        ) from exc
    try:
        document = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(str(exc)) from exc
    if not isinstance(document, (dict, list)):
        raise ConfigError("The document must hold an object or an array")
    return document


def save_json(document: dict | list, file_path: str | os.PathLike) -> None:
    """Write a JSON document to a file, replacing its content."""
    text = json.dumps(document, indent=4, ensure_ascii=False) + "\n"
    try:
        with open(file_path, "w", encoding="utf-8") as stream:
            stream.write(text)
    except OSError as exc:
        raise ConfigError(
            f"Failed to create the file: {os.path.normpath(os.fspath(file_path))}"
        ) from exc


def set_value(obj: dict, name: str, value: Any) -> None:
    """Store an integer, a string, a list of strings or a map of flags."""
    if isinstance(value, Mapping):
        obj[name] = {str(key): bool(value[key]) for key in sorted(value)}
    elif isinstance(value, str):
        obj[name] = value
    elif isinstance(value, int):
        obj[name] = int(value)
    elif isinstance(value, Sequence):
        obj[name] = [str(item) for item in value]
    else:
        raise TypeError(f"Unsupported configuration value type: {type(value).__name__}")


def get_int(obj: Mapping, name: str, default: int = 0) -> int:
    """Integer stored under *name*, or *default* if absent or not an integer."""
    value = obj.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float):
        if not value.is_integer():
            return default
        value = int(value)
    if not _INT_MIN <= value <= _INT_MAX:
        return default
    return value


def get_bool(obj: Mapping, name: str, default: bool = False) -> bool:
    """Boolean stored under *name*, or *default*."""
    value = obj.get(name)
    return value if isinstance(value, bool) else default


def get_real(obj: Mapping, name: str, default: float = 0.0) -> float:
    """Number stored under *name*, or *default*."""
    value = obj.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return float(value)


def get_string(obj: Mapping, name: str, default: str = "") -> str:
    """String stored under *name*, or *default*."""
    value = obj.get(name)
    return value if isinstance(value, str) else default


def get_map(obj: Mapping, name: str) -> dict[str, bool]:
    """Boolean members of the object stored under *name*."""
    value = obj.get(name)
    if not isinstance(value, Mapping):
        return {}
    return {key: item for key, item in value.items() if isinstance(item, bool)}


def get_list(obj: Mapping, name: str, skip_empty: bool = True) -> list[str]:
    """Strings of the array stored under *name*; non-strings read as empty."""
    value = obj.get(name)
    if not isinstance(value, list):
        return []
    items = (item if isinstance(item, str) else "" for item in value)
    return [item for item in items if not skip_empty or item]