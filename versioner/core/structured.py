"""Helpers for reading untyped JSON/TOML data.

Manifests, remote documents and config files all arrive as ``object``;
these narrow them to string-keyed mappings and clean string values.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path
from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing, not a str, or empty after stripping.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_raw_str(table: Mapping[str, object], key: str) -> str | None:
    """Like ``get_str`` but returns the value unstripped (blank is still None)."""
    value = table.get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def get_path(table: Mapping[str, object], key: str) -> Path | None:
    """Get a filesystem path given as a str or any ``os.PathLike``."""
    value = table.get(key)
    if isinstance(value, PathLike):
        return Path(value)
    if isinstance(value, str) and value.strip():
        return Path(value.strip())
    return None


def get_float(table: Mapping[str, object], key: str) -> float | None:
    """Get a positive number from a mapping (ints are accepted)."""
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if value <= 0:
        return None
    return float(value)


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping."""
    return as_str_dict(table.get(key))


def clean_str(value: str | None) -> str | None:
    """Strip a possibly-missing string; empty becomes None."""
    if value is None:
        return None
    s = value.strip()
    return s or None
