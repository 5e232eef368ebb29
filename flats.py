"""
flats.py
Valid flat numbers for the society: listing, validation, display and
circular navigation (used by flat number pickers).

Valid ranges: 101-123, 201-223, 301-323, 401-423, 501-523
"""

from __future__ import annotations

import re

from models import FLOORS, MAX_FLAT, MIN_FLAT, UNITS_PER_FLOOR

_DECIMAL_INT = re.compile(r"[+-]?\d+", re.ASCII)


def list_valid_flats() -> list[str]:
    """
    All 115 flat numbers as strings, floor ascending then unit ascending.
    A new list is returned on every call.
    """
    return [str(floor * 100 + unit) for floor in FLOORS for unit in range(1, UNITS_PER_FLOOR + 1)]


def _to_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if _DECIMAL_INT.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # past the interpreter's digit limit for int()
                return None
    return None


def is_valid_flat_number(value: str | int) -> bool:
    """
    Strings must be decimal integers (surrounding whitespace allowed), so
    "101.0" is rejected while the float 101.0 is accepted.
    """
    num = _to_int(value)
    if num is None:
        return False
    if num < MIN_FLAT or num > MAX_FLAT:
        return False
    floor, unit = divmod(num, 100)
    # 124, 199, 224 ... sit inside 101-523 but are not flats
    return floor in FLOORS and 1 <= unit <= UNITS_PER_FLOOR


def format_flat_number(value: str | int) -> str:
    return f"Flat {value}"


def next_flat_number(current: str) -> str:
    """
    Flat after `current` in canonical order, wrapping from 523 to 101.
    Empty or invalid input starts at the first flat.
    """
    flats = list_valid_flats()
    if not current or not is_valid_flat_number(current):
        return flats[0]
    idx = flats.index(str(_to_int(current)))
    return flats[(idx + 1) % len(flats)]


def previous_flat_number(current: str) -> str:
    """
    Flat before `current` in canonical order, wrapping from 101 to 523.
    Empty or invalid input starts at the last flat.
    """
    flats = list_valid_flats()
    if not current or not is_valid_flat_number(current):
        return flats[-1]
    idx = flats.index(str(_to_int(current)))
    return flats[idx - 1]
