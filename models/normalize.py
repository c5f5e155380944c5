"""
Value normalization for incoming record fields.

Raw values arrive from JSON bodies, form fields or the command line and
may be any type. Each function either returns the canonical value or
raises the matching ValidationError. The same functions are used when
creating and when updating a record.
"""

import math
import re
from typing import Any, Optional

from .errors import InvalidCost, InvalidDate, InvalidMaintenance, InvalidMileage

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def parse_number(raw: Any) -> Optional[float]:
    """
    Parse a loosely formatted number such as "$1,234.50" or "12,000 mi".

    Every character other than digits, "-" and "." is dropped before
    parsing. Returns None when nothing finite remains.
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    else:
        stripped = _NON_NUMERIC.sub("", str(raw))
        try:
            value = float(stripped)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


def round_half_up(value: float, places: int = 0) -> float:
    """Round halves toward positive infinity, e.g. 2.5 -> 3 and -2.5 -> -2."""
    factor = 10 ** places
    scaled = value * factor + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / factor


def is_valid_date(raw: Any) -> bool:
    """True if raw is a YYYY-MM-DD string. Calendar ranges are not checked."""
    return isinstance(raw, str) and _ISO_DATE.fullmatch(raw) is not None


def normalize_date(raw: Any) -> str:
    if not is_valid_date(raw):
        raise InvalidDate()
    return raw


def normalize_cost(raw: Any) -> float:
    """Canonical cost rounded to cents. Negative amounts (refunds) are allowed."""
    value = parse_number(raw)
    if value is None:
        raise InvalidCost()
    return round_half_up(value, 2)


def is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def normalize_mileage(raw: Any) -> Optional[int]:
    """Whole-number odometer reading, or None when left blank (unknown)."""
    if is_blank(raw):
        return None
    value = parse_number(raw)
    if value is None or value < 0:
        raise InvalidMileage()
    return int(round_half_up(value))


def normalize_maintenance_text(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidMaintenance()
    return raw.strip()
