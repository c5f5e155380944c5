"""Derived statistics over maintenance records."""

import math
import re
from typing import Iterable, List, Optional

from .maintenance_record import MaintenanceRecord
from .normalize import round_half_up

OIL_CHANGE_PATTERN = re.compile(r"oil\s*change", re.IGNORECASE)


def _finite_number(value) -> Optional[float]:
    """Return value as a float if it is a real, finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def total_spent(records: Iterable[MaintenanceRecord]) -> float:
    """Sum of all costs; anything that is not a finite number counts as 0."""
    total = 0.0
    for record in records:
        total += _finite_number(record.cost) or 0.0
    return total


def entry_count(records: Iterable[MaintenanceRecord]) -> int:
    return sum(1 for _ in records)


def is_oil_change(text) -> bool:
    """Match "oil change", "Oil Change + filter", "oilchange", etc."""
    return isinstance(text, str) and OIL_CHANGE_PATTERN.search(text) is not None


def average_oil_change_interval(
    records: Iterable[MaintenanceRecord],
) -> Optional[int]:
    """
    Average miles between oil changes.

    Only records that look like oil changes and carry a mileage count.
    They are ordered by mileage and consecutive differences taken;
    zero or negative differences (repeated or out-of-order readings) are
    dropped. Returns None when there is no data to average.
    """
    readings: List[float] = []
    for record in records:
        miles = _finite_number(record.mileage)
        if miles is not None and is_oil_change(record.maintenance):
            readings.append(miles)

    if len(readings) < 2:
        return None

    readings.sort()
    deltas = [b - a for a, b in zip(readings, readings[1:]) if b - a > 0]
    if not deltas:
        return None
    mean = sum(deltas) / len(deltas)
    if not math.isfinite(mean):
        return None
    return int(round_half_up(mean))


def summarize(records: List[MaintenanceRecord]) -> dict:
    """Statistics shown alongside the record list."""
    return {
        "totalSpent": round_half_up(total_spent(records), 2),
        "entryCount": entry_count(records),
        "averageOilChangeInterval": average_oil_change_interval(records),
    }
