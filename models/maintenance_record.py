"""MaintenanceRecord class and the raw field set used to build one."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .normalize import (
    normalize_cost,
    normalize_date,
    normalize_maintenance_text,
    normalize_mileage,
)


class MaintenanceRecord:
    """A single service or modification performed on the vehicle."""

    def __init__(
            self,
            id: str,
            date: str,
            maintenance: str,
            cost: float,
            mileage: Optional[int] = None,
    ):
        self.id = id
        self.date = date
        self.maintenance = maintenance
        self.cost = cost
        self.mileage = mileage

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the stored form; mileage is omitted when unknown."""
        d: Dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "maintenance": self.maintenance,
        }
        if self.mileage is not None:
            d["mileage"] = self.mileage
        d["cost"] = self.cost
        return d

    @classmethod
    def from_dict(cls, dct: Mapping[str, Any]) -> "MaintenanceRecord":
        """Build from a stored dict without re-validating its values."""
        return cls(
            dct.get("id"),
            dct.get("date"),
            dct.get("maintenance"),
            dct.get("cost"),
            dct.get("mileage"),
        )

    def __eq__(self, other):
        if not isinstance(other, MaintenanceRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"MaintenanceRecord({self.to_dict()!r})"


@dataclass
class RecordFields:
    """Raw, untrusted field values for a create or update."""

    date: Any = None
    maintenance: Any = None
    mileage: Any = None
    cost: Any = None

    @classmethod
    def from_mapping(cls, dct: Any) -> "RecordFields":
        """Pick the known keys out of a request body; anything else is ignored."""
        if not isinstance(dct, Mapping):
            return cls()
        return cls(
            dct.get("date"),
            dct.get("maintenance"),
            dct.get("mileage"),
            dct.get("cost"),
        )

    def normalize(self) -> Tuple[str, str, Optional[int], float]:
        """
        Run every field through the normalizer.

        Fields are checked in order (date, maintenance, mileage, cost) and
        the first failure is raised.
        """
        date = normalize_date(self.date)
        maintenance = normalize_maintenance_text(self.maintenance)
        mileage = normalize_mileage(self.mileage)
        cost = normalize_cost(self.cost)
        return date, maintenance, mileage, cost
