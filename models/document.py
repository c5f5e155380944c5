"""Document class: every record plus the free-text notes."""

from typing import Any, Dict, List, Optional

from .maintenance_record import MaintenanceRecord


def chronological_key(record: MaintenanceRecord):
    """Sort by date string, then by id string."""
    date = record.date if isinstance(record.date, str) else ""
    record_id = record.id if isinstance(record.id, str) else ""
    return (date, record_id)


def sort_chronological(records: List[MaintenanceRecord]) -> List[MaintenanceRecord]:
    return sorted(records, key=chronological_key)


class Document:
    """
    The full persisted unit of state.

    `entries` keeps storage (insertion) order. Readers that need display
    order use `sorted_entries()`, which is recomputed on every call.
    """

    def __init__(
        self,
        entries: Optional[List[MaintenanceRecord]] = None,
        notes: str = "",
    ):
        self.entries = entries or []
        self.notes = notes

    def sorted_entries(self) -> List[MaintenanceRecord]:
        return sort_chronological(self.entries)

    def find_index(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self.entries):
            if record.id == record_id:
                return index
        return None

    def get(self, record_id: str) -> Optional[MaintenanceRecord]:
        index = self.find_index(record_id)
        return self.entries[index] if index is not None else None

    def to_dict(self, sort: bool = False) -> Dict[str, Any]:
        entries = self.sorted_entries() if sort else self.entries
        return {
            "entries": [record.to_dict() for record in entries],
            "notes": self.notes,
        }
