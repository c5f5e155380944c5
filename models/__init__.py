"""
Vehicle maintenance log models.

This package provides the data model and storage for the maintenance log:
- MaintenanceRecord: A dated service or modification with its cost
- RecordFields: Raw, untrusted field values for a create or update
- Document: All records plus free-text notes
- RecordStore: Load/change/save operations on the stored document
- Normalizers for dates, costs, mileage and descriptions
- Statistics: total spend, entry count, oil change interval
"""

from .errors import (
    MaintLogError,
    ValidationError,
    InvalidDate,
    InvalidMaintenance,
    InvalidMileage,
    InvalidCost,
    InvalidNotes,
    NotFound,
    PersistenceFailure,
)
from .normalize import (
    is_valid_date,
    normalize_cost,
    normalize_mileage,
    normalize_maintenance_text,
    parse_number,
)
from .maintenance_record import MaintenanceRecord, RecordFields
from .document import Document, sort_chronological
from .calculations import (
    total_spent,
    entry_count,
    average_oil_change_interval,
    summarize,
)
from .loader import load_document, save_document, parse_document
from .store import RecordStore, make_id

__all__ = [
    "MaintLogError",
    "ValidationError",
    "InvalidDate",
    "InvalidMaintenance",
    "InvalidMileage",
    "InvalidCost",
    "InvalidNotes",
    "NotFound",
    "PersistenceFailure",
    "is_valid_date",
    "normalize_cost",
    "normalize_mileage",
    "normalize_maintenance_text",
    "parse_number",
    "MaintenanceRecord",
    "RecordFields",
    "Document",
    "sort_chronological",
    "total_spent",
    "entry_count",
    "average_oil_change_interval",
    "summarize",
    "load_document",
    "save_document",
    "parse_document",
    "RecordStore",
    "make_id",
]
