"""Error taxonomy for maintenance log operations."""

from typing import Optional


class MaintLogError(Exception):
    """Base class for all maintenance log errors."""


class ValidationError(MaintLogError, ValueError):
    """A field value was rejected before any change was made."""

    field: Optional[str] = None
    default_message = "Invalid value."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidDate(ValidationError):
    field = "date"
    default_message = "Invalid date. Use YYYY-MM-DD."


class InvalidMaintenance(ValidationError):
    field = "maintenance"
    default_message = "Maintenance is required."


class InvalidMileage(ValidationError):
    field = "mileage"
    default_message = "Mileage must be a non-negative number (or blank)."


class InvalidCost(ValidationError):
    field = "cost"
    default_message = "Cost must be a number."


class InvalidNotes(ValidationError):
    field = "notes"
    default_message = "Notes must be a string."


class NotFound(MaintLogError, LookupError):
    """No record has the requested id."""

    message = "Entry not found."

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"{self.message} ({record_id})")


class PersistenceFailure(MaintLogError):
    """The document could not be read from or written to storage."""
