"""
RecordStore: create, update, delete and list maintenance records.

Every operation reads the whole document, applies one change and writes
the whole document back. There is no locking: if two callers overlap,
the later save wins and the earlier change is lost.
"""

import logging
import secrets
import string
import time
from pathlib import Path
from typing import Callable, List, Tuple, Union

from .calculations import summarize
from .document import Document
from .errors import InvalidNotes, NotFound
from .loader import load_document, save_document
from .maintenance_record import MaintenanceRecord, RecordFields

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def make_id() -> str:
    """Millisecond timestamp in base 36 followed by 6 random base-36 chars."""
    stamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return stamp + suffix


class RecordStore:
    """Maintenance records and notes backed by a JSON document file."""

    def __init__(
        self,
        filename: Union[str, Path],
        id_factory: Callable[[], str] = make_id,
    ):
        self.filename = Path(filename)
        self.id_factory = id_factory

    def load(self) -> Document:
        return load_document(self.filename)

    def save(self, document: Document) -> None:
        save_document(self.filename, document)

    def mutate(self, change: Callable[[Document], None]) -> Document:
        """
        Load, apply `change` and save.

        If `change` raises, nothing is written.
        """
        document = self.load()
        change(document)
        self.save(document)
        return document

    def document(self) -> Document:
        """Current document with entries in chronological order."""
        document = self.load()
        document.entries = document.sorted_entries()
        return document

    def list(self) -> List[MaintenanceRecord]:
        return self.load().sorted_entries()

    def stats(self) -> dict:
        return summarize(self.load().entries)

    def _add(self, fields: RecordFields) -> Tuple[MaintenanceRecord, Document]:
        try:
            date, maintenance, mileage, cost = fields.normalize()
        except ValueError as e:
            logger.info("Rejected new entry: %s", e)
            raise
        record = MaintenanceRecord(self.id_factory(), date, maintenance, cost, mileage)

        document = self.mutate(lambda doc: doc.entries.append(record))
        logger.info("Created entry %s", record.id)
        document.entries = document.sorted_entries()
        return record, document

    def create(self, fields: RecordFields) -> Document:
        """Add a record with a fresh id and return the re-sorted document."""
        return self._add(fields)[1]

    def create_record(self, fields: RecordFields) -> MaintenanceRecord:
        """Add a record with a fresh id and return just that record."""
        return self._add(fields)[0]

    def update(self, record_id: str, fields: RecordFields) -> Document:
        """Replace every field of a record except its id."""
        try:
            date, maintenance, mileage, cost = fields.normalize()
        except ValueError as e:
            logger.info("Rejected update of entry %s: %s", record_id, e)
            raise

        def replace(document: Document) -> None:
            index = document.find_index(record_id)
            if index is None:
                logger.info("Update of unknown entry %s", record_id)
                raise NotFound(record_id)
            document.entries[index] = MaintenanceRecord(
                record_id, date, maintenance, cost, mileage
            )

        document = self.mutate(replace)
        logger.info("Updated entry %s", record_id)
        document.entries = document.sorted_entries()
        return document

    def delete(self, record_id: str) -> Document:
        def remove(document: Document) -> None:
            index = document.find_index(record_id)
            if index is None:
                logger.info("Delete of unknown entry %s", record_id)
                raise NotFound(record_id)
            del document.entries[index]

        document = self.mutate(remove)
        logger.info("Deleted entry %s", record_id)
        document.entries = document.sorted_entries()
        return document

    def set_notes(self, text) -> None:
        if not isinstance(text, str):
            raise InvalidNotes()

        def assign(document: Document) -> None:
            document.notes = text

        self.mutate(assign)
        logger.info("Saved notes (%d characters)", len(text))
