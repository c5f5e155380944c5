"""JSON loading and saving utilities for the maintenance document."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from .document import Document
from .errors import PersistenceFailure
from .maintenance_record import MaintenanceRecord

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT: Dict[str, Any] = {"entries": [], "notes": ""}


def _ensure_file(filename: Path) -> None:
    """Create the data directory and an empty document if none exists yet."""
    if filename.exists():
        return
    filename.parent.mkdir(parents=True, exist_ok=True)
    _write_json(filename, EMPTY_DOCUMENT)
    logger.info("Created empty document at %s", filename)


def _write_json(filename: Path, data: Any) -> None:
    """Write to a temporary sibling and move it into place."""
    fd, tmp_name = tempfile.mkstemp(
        dir=str(filename.parent), prefix=f".{filename.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fp:
            json.dump(data, fp, indent=2, ensure_ascii=False)
            fp.write("\n")
        os.replace(tmp_name, filename)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def parse_document(data: Any) -> Document:
    """
    Convert parsed JSON into a Document.

    Accepts the current `{"entries": [...], "notes": "..."}` shape and the
    older bare list of entries. Stored values are not re-validated.
    """
    if isinstance(data, list):
        raw_entries, notes = data, ""
    elif isinstance(data, dict):
        raw_entries = data.get("entries")
        notes = data.get("notes")
        if not isinstance(raw_entries, list):
            raw_entries = []
        if not isinstance(notes, str):
            notes = ""
    else:
        raw_entries, notes = [], ""

    entries = []
    for raw in raw_entries:
        if not isinstance(raw, dict):
            logger.warning("Skipping stored entry that is not an object: %r", raw)
            continue
        entries.append(MaintenanceRecord.from_dict(raw))
    return Document(entries, notes)


def load_document(filename: Union[str, Path]) -> Document:
    """Load the document, creating an empty one on first use."""
    path = Path(filename)
    try:
        _ensure_file(path)
        with open(path, "r", encoding="utf-8") as fp:
            data = json.load(fp)
    except (OSError, ValueError) as e:
        logger.error("Failed to read document %s: %s", path, e)
        raise PersistenceFailure(f"Could not read {path}: {e}") from e
    return parse_document(data)


def save_document(filename: Union[str, Path], document: Document) -> None:
    """Write the whole document back to disk."""
    path = Path(filename)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_json(path, document.to_dict())
    except (OSError, TypeError, ValueError) as e:
        logger.error("Failed to write document %s: %s", path, e)
        raise PersistenceFailure(f"Could not write {path}: {e}") from e
