#!/usr/bin/env python3
"""
Unified CLI for the vehicle maintenance log.

Commands:
  list    - Show every entry in chronological order
  add     - Add a new entry
  edit    - Replace the fields of an existing entry
  delete  - Remove an entry
  notes   - Show or replace the free-text notes
  stats   - Show total spend and average oil change interval
  report  - Write the printable PDF report
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from config import load_settings
from models import (
    MaintenanceRecord,
    MaintLogError,
    NotFound,
    RecordFields,
    RecordStore,
    ValidationError,
    parse_number,
)
from report import build_report

# =============================================================================
# Formatting helpers
# =============================================================================


def format_miles(miles) -> str:
    """Format mileage for display; unusable stored values show as a dash."""
    value = parse_number(miles)
    return f"{value:,.0f}" if value is not None else "-"


def format_cost(cost) -> str:
    """Format cost for display; unusable stored values show as a dash."""
    value = parse_number(cost)
    return f"${value:,.2f}" if value is not None else "-"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    text = str(text)
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_entry_table(entries: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert entries to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                entry.id,
                entry.date or "-",
                truncate(entry.maintenance),
                format_miles(entry.mileage),
                format_cost(entry.cost),
            ]
        )
    return rows


# =============================================================================
# Commands
# =============================================================================


def cmd_list(args, store: RecordStore):
    """Show every entry in chronological order."""
    entries = store.list()
    if args.since:
        entries = [e for e in entries if (e.date or "") >= args.since]

    if not entries:
        print("No entries yet.")
        return 0

    headers = ["ID", "Date", "Maintenance / Mod", "Mileage", "Cost"]
    print(tabulate(make_entry_table(entries), headers=headers, tablefmt="simple"))
    return 0


def _fields_from_args(args) -> RecordFields:
    return RecordFields(
        date=args.date or date.today().isoformat(),
        maintenance=args.maintenance,
        mileage=args.mileage,
        cost=args.cost,
    )


def cmd_add(args, store: RecordStore):
    """Add a new entry."""
    record = store.create_record(_fields_from_args(args))
    print(f"Added entry {record.id}.")
    return 0


def cmd_edit(args, store: RecordStore):
    """Replace every field of an existing entry."""
    store.update(args.entry_id, _fields_from_args(args))
    print(f"Updated entry {args.entry_id}.")
    return 0


def cmd_delete(args, store: RecordStore):
    """Remove an entry."""
    store.delete(args.entry_id)
    print(f"Deleted entry {args.entry_id}.")
    return 0


def cmd_notes(args, store: RecordStore):
    """Show or replace the notes."""
    if args.show or (args.text is None and args.file is None):
        notes = store.load().notes
        print(notes if notes else "(no notes)")
        return 0

    text = args.text if args.text is not None else args.file.read_text()
    store.set_notes(text)
    print("Notes saved.")
    return 0


def cmd_stats(args, store: RecordStore):
    """Show summary statistics."""
    stats = store.stats()
    avg = stats["averageOilChangeInterval"]
    rows = [
        ["Total spent", format_cost(stats["totalSpent"])],
        ["Entries", str(stats["entryCount"])],
        ["Avg oil change interval", f"~{avg:,} miles" if avg is not None else "-"],
    ]
    print(tabulate(rows, tablefmt="plain"))
    return 0


def cmd_report(args, store: RecordStore):
    """Write the PDF report."""
    settings = args.settings
    pdf = build_report(store.load(), settings.report_title, logo_path=settings.logo_path)
    output = args.output or Path(settings.report_filename)
    output.write_bytes(pdf)
    print(f"Report written to {output}")
    return 0


COMMANDS = {
    "list": cmd_list,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "notes": cmd_notes,
    "stats": cmd_stats,
    "report": cmd_report,
}


# =============================================================================
# Main
# =============================================================================


def _add_field_arguments(sub):
    sub.add_argument(
        "maintenance",
        type=str,
        help="What was done (e.g., 'Oil change + filter')",
    )
    sub.add_argument(
        "--cost",
        type=str,
        required=True,
        help="Cost of the work (e.g., 89.99 or '$1,200')",
    )
    sub.add_argument(
        "--date",
        type=str,
        help="Service date in YYYY-MM-DD format (default: today)",
    )
    sub.add_argument(
        "--mileage",
        type=str,
        help="Odometer reading at time of service",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Vehicle maintenance / mods log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s add "Oil change" --cost 65 --mileage 4000 --date 2025-03-01
  %(prog)s edit lq3k2x9abc12 "Oil change + filter" --cost 72.50
  %(prog)s delete lq3k2x9abc12
  %(prog)s notes --file mods.txt
  %(prog)s stats
  %(prog)s report -o maintenance.pdf
""",
    )
    parser.add_argument(
        "--data",
        type=Path,
        help="Path to the data file (default: from settings)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a YAML settings file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Show every entry")
    list_parser.add_argument(
        "--since", type=str, help="Show only entries since date (YYYY-MM-DD)"
    )

    add_parser = subparsers.add_parser("add", help="Add a new entry")
    _add_field_arguments(add_parser)

    edit_parser = subparsers.add_parser("edit", help="Replace an existing entry")
    edit_parser.add_argument("entry_id", type=str, help="Entry ID (see 'list')")
    _add_field_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Remove an entry")
    delete_parser.add_argument("entry_id", type=str, help="Entry ID (see 'list')")

    notes_parser = subparsers.add_parser("notes", help="Show or replace the notes")
    notes_group = notes_parser.add_mutually_exclusive_group()
    notes_group.add_argument("--text", type=str, help="New notes text")
    notes_group.add_argument("--file", type=Path, help="Read new notes from a file")
    notes_group.add_argument(
        "--show", action="store_true", help="Print the current notes (default)"
    )

    subparsers.add_parser("stats", help="Show summary statistics")

    report_parser = subparsers.add_parser("report", help="Write the PDF report")
    report_parser.add_argument(
        "-o", "--output", type=Path, help="Output file (default: from settings)"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    args.settings = load_settings(args.config)
    store = RecordStore(args.data or args.settings.data_file)

    try:
        return COMMANDS[args.command](args, store)
    except ValidationError as e:
        print(f"Error: {e.message}")
    except NotFound as e:
        print(f"Error: {e.message} ({e.record_id})")
    except MaintLogError as e:
        print(f"Error: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
