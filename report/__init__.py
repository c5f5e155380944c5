"""
Printable maintenance report.

- layout: paginated page plan (header, record table, total, notes)
- pdf: ReportLab rendering of a page plan
"""

from .layout import (
    Page,
    ReportLayout,
    format_money,
    format_report_date,
    layout_report,
)
from .pdf import PDF_CONTENT_TYPE, build_report, render_pdf

__all__ = [
    "Page",
    "ReportLayout",
    "format_money",
    "format_report_date",
    "layout_report",
    "PDF_CONTENT_TYPE",
    "build_report",
    "render_pdf",
]
