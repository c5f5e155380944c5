"""Render a report layout to PDF bytes with the ReportLab canvas."""

import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from reportlab.lib import colors
from reportlab.pdfbase.pdfmetrics import getAscent
from reportlab.pdfgen import canvas

from models import Document

from .layout import Image, Rect, ReportLayout, Text, layout_report

PDF_CONTENT_TYPE = "application/pdf"


def _hex(value: Optional[str], default=colors.black) -> colors.Color:
    if not value:
        return default
    return colors.HexColor("#" + str(value).lstrip("#"))


def _draw_text(canv: canvas.Canvas, item: Text, page_h: float) -> None:
    # Layout positions the top of the text; ReportLab draws on the baseline.
    baseline = page_h - item.y - getAscent(item.font, item.size)
    canv.setFont(item.font, item.size)
    canv.setFillColor(_hex(item.color))
    if item.align == "right" and item.width is not None:
        canv.drawRightString(item.x + item.width, baseline, item.text)
    else:
        canv.drawString(item.x, baseline, item.text)


def _draw_rect(canv: canvas.Canvas, item: Rect, page_h: float) -> None:
    if item.fill:
        canv.setFillColor(_hex(item.fill))
    if item.stroke:
        canv.setStrokeColor(_hex(item.stroke))
    canv.rect(
        item.x, page_h - item.y - item.height, item.width, item.height,
        stroke=1 if item.stroke else 0,
        fill=1 if item.fill else 0,
    )


def _draw_image(canv: canvas.Canvas, item: Image, page_h: float) -> None:
    canv.drawImage(
        str(item.path),
        item.x, page_h - item.y - item.height,
        width=item.width, height=item.height,
        preserveAspectRatio=True, anchor="sw", mask="auto",
    )


def render_pdf(layout: ReportLayout) -> bytes:
    """Draw every page of the layout and return the finished PDF."""
    buffer = io.BytesIO()
    canv = canvas.Canvas(buffer, pagesize=(layout.page_width, layout.page_height))
    canv.setTitle(layout.title)

    for page in layout.pages:
        for item in page.items:
            if isinstance(item, Text):
                _draw_text(canv, item, layout.page_height)
            elif isinstance(item, Rect):
                _draw_rect(canv, item, layout.page_height)
            elif isinstance(item, Image):
                _draw_image(canv, item, layout.page_height)
        canv.showPage()

    canv.save()
    return buffer.getvalue()


def build_report(
    document: Document,
    title: str,
    generated_at: Optional[datetime] = None,
    logo_path: Optional[Union[str, Path]] = None,
) -> bytes:
    """Lay out and render the report for a document."""
    return render_pdf(layout_report(document, title, generated_at, logo_path))
