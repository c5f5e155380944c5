"""
Page layout for the printable maintenance report.

The layout is computed as a plan of pages, each holding positioned draw
operations, before anything is rendered. A single cursor walks down the
current page; before anything is placed it checks the remaining room and
starts a new page when needed. It never moves back up, so content that
has been placed is never reflowed.

Positions are in points measured from the top-left corner of the page.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Union

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth

from models import Document, InvalidCost, is_valid_date, normalize_cost, parse_number
from models.normalize import round_half_up

PAGE_WIDTH, PAGE_HEIGHT = LETTER
MARGIN = 40
PAGE_TOP = MARGIN
PAGE_BOTTOM = PAGE_HEIGHT - MARGIN
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

# Header region (page one only)
LOGO_HEIGHT = 36
LOGO_WIDTH = 80
LOGO_GAP = 12
TITLE_SIZE = 18
GENERATED_SIZE = 10
GENERATED_OFFSET = 30
TABLE_TOP = PAGE_TOP + LOGO_HEIGHT + 18

# Table
COL_DATE = 110
COL_MILEAGE = 90
COL_COST = 90
COL_DESCRIPTION = CONTENT_WIDTH - COL_DATE - COL_MILEAGE - COL_COST
CELL_PAD_X = 6
CELL_PAD_Y = 6
CELL_SIZE = 10
HEADER_ROW_HEIGHT = 18
ROW_HEIGHT = 20
ROW_BOTTOM_BUFFER = 10
HEADER_LABELS = ("Date", "Maintenance / Mod", "Mileage", "Cost")

# Total line
TOTAL_GAP = 12
TOTAL_SIZE = 12

# Notes section
NOTES_HEADING = "Additional Mods:"
NOTES_GAP = 43
NOTES_MIN_SPACE = 100
NOTES_HEADING_SIZE = 12
NOTES_HEADING_GAP = 7
BULLET = "•"
BULLET_SIZE = 10
BULLET_LINE_HEIGHT = BULLET_SIZE * 1.2 + 3
BULLET_BOTTOM_BUFFER = 5

BLACK = "#000000"
GREY = "#666666"
NOTE_COLOR = "#333333"
HEADER_FILL = "#eaeaea"
ROW_BORDER = "#dddddd"


@dataclass
class Text:
    text: str
    x: float
    y: float
    role: str
    font: str = FONT
    size: float = CELL_SIZE
    color: str = BLACK
    width: Optional[float] = None
    align: str = "left"


@dataclass
class Rect:
    x: float
    y: float
    width: float
    height: float
    role: str
    fill: Optional[str] = None
    stroke: Optional[str] = None


@dataclass
class Image:
    path: Path
    x: float
    y: float
    width: float
    height: float
    role: str = "logo"


@dataclass
class Page:
    number: int
    items: list = field(default_factory=list)

    def texts(self, role: Optional[str] = None) -> List[Text]:
        return [
            item for item in self.items
            if isinstance(item, Text) and (role is None or item.role == role)
        ]

    def rects(self, role: Optional[str] = None) -> List[Rect]:
        return [
            item for item in self.items
            if isinstance(item, Rect) and (role is None or item.role == role)
        ]


@dataclass
class ReportLayout:
    title: str
    pages: List[Page] = field(default_factory=list)
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT

    def add_page(self) -> Page:
        page = Page(number=len(self.pages) + 1)
        self.pages.append(page)
        return page

    def texts(self, role: Optional[str] = None) -> List[Text]:
        return [text for page in self.pages for text in page.texts(role)]


class Cursor:
    """Current page and vertical position; only ever moves forward."""

    def __init__(self, layout: ReportLayout):
        self.layout = layout
        self.page = layout.add_page()
        self.y = PAGE_TOP

    @property
    def remaining(self) -> float:
        return PAGE_BOTTOM - self.y

    @property
    def at_top(self) -> bool:
        return self.y <= PAGE_TOP

    def fits(self, height: float, buffer: float = 0) -> bool:
        return self.y + height + buffer <= PAGE_BOTTOM

    def new_page(self) -> None:
        self.page = self.layout.add_page()
        self.y = PAGE_TOP

    def place(self, item) -> None:
        self.page.items.append(item)

    def advance(self, height: float) -> None:
        self.y += height


# =============================================================================
# Cell formatting
# =============================================================================


def format_report_date(value: Any) -> str:
    """YYYY-MM-DD becomes MM/DD/YYYY; anything else is shown unchanged."""
    if value is None:
        return ""
    if not is_valid_date(value):
        return str(value)
    yyyy, mm, dd = value.split("-")
    return f"{mm}/{dd}/{yyyy}"


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def safe_cost(value: Any) -> float:
    """Stored cost re-normalized; unusable values count as 0."""
    try:
        return normalize_cost(value)
    except InvalidCost:
        return 0.0


def mileage_cell(value: Any) -> str:
    """Whole miles, or an empty cell when the reading is missing or unusable."""
    miles = parse_number(value)
    if miles is None:
        return ""
    return str(int(round_half_up(miles)))


def fit_text(text: str, font: str, size: float, width: float) -> str:
    """Cut text down with a trailing ellipsis until it fits `width`."""
    if stringWidth(text, font, size) <= width:
        return text
    ellipsis = "…"
    while text and stringWidth(text + ellipsis, font, size) > width:
        text = text[:-1]
    return text.rstrip() + ellipsis


# =============================================================================
# Layout
# =============================================================================


class ReportBuilder:
    """Lays out the header, the record table, the total and the notes."""

    def __init__(
        self,
        title: str,
        generated_at: datetime,
        logo_path: Optional[Union[str, Path]] = None,
    ):
        self.title = title
        self.generated_at = generated_at
        self.logo_path = Path(logo_path) if logo_path else None
        self.layout = ReportLayout(title=title)
        self.cursor = Cursor(self.layout)
        self.total = 0.0

    def build(self, document: Document) -> ReportLayout:
        self._draw_title_block()
        self._draw_column_header()
        for record in document.sorted_entries():
            self._draw_record(record)
        self._draw_total()
        self._draw_notes(document.notes or "")
        return self.layout

    def _draw_title_block(self) -> None:
        cursor = self.cursor
        title_x = MARGIN
        if self.logo_path is not None and self.logo_path.is_file():
            cursor.place(Image(self.logo_path, MARGIN, PAGE_TOP, LOGO_WIDTH, LOGO_HEIGHT))
            title_x = MARGIN + LOGO_WIDTH + LOGO_GAP

        width = PAGE_WIDTH - MARGIN - title_x
        cursor.place(Text(
            fit_text(self.title, FONT_BOLD, TITLE_SIZE, width),
            title_x, PAGE_TOP, "title",
            font=FONT_BOLD, size=TITLE_SIZE, width=width,
        ))
        stamp = self.generated_at.strftime("%m/%d/%Y, %I:%M:%S %p")
        cursor.place(Text(
            f"Generated: {stamp}",
            title_x, PAGE_TOP + GENERATED_OFFSET, "generated",
            size=GENERATED_SIZE, color=GREY, width=width,
        ))
        cursor.y = TABLE_TOP

    def _draw_cells(self, cells, role: str, font: str) -> None:
        y = self.cursor.y + CELL_PAD_Y
        x = MARGIN
        widths = (COL_DATE, COL_DESCRIPTION, COL_MILEAGE, COL_COST)
        aligns = ("left", "left", "right", "right")
        for text, width, align in zip(cells, widths, aligns):
            inner = width - 2 * CELL_PAD_X
            self.cursor.place(Text(
                fit_text(text, font, CELL_SIZE, inner),
                x + CELL_PAD_X, y, role,
                font=font, width=inner, align=align,
            ))
            x += width

    def _draw_column_header(self) -> None:
        cursor = self.cursor
        cursor.place(Rect(
            MARGIN, cursor.y, CONTENT_WIDTH, HEADER_ROW_HEIGHT, "header_row",
            fill=HEADER_FILL,
        ))
        self._draw_cells(HEADER_LABELS, "header_cell", FONT_BOLD)
        cursor.advance(HEADER_ROW_HEIGHT)

    def _draw_record(self, record) -> None:
        cursor = self.cursor
        if not cursor.fits(ROW_HEIGHT, ROW_BOTTOM_BUFFER):
            cursor.new_page()
            self._draw_column_header()

        cost = safe_cost(record.cost)
        self.total += cost
        description = record.maintenance if record.maintenance is not None else ""
        cursor.place(Rect(
            MARGIN, cursor.y, CONTENT_WIDTH, ROW_HEIGHT, "row", stroke=ROW_BORDER,
        ))
        self._draw_cells(
            (
                format_report_date(record.date),
                str(description),
                mileage_cell(record.mileage),
                format_money(cost),
            ),
            "cell",
            FONT,
        )
        cursor.advance(ROW_HEIGHT)

    def _draw_total(self) -> None:
        cursor = self.cursor
        height = TOTAL_SIZE * 1.2
        cursor.advance(TOTAL_GAP)
        if not cursor.fits(height):
            cursor.new_page()
        cursor.place(Text(
            f"Total Spent: {format_money(round_half_up(self.total, 2))}",
            MARGIN, cursor.y, "total",
            font=FONT_BOLD, size=TOTAL_SIZE, width=CONTENT_WIDTH, align="right",
        ))
        cursor.advance(height)

    def _draw_notes(self, notes: str) -> None:
        lines = [line.strip() for line in notes.strip().split("\n") if line.strip()]
        if not lines:
            return

        cursor = self.cursor
        cursor.advance(NOTES_GAP)
        if cursor.remaining < NOTES_MIN_SPACE:
            cursor.new_page()

        cursor.place(Text(
            NOTES_HEADING, MARGIN, cursor.y, "notes_heading",
            font=FONT_BOLD, size=NOTES_HEADING_SIZE,
        ))
        cursor.advance(NOTES_HEADING_SIZE * 1.2 + NOTES_HEADING_GAP)

        for line in lines:
            self._draw_bullet(line)

    def _draw_bullet(self, line: str) -> None:
        cursor = self.cursor
        wrapped = simpleSplit(f"{BULLET} {line}", FONT, BULLET_SIZE, CONTENT_WIDTH)
        height = len(wrapped) * BULLET_LINE_HEIGHT
        if not cursor.fits(height, BULLET_BOTTOM_BUFFER) and not cursor.at_top:
            cursor.new_page()

        # A bullet taller than a whole page continues line by line.
        for index, text in enumerate(wrapped):
            if index and not cursor.fits(BULLET_LINE_HEIGHT):
                cursor.new_page()
            cursor.place(Text(
                text, MARGIN, cursor.y, "bullet" if index == 0 else "bullet_wrap",
                size=BULLET_SIZE, color=NOTE_COLOR, width=CONTENT_WIDTH,
            ))
            cursor.advance(BULLET_LINE_HEIGHT)


def layout_report(
    document: Document,
    title: str,
    generated_at: Optional[datetime] = None,
    logo_path: Optional[Union[str, Path]] = None,
) -> ReportLayout:
    """Lay out the full report for a document."""
    builder = ReportBuilder(title, generated_at or datetime.now(), logo_path)
    return builder.build(document)
