"""Project data sheet (PDF) composition.

Composition is split in two steps:

1. ``build_report_layout`` is a pure function of its inputs. It measures
   text, wraps it, and places every string, rule and filled box on an
   A4 page in millimetres (origin top-left, y grows downwards). Each
   section starts where the previous one ended, so variable-height
   sections push everything below them down.
2. ``render_report`` draws a finished layout with ReportLab onto an
   invariant canvas, so equal layouts produce byte-identical PDFs.

## Section order

    header band -> project info -> customer info -> description
    -> tasks table -> materials table -> costs table -> totals

Missing optional values render as "-". Empty lists still produce their
table with the header row only.
"""

import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from projektmester.labels import (
    cost_type_label,
    project_status_label,
    task_status_label,
    unit_label,
)
from projektmester.schemas.finance import Material, Cost
from projektmester.schemas.project import Project
from projektmester.schemas.task import Task
from projektmester.services.aggregation_service import (
    compute_totals,
    cost_line_total,
    format_currency,
    format_quantity,
    material_line_total,
)

logger = logging.getLogger(__name__)

# Page geometry (mm)
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN_X = 15.0
CONTENT_WIDTH = 180.0
TOP_MARGIN = 15.0
BOTTOM_MARGIN = 15.0
RIGHT_COLUMN_X = 110.0

HEADER_BAND_HEIGHT = 40.0
LINE_HEIGHT = 5.0
DESCRIPTION_TOP = 135.0
DESCRIPTION_MARGIN = 10.0
TABLE_GAP = 15.0
TOTALS_GAP = 20.0

CELL_PADDING = 1.5
CELL_LINE_HEIGHT = 4.5
CELL_BASELINE = 3.3  # from the top of a text line to its baseline

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
BODY_SIZE = 10
CELL_SIZE = 9
SECTION_TITLE_SIZE = 14

Color = tuple[int, int, int]
PRIMARY_COLOR: Color = (79, 70, 229)
TABLE_HEAD_COLOR: Color = (51, 65, 85)
STRIPE_COLOR: Color = (245, 245, 250)
GRID_COLOR: Color = (200, 200, 200)
WHITE: Color = (255, 255, 255)
BLACK: Color = (0, 0, 0)

PLACEHOLDER = "-"
APP_NAME = "ProjektMester Management System"

# Hungarian double-acute letters are outside the Helvetica (cp1252) repertoire
_FOLD = str.maketrans({"ő": "ö", "Ő": "Ö", "ű": "ü", "Ű": "Ü"})


# --- Layout model ---


@dataclass(frozen=True)
class TextOp:
    page: int
    x: float
    y: float  # baseline
    text: str
    font: str = BODY_FONT
    size: float = BODY_SIZE
    color: Color = BLACK
    align: str = "left"  # "left" | "right"


@dataclass(frozen=True)
class LineOp:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.5
    color: Color = BLACK


@dataclass(frozen=True)
class RectOp:
    page: int
    x: float
    y: float
    width: float
    height: float
    fill: Color | None = None
    stroke: Color | None = None


@dataclass(frozen=True)
class SectionPlacement:
    name: str
    page: int
    start_y: float
    end_y: float
    # page of end_y; later than page when the section broke across pages
    end_page: int


@dataclass
class ReportLayout:
    title: str
    page_count: int = 1
    operations: list = field(default_factory=list)
    sections: list[SectionPlacement] = field(default_factory=list)

    def section(self, name: str) -> SectionPlacement:
        for placement in self.sections:
            if placement.name == name:
                return placement
        raise KeyError(name)


@dataclass(frozen=True)
class TableSpec:
    name: str
    columns: list[str]
    widths: list[float]
    rows: list[list[str]]
    head_fill: Color
    striped: bool = False
    right_aligned: tuple[int, ...] = ()


# --- Text helpers ---


def pdf_text(value) -> str:
    """Coerce a value to text Helvetica can draw; blank becomes the placeholder."""
    if value is None:
        return PLACEHOLDER
    text = str(value).strip()
    if not text:
        return PLACEHOLDER
    return text.translate(_FOLD).encode("cp1252", errors="replace").decode("cp1252")


def wrap_text(text: str, font: str, size: float, width: float) -> list[str]:
    """Wrap text to a width in mm. Explicit newlines start new lines."""
    lines: list[str] = []
    for paragraph in text.split("\n"):
        paragraph = paragraph.rstrip()
        if not paragraph:
            lines.append("")
        elif stringWidth(paragraph, font, size) <= width * mm:
            # simpleSplit would also break on no-break spaces
            lines.append(paragraph)
        else:
            lines.extend(simpleSplit(paragraph, font, size, width * mm) or [""])
    return lines or [""]


def fit_text(text: str, font: str, size: float, width: float) -> str:
    """Truncate a single line with an ellipsis so it fits a width in mm."""
    limit = width * mm
    if stringWidth(text, font, size) <= limit:
        return text
    ellipsis = "..."
    while text and stringWidth(text + ellipsis, font, size) > limit:
        text = text[:-1]
    return text.rstrip() + ellipsis


def report_filename(project_name: str) -> str:
    """'Belvarosi Lakas' -> 'Belvarosi_Lakas_adatlap.pdf'."""
    base = re.sub(r"\s+", "_", (project_name or "").strip()) or "projekt"
    return f"{base}_adatlap.pdf"


def format_generated_at(value: datetime) -> str:
    """Hungarian style timestamp: '2024. 03. 01. 10:00:00'."""
    return value.strftime("%Y. %m. %d. %H:%M:%S")


# --- Layout ---


class _LayoutBuilder:
    """Collects draw operations while tracking the current page."""

    def __init__(self, layout: ReportLayout):
        self.layout = layout
        self.page = 0

    @property
    def bottom(self) -> float:
        return PAGE_HEIGHT - BOTTOM_MARGIN

    def new_page(self) -> float:
        self.page += 1
        self.layout.page_count = self.page + 1
        return TOP_MARGIN

    def text(self, x, y, text, font=BODY_FONT, size=BODY_SIZE, color=BLACK, align="left"):
        self.layout.operations.append(TextOp(self.page, x, y, text, font, size, color, align))

    def line(self, x1, y1, x2, y2, width=0.5, color=BLACK):
        self.layout.operations.append(LineOp(self.page, x1, y1, x2, y2, width, color))

    def rect(self, x, y, width, height, fill=None, stroke=None):
        self.layout.operations.append(RectOp(self.page, x, y, width, height, fill, stroke))

    def place(self, name: str, page: int, start_y: float, end_y: float):
        self.layout.sections.append(SectionPlacement(name, page, start_y, end_y, self.page))

    def section_title(self, title: str, y: float):
        self.text(MARGIN_X, y, title, BOLD_FONT, SECTION_TITLE_SIZE)
        self.line(MARGIN_X, y + 2, MARGIN_X + CONTENT_WIDTH, y + 2)


def _cell_lines(spec: TableSpec, row: list[str], font: str) -> list[list[str]]:
    return [
        wrap_text(cell, font, CELL_SIZE, width - 2 * CELL_PADDING)
        for cell, width in zip(row, spec.widths)
    ]


def _row_height(cell_lines: list[list[str]]) -> float:
    return max(len(lines) for lines in cell_lines) * CELL_LINE_HEIGHT + 2 * CELL_PADDING


def _draw_row(b: _LayoutBuilder, spec: TableSpec, cell_lines, y: float, height: float,
              font: str, color: Color, fill: Color | None):
    if fill is not None:
        b.rect(MARGIN_X, y, CONTENT_WIDTH, height, fill=fill)
    x = MARGIN_X
    for col, (lines, width) in enumerate(zip(cell_lines, spec.widths)):
        if not spec.striped:
            b.rect(x, y, width, height, stroke=GRID_COLOR)
        right = col in spec.right_aligned
        for k, line in enumerate(lines):
            baseline = y + CELL_PADDING + CELL_BASELINE + k * CELL_LINE_HEIGHT
            if right:
                b.text(x + width - CELL_PADDING, baseline, line, font, CELL_SIZE, color, align="right")
            else:
                b.text(x + CELL_PADDING, baseline, line, font, CELL_SIZE, color)
        x += width


def _layout_table(b: _LayoutBuilder, spec: TableSpec, start_y: float) -> float:
    """Place a table starting at start_y and return the y where it ends.

    Rows grow to fit wrapped cells. A row that would cross the bottom
    margin goes to a new page and the header row is repeated there.
    """
    head_lines = _cell_lines(spec, spec.columns, BOLD_FONT)
    head_height = _row_height(head_lines)
    body = [_cell_lines(spec, [pdf_text(c) for c in row], BODY_FONT) for row in spec.rows]
    heights = [_row_height(lines) for lines in body]

    y = start_y
    first_row = heights[0] if heights else 0.0
    if y + head_height + first_row > b.bottom:
        y = b.new_page()
    start_page, table_top = b.page, y

    _draw_row(b, spec, head_lines, y, head_height, BOLD_FONT, WHITE, spec.head_fill)
    y += head_height

    for index, (lines, height) in enumerate(zip(body, heights)):
        if y + height > b.bottom:
            y = b.new_page()
            _draw_row(b, spec, head_lines, y, head_height, BOLD_FONT, WHITE, spec.head_fill)
            y += head_height
        stripe = STRIPE_COLOR if spec.striped and index % 2 == 1 else None
        _draw_row(b, spec, lines, y, height, BODY_FONT, BLACK, stripe)
        y += height

    b.place(spec.name, start_page, table_top, y)
    return y


def _task_table(tasks: list[Task]) -> TableSpec:
    return TableSpec(
        name="tasks",
        columns=["Feladat", "Statusz", "Hatarido"],
        widths=[110.0, 35.0, 35.0],
        rows=[[t.title, task_status_label(t.status), t.due_date or PLACEHOLDER] for t in tasks],
        head_fill=PRIMARY_COLOR,
        striped=True,
    )


def _material_table(materials: list[Material]) -> TableSpec:
    return TableSpec(
        name="materials",
        columns=["Anyag megnevezese", "Mennyiseg", "Egysegar", "Osszesen"],
        widths=[75.0, 35.0, 35.0, 35.0],
        rows=[
            [
                m.name,
                f"{format_quantity(m.quantity)} {unit_label(m.unit)}".strip(),
                format_currency(m.unit_price),
                format_currency(material_line_total(m)),
            ]
            for m in materials
        ],
        head_fill=TABLE_HEAD_COLOR,
        right_aligned=(2, 3),
    )


def _cost_table(costs: list[Cost]) -> TableSpec:
    return TableSpec(
        name="costs",
        columns=["Koltseg megnevezese", "Tipus", "Osszeg"],
        widths=[110.0, 35.0, 35.0],
        rows=[
            [c.description, cost_type_label(c.type), format_currency(cost_line_total(c))]
            for c in costs
        ],
        head_fill=TABLE_HEAD_COLOR,
        right_aligned=(2,),
    )


def build_report_layout(
    project: Project,
    tasks: list[Task],
    materials: list[Material],
    costs: list[Cost],
    generated_at: datetime | None = None,
) -> ReportLayout:
    """Place every element of the data sheet. Pure for a fixed generated_at."""
    if generated_at is None:
        generated_at = datetime.now()

    layout = ReportLayout(title=f"{project.name} - Projekt adatlap")
    b = _LayoutBuilder(layout)
    half_width = RIGHT_COLUMN_X - MARGIN_X - 5

    # 1. Header band
    b.rect(0, 0, PAGE_WIDTH, HEADER_BAND_HEIGHT, fill=PRIMARY_COLOR)
    b.text(MARGIN_X, 20, "PROJEKT ADATLAP", BOLD_FONT, 22, WHITE)
    b.text(MARGIN_X, 30, f"Generalva: {format_generated_at(generated_at)}", color=WHITE)
    b.text(140, 30, APP_NAME, color=WHITE)
    b.place("header", 0, 0, HEADER_BAND_HEIGHT)

    # 2. Project info
    b.section_title("Projekt Informaciok", 55)
    status = pdf_text(project_status_label(project.status))
    b.text(MARGIN_X, 65, fit_text(f"Nev: {pdf_text(project.name)}", BODY_FONT, BODY_SIZE, half_width))
    b.text(MARGIN_X, 72, fit_text(f"Statusz: {status}", BODY_FONT, BODY_SIZE, half_width))
    b.text(MARGIN_X, 79, fit_text(f"Helyszin: {pdf_text(project.location)}", BODY_FONT, BODY_SIZE, CONTENT_WIDTH))
    b.text(RIGHT_COLUMN_X, 65, f"Kezdes: {pdf_text(project.start_date)}")
    b.text(RIGHT_COLUMN_X, 72, f"Hatarido: {pdf_text(project.end_date)}")
    b.place("project_info", 0, 55, 79)

    # 3. Customer info
    b.section_title("Ugyfel Adatok", 95)
    b.text(MARGIN_X, 105, fit_text(f"Nev: {pdf_text(project.customer_name)}", BODY_FONT, BODY_SIZE, half_width))
    b.text(MARGIN_X, 112, fit_text(f"Email: {pdf_text(project.customer_email)}", BODY_FONT, BODY_SIZE, CONTENT_WIDTH))
    b.text(RIGHT_COLUMN_X, 105, fit_text(f"Telefon: {pdf_text(project.customer_phone)}", BODY_FONT, BODY_SIZE, 85))
    b.place("customer_info", 0, 95, 112)

    # 4. Description: the next section starts at start + margin + lines * line height
    b.section_title("Projekt Leiras", 125)
    description_lines = wrap_text(pdf_text(project.description), BODY_FONT, BODY_SIZE, CONTENT_WIDTH)
    y = DESCRIPTION_TOP
    for line in description_lines:
        if y > b.bottom:
            y = b.new_page() + LINE_HEIGHT
        b.text(MARGIN_X, y, line)
        y += LINE_HEIGHT
    b.place("description", 0, DESCRIPTION_TOP, y)
    y += DESCRIPTION_MARGIN

    # 5-7. Tables, each TABLE_GAP below the previous one
    y = _layout_table(b, _task_table(tasks), y)
    y = _layout_table(b, _material_table(materials), y + TABLE_GAP)
    y = _layout_table(b, _cost_table(costs), y + TABLE_GAP)

    # 8. Totals
    totals = compute_totals(materials, costs)
    y += TOTALS_GAP
    if y > b.bottom:
        y = b.new_page() + TOTALS_GAP
    b.text(MARGIN_X, y, "PROJEKT MINDOSSZESEN:", BOLD_FONT, 16)
    b.text(120, y, format_currency(totals.grand_total), BOLD_FONT, 16, PRIMARY_COLOR)
    b.place("totals", b.page, y, y)

    return layout


# --- Rendering ---


def _rgb(c: canvas.Canvas, color: Color, stroke: bool = False):
    r, g, bl = (v / 255.0 for v in color)
    if stroke:
        c.setStrokeColorRGB(r, g, bl)
    else:
        c.setFillColorRGB(r, g, bl)


def _draw(c: canvas.Canvas, op):
    if isinstance(op, RectOp):
        if op.fill is not None:
            _rgb(c, op.fill)
        if op.stroke is not None:
            _rgb(c, op.stroke, stroke=True)
            c.setLineWidth(0.2 * mm)
        c.rect(
            op.x * mm,
            (PAGE_HEIGHT - op.y - op.height) * mm,
            op.width * mm,
            op.height * mm,
            stroke=1 if op.stroke is not None else 0,
            fill=1 if op.fill is not None else 0,
        )
    elif isinstance(op, LineOp):
        _rgb(c, op.color, stroke=True)
        c.setLineWidth(op.width * mm)
        c.line(op.x1 * mm, (PAGE_HEIGHT - op.y1) * mm, op.x2 * mm, (PAGE_HEIGHT - op.y2) * mm)
    elif isinstance(op, TextOp):
        _rgb(c, op.color)
        c.setFont(op.font, op.size)
        if op.align == "right":
            c.drawRightString(op.x * mm, (PAGE_HEIGHT - op.y) * mm, op.text)
        else:
            c.drawString(op.x * mm, (PAGE_HEIGHT - op.y) * mm, op.text)


def render_report(layout: ReportLayout) -> bytes:
    """Draw a layout onto A4 pages and return the PDF bytes."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4, invariant=1)
    c.setTitle(pdf_text(layout.title))
    c.setCreator(APP_NAME)

    for page in range(layout.page_count):
        for op in layout.operations:
            if op.page == page:
                _draw(c, op)
        c.showPage()

    c.save()
    return buffer.getvalue()


def compose_report(
    project: Project,
    tasks: list[Task],
    materials: list[Material],
    costs: list[Cost],
    generated_at: datetime | None = None,
) -> bytes:
    """Build and render the project data sheet as a single PDF."""
    layout = build_report_layout(project, tasks, materials, costs, generated_at)
    pdf = render_report(layout)
    logger.info(f"Composed data sheet for project {project.id}: {layout.page_count} page(s), {len(pdf)} bytes")
    return pdf
