"""
Output surface for report rendering.

The first pass appends draw operations to pages of a Document; pages are
append-only and never revisited until footer stamping. render_pdf() paints
the finished display list with reportlab.
"""
import io
import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from reportlab.pdfgen import canvas

from services.reporting.errors import ReportGenerationError
from services.reporting.models import TextOp, ImageOp, RectOp, PhotoBlock, Box
from utils.geometry import mm_to_pt, flip_y
from utils.image_processing import ImageDecodeError
from utils.pdf_text import draw_aligned_line

logger = logging.getLogger(__name__)


@dataclass
class Page:
    index: int
    ops: list = field(default_factory=list)

    def texts(self) -> List[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]


@dataclass
class Document:
    page_width: float
    page_height: float
    pages: List[Page] = field(default_factory=list)
    blocks: List[PhotoBlock] = field(default_factory=list)
    signature_y: Optional[float] = None
    signature_box: Optional[Box] = None
    title: str = ""

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Page:
        if not self.pages:
            raise ReportGenerationError("Document has no pages")
        return self.pages[-1]

    def add_page(self) -> Page:
        page = Page(index=len(self.pages))
        self.pages.append(page)
        return page

    def draw(self, op) -> None:
        self.current_page.ops.append(op)

    def copy(self) -> "Document":
        return replace(
            self,
            pages=[Page(index=p.index, ops=list(p.ops)) for p in self.pages],
            blocks=list(self.blocks),
        )


def _paint_op(c, op, page_height: float) -> None:
    if isinstance(op, TextOp):
        c.setFillColorRGB(0, 0, 0)
        draw_aligned_line(
            c, op.text,
            mm_to_pt(op.x), flip_y(page_height, op.y),
            mm_to_pt(op.width),
            op.font_name, op.font_size,
            align=op.align, last_line=op.last_line,
        )
    elif isinstance(op, ImageOp):
        try:
            c.drawImage(
                op.image.reader(),
                mm_to_pt(op.x), flip_y(page_height, op.y, op.height),
                width=mm_to_pt(op.width), height=mm_to_pt(op.height),
                mask=op.mask,
            )
        except (ImageDecodeError, OSError) as e:
            logger.warning(f"[PDF] Skipping image {op.image.name}: {e}")
    elif isinstance(op, RectOp):
        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(mm_to_pt(op.line_width))
        c.rect(
            mm_to_pt(op.x), flip_y(page_height, op.y, op.height),
            mm_to_pt(op.width), mm_to_pt(op.height),
            stroke=1, fill=0,
        )
    else:
        raise ReportGenerationError(f"Unknown draw operation: {op!r}")


def render_pdf(document: Document) -> bytes:
    """
    Paint every page of the display list into a PDF.

    Raises:
        ReportGenerationError: If the canvas cannot be built or painted.
    """
    pdf_buffer = io.BytesIO()
    try:
        c = canvas.Canvas(
            pdf_buffer,
            pagesize=(mm_to_pt(document.page_width), mm_to_pt(document.page_height)),
            invariant=1,
        )
        if document.title:
            c.setTitle(document.title)

        for page in document.pages:
            for op in page.ops:
                _paint_op(c, op, document.page_height)
            c.showPage()

        c.save()
    except ReportGenerationError:
        raise
    except Exception as e:
        logger.error(f"[PDF] Failed to render report PDF: {e}")
        raise ReportGenerationError(f"Failed to render report PDF: {e}") from e

    return pdf_buffer.getvalue()
