"""
Photographic Report Generator

Turns a validated ReportDocument into a paginated PDF in two phases:

1. layout(): background, header, fields, photo blocks and signature are laid
   out into a display list (Document). Strictly sequential: every
   pagination decision depends on the cursor left by the previous block.
2. stamp_footers(): "Page i of N" on every page, once N is known.

render_pdf() then paints the display list with reportlab.
Independent renders share no state and may run in separate workers.
"""
import logging
import threading
from typing import Optional

from constants import REPORT_TITLE
from services.reporting.background import start_page
from services.reporting.document import Document, render_pdf
from services.reporting.errors import RenderCancelled
from services.reporting.fields import draw_fields
from services.reporting.fonts import register_fonts
from services.reporting.footer import stamp_footers
from services.reporting.header import draw_header
from services.reporting.layout_config import LayoutConfig
from services.reporting.models import ReportDocument, active_photos
from services.reporting.photo_blocks import layout_photo_blocks
from services.reporting.signature import draw_signature

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation, checked between photo blocks."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        if self._event.is_set():
            raise RenderCancelled("Report rendering was cancelled")


def layout(report: ReportDocument, config: LayoutConfig, cancel_token: Optional[CancellationToken] = None) -> Document:
    """First pass: lay the whole report out into a Document without footers."""
    document = Document(page_width=config.page_width, page_height=config.page_height, title=REPORT_TITLE)

    start_page(document, report.background_image, config)
    cursor = draw_header(document, report, config)
    cursor = draw_fields(document, report, config, cursor)

    photos = active_photos(report)
    cursor = layout_photo_blocks(
        document, photos, config, cursor,
        background_image=report.background_image,
        cancel_token=cancel_token,
    )
    draw_signature(document, report, config, cursor)

    logger.info(
        f"[Report] Laid out case {report.case_number or '-'}: "
        f"{len(photos)} photo(s) on {document.page_count} page(s)",
        extra={
            'case_number': report.case_number,
            'photo_count': len(photos),
            'page_count': document.page_count,
        },
    )
    return document


def resolve_config(config: Optional[LayoutConfig] = None) -> LayoutConfig:
    """Default config from the environment, with the registered report fonts."""
    config = config or LayoutConfig.from_env()
    regular, bold = register_fonts()
    return config.with_fonts(regular, bold)


def generate_report_pdf(report: ReportDocument, config: Optional[LayoutConfig] = None,
                        cancel_token: Optional[CancellationToken] = None) -> bytes:
    """
    Render a report to PDF bytes.

    Raises:
        ReportGenerationError: Font registration or PDF painting failed.
        RenderCancelled: cancel_token fired between photo blocks.
    """
    if config is None:
        config = resolve_config()
    document = layout(report, config, cancel_token=cancel_token)
    document = stamp_footers(document, config)
    return render_pdf(document)
