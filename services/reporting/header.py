import logging

from constants import REPORT_TITLE
from services.reporting.models import ImageOp, LayoutCursor, TextOp
from utils.image_processing import image_size

logger = logging.getLogger(__name__)


def draw_header(document, report, config, title: str = REPORT_TITLE) -> LayoutCursor:
    """
    Draw the optional logo and the centred report title.

    The logo is scaled to the configured header height at the top-left
    margin. Without a usable logo the title starts at the top margin.

    Returns:
        Cursor positioned below the title.
    """
    y = config.margin_v

    if report.header_logo is not None:
        size = image_size(report.header_logo)
        if size is None:
            logger.error("[Header] Could not add header logo; title starts at the top margin")
        else:
            aspect = size[0] / size[1]
            height = config.header_logo_height
            document.draw(ImageOp(
                x=config.margin_h, y=config.margin_v,
                width=height * aspect, height=height,
                image=report.header_logo,
            ))
            y = config.margin_v + height + config.title_after_logo

    style = config.style('title')
    document.draw(TextOp(
        x=0, y=y, width=config.page_width,
        text=title,
        font_name=config.font_for(style), font_size=style.size,
        align='center',
    ))

    return LayoutCursor(y=y + config.line_height('title') * 2)
