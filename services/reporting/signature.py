"""
Closing signature block.

Placement depends on what the last photo page holds: a single vertical photo
or two horizontal photos fill the page, so the signature is pinned at a fixed
height near the bottom margin. Otherwise it follows the last block.
"""
import logging

from constants import SIGNATURES_LABEL
from services.reporting.background import start_page
from services.reporting.models import Box, ImageOp, LayoutCursor
from utils.geometry import fit_within
from utils.image_processing import image_size

logger = logging.getLogger(__name__)


def page_is_full(cursor: LayoutCursor) -> bool:
    one_vertical = cursor.page_photo_count == 1 and cursor.page_has_vertical
    two_horizontal = cursor.page_photo_count == 2 and not cursor.page_has_vertical
    return one_vertical or two_horizontal


def signature_start_y(cursor: LayoutCursor, config) -> float:
    if page_is_full(cursor):
        return config.signature_anchor_y
    return cursor.y + config.section_spacing


def signature_image_size(image_width, image_height, config):
    """Fit the signature within the configured box, height first."""
    return fit_within(image_width, image_height, config.signature_max_width, config.signature_max_height)


def draw_signature(document, report, config, cursor: LayoutCursor) -> LayoutCursor:
    """
    Draw the "Signatures:" label and, if present, the signature image beside it.

    Breaks to a new page when the label would not fit. A missing or
    undecodable signature image leaves the label on its own.
    """
    y = signature_start_y(cursor, config)

    title_height = config.line_height('signatures_title')
    if y + title_height > config.bottom_limit:
        start_page(document, report.background_image, config)
        y = config.margin_v

    document.draw(config.text_op(SIGNATURES_LABEL, 'signatures_title', config.margin_h, y))
    document.signature_y = y
    cursor = LayoutCursor(
        y=y,
        page_photo_count=cursor.page_photo_count,
        page_has_vertical=cursor.page_has_vertical,
    )

    if report.signature_image is None:
        return cursor

    size = image_size(report.signature_image)
    if size is None:
        logger.error("[Signature] Could not add signature image; drawing label only")
        return cursor

    width, height = signature_image_size(size[0], size[1], config)
    x = config.margin_h + config.text_width(SIGNATURES_LABEL, 'signatures_title') + config.signature_gap_after_label

    # Wide signatures sit closer to the label's baseline than tall ones.
    if width > 2 * config.signature_max_height:
        image_y = y - config.signature_nudge_wide
    else:
        image_y = y - config.signature_nudge_tall

    document.draw(ImageOp(x=x, y=image_y, width=width, height=height,
                          image=report.signature_image))
    document.signature_box = Box(x=x, y=image_y, width=width, height=height)

    if height > title_height:
        cursor = cursor.advanced(height + config.signature_spacing_after)
    return cursor
