"""
Full-bleed background artwork.

The background is painted first on every page, including pages started by
a mid-layout break, so every other op sits on top of it.
"""
import logging

from services.reporting.models import ImageOp
from utils.image_processing import image_size

logger = logging.getLogger(__name__)


def background_size(image_width, image_height, page_width, page_height):
    """
    Size of the background in page units.

    Fills exactly the axis whose page-to-image ratio is larger (height on a
    tie) and scales the other axis by the same factor, so it may spill past
    the page or stop short of it.
    """
    ratio_w = page_width / image_width
    ratio_h = page_height / image_height
    if ratio_h >= ratio_w:
        return image_width * ratio_h, page_height
    return page_width, image_height * ratio_w


def draw_background(document, image, config) -> None:
    """Paint the background on the current page. Undecodable images are skipped."""
    if image is None:
        return

    size = image_size(image)
    if size is None:
        logger.warning("[Background] Background image could not be decoded; page left blank")
        return

    width, height = background_size(size[0], size[1], config.page_width, config.page_height)
    # Anchored at the top-left corner, not centred.
    document.draw(ImageOp(x=0, y=0, width=width, height=height, image=image))


def start_page(document, background_image, config):
    """Append a page and paint the background on it."""
    page = document.add_page()
    draw_background(document, background_image, config)
    return page
