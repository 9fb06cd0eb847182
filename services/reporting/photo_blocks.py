"""
Photo Block Layout

Lays out the active photos one block at a time. Each block holds the photo
title, the fitted and bordered image, and the description wrapped to the
image's width.

Block heights:
- Horizontal photos get half the usable page height, vertical photos all of it.
- The first block grows into whatever space the header and fields left on
  the first page, never beyond the vertical reference height.
- A trailing vertical photo and a trailing pair of horizontal photos shrink
  slightly so the signature block can share their page.

A block that does not fit below the cursor starts a new page, so no block
ever crosses the bottom margin.
"""
import logging
import math

from constants import PHOTO_TITLE_LABEL, DESCRIPTION_OVERFLOW_CLAMP
from services.reporting.background import start_page
from services.reporting.models import Box, ImageOp, LayoutCursor, PhotoBlock, RectOp
from utils.image_processing import image_size
from utils.pdf_text import truncate_with_ellipsis
from utils.geometry import mm_to_pt

logger = logging.getLogger(__name__)

# Blocks sized to the exact remaining space must not break on float noise
_FIT_TOLERANCE = 1e-6


def is_vertical(image) -> bool:
    """Taller than wide. Square and undecodable images count as horizontal."""
    size = image_size(image)
    if size is None:
        return False
    width, height = size
    return height > width


def reference_heights(config):
    """(horizontal_block_height, vertical_block_height) in mm."""
    usable = config.usable_height
    return math.floor(usable / 2), math.floor(usable)


def has_trailing_horizontal_pair(orientations) -> bool:
    """True when the last two photos are both horizontal."""
    return len(orientations) >= 2 and not orientations[-1] and not orientations[-2]


def min_block_height(photo, config) -> float:
    """Smallest block that still shows the title, a minimal image and the description."""
    title_height = config.line_height('label') + config.photo_title_to_image
    description_height = 0.0
    if photo.description:
        lines = config.wrap(photo.description, 'description', config.content_width)
        description_height = len(lines) * config.line_height('description')
    return (
        config.photo_block_top_padding
        + title_height
        + config.min_image_height
        + config.photo_image_to_description
        + description_height
    )


def plan_block_height(index, photo, vertical, photo_count, trailing_pair, cursor, config) -> float:
    """
    Height of the block for the photo at `index` among `photo_count` active photos.

    `cursor` is the layout position before the block is placed; it only
    matters for the first photo, which may grow into the space left below
    the header.
    """
    horizontal_height, vertical_height = reference_heights(config)
    block_height = vertical_height if vertical else horizontal_height

    is_last = index == photo_count - 1

    if index == 0:
        minimum = min_block_height(photo, config)
        available = config.page_height - cursor.y - config.margin_v
        if photo_count == 1:
            available -= config.first_photo_signature_reserve
        if available > minimum:
            block_height = max(minimum, min(available, vertical_height))

    if is_last and vertical:
        block_height -= config.last_vertical_shrink

    if trailing_pair and index >= photo_count - 2:
        block_height -= config.trailing_horizontal_pair_shrink

    return block_height


def _description_lines(config, text, width):
    """Wrapped description as (line, ends_paragraph) pairs."""
    result = []
    for paragraph in (text or '').strip().split('\n'):
        lines = config.wrap(paragraph, 'description', width) or ['']
        for i, line in enumerate(lines):
            result.append((line, i == len(lines) - 1))
    if result and not any(line for line, _ in result):
        return []
    return result


def _clamp_description(config, lines, first_baseline, block_bottom, width, number):
    """
    Keep only the description lines whose baseline stays inside the block.

    Always logs when the description does not fit; only trims under the
    "clamp" policy.
    """
    line_height = config.line_height('description')
    if first_baseline > block_bottom:
        capacity = 0
    else:
        capacity = int((block_bottom - first_baseline) // line_height) + 1

    if len(lines) <= capacity:
        return lines

    if config.description_overflow != DESCRIPTION_OVERFLOW_CLAMP:
        logger.warning(
            f"[Layout] Description of photo {number} overflows its block by "
            f"{len(lines) - capacity} line(s); rendering un-clamped"
        )
        return lines

    logger.warning(
        f"[Layout] Description of photo {number} truncated to {capacity} of {len(lines)} line(s)"
    )
    if capacity == 0:
        return []
    kept = lines[:capacity]
    style = config.style('description')
    last = truncate_with_ellipsis(kept[-1][0], config.font_for(style), style.size, mm_to_pt(width))
    kept[-1] = (last, True)
    return kept


def draw_photo_block(document, photo, top, block_height, vertical, config) -> PhotoBlock:
    """
    Draw one photo block with its top edge at `top`.

    An undecodable image is skipped; the title and description still render.
    """
    y = top + config.photo_block_top_padding

    label = PHOTO_TITLE_LABEL.format(number=photo.number)
    document.draw(config.text_op(label, 'label', config.margin_h, y))
    title_x = config.margin_h + config.text_width(label, 'label') + config.label_to_value
    document.draw(config.text_op(photo.title or '', 'value', title_x, y))
    y += config.line_height('label') + config.photo_title_to_image

    # First measurement: full content width gives a safe upper bound for the
    # description height, which is what the image budget is based on.
    description_line_height = config.line_height('description')
    preliminary = _description_lines(config, photo.description, config.content_width)
    estimated_description_height = len(preliminary) * description_line_height
    available_image_height = (
        block_height - (y - top) - estimated_description_height - config.photo_image_to_description
    )

    image_box = None
    size = image_size(photo.image)
    if size is None:
        logger.error(f"[Layout] Photo {photo.number}: image could not be decoded; drawing text only")
        text_x, text_width = config.margin_h, config.content_width
    else:
        aspect = size[1] / size[0]
        image_width = config.content_width
        image_height = image_width * aspect
        image_limit = max(available_image_height, config.min_image_height)
        if image_height > image_limit:
            image_height = image_limit
            image_width = image_height / aspect

        image_x = config.margin_h + (config.content_width - image_width) / 2
        image_box = Box(x=image_x, y=y, width=image_width, height=image_height)
        document.draw(ImageOp(x=image_x, y=y, width=image_width, height=image_height, image=photo.image))
        document.draw(RectOp(
            x=image_x, y=y, width=image_width, height=image_height,
            line_width=config.image_border_width,
        ))
        y += image_height
        text_x, text_width = image_x, image_width

    y += config.photo_image_to_description

    # Second measurement: wrap at the width actually used by the image.
    lines = _description_lines(config, photo.description, text_width)
    lines = _clamp_description(config, lines, y, top + block_height, text_width, photo.number)
    for i, (line, ends_paragraph) in enumerate(lines):
        document.draw(config.text_op(
            line, 'description', text_x, y + i * description_line_height,
            width=text_width, last_line=ends_paragraph,
        ))

    block = PhotoBlock(
        number=photo.number,
        page_index=document.current_page.index,
        top=top,
        height=block_height,
        is_vertical=vertical,
        image_box=image_box,
        description_lines=tuple(line for line, _ in lines),
    )
    document.blocks.append(block)
    return block


def layout_photo_blocks(document, photos, config, cursor: LayoutCursor,
                        background_image=None, cancel_token=None) -> LayoutCursor:
    """
    Lay out every active photo, breaking pages as needed.

    Returns the cursor after the last block; its per-page counters describe
    the page the signature block will land on.
    """
    orientations = [is_vertical(photo.image) for photo in photos]
    trailing_pair = has_trailing_horizontal_pair(orientations)
    count = len(photos)

    for index, photo in enumerate(photos):
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        vertical = orientations[index]
        block_height = plan_block_height(index, photo, vertical, count, trailing_pair, cursor, config)

        if cursor.y + block_height > config.bottom_limit + _FIT_TOLERANCE:
            start_page(document, background_image, config)
            cursor = cursor.new_page(config.margin_v)
            logger.debug(f"[Layout] Photo {photo.number} starts page {document.page_count}")

        draw_photo_block(document, photo, cursor.y, block_height, vertical, config)
        cursor = cursor.after_photo(block_height, vertical)

    return cursor
