"""
Design tokens for photographic report pages.

All lengths are millimetres on an A4 portrait page with a top-left origin.
These are defaults only; LayoutConfig carries the values actually used by a
render so callers can override any of them.
"""
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm

# -----------------------------------------------------------------------------
# PAGE
# -----------------------------------------------------------------------------
PAGE_WIDTH = round(A4[0] / mm, 2)    # 210
PAGE_HEIGHT = round(A4[1] / mm, 2)   # 297

MARGIN_H = 20
MARGIN_V = 15

HEADER_LOGO_HEIGHT = 16.5
IMAGE_BORDER_WIDTH = 0.7

# Font sizes are in points, everything else in mm.
PT_TO_MM = 25.4 / 72
DEFAULT_LINE_HEIGHT_FACTOR = 1.15

# -----------------------------------------------------------------------------
# SPACING
# -----------------------------------------------------------------------------
SPACING = {
    'title_after_logo': 16,
    'field': 3,
    'label_to_value': 2,
    'section': 10,
    'photo_title_to_image': 0,
    'photo_image_to_description': 5,
    'photo_block_top_padding': 10,
}

# -----------------------------------------------------------------------------
# TYPE STYLES (size in points)
# -----------------------------------------------------------------------------
TEXT_STYLES = {
    'title': {'size': 21, 'weight': 'bold', 'align': 'center'},
    'pagination': {'size': 10, 'weight': 'normal', 'align': 'right'},
    'label': {'size': 12, 'weight': 'bold', 'align': 'left'},
    'value': {'size': 12, 'weight': 'normal', 'align': 'left'},
    'description': {'size': 10, 'weight': 'normal', 'align': 'justify', 'line_height': 1.25},
    'signatures_title': {'size': 12, 'weight': 'bold', 'align': 'left'},
}

# -----------------------------------------------------------------------------
# LAYOUT HEURISTICS
# -----------------------------------------------------------------------------
# Tuned by eye against real reports. They are policy, not geometry, and are
# exposed on LayoutConfig so they can be revisited without code changes.
MIN_IMAGE_HEIGHT = 30
FIRST_PHOTO_SIGNATURE_RESERVE = 20
LAST_VERTICAL_SHRINK = 10
TRAILING_HORIZONTAL_PAIR_SHRINK = 5
SIGNATURE_ANCHOR_Y = 272

# -----------------------------------------------------------------------------
# SIGNATURE
# -----------------------------------------------------------------------------
SIGNATURE_MAX_WIDTH = 70
SIGNATURE_MAX_HEIGHT = 30
SIGNATURE_GAP_AFTER_LABEL = 3
SIGNATURE_NUDGE_WIDE = 3
SIGNATURE_NUDGE_TALL = 8
SIGNATURE_SPACING_AFTER = 5
