"""
Unit conversion and measurement helpers shared by the report renderers.

Layout is computed in millimetres with a top-left origin; reportlab works in
points with a bottom-left origin. Everything that crosses that boundary goes
through this module.
"""
from reportlab.lib.units import mm

from utils.report_tokens import PT_TO_MM, DEFAULT_LINE_HEIGHT_FACTOR


def pt_to_mm(points: float) -> float:
    """Convert a length in points (font units) to millimetres."""
    return points * PT_TO_MM


def mm_to_pt(length_mm: float) -> float:
    """Convert a length in millimetres to reportlab points."""
    return length_mm * mm


def line_height(style) -> float:
    """
    Height in mm of one line of text in the given style.

    `style` is anything with a `size` in points and an optional
    `line_height` factor (TextStyle in practice).
    """
    factor = getattr(style, 'line_height', None) or DEFAULT_LINE_HEIGHT_FACTOR
    return pt_to_mm(style.size * factor)


def flip_y(page_height_mm: float, y_mm: float, height_mm: float = 0.0) -> float:
    """
    Convert a top-down y (mm) into a reportlab bottom-up y (points).

    For boxes pass the box height so the returned value is the box's
    bottom edge, which is what drawImage/rect expect.
    """
    return mm_to_pt(page_height_mm - y_mm - height_mm)


def fit_within(width: float, height: float, max_width: float, max_height: float):
    """
    Scale (width, height) down to fit max_height first, then max_width.

    Never scales up. Returns the fitted (width, height).
    """
    if height > max_height:
        width = (max_height / height) * width
        height = max_height
    if width > max_width:
        height = (max_width / width) * height
        width = max_width
    return width, height
