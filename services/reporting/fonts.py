"""
Font registration for report PDFs.

Looks for the configured family's TTF files (Regular/Bold) under FONTS_DIR
and registers them with reportlab. Helvetica is the fallback outside
production; in production a missing or broken font is document-fatal.
"""
import logging
import os

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from services.reporting.errors import ReportGenerationError

logger = logging.getLogger(__name__)

FALLBACK_REGULAR = "Helvetica"
FALLBACK_BOLD = "Helvetica-Bold"

_registered = {}


def _candidate_files(family):
    return {
        'regular': (f"{family}-Regular.ttf", f"{family}.ttf", f"{family.lower()}.ttf"),
        'bold': (f"{family}-Bold.ttf", f"{family.lower()}bd.ttf"),
    }


def _find_fonts(fonts_dir, family):
    found = {}
    if not fonts_dir or not os.path.isdir(fonts_dir):
        return found
    candidates = _candidate_files(family)
    for root, dirs, files in os.walk(fonts_dir):
        for variant, names in candidates.items():
            if variant in found:
                continue
            for name in names:
                if name in files:
                    found[variant] = os.path.join(root, name)
                    break
    return found


def register_fonts(fonts_dir=None, family=None):
    """
    Register the report font family.

    Returns:
        (regular_font_name, bold_font_name) usable with canvas.setFont.

    Raises:
        ReportGenerationError: In production when the fonts are missing or
            cannot be registered.
    """
    from config import FONTS_DIR, REPORT_FONT_FAMILY, IS_PRODUCTION

    fonts_dir = fonts_dir or FONTS_DIR
    family = family or REPORT_FONT_FAMILY

    key = (fonts_dir, family)
    if key in _registered:
        return _registered[key]

    found = _find_fonts(fonts_dir, family)
    if 'regular' not in found or 'bold' not in found:
        if IS_PRODUCTION:
            raise ReportGenerationError(
                f"CRITICAL: Required {family} fonts (Regular/Bold) missing from {fonts_dir}. "
                f"Reports cannot be generated."
            )
        logger.info(f"[Fonts] {family} TTFs not found in {fonts_dir}; using Helvetica.")
        return FALLBACK_REGULAR, FALLBACK_BOLD

    regular_name = f"{family}-Regular"
    bold_name = f"{family}-Bold"
    try:
        pdfmetrics.registerFont(TTFont(regular_name, found['regular']))
        pdfmetrics.registerFont(TTFont(bold_name, found['bold']))
    except Exception as e:
        if IS_PRODUCTION:
            raise ReportGenerationError(f"CRITICAL: Failed to register {family} fonts: {e}") from e
        logger.warning(f"[Fonts] Failed to register {family} fonts: {e}. Using Helvetica.")
        return FALLBACK_REGULAR, FALLBACK_BOLD

    _registered[key] = (regular_name, bold_name)
    return _registered[key]
