"""
Filename utilities for rendered reports.

Report PDFs are named "Photographic_report_{case}_{epoch_ms}.pdf" where the
case number is reduced to letters, digits, "-" and "_".
"""
import re
from typing import Optional

from constants import REPORT_FILENAME_PREFIX, REPORTS_KEY_PREFIX
from utils.timestamps import epoch_ms


def sanitize_case_number(text: str, max_length: int = 50) -> str:
    """
    Make a case number safe for filenames and storage keys.

    Case is preserved; whitespace and separators become "_", anything else
    outside [A-Za-z0-9_-] is dropped.

    Returns:
        Safe string, or "unnumbered" when nothing survives
    """
    if not text:
        return "unnumbered"

    s = re.sub(r'[\s./\\,]+', '_', str(text).strip())
    s = re.sub(r'[^A-Za-z0-9_-]', '', s)
    s = re.sub(r'_+', '_', s).strip('_-')

    if len(s) > max_length:
        s = s[:max_length].rstrip('_-')

    return s or "unnumbered"


def make_report_filename(case_number: str, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = epoch_ms()
    return f"{REPORT_FILENAME_PREFIX}_{sanitize_case_number(case_number)}_{timestamp_ms}.pdf"


def report_storage_key(filename: str) -> str:
    """Storage key for a rendered report, e.g. "reports/Photographic_report_A-1_1700000000000.pdf"."""
    return f"{REPORTS_KEY_PREFIX}/{filename}"
