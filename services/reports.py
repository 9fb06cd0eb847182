"""
Report delivery: render, name, store, and optionally persist a report.

The layout engine itself has no network dependency; persistence happens
before rendering and a failure there never blocks the PDF.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from services.reporting.engine import generate_report_pdf
from services.reporting.report_loader import load_report
from services.reports_api import ReportsApiClient, ReportsApiError
from utils.filenames import make_report_filename, report_storage_key
from utils.storage import get_storage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedReport:
    pdf_bytes: bytes
    filename: str
    report_id: Optional[int] = None
    storage_key: Optional[str] = None


def save_report_pdf(pdf_bytes: bytes, filename: str, storage=None) -> str:
    """Write a rendered PDF to the save sink and return its storage key."""
    storage = storage or get_storage()
    key = report_storage_key(filename)
    storage.put_file(pdf_bytes, key, content_type="application/pdf")
    return key


def persist_report(report_data, api_client: Optional[ReportsApiClient] = None, report_id=None):
    """
    Create (or update, when report_id is given) the report remotely.

    Returns the report id, or None when persistence is unavailable or failed.
    """
    api_client = api_client or ReportsApiClient.from_config()
    if api_client is None:
        logger.warning("[Reports] Reports API not configured; report not saved")
        return None
    try:
        if report_id is not None:
            api_client.update_report(report_id, report_data)
            return report_id
        return api_client.create_report(report_data)
    except ReportsApiError as e:
        logger.error(f"[Reports] Could not save report: {e}")
        return None


def generate_and_save(report_data, *, save_remote=False, store=False, api_client=None,
                      storage=None, config=None, cancel_token=None) -> GeneratedReport:
    """
    Load a report payload, optionally persist it, and render the PDF.

    Args:
        report_data: Decoded report JSON
        save_remote: Submit the payload to the reports API first
        store: Also write the PDF to the configured storage backend
    """
    report = load_report(report_data)

    report_id = None
    if save_remote:
        report_id = persist_report(report_data, api_client=api_client)

    pdf_bytes = generate_report_pdf(report, config=config, cancel_token=cancel_token)
    filename = make_report_filename(report.case_number)

    storage_key = None
    if store:
        storage_key = save_report_pdf(pdf_bytes, filename, storage=storage)
        logger.info(f"[Reports] Stored {filename} at {storage_key}", extra={'case_number': report.case_number})

    return GeneratedReport(pdf_bytes=pdf_bytes, filename=filename, report_id=report_id, storage_key=storage_key)
