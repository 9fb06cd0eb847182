"""
Client for the saved-reports API.

Reports can be stored remotely before they are rendered. The API answers
POST /api/reports with {"report": {"id": ...}} and PUT /api/reports/<id>
for updates; both require a Bearer token.
"""
import logging

import requests

from constants import SAVED_REPORT_TITLE_TEMPLATE
from utils.timestamps import display_date

logger = logging.getLogger(__name__)

# Transient UI field the API rejects
_STRIPPED_GENERAL_FIELDS = ('dia',)


class ReportsApiError(RuntimeError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def _clean_payload(report_data):
    data = dict(report_data)
    general = data.get('general')
    if isinstance(general, dict):
        data['general'] = {k: v for k, v in general.items() if k not in _STRIPPED_GENERAL_FIELDS}
    return data


def _error_message(response):
    try:
        return response.json().get('error') or 'Unknown error'
    except ValueError:
        return 'Unknown error'


class ReportsApiClient:
    def __init__(self, base_url, token, timeout=10.0, session=None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls):
        """Client for the configured API, or None when persistence is not set up."""
        from config import REPORTS_API_URL, REPORTS_API_TOKEN, REPORTS_API_TIMEOUT
        if not REPORTS_API_URL:
            return None
        return cls(REPORTS_API_URL, REPORTS_API_TOKEN, timeout=REPORTS_API_TIMEOUT)

    def _headers(self):
        if not self.token:
            raise ReportsApiError("No authentication token available to save the report")
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.token}',
        }

    def _check(self, response, action):
        if response.ok:
            return
        message = _error_message(response)
        if response.status_code == 401:
            raise ReportsApiError(f"Authentication failed while trying to {action}", 401)
        if response.status_code == 400:
            raise ReportsApiError(f"Invalid report data: {message}", 400)
        raise ReportsApiError(f"Server error while trying to {action}: {message}", response.status_code)

    def create_report(self, report_data) -> int:
        """
        Store a new report.

        Returns:
            The id assigned by the API.

        Raises:
            ReportsApiError: Missing token, rejected request or network failure.
        """
        body = {
            'title': SAVED_REPORT_TITLE_TEMPLATE.format(date=display_date()),
            'report_data': _clean_payload(report_data),
        }
        try:
            response = self.session.post(
                f"{self.base_url}/api/reports", json=body, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ReportsApiError(f"Could not reach reports API: {e}") from e

        self._check(response, "create the report")
        report_id = response.json()['report']['id']
        logger.info(f"[ReportsAPI] Report saved with id {report_id}", extra={'report_id': report_id})
        return report_id

    def update_report(self, report_id, report_data) -> None:
        try:
            response = self.session.put(
                f"{self.base_url}/api/reports/{report_id}",
                json={'report_data': _clean_payload(report_data)},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ReportsApiError(f"Could not reach reports API: {e}") from e

        self._check(response, f"update report {report_id}")
        logger.info(f"[ReportsAPI] Report {report_id} updated")
