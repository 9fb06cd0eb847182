"""
UTC timestamp utilities.

Use these instead of datetime.now()/time.time() so tests can patch a
single clock.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


def epoch_ms() -> int:
    """Milliseconds since the Unix epoch, as used in report filenames."""
    return int(utc_now().timestamp() * 1000)


def display_date(when: datetime = None) -> str:
    """Date as dd/mm/yyyy, the format used in saved-report titles."""
    return (when or utc_now()).strftime("%d/%m/%Y")
