"""
Environment variable helpers for the report engine and its HTTP surface.
"""
import os
from typing import Optional


def get_env_str(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """
    Read an environment variable, stripped. Empty values count as unset.

    Raises:
        ValueError: If required=True and the variable is missing or empty
    """
    value = (os.getenv(name) or "").strip()
    if value:
        return value
    if required:
        raise ValueError(f"Required environment variable '{name}' is not set or empty.")
    return default


def get_env_float(name: str, default: float) -> float:
    """
    Read a numeric environment variable (millimetres, seconds, ...).

    Unparseable values raise ValueError naming the variable, so a typo in a
    layout override fails loudly instead of silently using the default.
    """
    raw = get_env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be a number, got: {raw!r}")
