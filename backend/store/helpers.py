"""
Identifier and timestamp helpers for the in-memory store
"""

from datetime import datetime, timezone
import random
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def generate_id(prefix: str = "id") -> str:
    """
    Generate a unique id from the current time plus a random suffix.

    Format: "cm_1699876543210_8d4f2" or "mw_1699876543210_3a7b9"

    Args:
        prefix: 'cm' for cost models, 'mw' for measured works

    Returns:
        Id string
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(_BASE36, k=5))
    return f"{prefix}_{timestamp}_{suffix}"


def current_timestamp() -> str:
    """Current UTC time in ISO 8601, e.g. "2024-11-06T12:00:00.000Z"."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
