"""
Core Utilities.

Shared utility functions used across the service.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application are timezone-naive and
    assumed to be UTC, which keeps SQLite and PostgreSQL storage identical.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
