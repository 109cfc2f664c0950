"""Date and time formatting utilities."""

from datetime import datetime
from typing import Optional

from sprout.constants import UNKNOWN_TIMESTAMP


def format_timestamp(timestamp: Optional[int]) -> str:
    """
    Format a Unix timestamp as local ``YYYY-MM-DD HH:MM:SS``.

    Args:
        timestamp: Seconds since epoch, or None when unknown

    Returns:
        Formatted timestamp, or a dash for unknown or non-positive values
    """
    if timestamp is None or timestamp <= 0:
        return UNKNOWN_TIMESTAMP
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except (OverflowError, OSError, ValueError):
        return UNKNOWN_TIMESTAMP
