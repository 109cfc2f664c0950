"""Formatting utilities for sprout output."""

from .date import format_timestamp

__all__ = [
    "format_timestamp",
]
