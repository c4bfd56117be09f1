"""Utility helpers for the arboretum export."""

from .formatting import format_display_datetime
from .io import atomic_write_bytes, detect_encoding, ensure_directory
from .urls import relative_url

__all__ = [
    "format_display_datetime",
    "atomic_write_bytes",
    "detect_encoding",
    "ensure_directory",
    "relative_url",
]
