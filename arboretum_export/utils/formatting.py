"""Formatting helpers."""

from __future__ import annotations

from datetime import datetime, tzinfo


def format_display_datetime(value: datetime | None, *, seconds: bool = False, tz: tzinfo | None = None) -> str:
    """Return ``value`` as ``dd/mm/YYYY à HH:MM`` in local time."""

    if value is None:
        return "jamais"
    local = value.astimezone(tz)
    pattern = "%d/%m/%Y à %H:%M:%S" if seconds else "%d/%m/%Y à %H:%M"
    return local.strftime(pattern)
