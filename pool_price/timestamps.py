from __future__ import annotations

from datetime import datetime


def truncate_to_hour(value: datetime) -> datetime:
    """Drop minutes, seconds and microseconds so both sources share hourly keys."""

    return value.replace(minute=0, second=0, microsecond=0)
