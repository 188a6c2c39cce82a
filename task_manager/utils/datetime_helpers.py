"""
Datetime formatting utilities
"""
from datetime import date, datetime
from typing import Optional


def format_datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to ISO format with UTC timezone indicator

    Args:
        dt: datetime object or None

    Returns:
        ISO string with 'Z' suffix (e.g., "2025-01-09T10:30:00Z") or None
    """
    if dt is None:
        return None

    return dt.strftime('%Y-%m-%dT%H:%M:%SZ')


def format_date(d: Optional[date]) -> Optional[str]:
    if d is None:
        return None
    return d.isoformat()
