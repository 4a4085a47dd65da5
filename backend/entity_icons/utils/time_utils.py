# backend/entity_icons/utils/time_utils.py
"""
Time helpers shared by the pipeline and the HTTP layer.
"""

import time
from datetime import datetime, timedelta, timezone

HTTP_DATE_FORMAT = "%a, %d %b %Y %H:%M:%S GMT"


def utc_now() -> datetime:
    """
    Get current UTC timestamp.

    Returns:
        Current timezone-aware UTC datetime object
    """
    return datetime.now(timezone.utc)


def unix_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())


def format_http_date(value: datetime) -> str:
    """Format a datetime for HTTP headers (RFC 1123, always GMT)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(HTTP_DATE_FORMAT)


def http_expires_in(seconds: int) -> str:
    """``Expires`` header value ``seconds`` from now."""
    return format_http_date(utc_now() + timedelta(seconds=seconds))
