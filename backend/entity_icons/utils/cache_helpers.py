# backend/entity_icons/utils/cache_helpers.py
"""
HTTP cache validator helpers.
"""

import hashlib
from typing import Any

from ..enums import LogEmoji, LoggerName
from ..services.logger import get_service_logger

logger = get_service_logger(LoggerName.UTILITY, default_emoji=LogEmoji.CACHE)


def generate_content_hash_etag(content: str, algorithm: str = "md5") -> str:
    """
    Generate a quoted ETag from a content hash.

    Args:
        content: Content to hash
        algorithm: Hash algorithm (md5, sha1, sha256)

    Returns:
        ETag string in format: "abc123def456..."
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content.encode("utf-8"))
    return f'"{hasher.hexdigest()}"'


def generate_icon_etag(icontime: Any, size: str) -> str:
    """ETag for a served icon: hash of the generation time and size name."""
    if icontime is None:
        icontime = ""
    etag = generate_content_hash_etag(f"{icontime}{size}")
    logger.debug(f"Generated icon ETag: {etag}", extra_context={"size": size})
    return etag


def validate_etag_match(if_none_match: str, etag: str) -> bool:
    """
    Check an ``If-None-Match`` header value against the current ETag.

    Supports ``*``, comma-separated lists and weak validators.
    """
    if not if_none_match:
        return False
    if if_none_match.strip() == "*":
        return True

    current = etag.strip()
    for candidate in if_none_match.split(","):
        candidate = candidate.strip()
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == current:
            return True
    return False
