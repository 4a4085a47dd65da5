"""
Message formatting helpers for the logger service.
"""

from typing import Any, Dict, Optional

from ...enums import LogEmoji
from .constants import (
    CONTEXT_SEPARATOR,
    CONTEXT_TRUNCATE_SUFFIX,
    MAX_CONTEXT_ITEMS,
    MAX_CONTEXT_VALUE_LENGTH,
)


class LogMessageFormatter:
    """Builds the console-friendly message line for a log call."""

    @staticmethod
    def format_message(message: str, emoji: Optional[LogEmoji] = None) -> str:
        """Prefix a message with its emoji, unless it already starts with one."""
        if not emoji:
            return message
        emoji_value = emoji.value if isinstance(emoji, LogEmoji) else str(emoji)
        if message.startswith(emoji_value):
            return message
        return f"{emoji_value} {message}"

    @staticmethod
    def format_context(context: Optional[Dict[str, Any]]) -> str:
        """Render the first few context items as ``key=value`` pairs."""
        if not context:
            return ""

        parts = []
        for key, value in list(context.items())[:MAX_CONTEXT_ITEMS]:
            value_str = str(value)
            if len(value_str) > MAX_CONTEXT_VALUE_LENGTH:
                cut = MAX_CONTEXT_VALUE_LENGTH - len(CONTEXT_TRUNCATE_SUFFIX)
                value_str = value_str[:cut] + CONTEXT_TRUNCATE_SUFFIX
            parts.append(f"{key}={value_str}")

        return CONTEXT_SEPARATOR.join(parts)
