# backend/entity_icons/services/access_service.py
"""
Access gate for hidden entity visibility.

Reads that need to see disabled entities (icon serving) elevate visibility
through ``show_hidden_entities()``, which restores the prior state on every
exit path. The state is held in a context variable, so an elevation only
applies to the thread or task that made it.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

from ..enums import LogEmoji, LoggerName
from .logger import get_service_logger

logger = get_service_logger(LoggerName.ACCESS_SERVICE)


class AccessGate:
    """Holds the hidden-visibility flag consulted by the entity store."""

    def __init__(self, show_hidden: bool = False):
        self._show_hidden: ContextVar[bool] = ContextVar(
            f"show_hidden_entities_{id(self)}", default=bool(show_hidden)
        )

    def get_hidden_visibility(self) -> bool:
        return self._show_hidden.get()

    @contextmanager
    def show_hidden_entities(self) -> Iterator[bool]:
        """
        Temporarily make hidden entities visible to the current context.

        Yields:
            The visibility state that will be restored on exit
        """
        previous = self.get_hidden_visibility()
        token = self._show_hidden.set(True)
        logger.debug(
            "Hidden entity visibility elevated",
            emoji=LogEmoji.SECURITY,
            extra_context={"previous_state": previous},
        )
        try:
            yield previous
        finally:
            self._show_hidden.reset(token)
