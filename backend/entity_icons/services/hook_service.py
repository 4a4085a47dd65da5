# backend/entity_icons/services/hook_service.py
"""
Plugin hook registry.

Handlers filter a value for a (hook, entity type) pair. They run in
ascending priority order, registration order breaking ties; handlers
registered for ``"all"`` apply to every type. A handler returning ``None``
leaves the value unchanged, any other return value replaces it.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from ..constants import DEFAULT_HOOK_PRIORITY, HOOK_TYPE_ALL
from ..enums import LogEmoji, LoggerName
from .logger import get_service_logger

logger = get_service_logger(LoggerName.HOOK_SERVICE, default_emoji=LogEmoji.HOOK)

HookHandler = Callable[[str, str, Any, Dict[str, Any]], Any]


class HookRegistry:
    """Registry and dispatcher for plugin hooks."""

    def __init__(self):
        # (hook, type) -> [(priority, sequence, handler)]
        self._handlers: Dict[Tuple[str, str], List[Tuple[int, int, HookHandler]]] = {}
        self._sequence = 0

    def register(
        self,
        hook: str,
        entity_type: str,
        handler: HookHandler,
        priority: int = DEFAULT_HOOK_PRIORITY,
    ) -> None:
        """Register ``handler`` for ``hook`` on ``entity_type`` (or ``"all"``)."""
        if not callable(handler):
            raise TypeError("Hook handler must be callable")

        self._sequence += 1
        self._handlers.setdefault((hook, entity_type), []).append(
            (priority, self._sequence, handler)
        )
        logger.debug(
            f"Registered handler for {hook}:{entity_type}",
            extra_context={"priority": priority},
        )

    def unregister(self, hook: str, entity_type: str, handler: HookHandler) -> bool:
        """Remove a handler. Returns True if it was registered."""
        handlers = self._handlers.get((hook, entity_type), [])
        remaining = [entry for entry in handlers if entry[2] is not handler]
        if len(remaining) == len(handlers):
            return False
        self._handlers[(hook, entity_type)] = remaining
        return True

    def has_handlers(self, hook: str, entity_type: Optional[str] = None) -> bool:
        return bool(self._ordered_handlers(hook, entity_type or HOOK_TYPE_ALL))

    def _ordered_handlers(self, hook: str, entity_type: str) -> List[HookHandler]:
        entries = list(self._handlers.get((hook, entity_type), []))
        if entity_type != HOOK_TYPE_ALL:
            entries.extend(self._handlers.get((hook, HOOK_TYPE_ALL), []))
        entries.sort(key=lambda entry: (entry[0], entry[1]))
        return [entry[2] for entry in entries]

    def trigger(
        self,
        hook: str,
        entity_type: str,
        params: Optional[Dict[str, Any]] = None,
        value: Any = None,
    ) -> Any:
        """
        Run every handler for ``hook``/``entity_type`` over ``value``.

        Args:
            hook: Hook name, e.g. ``entity:icon:sizes``
            entity_type: Entity type the hook is triggered for
            params: Context passed to each handler
            value: Initial value

        Returns:
            The value after all handlers have run
        """
        params = params or {}
        for handler in self._ordered_handlers(hook, entity_type):
            result = handler(hook, entity_type, value, params)
            if result is not None:
                value = result
        return value
