# backend/entity_icons/services/icon_pipeline/services/size_resolver_service.py
"""
Icon size resolution.

Builds the size table for an entity: a built-in table for ``file``
subtypes or the site-wide table otherwise, caller overrides merged on top,
and finally the ``entity:icon:sizes`` hook for the entity's type.
"""

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ....constants import FILE_ICON_SIZES, FILE_SUBTYPE, ICON_SIZES_HOOK
from ....enums import LoggerName, LogSource
from ....models.entity_model import Entity
from ....models.icon_size_model import IconSizeMap, IconSizeSpec, coerce_icon_sizes
from ...hook_service import HookRegistry
from ...logger import get_service_logger

logger = get_service_logger(LoggerName.ICON_PIPELINE, LogSource.PIPELINE)


class IconSizeResolver:
    """Resolves the final size-name -> IconSizeSpec mapping for an entity."""

    def __init__(self, default_icon_sizes: Mapping[str, Any], hooks: HookRegistry):
        """
        Args:
            default_icon_sizes: Site-wide size table for non-file entities
            hooks: Registry used to trigger the icon size hook
        """
        self.default_icon_sizes = coerce_icon_sizes(default_icon_sizes)
        self.file_icon_sizes = coerce_icon_sizes(FILE_ICON_SIZES)
        self.hooks = hooks

    def get_base_sizes(self, entity: Entity) -> IconSizeMap:
        if entity.subtype == FILE_SUBTYPE:
            return dict(self.file_icon_sizes)
        return dict(self.default_icon_sizes)

    def resolve(self, entity: Entity, caller_sizes: Optional[Any] = None) -> IconSizeMap:
        """
        Resolve the icon sizes for ``entity``.

        Args:
            entity: Entity the icons are for
            caller_sizes: Overrides merged over the base table; ignored unless
                it is a mapping. An invalid entry is dropped and the base entry
                of the same name stays

        Returns:
            A fresh mapping, possibly empty
        """
        icon_sizes = self.get_base_sizes(entity)

        if isinstance(caller_sizes, Mapping):
            icon_sizes.update(self._coerce_lenient(caller_sizes, "caller"))

        filtered = self.hooks.trigger(
            ICON_SIZES_HOOK,
            entity.type.value,
            {"entity": entity, "subtype": entity.subtype},
            icon_sizes,
        )
        if not isinstance(filtered, Mapping):
            logger.warning(
                f"Ignoring {ICON_SIZES_HOOK} result that is not a mapping",
                extra_context={"guid": entity.guid, "result_type": type(filtered).__name__},
            )
            return icon_sizes

        return self._coerce_lenient(filtered, "hook")

    @staticmethod
    def _coerce_lenient(sizes: Mapping[str, Any], origin: str) -> IconSizeMap:
        coerced: IconSizeMap = {}
        for name, spec in sizes.items():
            if isinstance(spec, IconSizeSpec):
                coerced[str(name)] = spec
                continue
            try:
                coerced[str(name)] = IconSizeSpec.model_validate(spec)
            except ValidationError as e:
                logger.warning(
                    f"Dropping invalid icon size '{name}' from {origin} table",
                    extra_context={"error": str(e)},
                )
        return coerced
