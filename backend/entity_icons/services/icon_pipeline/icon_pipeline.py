# backend/entity_icons/services/icon_pipeline/icon_pipeline.py
"""
Main Icon Pipeline Class

Provides the unified interface for entity icons: size resolution, batch
generation into the filestore, and lookup of stored icons for serving.

Generation is synchronous and request-scoped. Variants are written one by
one with overwrite semantics; the entity's ``icontime`` only moves when the
whole batch succeeded, so a stale ``icontime`` marks an incomplete set.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image

from ...config import Settings
from ...constants import (
    CROP_COORDINATE_ATTRIBUTES,
    DEFAULT_ICON_MIMETYPE,
    DEFAULT_SERVE_SIZE,
    GROUP_MASTER_FILENAME_TEMPLATE,
    ICON_EXTENSIONS,
    ICONTIME_ATTRIBUTE,
    LEGACY_SERVE_FILENAME_TEMPLATE,
    MASTER_SIZE_NAME,
)
from ...database.entity_operations import EntityOperations
from ...enums import (
    IconFailureReason,
    IconGenerationStatus,
    IconVariantStatus,
    LogEmoji,
    LoggerName,
    LogSource,
)
from ...exceptions import FilestoreError, IconSourceError
from ...models.crop_model import CropRectangle
from ...models.entity_model import Entity
from ...models.icon_generation_model import (
    IconGenerationConfig,
    IconGenerationResult,
    IconServingInfo,
    IconVariantResult,
)
from ...models.icon_size_model import IconSizeMap, IconSizeSpec
from ...utils.cache_helpers import generate_icon_etag
from ...utils.time_utils import unix_timestamp
from ..access_service import AccessGate
from ..filestore_service import Filestore
from ..hook_service import HookRegistry
from ..logger import get_service_logger
from .generators import IconVariantGenerator
from .services import IconSizeResolver, IconSourceResolver, ResolvedIconSource
from .utils import (
    build_icon_filename,
    icon_format_for_mimetype,
    icon_owner_guid,
    resolve_filestore_prefix,
)

logger = get_service_logger(LoggerName.ICON_PIPELINE, LogSource.PIPELINE)


class IconPipeline:
    """
    Main icon pipeline providing unified access to icon functionality
    with explicit dependency injection.
    """

    def __init__(
        self,
        settings: Settings,
        filestore: Filestore,
        entity_ops: EntityOperations,
        access_gate: AccessGate,
        hooks: HookRegistry,
    ):
        """
        Initialize icon pipeline.

        Args:
            settings: Application settings (icon sizes, quality, master bound)
            filestore: Binary object store for derivatives
            entity_ops: Entity store used for saving and serving lookups
            access_gate: Hidden-visibility gate used while serving
            hooks: Plugin hook registry for the icon size hook
        """
        self.settings = settings
        self.filestore = filestore
        self.entity_ops = entity_ops
        self.access_gate = access_gate
        self.hooks = hooks

        self.size_resolver = IconSizeResolver(settings.icon_sizes, hooks)
        self.source_resolver = IconSourceResolver(
            filestore, remote_timeout=settings.icon_remote_timeout_seconds
        )
        self.generator = IconVariantGenerator(
            jpeg_quality=settings.icon_jpeg_quality,
            honor_upscale=settings.honor_upscale_flag,
        )

    # ------------------------------------------------------------------
    # Size resolution
    # ------------------------------------------------------------------

    def get_icon_sizes(self, entity: Entity, caller_sizes: Optional[Any] = None) -> IconSizeMap:
        return self.size_resolver.resolve(entity, caller_sizes)

    def _master_bound(self, icon_sizes: IconSizeMap) -> Tuple[int, int]:
        master = icon_sizes.get(MASTER_SIZE_NAME)
        if master is not None:
            return master.dimensions
        return (self.settings.icon_master_width, self.settings.icon_master_height)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def make_icons(
        self,
        entity: Any,
        source: Any = None,
        config: Optional[Union[IconGenerationConfig, Mapping[str, Any]]] = None,
    ) -> IconGenerationResult:
        """
        Create every icon variant for an entity.

        Args:
            entity: Entity that will use the icons
            source: File-backed entity, local path or URL of the source image;
                defaults to the entity's own stored content
            config: Size overrides, crop rectangle and filestore prefix

        Returns:
            IconGenerationResult describing every variant
        """
        if not isinstance(entity, Entity):
            logger.warning(
                "Icon generation requested for a non-entity",
                extra_context={"object_type": type(entity).__name__},
            )
            return IconGenerationResult.fatal(IconFailureReason.INVALID_ENTITY)

        if config is None:
            config = IconGenerationConfig()
        elif not isinstance(config, IconGenerationConfig):
            config = IconGenerationConfig.model_validate(config)

        try:
            icon_source = self.source_resolver.resolve(entity, source)
        except (IconSourceError, FilestoreError) as e:
            logger.error(
                f"Failed to resolve icon source for entity {entity.guid}",
                exception=e,
                error_context={"guid": entity.guid},
            )
            return IconGenerationResult.fatal(IconFailureReason.SOURCE_UNREADABLE)

        if icon_source is None:
            logger.warning(
                f"No icon source for entity {entity.guid}",
                extra_context={"guid": entity.guid},
            )
            return IconGenerationResult.fatal(IconFailureReason.NO_SOURCE)

        icon_sizes = self.size_resolver.resolve(entity, config.icon_sizes)
        prefix = resolve_filestore_prefix(entity, config.filestore_prefix)
        coords = config.coords

        try:
            original = icon_source.open_image()
        except IconSourceError as e:
            logger.error(
                f"Failed to load icon source for entity {entity.guid}",
                exception=e,
                error_context={"guid": entity.guid, "source": icon_source.description},
            )
            return IconGenerationResult.fatal(IconFailureReason.SOURCE_UNREADABLE)

        with original:
            master_bound = self._master_bound(icon_sizes)
            variants = [
                self._make_variant(entity, original, size_name, spec, coords, master_bound, prefix)
                for size_name, spec in icon_sizes.items()
                if size_name != MASTER_SIZE_NAME
            ]

        result = IconGenerationResult(
            status=IconGenerationStatus.SUCCESS, variants=variants
        )

        if result.failed:
            result.status = IconGenerationStatus.PARTIAL_FAILURE
            logger.warning(
                f"Icon generation for entity {entity.guid} failed for "
                f"{len(result.failed)} size(s)",
                extra_context={"guid": entity.guid, "failed": sorted(result.failed)},
            )
            return result

        self._commit(entity, icon_source, coords)
        logger.info(
            f"Generated {len(result.generated)} icon(s) for entity {entity.guid}",
            emoji=LogEmoji.THUMBNAIL,
            extra_context={
                "guid": entity.guid,
                "skipped": sorted(result.skipped),
                "icontime": entity.icontime,
            },
        )
        return result

    def _make_variant(
        self,
        entity: Entity,
        original: Image.Image,
        size_name: str,
        spec: IconSizeSpec,
        coords: Optional[CropRectangle],
        master_bound: Tuple[int, int],
        prefix: str,
    ) -> IconVariantResult:
        try:
            rendered = self.generator.render(original, size_name, spec, coords, master_bound)
            if rendered is None:
                logger.debug(
                    f"Skipping size '{size_name}': not croppable while a crop is in effect",
                    emoji=LogEmoji.SKIPPED,
                    extra_context={"guid": entity.guid},
                )
                return IconVariantResult(size=size_name, status=IconVariantStatus.SKIPPED)

            contents, extension = self.generator.encode(rendered, entity.mimetype)
            filename = build_icon_filename(prefix, size_name, extension)
            owner_guid = icon_owner_guid(entity)
            self.filestore.write(owner_guid, filename, contents)

            if spec.metadata_field:
                entity.set_attribute(spec.metadata_field, filename)

            return IconVariantResult(
                size=size_name,
                status=IconVariantStatus.GENERATED,
                filename=filename,
                owner_guid=owner_guid,
                width=rendered.width,
                height=rendered.height,
            )
        except Exception as e:
            logger.error(
                f"Failed to generate icon size '{size_name}' for entity {entity.guid}",
                exception=e,
                error_context={"guid": entity.guid, "size": size_name},
            )
            return IconVariantResult(
                size=size_name, status=IconVariantStatus.FAILED, error=str(e)
            )

    def _commit(
        self,
        entity: Entity,
        icon_source: ResolvedIconSource,
        coords: Optional[CropRectangle],
    ) -> None:
        if entity.is_group:
            master_filename = GROUP_MASTER_FILENAME_TEMPLATE.format(guid=entity.guid)
            try:
                icon_source.copy_to(self.filestore, entity.owner_guid, master_filename)
            except FilestoreError as e:
                logger.error(
                    f"Failed to store full-size group icon for entity {entity.guid}",
                    exception=e,
                    error_context={"guid": entity.guid, "filename": master_filename},
                )

        if coords is not None:
            entity.set_attributes(coords.as_attributes())
        else:
            entity.set_attributes({coord: 0 for coord in CROP_COORDINATE_ATTRIBUTES})

        # Regenerating within the same second must still change the ETag
        entity.set_attribute(
            ICONTIME_ATTRIBUTE, max(unix_timestamp(), entity.icontime + 1)
        )
        self.entity_ops.save_entity(entity)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete_icons(self, entity: Entity) -> List[str]:
        """
        Remove every stored variant of an entity and reset its icon attributes.

        Returns:
            Filenames that were removed
        """
        icon_sizes = self.size_resolver.resolve(entity)
        prefix = resolve_filestore_prefix(entity)
        owner_guid = icon_owner_guid(entity)

        removed = []
        for size_name, spec in icon_sizes.items():
            for extension in ICON_EXTENSIONS:
                filename = build_icon_filename(prefix, size_name, extension)
                if self.filestore.delete(owner_guid, filename):
                    removed.append(filename)
            if spec.metadata_field:
                entity.delete_attribute(spec.metadata_field)

        if entity.is_group:
            master_filename = GROUP_MASTER_FILENAME_TEMPLATE.format(guid=entity.guid)
            if self.filestore.delete(entity.owner_guid, master_filename):
                removed.append(master_filename)

        entity.set_attributes({coord: 0 for coord in CROP_COORDINATE_ATTRIBUTES})
        entity.delete_attribute(ICONTIME_ATTRIBUTE)
        self.entity_ops.save_entity(entity)

        logger.info(
            f"Deleted {len(removed)} icon file(s) for entity {entity.guid}",
            emoji=LogEmoji.DELETE,
            extra_context={"guid": entity.guid},
        )
        return removed

    # ------------------------------------------------------------------
    # Serving
    # ------------------------------------------------------------------

    def _serving_address(self, entity: Entity, size: str) -> Tuple[int, str]:
        if self.settings.serve_legacy_jpg_path:
            filename = LEGACY_SERVE_FILENAME_TEMPLATE.format(guid=entity.guid, size=size)
            return entity.owner_guid, filename

        _, extension = icon_format_for_mimetype(entity.mimetype)
        filename = build_icon_filename(resolve_filestore_prefix(entity), size, extension)
        return icon_owner_guid(entity), filename

    def prepare_icon_for_serving(
        self, guid: int, size: Optional[str] = None
    ) -> Optional[IconServingInfo]:
        """
        Load a stored icon for the HTTP layer.

        Hidden entities are visible for the duration of the lookup; the prior
        visibility is restored on every exit path.

        Returns:
            IconServingInfo, or None if the entity, size or file is missing
        """
        size = (size or DEFAULT_SERVE_SIZE).lower()

        with self.access_gate.show_hidden_entities():
            entity = self.entity_ops.get_entity(guid)
            if entity is None:
                return None

            owner_guid, filename = self._serving_address(entity, size)
            if not self.filestore.exists(owner_guid, filename):
                return None

            contents = self.filestore.read(owner_guid, filename)
            icontime = entity.get_attribute(ICONTIME_ATTRIBUTE)
            mimetype = entity.mimetype or DEFAULT_ICON_MIMETYPE

        return IconServingInfo(
            contents=contents,
            mimetype=mimetype,
            etag=generate_icon_etag(icontime, size),
        )

    def get_pipeline_status(self) -> Dict[str, Any]:
        return {
            "site_icon_sizes": sorted(self.size_resolver.default_icon_sizes),
            "jpeg_quality": self.generator.jpeg_quality,
            "honor_upscale_flag": self.generator.honor_upscale,
            "serve_legacy_jpg_path": self.settings.serve_legacy_jpg_path,
        }


def create_icon_pipeline(
    settings: Settings,
    filestore: Optional[Filestore] = None,
    entity_ops: Optional[EntityOperations] = None,
    access_gate: Optional[AccessGate] = None,
    hooks: Optional[HookRegistry] = None,
) -> IconPipeline:
    """
    Factory function to create an icon pipeline instance.

    Missing collaborators are created from ``settings``; an entity store
    created here shares the pipeline's access gate.

    Returns:
        Configured IconPipeline instance
    """
    access_gate = access_gate or AccessGate()
    return IconPipeline(
        settings=settings,
        filestore=filestore or Filestore(settings.filestore_directory),
        entity_ops=entity_ops or EntityOperations(access_gate),
        access_gate=access_gate,
        hooks=hooks or HookRegistry(),
    )
