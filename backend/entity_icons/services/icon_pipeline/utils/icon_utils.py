# backend/entity_icons/services/icon_pipeline/utils/icon_utils.py
"""
Icon Utility Functions

Resize, crop and encode helpers. Every helper returns a new image and never
modifies its input.
"""

import io
from typing import Optional, Tuple

from PIL import Image

from ....constants import (
    DEFAULT_ICON_FORMAT,
    DEFAULT_ICON_PREFIX,
    ICON_FORMATS_BY_MIMETYPE,
    ICON_PREFIX_BY_ENTITY_TYPE,
)
from ....exceptions import IconEncodingError, IconGenerationError
from ....models.crop_model import CropRectangle
from ....models.entity_model import Entity
from .constants import (
    ICON_RESAMPLE,
    JPEG_BACKGROUND_COLOR,
    JPEG_WRITABLE_MODES,
    MIN_SCALED_DIMENSION,
    PNG_WRITABLE_MODES,
)


def calculate_inside_dimensions(
    source_size: Tuple[int, int],
    target_size: Tuple[int, int],
    allow_upscale: bool = False,
) -> Tuple[int, int]:
    """
    Calculate dimensions that fit inside target size preserving aspect ratio.

    Args:
        source_size: (width, height) of source image
        target_size: (width, height) bounding box
        allow_upscale: Whether the result may be larger than the source

    Returns:
        (width, height) of the fitted image
    """
    source_width, source_height = source_size
    target_width, target_height = target_size

    ratio = min(target_width / source_width, target_height / source_height)
    if not allow_upscale:
        ratio = min(ratio, 1.0)

    new_width = max(MIN_SCALED_DIMENSION, min(target_width, round(source_width * ratio)))
    new_height = max(
        MIN_SCALED_DIMENSION, min(target_height, round(source_height * ratio))
    )
    if not allow_upscale:
        new_width = min(new_width, source_width)
        new_height = min(new_height, source_height)

    return (new_width, new_height)


def calculate_cover_dimensions(
    source_size: Tuple[int, int], target_size: Tuple[int, int]
) -> Tuple[int, int]:
    """
    Calculate dimensions that fully cover target size preserving aspect ratio.

    One axis matches the target exactly, the other overflows (or matches).
    """
    source_width, source_height = source_size
    target_width, target_height = target_size

    ratio = max(target_width / source_width, target_height / source_height)

    # Rounding must never leave an axis short of the target
    new_width = max(target_width, round(source_width * ratio))
    new_height = max(target_height, round(source_height * ratio))
    return (new_width, new_height)


def scale_inside(
    image: Image.Image, width: int, height: int, allow_upscale: bool = False
) -> Image.Image:
    """Scale to fit inside width×height, by default never enlarging."""
    new_size = calculate_inside_dimensions(
        image.size, (width, height), allow_upscale=allow_upscale
    )
    if new_size == image.size:
        return image.copy()
    return image.resize(new_size, ICON_RESAMPLE)


def scale_to_cover(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale (up or down) so the image covers width×height."""
    new_size = calculate_cover_dimensions(image.size, (width, height))
    if new_size == image.size:
        return image.copy()
    return image.resize(new_size, ICON_RESAMPLE)


def crop_center(image: Image.Image, width: int, height: int) -> Image.Image:
    """Cut a width×height window out of the middle of the image."""
    image_width, image_height = image.size
    width = min(width, image_width)
    height = min(height, image_height)
    left = (image_width - width) // 2
    top = (image_height - height) // 2
    return image.crop((left, top, left + width, top + height))


def crop_rectangle(image: Image.Image, coords: CropRectangle) -> Image.Image:
    """
    Cut the crop rectangle out of the image, clamped to its bounds.

    Raises:
        IconGenerationError: if nothing of the rectangle lies inside the image
    """
    image_width, image_height = image.size
    left = min(coords.x1, image_width)
    top = min(coords.y1, image_height)
    right = min(coords.x2, image_width)
    lower = min(coords.y2, image_height)

    if right <= left or lower <= top:
        raise IconGenerationError(
            f"Crop rectangle {coords.as_box()} is empty for a "
            f"{image_width}x{image_height} image"
        )
    return image.crop((left, top, right, lower))


def icon_format_for_mimetype(mimetype: Optional[str]) -> Tuple[str, str]:
    """(Pillow format, extension) for a mimetype; JPEG for anything unknown."""
    return ICON_FORMATS_BY_MIMETYPE.get((mimetype or "").lower(), DEFAULT_ICON_FORMAT)


def _flatten_for_jpeg(image: Image.Image) -> Image.Image:
    if image.mode in JPEG_WRITABLE_MODES:
        return image
    if image.mode in ("RGBA", "LA") or (
        image.mode == "P" and "transparency" in image.info
    ):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, JPEG_BACKGROUND_COLOR)
        background.paste(rgba, mask=rgba.split()[-1])
        return background
    return image.convert("RGB")


def encode_image(image: Image.Image, image_format: str, jpeg_quality: int) -> bytes:
    """
    Encode an image in the given Pillow format.

    Raises:
        IconEncodingError: if Pillow cannot write the image
    """
    buffer = io.BytesIO()
    try:
        if image_format == "JPEG":
            _flatten_for_jpeg(image).save(
                buffer, "JPEG", quality=jpeg_quality, optimize=True
            )
        elif image_format == "PNG":
            if image.mode not in PNG_WRITABLE_MODES:
                image = image.convert("RGBA")
            image.save(buffer, "PNG", optimize=True)
        else:
            image.save(buffer, image_format)
    except (OSError, ValueError) as e:
        raise IconEncodingError(f"Failed to encode icon as {image_format}: {e}") from e

    return buffer.getvalue()


def resolve_filestore_prefix(entity: Entity, explicit_prefix: Optional[str] = None) -> str:
    """
    Filestore prefix for an entity's icons, the GUID always appended.

    Users go under ``profile/``, groups under ``groups/``, everything else
    under ``icons/`` unless an explicit prefix is given.
    """
    if explicit_prefix is None:
        explicit_prefix = ICON_PREFIX_BY_ENTITY_TYPE.get(entity.type, DEFAULT_ICON_PREFIX)
    return f"{explicit_prefix}{entity.guid}"


def build_icon_filename(prefix: str, size_name: str, extension: str) -> str:
    return f"{prefix}{size_name}{extension}"


def icon_owner_guid(entity: Entity) -> int:
    """Users own their own icons; everything else belongs to the entity owner."""
    return entity.guid if entity.is_user else entity.owner_guid
