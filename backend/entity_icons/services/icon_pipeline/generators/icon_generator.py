# backend/entity_icons/services/icon_pipeline/generators/icon_generator.py
"""
Icon Variant Generator Component

Derives one icon variant from a decoded source image: optional pre-crop to
a user rectangle, then either cover-crop to the exact target or fit inside
it, then encode for the entity's mimetype.
"""

from typing import Optional, Tuple

from PIL import Image

from ....constants import DEFAULT_JPEG_QUALITY
from ....models.crop_model import CropRectangle
from ....models.icon_size_model import IconSizeSpec
from ..utils.icon_utils import (
    crop_center,
    crop_rectangle,
    encode_image,
    icon_format_for_mimetype,
    scale_inside,
    scale_to_cover,
)


class IconVariantGenerator:
    """
    Component responsible for rendering and encoding single icon variants.

    The source image is never modified; every variant is derived from it
    independently.
    """

    def __init__(
        self, jpeg_quality: int = DEFAULT_JPEG_QUALITY, honor_upscale: bool = False
    ):
        """
        Initialize icon variant generator.

        Args:
            jpeg_quality: JPEG compression quality (1-95)
            honor_upscale: Let fit-inside variants flagged ``upscale`` enlarge
        """
        self.jpeg_quality = max(1, min(95, jpeg_quality))
        self.honor_upscale = honor_upscale

    def render(
        self,
        source: Image.Image,
        size_name: str,
        spec: IconSizeSpec,
        coords: Optional[CropRectangle],
        master_bound: Tuple[int, int],
    ) -> Optional[Image.Image]:
        """
        Produce the pixels of one variant.

        Args:
            source: Decoded original image
            size_name: Name of the variant
            spec: Size definition of the variant
            coords: Optional crop rectangle in master-bound space
            master_bound: (width, height) the source is fitted into before cropping

        Returns:
            The rendered image, or None when the variant has no treatment
            (not croppable while a crop rectangle is in effect)
        """
        croppable = spec.is_croppable(size_name)

        if coords is not None and croppable:
            master_width, master_height = master_bound
            image = scale_inside(source, master_width, master_height)
            image = crop_rectangle(image, coords)
        else:
            image = source

        if croppable:
            image = scale_to_cover(image, spec.width, spec.height)
            return crop_center(image, spec.width, spec.height)

        if coords is None:
            return scale_inside(
                image,
                spec.width,
                spec.height,
                allow_upscale=self.honor_upscale and spec.upscale,
            )

        return None

    def encode(self, image: Image.Image, mimetype: Optional[str]) -> Tuple[bytes, str]:
        """
        Encode a rendered variant for the entity's mimetype.

        Returns:
            (encoded bytes, file extension)
        """
        image_format, extension = icon_format_for_mimetype(mimetype)
        return encode_image(image, image_format, self.jpeg_quality), extension
