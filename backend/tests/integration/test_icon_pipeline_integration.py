#!/usr/bin/env python3
"""
Icon Pipeline Integration Tests.

Runs IconPipeline against a real filestore in a temporary directory and
checks the generation and serving behaviour end to end.
"""

import io
from unittest.mock import patch

import pytest
from PIL import Image

from entity_icons.constants import ICON_SIZES_HOOK
from entity_icons.enums import (
    EntityType,
    IconFailureReason,
    IconGenerationStatus,
    IconVariantStatus,
)
from entity_icons.exceptions import IconEncodingError
from entity_icons.models import CropRectangle, IconGenerationConfig
from entity_icons.services.icon_pipeline.generators import IconVariantGenerator
from entity_icons.utils.cache_helpers import generate_icon_etag


def _image_size(filestore, owner_guid, filename):
    with Image.open(io.BytesIO(filestore.read(owner_guid, filename))) as image:
        return image.size, image.format


@pytest.mark.integration
@pytest.mark.icons
class TestIconGeneration:
    """Generation scenarios over the default and file size tables."""

    def test_file_entity_end_to_end(self, icon_pipeline, entity_ops, filestore, make_image_bytes):
        filestore.write(1, "file/photo.jpg", make_image_bytes(800, 400))
        entity = entity_ops.create_entity(
            EntityType.OBJECT,
            subtype="file",
            owner_guid=1,
            mimetype="image/jpeg",
            filename="file/photo.jpg",
        )

        result = icon_pipeline.make_icons(entity)

        assert result.status == IconGenerationStatus.SUCCESS
        assert result.generated == {"thumb", "smallthumb", "largethumb"}
        for size_name, side in [("thumb", 60), ("smallthumb", 153), ("largethumb", 600)]:
            filename = f"icons/{entity.guid}{size_name}.jpg"
            assert _image_size(filestore, 1, filename) == ((side, side), "JPEG")
        assert entity.get_attribute("thumbnail") == f"icons/{entity.guid}thumb.jpg"
        assert entity.get_attribute("smallthumb") == f"icons/{entity.guid}smallthumb.jpg"
        assert entity.get_attribute("largethumb") == f"icons/{entity.guid}largethumb.jpg"
        assert entity.icontime > 0
        assert entity.crop_coordinates == {"x1": 0, "y1": 0, "x2": 0, "y2": 0}

    def test_master_is_never_written(self, icon_pipeline, object_entity, filestore, make_source_image):
        result = icon_pipeline.make_icons(object_entity, make_source_image(800, 600))

        assert result.success
        assert "master" not in result.generated
        assert result.variant("master") is None
        assert not filestore.exists(7, f"icons/{object_entity.guid}master.jpg")
        for size_name, side in [("topbar", 16), ("tiny", 25), ("small", 40), ("medium", 100), ("large", 200)]:
            assert _image_size(filestore, 7, f"icons/{object_entity.guid}{size_name}.jpg")[0] == (side, side)

    def test_user_icons_owned_by_user_under_profile(self, icon_pipeline, entity_ops, filestore, make_source_image):
        user = entity_ops.create_entity(EntityType.USER, owner_guid=0)
        icon_pipeline.make_icons(user, make_source_image(300, 300))

        assert filestore.exists(user.guid, f"profile/{user.guid}medium.jpg")

    def test_aspect_fit_for_non_croppable_size(self, icon_pipeline, object_entity, filestore, make_source_image):
        config = {"icon_sizes": {"banner": {"width": 300, "height": 300}}}
        result = icon_pipeline.make_icons(object_entity, make_source_image(800, 400), config)

        assert result.success
        size, _ = _image_size(filestore, 7, f"icons/{object_entity.guid}banner.jpg")
        assert size == (300, 150)

    def test_aspect_fit_never_upscales(self, icon_pipeline, object_entity, filestore, make_source_image):
        config = {"icon_sizes": {"banner": {"width": 300, "height": 300, "upscale": True}}}
        icon_pipeline.make_icons(object_entity, make_source_image(120, 60), config)

        size, _ = _image_size(filestore, 7, f"icons/{object_entity.guid}banner.jpg")
        assert size == (120, 60)

    def test_crop_skips_non_croppable_sizes(self, icon_pipeline, object_entity, filestore, make_source_image):
        config = IconGenerationConfig(
            icon_sizes={"banner": {"width": 300, "height": 300}},
            coords=CropRectangle(x1=10, y1=10, x2=110, y2=110),
        )
        result = icon_pipeline.make_icons(object_entity, make_source_image(800, 600), config)

        assert result.status == IconGenerationStatus.SUCCESS
        assert result.variant("banner").status == IconVariantStatus.SKIPPED
        assert not filestore.exists(7, f"icons/{object_entity.guid}banner.jpg")
        assert _image_size(filestore, 7, f"icons/{object_entity.guid}large.jpg")[0] == (200, 200)

    def test_crop_coordinates_round_trip(self, icon_pipeline, object_entity, make_source_image):
        config = {"coords": {"x1": 10, "y1": 10, "x2": 110, "y2": 110}}
        assert icon_pipeline.make_icons(object_entity, make_source_image(800, 600), config)

        assert object_entity.crop_coordinates == {"x1": 10, "y1": 10, "x2": 110, "y2": 110}

        assert icon_pipeline.make_icons(object_entity, make_source_image(800, 600))
        assert object_entity.crop_coordinates == {"x1": 0, "y1": 0, "x2": 0, "y2": 0}

    def test_master_entry_sets_crop_space(self, icon_pipeline, object_entity, filestore, make_source_image):
        # 800x600 fits a 200x200 master as 200x150, blue spans (50, 37)-(150, 112)
        config = {
            "icon_sizes": {"master": {"width": 200, "height": 200}},
            "coords": {"x1": 0, "y1": 0, "x2": 100, "y2": 100},
        }
        result = icon_pipeline.make_icons(object_entity, make_source_image(800, 600), config)

        assert result.status == IconGenerationStatus.SUCCESS
        assert "master" not in result.generated
        data = filestore.read(7, f"icons/{object_entity.guid}large.jpg")
        with Image.open(io.BytesIO(data)) as icon:
            red, _, blue = icon.convert("RGB").getpixel((180, 180))
            corner_red, _, corner_blue = icon.convert("RGB").getpixel((10, 10))

        # Under the default 550x550 master the same rectangle is all red
        assert blue > red
        assert corner_red > corner_blue

    @pytest.mark.parametrize(
        "mimetype, extension, image_format",
        [
            ("image/png", ".png", "PNG"),
            ("image/gif", ".gif", "GIF"),
            ("image/jpeg", ".jpg", "JPEG"),
            ("image/bmp", ".jpg", "JPEG"),
        ],
    )
    def test_mimetype_drives_extension(
        self, icon_pipeline, entity_ops, filestore, make_source_image, mimetype, extension, image_format
    ):
        entity = entity_ops.create_entity(EntityType.OBJECT, owner_guid=7, mimetype=mimetype)
        result = icon_pipeline.make_icons(entity, make_source_image(200, 200))

        variant = result.variant("small")
        assert variant.filename == f"icons/{entity.guid}small{extension}"
        assert _image_size(filestore, 7, variant.filename) == ((40, 40), image_format)

    def test_jpeg_quality_is_configured_value(self, icon_pipeline, object_entity, make_source_image):
        with patch(
            "entity_icons.services.icon_pipeline.generators.icon_generator.encode_image",
            return_value=b"jpeg",
        ) as mock_encode:
            icon_pipeline.make_icons(object_entity, make_source_image(100, 100))

        assert {call.args[2] for call in mock_encode.call_args_list} == {80}

    def test_explicit_prefix(self, icon_pipeline, object_entity, filestore, make_source_image):
        icon_pipeline.make_icons(
            object_entity, make_source_image(100, 100), {"filestore_prefix": "custom/"}
        )
        assert filestore.exists(7, f"custom/{object_entity.guid}tiny.jpg")

    def test_hook_added_size_is_generated(self, icon_pipeline, hook_registry, object_entity, filestore, make_source_image):
        def add_size(hook, entity_type, sizes, params):
            sizes["huge"] = {"width": 400, "height": 400, "croppable": True}

        hook_registry.register(ICON_SIZES_HOOK, "object", add_size)
        icon_pipeline.make_icons(object_entity, make_source_image(800, 600))

        assert _image_size(filestore, 7, f"icons/{object_entity.guid}huge.jpg")[0] == (400, 400)


@pytest.mark.integration
@pytest.mark.icons
class TestIconGenerationFailures:
    """Fatal and partial failure outcomes."""

    def test_non_entity_is_fatal(self, icon_pipeline, make_source_image):
        result = icon_pipeline.make_icons({"guid": 1}, make_source_image())

        assert result.status == IconGenerationStatus.FATAL
        assert result.reason == IconFailureReason.INVALID_ENTITY

    def test_missing_source_is_fatal(self, icon_pipeline, object_entity, filestore):
        result = icon_pipeline.make_icons(object_entity)

        assert result.reason == IconFailureReason.NO_SOURCE
        assert object_entity.icontime == 0

    def test_unreadable_source_is_fatal(self, icon_pipeline, object_entity, temp_dir):
        path = temp_dir / "broken.jpg"
        path.write_bytes(b"not really a jpeg")
        result = icon_pipeline.make_icons(object_entity, path)

        assert result.status == IconGenerationStatus.FATAL
        assert result.reason == IconFailureReason.SOURCE_UNREADABLE

    def test_partial_failure_keeps_written_files_and_skips_commit(
        self, icon_pipeline, object_entity, filestore, make_source_image
    ):
        object_entity.set_attributes({"icontime": 1234, "x1": 5, "y1": 5, "x2": 50, "y2": 50})
        original_encode = IconVariantGenerator.encode

        def failing_encode(generator, image, mimetype):
            if image.size == (200, 200):
                raise IconEncodingError("disk full")
            return original_encode(generator, image, mimetype)

        with patch.object(IconVariantGenerator, "encode", failing_encode):
            result = icon_pipeline.make_icons(object_entity, make_source_image(800, 600))

        assert result.status == IconGenerationStatus.PARTIAL_FAILURE
        assert result.failed == {"large"}
        assert "disk full" in result.variant("large").error
        assert filestore.exists(7, f"icons/{object_entity.guid}small.jpg")
        assert not filestore.exists(7, f"icons/{object_entity.guid}large.jpg")
        assert object_entity.icontime == 1234
        assert object_entity.crop_coordinates == {"x1": 5, "y1": 5, "x2": 50, "y2": 50}

    def test_crop_outside_image_fails_croppable_sizes(self, icon_pipeline, object_entity, make_source_image):
        config = {"coords": {"x1": 600, "y1": 600, "x2": 700, "y2": 700}}
        result = icon_pipeline.make_icons(object_entity, make_source_image(100, 100), config)

        assert result.status == IconGenerationStatus.PARTIAL_FAILURE
        assert result.failed == {"topbar", "tiny", "small", "medium", "large"}


@pytest.mark.integration
@pytest.mark.icons
class TestGroupIcons:
    """Group specific side effects."""

    def test_group_master_copy(self, icon_pipeline, entity_ops, filestore, make_source_image):
        group = entity_ops.create_entity(EntityType.GROUP, owner_guid=3)
        source = make_source_image(640, 480)

        assert icon_pipeline.make_icons(group, source)
        assert filestore.read(3, f"groups/{group.guid}.jpg") == source.read_bytes()
        assert filestore.exists(3, f"groups/{group.guid}medium.jpg")

    def test_no_master_copy_on_partial_failure(self, icon_pipeline, entity_ops, filestore, make_source_image):
        group = entity_ops.create_entity(EntityType.GROUP, owner_guid=3)

        with patch.object(IconVariantGenerator, "encode", side_effect=IconEncodingError("boom")):
            result = icon_pipeline.make_icons(group, make_source_image(640, 480))

        assert result.status == IconGenerationStatus.PARTIAL_FAILURE
        assert not filestore.exists(3, f"groups/{group.guid}.jpg")


@pytest.mark.integration
@pytest.mark.icons
class TestIconLifecycle:
    """icontime, deletion and serving lookups."""

    def test_icontime_increases_on_regeneration(self, icon_pipeline, object_entity, make_source_image):
        source = make_source_image(100, 100)
        icon_pipeline.make_icons(object_entity, source)
        first = object_entity.icontime
        icon_pipeline.make_icons(object_entity, source)

        assert object_entity.icontime > first

    def test_delete_icons(self, icon_pipeline, object_entity, filestore, make_source_image):
        icon_pipeline.make_icons(object_entity, make_source_image(100, 100))
        removed = icon_pipeline.delete_icons(object_entity)

        assert f"icons/{object_entity.guid}medium.jpg" in removed
        assert not filestore.exists(7, f"icons/{object_entity.guid}medium.jpg")
        assert object_entity.icontime == 0

    def test_prepare_icon_for_serving(self, icon_pipeline, object_entity, make_source_image):
        icon_pipeline.make_icons(object_entity, make_source_image(100, 100))
        info = icon_pipeline.prepare_icon_for_serving(object_entity.guid, "SMALL")

        assert info.mimetype == "image/jpeg"
        assert info.etag == generate_icon_etag(object_entity.icontime, "small")
        with Image.open(io.BytesIO(info.contents)) as image:
            assert image.size == (40, 40)

    def test_serving_defaults_to_medium(self, icon_pipeline, object_entity, make_source_image):
        icon_pipeline.make_icons(object_entity, make_source_image(300, 300))
        info = icon_pipeline.prepare_icon_for_serving(object_entity.guid)

        with Image.open(io.BytesIO(info.contents)) as image:
            assert image.size == (100, 100)

    def test_serving_hidden_entity_restores_gate(self, icon_pipeline, entity_ops, access_gate, make_source_image):
        hidden = entity_ops.create_entity(EntityType.OBJECT, owner_guid=7, enabled=False)
        icon_pipeline.make_icons(hidden, make_source_image(100, 100))

        assert icon_pipeline.prepare_icon_for_serving(hidden.guid, "tiny") is not None
        assert access_gate.get_hidden_visibility() is False

    @pytest.mark.parametrize("guid, size", [(999, "medium"), (None, "nosuchsize")])
    def test_missing_icon_returns_none_and_restores_gate(
        self, icon_pipeline, object_entity, access_gate, guid, size
    ):
        assert icon_pipeline.prepare_icon_for_serving(guid or object_entity.guid, size) is None
        assert access_gate.get_hidden_visibility() is False

    def test_legacy_path_ignores_png_extension(self, icon_pipeline, entity_ops, make_source_image):
        entity = entity_ops.create_entity(EntityType.OBJECT, owner_guid=7, mimetype="image/png")
        icon_pipeline.make_icons(entity, make_source_image(100, 100))

        assert icon_pipeline.prepare_icon_for_serving(entity.guid, "small") is None

    def test_mimetype_serving_path_when_legacy_disabled(
        self, icon_pipeline, test_settings, entity_ops, make_source_image
    ):
        test_settings.serve_legacy_jpg_path = False
        entity = entity_ops.create_entity(EntityType.OBJECT, owner_guid=7, mimetype="image/png")
        icon_pipeline.make_icons(entity, make_source_image(100, 100))

        info = icon_pipeline.prepare_icon_for_serving(entity.guid, "small")
        assert info is not None
        assert info.mimetype == "image/png"
