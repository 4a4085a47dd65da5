#!/usr/bin/env python3
"""
Unit tests for IconSourceResolver.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from entity_icons.enums import EntityType
from entity_icons.exceptions import IconSourceError
from entity_icons.models.entity_model import Entity, FileEntity
from entity_icons.services.icon_pipeline.services import (
    IconSourceResolver,
    ResolvedIconSource,
)
from entity_icons.services.icon_pipeline.services.source_service import is_remote_source


@pytest.mark.unit
@pytest.mark.icons
class TestIconSourceResolver:
    """Test suite for source resolution order."""

    @pytest.fixture
    def resolver(self, filestore):
        return IconSourceResolver(filestore, remote_timeout=5)

    @pytest.fixture
    def plain_entity(self):
        return Entity(guid=1, type=EntityType.USER)

    @pytest.fixture
    def file_entity(self):
        return FileEntity(guid=2, type=EntityType.OBJECT, subtype="file", owner_guid=1, filename="file/photo.jpg")

    def test_entity_source_resolves_to_its_blob(self, resolver, filestore, plain_entity, file_entity):
        source = resolver.resolve(plain_entity, file_entity)
        assert source.path == filestore.path_for(1, "file/photo.jpg")

    def test_path_source(self, resolver, plain_entity, temp_dir):
        path = temp_dir / "upload.png"
        assert resolver.resolve(plain_entity, path).path == path

    def test_string_path_source(self, resolver, plain_entity):
        assert resolver.resolve(plain_entity, "/tmp/upload.jpg").path == Path("/tmp/upload.jpg")

    def test_explicit_source_wins_over_own_content(self, resolver, file_entity, temp_dir):
        path = temp_dir / "other.jpg"
        assert resolver.resolve(file_entity, path).path == path

    def test_falls_back_to_own_content(self, resolver, filestore, file_entity):
        source = resolver.resolve(file_entity)
        assert source.path == filestore.path_for(1, "file/photo.jpg")

    def test_entity_without_content_and_no_source(self, resolver, plain_entity):
        assert resolver.resolve(plain_entity) is None
        assert resolver.resolve(plain_entity, plain_entity) is None

    def test_remote_source_is_downloaded(self, resolver, plain_entity, make_image_bytes):
        response = MagicMock()
        response.content = make_image_bytes(30, 30)
        with patch("requests.get", return_value=response) as mock_get:
            source = resolver.resolve(plain_entity, "https://example.com/a.jpg")

        mock_get.assert_called_once_with("https://example.com/a.jpg", timeout=5)
        assert source.path is None
        with source.open_image() as image:
            assert image.size == (30, 30)

    def test_remote_failure_raises_source_error(self, resolver, plain_entity):
        with patch("requests.get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(IconSourceError):
                resolver.resolve(plain_entity, "http://example.com/a.jpg")

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("http://example.com/a.jpg", True),
            ("HTTPS://example.com/a.jpg", True),
            ("/var/data/a.jpg", False),
            ("ftp://example.com/a.jpg", False),
        ],
    )
    def test_is_remote_source(self, value, expected):
        assert is_remote_source(value) is expected


@pytest.mark.unit
@pytest.mark.icons
class TestResolvedIconSource:
    """Test suite for decoding and copying resolved sources."""

    def test_open_missing_file_raises(self, temp_dir):
        source = ResolvedIconSource(description="missing", path=temp_dir / "nope.jpg")
        with pytest.raises(IconSourceError):
            source.open_image()

    def test_open_non_image_raises(self, temp_dir):
        path = temp_dir / "notes.txt"
        path.write_text("not an image")
        with pytest.raises(IconSourceError):
            ResolvedIconSource(description="text", path=path).open_image()

    def test_copy_to_is_verbatim(self, filestore, make_source_image):
        path = make_source_image(80, 60)
        ResolvedIconSource(description="upload", path=path).copy_to(filestore, 4, "groups/9.jpg")

        assert filestore.read(4, "groups/9.jpg") == path.read_bytes()

    def test_copy_in_memory_content(self, filestore):
        ResolvedIconSource(description="remote", content=b"abc").copy_to(filestore, 4, "groups/9.jpg")
        assert filestore.read(4, "groups/9.jpg") == b"abc"
