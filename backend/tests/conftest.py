#!/usr/bin/env python3
# backend/tests/conftest.py
"""
Pytest configuration and shared fixtures for Entity Icons tests.
"""

import io
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from entity_icons.config import Settings
from entity_icons.database.entity_operations import EntityOperations
from entity_icons.dependencies import (
    get_access_gate,
    get_entity_operations,
    get_filestore,
    get_hook_registry,
    get_icon_pipeline,
    get_settings,
)
from entity_icons.enums import EntityType
from entity_icons.services.access_service import AccessGate
from entity_icons.services.filestore_service import Filestore
from entity_icons.services.hook_service import HookRegistry
from entity_icons.services.icon_pipeline import create_icon_pipeline


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir)
    shutil.rmtree(temp_dir)


@pytest.fixture
def test_settings(temp_dir):
    """Settings rooted in the temporary directory."""
    settings = Settings(data_directory=str(temp_dir / "data"))
    settings.ensure_directories()
    return settings


@pytest.fixture
def access_gate():
    return AccessGate()


@pytest.fixture
def hook_registry():
    return HookRegistry()


@pytest.fixture
def filestore(test_settings):
    return Filestore(test_settings.filestore_directory)


@pytest.fixture
def entity_ops(access_gate):
    return EntityOperations(access_gate)


@pytest.fixture
def icon_pipeline(test_settings, filestore, entity_ops, access_gate, hook_registry):
    return create_icon_pipeline(
        settings=test_settings,
        filestore=filestore,
        entity_ops=entity_ops,
        access_gate=access_gate,
        hooks=hook_registry,
    )


def build_test_image(width, height, mode="RGB"):
    """Two-tone test image so crops and scales are visible."""
    img = Image.new(mode, (width, height), color="red")
    draw = ImageDraw.Draw(img)
    draw.rectangle([width // 4, height // 4, width * 3 // 4, height * 3 // 4], fill="blue")
    return img


def encode_test_image(width, height, image_format="JPEG"):
    buffer = io.BytesIO()
    mode = "RGBA" if image_format == "PNG" else "RGB"
    build_test_image(width, height, mode).save(buffer, image_format)
    return buffer.getvalue()


@pytest.fixture
def make_source_image(temp_dir):
    """Factory writing a test image to disk and returning its path."""

    def _make(width=800, height=600, name="source.jpg", image_format="JPEG"):
        path = temp_dir / name
        path.write_bytes(encode_test_image(width, height, image_format))
        return path

    return _make


@pytest.fixture
def object_entity(entity_ops):
    """A plain, enabled object entity owned by GUID 7."""
    return entity_ops.create_entity(
        EntityType.OBJECT, subtype="blog", owner_guid=7, mimetype="image/jpeg"
    )


@pytest.fixture
def test_client(test_settings, filestore, entity_ops, access_gate, hook_registry, icon_pipeline):
    """Create test client with the app wired to per-test services."""
    from entity_icons.main import app

    app.dependency_overrides.update(
        {
            get_settings: lambda: test_settings,
            get_filestore: lambda: filestore,
            get_entity_operations: lambda: entity_ops,
            get_access_gate: lambda: access_gate,
            get_hook_registry: lambda: hook_registry,
            get_icon_pipeline: lambda: icon_pipeline,
        }
    )
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_image_bytes():
    """Factory returning encoded test image bytes."""
    return encode_test_image


@pytest.fixture
def make_image():
    """Factory returning an in-memory test image."""
    return build_test_image
