# backend/entity_icons/services/icon_pipeline/services/source_service.py
"""
Icon source resolution.

An explicit source wins: a file-backed entity, a local path or an
http(s) URL. Without one, a file-backed target entity supplies its own
stored content.
"""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse

import requests
from PIL import Image

from ....constants import DEFAULT_REMOTE_TIMEOUT_SECONDS, REMOTE_SOURCE_SCHEMES
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import IconSourceError
from ....models.entity_model import Entity
from ...filestore_service import Filestore
from ...logger import get_service_logger

logger = get_service_logger(LoggerName.ICON_PIPELINE, LogSource.PIPELINE)


@dataclass
class ResolvedIconSource:
    """A source image on disk or already downloaded into memory."""

    description: str
    path: Optional[Path] = None
    content: Optional[bytes] = None

    def open_image(self) -> Image.Image:
        """
        Decode the source.

        Raises:
            IconSourceError: if the source is missing or not a decodable image
        """
        try:
            image = Image.open(self.path if self.path else io.BytesIO(self.content or b""))
            image.load()
        except (OSError, Image.DecompressionBombError) as e:
            raise IconSourceError(f"Cannot read icon source {self.description}: {e}") from e
        return image

    def copy_to(self, filestore: Filestore, owner_guid: int, filename: str) -> Path:
        """Store the raw source bytes verbatim."""
        if self.path is not None:
            return filestore.copy_from(self.path, owner_guid, filename)
        return filestore.write(owner_guid, filename, self.content or b"")


def is_remote_source(source: str) -> bool:
    return urlparse(source).scheme.lower() in REMOTE_SOURCE_SCHEMES


class IconSourceResolver:
    """Turns a source reference into a ``ResolvedIconSource``."""

    def __init__(
        self,
        filestore: Filestore,
        remote_timeout: Union[int, float] = DEFAULT_REMOTE_TIMEOUT_SECONDS,
    ):
        self.filestore = filestore
        self.remote_timeout = remote_timeout

    def resolve(self, entity: Entity, source: Any = None) -> Optional[ResolvedIconSource]:
        """
        Resolve the icon source for ``entity``.

        Returns:
            The resolved source, or None when nothing usable was given

        Raises:
            IconSourceError: if a remote source cannot be downloaded
        """
        if isinstance(source, Entity):
            return self._from_entity(source)

        if isinstance(source, Path):
            return ResolvedIconSource(description=str(source), path=source)

        if isinstance(source, str) and source:
            if is_remote_source(source):
                return self._download(source)
            return ResolvedIconSource(description=source, path=Path(source))

        if entity.has_own_content():
            return self._from_entity(entity)

        return None

    def _from_entity(self, source_entity: Entity) -> Optional[ResolvedIconSource]:
        address = source_entity.content_address()
        if address is None:
            return None
        owner_guid, filename = address
        path = self.filestore.path_for(owner_guid, filename)
        return ResolvedIconSource(description=f"entity {source_entity.guid}", path=path)

    def _download(self, url: str) -> ResolvedIconSource:
        logger.debug(f"Downloading icon source {url}", emoji=LogEmoji.NETWORK)
        try:
            response = requests.get(url, timeout=self.remote_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise IconSourceError(f"Failed to download icon source {url}: {e}") from e

        return ResolvedIconSource(description=url, content=response.content)
