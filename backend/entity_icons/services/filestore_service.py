# backend/entity_icons/services/filestore_service.py
"""
Binary object store.

Blobs are addressed by (owner_guid, filename) and live on disk at
``<root>/<owner_guid>/<filename>``. Filenames may contain sub-directories
(``icons/42small.jpg``) but must stay inside the owner's directory.
"""

import shutil
from pathlib import Path
from typing import Union

from ..enums import LogEmoji, LoggerName, LogSource
from ..exceptions import FilestoreError
from .logger import get_service_logger

logger = get_service_logger(LoggerName.FILESTORE_SERVICE, LogSource.STORAGE)


class Filestore:
    """Filesystem-backed blob store with overwrite semantics."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, owner_guid: int, filename: str) -> Path:
        """
        Resolve the on-disk path of a blob.

        Raises:
            FilestoreError: for empty filenames or path traversal attempts
        """
        if not filename:
            raise FilestoreError("Filename must not be empty")

        owner_dir = (self.root / str(int(owner_guid))).resolve()
        full_path = (owner_dir / filename).resolve()

        # Security check: ensure path is within the owner's directory
        try:
            full_path.relative_to(owner_dir)
        except ValueError:
            logger.warning(
                f"Path traversal attempt detected: {filename}",
                emoji=LogEmoji.SECURITY,
                extra_context={
                    "operation": "filestore_path",
                    "owner_guid": owner_guid,
                    "filename": filename,
                },
            )
            raise FilestoreError(f"Invalid filename: {filename}")

        return full_path

    def exists(self, owner_guid: int, filename: str) -> bool:
        try:
            return self.path_for(owner_guid, filename).is_file()
        except FilestoreError:
            return False

    def write(self, owner_guid: int, filename: str, data: bytes) -> Path:
        """Write ``data``, replacing any previous blob at the same address."""
        path = self.path_for(owner_guid, filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise FilestoreError(f"Failed to write {filename}: {e}") from e

        logger.debug(
            f"Wrote {filename}",
            emoji=LogEmoji.STORAGE,
            extra_context={"owner_guid": owner_guid, "bytes": len(data)},
        )
        return path

    def read(self, owner_guid: int, filename: str) -> bytes:
        path = self.path_for(owner_guid, filename)
        try:
            return path.read_bytes()
        except OSError as e:
            raise FilestoreError(f"Failed to read {filename}: {e}") from e

    def copy_from(
        self, source: Union[str, Path], owner_guid: int, filename: str
    ) -> Path:
        """Copy an on-disk file verbatim into the store."""
        path = self.path_for(owner_guid, filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, path)
        except OSError as e:
            raise FilestoreError(f"Failed to copy {source} to {filename}: {e}") from e
        return path

    def delete(self, owner_guid: int, filename: str) -> bool:
        """Delete a blob. Returns True if something was removed."""
        path = self.path_for(owner_guid, filename)
        if not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise FilestoreError(f"Failed to delete {filename}: {e}") from e

        logger.debug(
            f"Deleted {filename}",
            emoji=LogEmoji.DELETE,
            extra_context={"owner_guid": owner_guid},
        )
        return True
