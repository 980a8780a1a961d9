"""
Showcase Backend — Image Storage
=================================

What:  The storage port behind which every file-system side effect lives:
       writing a processed image and deleting it again.
How:   `ImageStorage` is the protocol the services depend on.
       `LocalImageStorage` writes into the upload root that main.py mounts
       at the public prefix; `InMemoryImageStorage` keeps bytes in a dict so
       service tests run without touching disk.
Who:   UploadService (save) and PortfolioService (delete).

References:
    Records never hold filesystem paths. They hold the public reference
    "<prefix>/<filename>" (e.g. "/uploads/project-1700000000000000000-1a2b3c4d.jpg"),
    which resolves against the static mount for browsers and against the
    upload root here.

Write path (atomic):
    1. Bytes are written to a hidden temp file inside the upload root
    2. os.replace() moves it onto the final name (atomic on one filesystem)
    3. On any OSError the temp file is removed and FileStorageError raised
    A reader therefore sees either no file or the complete JPEG.

Delete path (best effort):
    A file that is already gone counts as deleted. Other OS errors are
    logged and swallowed: the record is deleted first, so a dangling file is
    the worst case.
"""

import logging
import uuid
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

import aiofiles
import aiofiles.os

from showcase.exceptions import FileStorageError

logger = logging.getLogger(__name__)


def _check_filename(filename: str) -> None:
    """Storage names are generated server-side and must be bare file names."""
    if not filename or Path(filename).name != filename or filename.startswith("."):
        raise ValueError(f"Invalid storage filename: {filename!r}")


class ImageStorage(Protocol):
    """Defines the storage operations the upload/delete workflows need."""

    url_prefix: str

    async def save(self, filename: str, content: bytes) -> str:
        """Persist `content` under `filename`; return its public reference."""
        ...

    async def delete(self, reference: str) -> bool:
        """Remove the file behind `reference`; False when nothing was removed."""
        ...


class LocalImageStorage:
    """
    Flat directory of processed JPEGs on the local filesystem.

    Directory Structure:
        uploads/
        ├── project-1700000000123456789-1a2b3c4d.jpg
        └── client-1700000000987654321-5e6f7a8b.jpg
    """

    def __init__(self, root: Union[str, Path], url_prefix: str = "/uploads"):
        self.root = Path(root).resolve()
        self.url_prefix = "/" + url_prefix.strip("/")
        self.root.mkdir(parents=True, exist_ok=True)
        logger.info("LocalImageStorage initialized with root=%s", self.root)

    def reference_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def resolve(self, reference: str) -> Optional[Path]:
        """
        Map a public reference back to a path inside the upload root.

        Returns None for references outside the prefix or paths that would
        escape the root (e.g. "/uploads/../config.py").
        """
        prefix = self.url_prefix + "/"
        if not reference.startswith(prefix):
            return None
        relative = reference[len(prefix):]
        if not relative:
            return None

        full_path = (self.root / relative).resolve()
        if full_path.parent != self.root:
            return None
        return full_path

    async def save(self, filename: str, content: bytes) -> str:
        _check_filename(filename)
        final_path = self.root / filename
        temp_path = self.root / f".{filename}.{uuid.uuid4().hex}.tmp"

        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(content)
            await aiofiles.os.replace(temp_path, final_path)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", final_path, str(e))
            try:
                await aiofiles.os.remove(temp_path)
            except OSError:
                logger.debug("Temp file already gone: %s", temp_path.name)
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"filename": filename, "os_error": str(e)},
            ) from e

        logger.info("Image stored: %s (%d bytes)", filename, len(content))
        return self.reference_for(filename)

    async def delete(self, reference: str) -> bool:
        path = self.resolve(reference)
        if path is None:
            logger.warning("Refusing to delete image outside upload root: %s", reference)
            return False

        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.debug("Image already gone: %s", path.name)
            return False
        except OSError as e:
            # Record is already deleted; a leftover file is tolerated
            logger.warning("Failed to delete image %s: %s", path.name, str(e))
            return False

        logger.info("Deleted image: %s", path.name)
        return True


class InMemoryImageStorage:
    """Test double for image storage; `files` maps filename → bytes, exists() lets tests check it."""

    def __init__(self, url_prefix: str = "/uploads"):
        self.url_prefix = "/" + url_prefix.strip("/")
        self.files: Dict[str, bytes] = {}

    def _name(self, reference: str) -> Optional[str]:
        prefix = self.url_prefix + "/"
        if not reference.startswith(prefix):
            return None
        return reference[len(prefix):]

    async def save(self, filename: str, content: bytes) -> str:
        _check_filename(filename)
        self.files[filename] = content
        return f"{self.url_prefix}/{filename}"

    async def delete(self, reference: str) -> bool:
        name = self._name(reference)
        return name is not None and self.files.pop(name, None) is not None

    def exists(self, reference: str) -> bool:
        name = self._name(reference)
        return name is not None and name in self.files
