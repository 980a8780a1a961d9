"""
Showcase Backend — Upload Handler
==================================

What:  Validates an uploaded image, runs the image transform and stores the
       result, returning the public reference to persist in the record.
Who:   PortfolioService, for project and client creation.
When:  After FastAPI has parsed the multipart body, before the store insert.

Validation (all must pass; nothing is written on failure):
    1. Presence:    an empty upload counts as a missing image
    2. Extension:   .jpeg .jpg .png .gif
    3. MIME type:   the declared Content-Type of the part must be one of the
                    same formats. Both 2 and 3 are required, so renaming
                    malware.exe → photo.jpg still fails on the MIME check and
                    vice versa.
    4. Size:        at most max_upload_size bytes. UploadSizeLimitMiddleware
                    already refused bodies whose Content-Length is too large;
                    this re-checks the bytes actually received.
    5. Decode:      ImageService raises ImageDecodeError for content Pillow
                    cannot read.

Filenames:
    "<kind>-<time.time_ns()>-<8 hex chars>.jpg": the nanosecond timestamp
    orders files by upload time, the random suffix keeps concurrent uploads
    apart.
"""

import logging
import time
import uuid
from pathlib import Path
from typing import Optional

from showcase.exceptions import ValidationError
from showcase.services.file_service import ImageStorage
from showcase.services.image_service import ImageService, image_service

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}

INVALID_TYPE_MESSAGE = "Only image files are allowed!"
MISSING_IMAGE_MESSAGE = "Image is required"


def size_limit_message(max_size: int) -> str:
    return f"File too large. Maximum upload size is {max_size / (1024 * 1024):.0f}MB."


class UploadService:
    """
    Upload pipeline bound to one storage backend and size limit.

    Built once per application in create_app() and handed to the services
    that need it.
    """

    def __init__(
        self,
        storage: ImageStorage,
        max_size: int,
        images: Optional[ImageService] = None,
    ):
        self.storage = storage
        self.max_size = max_size
        self.images = images or image_service

    def validate_type(self, filename: str, content_type: Optional[str]) -> None:
        """
        Check extension and declared MIME type.

        Raises:
            ValidationError("Only image files are allowed!") if either fails
        """
        ext = Path(filename or "").suffix.lower()
        mime = (content_type or "").split(";", 1)[0].strip().lower()

        if ext not in ALLOWED_EXTENSIONS or mime not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message=INVALID_TYPE_MESSAGE,
                field="image",
                context={
                    "extension": ext,
                    "content_type": mime,
                    "allowed_extensions": sorted(ALLOWED_EXTENSIONS),
                },
            )

    def validate_size(self, content_length: Optional[int], actual_size: int) -> None:
        """
        Reject empty uploads and anything above max_size.

        content_length is the size the client declared for the part (may be
        None); actual_size is the number of bytes received.
        """
        if actual_size == 0:
            raise ValidationError(message=MISSING_IMAGE_MESSAGE, field="image")

        for size in (content_length, actual_size):
            if size and size > self.max_size:
                raise ValidationError(
                    message=size_limit_message(self.max_size),
                    field="image",
                    context={"max_size": self.max_size, "size": size},
                )

    @staticmethod
    def generate_filename(kind: str) -> str:
        return f"{kind}-{time.time_ns()}-{uuid.uuid4().hex[:8]}.jpg"

    async def process_upload(
        self,
        kind: str,
        filename: str,
        content_type: Optional[str],
        content: bytes,
        content_length: Optional[int] = None,
    ) -> str:
        """
        Validate → transform → store.

        Args:
            kind:          entity prefix for the stored name ("project", "client")
            filename:      client-side filename (only the extension is used)
            content_type:  declared MIME type of the file part
            content:       raw uploaded bytes
            content_length: declared size of the part, if known

        Returns:
            Public reference of the stored JPEG, e.g. "/uploads/project-...jpg"

        Raises:
            ValidationError:  bad type, empty or oversized upload
            ImageDecodeError: content is not a decodable image
            FileStorageError: the processed image could not be written
        """
        self.validate_type(filename, content_type)
        self.validate_size(content_length, len(content))

        jpeg = await self.images.process(content)
        stored_name = self.generate_filename(kind)
        reference = await self.storage.save(stored_name, jpeg)

        logger.info(
            "Processed %s upload %s (%d bytes in, %d bytes out) -> %s",
            kind,
            filename,
            len(content),
            len(jpeg),
            reference,
        )
        return reference
