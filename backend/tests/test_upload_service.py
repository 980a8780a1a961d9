"""
Showcase Backend — Upload Handler Unit Tests
=============================================

What:  Tests for UploadService validation and the validate → transform →
       store pipeline.
How:   InMemoryImageStorage stands in for the upload directory; images are
       generated with Pillow.

Test Strategy:
    ✅ Allowed extensions (.jpeg .jpg .png .gif), case-insensitive
    ✅ Extension and MIME type must BOTH be allowed
    ✅ Size limit (boundary at max_size), empty uploads
    ✅ Nothing is stored when any check fails
    ✅ Stored name format "<kind>-<ns timestamp>-<8 hex>.jpg"
"""

import io
import re

import pytest
from PIL import Image

from showcase.exceptions import ImageDecodeError, ValidationError
from showcase.services.upload_service import (
    INVALID_TYPE_MESSAGE,
    MISSING_IMAGE_MESSAGE,
    UploadService,
    size_limit_message,
)

MAX_SIZE = 5 * 1024 * 1024


class TestUploadValidation:

    @pytest.fixture(autouse=True)
    def _service(self, memory_storage):
        self.service = UploadService(memory_storage, max_size=MAX_SIZE)

    # ── Type Validation ───────────────────────────────────────────────────

    @pytest.mark.parametrize(
        "filename, content_type",
        [
            ("photo.jpg", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("photo.JPG", "image/jpg"),
            ("logo.png", "image/png"),
            ("anim.gif", "image/gif"),
            ("logo.Png", "image/png; charset=binary"),
        ],
    )
    def test_allowed_types_pass(self, filename, content_type):
        self.service.validate_type(filename, content_type)

    @pytest.mark.parametrize(
        "filename, content_type",
        [
            ("document.pdf", "application/pdf"),
            ("malware.exe", "image/jpeg"),
            ("photo.jpg", "application/octet-stream"),
            ("photo.bmp", "image/bmp"),
            ("noextension", "image/png"),
            ("photo.png", None),
        ],
    )
    def test_disallowed_types_rejected(self, filename, content_type):
        with pytest.raises(ValidationError, match=INVALID_TYPE_MESSAGE):
            self.service.validate_type(filename, content_type)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_size_at_limit_passes(self):
        self.service.validate_size(MAX_SIZE, MAX_SIZE)

    def test_size_over_limit_rejected(self):
        with pytest.raises(ValidationError, match="File too large"):
            self.service.validate_size(None, MAX_SIZE + 1)

    def test_declared_size_over_limit_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.validate_size(MAX_SIZE + 1, 10)
        assert exc_info.value.context["max_size"] == MAX_SIZE

    def test_empty_upload_counts_as_missing(self):
        with pytest.raises(ValidationError, match=MISSING_IMAGE_MESSAGE):
            self.service.validate_size(0, 0)

    def test_size_limit_message(self):
        assert size_limit_message(MAX_SIZE) == "File too large. Maximum upload size is 5MB."

    # ── Filenames ─────────────────────────────────────────────────────────

    def test_generate_filename_format(self):
        name = UploadService.generate_filename("project")
        assert re.fullmatch(r"project-\d+-[0-9a-f]{8}\.jpg", name)

    def test_generated_filenames_are_unique(self):
        names = {UploadService.generate_filename("client") for _ in range(200)}
        assert len(names) == 200


class TestProcessUpload:

    @pytest.fixture(autouse=True)
    def _service(self, memory_storage):
        self.storage = memory_storage
        self.service = UploadService(memory_storage, max_size=MAX_SIZE)

    @pytest.mark.asyncio
    async def test_stores_processed_jpeg(self, png_bytes):
        reference = await self.service.process_upload(
            kind="project",
            filename="site.png",
            content_type="image/png",
            content=png_bytes,
        )

        assert reference.startswith("/uploads/project-")
        assert reference.endswith(".jpg")
        stored = Image.open(io.BytesIO(self.storage.files[reference.rsplit("/", 1)[1]]))
        assert stored.format == "JPEG"
        assert stored.size == (450, 350)

    @pytest.mark.asyncio
    async def test_gif_is_converted(self, gif_bytes):
        reference = await self.service.process_upload(
            kind="client",
            filename="face.gif",
            content_type="image/gif",
            content=gif_bytes,
        )
        assert reference.startswith("/uploads/client-")

    @pytest.mark.asyncio
    async def test_wrong_type_stores_nothing(self, png_bytes):
        with pytest.raises(ValidationError, match=INVALID_TYPE_MESSAGE):
            await self.service.process_upload(
                kind="project",
                filename="site.pdf",
                content_type="application/pdf",
                content=png_bytes,
            )
        assert self.storage.files == {}

    @pytest.mark.asyncio
    async def test_oversized_upload_stores_nothing(self, memory_storage, png_bytes):
        service = UploadService(memory_storage, max_size=len(png_bytes) - 1)
        with pytest.raises(ValidationError, match="File too large"):
            await service.process_upload(
                kind="project",
                filename="site.png",
                content_type="image/png",
                content=png_bytes,
            )
        assert memory_storage.files == {}

    @pytest.mark.asyncio
    async def test_undecodable_image_stores_nothing(self):
        with pytest.raises(ImageDecodeError):
            await self.service.process_upload(
                kind="project",
                filename="renamed.jpg",
                content_type="image/jpeg",
                content=b"MZ\x90\x00 definitely not a jpeg",
            )
        assert self.storage.files == {}
