"""
Showcase Backend — Image Transform Unit Tests
==============================================

What:  Tests for ImageService (cover-fit to 450x350, JPEG re-encode).
How:   Real images generated with Pillow; no disk access.

What we test:
    ✅ Output is always a 450x350 JPEG, whatever the input size or format
    ✅ Cover-fit crops the overflow instead of letterboxing
    ✅ Transparent pixels are flattened onto white
    ✅ Undecodable bytes raise ImageDecodeError
"""

import io

import pytest
from PIL import Image

from showcase.exceptions import ImageDecodeError, ValidationError
from showcase.services.image_service import JPEG_QUALITY, TARGET_SIZE, ImageService

def _open(content: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(content))
    img.load()
    return img


class TestImageRender:

    def setup_method(self):
        self.service = ImageService()

    def test_defaults(self):
        assert TARGET_SIZE == (450, 350)
        assert JPEG_QUALITY == 90
        assert self.service.size == TARGET_SIZE

    @pytest.mark.parametrize(
        "fmt, size",
        [
            ("PNG", (800, 600)),
            ("JPEG", (1200, 400)),
            ("JPEG", (100, 100)),
            ("GIF", (300, 900)),
        ],
    )
    def test_output_is_450x350_jpeg(self, make_image, fmt, size):
        mode = "P" if fmt == "GIF" else "RGB"
        color = 5 if fmt == "GIF" else (10, 120, 200)
        result = _open(self.service.render(make_image(fmt, size=size, mode=mode, color=color)))

        assert result.format == "JPEG"
        assert result.size == (450, 350)
        assert result.mode == "RGB"

    def test_cover_fit_crops_instead_of_padding(self):
        """A wide image keeps its center; the left/right bands are cut off."""
        source = Image.new("RGB", (1400, 350), (0, 0, 255))
        # Red center block wider than the 450px window
        source.paste((255, 0, 0), (400, 0, 1000, 350))
        out = io.BytesIO()
        source.save(out, format="PNG")

        result = _open(self.service.render(out.getvalue()))

        for x in (5, 225, 444):
            r, g, b = result.getpixel((x, 175))
            assert r > 200 and b < 60

    def test_transparency_is_flattened_onto_white(self, make_image):
        content = make_image("PNG", size=(600, 600), mode="RGBA", color=(0, 0, 0, 0))
        result = _open(self.service.render(content))

        r, g, b = result.getpixel((225, 175))
        assert min(r, g, b) > 240

    def test_garbage_bytes_raise_decode_error(self):
        with pytest.raises(ImageDecodeError) as exc_info:
            self.service.render(b"this is not an image")

        assert exc_info.value.context["field"] == "image"
        assert isinstance(exc_info.value, ValidationError)

    def test_truncated_image_raises_decode_error(self, png_bytes):
        with pytest.raises(ImageDecodeError):
            self.service.render(png_bytes[: len(png_bytes) // 3])


class TestImageProcess:

    @pytest.mark.asyncio
    async def test_process_runs_render(self, png_bytes):
        result = _open(await ImageService().process(png_bytes))
        assert result.size == (450, 350)

    @pytest.mark.asyncio
    async def test_custom_size_and_quality(self, jpeg_bytes):
        service = ImageService(size=(100, 50), quality=50)
        result = _open(await service.process(jpeg_bytes))
        assert result.size == (100, 50)
