"""
Showcase Backend — Image Transform
===================================

What:  Turns an uploaded image into the fixed 450x350 JPEG the landing page
       expects.
How:   Pillow decodes the bytes, applies the EXIF orientation, flattens any
       transparency onto white, cover-fits to the target box (scale to fill,
       crop the overflow, centered on both axes) and re-encodes as JPEG at
       quality 90.
Who:   UploadService, identically for project and client images.

Concurrency:
    Decoding and encoding are CPU-bound and hold the GIL only partially;
    process() runs them in a worker thread so one large upload cannot stall
    the event loop for other requests.

Failure:
    Anything Pillow cannot decode raises ImageDecodeError. The transform
    works purely in memory, so a failure never leaves a file behind.
"""

import asyncio
import io
import logging
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from showcase.exceptions import ImageDecodeError

logger = logging.getLogger(__name__)

TARGET_SIZE: Tuple[int, int] = (450, 350)
JPEG_QUALITY = 90

# Background used when flattening transparent PNG/GIF images to RGB
_FLATTEN_BACKGROUND = (255, 255, 255)


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    """JPEG has no alpha channel: composite transparent pixels onto white."""
    has_alpha = img.mode in ("RGBA", "LA") or (
        img.mode == "P" and "transparency" in img.info
    )
    if not has_alpha:
        return img.convert("RGB")

    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, _FLATTEN_BACKGROUND)
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


class ImageService:
    """
    Stateless cover-fit + JPEG re-encode.

    Attributes:
        size:     (width, height) of every produced image
        quality:  JPEG quality passed to Pillow
    """

    def __init__(self, size: Tuple[int, int] = TARGET_SIZE, quality: int = JPEG_QUALITY):
        self.size = size
        self.quality = quality

    def render(self, content: bytes) -> bytes:
        """
        Synchronously produce the JPEG bytes for `content`.

        Raises:
            ImageDecodeError: `content` is not a decodable image
        """
        try:
            with Image.open(io.BytesIO(content)) as source:
                # GIFs decode to their first frame
                source.load()
                oriented = ImageOps.exif_transpose(source)
                rgb = _flatten_to_rgb(oriented)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            logger.info("Rejected undecodable upload (%d bytes): %s", len(content), e)
            raise ImageDecodeError(
                context={"error_type": type(e).__name__},
            ) from e

        fitted = ImageOps.fit(
            rgb,
            self.size,
            method=Image.Resampling.LANCZOS,
            centering=(0.5, 0.5),
        )

        out = io.BytesIO()
        fitted.save(out, format="JPEG", quality=self.quality)
        return out.getvalue()

    async def process(self, content: bytes) -> bytes:
        """Run render() in a worker thread."""
        return await asyncio.to_thread(self.render, content)


image_service = ImageService()
