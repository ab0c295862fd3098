"""Pillow-backed image processor — normalizes uploads to JPEG and builds thumbnails."""

import asyncio
import logging
from pathlib import Path

from PIL import Image

from folio.application.interfaces import ImageProcessor, ProcessedImage
from folio.domain.exceptions import ConversionError

logger = logging.getLogger(__name__)

_WHITE = (255, 255, 255)


def _flatten(img: Image.Image) -> Image.Image:
    """Return an RGB copy of ``img``; transparent areas become white."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, _WHITE)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")


class PillowImageProcessor(ImageProcessor):
    """Implements the ImageProcessor port with Pillow. Codec work runs in a thread."""

    def __init__(self, quality: int = 85):
        self._quality = quality

    async def convert_to_jpeg(self, source: Path, dest: Path) -> ProcessedImage:
        return await asyncio.to_thread(self._write_jpeg, source, dest, None)

    async def resize_width_to_jpeg(self, source: Path, dest: Path, width: int) -> ProcessedImage:
        if width <= 0:
            raise ConversionError(f"Invalid target width {width}")
        return await asyncio.to_thread(self._write_jpeg, source, dest, width)

    def _write_jpeg(self, source: Path, dest: Path, width: int | None) -> ProcessedImage:
        # Written beside dest and swapped in, so a failed re-upload keeps the old file.
        partial = dest.with_name(f".{dest.name}.part")
        try:
            with Image.open(source) as img:
                img.load()
                out = _flatten(img)
            if width is not None:
                height = max(1, round(out.height * width / out.width))
                out = out.resize((width, height), Image.Resampling.LANCZOS)
            out.save(partial, "JPEG", quality=self._quality)
            partial.replace(dest)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            partial.unlink(missing_ok=True)
            raise ConversionError(f"Could not convert '{source.name}' to JPEG: {exc}") from exc

        logger.debug("Wrote %s (%dx%d)", dest, out.width, out.height)
        return ProcessedImage(path=dest, width=out.width, height=out.height)
