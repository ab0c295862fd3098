"""Image asset lifecycle — upload, normalize, thumbnail, associate and clean up.

Pipeline (thumbnail): Receive → Stage → Resize to JPEG → Persist → Remove old thumbnail
Pipeline (gallery):   Receive → Stage → Convert to JPEG → Persist

Metadata writes always surface their errors. Filesystem cleanup never does:
it only runs once the outcome of the metadata write is known, and failures
are logged.
"""

import logging
import secrets
import string
from collections.abc import Awaitable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from folio.application.interfaces import ImageProcessor, ProcessedImage
from folio.domain.entities import ContentEntry, ImageRecord
from folio.domain.exceptions import BadRequestError
from folio.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage
from folio.infrastructure.storage.local_image_storage import LocalImageStorage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ImageAssetService")

ALLOWED_CONTENT_TYPES = frozenset({"image/gif", "image/jpeg", "image/png"})
THUMB_PREFIX = "thumb."
_RANDOM_NAME_ALPHABET = string.ascii_letters + string.digits


@dataclass
class UploadedImage:
    """A single uploaded file, already read from the request."""

    filename: str
    content_type: str
    content: bytes


class ImageKind(str, Enum):
    THUMB = "thumb"
    IMAGE = "image"


def random_name(length: int = 5) -> str:
    return "".join(secrets.choice(_RANDOM_NAME_ALPHABET) for _ in range(length))


def image_name(upload: UploadedImage, name: str | None = None) -> str:
    """Pick the file name for an upload: explicit name, then the upload's, then random."""
    candidate = Path((name or "").strip() or upload.filename or "").name
    if not candidate or candidate.startswith("."):
        candidate = random_name()
    return candidate.replace(" ", "-")


class ImageAssetService:
    """Keeps an entry's image metadata and its image directory consistent."""

    def __init__(
        self,
        storage: LocalImageStorage,
        processor: ImageProcessor,
        thumb_width: int = 200,
    ):
        self._storage = storage
        self._processor = processor
        self._thumb_width = thumb_width

    async def upload(
        self,
        entry: ContentEntry,
        upload: UploadedImage | None,
        name: str | None = None,
        kind: ImageKind = ImageKind.IMAGE,
    ) -> ImageRecord:
        if kind is ImageKind.THUMB:
            return await self.upload_thumbnail(entry, upload, name)
        return await self.upload_image(entry, upload, name)

    # ── Uploads ─────────────────────────────────────────────────────

    async def upload_thumbnail(
        self, entry: ContentEntry, upload: UploadedImage | None, name: str | None = None
    ) -> ImageRecord:
        """Replace the entry's thumbnail with a resized JPEG of the upload."""
        filename = self._receive(entry, upload, name)
        dest_name = f"{THUMB_PREFIX}{Path(filename).stem}.jpg"
        processed = await self._normalize(entry, upload, filename, dest_name, width=self._thumb_width)

        previous = entry.image
        record = ImageRecord(src=dest_name, alt=dest_name, w=processed.width, h=processed.height)
        await self._persist(entry, dest_name, entry.set_image(record))

        if previous is not None and previous.src != dest_name and previous.src not in entry.image_sources():
            with plog.timed_step(PipelineStage.CLEANUP, f"Removing previous thumbnail '{previous.src}'"):
                self._storage.remove(entry.title_path, previous.src)
        return record

    async def upload_image(
        self, entry: ContentEntry, upload: UploadedImage | None, name: str | None = None
    ) -> ImageRecord:
        """Add the upload to the gallery, or refresh the dimensions of a same-named image."""
        filename = self._receive(entry, upload, name)
        dest_name = f"{Path(filename).stem}.jpg"
        if dest_name.startswith(THUMB_PREFIX):
            plog.step_error(PipelineStage.RECEIVE, f"Gallery name '{filename}' uses the thumbnail prefix")
            raise BadRequestError(f"Gallery image names cannot start with '{THUMB_PREFIX}'")
        processed = await self._normalize(entry, upload, filename, dest_name)

        images = [replace(img) for img in entry.images]
        record = next((img for img in images if img.src == dest_name), None)
        if record is not None:
            record.w, record.h = processed.width, processed.height
        else:
            record = ImageRecord(src=dest_name, alt="", w=processed.width, h=processed.height)
            images.append(record)

        await self._persist(entry, dest_name, entry.set_images(images))
        return record

    # ── Removal ─────────────────────────────────────────────────────

    async def delete_image(self, entry: ContentEntry, src: str) -> bool:
        """Drop ``src`` from the gallery, then delete its file.

        Returns False (and writes nothing) when no gallery image has that src.
        """
        remaining = [img for img in entry.images if img.src != src]
        if len(remaining) == len(entry.images):
            return False

        await entry.set_images(remaining)
        if src not in entry.image_sources():
            self._storage.remove(entry.title_path, src)
        return True

    def sweep_orphans(self, entry: ContentEntry) -> list[str]:
        """Delete files in the entry's directory that no metadata references."""
        referenced = entry.image_sources()
        removed = [
            name
            for name in self._storage.list_files(entry.title_path)
            if name not in referenced and self._storage.remove(entry.title_path, name)
        ]
        if removed:
            logger.info("Swept %d orphaned file(s) for %s", len(removed), entry.title_path)
        return removed

    def remove_all(self, entry: ContentEntry) -> bool:
        """Remove the whole image directory of an entry."""
        return self._storage.remove_dir(entry.title_path)

    # ── Pipeline steps ──────────────────────────────────────────────

    def _receive(self, entry: ContentEntry, upload: UploadedImage | None, name: str | None) -> str:
        if upload is None or not upload.content:
            plog.step_error(PipelineStage.RECEIVE, f"No image uploaded for {entry.title_path}")
            raise BadRequestError("Missing image upload")
        if upload.content_type not in ALLOWED_CONTENT_TYPES:
            plog.step_error(PipelineStage.RECEIVE, f"Rejected content type '{upload.content_type}'")
            raise BadRequestError(f"Unsupported image type '{upload.content_type}'")

        filename = image_name(upload, name)
        plog.step_start(
            PipelineStage.RECEIVE, f"Image '{filename}' for {entry.title_path}",
            size_bytes=len(upload.content), content_type=upload.content_type,
        )
        return filename

    async def _normalize(
        self,
        entry: ContentEntry,
        upload: UploadedImage,
        filename: str,
        dest_name: str,
        width: int | None = None,
    ) -> ProcessedImage:
        staged = self._storage.stage(entry.title_path, filename, upload.content)
        plog.detail("Staged upload", path=staged.name)

        dest = self._storage.path_for(entry.title_path, dest_name)
        try:
            if width is None:
                with plog.timed_step(PipelineStage.CONVERT, f"Converting '{filename}' to JPEG"):
                    return await self._processor.convert_to_jpeg(staged, dest)
            with plog.timed_step(PipelineStage.RESIZE, f"Resizing '{filename}' to {width}px", dest=dest_name):
                return await self._processor.resize_width_to_jpeg(staged, dest, width)
        finally:
            self._storage.discard(staged)

    async def _persist(self, entry: ContentEntry, dest_name: str, write: Awaitable[None]) -> None:
        """Await the metadata write; on failure remove ``dest_name`` unless still referenced."""
        try:
            with plog.timed_step(PipelineStage.PERSIST, f"Saving image metadata for {entry.title_path}"):
                await write
        except Exception:
            logger.error("Failed to persist image '%s' for %s", dest_name, entry.title_path)
            if dest_name not in entry.image_sources():
                self._storage.remove(entry.title_path, dest_name)
            raise
