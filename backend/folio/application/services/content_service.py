"""Application service (use case) for content entry operations."""

import logging
from datetime import datetime, timezone

from folio.application.interfaces import ContentPrinter
from folio.application.repository import ContentRepository
from folio.application.services.image_asset_service import (
    ImageAssetService,
    ImageKind,
    UploadedImage,
)
from folio.domain.entities import ContentEntry, ContentKind, ImageRecord
from folio.domain.exceptions import BadRequestError, DuplicateEntityError
from folio.domain.title_path import is_addressable, slugify, title_path as build_title_path

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def _as_flag(data: str | bool | None) -> bool:
    if isinstance(data, bool):
        return data
    return (data or "").strip().lower() in _TRUE_STRINGS


class ContentService:
    """Orchestrates entry use cases for one content kind.

    Reads go through the repository facade; new entries are bound to the
    printer resolved at startup; image work is delegated to the image service.
    """

    def __init__(
        self,
        repository: ContentRepository,
        printer: ContentPrinter,
        images: ImageAssetService,
        page_count: int = 30,
        title_path_attempts: int = 5,
    ):
        self._repository = repository
        self._printer = printer
        self._images = images
        self._page_count = page_count
        self._attempts = max(1, title_path_attempts)

    @property
    def kind(self) -> ContentKind:
        return self._repository.kind

    async def create_entry(self, title: str) -> ContentEntry:
        """Create and persist a new entry.

        A title path already taken on the same day is retried with a numeric
        suffix (``Hello-2/``, ``Hello-3/``...) up to the configured attempts.
        """
        if not title or not title.strip():
            raise BadRequestError("Missing title")
        if not is_addressable(slugify(title)):
            raise BadRequestError(f"Title '{title}' cannot be used as a title path")

        now = datetime.now(timezone.utc)
        for attempt in range(self._attempts):
            entry = ContentEntry.new(title, self._printer, kind=self.kind, now=now, attempt=attempt)
            try:
                await entry.create()
            except DuplicateEntityError:
                logger.info("Title path '%s' is taken, trying the next suffix", entry.title_path)
                continue
            logger.info("Created %s '%s'", self.kind.value, entry.title_path)
            return entry

        raise DuplicateEntityError(self.kind.value.capitalize(), "title_path", build_title_path(title, now))

    async def get_entry(self, title_path: str, include_unpublished: bool = False) -> ContentEntry:
        return await self._repository.by_title_path(title_path, include_unpublished)

    async def list_recent(self, page: int = 0, include_unpublished: bool = False) -> list[ContentEntry]:
        return await self._repository.recent(self._page_count, page, include_unpublished)

    async def apply_action(self, title_path: str, action: str, data: str | bool | None = None) -> ContentEntry:
        """Run one edit action against an entry and return the updated entry."""
        entry = await self.get_entry(title_path, include_unpublished=True)

        if action == "setSynopsis":
            await entry.set_synopsis(str(data or ""))
        elif action == "setContent":
            await entry.set_content(str(data or ""))
        elif action == "setActive":
            await entry.publish(not entry.is_published)
        elif action == "publish":
            await entry.publish(_as_flag(data))
        elif action == "deleteImage":
            if not data:
                raise BadRequestError("Missing image src")
            await self._images.delete_image(entry, str(data))
        elif action == "sweepImages":
            self._images.sweep_orphans(entry)
        else:
            raise BadRequestError("Invalid Action")

        logger.debug("Applied '%s' to %s", action, title_path)
        return entry

    async def upload_image(
        self,
        title_path: str,
        upload: UploadedImage | None,
        name: str | None = None,
        kind: ImageKind = ImageKind.IMAGE,
    ) -> ImageRecord:
        entry = await self.get_entry(title_path, include_unpublished=True)
        return await self._images.upload(entry, upload, name, kind)

    async def delete_entry(self, title_path: str) -> None:
        """Delete the record, then the entry's image directory."""
        entry = await self.get_entry(title_path, include_unpublished=True)
        await entry.delete()
        self._images.remove_all(entry)
        logger.info("Deleted %s '%s'", self.kind.value, title_path)
