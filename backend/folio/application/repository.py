"""Read-side facade over the registered content reader."""

import logging

from folio.application.interfaces import ContentReader
from folio.application.registry import READER, BackendRegistry, backend_key
from folio.domain.entities import ContentEntry, ContentKind
from folio.domain.exceptions import ContentError

logger = logging.getLogger(__name__)


class ContentRepository:
    """Lists and looks up entries of one kind without knowing the backend key scheme."""

    def __init__(self, reader: ContentReader, kind: ContentKind = ContentKind.ARTICLE):
        self._reader = reader
        self.kind = kind

    @classmethod
    def new(
        cls,
        registry: BackendRegistry,
        namespace: str,
        kind: ContentKind = ContentKind.ARTICLE,
    ) -> "ContentRepository":
        """Resolve the reader for ``kind`` from the registry.

        A missing or invalid reader is a startup configuration error: it is
        logged as critical and re-raised so the application refuses to serve.
        """
        key = backend_key(namespace, kind.value, READER)
        try:
            reader = registry.resolve(key, ContentReader)
        except ContentError as exc:
            logger.critical("No usable '%s' reader: %s", kind.value, exc)
            raise
        return cls(reader, kind)

    async def by_title_path(self, title_path: str, include_unpublished: bool = False) -> ContentEntry:
        return await self._reader.by_title_path(title_path, include_unpublished)

    async def recent(self, limit: int, page: int = 0, include_unpublished: bool = False) -> list[ContentEntry]:
        return await self._reader.recent(limit, page, include_unpublished)
