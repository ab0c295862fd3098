"""Abstract capability interfaces (ports) a persistence backend implements.

A backend is registered under string keys in the ``BackendRegistry``; the
reader key is resolved by the repository facade, the printer key by the
content service when constructing new entries.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from folio.domain.entities import ContentEntry, ImageRecord


class ContentReader(ABC):
    """Read side of a content backend."""

    @abstractmethod
    async def by_title_path(self, title_path: str, include_unpublished: bool) -> ContentEntry:
        """Return the entry stored under ``title_path``.

        Raises ``EntityNotFoundError`` when it is missing, or unpublished and
        ``include_unpublished`` is false.
        """
        ...

    @abstractmethod
    async def recent(self, limit: int, page: int, include_unpublished: bool) -> list[ContentEntry]:
        """Return up to ``limit`` entries, newest first, skipping ``page * limit``."""
        ...


class ContentPrinter(ABC):
    """Write side of a content backend. Every call is keyed by title path."""

    @abstractmethod
    async def print(self, entry: ContentEntry) -> None:
        """Insert a new entry."""
        ...

    @abstractmethod
    async def update_synopsis(self, title_path: str, synopsis: str, modified: datetime) -> None:
        ...

    @abstractmethod
    async def update_content(self, title_path: str, content: str, modified: datetime) -> None:
        ...

    @abstractmethod
    async def delete(self, title_path: str) -> None:
        ...

    @abstractmethod
    async def publish(self, title_path: str, publish: bool) -> None:
        ...

    @abstractmethod
    async def write_image(self, title_path: str, image: ImageRecord | None) -> None:
        """Replace the thumbnail record."""
        ...

    @abstractmethod
    async def write_images(self, title_path: str, images: list[ImageRecord]) -> None:
        """Replace the whole gallery sequence."""
        ...
