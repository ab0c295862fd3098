"""Content entries (articles and chapters) and their image records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from folio.domain.exceptions import UnboundEntryError
from folio.domain.title_path import title_path as build_title_path

if TYPE_CHECKING:
    from folio.application.interfaces import ContentPrinter


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentKind(str, Enum):
    """Kinds of publishable document. Both share one shape."""

    ARTICLE = "article"
    CHAPTER = "chapter"


@dataclass
class ImageRecord:
    """Metadata of one image file stored beside an entry."""

    src: str
    alt: str = ""
    w: int = 0
    h: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: ``{src, alt, w, h}``."""
        return {"src": self.src, "alt": self.alt, "w": self.w, "h": self.h}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ImageRecord | None:
        if not data or not data.get("src"):
            return None
        return cls(
            src=data["src"],
            alt=data.get("alt", ""),
            w=int(data.get("w", 0)),
            h=int(data.get("h", 0)),
        )


_IMMUTABLE_FIELDS = frozenset({"title_path", "created"})


@dataclass
class ContentEntry:
    """Core domain entity — one publishable document.

    The entry keeps a reference to the printer backend that created or loaded
    it. Every mutation goes through that printer and only touches the
    in-memory fields once the backend write succeeded.
    """

    title: str
    title_path: str
    created: datetime
    kind: ContentKind = ContentKind.ARTICLE
    synopsis: str = ""
    content: str = ""
    is_published: bool = False
    modified: datetime | None = None
    image: ImageRecord | None = None
    images: list[ImageRecord] = field(default_factory=list)
    printer: ContentPrinter | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.modified is None:
            self.modified = self.created

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} is immutable once assigned")
        super().__setattr__(name, value)

    @classmethod
    def new(
        cls,
        title: str,
        printer: ContentPrinter,
        kind: ContentKind = ContentKind.ARTICLE,
        now: datetime | None = None,
        attempt: int = 0,
    ) -> ContentEntry:
        """Build an unsaved entry whose title path derives from ``title`` and ``now``."""
        created = now or _utcnow()
        return cls(
            title=title,
            title_path=build_title_path(title, created, attempt),
            created=created,
            kind=kind,
            printer=printer,
        )

    # ── Queries ─────────────────────────────────────────────────────

    def find_image(self, src: str) -> ImageRecord | None:
        for img in self.images:
            if img.src == src:
                return img
        return None

    def image_sources(self) -> set[str]:
        """Every filename referenced by the thumbnail and the gallery."""
        sources = {img.src for img in self.images}
        if self.image is not None:
            sources.add(self.image.src)
        return sources

    # ── Mutations ───────────────────────────────────────────────────

    def _bound_printer(self) -> ContentPrinter:
        if self.printer is None:
            raise UnboundEntryError(self.title_path)
        return self.printer

    async def create(self) -> None:
        """Insert the entry through its printer."""
        await self._bound_printer().print(self)

    async def set_synopsis(self, synopsis: str) -> None:
        printer = self._bound_printer()
        modified = _utcnow()
        await printer.update_synopsis(self.title_path, synopsis, modified)
        self.synopsis = synopsis
        self.modified = modified

    async def set_content(self, content: str) -> None:
        printer = self._bound_printer()
        modified = _utcnow()
        await printer.update_content(self.title_path, content, modified)
        self.content = content
        self.modified = modified

    async def publish(self, publish: bool) -> None:
        """Set the published flag. ``modified`` is left alone."""
        await self._bound_printer().publish(self.title_path, publish)
        self.is_published = publish

    async def delete(self) -> None:
        """Remove the storage record. Image files are not touched."""
        await self._bound_printer().delete(self.title_path)

    async def set_image(self, image: ImageRecord | None) -> None:
        await self._bound_printer().write_image(self.title_path, image)
        self.image = image

    async def set_images(self, images: Iterable[ImageRecord]) -> None:
        images = list(images)
        await self._bound_printer().write_images(self.title_path, images)
        self.images = images
