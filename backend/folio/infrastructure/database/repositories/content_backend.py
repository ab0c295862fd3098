"""Reference content backend backed by SQLAlchemy.

One backend instance serves one content kind and implements both the reader
and the printer capability. It is long-lived and shared between requests, so
every call opens its own short-lived session from the session factory.
Storage failures are classified into the domain error taxonomy.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folio.application.interfaces import ContentPrinter, ContentReader
from folio.application.registry import PRINTER, READER, BackendRegistry, backend_key
from folio.domain.entities import ContentEntry, ContentKind, ImageRecord
from folio.domain.exceptions import DatastoreError, DuplicateEntityError, EntityNotFoundError
from folio.infrastructure.database.models import CONTENT_MODELS, ContentColumns

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyContentBackend(ContentReader, ContentPrinter):
    """Implements the content reader and printer ports using SQLAlchemy async sessions."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        kind: ContentKind = ContentKind.ARTICLE,
    ):
        self._session_factory = session_factory
        self._kind = kind
        self._model = CONTENT_MODELS[kind]
        self._entity_name = kind.value.capitalize()

    # ── Mapping ─────────────────────────────────────────────────────

    def _to_entity(self, model: ContentColumns) -> ContentEntry:
        """Map ORM model → domain entity, bound to this backend."""
        return ContentEntry(
            title=model.title,
            title_path=model.title_path,
            created=_as_utc(model.created),
            modified=_as_utc(model.modified),
            kind=self._kind,
            synopsis=model.synopsis,
            content=model.content,
            is_published=model.is_published,
            image=ImageRecord.from_dict(model.image),
            images=[img for img in map(ImageRecord.from_dict, model.images or []) if img is not None],
            printer=self,
        )

    def _to_model(self, entry: ContentEntry) -> ContentColumns:
        """Map domain entity → ORM model (for creation)."""
        return self._model(
            title_path=entry.title_path,
            title=entry.title,
            synopsis=entry.synopsis,
            content=entry.content,
            is_published=entry.is_published,
            created=entry.created,
            modified=entry.modified,
            image=entry.image.to_dict() if entry.image else None,
            images=[img.to_dict() for img in entry.images],
        )

    # ── Sessions ────────────────────────────────────────────────────

    @asynccontextmanager
    async def _session(self, failure: str, write: bool = False) -> AsyncIterator[AsyncSession]:
        """Open a session (a transaction when ``write``) and classify storage errors."""
        opener = self._session_factory.begin if write else self._session_factory
        try:
            async with opener() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("%s: %s", failure, exc)
            raise DatastoreError(f"{failure}: {exc}") from exc

    async def _update(self, title_path: str, failure: str, **values: Any) -> None:
        stmt = update(self._model).where(self._model.title_path == title_path).values(**values)
        async with self._session(failure, write=True) as session:
            result = await session.execute(stmt)
        if result.rowcount == 0:
            raise EntityNotFoundError(self._entity_name, title_path)

    # ── Reader ──────────────────────────────────────────────────────

    async def by_title_path(self, title_path: str, include_unpublished: bool = False) -> ContentEntry:
        async with self._session(f"Failed to load {self._kind.value}") as session:
            model = await session.get(self._model, title_path)
            if model is None or (not include_unpublished and not model.is_published):
                raise EntityNotFoundError(self._entity_name, title_path)
            return self._to_entity(model)

    async def recent(self, limit: int, page: int = 0, include_unpublished: bool = False) -> list[ContentEntry]:
        stmt = select(self._model)
        if not include_unpublished:
            stmt = stmt.where(self._model.is_published.is_(True))
        stmt = (
            stmt.order_by(self._model.created.desc(), self._model.title_path.desc())
            .offset(page * limit)
            .limit(limit)
        )
        async with self._session(f"Failed to query {self._kind.value} list") as session:
            result = await session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    # ── Printer ─────────────────────────────────────────────────────

    async def print(self, entry: ContentEntry) -> None:
        try:
            async with self._session_factory.begin() as session:
                session.add(self._to_model(entry))
        except IntegrityError as exc:
            raise DuplicateEntityError(self._entity_name, "title_path", entry.title_path) from exc
        except SQLAlchemyError as exc:
            logger.error("Failed to create %s '%s': %s", self._kind.value, entry.title_path, exc)
            raise DatastoreError(f"Failed to create {self._kind.value}: {exc}") from exc

    async def update_synopsis(self, title_path: str, synopsis: str, modified: datetime) -> None:
        await self._update(
            title_path, f"Failed to update {self._kind.value}'s synopsis",
            synopsis=synopsis, modified=modified,
        )

    async def update_content(self, title_path: str, content: str, modified: datetime) -> None:
        await self._update(
            title_path, f"Failed to update {self._kind.value}'s content",
            content=content, modified=modified,
        )

    async def delete(self, title_path: str) -> None:
        stmt = delete(self._model).where(self._model.title_path == title_path)
        async with self._session(f"Failed to remove {self._kind.value}", write=True) as session:
            result = await session.execute(stmt)
        if result.rowcount == 0:
            raise EntityNotFoundError(self._entity_name, title_path)

    async def publish(self, title_path: str, publish: bool) -> None:
        await self._update(title_path, "Failed to update published status", is_published=publish)

    async def write_image(self, title_path: str, image: ImageRecord | None) -> None:
        await self._update(
            title_path, "Failed to update image/thumb",
            image=image.to_dict() if image else None,
        )

    async def write_images(self, title_path: str, images: list[ImageRecord]) -> None:
        await self._update(
            title_path, "Failed to update images",
            images=[img.to_dict() for img in images],
        )


def register_sqlalchemy_backends(
    registry: BackendRegistry,
    session_factory: async_sessionmaker[AsyncSession],
    namespace: str,
) -> dict[ContentKind, SQLAlchemyContentBackend]:
    """Register one backend per content kind under its reader and printer keys."""
    backends: dict[ContentKind, SQLAlchemyContentBackend] = {}
    for kind in ContentKind:
        backend = SQLAlchemyContentBackend(session_factory, kind)
        registry.register(backend_key(namespace, kind.value, READER), backend)
        registry.register(backend_key(namespace, kind.value, PRINTER), backend)
        backends[kind] = backend
    return backends
