"""Composition root — wires infrastructure to the application layer.

``build_container`` runs once in the FastAPI lifespan: it fills the backend
registry, freezes it, and resolves the reader/printer capabilities for every
content kind. Any registry error there stops the application from starting.
"""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from folio.application.interfaces import ContentPrinter
from folio.application.registry import PRINTER, BackendRegistry, backend_key
from folio.application.repository import ContentRepository
from folio.application.services import ContentService, ImageAssetService
from folio.config import Settings
from folio.domain.entities import ContentKind
from folio.domain.exceptions import ContentError
from folio.infrastructure.database import create_engine, create_session_factory
from folio.infrastructure.database.repositories import register_sqlalchemy_backends
from folio.infrastructure.images import PillowImageProcessor
from folio.infrastructure.storage.local_image_storage import LocalImageStorage

logger = logging.getLogger(__name__)

BackendRegistrar = Callable[[BackendRegistry, async_sessionmaker[AsyncSession], Settings], None]


def register_default_backends(
    registry: BackendRegistry,
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> None:
    register_sqlalchemy_backends(registry, session_factory, settings.backend_namespace)


@dataclass
class Container:
    """Process-wide objects created at startup."""

    settings: Settings
    engine: AsyncEngine
    registry: BackendRegistry
    images: ImageAssetService
    services: dict[ContentKind, ContentService]


def build_content_service(
    registry: BackendRegistry,
    images: ImageAssetService,
    settings: Settings,
    kind: ContentKind,
) -> ContentService:
    """Resolve the reader and printer of ``kind`` and build its service."""
    repository = ContentRepository.new(registry, settings.backend_namespace, kind)
    key = backend_key(settings.backend_namespace, kind.value, PRINTER)
    try:
        printer = registry.resolve(key, ContentPrinter)
    except ContentError as exc:
        logger.critical("No usable '%s' printer: %s", kind.value, exc)
        raise
    return ContentService(
        repository=repository,
        printer=printer,
        images=images,
        page_count=settings.page_count,
        title_path_attempts=settings.title_path_attempts,
    )


def build_container(
    settings: Settings,
    register_backends: BackendRegistrar = register_default_backends,
) -> Container:
    engine = create_engine(settings.database_url, echo=settings.log_level_sql.upper() == "DEBUG")
    session_factory = create_session_factory(engine)

    registry = BackendRegistry()
    register_backends(registry, session_factory, settings)
    registry.freeze()
    logger.info("Registered backends: %s", ", ".join(registry.keys()))

    images = ImageAssetService(
        storage=LocalImageStorage(settings.image_root),
        processor=PillowImageProcessor(quality=settings.jpeg_quality),
        thumb_width=settings.thumb_width,
    )
    services = {kind: build_content_service(registry, images, settings, kind) for kind in ContentKind}
    return Container(
        settings=settings,
        engine=engine,
        registry=registry,
        images=images,
        services=services,
    )


# ── FastAPI dependencies ────────────────────────────────────────────


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_container(request: Request) -> Container:
    return request.app.state.container


def content_service_provider(kind: ContentKind) -> Callable[[Request], ContentService]:
    """Build a dependency returning the ContentService of ``kind``."""

    def _provide(request: Request) -> ContentService:
        return get_container(request).services[kind]

    return _provide


def is_admin(
    x_admin_token: str | None = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> bool:
    """Admin check — an empty configured token disables admin access entirely."""
    if not settings.admin_token or not x_admin_token:
        return False
    return secrets.compare_digest(x_admin_token, settings.admin_token)


def require_admin(admin: bool = Depends(is_admin)) -> None:
    if not admin:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
