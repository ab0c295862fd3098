"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from folio.config import Settings, get_settings
from folio.domain.exceptions import ContentError, ErrorStatus
from folio.infrastructure.database import Base
from folio.infrastructure.dependencies import BackendRegistrar, build_container, register_default_backends
from folio.infrastructure.logging.log_config import setup_logging
from folio.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    ErrorStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorStatus.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorStatus.DATASTORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorStatus.CONVERSION_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorStatus.NOT_REGISTERED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorStatus.INVALID_BACKEND: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    """Map a classified content error to its HTTP status."""
    code = _STATUS_CODES.get(exc.status, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=code, content={"error": exc.message})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — register backends, create tables, dispose the engine."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    # Registry errors propagate here: the app refuses to start without its backends.
    container = build_container(settings, app.state.register_backends)

    async with container.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.container = container
    yield

    await container.engine.dispose()


def create_app(
    settings: Settings | None = None,
    register_backends: BackendRegistrar = register_default_backends,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.register_backends = register_backends

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ContentError, content_error_handler)

    app.include_router(api_router)

    app.mount(
        settings.media_url.rstrip("/") or "/media",
        StaticFiles(directory=settings.image_root, check_dir=False),
        name="media",
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "folio.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
