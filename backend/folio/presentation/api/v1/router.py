"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from folio.domain.entities import ContentKind
from folio.presentation.api.v1.endpoints.content import build_content_router
from folio.presentation.api.v1.endpoints.health import router as health_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
for _kind in ContentKind:
    router.include_router(build_content_router(_kind))
