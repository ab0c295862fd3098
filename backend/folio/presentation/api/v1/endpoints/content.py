"""Content entry endpoints — one router per content kind (articles, chapters)."""

import re

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from folio.application.schemas import (
    ContentAction,
    ContentCreate,
    ContentCreated,
    ContentResponse,
    ImageUploadResponse,
)
from folio.application.services import ContentService, ImageKind, UploadedImage
from folio.domain.entities import ContentEntry, ContentKind
from folio.domain.title_path import TITLE_PATH_PATTERN
from folio.infrastructure.dependencies import content_service_provider, is_admin, require_admin

_TITLE_PATH_RE = re.compile(TITLE_PATH_PATTERN)


def _checked_title_path(raw: str) -> str:
    """Normalize the trailing slash and reject anything that is not a title path."""
    title_path = raw if raw.endswith("/") else f"{raw}/"
    if not _TITLE_PATH_RE.fullmatch(title_path):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return title_path


def _to_response(entry: ContentEntry) -> ContentResponse:
    return ContentResponse.model_validate(entry, from_attributes=True)


def build_content_router(kind: ContentKind) -> APIRouter:
    """Build the CRUD + images router for ``kind``, mounted at ``/<kind>s``."""
    router = APIRouter(prefix=f"/{kind.value}s", tags=[f"{kind.value.capitalize()}s"])
    get_service = content_service_provider(kind)

    @router.get("", response_model=list[ContentResponse])
    async def list_entries(
        page: int = Query(0, ge=0),
        admin: bool = Depends(is_admin),
        service: ContentService = Depends(get_service),
    ) -> list[ContentResponse]:
        """Most recent entries first; admins also see unpublished ones."""
        entries = await service.list_recent(page=page, include_unpublished=admin)
        return [_to_response(e) for e in entries]

    @router.post(
        "",
        response_model=ContentCreated,
        status_code=status.HTTP_201_CREATED,
        dependencies=[Depends(require_admin)],
    )
    async def create_entry(
        data: ContentCreate,
        service: ContentService = Depends(get_service),
    ) -> ContentCreated:
        entry = await service.create_entry(data.title)
        return ContentCreated(title_path=entry.title_path)

    @router.put(
        "/{title_path:path}/actions",
        response_model=ContentResponse,
        dependencies=[Depends(require_admin)],
    )
    async def apply_action(
        title_path: str,
        data: ContentAction,
        service: ContentService = Depends(get_service),
    ) -> ContentResponse:
        """Apply setSynopsis, setContent, setActive, publish, deleteImage or sweepImages."""
        entry = await service.apply_action(_checked_title_path(title_path), data.action, data.data)
        return _to_response(entry)

    @router.put(
        "/{title_path:path}/images",
        response_model=ImageUploadResponse,
        dependencies=[Depends(require_admin)],
    )
    async def upload_image(
        title_path: str,
        image: UploadFile | None = File(None),
        name: str = Form(""),
        image_type: str = Form("", alias="type"),
        service: ContentService = Depends(get_service),
    ) -> ImageUploadResponse:
        """Upload a gallery image, or the thumbnail when ``type`` is ``thumb``."""
        upload = None
        if image is not None:
            upload = UploadedImage(
                filename=image.filename or "",
                content_type=image.content_type or "",
                content=await image.read(),
            )
        image_kind = ImageKind.THUMB if image_type == ImageKind.THUMB.value else ImageKind.IMAGE
        record = await service.upload_image(_checked_title_path(title_path), upload, name, image_kind)
        return ImageUploadResponse(kind=image_kind.value, src=record.src, w=record.w, h=record.h)

    @router.get("/{title_path:path}", response_model=ContentResponse)
    async def get_entry(
        title_path: str,
        admin: bool = Depends(is_admin),
        service: ContentService = Depends(get_service),
    ) -> ContentResponse:
        entry = await service.get_entry(_checked_title_path(title_path), include_unpublished=admin)
        return _to_response(entry)

    @router.delete(
        "/{title_path:path}",
        status_code=status.HTTP_204_NO_CONTENT,
        dependencies=[Depends(require_admin)],
    )
    async def delete_entry(
        title_path: str,
        service: ContentService = Depends(get_service),
    ) -> None:
        await service.delete_entry(_checked_title_path(title_path))

    return router
