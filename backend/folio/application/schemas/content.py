"""Pydantic DTOs (Data Transfer Objects) for content entries."""

from datetime import datetime

from pydantic import BaseModel, Field


class ImageRecordSchema(BaseModel):
    """Image metadata in wire shape."""

    src: str
    alt: str = ""
    w: int = 0
    h: int = 0

    model_config = {"from_attributes": True}


class ContentCreate(BaseModel):
    """Schema for creating a new entry."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Hello World"])


class ContentCreated(BaseModel):
    title_path: str


class ContentAction(BaseModel):
    """An edit action applied to an existing entry."""

    action: str = Field(..., examples=["setContent"])
    data: str | bool | None = None


class ContentResponse(BaseModel):
    """Schema returned to the client."""

    title_path: str
    title: str
    synopsis: str
    content: str
    is_published: bool
    created: datetime
    modified: datetime | None
    image: ImageRecordSchema | None = None
    images: list[ImageRecordSchema] = []

    model_config = {"from_attributes": True}


class ImageUploadResponse(BaseModel):
    """Result of an image upload; ``kind`` is ``thumb`` or ``image``."""

    kind: str
    src: str
    w: int
    h: int
