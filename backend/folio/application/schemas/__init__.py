from .content import (
    ContentAction,
    ContentCreate,
    ContentCreated,
    ContentResponse,
    ImageRecordSchema,
    ImageUploadResponse,
)

__all__ = [
    "ContentAction",
    "ContentCreate",
    "ContentCreated",
    "ContentResponse",
    "ImageRecordSchema",
    "ImageUploadResponse",
]
