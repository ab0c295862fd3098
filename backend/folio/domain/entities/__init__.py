from .content import ContentEntry, ContentKind, ImageRecord

__all__ = [
    "ContentEntry",
    "ContentKind",
    "ImageRecord",
]
