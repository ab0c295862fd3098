from .content_service import ContentService
from .image_asset_service import ImageAssetService, ImageKind, UploadedImage

__all__ = [
    "ContentService",
    "ImageAssetService",
    "ImageKind",
    "UploadedImage",
]
