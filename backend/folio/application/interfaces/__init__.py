from .content_backend import ContentPrinter, ContentReader
from .image_processor import ImageProcessor, ProcessedImage

__all__ = [
    "ContentPrinter",
    "ContentReader",
    "ImageProcessor",
    "ProcessedImage",
]
