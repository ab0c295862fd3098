"""Abstract interface (port) for image normalization and resizing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass
class ProcessedImage:
    """Result of writing a normalized image to disk."""

    path: Path
    width: int
    height: int


class ImageProcessor(ABC):
    """Port for image codecs — implemented in the infrastructure layer."""

    @abstractmethod
    async def convert_to_jpeg(self, source: Path, dest: Path) -> ProcessedImage:
        """Re-encode ``source`` as a JPEG at ``dest``.

        Raises:
            ConversionError: the source could not be decoded or written.
        """
        ...

    @abstractmethod
    async def resize_width_to_jpeg(self, source: Path, dest: Path, width: int) -> ProcessedImage:
        """Scale ``source`` to ``width`` pixels (aspect ratio kept) and write a JPEG."""
        ...
