"""Local filesystem storage for entry images.

Storage layout:
    <image_root>/<title_path>/<name>.jpg          — gallery images
    <image_root>/<title_path>/thumb.<name>.jpg    — thumbnails
    <image_root>/<title_path>/.<name><random>     — staged uploads (transient)

Removal helpers are best-effort: failures are logged and swallowed because
they run after the metadata write already succeeded.
"""

import logging
import shutil
import tempfile
from pathlib import Path

from folio.domain.exceptions import BadRequestError

logger = logging.getLogger(__name__)


class LocalImageStorage:
    """Infrastructure adapter for per-entry image directories."""

    def __init__(self, image_root: str):
        self._root = Path(image_root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    # ── Paths ───────────────────────────────────────────────────────

    def entry_dir(self, title_path: str) -> Path:
        """Return the image directory of an entry.

        The directory is built segment by segment below the root; relative
        segments and anything resolving elsewhere (symlinks) are refused.
        """
        parts = [part for part in title_path.split("/") if part]
        if not parts or any(part in (".", "..") or "\\" in part for part in parts):
            raise BadRequestError(f"Invalid title path '{title_path}'")
        directory = self._root.joinpath(*parts)
        if directory.resolve() != directory:
            raise BadRequestError(f"Invalid title path '{title_path}'")
        return directory

    def path_for(self, title_path: str, filename: str) -> Path:
        return self.entry_dir(title_path) / filename

    # ── Writes ──────────────────────────────────────────────────────

    def stage(self, title_path: str, filename: str, content: bytes) -> Path:
        """Write an upload to a hidden temporary file inside the entry directory."""
        directory = self.entry_dir(title_path)
        directory.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(dir=directory, prefix=f".{filename}", delete=False) as tmp:
            tmp.write(content)
            staged = Path(tmp.name)

        logger.debug("Staged upload: %s (%d bytes)", staged, len(content))
        return staged

    # ── Removal (best-effort) ───────────────────────────────────────

    def discard(self, path: Path) -> None:
        """Remove a file by absolute path, logging instead of raising."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)

    def remove(self, title_path: str, filename: str) -> bool:
        """Remove one image of an entry. Returns True when a file was deleted."""
        try:
            path = self.path_for(title_path, filename)
            path.unlink()
        except FileNotFoundError:
            logger.debug("Image already gone: %s/%s", title_path, filename)
            return False
        except (OSError, BadRequestError) as exc:
            logger.warning("Could not remove image %s/%s: %s", title_path, filename, exc)
            return False
        logger.info("Removed image %s", path)
        return True

    def remove_dir(self, title_path: str) -> bool:
        """Remove the whole image directory of an entry."""
        try:
            directory = self.entry_dir(title_path)
            if not directory.exists():
                return False
            shutil.rmtree(directory)
        except (OSError, BadRequestError) as exc:
            logger.warning("Could not remove image directory for %s: %s", title_path, exc)
            return False
        logger.info("Removed image directory %s", directory)
        return True

    # ── Utilities ───────────────────────────────────────────────────

    def list_files(self, title_path: str) -> list[str]:
        """Return the names of the regular files in an entry's directory."""
        directory = self.entry_dir(title_path)
        if not directory.is_dir():
            return []
        return sorted(p.name for p in directory.iterdir() if p.is_file())
