"""Title-path addressing: the human-readable primary key of an entry.

A title path looks like ``2024/03/07/Hello-World/``. It doubles as the
storage key and as the directory holding the entry's images.
"""

from datetime import datetime

TITLE_PATH_PATTERN = r"\d{4}/\d{2}/\d{2}/[^/]+/"

# Slugs that would not name exactly one directory below the date segments.
_RESERVED_SLUGS = frozenset({".", ".."})
_SEPARATORS = ("/", "\\")


def slugify(title: str) -> str:
    """Replace every space with a hyphen. Case, punctuation and Unicode pass through."""
    return title.replace(" ", "-")


def is_addressable(slug: str) -> bool:
    """True when ``slug`` is a single, non-relative path segment."""
    return bool(slug) and slug not in _RESERVED_SLUGS and not any(sep in slug for sep in _SEPARATORS)


def title_path(title: str, now: datetime, attempt: int = 0) -> str:
    """Build the title path for ``title`` created at ``now``.

    ``attempt`` > 0 appends a disambiguating suffix (``-2``, ``-3``, ...) to the
    slug; it is only used when the plain path collided at creation time.
    """
    slug = slugify(title)
    if attempt > 0:
        slug = f"{slug}-{attempt + 1}"
    return f"{now.year}/{now.month:02d}/{now.day:02d}/{slug}/"
