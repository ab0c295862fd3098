"""SQLAlchemy ORM models for content entries — one table per kind."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.infrastructure.database.base import Base


class ContentColumns:
    """Columns shared by every content table. ``title_path`` is the primary key."""

    title_path: Mapped[str] = mapped_column(String(512), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    synopsis: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    # Image records in wire shape: {"src", "alt", "w", "h"}
    image: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    images: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(title_path='{self.title_path}')>"


class ArticleModel(ContentColumns, Base):
    """ORM model — maps to the 'articles' table."""

    __tablename__ = "articles"


class ChapterModel(ContentColumns, Base):
    """ORM model — maps to the 'chapters' table."""

    __tablename__ = "chapters"
