from folio.domain.entities import ContentKind

from .content import ArticleModel, ChapterModel, ContentColumns

CONTENT_MODELS: dict[ContentKind, type[ContentColumns]] = {
    ContentKind.ARTICLE: ArticleModel,
    ContentKind.CHAPTER: ChapterModel,
}

__all__ = [
    "ArticleModel",
    "ChapterModel",
    "ContentColumns",
    "CONTENT_MODELS",
]
