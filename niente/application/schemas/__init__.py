from .article import (
    ArticleCreate,
    ArticlePreview,
    ArticleResponse,
    ArticleUpdate,
    ArticleView,
)

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "ArticleView",
    "ArticlePreview",
]
