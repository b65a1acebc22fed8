from .article import ArticleModel
from .types import UriList, UtcDateTime

__all__ = [
    "ArticleModel",
    "UriList",
    "UtcDateTime",
]
