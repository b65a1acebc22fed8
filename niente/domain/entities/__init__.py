from .article import URI_SEPARATOR, Article, ArticleStatus, DisplayLevel
from .caller import Caller

__all__ = [
    "Article",
    "ArticleStatus",
    "DisplayLevel",
    "URI_SEPARATOR",
    "Caller",
]
