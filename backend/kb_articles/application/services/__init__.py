from .article_service import ArticleService
from .article_validator import ArticleValidator

__all__ = [
    "ArticleService",
    "ArticleValidator",
]
