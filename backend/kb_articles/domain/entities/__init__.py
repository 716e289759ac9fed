from .article import Article, TITLE_MAX_LENGTH

__all__ = [
    "Article",
    "TITLE_MAX_LENGTH",
]
