from .article import ArticleModel, TITLE_KEY_INDEX, title_key

__all__ = [
    "ArticleModel",
    "TITLE_KEY_INDEX",
    "title_key",
]
