from .article import (
    ArticleCreate,
    ArticleUpdate,
    ArticleResponse,
    FieldErrorSchema,
    ValidationErrorResponse,
)

__all__ = [
    "ArticleCreate",
    "ArticleUpdate",
    "ArticleResponse",
    "FieldErrorSchema",
    "ValidationErrorResponse",
]
