from .base import Base
from .session import engine, async_session_factory, create_tables, get_db_session
from .models import ArticleModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "create_tables",
    "get_db_session",
    "ArticleModel",
]
