"""Dependency wiring — connects infrastructure adapters to the application layer."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from kb_articles.config import get_settings
from kb_articles.application.services import ArticleService, ArticleValidator
from kb_articles.infrastructure.database.session import get_db_session
from kb_articles.infrastructure.database.repositories import SQLAlchemyArticleRepository


def build_article_service(session: AsyncSession) -> ArticleService:
    """Provides an ArticleService with its repository and validator wired up."""
    settings = get_settings()
    repository = SQLAlchemyArticleRepository(session)
    validator = ArticleValidator(max_title_length=settings.article_title_max_length)
    return ArticleService(repository, validator=validator)


@asynccontextmanager
async def article_service_scope() -> AsyncIterator[ArticleService]:
    """One unit of work: commits on clean exit, rolls back if the block raises.

    Usage:
        async with article_service_scope() as service:
            await service.create_article(ArticleCreate(title="Hello"))
    """
    async with asynccontextmanager(get_db_session)() as session:
        yield build_article_service(session)
