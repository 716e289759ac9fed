"""Application service (use case) for Article operations."""

import logging

from kb_articles.application.interfaces import ArticleRepository
from kb_articles.application.schemas import ArticleCreate, ArticleUpdate
from kb_articles.application.services.article_validator import ArticleValidator
from kb_articles.domain.entities import Article
from kb_articles.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    RecordInvalidError,
)
from kb_articles.domain.validation import UniquenessError, ValidationErrors

logger = logging.getLogger(__name__)


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI).

    Every create and update is validated first; nothing is written when the
    validator reports errors.
    """

    def __init__(self, repository: ArticleRepository, validator: ArticleValidator | None = None):
        self._repository = repository
        self._validator = validator or ArticleValidator()

    async def get_article(self, article_id: int) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self, skip: int = 0, limit: int = 100) -> list[Article]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def validate_article(
        self, data: ArticleCreate, article_id: int | None = None
    ) -> ValidationErrors:
        """Dry-run validation; ``article_id`` excludes that article from the uniqueness check."""
        candidate = Article(title=data.title, id=article_id)
        return await self._validator.validate(candidate, self._repository)

    async def create_article(self, data: ArticleCreate) -> Article:
        article = Article(title=data.title)
        await self._ensure_valid(article)
        try:
            created = await self._repository.create(article)
        except DuplicateEntityError as exc:
            raise self._lost_race(article, exc) from exc
        logger.info("Created article id=%s title=%r", created.id, created.title)
        return created

    async def update_article(self, article_id: int, data: ArticleUpdate) -> Article:
        article = await self.get_article(article_id)
        article.update(title=data.title)
        await self._ensure_valid(article)
        try:
            updated = await self._repository.update(article)
        except DuplicateEntityError as exc:
            raise self._lost_race(article, exc) from exc
        logger.info("Updated article id=%s title=%r", updated.id, updated.title)
        return updated

    async def delete_article(self, article_id: int) -> bool:
        exists = await self._repository.get_by_id(article_id)
        if exists is None:
            raise EntityNotFoundError("Article", article_id)
        deleted = await self._repository.delete(article_id)
        logger.info("Deleted article id=%s", article_id)
        return deleted

    async def _ensure_valid(self, article: Article) -> None:
        errors = await self._validator.validate(article, self._repository)
        if errors:
            raise RecordInvalidError("Article", errors)

    @staticmethod
    def _lost_race(article: Article, exc: DuplicateEntityError) -> RecordInvalidError:
        """Report a storage-level duplicate the same way as a validation failure."""
        logger.warning(
            "Article title=%r passed validation but was rejected by the store: %s",
            article.title,
            exc,
        )
        errors = ValidationErrors([UniquenessError(exc.field, value=exc.value)])
        return RecordInvalidError("Article", errors)
