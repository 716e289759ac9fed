"""Concrete repository implementation backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from kb_articles.application.interfaces import ArticleRepository
from kb_articles.domain.entities import Article
from kb_articles.domain.exceptions import DuplicateEntityError
from kb_articles.infrastructure.database.models import ArticleModel, TITLE_KEY_INDEX, title_key


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            title=entity.title,
            title_key=title_key(entity.title),
        )

    async def get_by_id(self, article_id: int) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .order_by(ArticleModel.created_at.desc(), ArticleModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def find_by_title_case_insensitive(
        self, title: str, exclude_id: int | None = None
    ) -> Article | None:
        stmt = select(ArticleModel).where(ArticleModel.title_key == title_key(title))
        if exclude_id is not None:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        self._session.add(model)
        await self._flush(article)
        return self._to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        model.title = article.title
        model.title_key = title_key(article.title)
        await self._flush(article)
        return self._to_entity(model)

    async def delete(self, article_id: int) -> bool:
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def _flush(self, article: Article) -> None:
        """Flush pending changes, translating title-key violations; other integrity errors propagate."""
        try:
            await self._session.flush()
        except IntegrityError as exc:
            if _is_title_key_violation(exc):
                raise DuplicateEntityError("Article", "title", article.title) from exc
            raise


def _is_title_key_violation(exc: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite names the column.
    message = str(exc.orig)
    return TITLE_KEY_INDEX in message or "UNIQUE constraint failed: articles.title_key" in message
