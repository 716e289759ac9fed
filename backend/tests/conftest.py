"""Shared fixtures — an in-memory ArticleRepository for unit tests."""

from dataclasses import replace

import pytest

from kb_articles.application.interfaces import ArticleRepository
from kb_articles.domain.entities import Article
from kb_articles.domain.exceptions import DuplicateEntityError


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository; hands out copies so callers can't mutate stored rows.

    Enforces case-insensitive title uniqueness the way the database index does.
    """

    def __init__(self):
        self._articles: dict[int, Article] = {}
        self._next_id = 1
        self.lookups: list[tuple[str, int | None]] = []

    async def get_by_id(self, article_id: int) -> Article | None:
        article = self._articles.get(article_id)
        return replace(article) if article else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        articles = [replace(a) for a in self._articles.values()]
        return articles[skip : skip + limit]

    async def find_by_title_case_insensitive(
        self, title: str, exclude_id: int | None = None
    ) -> Article | None:
        self.lookups.append((title, exclude_id))
        for article in self._articles.values():
            if article.id != exclude_id and article.title.casefold() == title.casefold():
                return replace(article)
        return None

    async def create(self, article: Article) -> Article:
        self._check_unique(article)
        article.id = self._next_id
        self._next_id += 1
        self._articles[article.id] = replace(article)
        return article

    async def update(self, article: Article) -> Article:
        if article.id not in self._articles:
            raise ValueError(f"Article {article.id} not found")
        self._check_unique(article)
        self._articles[article.id] = replace(article)
        return article

    async def delete(self, article_id: int) -> bool:
        if article_id in self._articles:
            del self._articles[article_id]
            return True
        return False

    def insert_unchecked(self, title: str) -> Article:
        """Store an article directly, as a concurrent writer would."""
        article = Article(title=title, id=self._next_id)
        self._next_id += 1
        self._articles[article.id] = article
        return replace(article)

    def _check_unique(self, article: Article) -> None:
        for other in self._articles.values():
            if other.id != article.id and other.title.casefold() == article.title.casefold():
                raise DuplicateEntityError("Article", "title", article.title)


@pytest.fixture
def repository() -> FakeArticleRepository:
    return FakeArticleRepository()
