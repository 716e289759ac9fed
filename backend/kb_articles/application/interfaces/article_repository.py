"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from kb_articles.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    ``create`` and ``update`` raise ``DuplicateEntityError`` when the storage
    layer rejects a title that is already taken (ignoring case).
    """

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        """Retrieve a paginated list of articles."""
        ...

    @abstractmethod
    async def find_by_title_case_insensitive(
        self, title: str, exclude_id: int | None = None
    ) -> Article | None:
        """Return an article whose title equals ``title`` ignoring case, if any.

        The article with ``exclude_id`` is never returned, so an article being
        updated does not collide with itself.
        """
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update an existing article."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...
