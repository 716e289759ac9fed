"""Integration tests for the SQLAlchemy article repository on in-memory SQLite."""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kb_articles.application.schemas import ArticleCreate, ArticleUpdate
from kb_articles.application.services import ArticleService
from kb_articles.domain.entities import Article
from kb_articles.domain.exceptions import DuplicateEntityError, RecordInvalidError
from kb_articles.infrastructure.database import create_tables
from kb_articles.infrastructure.database.models import ArticleModel
from kb_articles.infrastructure.database.repositories import SQLAlchemyArticleRepository


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await create_tables(engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


async def stored_titles(session_factory) -> list[str]:
    async with session_factory() as session:
        result = await session.execute(select(ArticleModel.title).order_by(ArticleModel.id))
        return list(result.scalars().all())


@pytest.fixture
def repository(session: AsyncSession) -> SQLAlchemyArticleRepository:
    return SQLAlchemyArticleRepository(session)


@pytest.mark.asyncio
async def test_create_and_get(repository):
    created = await repository.create(Article(title="Hello"))
    assert created.id is not None

    fetched = await repository.get_by_id(created.id)
    assert fetched is not None
    assert fetched.title == "Hello"
    assert await repository.get_by_id(created.id + 100) is None


@pytest.mark.asyncio
async def test_find_by_title_ignores_case(repository):
    created = await repository.create(Article(title="Hello"))

    found = await repository.find_by_title_case_insensitive("hELLo")
    assert found is not None
    assert found.id == created.id

    assert await repository.find_by_title_case_insensitive("Hellos") is None


@pytest.mark.asyncio
async def test_find_by_title_excludes_given_id(repository):
    created = await repository.create(Article(title="Hello"))
    assert await repository.find_by_title_case_insensitive("HELLO", exclude_id=created.id) is None


@pytest.mark.asyncio
async def test_unique_index_rejects_case_variant(repository):
    await repository.create(Article(title="Hello"))
    with pytest.raises(DuplicateEntityError) as exc_info:
        await repository.create(Article(title="HELLO"))
    assert exc_info.value.field == "title"
    assert exc_info.value.value == "HELLO"


@pytest.mark.asyncio
async def test_update_and_delete(repository):
    created = await repository.create(Article(title="Draft"))
    created.title = "Final"
    updated = await repository.update(created)
    assert updated.title == "Final"

    assert await repository.delete(created.id) is True
    assert await repository.delete(created.id) is False
    assert await repository.get_all() == []


@pytest.mark.asyncio
async def test_update_missing_raises(repository):
    with pytest.raises(ValueError):
        await repository.update(Article(title="Ghost", id=404))


@pytest.mark.asyncio
async def test_get_all_paginates(repository):
    for title in ("One", "Two", "Three"):
        await repository.create(Article(title=title))
    assert len(await repository.get_all()) == 3
    assert len(await repository.get_all(skip=1, limit=1)) == 1


@pytest.mark.asyncio
async def test_service_validates_against_database(repository):
    service = ArticleService(repository)
    first = await service.create_article(ArticleCreate(title="Hello"))

    with pytest.raises(RecordInvalidError) as exc_info:
        await service.create_article(ArticleCreate(title="hello"))
    assert exc_info.value.errors.to_dict() == {"title": ["has already been taken"]}

    assert (await service.create_article(ArticleCreate(title="Hellos"))).id != first.id
    renamed = await service.update_article(first.id, ArticleUpdate(title="Hello"))
    assert renamed.title == "Hello"


@pytest.mark.asyncio
async def test_build_article_service_uses_configured_maximum(session, monkeypatch):
    from kb_articles.config import get_settings
    from kb_articles.infrastructure.dependencies import build_article_service

    monkeypatch.setenv("ARTICLE_TITLE_MAX_LENGTH", "3")
    get_settings.cache_clear()
    try:
        service = build_article_service(session)
        errors = await service.validate_article(ArticleCreate(title="abcd"))
    finally:
        get_settings.cache_clear()

    assert errors.full_messages() == ["Title is too long (maximum is 3 characters)"]


@pytest.mark.asyncio
async def test_non_ascii_case_variant_is_a_duplicate(repository):
    created = await repository.create(Article(title="École"))

    found = await repository.find_by_title_case_insensitive("école")
    assert found is not None
    assert found.id == created.id

    with pytest.raises(DuplicateEntityError):
        await repository.create(Article(title="ÉCOLE"))


@pytest.mark.asyncio
async def test_service_rejects_non_ascii_case_variant(session_factory):
    async with session_factory() as session:
        service = ArticleService(SQLAlchemyArticleRepository(session))
        await service.create_article(ArticleCreate(title="École"))

        errors = await service.validate_article(ArticleCreate(title="école"))
        assert errors.to_dict() == {"title": ["has already been taken"]}

        with pytest.raises(RecordInvalidError):
            await service.create_article(ArticleCreate(title="école"))
        await session.commit()

    assert await stored_titles(session_factory) == ["École"]


@pytest.mark.asyncio
async def test_update_refreshes_title_key(repository):
    created = await repository.create(Article(title="Straße"))
    created.title = "Gasse"
    await repository.update(created)

    assert await repository.find_by_title_case_insensitive("STRASSE") is None
    assert (await repository.find_by_title_case_insensitive("gasse")).id == created.id


@pytest.mark.asyncio
async def test_other_integrity_errors_are_not_reported_as_duplicates(repository):
    with pytest.raises(IntegrityError):
        await repository.create(Article(title=None))


@pytest.mark.asyncio
async def test_service_scope_commits_on_clean_exit(session_factory, monkeypatch):
    from kb_articles.infrastructure.database import session as session_module
    from kb_articles.infrastructure.dependencies import article_service_scope

    monkeypatch.setattr(session_module, "async_session_factory", session_factory)

    async with article_service_scope() as service:
        await service.create_article(ArticleCreate(title="Kept"))

    assert await stored_titles(session_factory) == ["Kept"]


@pytest.mark.asyncio
async def test_service_scope_rolls_back_when_block_raises(session_factory, monkeypatch):
    from kb_articles.infrastructure.database import session as session_module
    from kb_articles.infrastructure.dependencies import article_service_scope

    monkeypatch.setattr(session_module, "async_session_factory", session_factory)

    with pytest.raises(RuntimeError):
        async with article_service_scope() as service:
            await service.create_article(ArticleCreate(title="Dropped"))
            raise RuntimeError("abort unit of work")

    assert await stored_titles(session_factory) == []
