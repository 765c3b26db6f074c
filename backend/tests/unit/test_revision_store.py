"""Unit tests for the RevisionStore."""

import pytest

from pawtal.application.services import RevisionStore
from pawtal.domain.entities import ARTICLE, PAGE, Article, Page
from pawtal.domain.exceptions import EntityNotFoundError
from tests.fakes import FakeClock, FakeRevisionRepository


@pytest.mark.asyncio
async def test_numbers_grow_per_item():
    clock = FakeClock()
    store = RevisionStore(FakeRevisionRepository(), PAGE)
    a = Page(title="A", slug="a", author_id="u1")
    b = Page(title="B", slug="b", author_id="u1")

    first = await store.record(a, "u1", clock())
    second = await store.record(a, "u2", clock())
    other = await store.record(b, "u1", clock())

    assert (first.number, second.number, other.number) == (1, 2, 1)
    assert [r.number for r in await store.history(a.id)] == [2, 1]
    assert await store.count(a.id) == 2


@pytest.mark.asyncio
async def test_page_revisions_have_no_teaser():
    store = RevisionStore(FakeRevisionRepository(), PAGE)
    revision = await store.record(Page(title="A", slug="a", author_id="u1", content="c"), "u1", FakeClock()())

    assert revision.short_text is None
    assert revision.restorable_fields() == {"title": "A", "content": "c"}


@pytest.mark.asyncio
async def test_article_revisions_capture_teaser():
    store = RevisionStore(FakeRevisionRepository(), ARTICLE)
    article = Article(title="A", slug="a", author_id="u1", content="c", short_text="s")

    revision = await store.record(article, "u1", FakeClock()())

    assert revision.restorable_fields() == {"title": "A", "content": "c", "short_text": "s"}


@pytest.mark.asyncio
async def test_get_checks_ownership():
    store = RevisionStore(FakeRevisionRepository(), PAGE)
    page = Page(title="A", slug="a", author_id="u1")
    revision = await store.record(page, "u1", FakeClock()())

    assert (await store.get(page.id, revision.id)).id == revision.id
    with pytest.raises(EntityNotFoundError) as exc_info:
        await store.get("another-page", revision.id)
    assert exc_info.value.entity_type == "Page revision"
