"""Unit tests for the CategoryService."""

import pytest

from pawtal.application.schemas import CategoryCreate, CategoryUpdate
from pawtal.application.services import CategoryService
from pawtal.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from tests.fakes import FakeCategoryRepository


@pytest.fixture
def service() -> CategoryService:
    return CategoryService(FakeCategoryRepository())


@pytest.mark.asyncio
async def test_create_derives_slug(service: CategoryService):
    category = await service.create_category(CategoryCreate(name="How-To Guides"))
    assert category.slug == "how-to-guides"


@pytest.mark.asyncio
async def test_duplicate_slug_conflicts(service: CategoryService):
    await service.create_category(CategoryCreate(name="News"))
    with pytest.raises(DuplicateEntityError):
        await service.create_category(CategoryCreate(name="Other", slug="news"))


@pytest.mark.asyncio
async def test_list_is_sorted_by_name(service: CategoryService):
    await service.create_category(CategoryCreate(name="Zebra"))
    await service.create_category(CategoryCreate(name="Alpha"))
    assert [c.name for c in await service.list_categories()] == ["Alpha", "Zebra"]


@pytest.mark.asyncio
async def test_delete_unknown_category_is_not_found(service: CategoryService):
    created = await service.create_category(CategoryCreate(name="News"))
    await service.delete_category(created.id)

    with pytest.raises(EntityNotFoundError):
        await service.delete_category(created.id)


@pytest.mark.asyncio
async def test_update_renames_and_keeps_slug_when_omitted(service: CategoryService):
    created = await service.create_category(CategoryCreate(name="News"))

    updated = await service.update_category(created.id, CategoryUpdate(name="Latest news"))

    assert (updated.id, updated.name, updated.slug) == (created.id, "Latest news", "news")


@pytest.mark.asyncio
async def test_update_to_own_slug_is_not_a_conflict(service: CategoryService):
    created = await service.create_category(CategoryCreate(name="News"))

    updated = await service.update_category(created.id, CategoryUpdate(name="News!", slug="news"))

    assert updated.slug == "news"


@pytest.mark.asyncio
async def test_update_to_taken_slug_conflicts(service: CategoryService):
    await service.create_category(CategoryCreate(name="News"))
    guides = await service.create_category(CategoryCreate(name="Guides"))

    with pytest.raises(DuplicateEntityError):
        await service.update_category(guides.id, CategoryUpdate(name="Guides", slug="News"))

    assert [c.slug for c in await service.list_categories()] == ["guides", "news"]


@pytest.mark.asyncio
async def test_update_unknown_category_is_not_found(service: CategoryService):
    with pytest.raises(EntityNotFoundError):
        await service.update_category("missing", CategoryUpdate(name="Anything"))
