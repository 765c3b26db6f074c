"""Application service for the category catalogue."""

from pawtal.application.interfaces import CategoryRepository
from pawtal.application.schemas import CategoryCreate, CategoryUpdate
from pawtal.application.services.slug_resolver import SlugResolver
from pawtal.domain.entities import Category
from pawtal.domain.exceptions import EntityNotFoundError


class CategoryService:

    def __init__(self, repository: CategoryRepository):
        self._repository = repository
        self._slugs = SlugResolver(repository, "Category")

    async def list_categories(self) -> list[Category]:
        return await self._repository.get_all()

    async def create_category(self, data: CategoryCreate) -> Category:
        slug = self._slugs.resolve(data.name, data.slug)
        await self._slugs.ensure_available(slug)
        return await self._repository.create(Category(name=data.name, slug=slug))

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """Rename a category. Uniqueness is only re-checked when the slug changes."""
        category = await self._repository.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)

        slug = category.slug
        if data.slug is not None:
            slug = self._slugs.resolve(data.name, data.slug)
            if slug != category.slug:
                await self._slugs.ensure_available(slug, exclude_id=category.id)

        return await self._repository.update(Category(id=category.id, name=data.name, slug=slug))

    async def delete_category(self, category_id: str) -> None:
        """Delete a category; its page/article assignments go with it."""
        if not await self._repository.delete(category_id):
            raise EntityNotFoundError("Category", category_id)
