"""Category repository backed by SQLAlchemy."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.application.interfaces import CategoryRepository
from pawtal.domain.entities import Category
from pawtal.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from pawtal.infrastructure.database.models import (
    ArticleCategoryModel,
    CategoryModel,
    PageCategoryModel,
)
from pawtal.infrastructure.database.repositories._errors import storage_errors, unique_constraint


class SQLAlchemyCategoryRepository(CategoryRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    def _slug_errors(self, operation: str, slug: str):
        return storage_errors(
            f"category {operation}",
            lambda: DuplicateEntityError("Category", "slug", slug),
            unique_constraint(CategoryModel, "uq_categories_slug"),
        )

    def _to_entity(self, model: CategoryModel) -> Category:
        return Category(id=model.id, name=model.name, slug=model.slug)

    async def get_by_id(self, category_id: str) -> Category | None:
        with storage_errors("category lookup"):
            model = await self._session.get(CategoryModel, category_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.name, CategoryModel.id)
        with storage_errors("category listing"):
            result = await self._session.execute(stmt)
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_id_by_slug(self, slug: str) -> str | None:
        stmt = select(CategoryModel.id).where(CategoryModel.slug == slug)
        with storage_errors("category slug lookup"):
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    async def missing_ids(self, category_ids: list[str]) -> list[str]:
        if not category_ids:
            return []
        stmt = select(CategoryModel.id).where(CategoryModel.id.in_(category_ids))
        with storage_errors("category lookup"):
            result = await self._session.execute(stmt)
            found = set(result.scalars().all())
        return [category_id for category_id in category_ids if category_id not in found]

    async def create(self, category: Category) -> Category:
        model = CategoryModel(id=category.id, name=category.name, slug=category.slug)
        with self._slug_errors("create", category.slug):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model)

    async def update(self, category: Category) -> Category:
        with self._slug_errors("update", category.slug):
            model = await self._session.get(CategoryModel, category.id)
            if model is None:
                raise EntityNotFoundError("Category", category.id)
            model.name = category.name
            model.slug = category.slug
            await self._session.flush()
        return self._to_entity(model)

    async def delete(self, category_id: str) -> bool:
        with storage_errors("category delete"):
            model = await self._session.get(CategoryModel, category_id)
            if model is None:
                return False
            for link_model in (PageCategoryModel, ArticleCategoryModel):
                await self._session.execute(
                    delete(link_model).where(link_model.category_id == category_id)
                )
            await self._session.delete(model)
            await self._session.flush()
        return True
