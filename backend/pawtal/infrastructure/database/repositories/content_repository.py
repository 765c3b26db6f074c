"""Concrete content repositories backed by SQLAlchemy.

One generic implementation carries all the queries; the page and article
subclasses only bind it to their tables and extra columns.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pawtal.application.interfaces import ContentRepository
from pawtal.domain.clock import ensure_utc
from pawtal.domain.entities import ARTICLE, PAGE, ContentItem, ContentStatus
from pawtal.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from pawtal.infrastructure.database.models import (
    ArticleCategoryModel,
    ArticleModel,
    ArticleRevisionModel,
    PageCategoryModel,
    PageModel,
    PageRevisionModel,
)
from pawtal.infrastructure.database.repositories._errors import storage_errors, unique_constraint

_ORDERABLE = ("created_at", "updated_at")


class _SQLAlchemyContentRepository(ContentRepository):
    """Implements the ContentRepository port for one content table."""

    model: Any
    revision_model: Any
    link_model: Any
    extra_fields: tuple[str, ...] = ()
    slug_constraint: str

    def __init__(self, session: AsyncSession):
        self._session = session

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_entity(self, model: Any, category_ids: list[str] | None = None) -> ContentItem:
        """Map ORM model → domain entity."""
        values = {
            "id": model.id,
            "title": model.title,
            "slug": model.slug,
            "content": model.content,
            "status": ContentStatus(model.status),
            "publish_at": ensure_utc(model.publish_at),
            "trashed_at": ensure_utc(model.trashed_at),
            "author_id": model.author_id,
            "category_ids": list(category_ids or []),
            "created_at": ensure_utc(model.created_at),
            "updated_at": ensure_utc(model.updated_at),
        }
        for name in self.extra_fields:
            values[name] = getattr(model, name)
        return self.content_type.entity_cls(**values)

    def _copy_fields(self, item: ContentItem, model: Any) -> None:
        model.title = item.title
        model.slug = item.slug
        model.content = item.content
        model.status = ContentStatus(item.status).value
        model.publish_at = item.publish_at
        model.trashed_at = item.trashed_at
        model.updated_at = item.updated_at
        for name in self.extra_fields:
            setattr(model, name, getattr(item, name))

    async def _category_ids_for(self, item_ids: list[str]) -> dict[str, list[str]]:
        if not item_ids:
            return {}
        stmt = (
            select(self.link_model.item_id, self.link_model.category_id)
            .where(self.link_model.item_id.in_(item_ids))
            .order_by(self.link_model.category_id)
        )
        result = await self._session.execute(stmt)
        grouped: dict[str, list[str]] = {item_id: [] for item_id in item_ids}
        for item_id, category_id in result.all():
            grouped[item_id].append(category_id)
        return grouped

    async def _hydrate(self, models: list[Any]) -> list[ContentItem]:
        links = await self._category_ids_for([m.id for m in models])
        return [self._to_entity(m, links.get(m.id)) for m in models]

    def _slug_errors(self, operation: str, slug: str):
        """Only the slug's unique constraint maps to a conflict."""
        return storage_errors(
            f"{self.content_type.name} {operation}",
            lambda: DuplicateEntityError(self.content_type.label, "slug", slug),
            unique_constraint(self.model, self.slug_constraint),
        )

    # ── Reads ────────────────────────────────────────────────────────

    async def get_by_id(self, item_id: str) -> ContentItem | None:
        with storage_errors(f"{self.content_type.name} lookup"):
            model = await self._session.get(self.model, item_id)
            if model is None:
                return None
            return (await self._hydrate([model]))[0]

    async def get_by_slug(
        self, slug: str, status: ContentStatus | None = None
    ) -> ContentItem | None:
        stmt = select(self.model).where(self.model.slug == slug)
        if status is not None:
            stmt = stmt.where(self.model.status == ContentStatus(status).value)
        with storage_errors(f"{self.content_type.name} lookup"):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            if model is None:
                return None
            return (await self._hydrate([model]))[0]

    async def find_id_by_slug(self, slug: str) -> str | None:
        stmt = select(self.model.id).where(self.model.slug == slug)
        with storage_errors(f"{self.content_type.name} slug lookup"):
            result = await self._session.execute(stmt)
            return result.scalar_one_or_none()

    def _status_filter(self, stmt, status: ContentStatus | None):
        if status is None:
            return stmt.where(self.model.status != ContentStatus.TRASHED.value)
        return stmt.where(self.model.status == ContentStatus(status).value)

    async def get_all(
        self,
        status: ContentStatus | None = None,
        skip: int = 0,
        limit: int = 20,
        order_by: str = "updated_at",
    ) -> list[ContentItem]:
        if order_by not in _ORDERABLE:
            raise ValueError(f"Cannot order by '{order_by}'")
        column = getattr(self.model, order_by)
        stmt = (
            self._status_filter(select(self.model), status)
            .order_by(column.desc(), self.model.id)
            .offset(skip)
            .limit(limit)
        )
        with storage_errors(f"{self.content_type.name} listing"):
            result = await self._session.execute(stmt)
            return await self._hydrate(list(result.scalars().all()))

    async def count(self, status: ContentStatus | None = None) -> int:
        stmt = self._status_filter(select(func.count()).select_from(self.model), status)
        with storage_errors(f"{self.content_type.name} count"):
            result = await self._session.execute(stmt)
            return result.scalar_one()

    async def list_trashed(self) -> list[ContentItem]:
        stmt = (
            select(self.model)
            .where(self.model.status == ContentStatus.TRASHED.value)
            .order_by(self.model.trashed_at.desc(), self.model.id)
        )
        with storage_errors(f"{self.content_type.name} trash listing"):
            result = await self._session.execute(stmt)
            return await self._hydrate(list(result.scalars().all()))

    async def list_related(self, item_id: str, limit: int) -> list[ContentItem]:
        shared_categories = select(self.link_model.category_id).where(
            self.link_model.item_id == item_id
        )
        related_ids = select(self.link_model.item_id).where(
            self.link_model.category_id.in_(shared_categories)
        )
        stmt = (
            select(self.model)
            .where(
                self.model.id.in_(related_ids),
                self.model.id != item_id,
                self.model.status == ContentStatus.PUBLISHED.value,
            )
            .order_by(self.model.created_at.desc(), self.model.id)
            .limit(limit)
        )
        with storage_errors(f"{self.content_type.name} related listing"):
            result = await self._session.execute(stmt)
            return await self._hydrate(list(result.scalars().all()))

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, item: ContentItem) -> ContentItem:
        model = self.model(
            id=item.id,
            author_id=item.author_id,
            created_at=item.created_at,
        )
        self._copy_fields(item, model)
        with self._slug_errors("create", item.slug):
            self._session.add(model)
            await self._session.flush()
        return self._to_entity(model, item.category_ids)

    async def update(self, item: ContentItem) -> ContentItem:
        with self._slug_errors("update", item.slug):
            model = await self._session.get(self.model, item.id)
            if model is None:
                raise EntityNotFoundError(self.content_type.label, item.id)
            self._copy_fields(item, model)
            await self._session.flush()
        return self._to_entity(model, item.category_ids)

    async def replace_categories(self, item_id: str, category_ids: list[str]) -> None:
        with storage_errors(f"{self.content_type.name} category assignment"):
            await self._session.execute(
                delete(self.link_model).where(self.link_model.item_id == item_id)
            )
            self._session.add_all(
                self.link_model(item_id=item_id, category_id=category_id)
                for category_id in dict.fromkeys(category_ids)
            )
            await self._session.flush()

    async def publish_due(self, now: datetime) -> int:
        stmt = (
            update(self.model)
            .where(
                self.model.status == ContentStatus.SCHEDULED.value,
                self.model.publish_at.is_not(None),
                self.model.publish_at <= now,
            )
            .values(status=ContentStatus.PUBLISHED.value, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        with storage_errors(f"{self.content_type.name} scheduled publish"):
            result = await self._session.execute(stmt)
            return result.rowcount or 0

    async def purge_trashed(self, cutoff: datetime) -> int:
        eligible = (
            self.model.status == ContentStatus.TRASHED.value,
            self.model.trashed_at.is_not(None),
            self.model.trashed_at < cutoff,
        )
        with storage_errors(f"{self.content_type.name} trash purge"):
            result = await self._session.execute(select(self.model.id).where(*eligible))
            item_ids = list(result.scalars().all())
            if not item_ids:
                return 0
            # Children first; SQLite does not enforce ON DELETE CASCADE by default.
            await self._session.execute(
                delete(self.revision_model).where(self.revision_model.item_id.in_(item_ids))
            )
            await self._session.execute(
                delete(self.link_model).where(self.link_model.item_id.in_(item_ids))
            )
            result = await self._session.execute(
                delete(self.model).where(
                    self.model.id.in_(item_ids),
                    self.model.status == ContentStatus.TRASHED.value,
                )
            )
            return result.rowcount or 0


class SQLAlchemyPageRepository(_SQLAlchemyContentRepository):
    content_type = PAGE
    model = PageModel
    slug_constraint = "uq_pages_slug"
    revision_model = PageRevisionModel
    link_model = PageCategoryModel


class SQLAlchemyArticleRepository(_SQLAlchemyContentRepository):
    content_type = ARTICLE
    model = ArticleModel
    slug_constraint = "uq_articles_slug"
    revision_model = ArticleRevisionModel
    link_model = ArticleCategoryModel
    extra_fields = ("short_text", "reading_time_minutes")
