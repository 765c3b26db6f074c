"""Lifecycle engine for content items — one implementation for every content type.

The engine is parameterised by a ``ContentType`` descriptor (page or article)
and the repository bound to that type. Every successful create/update writes
exactly one revision; publish/trash/restore change status only.
"""

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from pawtal.application.interfaces import CategoryRepository, ContentRepository
from pawtal.application.schemas.pagination import clamp_page, clamp_per_page, clamp_related_limit
from pawtal.application.services.audit_logger import AuditLogger
from pawtal.application.services.revision_store import RevisionStore
from pawtal.application.services.slug_resolver import SlugResolver
from pawtal.domain.clock import Clock, utc_now
from pawtal.domain.entities import ContentItem, ContentStatus, ContentType, Revision
from pawtal.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ContentListing:
    """One page of a paginated listing."""

    items: list[ContentItem]
    total: int
    page: int
    per_page: int


class ContentLifecycleService:
    """Orchestrates the content state machine, revisions, slugs and auditing."""

    def __init__(
        self,
        content_type: ContentType,
        repository: ContentRepository,
        revisions: RevisionStore,
        slugs: SlugResolver,
        audit: AuditLogger,
        categories: CategoryRepository | None = None,
        clock: Clock = utc_now,
    ):
        self._type = content_type
        self._repository = repository
        self._revisions = revisions
        self._slugs = slugs
        self._audit = audit
        self._categories = categories
        self._clock = clock

    @property
    def content_type(self) -> ContentType:
        return self._type

    # ── Reads ────────────────────────────────────────────────────────

    async def get(self, item_id: str) -> ContentItem:
        item = await self._repository.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(self._type.label, item_id)
        return item

    async def list_items(
        self,
        status: ContentStatus | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> ContentListing:
        """Admin listing. Without a status filter, trashed items are hidden."""
        return await self._paginate(status, page, per_page, order_by="updated_at")

    async def list_published(
        self, page: int | None = None, per_page: int | None = None
    ) -> ContentListing:
        """Public listing of published items, newest first."""
        return await self._paginate(ContentStatus.PUBLISHED, page, per_page, order_by="created_at")

    async def get_published_by_slug(self, slug: str) -> ContentItem:
        item = await self._repository.get_by_slug(slug, ContentStatus.PUBLISHED)
        if item is None:
            raise EntityNotFoundError(self._type.label, slug)
        return item

    async def list_related(self, slug: str, limit: int | None = None) -> list[ContentItem]:
        """Published items sharing a category with the published item at ``slug``."""
        item = await self.get_published_by_slug(slug)
        return await self._repository.list_related(item.id, clamp_related_limit(limit))

    async def list_revisions(self, item_id: str) -> list[Revision]:
        """All revisions, newest first. NotFound for an unknown item."""
        await self.get(item_id)
        return await self._revisions.history(item_id)

    # ── Writes ───────────────────────────────────────────────────────

    async def create(self, data: BaseModel, author_id: str) -> ContentItem:
        """Create an item (status defaults to draft) with its seed revision."""
        now = self._clock()
        fields = data.model_dump(exclude_none=True)
        category_ids = fields.pop("category_ids", None)

        slug = self._slugs.resolve(fields["title"], fields.get("slug"))
        await self._slugs.ensure_available(slug)
        fields["slug"] = slug

        item = self._type.entity_cls.new(author_id=author_id, now=now, **fields)
        if category_ids is not None:
            item.category_ids = await self._checked_categories(category_ids)

        item = await self._repository.create(item)
        if category_ids is not None:
            await self._repository.replace_categories(item.id, item.category_ids)

        await self._revisions.record(item, author_id, now)
        logger.info("Created %s %s (slug=%s, status=%s)", self._type.name, item.id, item.slug, item.status.value)
        await self._record_audit(
            author_id,
            "create",
            item,
            {"title": item.title, "slug": item.slug, "status": item.status.value},
        )
        return item

    async def update(self, item_id: str, data: BaseModel, editor_id: str) -> ContentItem:
        """Apply a partial update and append one revision of the merged result."""
        item = await self.get(item_id)
        return await self._apply_update(item, data.model_dump(exclude_none=True), editor_id, verb="update")

    async def publish(self, item_id: str, actor_id: str) -> ContentItem:
        """Force the item to ``published`` from any status."""
        item = await self.get(item_id)
        previous = item.status
        item.mark_published(self._clock())
        item = await self._repository.update(item)
        logger.info("Published %s %s (was %s)", self._type.name, item.id, previous.value)
        await self._record_audit(actor_id, "publish", item, {"from_status": previous.value})
        return item

    async def trash(self, item_id: str, actor_id: str) -> ContentItem:
        """Move the item to the trash from any status; re-trashing restarts the window."""
        item = await self.get(item_id)
        previous = item.status
        item.mark_trashed(self._clock())
        item = await self._repository.update(item)
        logger.info("Trashed %s %s (was %s)", self._type.name, item.id, previous.value)
        await self._record_audit(actor_id, "trash", item, {"from_status": previous.value})
        return item

    async def restore(self, item_id: str, actor_id: str) -> ContentItem:
        """Bring a trashed item back as a draft. Any other status is rejected."""
        item = await self.get(item_id)
        item.mark_restored(self._clock(), self._type.label)
        item = await self._repository.update(item)
        logger.info("Restored %s %s from trash", self._type.name, item.id)
        await self._record_audit(actor_id, "restore", item, {})
        return item

    async def restore_revision(self, item_id: str, revision_id: str, editor_id: str) -> ContentItem:
        """Re-apply an old revision's text as a brand-new revision.

        Status, slug and publish_at are left untouched; history is never
        truncated.
        """
        item = await self.get(item_id)
        revision = await self._revisions.get(item_id, revision_id)
        return await self._apply_update(
            item,
            revision.restorable_fields(),
            editor_id,
            verb="restore_revision",
            details={"revision_id": revision.id, "revision_number": revision.number},
        )

    # ── Internals ────────────────────────────────────────────────────

    async def _apply_update(
        self,
        item: ContentItem,
        fields: dict[str, Any],
        editor_id: str,
        *,
        verb: str,
        details: dict[str, Any] | None = None,
    ) -> ContentItem:
        now = self._clock()
        category_ids = fields.pop("category_ids", None)

        if fields.get("slug") is not None:
            fields["slug"] = self._slugs.resolve(item.title, fields["slug"])
            if fields["slug"] != item.slug:
                await self._slugs.ensure_available(fields["slug"], exclude_id=item.id)

        changed = item.apply_changes(fields, now)
        if category_ids is not None:
            item.category_ids = await self._checked_categories(category_ids)
            changed.append("category_ids")

        item = await self._repository.update(item)
        if category_ids is not None:
            await self._repository.replace_categories(item.id, item.category_ids)

        await self._revisions.record(item, editor_id, now)
        logger.info("Updated %s %s (%s) fields=%s", self._type.name, item.id, verb, changed)
        await self._record_audit(
            editor_id,
            verb,
            item,
            {
                "title": item.title,
                "slug": item.slug,
                "status": item.status.value,
                "changed": changed,
                **(details or {}),
            },
        )
        return item

    async def _paginate(
        self,
        status: ContentStatus | None,
        page: int | None,
        per_page: int | None,
        *,
        order_by: str,
    ) -> ContentListing:
        page = clamp_page(page)
        per_page = clamp_per_page(per_page)
        items = await self._repository.get_all(
            status=status,
            skip=(page - 1) * per_page,
            limit=per_page,
            order_by=order_by,
        )
        total = await self._repository.count(status)
        return ContentListing(items=items, total=total, page=page, per_page=per_page)

    async def _checked_categories(self, category_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(category_ids))
        if self._categories is not None and unique_ids:
            missing = await self._categories.missing_ids(unique_ids)
            if missing:
                raise EntityNotFoundError("Category", missing[0])
        return unique_ids

    async def _record_audit(
        self, actor_id: str, verb: str, item: ContentItem, details: dict[str, Any]
    ) -> None:
        await self._audit.record(
            actor_id=actor_id,
            verb=verb,
            entity_type=self._type.name,
            entity_id=item.id,
            details=details,
        )
