"""In-memory fakes of the repository ports, shared by the unit tests."""

import copy
from datetime import datetime, timedelta, timezone

from pawtal.application.interfaces import (
    AuditLogRepository,
    CategoryRepository,
    ContentRepository,
    RevisionRepository,
    SessionRepository,
)
from pawtal.application.services import AuditLogger, ContentLifecycleService, RevisionStore, SlugResolver
from pawtal.domain.entities import AuditEntry, Category, ContentItem, ContentStatus, ContentType, Revision
from pawtal.domain.exceptions import DuplicateEntityError, StorageError


class FakeClock:
    """Deterministic clock; call it to read, ``advance`` to move forward."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeContentRepository(ContentRepository):
    """Stores copies so callers cannot mutate persisted state by accident."""

    def __init__(self, content_type: ContentType):
        self.content_type = content_type
        self.items: dict[str, ContentItem] = {}
        self.revisions: "FakeRevisionRepository | None" = None
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def get_by_id(self, item_id: str) -> ContentItem | None:
        item = self.items.get(item_id)
        return copy.deepcopy(item) if item else None

    async def get_by_slug(self, slug, status=None):
        for item in self.items.values():
            if item.slug == slug and (status is None or item.status == status):
                return copy.deepcopy(item)
        return None

    async def find_id_by_slug(self, slug: str) -> str | None:
        for item in self.items.values():
            if item.slug == slug:
                return item.id
        return None

    def _filtered(self, status):
        if status is None:
            return [i for i in self.items.values() if i.status is not ContentStatus.TRASHED]
        return [i for i in self.items.values() if i.status == status]

    async def get_all(self, status=None, skip=0, limit=20, order_by="updated_at"):
        items = sorted(self._filtered(status), key=lambda i: getattr(i, order_by), reverse=True)
        return [copy.deepcopy(i) for i in items[skip : skip + limit]]

    async def count(self, status=None) -> int:
        return len(self._filtered(status))

    async def list_trashed(self):
        items = sorted(self._filtered(ContentStatus.TRASHED), key=lambda i: i.trashed_at, reverse=True)
        return [copy.deepcopy(i) for i in items]

    async def list_related(self, item_id, limit):
        own = set(self.items[item_id].category_ids) if item_id in self.items else set()
        related = [
            i for i in self.items.values()
            if i.id != item_id and i.status is ContentStatus.PUBLISHED and own & set(i.category_ids)
        ]
        related.sort(key=lambda i: i.created_at, reverse=True)
        return [copy.deepcopy(i) for i in related[:limit]]

    async def create(self, item: ContentItem) -> ContentItem:
        self._check()
        if await self.find_id_by_slug(item.slug) is not None:
            raise DuplicateEntityError(self.content_type.label, "slug", item.slug)
        self.items[item.id] = copy.deepcopy(item)
        return copy.deepcopy(item)

    async def update(self, item: ContentItem) -> ContentItem:
        self._check()
        holder = await self.find_id_by_slug(item.slug)
        if holder is not None and holder != item.id:
            raise DuplicateEntityError(self.content_type.label, "slug", item.slug)
        self.items[item.id] = copy.deepcopy(item)
        return copy.deepcopy(item)

    async def replace_categories(self, item_id: str, category_ids: list[str]) -> None:
        self.items[item_id].category_ids = list(dict.fromkeys(category_ids))

    async def publish_due(self, now: datetime) -> int:
        self._check()
        promoted = 0
        for item in self.items.values():
            if item.is_due(now):
                item.status = ContentStatus.PUBLISHED
                item.updated_at = now
                promoted += 1
        return promoted

    async def purge_trashed(self, cutoff: datetime) -> int:
        self._check()
        doomed = [i.id for i in self.items.values() if i.is_purgeable(cutoff)]
        for item_id in doomed:
            del self.items[item_id]
            if self.revisions is not None:
                self.revisions.drop_item(item_id)
        return len(doomed)


class FakeRevisionRepository(RevisionRepository):

    def __init__(self):
        self.rows: list[Revision] = []

    async def append(self, revision: Revision) -> Revision:
        number = 1 + max((r.number for r in self.rows if r.item_id == revision.item_id), default=0)
        stored = Revision(
            id=revision.id,
            item_id=revision.item_id,
            number=number,
            title=revision.title,
            content=revision.content,
            short_text=revision.short_text,
            author_id=revision.author_id,
            created_at=revision.created_at,
        )
        self.rows.append(stored)
        return stored

    async def list_for_item(self, item_id: str) -> list[Revision]:
        return sorted((r for r in self.rows if r.item_id == item_id), key=lambda r: r.number, reverse=True)

    async def get(self, item_id: str, revision_id: str) -> Revision | None:
        for revision in self.rows:
            if revision.id == revision_id and revision.item_id == item_id:
                return revision
        return None

    async def count_for_item(self, item_id: str) -> int:
        return sum(1 for r in self.rows if r.item_id == item_id)

    def drop_item(self, item_id: str) -> None:
        self.rows = [r for r in self.rows if r.item_id != item_id]


class FakeAuditLogRepository(AuditLogRepository):

    def __init__(self, fail: bool = False):
        self.entries: list[AuditEntry] = []
        self.fail = fail

    async def record(self, entry: AuditEntry) -> None:
        if self.fail:
            raise StorageError("audit write")
        self.entries.append(entry)

    def verbs(self) -> list[str]:
        return [e.verb for e in self.entries]


class FakeSessionRepository(SessionRepository):

    def __init__(self, expires_at: list[datetime] | None = None):
        self.expires_at = list(expires_at or [])
        self.fail_with: Exception | None = None

    async def delete_expired(self, now: datetime) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        before = len(self.expires_at)
        self.expires_at = [e for e in self.expires_at if e >= now]
        return before - len(self.expires_at)


class FakeCategoryRepository(CategoryRepository):

    def __init__(self):
        self.categories: dict[str, Category] = {}

    async def get_by_id(self, category_id):
        return self.categories.get(category_id)

    async def get_all(self):
        return sorted(self.categories.values(), key=lambda c: c.name)

    async def find_id_by_slug(self, slug):
        for category in self.categories.values():
            if category.slug == slug:
                return category.id
        return None

    async def missing_ids(self, category_ids):
        return [c for c in category_ids if c not in self.categories]

    async def create(self, category):
        self.categories[category.id] = category
        return category

    async def update(self, category):
        self.categories[category.id] = category
        return category

    async def delete(self, category_id):
        return self.categories.pop(category_id, None) is not None


class Harness:
    """A lifecycle service for one content type wired entirely to fakes."""

    def __init__(self, content_type: ContentType, clock: FakeClock | None = None, audit_fails: bool = False):
        self.clock = clock or FakeClock()
        self.repository = FakeContentRepository(content_type)
        self.revision_repository = FakeRevisionRepository()
        self.repository.revisions = self.revision_repository
        self.audit_repository = FakeAuditLogRepository(fail=audit_fails)
        self.categories = FakeCategoryRepository()
        self.revisions = RevisionStore(self.revision_repository, content_type)
        self.service = ContentLifecycleService(
            content_type=content_type,
            repository=self.repository,
            revisions=self.revisions,
            slugs=SlugResolver(self.repository, content_type.label),
            audit=AuditLogger(self.audit_repository),
            categories=self.categories,
            clock=self.clock,
        )
