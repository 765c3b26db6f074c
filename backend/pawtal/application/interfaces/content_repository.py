"""Abstract repository interface (port) for content items."""

from abc import ABC, abstractmethod
from datetime import datetime

from pawtal.domain.entities import ContentItem, ContentStatus, ContentType


class ContentRepository(ABC):
    """Port for page/article persistence — one implementation per content type."""

    content_type: ContentType

    @abstractmethod
    async def get_by_id(self, item_id: str) -> ContentItem | None:
        """Retrieve a single item by its ID, whatever its status."""
        ...

    @abstractmethod
    async def get_by_slug(
        self, slug: str, status: ContentStatus | None = None
    ) -> ContentItem | None:
        """Retrieve an item by slug, optionally restricted to one status."""
        ...

    @abstractmethod
    async def find_id_by_slug(self, slug: str) -> str | None:
        """Return the ID of the item currently holding ``slug``, if any."""
        ...

    @abstractmethod
    async def get_all(
        self,
        status: ContentStatus | None = None,
        skip: int = 0,
        limit: int = 20,
        order_by: str = "updated_at",
    ) -> list[ContentItem]:
        """List items newest first by ``order_by``. With no status, trashed items are excluded."""
        ...

    @abstractmethod
    async def count(self, status: ContentStatus | None = None) -> int:
        """Count items using the same filter semantics as ``get_all``."""
        ...

    @abstractmethod
    async def list_trashed(self) -> list[ContentItem]:
        """All trashed items, most recently trashed first."""
        ...

    @abstractmethod
    async def list_related(self, item_id: str, limit: int) -> list[ContentItem]:
        """Published items sharing a category with ``item_id`` (itself excluded), newest first."""
        ...

    @abstractmethod
    async def create(self, item: ContentItem) -> ContentItem:
        """Persist a new item. Raises DuplicateEntityError on a slug clash."""
        ...

    @abstractmethod
    async def update(self, item: ContentItem) -> ContentItem:
        """Persist every mutable field of an existing item."""
        ...

    @abstractmethod
    async def replace_categories(self, item_id: str, category_ids: list[str]) -> None:
        """Replace the item's category set (delete-then-insert)."""
        ...

    @abstractmethod
    async def publish_due(self, now: datetime) -> int:
        """Promote scheduled items whose publish_at <= now. Returns row count."""
        ...

    @abstractmethod
    async def purge_trashed(self, cutoff: datetime) -> int:
        """Erase trashed items with trashed_at < cutoff, revisions included."""
        ...
