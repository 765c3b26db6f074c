"""Revision Store — append-only snapshot history per content item."""

from datetime import datetime

from pawtal.application.interfaces import RevisionRepository
from pawtal.domain.entities import ContentItem, ContentType, Revision
from pawtal.domain.exceptions import EntityNotFoundError


class RevisionStore:
    """Records and reads revisions for one content type.

    There is no delete or edit path: history only grows.
    Revisions disappear solely when the storage layer erases their parent.
    """

    def __init__(self, repository: RevisionRepository, content_type: ContentType):
        self._repository = repository
        self._type = content_type

    async def record(self, item: ContentItem, author_id: str, now: datetime) -> Revision:
        """Snapshot the item's current editable fields."""
        fields = item.revision_fields()
        revision = Revision(
            item_id=item.id,
            title=fields["title"],
            content=fields["content"],
            short_text=fields.get("short_text"),
            author_id=author_id,
            created_at=now,
        )
        return await self._repository.append(revision)

    async def history(self, item_id: str) -> list[Revision]:
        return await self._repository.list_for_item(item_id)

    async def get(self, item_id: str, revision_id: str) -> Revision:
        revision = await self._repository.get(item_id, revision_id)
        if revision is None:
            raise EntityNotFoundError(f"{self._type.label} revision", revision_id)
        return revision

    async def count(self, item_id: str) -> int:
        return await self._repository.count_for_item(item_id)
